from __future__ import annotations
# BaseSettings moved to the pydantic-settings package in Pydantic v2
from collections.abc import Iterable
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


def _unique(iterable: Iterable[str | None]) -> list[str]:
    """Return a list of non-empty unique strings preserving order."""

    seen: set[str] = set()
    ordered: list[str] = []
    for value in iterable:
        if not value:
            continue
        if value in seen:
            continue
        seen.add(value)
        ordered.append(value)
    return ordered


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    db_host: str = Field("localhost", alias="DB_HOST")
    db_port: int = Field(5432, alias="DB_PORT")
    db_user: str = Field("eventhub", alias="DB_USER")
    db_password: str = Field("", alias="DB_PASSWORD")
    db_name: str = Field("eventhub", alias="DB_NAME")
    db_timeout: int = Field(30, alias="DB_TIMEOUT")
    db_echo: bool = Field(False, alias="DB_ECHO")
    database_url: str | None = Field(None, alias="DATABASE_URL")

    jwt_secret: str = Field("change-me", alias="JWT_SECRET")
    access_token_expire_minutes: int = Field(60, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    reset_token_expire_minutes: int = Field(30, alias="RESET_TOKEN_EXPIRE_MINUTES")
    min_password_length: int = Field(6, alias="MIN_PASSWORD_LENGTH")

    # Shown on the edit form when a stored venue has no capacity
    default_venue_capacity: int = Field(100, alias="DEFAULT_VENUE_CAPACITY")

    site_url: str = Field("http://localhost:3000", alias="SITE_URL")
    cors_origins_raw: str = Field("http://localhost:3000", alias="CORS_ORIGINS")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
        "extra": "ignore",
        "env_nested_delimiter": "__",
        "populate_by_name": True,
    }

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return str(value).strip().upper() or "INFO"

    @property
    def sqlalchemy_database_uri(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    @property
    def cors_origins(self) -> list[str]:
        """Allowed browser origins, from a comma or newline separated list."""

        parts = self.cors_origins_raw.replace("\n", ",").split(",")
        return _unique(part.strip() for part in parts)


_settings_instance = None


def get_settings() -> Settings:
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
