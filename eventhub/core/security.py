from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

from jose import JWTError, jwt
from passlib.context import CryptContext

from eventhub.core.config import Settings
from eventhub.core.errors import AuthError

ALGORITHM = "HS256"
ACCESS_TOKEN = "access"
RESET_TOKEN = "reset"

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


@dataclass(frozen=True)
class CurrentUser:
    """Identity of the authenticated caller."""

    id: str
    email: str | None = None


@dataclass(frozen=True)
class TokenClaims:
    subject: str
    jti: str
    purpose: str
    expires_at: datetime | None
    email: str | None = None
    issued_at: datetime | None = None


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def create_token(
    settings: Settings,
    *,
    subject: str,
    purpose: str = ACCESS_TOKEN,
    expires_delta: timedelta | None = None,
    extra: dict[str, Any] | None = None,
) -> tuple[str, TokenClaims]:
    if expires_delta is None:
        minutes = (
            settings.reset_token_expire_minutes
            if purpose == RESET_TOKEN
            else settings.access_token_expire_minutes
        )
        expires_delta = timedelta(minutes=minutes)
    now = datetime.now(UTC)
    expire = now + expires_delta
    claims = TokenClaims(
        subject=subject,
        jti=uuid4().hex,
        purpose=purpose,
        expires_at=expire,
        email=(extra or {}).get("email"),
        issued_at=now,
    )
    to_encode: dict[str, Any] = dict(extra or {})
    to_encode.update({"sub": subject, "jti": claims.jti, "purpose": purpose, "exp": expire})
    # iat keeps sub-second precision; it is compared with users.password_changed_at
    to_encode["iat"] = now.timestamp()
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=ALGORITHM), claims


def decode_token(settings: Settings, token: str, *, purpose: str = ACCESS_TOKEN) -> TokenClaims:
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise AuthError("Could not validate credentials") from exc
    subject: str | None = payload.get("sub")
    jti: str | None = payload.get("jti")
    if subject is None or jti is None or payload.get("purpose") != purpose:
        raise AuthError("Could not validate credentials")
    exp = payload.get("exp")
    iat = payload.get("iat")
    return TokenClaims(
        subject=subject,
        jti=jti,
        purpose=purpose,
        expires_at=datetime.fromtimestamp(exp, UTC) if exp is not None else None,
        email=payload.get("email"),
        issued_at=datetime.fromtimestamp(iat, UTC) if iat is not None else None,
    )
