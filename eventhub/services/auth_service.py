"""Authentication: accounts, bearer tokens and password changes."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub import crud
from eventhub.core.config import Settings, get_settings
from eventhub.core.errors import AuthError, PersistenceError, ValidationError
from eventhub.core.security import (
    ACCESS_TOKEN,
    RESET_TOKEN,
    CurrentUser,
    create_token,
    decode_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def _issued_before_password_change(issued_at: datetime | None, changed_at: datetime | None) -> bool:
    if changed_at is None:
        return False
    if issued_at is None:
        return True
    return _as_utc(issued_at) < _as_utc(changed_at)


@dataclass(frozen=True)
class IssuedToken:
    access_token: str
    expires_in: int
    user: CurrentUser


class AuthService:
    def __init__(self, session: AsyncSession, config: Settings | None = None) -> None:
        self._session = session
        self._config = config or get_settings()

    def _check_password(self, password: str) -> None:
        if len(password) < self._config.min_password_length:
            raise ValidationError(
                {"password": [f"Password must be at least {self._config.min_password_length} characters"]}
            )

    def _issue(self, user_id: str, email: str) -> IssuedToken:
        token, _ = create_token(
            self._config, subject=user_id, purpose=ACCESS_TOKEN, extra={"email": email}
        )
        return IssuedToken(
            access_token=token,
            expires_in=self._config.access_token_expire_minutes * 60,
            user=CurrentUser(id=user_id, email=email),
        )

    async def sign_up(self, email: str, password: str) -> CurrentUser:
        self._check_password(password)
        try:
            user = await crud.create_user(
                self._session, email=email, password_hash=hash_password(password)
            )
        except IntegrityError as exc:
            await self._session.rollback()
            raise PersistenceError("This record already exists.") from exc
        except SQLAlchemyError as exc:
            await self._session.rollback()
            raise PersistenceError.from_backend("Sign up failed", exc) from exc
        logger.info(f"Registered user {user.id}")
        return CurrentUser(id=user.id, email=user.email)

    async def sign_in(self, email: str, password: str) -> IssuedToken:
        user = await crud.get_user_by_email(self._session, email)
        if user is None or not verify_password(password, user.password_hash):
            raise AuthError("Invalid login credentials")
        return self._issue(user.id, user.email)

    async def sign_out(self, token: str) -> None:
        claims = decode_token(self._config, token, purpose=ACCESS_TOKEN)
        await crud.revoke_token(
            self._session, jti=claims.jti, user_id=claims.subject, expires_at=claims.expires_at
        )
        logger.info(f"User {claims.subject} signed out")

    async def current_user(self, token: str | None) -> CurrentUser:
        """Resolve a bearer token to the signed-in user."""

        if not token:
            raise AuthError("Not authenticated")
        claims = decode_token(self._config, token, purpose=ACCESS_TOKEN)
        if await crud.is_token_revoked(self._session, claims.jti):
            raise AuthError("Session has ended, please sign in again")
        user = await crud.get_user(self._session, claims.subject)
        if user is None:
            raise AuthError("Not authenticated")
        if _issued_before_password_change(claims.issued_at, user.password_changed_at):
            raise AuthError("Password was changed, please sign in again")
        return CurrentUser(id=user.id, email=user.email)

    async def reset_password(self, email: str, redirect_to: str | None = None) -> str | None:
        """Start a password reset.

        Returns the reset link for delivery, or None when no account matches;
        callers report success either way so account existence is not revealed.
        """
        user = await crud.get_user_by_email(self._session, email)
        if user is None:
            logger.info("Password reset requested for unknown address")
            return None
        token, _ = create_token(self._config, subject=user.id, purpose=RESET_TOKEN)
        target = redirect_to or f"{self._config.site_url}/auth/update-password"
        logger.info(f"Password reset issued for user {user.id}")
        return f"{target}?token={token}"

    async def update_password(self, user: CurrentUser, password: str) -> None:
        self._check_password(password)
        rows = await crud.update_user_password(
            self._session, user.id, hash_password(password), datetime.now(UTC)
        )
        if rows == 0:
            raise AuthError("Not authenticated")
        logger.info(f"Password updated for user {user.id}")

    async def complete_password_reset(self, reset_token: str, password: str) -> None:
        claims = decode_token(self._config, reset_token, purpose=RESET_TOKEN)
        if await crud.is_token_revoked(self._session, claims.jti):
            raise AuthError("Reset link has already been used")
        await self.update_password(CurrentUser(id=claims.subject), password)
        await crud.revoke_token(
            self._session, jti=claims.jti, user_id=claims.subject, expires_at=claims.expires_at
        )

