"""FastAPI dependency providers.

Everything a request needs (settings, session, caller identity, services) is
built here from ``app.state`` and injected; nothing is held at module level.
"""
from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.core.config import Settings
from eventhub.core.errors import AuthError
from eventhub.core.security import CurrentUser
from eventhub.services import AuthService, EventVenueService, TemplateVenueService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)


def get_config(request: Request) -> Settings:
    return request.app.state.settings


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    async with request.app.state.session_factory() as session:
        yield session


def get_auth_service(
    session: AsyncSession = Depends(get_session),
    config: Settings = Depends(get_config),
) -> AuthService:
    return AuthService(session, config)


async def get_optional_user(
    token: str | None = Depends(oauth2_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> CurrentUser | None:
    """The signed-in user, or None for anonymous requests.

    A token that is present but invalid is rejected rather than ignored.
    """
    if not token:
        return None
    return await auth.current_user(token)


async def get_current_user(user: CurrentUser | None = Depends(get_optional_user)) -> CurrentUser:
    if user is None:
        raise AuthError("Not authenticated")
    return user


def get_event_service(
    session: AsyncSession = Depends(get_session),
    user: CurrentUser | None = Depends(get_optional_user),
    config: Settings = Depends(get_config),
) -> EventVenueService:
    return EventVenueService(session, user, config)


def get_template_venue_service(
    session: AsyncSession = Depends(get_session),
    user: CurrentUser | None = Depends(get_optional_user),
) -> TemplateVenueService:
    return TemplateVenueService(session, user)
