"""Template venues: standalone venues with no owning event, reused when creating events."""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub import crud
from eventhub.core.errors import AuthError, NotFoundError, PersistenceError
from eventhub.core.security import CurrentUser
from eventhub.schemas.venue import TemplateVenueRead
from eventhub.schemas.validation import validate_venue_input

logger = logging.getLogger(__name__)


class TemplateVenueService:
    def __init__(self, session: AsyncSession, user: CurrentUser | None) -> None:
        self._session = session
        self._user = user

    def _require_user(self) -> CurrentUser:
        if self._user is None:
            raise AuthError("Authentication required")
        return self._user

    async def _failed(self, action: str, exc: SQLAlchemyError) -> PersistenceError:
        await self._session.rollback()
        logger.error(f"{action}: {exc}")
        return PersistenceError.from_backend(action, exc)

    async def list_template_venues(self) -> list[TemplateVenueRead]:
        try:
            venues = await crud.list_template_venues(self._session)
        except SQLAlchemyError as exc:
            raise await self._failed("Failed to load venues", exc) from exc
        return [TemplateVenueRead.model_validate(venue) for venue in venues]

    async def create_template_venue(self, payload: Any) -> str:
        self._require_user()
        data = validate_venue_input(payload)
        try:
            (venue_id,) = await crud.insert_venues(self._session, None, [data.model_dump()])
        except SQLAlchemyError as exc:
            raise await self._failed("Failed to create venue", exc) from exc
        logger.info(f"Created template venue {venue_id}")
        return venue_id

    async def update_template_venue(self, venue_id: str, payload: Any) -> None:
        self._require_user()
        data = validate_venue_input(payload)
        try:
            rows = await crud.update_template_venue(self._session, venue_id, data.model_dump())
        except SQLAlchemyError as exc:
            raise await self._failed("Failed to update venue", exc) from exc
        # Event-attached venues are only changed through their event
        if rows == 0:
            raise NotFoundError("Venue", venue_id)

    async def delete_template_venue(self, venue_id: str) -> None:
        self._require_user()
        try:
            rows = await crud.delete_template_venue(self._session, venue_id)
        except SQLAlchemyError as exc:
            raise await self._failed("Failed to delete venue", exc) from exc
        if rows == 0:
            raise NotFoundError("Venue", venue_id)
        logger.info(f"Deleted template venue {venue_id}")
