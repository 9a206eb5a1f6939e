"""
Event / venue consistency protocol

Creates, loads, replaces and deletes an event together with its venues. The
store has no transaction spanning both tables, so each operation is a fixed
sequence of independent writes:

create  insert event -> batch insert venues (venue failure is a partial success)
update  verify owner -> update event -> delete venues (best effort) -> insert venues
delete  delete venues (best effort) -> delete event (zero rows is an error)
"""
from __future__ import annotations

import logging
from collections.abc import Awaitable
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub import crud
from eventhub.core.config import Settings, get_settings
from eventhub.core.errors import (
    AuthError,
    NotFoundError,
    PartialSuccessWarning,
    PersistenceError,
    friendly_backend_message,
)
from eventhub.core.security import CurrentUser
from eventhub.models.event import Event as EventModel
from eventhub.schemas.event import EventDetail, EventRead, SportType
from eventhub.schemas.validation import validate_event_input
from eventhub.services.relations import normalize_venues
from eventhub.services.results import CreateEventResult, OperationResult, StepResult

logger = logging.getLogger(__name__)

# Detail pages show capacity only when it is known
DETAIL_MISSING_CAPACITY = 0


class EventVenueService:
    """Event + venue operations for one caller over one session."""

    def __init__(
        self,
        session: AsyncSession,
        user: CurrentUser | None,
        config: Settings | None = None,
    ) -> None:
        self._session = session
        self._user = user
        self._config = config or get_settings()

    def _require_user(self) -> CurrentUser:
        if self._user is None:
            raise AuthError("Not authenticated")
        return self._user

    async def _fatal(self, action: str, exc: SQLAlchemyError) -> PersistenceError:
        await self._session.rollback()
        logger.error(f"{action}: {exc}")
        return PersistenceError.from_backend(action, exc)

    async def _best_effort(
        self, result: OperationResult, step: str, call: Awaitable[int]
    ) -> StepResult:
        try:
            rows = await call
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.warning(f"{step} failed, proceeding: {exc}")
            return result.record(
                StepResult(step, ok=False, fatal=False, error=friendly_backend_message(exc))
            )
        if not rows:
            logger.debug(f"{step} affected no rows")
        return result.record(StepResult(step, ok=True, fatal=False, rows=rows))

    # ------------------------------------------------------------------
    # create

    async def create_event(self, payload: Any) -> CreateEventResult:
        """Create an event owned by the caller, then its venues.

        Raises:
            AuthError: No authenticated user.
            ValidationError: The payload does not match the event schema.
            PersistenceError: The event row could not be inserted.
        """
        user = self._require_user()
        data = validate_event_input(payload)
        result = CreateEventResult()

        try:
            event_id = await crud.insert_event(
                self._session, user_id=user.id, **data.event_fields()
            )
        except SQLAlchemyError as exc:
            raise await self._fatal("Event insert failed", exc) from exc
        result.event_id = event_id
        result.record(StepResult("insert_event", ok=True, rows=1))

        try:
            venue_ids = await crud.insert_venues(self._session, event_id, data.venue_rows())
        except SQLAlchemyError as exc:
            # The event row is already committed and stays
            await self._session.rollback()
            logger.warning(f"Event {event_id} created but venues could not be saved: {exc}")
            detail = friendly_backend_message(exc)
            result.record(StepResult("insert_venues", ok=False, fatal=False, error=detail))
            result.warning = PartialSuccessWarning(event_id=event_id, detail=detail)
            return result

        result.record(StepResult("insert_venues", ok=True, rows=len(venue_ids)))
        logger.info(f"Created event {event_id} with {len(venue_ids)} venue(s) for user {user.id}")
        return result

    # ------------------------------------------------------------------
    # read

    async def _load(self, event_id: str) -> EventModel:
        try:
            event = await crud.get_event_with_venues(self._session, event_id)
        except SQLAlchemyError as exc:
            raise await self._fatal("Failed to load event", exc) from exc
        if event is None:
            raise NotFoundError("Event", event_id)
        return event

    async def get_event_for_edit(self, event_id: str) -> EventRead:
        """Load an event and its venues in the shape the edit form expects."""

        event = await self._load(event_id)
        return EventRead(
            id=event.id,
            name=event.name or "",
            sport_type=event.sport_type or SportType.FOOTBALL.value,
            description=event.description or "",
            event_date=event.event_date,
            venues=normalize_venues(event.venues, self._config.default_venue_capacity),
        )

    async def get_event_details(self, event_id: str) -> EventDetail:
        event = await self._load(event_id)
        return EventDetail(
            id=event.id,
            name=event.name or "",
            sport_type=event.sport_type or "N/A",
            description=event.description or "",
            event_date=event.event_date,
            venues=normalize_venues(event.venues, DETAIL_MISSING_CAPACITY),
        )

    # ------------------------------------------------------------------
    # update

    async def _verify_owner(self, event_id: str, user: CurrentUser) -> None:
        try:
            owner_id = await crud.get_event_owner(self._session, event_id)
        except SQLAlchemyError as exc:
            await self._session.rollback()
            raise AuthError(
                f"Could not verify event ownership: {friendly_backend_message(exc)}"
            ) from exc
        if owner_id is None:
            raise AuthError("Could not verify event ownership: Event not found")
        if owner_id != user.id:
            logger.warning(f"User {user.id} attempted to modify event {event_id} owned by {owner_id}")
            raise AuthError(
                "Permission denied: you do not own this event", permission_denied=True
            )

    async def update_event(self, event_id: str, payload: Any) -> OperationResult:
        """Replace an event's fields and its complete venue list.

        The venue list in ``payload`` is the full desired set: existing venues
        are deleted and the given ones inserted.

        Raises:
            AuthError: No authenticated user, or ownership cannot be verified.
            ValidationError: The payload does not match the event schema.
            PersistenceError: The event update or the venue insert failed.
        """
        user = self._require_user()
        data = validate_event_input(payload)
        await self._verify_owner(event_id, user)
        result = OperationResult()

        try:
            rows = await crud.update_event(self._session, event_id, user.id, data.event_fields())
        except SQLAlchemyError as exc:
            raise await self._fatal("Event update failed", exc) from exc
        if rows == 0:
            raise PersistenceError("Event update failed: No rows were updated. Check authorization.")
        result.record(StepResult("update_event", ok=True, rows=rows))

        await self._best_effort(
            result,
            "delete_venues",
            crud.delete_venues_for_event(self._session, event_id, user.id),
        )

        try:
            venue_ids = await crud.insert_venues(self._session, event_id, data.venue_rows())
        except SQLAlchemyError as exc:
            raise await self._fatal("Failed to save venues", exc) from exc
        result.record(StepResult("insert_venues", ok=True, rows=len(venue_ids)))

        logger.info(f"Updated event {event_id} with {len(venue_ids)} venue(s)")
        return result

    # ------------------------------------------------------------------
    # delete

    async def delete_event(self, event_id: str) -> OperationResult:
        """Delete an event and its venues.

        Raises:
            AuthError: No authenticated user.
            PersistenceError: The delete failed or removed no rows.
        """
        user = self._require_user()
        result = OperationResult()

        await self._best_effort(
            result,
            "delete_venues",
            crud.delete_venues_for_event(self._session, event_id, user.id),
        )

        try:
            deleted = await crud.delete_event(self._session, event_id, user.id)
        except SQLAlchemyError as exc:
            raise await self._fatal("Failed to delete event", exc) from exc
        # A delete blocked by row-level authorization reports zero rows, not an error
        if not deleted:
            raise PersistenceError("Event delete failed: No rows were deleted. Check authorization.")
        result.record(StepResult("delete_event", ok=True, rows=len(deleted)))

        logger.info(f"Deleted event {event_id}")
        return result
