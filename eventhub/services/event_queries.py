from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub import crud
from eventhub.core.errors import PersistenceError
from eventhub.schemas.event import EventFilter, EventSummary
from eventhub.schemas.validation import validate_event_filter
from eventhub.services.relations import normalize_venue_summaries

logger = logging.getLogger(__name__)


async def list_events(session: AsyncSession, filters: EventFilter | Any = None) -> list[EventSummary]:
    """Return events matching ``filters`` ordered by event date, venues attached.

    ``name`` matches case-insensitively anywhere in the event name; ``sport``
    must match exactly unless it is empty or ``"all"``.
    """

    criteria = validate_event_filter(filters)
    try:
        events = await crud.list_events(
            session,
            name=criteria.name_term,
            sport_type=criteria.sport_term,
        )
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.error(f"Failed to fetch events: {exc}")
        raise PersistenceError.from_backend("Failed to fetch events", exc) from exc

    return [
        EventSummary(
            id=event.id,
            name=event.name or "",
            sport_type=event.sport_type or "",
            event_date=event.event_date,
            venues=normalize_venue_summaries(event.venues),
        )
        for event in events
    ]
