"""Backend client: filtered reads and writes over the ``events``/``venues`` store.

Every write commits on its own, so a sequence of calls is never atomic. Writes
on events are scoped to the calling user (row-level authorization): a write the
caller may not perform affects zero rows instead of raising.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

from sqlalchemy import Select, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from eventhub.models.event import Event
from eventhub.models.user import RevokedToken, User
from eventhub.models.venue import Venue

LIKE_ESCAPE = "\\"


def _like_pattern(term: str) -> str:
    """Substring pattern with LIKE wildcards in ``term`` escaped."""

    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def _owned_event_ids(event_id: str, user_id: str) -> Select[tuple[str]]:
    return select(Event.id).where(Event.id == event_id, Event.user_id == user_id)


# ---------------------------------------------------------------------------
# Event helpers


async def list_events(
    session: AsyncSession,
    *,
    name: str | None = None,
    sport_type: str | None = None,
) -> list[Event]:
    """Return events with their venues, ordered by event date."""

    stmt: Select[tuple[Event]] = (
        select(Event)
        .options(selectinload(Event.venues))
        .execution_options(populate_existing=True)
    )
    if name:
        stmt = stmt.where(Event.name.ilike(_like_pattern(name), escape=LIKE_ESCAPE))
    if sport_type:
        stmt = stmt.where(Event.sport_type == sport_type)
    stmt = stmt.order_by(Event.event_date.asc(), Event.created_at.asc())
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_event_with_venues(session: AsyncSession, event_id: str) -> Event | None:
    stmt: Select[tuple[Event]] = (
        select(Event)
        .options(selectinload(Event.venues))
        .where(Event.id == event_id)
        .execution_options(populate_existing=True)
    )
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def get_event_owner(session: AsyncSession, event_id: str) -> str | None:
    """Return the owner id of an event, or None when no row matches."""

    result = await session.execute(select(Event.user_id).where(Event.id == event_id))
    return result.scalar_one_or_none()


async def insert_event(
    session: AsyncSession,
    *,
    user_id: str,
    name: str,
    sport_type: str,
    description: str | None = None,
    event_date=None,
) -> str:
    event = Event(
        user_id=user_id,
        name=name,
        sport_type=sport_type,
        description=description,
        event_date=event_date,
    )
    session.add(event)
    await session.commit()
    return event.id


async def update_event(
    session: AsyncSession, event_id: str, user_id: str, data: dict[str, Any]
) -> int:
    """Update an owned event; returns the number of rows changed."""

    stmt = (
        update(Event)
        .where(Event.id == event_id, Event.user_id == user_id)
        .values(**data)
        .execution_options(synchronize_session=False)
    )
    result = await session.execute(stmt)
    await session.commit()
    return result.rowcount or 0


async def delete_event(session: AsyncSession, event_id: str, user_id: str) -> list[str]:
    """Delete an owned event and return the ids of the deleted rows."""

    stmt = (
        delete(Event)
        .where(Event.id == event_id, Event.user_id == user_id)
        .returning(Event.id)
        .execution_options(synchronize_session=False)
    )
    result = await session.execute(stmt)
    deleted = list(result.scalars().all())
    await session.commit()
    return deleted


# ---------------------------------------------------------------------------
# Venue helpers


async def insert_venues(
    session: AsyncSession, event_id: str | None, venues: Sequence[Mapping[str, Any]]
) -> list[str]:
    """Insert a batch of venues for an event in one commit."""

    rows = [
        Venue(
            event_id=event_id,
            name=venue["name"],
            address=venue["address"],
            city=venue["city"],
            state=venue["state"],
            capacity=int(venue["capacity"]),
            position=position,
        )
        for position, venue in enumerate(venues)
    ]
    session.add_all(rows)
    await session.commit()
    return [row.id for row in rows]


async def delete_venues_for_event(session: AsyncSession, event_id: str, user_id: str) -> int:
    """Delete the venues of an event the caller owns; returns rows deleted."""

    stmt = (
        delete(Venue)
        .where(Venue.event_id == event_id)
        .where(Venue.event_id.in_(_owned_event_ids(event_id, user_id)))
        .returning(Venue.id)
        .execution_options(synchronize_session=False)
    )
    result = await session.execute(stmt)
    deleted = len(result.scalars().all())
    await session.commit()
    return deleted


async def list_template_venues(session: AsyncSession) -> list[Venue]:
    stmt: Select[tuple[Venue]] = (
        select(Venue)
        .where(Venue.event_id.is_(None))
        .order_by(Venue.name.asc())
        .execution_options(populate_existing=True)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def update_template_venue(session: AsyncSession, venue_id: str, data: dict[str, Any]) -> int:
    stmt = (
        update(Venue)
        .where(Venue.id == venue_id, Venue.event_id.is_(None))
        .values(**data)
        .execution_options(synchronize_session=False)
    )
    result = await session.execute(stmt)
    await session.commit()
    return result.rowcount or 0


async def delete_template_venue(session: AsyncSession, venue_id: str) -> int:
    stmt = (
        delete(Venue)
        .where(Venue.id == venue_id, Venue.event_id.is_(None))
        .returning(Venue.id)
        .execution_options(synchronize_session=False)
    )
    result = await session.execute(stmt)
    deleted = len(result.scalars().all())
    await session.commit()
    return deleted


# ---------------------------------------------------------------------------
# User helpers


async def get_user(session: AsyncSession, user_id: str) -> User | None:
    result = await session.execute(
        select(User).where(User.id == user_id).execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(
        select(User)
        .where(User.email == email.lower())
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def create_user(session: AsyncSession, *, email: str, password_hash: str) -> User:
    user = User(email=email.lower(), password_hash=password_hash)
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


async def update_user_password(
    session: AsyncSession, user_id: str, password_hash: str, changed_at: datetime
) -> int:
    stmt = (
        update(User)
        .where(User.id == user_id)
        .values(password_hash=password_hash, password_changed_at=changed_at)
        .execution_options(synchronize_session=False)
    )
    result = await session.execute(stmt)
    await session.commit()
    return result.rowcount or 0


async def revoke_token(
    session: AsyncSession, *, jti: str, user_id: str, expires_at: datetime | None
) -> None:
    if await is_token_revoked(session, jti):
        return
    session.add(RevokedToken(jti=jti, user_id=user_id, expires_at=expires_at))
    await session.commit()


async def is_token_revoked(session: AsyncSession, jti: str) -> bool:
    result = await session.execute(select(RevokedToken.jti).where(RevokedToken.jti == jti))
    return result.scalar_one_or_none() is not None
