"""Normalization of the event -> venues relation.

A joined read may hand back the related venues as a single record, a list of
records, or nothing at all. Everything downstream works on a list.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from eventhub.schemas.venue import VenueRead, VenueSummary


def normalize_relation(value: Any) -> list[Any]:
    """Return ``value`` as an ordered list of related records."""

    if value is None:
        return []
    if isinstance(value, Mapping):
        return [value]
    if isinstance(value, (str, bytes)):
        raise TypeError("a related record cannot be a string")
    if isinstance(value, Sequence):
        return [item for item in value if item is not None]
    # ORM collections (InstrumentedList is a list, but other collection classes are not)
    if hasattr(value, "__iter__") and not hasattr(value, "__table__"):
        return [item for item in value if item is not None]
    return [value]


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def venue_read(record: Any, default_capacity: int) -> VenueRead:
    capacity = _field(record, "capacity")
    return VenueRead(
        id=_field(record, "id"),
        name=_field(record, "name") or "",
        address=_field(record, "address") or "",
        city=_field(record, "city") or "",
        state=_field(record, "state") or "",
        capacity=default_capacity if capacity is None else int(capacity),
    )


def normalize_venues(value: Any, default_capacity: int) -> list[VenueRead]:
    return [venue_read(record, default_capacity) for record in normalize_relation(value)]


def normalize_venue_summaries(value: Any) -> list[VenueSummary]:
    return [
        VenueSummary(
            name=_field(record, "name") or "",
            city=_field(record, "city") or "",
            state=_field(record, "state") or "",
        )
        for record in normalize_relation(value)
    ]
