from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from eventhub.schemas.venue import VenueInput, VenueRead, VenueSummary, required_text


class SportType(str, Enum):
    FOOTBALL = "Football"
    BASKETBALL = "Basketball"
    SOCCER = "Soccer"
    TENNIS = "Tennis"
    BASEBALL = "Baseball"
    HOCKEY = "Hockey"
    GOLF = "Golf"
    VOLLEYBALL = "Volleyball"


ALL_SPORTS = "all"


def _require_date(value: Any) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError("Event date is required")
    return value.strip() if isinstance(value, str) else value


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _at_least_one_venue(venues: list[VenueInput]) -> list[VenueInput]:
    if not venues:
        raise ValueError("At least one venue is required")
    return venues


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class EventInput(_CamelModel):
    """Validated payload for creating or replacing an event and its venues."""

    name: Annotated[str, required_text("Event name")]
    sport_type: SportType
    description: Annotated[str | None, AfterValidator(_blank_to_none)] = None
    event_date: Annotated[date, BeforeValidator(_require_date)]
    venues: Annotated[list[VenueInput], AfterValidator(_at_least_one_venue)]

    def event_fields(self) -> dict[str, Any]:
        """Column values for the ``events`` row."""

        return {
            "name": self.name,
            "sport_type": self.sport_type.value,
            "description": self.description,
            "event_date": self.event_date,
        }

    def venue_rows(self) -> list[dict[str, Any]]:
        return [venue.model_dump() for venue in self.venues]


class EventFilter(_CamelModel):
    name: str | None = None
    sport: str | None = None

    @property
    def name_term(self) -> str | None:
        term = (self.name or "").strip()
        return term or None

    @property
    def sport_term(self) -> str | None:
        sport = (self.sport or "").strip()
        if not sport or sport.lower() == ALL_SPORTS:
            return None
        return sport


class EventRead(_CamelModel):
    """Event as loaded into the edit form."""

    id: str
    name: str
    sport_type: str
    description: str = ""
    event_date: date | None = None
    venues: list[VenueRead] = Field(default_factory=list)


class EventDetail(EventRead):
    """Event as rendered on its detail page."""


class EventSummary(_CamelModel):
    id: str
    name: str
    sport_type: str
    event_date: date | None = None
    venues: list[VenueSummary] = Field(default_factory=list)


class CreateEventResponse(_CamelModel):
    success: bool = True
    event_id: str
    venues_warning: bool | None = None
    warning: str | None = None


class OperationResponse(_CamelModel):
    success: bool = True
    warnings: list[str] = Field(default_factory=list)
