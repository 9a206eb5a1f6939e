from __future__ import annotations

from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


def required_text(label: str) -> AfterValidator:
    """Trim a string and reject it when nothing is left."""

    def _check(value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError(f"{label} is required")
        return value

    return AfterValidator(_check)


# venues.capacity is a 32-bit INTEGER column
MAX_CAPACITY = 2_147_483_647


def _coerce_capacity(value: Any) -> int:
    # Form fields arrive as strings; JSON clients send numbers
    if isinstance(value, bool):
        raise ValueError("Capacity must be a number")
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Capacity is required")
        try:
            value = int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                raise ValueError("Capacity must be a number") from None
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("Capacity must be a whole number")
        value = int(value)
    if not isinstance(value, int):
        raise ValueError("Capacity must be a number")
    if value < 1:
        raise ValueError("Capacity must be at least 1")
    if value > MAX_CAPACITY:
        raise ValueError(f"Capacity must be at most {MAX_CAPACITY}")
    return value


Capacity = Annotated[int, BeforeValidator(_coerce_capacity)]


class VenueInput(BaseModel):
    """Validated venue fields, shared by event venues and template venues."""

    name: Annotated[str, required_text("Venue name")]
    address: Annotated[str, required_text("Address")]
    city: Annotated[str, required_text("City")]
    state: Annotated[str, required_text("State")]
    capacity: Capacity

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class VenueRead(BaseModel):
    id: str | None = None
    name: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    capacity: int

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class VenueSummary(BaseModel):
    """Venue fields shown in event listings."""

    name: str = ""
    city: str = ""
    state: str = ""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TemplateVenueRead(VenueRead):
    id: str
