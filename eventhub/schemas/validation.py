"""Turn untyped form input into typed records or a field-level ValidationError."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel

from eventhub.core.errors import ValidationError
from eventhub.schemas.event import EventFilter, EventInput
from eventhub.schemas.venue import VenueInput

ModelT = TypeVar("ModelT", bound=BaseModel)


def _field_path(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc) or "__root__"


def _message(error: Mapping[str, Any]) -> str:
    # Messages raised by our own validators come through without pydantic's prefix
    if error.get("type") == "value_error":
        ctx = error.get("ctx") or {}
        if "error" in ctx:
            return str(ctx["error"])
    return str(error.get("msg", "Invalid value"))


def field_errors(exc: pydantic.ValidationError) -> dict[str, list[str]]:
    fields: dict[str, list[str]] = {}
    for error in exc.errors():
        fields.setdefault(_field_path(tuple(error["loc"])), []).append(_message(error))
    return fields


def validate(model: type[ModelT], raw: Any) -> ModelT:
    """Validate ``raw`` against ``model``; never returns a partial record."""

    if isinstance(raw, model):
        return raw
    if isinstance(raw, BaseModel):
        raw = raw.model_dump(by_alias=True)
    if not isinstance(raw, Mapping):
        raise ValidationError({"__root__": ["Expected an object"]})
    try:
        return model.model_validate(dict(raw))
    except pydantic.ValidationError as exc:
        raise ValidationError(field_errors(exc)) from exc


def validate_event_input(raw: Any) -> EventInput:
    return validate(EventInput, raw)


def validate_venue_input(raw: Any) -> VenueInput:
    return validate(VenueInput, raw)


def validate_event_filter(raw: Any) -> EventFilter:
    if raw is None:
        return EventFilter()
    return validate(EventFilter, raw)
