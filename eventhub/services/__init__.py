"""Service layer: the event/venue protocol, event queries, template venues and auth."""

from .auth_service import AuthService, IssuedToken
from .event_venue_service import EventVenueService
from .results import CreateEventResult, OperationResult, StepResult
from .template_venue_service import TemplateVenueService

__all__ = [
    "AuthService",
    "IssuedToken",
    "EventVenueService",
    "TemplateVenueService",
    "CreateEventResult",
    "OperationResult",
    "StepResult",
]
