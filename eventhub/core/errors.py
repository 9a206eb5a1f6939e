"""Error taxonomy shared by services and routers.

Services raise these; routers map them to HTTP responses. Backend (SQLAlchemy)
exceptions are translated here and never reach the presentation layer.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Stable error codes returned to clients."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTH_REQUIRED = "AUTH_REQUIRED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    NOT_FOUND = "NOT_FOUND"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"


GENERIC_ERROR_MESSAGE = "An unexpected error occurred"

# Ordered: the first matching substring wins
_FRIENDLY_MESSAGES: tuple[tuple[str, str], ...] = (
    ("row-level security", "Permission denied. Please check your access rights."),
    ("duplicate key", "This record already exists."),
    ("unique constraint", "This record already exists."),
    ("foreign key", "Cannot perform this action due to related records."),
    ("not found", "The requested resource was not found."),
)


def friendly_backend_message(error: BaseException | str | None) -> str:
    """Translate a backend error into text that is safe to show a user."""

    if error is None:
        return GENERIC_ERROR_MESSAGE
    message = error if isinstance(error, str) else _backend_text(error)
    if not message:
        return GENERIC_ERROR_MESSAGE
    lowered = message.lower()
    for needle, friendly in _FRIENDLY_MESSAGES:
        if needle in lowered:
            return friendly
    return message


def _backend_text(error: BaseException) -> str:
    # DBAPIError.orig carries the driver message without the SQL statement
    orig = getattr(error, "orig", None)
    if orig is not None:
        return str(orig).strip()
    return str(error).strip()


class EventHubError(Exception):
    """Base error with a code and a user-safe message."""

    code: ErrorCode = ErrorCode.PERSISTENCE_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(EventHubError):
    """Raised when input fails schema validation.

    ``fields`` maps a dotted field path (``capacity``, ``venues.0.city``) to
    the messages for that field.
    """

    code = ErrorCode.VALIDATION_ERROR

    def __init__(self, fields: dict[str, list[str]], message: str = "Validation error") -> None:
        super().__init__(message)
        self.fields = fields

    def __str__(self) -> str:
        details = "; ".join(
            f"{path}: {', '.join(messages)}" for path, messages in self.fields.items()
        )
        return f"{self.code.value}: {self.message} ({details})" if details else super().__str__()


class AuthError(EventHubError):
    """Raised when there is no authenticated user or ownership cannot be verified."""

    code = ErrorCode.AUTH_REQUIRED

    def __init__(self, message: str = "Authentication required", *, permission_denied: bool = False) -> None:
        super().__init__(message)
        if permission_denied:
            self.code = ErrorCode.PERMISSION_DENIED

    @property
    def permission_denied(self) -> bool:
        return self.code is ErrorCode.PERMISSION_DENIED


class NotFoundError(EventHubError):
    """Raised when a requested record does not exist."""

    code = ErrorCode.NOT_FOUND

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        super().__init__(f"{resource} not found")
        self.resource = resource
        self.resource_id = resource_id


class PersistenceError(EventHubError):
    """Raised when a backend write fails or reports an unexpected result."""

    code = ErrorCode.PERSISTENCE_ERROR

    @classmethod
    def from_backend(cls, action: str, error: BaseException | None) -> "PersistenceError":
        exc = cls(f"{action}: {friendly_backend_message(error)}")
        exc.__cause__ = error
        return exc


@dataclass(frozen=True)
class PartialSuccessWarning:
    """Non-fatal outcome: the event was saved but its venues were not."""

    event_id: str
    message: str = "Event created, but some venues could not be saved."
    detail: str | None = None
