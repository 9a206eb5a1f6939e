"""Tests for backend error translation."""
import pytest
from sqlalchemy.exc import IntegrityError

from eventhub.core.errors import (
    GENERIC_ERROR_MESSAGE,
    AuthError,
    ErrorCode,
    PersistenceError,
    ValidationError,
    friendly_backend_message,
)


@pytest.mark.parametrize(
    "raw, friendly",
    [
        (
            'new row violates row-level security policy for table "events"',
            "Permission denied. Please check your access rights.",
        ),
        ('duplicate key value violates unique constraint "users_email_key"', "This record already exists."),
        ("UNIQUE constraint failed: users.email", "This record already exists."),
        ("FOREIGN KEY constraint failed", "Cannot perform this action due to related records."),
        ("Relation not found", "The requested resource was not found."),
        ("connection reset by peer", "connection reset by peer"),
    ],
)
def test_friendly_backend_message(raw, friendly):
    assert friendly_backend_message(raw) == friendly


def test_friendly_backend_message_empty():
    assert friendly_backend_message(None) == GENERIC_ERROR_MESSAGE
    assert friendly_backend_message("") == GENERIC_ERROR_MESSAGE


def test_driver_message_is_preferred():
    exc = IntegrityError("INSERT INTO users ...", {}, Exception("UNIQUE constraint failed: users.email"))
    error = PersistenceError.from_backend("Failed to create event", exc)
    assert error.message == "Failed to create event: This record already exists."
    assert error.__cause__ is exc
    assert error.code is ErrorCode.PERSISTENCE_ERROR


def test_auth_error_codes():
    assert AuthError().code is ErrorCode.AUTH_REQUIRED
    denied = AuthError("Not yours", permission_denied=True)
    assert denied.permission_denied
    assert denied.code is ErrorCode.PERMISSION_DENIED


def test_validation_error_str_lists_fields():
    error = ValidationError({"name": ["Event name is required"]})
    assert str(error) == "VALIDATION_ERROR: Validation error (name: Event name is required)"
