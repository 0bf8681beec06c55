# backend/eventhub/errors.py
"""
Validation error taxonomy.

Every rejection raised by the normalizers, the booking validator and the
persistence helpers is a ``ValidationError`` subclass. ``code`` is the
stable, machine-readable reason reported to API callers.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ValidationError(Exception):
    """Base class for rejected records."""

    code = "ValidationError"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "detail": self.message, "field": self.field}


class MissingRequiredField(ValidationError):
    code = "MissingRequiredField"

    def __init__(self, field: str, message: Optional[str] = None):
        label = field[:1].upper() + field[1:]
        super().__init__(message or f"{label} is required", field=field)


class InvalidEmail(ValidationError):
    code = "InvalidEmail"

    def __init__(self, value: str):
        super().__init__("Please provide a valid email address", field="email")
        self.value = value


class InvalidDate(ValidationError):
    code = "InvalidDate"

    def __init__(self, value: Any):
        super().__init__("Invalid date format. Please provide a valid date.", field="date")
        self.value = value


class InvalidTime(ValidationError):
    code = "InvalidTime"

    def __init__(self, value: Any):
        super().__init__("Invalid time format. Please use HH:MM format (e.g., 14:30).", field="time")
        self.value = value


class InvalidMode(ValidationError):
    code = "InvalidMode"

    def __init__(self, value: Any, allowed: tuple):
        super().__init__(
            f"Mode must be one of: {', '.join(allowed)} (got {value!r})", field="mode"
        )
        self.value = value


class EmptyCollection(ValidationError):
    code = "EmptyCollection"


class DanglingReference(ValidationError):
    """The booking points at an event that does not exist."""

    code = "DanglingReference"

    def __init__(self, event_id: Any):
        super().__init__(f"Event with ID {event_id} does not exist", field="eventId")
        self.event_id = event_id


class LookupFailed(ValidationError):
    """The event lookup itself failed; the same request may succeed on retry."""

    code = "LookupFailed"

    def __init__(self, event_id: Any):
        super().__init__(
            "Failed to validate event reference. Please try again.", field="eventId"
        )
        self.event_id = event_id


class DuplicateSlug(ValidationError):
    """Raised after the database rejects a slug that is already taken."""

    code = "DuplicateSlug"

    def __init__(self, slug: str):
        super().__init__(f"An event with slug {slug!r} already exists", field="slug")
        self.slug = slug
