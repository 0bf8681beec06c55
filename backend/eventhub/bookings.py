# backend/eventhub/bookings.py
"""Booking validation: email normalization and the event reference check."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Optional

from .errors import (
    DanglingReference,
    InvalidEmail,
    LookupFailed,
    MissingRequiredField,
    ValidationError,
)
from .validators import is_valid_email

logger = logging.getLogger(__name__)

# Takes an event id, returns the event or None when there is no such event.
EventLookup = Callable[[Any], Optional[Any]]


def normalize_email(value: Any) -> str:
    if value is None or not str(value).strip():
        raise MissingRequiredField("email")
    email = str(value).strip().lower()
    if not is_valid_email(email):
        raise InvalidEmail(email)
    return email


def validate_booking(
    record: Dict[str, Any],
    event_lookup: EventLookup,
    changed_fields: Optional[Iterable[str]] = None,
) -> Dict[str, Any]:
    """
    Check a booking before it is written and return its normalized form.

    The event reference is only looked up for new bookings
    (``changed_fields is None``) or when ``eventId`` is among the changed
    fields. A lookup returning None means the event does not exist
    (DanglingReference); a lookup that raises means we could not tell
    (LookupFailed) and the caller may retry.
    """
    out = dict(record)
    out["email"] = normalize_email(record.get("email"))

    event_id = record.get("eventId")
    if event_id is None:
        raise MissingRequiredField("eventId", "Event ID is required")

    if changed_fields is not None and "eventId" not in set(changed_fields):
        return out

    try:
        event = event_lookup(event_id)
    except ValidationError:
        raise
    except Exception as e:
        logger.warning("Event lookup failed for booking (event %s): %s", event_id, e)
        raise LookupFailed(event_id) from e

    if event is None:
        logger.info("Rejected booking for missing event %s", event_id)
        raise DanglingReference(event_id)
    return out
