# backend/eventhub/normalize.py
"""
Event record normalization.

``normalize_event`` is the gate every event passes through before it is
written: it trims free text, checks required fields and collections,
derives the slug and rewrites date/time into their stored forms.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from .errors import (
    EmptyCollection,
    InvalidDate,
    InvalidMode,
    InvalidTime,
    MissingRequiredField,
)
from .slugs import generate_slug
from .validators import match_time, parse_date

logger = logging.getLogger(__name__)

MODES = ("online", "offline", "hybrid")

TEXT_FIELDS = (
    "title",
    "description",
    "overview",
    "image",
    "venue",
    "location",
    "audience",
    "organizer",
)
LIST_FIELDS = ("agenda", "tags")
EVENT_FIELDS = TEXT_FIELDS + ("date", "time", "mode") + LIST_FIELDS


def normalize_date(value: Any) -> str:
    """Return ``value`` as ``YYYY-MM-DD`` or raise InvalidDate."""
    parsed = parse_date(value)
    if parsed is None:
        raise InvalidDate(value)
    return parsed.isoformat()


def normalize_time(value: Any) -> str:
    """Return ``value`` as zero-padded ``HH:MM`` or raise InvalidTime."""
    m = match_time(value.strip()) if isinstance(value, str) else None
    if not m:
        raise InvalidTime(value)
    return f"{int(m.group('h')):02d}:{m.group('m')}"


def normalize_mode(value: Any) -> str:
    mode = str(value).strip().lower()
    if mode not in MODES:
        raise InvalidMode(value, MODES)
    return mode


def _clean_list(field: str, value: Any, unique: bool = False) -> List[str]:
    if value is None:
        raise MissingRequiredField(field)
    if isinstance(value, str) or not isinstance(value, Iterable):
        raise EmptyCollection(f"{field} must be a list of strings", field=field)

    items: List[str] = []
    for item in value:
        if item is None:
            continue
        text = str(item).strip()
        if not text or (unique and text in items):
            continue
        items.append(text)

    if not items:
        msg = "Agenda must contain at least one item" if field == "agenda" else "At least one tag is required"
        raise EmptyCollection(msg, field=field)
    return items


def _required_text(record: Dict[str, Any], field: str) -> str:
    value = record.get(field)
    if value is None:
        raise MissingRequiredField(field)
    text = str(value).strip()
    if not text:
        raise MissingRequiredField(field)
    return text


def normalize_event(
    record: Dict[str, Any],
    changed_fields: Optional[Iterable[str]] = None,
) -> Dict[str, Any]:
    """
    Validate and normalize an event record.

    ``changed_fields`` names the fields that are new or modified; ``None``
    means a fresh record, where every field counts as changed. The slug is
    only re-derived when the title changed and date/time are only
    re-parsed when they changed, so already-stored values pass through.

    Returns a new dict; raises a ValidationError subclass on the first
    problem found.
    """
    changed = set(EVENT_FIELDS) if changed_fields is None else set(changed_fields)
    out = dict(record)

    for field in TEXT_FIELDS:
        out[field] = _required_text(record, field)
    for field in ("date", "time", "mode"):
        if record.get(field) is None or (isinstance(record[field], str) and not record[field].strip()):
            raise MissingRequiredField(field)

    out["agenda"] = _clean_list("agenda", record.get("agenda"))
    out["tags"] = _clean_list("tags", record.get("tags"), unique=True)
    out["mode"] = normalize_mode(record["mode"])

    if "title" in changed or not out.get("slug"):
        slug = generate_slug(out["title"])
        if not slug:
            raise MissingRequiredField("slug", "Title must contain at least one letter or digit")
        out["slug"] = slug

    if "date" in changed:
        out["date"] = normalize_date(record["date"])
    if "time" in changed:
        out["time"] = normalize_time(record["time"])

    logger.debug("Normalized event %r (changed: %s)", out["slug"], sorted(changed))
    return out
