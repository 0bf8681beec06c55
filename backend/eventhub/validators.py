# backend/eventhub/validators.py
"""Field-level checks shared by the event normalizer and booking validator."""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Optional, Union

from dateutil import parser as dtparse

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
TIME_RE = re.compile(r"(?P<h>[0-1]?[0-9]|2[0-3]):(?P<m>[0-5][0-9])")

# Two unrelated defaults: a part dateutil had to fill in shows up as a mismatch.
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


def is_valid_email(value: str) -> bool:
    return EMAIL_RE.fullmatch(value) is not None


def match_time(value: str) -> Optional[re.Match]:
    """Match ``H:MM`` / ``HH:MM`` on a 24-hour clock, or return None."""
    return TIME_RE.fullmatch(value)


def _utc_date(dt: datetime) -> date:
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.date()


def parse_date(value: Union[str, date, datetime]) -> Optional[date]:
    """
    Parse a calendar date with dateutil's general parser.

    The input must name a full date (year, month and day); time-only or
    partial strings such as ``"10:30"`` or ``"5"`` are rejected instead of
    being completed from today's date. Timezone-aware values are moved to
    UTC before the date is taken.

    Returns None when the value cannot be read as a date.
    """
    if isinstance(value, datetime):
        return _utc_date(value)
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        a = dtparse.parse(text, default=_DEFAULT_A)
        b = dtparse.parse(text, default=_DEFAULT_B)
    except (ValueError, OverflowError):
        return None
    if a.date() != b.date():
        return None
    return _utc_date(a)
