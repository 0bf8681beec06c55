# backend/eventhub/crud.py
"""
Persistence helpers for events and bookings.

Every write goes through the normalizer / booking validator first. The
slug uniqueness check is left to the database's unique index; a rejected
commit is rolled back and reported as DuplicateSlug.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .bookings import validate_booking
from .errors import DuplicateSlug
from .models import Booking, Event
from .normalize import EVENT_FIELDS, normalize_event

logger = logging.getLogger(__name__)


# ───────────────────────── Events ───────────────────────────────────
def get_event(db: Session, event_id: int) -> Optional[Event]:
    return db.get(Event, event_id)


def get_event_by_slug(db: Session, slug: str) -> Optional[Event]:
    return db.execute(select(Event).where(Event.slug == slug)).scalars().first()


def list_events(db: Session, tag: Optional[str] = None, mode: Optional[str] = None) -> List[Event]:
    q = select(Event).order_by(Event.created_at.desc(), Event.id.desc())
    if mode:
        q = q.where(Event.mode == mode.strip().lower())
    rows = db.execute(q).scalars().all()
    if tag:
        # tags live in a JSON column; filter in Python to stay portable across SQLite/Postgres
        wanted = tag.strip().lower()
        rows = [e for e in rows if any(t.lower() == wanted for t in e.tags or [])]
    return list(rows)


def list_similar_events(db: Session, event: Event, limit: int = 3) -> List[Event]:
    """Other events sharing at least one tag with ``event``, newest first."""
    tags = {t.lower() for t in event.tags or []}
    q = select(Event).where(Event.id != event.id).order_by(Event.created_at.desc(), Event.id.desc())
    out = []
    for other in db.execute(q).scalars():
        if tags & {t.lower() for t in other.tags or []}:
            out.append(other)
            if len(out) >= limit:
                break
    return out


def _commit_event(db: Session, ev: Event) -> Event:
    slug = ev.slug  # rollback expires the row, keep the value we tried to write
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info("Slug %r already taken", slug)
        raise DuplicateSlug(slug) from e
    db.refresh(ev)
    return ev


def create_event(db: Session, data: Dict[str, Any]) -> Event:
    record = normalize_event(data)
    ev = Event(**{k: record[k] for k in EVENT_FIELDS}, slug=record["slug"])
    db.add(ev)
    ev = _commit_event(db, ev)
    logger.info("Created event %s (%s)", ev.id, ev.slug)
    return ev


def update_event(db: Session, ev: Event, changes: Dict[str, Any]) -> Event:
    """
    Apply ``changes`` to ``ev``.

    Only fields whose value actually differs from the stored row count as
    changed, so resending the current title keeps the slug and resending
    the stored date skips re-parsing it.
    """
    current = ev.to_record()
    changed = {k for k, v in changes.items() if k in EVENT_FIELDS and current.get(k) != v}
    if not changed:
        return ev

    merged = {**current, **{k: changes[k] for k in changed}}
    record = normalize_event(merged, changed)
    for key in (*EVENT_FIELDS, "slug"):
        if getattr(ev, key) != record[key]:
            setattr(ev, key, record[key])
    ev = _commit_event(db, ev)
    logger.info("Updated event %s fields=%s", ev.id, sorted(changed))
    return ev


def delete_event(db: Session, ev: Event) -> None:
    # bookings are left in place; see DanglingReference on booking writes
    db.delete(ev)
    db.commit()
    logger.info("Deleted event %s (%s)", ev.id, ev.slug)


# ───────────────────────── Bookings ─────────────────────────────────
# ids a BIGINT/INTEGER primary key can hold; anything else cannot name an event
_MIN_ID, _MAX_ID = -(2 ** 63), 2 ** 63 - 1


def _event_lookup(db: Session):
    def lookup(event_id: Any) -> Optional[Event]:
        if isinstance(event_id, bool) or not isinstance(event_id, int):
            return None
        if not _MIN_ID <= event_id <= _MAX_ID:
            return None
        return db.get(Event, event_id)
    return lookup


def get_booking(db: Session, booking_id: int) -> Optional[Booking]:
    return db.get(Booking, booking_id)


def list_bookings(db: Session, event_id: int) -> List[Booking]:
    q = select(Booking).where(Booking.event_id == event_id).order_by(Booking.created_at.asc(), Booking.id.asc())
    return list(db.execute(q).scalars().all())


def count_bookings(db: Session, event_id: int) -> int:
    q = select(func.count()).select_from(Booking).where(Booking.event_id == event_id)
    return int(db.execute(q).scalar_one())


def count_bookings_by_event(db: Session, event_ids: List[int]) -> Dict[int, int]:
    """Booking counts for many events in one grouped query; absent ids count 0."""
    if not event_ids:
        return {}
    q = (
        select(Booking.event_id, func.count())
        .where(Booking.event_id.in_(event_ids))
        .group_by(Booking.event_id)
    )
    counts = {event_id: int(n) for event_id, n in db.execute(q).all()}
    return {event_id: counts.get(event_id, 0) for event_id in event_ids}


def create_booking(db: Session, data: Dict[str, Any]) -> Booking:
    record = validate_booking(data, _event_lookup(db))
    bk = Booking(event_id=int(record["eventId"]), email=record["email"])
    db.add(bk)
    db.commit()
    db.refresh(bk)
    logger.info("Created booking %s for event %s", bk.id, bk.event_id)
    return bk


def update_booking(db: Session, bk: Booking, changes: Dict[str, Any]) -> Booking:
    current = {"eventId": bk.event_id, "email": bk.email}
    changed = {k for k, v in changes.items() if k in current and v is not None and current[k] != v}
    if not changed:
        return bk

    merged = {**current, **{k: changes[k] for k in changed}}
    record = validate_booking(merged, _event_lookup(db), changed)
    bk.event_id = int(record["eventId"])
    bk.email = record["email"]
    db.commit()
    db.refresh(bk)
    logger.info("Updated booking %s fields=%s", bk.id, sorted(changed))
    return bk


def delete_booking(db: Session, bk: Booking) -> None:
    db.delete(bk)
    db.commit()
