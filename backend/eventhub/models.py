from __future__ import annotations
from typing import Any, Dict
from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)


class Event(TimestampMixin, Base):
    __tablename__ = "events"

    id:          Mapped[int]  = mapped_column(Integer, primary_key=True, index=True)
    title:       Mapped[str]  = mapped_column(String(200), nullable=False)
    slug:        Mapped[str]  = mapped_column(String(200), nullable=False, unique=True, index=True)
    description: Mapped[str]  = mapped_column(String(2000), nullable=False)
    overview:    Mapped[str]  = mapped_column(String(2000), nullable=False)
    image:       Mapped[str]  = mapped_column(String(500), nullable=False)
    venue:       Mapped[str]  = mapped_column(String(255), nullable=False)
    location:    Mapped[str]  = mapped_column(String(255), nullable=False)
    date:        Mapped[str]  = mapped_column(String(10), nullable=False)   # YYYY-MM-DD
    time:        Mapped[str]  = mapped_column(String(5), nullable=False)    # HH:MM
    mode:        Mapped[str]  = mapped_column(String(16), nullable=False)
    audience:    Mapped[str]  = mapped_column(String(255), nullable=False)
    agenda:      Mapped[list] = mapped_column(JSON, nullable=False)
    organizer:   Mapped[str]  = mapped_column(String(255), nullable=False)
    tags:        Mapped[list] = mapped_column(JSON, nullable=False)

    def to_record(self) -> Dict[str, Any]:
        """Field values as the normalizer expects them."""
        return {
            "title": self.title,
            "slug": self.slug,
            "description": self.description,
            "overview": self.overview,
            "image": self.image,
            "venue": self.venue,
            "location": self.location,
            "date": self.date,
            "time": self.time,
            "mode": self.mode,
            "audience": self.audience,
            "agenda": list(self.agenda or []),
            "organizer": self.organizer,
            "tags": list(self.tags or []),
        }


class Booking(TimestampMixin, Base):
    __tablename__ = "bookings"

    id:       Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    # plain lookup key; deleting an event leaves its bookings in place
    event_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    email:    Mapped[str] = mapped_column(String(320), nullable=False)
