# backend/eventhub/schemas.py
from __future__ import annotations
from typing import Optional
from datetime import datetime
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class EventIn(BaseModel):
    """Request schema for event creation. Values are normalized server-side."""
    title: str
    description: str
    overview: str
    image: str
    venue: str
    location: str
    date: str   # anything dateutil can read; stored as YYYY-MM-DD
    time: str   # H:MM or HH:MM, 24-hour
    mode: str
    audience: str
    agenda: list[str]
    organizer: str
    tags: list[str]


class EventPatch(BaseModel):
    """Partial update; only the fields sent are treated as changed."""
    title: Optional[str] = None
    description: Optional[str] = None
    overview: Optional[str] = None
    image: Optional[str] = None
    venue: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    mode: Optional[str] = None
    audience: Optional[str] = None
    agenda: Optional[list[str]] = None
    organizer: Optional[str] = None
    tags: Optional[list[str]] = None


class EventOut(BaseModel):
    """Response schema for an event row."""
    id: int
    title: str
    slug: str
    description: str
    overview: str
    image: str
    venue: str
    location: str
    date: str
    time: str
    mode: str
    audience: str
    agenda: list[str]
    organizer: str
    tags: list[str]
    createdAt: datetime = Field(validation_alias=AliasChoices("created_at", "createdAt"))
    updatedAt: datetime = Field(validation_alias=AliasChoices("updated_at", "updatedAt"))
    bookingCount: int = 0
    model_config = ConfigDict(from_attributes=True)  # allow from ORM


class BookingIn(BaseModel):
    eventId: int
    email: str


class BookingPatch(BaseModel):
    eventId: Optional[int] = None
    email: Optional[str] = None


class BookingOut(BaseModel):
    id: int
    eventId: int = Field(validation_alias=AliasChoices("event_id", "eventId"))
    email: str
    createdAt: datetime = Field(validation_alias=AliasChoices("created_at", "createdAt"))
    updatedAt: datetime = Field(validation_alias=AliasChoices("updated_at", "updatedAt"))
    model_config = ConfigDict(from_attributes=True)
