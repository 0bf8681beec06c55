# backend/eventhub/db.py
"""Database engine, session factory and declarative base."""

from __future__ import annotations

import logging
from typing import Generator
from os import getenv
from pathlib import Path

from sqlalchemy import create_engine, Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


def _normalize_db_url(url: str) -> str:
    """Normalize common Postgres URLs to the psycopg2 driver form."""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg2://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg2://", 1)
    return url


def make_engine(url: str) -> Engine:
    """
    Build an engine for ``url``.

    SQLite connections are shared across FastAPI's worker threads; an
    in-memory SQLite URL additionally gets a StaticPool so every session
    sees the same database.
    """
    url = _normalize_db_url(url)
    if not url.startswith("sqlite"):
        return create_engine(url, echo=False, future=True, pool_pre_ping=True)

    kwargs = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return create_engine(url, echo=False, future=True, **kwargs)


RAW_URL = getenv("DATABASE_URL")
DB_URL = RAW_URL or f"sqlite:///{(Path(__file__).resolve().parents[1] / 'eventhub.db')}"

engine = make_engine(DB_URL)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""
    pass


def init_db(bind: Engine | None = None) -> None:
    """Create any missing tables for the registered models."""
    from . import models  # noqa: F401  (registers tables on Base.metadata)

    bind = bind or engine
    Base.metadata.create_all(bind)
    logger.info("Database schema ready (%s)", bind.url.render_as_string(hide_password=True))


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a session per request
    and guarantees it is closed afterwards.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
