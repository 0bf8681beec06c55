import os

# must be set before eventhub.db builds its module-level engine
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from eventhub.db import get_db, init_db, make_engine


@pytest.fixture()
def engine():
    eng = make_engine("sqlite://")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@pytest.fixture()
def db(session_factory):
    s = session_factory()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture()
def client(session_factory):
    from eventhub.main import app

    def _get_test_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _get_test_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def event_data():
    return {
        "title": "Tech Conf 2024!! — Keynote",
        "description": "  A day of talks about the web platform.  ",
        "overview": "Talks, workshops and a closing panel.",
        "image": "/images/event1.png",
        "venue": "Moscone Center",
        "location": "San Francisco, CA",
        "date": "2024-3-5",
        "time": "9:30",
        "mode": "Hybrid",
        "audience": "Developers",
        "agenda": ["Registration", "Keynote", "Panel"],
        "organizer": "Web Guild",
        "tags": ["web", "javascript", "web"],
    }
