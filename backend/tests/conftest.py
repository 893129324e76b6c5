"""Pytest fixtures: file-backed SQLite database for fast, isolated tests."""
import os

# Must be set before the app modules read settings at import time
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["ADMIN_SECRET"] = "test-admin-secret"

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from app.database import Base, get_db
from app.main import app

# Import all models so they register with Base.metadata
from app.models.event import Event  # noqa: F401

SQLITE_URL = "sqlite:///./test.db"
ADMIN_HEADERS = {"x-admin-secret": "test-admin-secret"}


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    # Enable WAL mode for better concurrency
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session bound to the test engine."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_engine):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers: drive the moderation flow through the API
# ---------------------------------------------------------------------------
def submit_event(client: TestClient, name: str = "City Marathon", date: str = "2025-10-12", **fields) -> str:
    """Helper: POST /api/events and return the new id."""
    resp = client.post("/api/events", json={"name": name, "date": date, **fields})
    assert resp.status_code == 200, resp.text
    return resp.json()["id"]


def approve(client: TestClient, event_id: str):
    """Helper: PUT /api/events/{id}/approve as admin."""
    return client.put(f"/api/events/{event_id}/approve", headers=ADMIN_HEADERS)


def reject(client: TestClient, event_id: str):
    """Helper: DELETE /api/events/{id}/reject as admin."""
    return client.delete(f"/api/events/{event_id}/reject", headers=ADMIN_HEADERS)


def create_live_event(client: TestClient, name: str = "City Marathon", date: str = "2025-10-12", **fields) -> str:
    """Helper: submit and approve an event, returning its id."""
    event_id = submit_event(client, name=name, date=date, **fields)
    assert approve(client, event_id).status_code == 200
    return event_id


def pending(client: TestClient) -> list[dict]:
    resp = client.get("/api/events/pending", headers=ADMIN_HEADERS)
    assert resp.status_code == 200, resp.text
    return resp.json()


def approved(client: TestClient) -> list[dict]:
    resp = client.get("/api/events")
    assert resp.status_code == 200, resp.text
    return resp.json()
