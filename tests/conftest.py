"""Pytest fixtures: file-backed SQLite database, recreated for every test."""
import uuid
from datetime import date, datetime, timedelta, timezone

import jwt
import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from sparkbytes.config import settings
from sparkbytes.database import Base, get_db
from sparkbytes.main import app

# Import all models so they register with Base.metadata
from sparkbytes.models.event import Event                          # noqa: F401
from sparkbytes.models.guest import Guest                          # noqa: F401
from sparkbytes.models.profile import Profile                      # noqa: F401
from sparkbytes.models.favorite import Favorite                    # noqa: F401
from sparkbytes.models.comment import Comment                      # noqa: F401
from sparkbytes.models.alert import Alert                          # noqa: F401
from sparkbytes.models.verification_code import VerificationCode   # noqa: F401

SQLITE_URL = "sqlite:///./test.db"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session for direct assertions against the store."""
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
# Helpers: identities are minted locally, the way the auth provider would
# ---------------------------------------------------------------------------
def make_token(user_id: str, email: str | None = None, name: str | None = None,
               expires_in: timedelta = timedelta(hours=1), secret: str | None = None) -> str:
    """Sign a provider-style access token for ``user_id``."""
    payload = {
        "sub": user_id,
        "email": email,
        "user_metadata": {"name": name} if name else {},
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(payload, secret or settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def create_test_user(name: str = "Test User") -> dict:
    """Return a user dict with ready-to-use auth headers."""
    user_id = str(uuid.uuid4())
    email = f"{name.lower().replace(' ', '.')}@bu.edu"
    token = make_token(user_id, email=email, name=name)
    return {
        "user_id": user_id,
        "email": email,
        "name": name,
        "headers": {"Authorization": f"Bearer {token}"},
    }


def create_test_event(client: TestClient, organizer: dict, title: str = "Free Pizza",
                      capacity: int = 0, is_public: bool = True, days_ahead: int = 1,
                      **extra) -> dict:
    """Helper: POST /api/events and return the event JSON."""
    payload = {
        "title": title,
        "description": "Leftover pizza from the hackathon",
        "date": (date.today() + timedelta(days=days_ahead)).isoformat(),
        "start_time": "12:00:00",
        "location": "CDS Building",
        "food": "Pizza",
        "capacity": capacity,
        "is_public": is_public,
    }
    payload.update(extra)
    resp = client.post("/api/events/", json=payload, headers=organizer["headers"])
    assert resp.status_code == 201, resp.text
    return resp.json()["event"]


def rsvp(client: TestClient, event_id: str, user: dict):
    """Helper: authenticated RSVP, returns the raw response."""
    return client.post(f"/api/guests/rsvp/{event_id}", headers=user["headers"])


def rsvp_as_guest(client: TestClient, event_id: str, name: str = "Visitor", email: str = "visitor@example.com"):
    """Helper: anonymous RSVP, returns the raw response."""
    return client.post(f"/api/guests/rsvp-guest/{event_id}", json={"name": name, "email": email})
