"""
Shared fixtures.

Every test runs against a freshly created SQLite database in a temporary
directory; uploads go to a temporary directory too. The environment is set
before the application is imported so the engine and upload mount pick it up.
"""
import os
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

TEST_DIR = Path(tempfile.mkdtemp(prefix="landing-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{(TEST_DIR / 'test.db').as_posix()}"
os.environ["UPLOAD_DIR"] = str(TEST_DIR / "uploads")
os.environ["SEED_DEMO_GAMES"] = "false"
os.environ["SESSION_SECRET"] = "test-secret"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "test-pass"

from landing.database import Base, SessionLocal, engine  # noqa: E402
from landing.main import app  # noqa: E402
from landing.storage import DatabaseStorage  # noqa: E402

ADMIN_CREDENTIALS = {"username": "admin", "password": "test-pass"}


@pytest.fixture(autouse=True)
def setup_db():
    """Drop and recreate all tables around each test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """Anonymous client. Entering the context runs startup, which seeds the admin."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_client(client):
    resp = client.post("/api/login", json=ADMIN_CREDENTIALS)
    assert resp.status_code == 200
    return client


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def storage(db_session):
    return DatabaseStorage(db_session)


@pytest.fixture
def game_data():
    return {
        "provider": "PG SOFT",
        "name": "MAHJONG WAYS 2",
        "deposit": "20.000",
        "withdraw": "50.000",
        "bet": "200",
        "dateTime": "1/5/2026, 9:00:00 PM",
        "imageUrl": "https://placehold.co/300x300/991b1b/FFFFFF/png?text=MAHJONG",
        "iconUrl": "https://placehold.co/50x50/991b1b/FFFFFF/png?text=PG",
        "outlineColor": "#ef4444",
    }
