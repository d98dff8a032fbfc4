"""
tests/conftest.py — Shared pytest configuration and fixtures.

Sets dummy environment variables BEFORE any app module is imported,
so that pydantic-settings doesn't fail on missing required fields.
"""

import os
import pytest

# ── Set dummy env vars before any app module is imported ─────────────────────
# This runs at collection time, before tests execute.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("EMAIL_SERVICE", "smtp")
os.environ.setdefault("SMTP_HOST", "smtp.test.local")
os.environ.setdefault("SMTP_USER", "results@insightnext.test")
os.environ.setdefault("SMTP_PASS", "test-password")
os.environ.setdefault("MAILER_DRY_RUN", "true")
os.environ.setdefault("APP_URL", "https://insightnext.test")
os.environ.setdefault("ADMIN_API_KEY", "test-admin-key")

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


# ── In-memory DB Fixture ──────────────────────────────────────────────────────

@pytest.fixture
def db():
    """
    Provide a fresh in-memory SQLite session for each test.

    StaticPool keeps a single connection so the TestClient's worker thread
    sees the same in-memory database as the test itself.
    """
    from app.db.models import Base

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine, expire_on_commit=False)
    session = Session()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()


# ── Payloads ──────────────────────────────────────────────────────────────────

@pytest.fixture
def sample_payload():
    """Questionnaire that scores 68 → Advanced Level."""
    return {
        "name": "Ada",
        "email": "ada@x.com",
        "company": "Acme",
        "role": "CTO",
        "industry": "tech",
        "ai_level": "basic",
        "data_infrastructure": "good",
        "objectives": ["a", "b"],
        "timeline": "short",
        "company_size": "small",
        "budget": "50k-100k",
    }


# ── Mailer doubles ────────────────────────────────────────────────────────────

class RecordingMailer:
    """Mailer stand-in that records sends instead of opening SMTP connections."""

    def __init__(self, delivered: bool = True, error: Exception = None):
        self.delivered = delivered
        self.error = error
        self.sent = []

    def send(self, to_address, email):
        if self.error is not None:
            raise self.error
        self.sent.append((to_address, email))
        return self.delivered


@pytest.fixture
def make_mailer():
    return RecordingMailer


@pytest.fixture
def recording_mailer():
    return RecordingMailer()


# ── API client ────────────────────────────────────────────────────────────────

@pytest.fixture
def admin_headers():
    return {"X-Admin-Key": os.environ["ADMIN_API_KEY"]}


@pytest.fixture
def client(db, recording_mailer):
    """TestClient wired to the in-memory session and the recording mailer."""
    from fastapi.testclient import TestClient

    from api.main import app
    from app.db.session import get_db
    from app.outreach.mailer import get_mailer

    def override_get_db():
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mailer] = lambda: recording_mailer
    try:
        # Not used as a context manager, so the startup DB check is skipped
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
