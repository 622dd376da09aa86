# tests/conftest.py
import os

# Must be set before eventpass.core.config is imported
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["STRIPE_SECRET_KEY"] = ""
os.environ["STRIPE_PUBLISHABLE_KEY"] = ""
os.environ["RESEND_API_KEY"] = ""

import pytest
from starlette.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from eventpass.main import app
from eventpass.core import email
from eventpass.core.limiter import limiter
from eventpass.db.base import Base
from eventpass.db.session import get_db

# --- In-memory test database ---
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

limiter.enabled = False


@pytest.fixture(scope="function")
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def sent_emails(monkeypatch):
    """Captures outgoing email instead of calling Resend."""
    outbox = []

    def fake_send_email(to_email, subject, html):
        outbox.append({"to": to_email, "subject": subject, "html": html})
        return {"success": True, "id": f"email_{len(outbox)}"}

    monkeypatch.setattr(email, "send_email", fake_send_email)
    return outbox


# --- Test Client Fixtures ---
@pytest.fixture(scope="function")
def client(db):
    """TestClient whose requests share the test session."""
    app.dependency_overrides[get_db] = lambda: db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
