"""
Test configuration for the care-notes backend.
"""
import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["MAIL_USERNAME"] = ""
os.environ["MAIL_PASSWORD"] = ""
os.environ["MAIL_FROM"] = ""
os.environ["MAIL_SERVER"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.database import Base, get_db
from src.main import app
from src.core import notifications

# Test database URL
TEST_DATABASE_URL = "sqlite://"

# Create test database engine
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session factory
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

STRONG_PASSWORD = "Str0ng!Pass"


@pytest.fixture(scope="function")
def db():
    """
    Create a fresh database for each test.
    """
    # Create tables
    Base.metadata.create_all(bind=engine)

    # Create session
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

    # Drop tables after test
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """
    Create a test client with a test database session.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    # Override the get_db dependency
    app.dependency_overrides[get_db] = override_get_db

    # Create test client
    with TestClient(app) as client:
        yield client

    # Remove dependency override
    app.dependency_overrides = {}


@pytest.fixture
def sent_emails(monkeypatch):
    """
    Capture note notifications instead of talking to an SMTP server.
    """
    sent = []

    def fake_send(to_email, subject, body):
        sent.append({"to": to_email, "subject": subject, "body": body})
        return True

    monkeypatch.setattr(notifications, "send_note_notification", fake_send)
    return sent


@pytest.fixture
def signup_doctor(client):
    """
    Sign up a doctor through the API and return the response body.
    """
    def _signup(email="a@x.com", username="Dr A", password=STRONG_PASSWORD, specialization="cardio"):
        response = client.post("/api/auth/doctor/signup", json={
            "username": username,
            "email": email,
            "password": password,
            "specialization": specialization,
        })
        assert response.status_code == 200, response.text
        return response.json()
    return _signup


@pytest.fixture
def signup_patient(client):
    """
    Sign up a patient through the API and return the response body.
    """
    def _signup(email="p@x.com", username="P1", password=STRONG_PASSWORD):
        response = client.post("/api/auth/patient/signup", json={
            "username": username,
            "email": email,
            "password": password,
        })
        assert response.status_code == 200, response.text
        return response.json()
    return _signup


@pytest.fixture
def auth_header():
    """Build a bearer Authorization header from a token"""
    def _header(token):
        return {"Authorization": f"Bearer {token}"}
    return _header
