"""
Shared fixtures for the employee API tests.
"""
import os

# Set test environment before importing app modules
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_ENV"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from employee_api.core.config import Settings
from employee_api.core.database import init_db, make_engine, make_session_factory
from employee_api.core.security import JWTTokenSigner
from employee_api.main import create_app

TEST_SECRET = os.environ["JWT_SECRET_KEY"]
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"


@pytest.fixture
def settings():
    return Settings(database_url="sqlite://", log_level="WARNING")


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """TestClient with the lifespan run, so tables and the admin exist."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session_factory():
    engine = make_engine("sqlite://")
    factory = make_session_factory(engine)
    init_db(engine, factory, ADMIN_USERNAME, ADMIN_PASSWORD)
    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def signer():
    return JWTTokenSigner(TEST_SECRET)


@pytest.fixture
def token(client):
    resp = client.post("/api/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return resp.json()["token"]


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def ada():
    return {
        "name": "Ada",
        "email": "ada@x.com",
        "position": "Engineer",
        "department": "R&D",
        "salary": 50000,
    }


@pytest.fixture
def grace():
    return {
        "name": "Grace",
        "email": "grace@navy.mil",
        "position": "Rear Admiral",
        "department": "Computing",
        "salary": 72000.5,
    }
