"""
Shared fixtures.

Every test gets a fresh in-memory SQLite database. The API client and
the service-level tests share the same session factory, so rows written
through one are visible to the other.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_FILE"] = ""
os.environ["SEED_DEMO_DATA"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from budgetapp.database import Base, get_db
from budgetapp.main import app
from budgetapp.users import service as user_service


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def alice(db):
    """A registered user, as returned by register()."""
    return user_service.register(db, "alice", "alice@example.com", "alice-password")


@pytest.fixture
def bob(db):
    return user_service.register(db, "bob", "bob@example.com", "bob-password")


@pytest.fixture
def make_user(client):
    """Register a user through the API and return its bearer headers."""
    def _make_user(username, password="secret-password"):
        response = client.post(
            "/auth/register",
            json={
                "username": username,
                "email": f"{username}@example.com",
                "password": password,
            },
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _make_user


@pytest.fixture
def alice_headers(make_user):
    return make_user("alice")


@pytest.fixture
def bob_headers(make_user):
    return make_user("bob")
