"""Pytest configuration and fixtures."""

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from portfolio_builder.core.config import Settings
from portfolio_builder.main import create_app


@pytest.fixture
def test_settings() -> Settings:
    """Settings for an isolated in-memory database."""
    return Settings(
        DATABASE_URL="sqlite://",
        SECRET_KEY="test-secret-key",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def app(test_settings):
    """Create a fresh application (and database) per test."""
    return create_app(test_settings)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session(app) -> Generator[Session, None, None]:
    """Session bound to the same database the client talks to."""
    session = app.state.session_factory()
    yield session
    session.close()


def register(client, username, email=None, name=None, password="secret123"):
    """Register a user and return its id, token and auth headers."""
    response = client.post(
        "/users/register",
        json={
            "name": name or username.title(),
            "username": username,
            "email": email or f"{username}@gmail.com",
            "password": password,
        },
    )
    assert response.status_code == 201, response.text
    data = response.json()
    return {
        "id": data["id"],
        "token": data["token"],
        "headers": {"Authorization": f"Bearer {data['token']}"},
    }


@pytest.fixture
def alice(client):
    return register(client, "alice")


@pytest.fixture
def bob(client):
    return register(client, "bob")


@pytest.fixture
def sample_portfolio_data():
    """Sample portfolio payload for testing."""
    return {
        "template": "modern",
        "isPublic": False,
        "hero": {"title": "Hi, I'm Alice", "subtitle": "Backend Engineer"},
        "about": {"bio": "I build APIs.", "skills": ["Python", "SQL"]},
        "experience": [
            {
                "title": "Engineer",
                "company": "Acme",
                "startDate": "2020-01-01",
                "endDate": "2022-06-30",
                "technologies": ["Python"],
            }
        ],
        "contact": {"email": "alice@gmail.com", "phone": "5551234567"},
    }


@pytest.fixture
def make_user(client):
    """Factory for additional registered users."""

    def _make(username, **kwargs):
        return register(client, username, **kwargs)

    return _make
