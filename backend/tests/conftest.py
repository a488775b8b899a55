"""Shared fixtures: a fresh app on an in-memory SQLite store per test."""

import pytest
from fastapi.testclient import TestClient

from goalsync.config import Settings
from goalsync.main import create_app

ALICE = {
    "email": "alice@example.com",
    "password": "wonderland-42",
    "name": "Alice",
    "country": "UK",
}


def make_settings(**overrides) -> Settings:
    values = {
        "ENVIRONMENT": "test",
        "DATABASE_URL": "sqlite+aiosqlite://",
        "SECRET_KEY": "test-secret-key",
        "CORS_ORIGINS": "http://localhost:3000,http://localhost:5173",
        "FRONTEND_URL": "https://app.example.com/",
        "REQUIRE_AUTH": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
    """Test settings backed by in-memory SQLite."""
    return make_settings()


@pytest.fixture
def client(settings):
    """Client with the app lifespan (store open/close) running."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """Register a user, defaulting to Alice."""

    def _register(**fields):
        payload = {**ALICE, **fields, "isRegister": True}
        return client.post("/api/auth", json=payload)

    return _register


@pytest.fixture
def alice(register):
    """Alice registered; returns the auth response body."""
    response = register()
    assert response.status_code == 200
    return response.json()
