"""Tests for health endpoints and error rendering."""

import asyncio

from fastapi.testclient import TestClient

from goalsync.database import Database
from goalsync.main import create_app
from tests.conftest import make_settings


class TestHealth:
    """Liveness and store connectivity."""

    def test_root_reports_status(self, client):
        body = client.get("/").json()

        assert body["status"] == "ok"
        assert body["database"] == "connected"
        assert body["message"]
        assert body["timestamp"]

    def test_api_health_reports_database(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["database"] == "connected"

    def test_unconnected_database_reports_disconnected(self):
        database = Database("sqlite+aiosqlite://")

        assert database.is_connected is False
        assert asyncio.run(database.ping()) is False

    def test_database_lifecycle(self):
        async def lifecycle():
            database = Database("sqlite+aiosqlite://", create_tables=True)
            await database.connect()
            connected = await database.ping()
            await database.disconnect()
            return connected, database.is_connected

        assert asyncio.run(lifecycle()) == (True, False)


class TestErrorResponses:
    """Every error carries a JSON message."""

    def test_unknown_route_is_json_not_found(self, client):
        response = client.get("/api/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"message": "Not found", "path": "/api/does-not-exist"}

    def test_uncaught_error_becomes_internal_error(self):
        app = create_app(make_settings())

        @app.get("/boom")
        async def boom():
            raise RuntimeError("kaboom")

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/boom")

        assert response.status_code == 500
        assert response.json()["message"] == "kaboom"
        assert response.json()["type"] == "RuntimeError"

    def test_production_hides_exception_type(self):
        app = create_app(make_settings(ENVIRONMENT="production"))

        @app.get("/boom")
        async def boom():
            raise RuntimeError("kaboom")

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {"message": "kaboom"}
