"""Tests for user retrieval, debug summaries and bearer authentication."""

import pytest
from fastapi.testclient import TestClient

from goalsync.main import create_app
from tests.conftest import ALICE, make_settings


class TestUserRetrieval:
    """GET /api/user/{email}."""

    def test_register_then_fetch_profile(self, client):
        registered = client.post(
            "/api/auth",
            json={
                "email": "alice@example.com",
                "password": "wonderland-42",
                "name": "Alice",
                "country": "UK",
                "isRegister": True,
            },
        )
        assert registered.status_code == 200
        assert registered.json()["token"]

        response = client.get("/api/user/alice@example.com")

        assert response.status_code == 200
        user = response.json()["user"]
        assert user == registered.json()["user"]
        assert user["name"] == "Alice"
        assert user["country"] == "UK"
        assert "password" not in user

    def test_unknown_user_is_not_found(self, client):
        response = client.get("/api/user/nobody@example.com")

        assert response.status_code == 404
        assert response.json() == {"message": "User not found"}


class TestDebugSummary:
    """GET /api/debug/{email}."""

    def test_summary_without_goal(self, client, alice):
        summary = client.get(f"/api/debug/{ALICE['email']}").json()

        assert summary["email"] == ALICE["email"]
        assert summary["hasGoal"] is False
        assert summary["goalTitle"] is None
        assert summary["allGoalsCount"] == 0
        assert summary["goal"]["savedCourses"] is None

    def test_summary_reports_list_lengths(self, client, alice):
        client.post(
            "/api/sync",
            json={
                "email": ALICE["email"],
                "goal": {
                    "title": "Guitar",
                    "savedCurriculum": [{"week": 1}, {"week": 2}, {"week": 3}],
                    "savedCourses": [{"id": "c1"}],
                    "savedFeed": [],
                },
                "allGoals": [{"title": "Guitar"}, {"title": "Piano"}],
            },
        )

        summary = client.get(f"/api/debug/{ALICE['email']}").json()

        assert summary["hasGoal"] is True
        assert summary["goalTitle"] == "Guitar"
        assert summary["goal"] == {
            "savedCurriculum": 3,
            "savedCourses": 1,
            "savedFeed": 0,
            "savedProducts": None,
            "savedVideos": None,
        }
        assert summary["allGoalsCount"] == 2
        assert "goal" in summary["fields"]
        assert "password" not in summary["fields"]

    def test_unknown_user_is_not_found(self, client):
        assert client.get("/api/debug/nobody@example.com").status_code == 404


class TestRequireAuth:
    """Bearer authentication when REQUIRE_AUTH is enabled."""

    @pytest.fixture
    def client(self):
        with TestClient(create_app(make_settings(REQUIRE_AUTH=True))) as test_client:
            yield test_client

    def _register(self, client, email):
        response = client.post(
            "/api/auth",
            json={"email": email, "password": "long-enough", "isRegister": True},
        )
        assert response.status_code == 200
        return response.json()["token"]

    def test_auth_endpoint_stays_open(self, client):
        self._register(client, "alice@example.com")

    def test_missing_token_is_unauthorized(self, client):
        self._register(client, "alice@example.com")

        response = client.get("/api/user/alice@example.com")

        assert response.status_code == 401
        assert response.json() == {"message": "Authentication required"}

    def test_invalid_token_is_unauthorized(self, client):
        self._register(client, "alice@example.com")

        response = client.post(
            "/api/sync",
            json={"email": "alice@example.com", "name": "Mallory"},
            headers={"Authorization": "Bearer not-a-token"},
        )

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid or expired token"}

    def test_token_for_other_account_is_forbidden(self, client):
        self._register(client, "alice@example.com")
        mallory_token = self._register(client, "mallory@example.com")
        headers = {"Authorization": f"Bearer {mallory_token}"}

        sync = client.post(
            "/api/sync",
            json={"email": "alice@example.com", "name": "Mallory"},
            headers=headers,
        )
        fetch = client.get("/api/user/alice@example.com", headers=headers)

        assert sync.status_code == 403
        assert sync.json() == {"message": "Not authorized to sync this account"}
        assert fetch.status_code == 403

    def test_own_token_grants_access(self, client):
        token = self._register(client, "alice@example.com")
        headers = {"Authorization": f"Bearer {token}"}

        sync = client.post(
            "/api/sync",
            json={"email": "alice@example.com", "name": "Alice"},
            headers=headers,
        )
        fetch = client.get("/api/user/alice@example.com", headers=headers)
        debug = client.get("/api/debug/alice@example.com", headers=headers)

        assert sync.status_code == 200
        assert fetch.json()["user"]["name"] == "Alice"
        assert debug.status_code == 200
