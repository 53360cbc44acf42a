"""Tests for the ping endpoints."""

import time

import pytest

from tests.conftest import TEST_USER_PASSWORD

LOCATION = {"x": 100, "y": 64, "z": -250, "type": "LOCATION", "label": "base"}
COORD = {"x": 1, "y": 2, "z": 3, "type": "COORD", "label": "portal", "duration": "1h"}


class TestAuthRequired:
    @pytest.mark.parametrize(
        "method,path",
        [("GET", "/api/pings"), ("POST", "/api/pings"), ("DELETE", "/api/pings/x")],
    )
    def test_missing_token(self, client, method, path):
        response = client.request(method, path)

        assert response.status_code == 401
        assert response.json()["error"] == "MissingToken"

    def test_invalid_token(self, client):
        response = client.get("/api/pings", headers={"X-Auth-Token": "not-a-token"})

        assert response.status_code == 401
        assert response.json()["error"] == "InvalidToken"

    def test_token_rejected_before_body_validation(self, client):
        response = client.post("/api/pings", json={"x": "nope"})
        assert response.status_code == 401

    def test_relogin_invalidates_old_token(self, client, login):
        old = login("alice")
        login("alice")

        response = client.get("/api/pings", headers=old)
        assert response.status_code == 401


class TestPostPing:
    def test_location_ping(self, client, user_headers):
        response = client.post("/api/pings", json=LOCATION, headers=user_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["author"] == "alice"
        assert data["type"] == "LOCATION"
        assert data["label"] == "base"
        assert data["dimension"] is None
        assert set(data) == {
            "id", "x", "y", "z", "label", "dimension", "type", "author", "expiresAt",
        }

    def test_second_location_replaces_first(self, client, user_headers):
        client.post("/api/pings", json=LOCATION, headers=user_headers)
        second = client.post(
            "/api/pings", json={**LOCATION, "label": "moved"}, headers=user_headers
        ).json()

        pings = client.get("/api/pings", headers=user_headers).json()
        assert [p["id"] for p in pings] == [second["id"]]

    def test_admin_coord_expiry(self, client, admin_headers):
        before = int(time.time() * 1000)
        response = client.post("/api/pings", json=COORD, headers=admin_headers)
        after = int(time.time() * 1000)

        assert response.status_code == 200
        expires_at = response.json()["expiresAt"]
        assert before + 3_600_000 <= expires_at <= after + 3_600_000

    def test_user_coord_forbidden(self, client, user_headers):
        response = client.post("/api/pings", json=COORD, headers=user_headers)

        assert response.status_code == 403
        assert response.json()["error"] == "Forbidden"
        assert client.get("/api/pings", headers=user_headers).json() == []

    def test_invalid_type(self, client, admin_headers):
        response = client.post(
            "/api/pings", json={**LOCATION, "type": "WAYPOINT"}, headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["error"] == "InvalidPingType"

    def test_malformed_body(self, client, user_headers):
        response = client.post(
            "/api/pings", json={"type": "LOCATION", "x": "east"}, headers=user_headers
        )
        assert response.status_code == 422


class TestDeletePing:
    def test_not_found(self, client, admin_headers):
        response = client.delete("/api/pings/missing", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["error"] == "NotFound"

    def test_user_cannot_delete_others(self, client, login, user_headers):
        bob = login("bob")
        ping = client.post("/api/pings", json=LOCATION, headers=bob).json()

        response = client.delete(f"/api/pings/{ping['id']}", headers=user_headers)

        assert response.status_code == 403
        assert response.json()["error"] == "OwnershipViolation"

    def test_author_deletes_own(self, client, user_headers):
        ping = client.post("/api/pings", json=LOCATION, headers=user_headers).json()

        response = client.delete(f"/api/pings/{ping['id']}", headers=user_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Ping deleted by author"}

    def test_admin_deletes_any(self, client, login, admin_headers):
        bob = login("bob", TEST_USER_PASSWORD)
        ping = client.post("/api/pings", json=LOCATION, headers=bob).json()

        response = client.delete(f"/api/pings/{ping['id']}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Ping deleted by admin"
        assert client.get("/api/pings", headers=admin_headers).json() == []


class TestTypeRulesBeforeShape:
    """A body with only a type is judged by the type and role rules."""

    def test_unknown_type_without_coordinates(self, client, user_headers):
        response = client.post("/api/pings", json={"type": "WAYPOINT"}, headers=user_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "InvalidPingType"

    def test_user_coord_without_coordinates(self, client, user_headers):
        response = client.post("/api/pings", json={"type": "COORD"}, headers=user_headers)

        assert response.status_code == 403
        assert response.json()["error"] == "Forbidden"

    def test_missing_coordinates_are_stored_as_null(self, client, user_headers):
        response = client.post("/api/pings", json={"type": "LOCATION"}, headers=user_headers)

        assert response.status_code == 200
        data = response.json()
        assert (data["x"], data["y"], data["z"]) == (None, None, None)

    @pytest.mark.parametrize("value", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_coordinates_rejected(self, client, user_headers, value):
        response = client.post(
            "/api/pings",
            content=f'{{"type": "LOCATION", "x": {value}, "y": 64, "z": 0}}',
            headers={**user_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 422
        assert client.get("/api/pings", headers=user_headers).json() == []
