"""Tests for the login endpoint."""

from tests.conftest import TEST_ADMIN_PASSWORD, TEST_USER_PASSWORD


class TestLogin:
    def test_user_login(self, client):
        response = client.post(
            "/api/auth/login",
            json={"username": "alice", "password": TEST_USER_PASSWORD},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["role"] == "USER"
        assert data["token"]

    def test_admin_login(self, client):
        response = client.post(
            "/api/auth/login",
            json={"username": "boss", "password": TEST_ADMIN_PASSWORD},
        )

        assert response.status_code == 200
        assert response.json()["role"] == "ADMIN"

    def test_wrong_password(self, client):
        response = client.post(
            "/api/auth/login",
            json={"username": "alice", "password": "guess"},
        )

        assert response.status_code == 401
        assert response.json()["error"] == "InvalidCredentials"

    def test_missing_password(self, client):
        response = client.post("/api/auth/login", json={"username": "alice"})

        assert response.status_code == 400
        assert response.json() == {
            "error": "MissingCredentials",
            "detail": "Missing credentials",
        }

    def test_missing_body(self, client):
        response = client.post("/api/auth/login")
        assert response.status_code == 400

    def test_blacklisted_login(self, client, admin_headers):
        client.post("/api/blacklist", json={"username": "mallory"}, headers=admin_headers)

        response = client.post(
            "/api/auth/login",
            json={"username": "mallory", "password": TEST_USER_PASSWORD},
        )

        assert response.status_code == 403
        assert response.json()["error"] == "Forbidden"

    def test_login_does_not_need_token(self, client):
        # Even a bogus token header is ignored on the auth routes
        response = client.post(
            "/api/auth/login",
            json={"username": "alice", "password": TEST_USER_PASSWORD},
            headers={"X-Auth-Token": "bogus"},
        )
        assert response.status_code == 200


class TestLoginRateLimit:
    def test_rate_limit_exceeded(self, settings_factory):
        from fastapi.testclient import TestClient

        from pingboard.main import create_app

        app = create_app(settings_factory(login_rate_limit="2/minute"))
        with TestClient(app) as client:
            body = {"username": "alice", "password": "guess"}
            assert client.post("/api/auth/login", json=body).status_code == 401
            assert client.post("/api/auth/login", json=body).status_code == 401

            response = client.post("/api/auth/login", json=body)

        assert response.status_code == 429
        assert response.json()["error"] == "RateLimited"
        assert response.headers["Retry-After"] == "60"

    def test_limit_is_per_app(self, settings_factory):
        from fastapi.testclient import TestClient

        from pingboard.main import create_app

        strict = create_app(settings_factory(login_rate_limit="2/minute"))
        # Built last, must not change the strict app's limit
        lenient = create_app(settings_factory(login_rate_limit="1000/minute"))
        body = {"username": "alice", "password": "guess"}

        with TestClient(strict) as client:
            codes = [client.post("/api/auth/login", json=body).status_code for _ in range(3)]
        assert codes == [401, 401, 429]

        with TestClient(lenient) as client:
            codes = [client.post("/api/auth/login", json=body).status_code for _ in range(5)]
        assert codes == [401] * 5
