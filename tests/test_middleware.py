"""Tests for the session and security header middleware."""

import pytest

from pingboard.middleware.session_auth import is_protected_path


@pytest.mark.parametrize(
    "path,protected",
    [
        ("/api/pings", True),
        ("/api/pings/123", True),
        ("/api/blacklist", True),
        ("/api", True),
        ("/api/auth/login", False),
        ("/api/auth", False),
        ("/api/authority", True),
        ("/health", False),
        ("/docs", False),
        ("/apis", False),
    ],
)
def test_is_protected_path(path, protected):
    assert is_protected_path(path) is protected


def test_security_headers_present(client):
    response = client.get("/health")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_cors_headers_on_rejected_request(client):
    response = client.get("/api/pings", headers={"Origin": "https://map.example"})

    assert response.status_code == 401
    assert response.headers["access-control-allow-origin"] == "*"


def test_preflight_skips_token_check(client):
    response = client.options(
        "/api/pings",
        headers={
            "Origin": "https://map.example",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "X-Auth-Token",
        },
    )
    assert response.status_code == 200


def test_api_responses_get_strict_csp(client, user_headers):
    response = client.get("/api/pings", headers=user_headers)

    assert response.headers["Content-Security-Policy"].startswith("default-src 'none'")
    assert response.headers["Cache-Control"] == "no-store"


def test_docs_get_relaxed_csp(client):
    # Docs are served because the test settings enable debug
    response = client.get("/docs")

    assert response.status_code == 200
    assert "cdn.jsdelivr.net" in response.headers["Content-Security-Policy"]


def test_hsts_only_behind_https(client):
    assert "Strict-Transport-Security" not in client.get("/health").headers

    response = client.get("/health", headers={"X-Forwarded-Proto": "https"})
    assert response.headers["Strict-Transport-Security"].startswith("max-age=")
