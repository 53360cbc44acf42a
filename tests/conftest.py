"""Pytest configuration and fixtures for Pingboard tests.

Service-level tests drive PingEngine directly with a controllable clock.
API tests run the full FastAPI app through TestClient, which also runs the
lifespan (blacklist load, sweeper start/stop).
"""

import os
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing app modules
os.environ["PASSWORD_USER"] = "test-user-secret-123"
os.environ["PASSWORD_ADMIN"] = "test-admin-secret-456"
os.environ["LOGIN_RATE_LIMIT"] = "1000/minute"

TEST_USER_PASSWORD = "test-user-secret-123"
TEST_ADMIN_PASSWORD = "test-admin-secret-456"

# Arbitrary fixed starting point for the fake clock (epoch ms)
START_MS = 1_700_000_000_000


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = START_MS):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        self.now += ms
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def engine(clock):
    """Ping engine with an in-memory blacklist and a fake clock."""
    from pingboard.services.engine import PingEngine

    return PingEngine(
        user_secret=TEST_USER_PASSWORD,
        admin_secret=TEST_ADMIN_PASSWORD,
        clock=clock,
    )


@pytest.fixture
def admin_session(engine):
    return engine.login("admin", TEST_ADMIN_PASSWORD)


@pytest.fixture
def user_session(engine):
    return engine.login("alice", TEST_USER_PASSWORD)


# --- Application Fixtures ---


@pytest.fixture
def settings_factory():
    """Factory for Settings that ignores any local .env file."""
    from pingboard.core.config import Settings

    def _create_settings(**overrides) -> Settings:
        values = {
            "password_user": TEST_USER_PASSWORD,
            "password_admin": TEST_ADMIN_PASSWORD,
            "login_rate_limit": "1000/minute",
            "debug": True,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _create_settings


@pytest.fixture
def settings(settings_factory):
    return settings_factory()


@pytest.fixture(autouse=True)
def reset_login_rate_limiter() -> Generator[None, None, None]:
    """Clear slowapi counters so login limits never leak between tests."""
    from pingboard.api.auth import limiter

    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def app(settings):
    from pingboard.main import create_app

    return create_app(settings)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """Test client with the application lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login(client):
    """Log in through the API and return the X-Auth-Token headers."""

    def _login(username: str, password: str = TEST_USER_PASSWORD) -> dict[str, str]:
        response = client.post(
            "/api/auth/login",
            json={"username": username, "password": password},
        )
        assert response.status_code == 200, response.text
        return {"X-Auth-Token": response.json()["token"]}

    return _login


@pytest.fixture
def admin_headers(login) -> dict[str, str]:
    return login("admin", TEST_ADMIN_PASSWORD)


@pytest.fixture
def user_headers(login) -> dict[str, str]:
    return login("alice")
