"""Shared route dependencies."""

from fastapi import Request

from pingboard.middleware.session_auth import TOKEN_HEADER
from pingboard.services.engine import PingEngine
from pingboard.services.sessions import Session


def get_engine(request: Request) -> PingEngine:
    """Dependency to get the application's ping engine."""
    return request.app.state.engine


def get_current_session(request: Request) -> Session:
    """Dependency to get the session resolved by SessionAuthMiddleware.

    Falls back to resolving the header directly when the route is mounted
    without the middleware.
    """
    session = getattr(request.state, "session", None)
    if session is not None:
        return session
    return get_engine(request).authenticate(request.headers.get(TOKEN_HEADER))
