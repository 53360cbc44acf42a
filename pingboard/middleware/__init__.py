"""Middleware module for Pingboard."""

from pingboard.middleware.security_headers import SecurityHeadersMiddleware
from pingboard.middleware.session_auth import TOKEN_HEADER, SessionAuthMiddleware

__all__ = [
    "SecurityHeadersMiddleware",
    "SessionAuthMiddleware",
    "TOKEN_HEADER",
]
