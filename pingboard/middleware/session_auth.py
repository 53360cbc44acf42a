"""Session token authentication middleware.

Every /api/* request except the auth endpoints must carry a valid session
token in the X-Auth-Token header. The token is resolved here, before any
route handler or body parsing runs, and the session is stored on
request.state for the route dependencies.
"""

import logging

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse

from pingboard.services.errors import AuthError

logger = logging.getLogger(__name__)

TOKEN_HEADER = "X-Auth-Token"

# Paths that handle their own authentication
EXCLUDED_PATHS = [
    "/api/auth",
]


def is_protected_path(path: str) -> bool:
    """Whether *path* requires a session token (segment-boundary match)."""
    if not (path == "/api" or path.startswith("/api/")):
        return False
    for excluded in EXCLUDED_PATHS:
        if path == excluded or path.startswith(excluded + "/"):
            return False
    return True


class SessionAuthMiddleware(BaseHTTPMiddleware):
    """Resolve the session token for protected API paths.

    - Missing or unknown token: 401
    - Token of a blacklisted principal: 403
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        # CORS preflight never carries the token
        if request.method == "OPTIONS":
            return await call_next(request)

        path = request.url.path
        if not is_protected_path(path):
            return await call_next(request)

        engine = request.app.state.engine
        token = request.headers.get(TOKEN_HEADER)

        try:
            session = engine.authenticate(token)
        except AuthError as e:
            logger.warning(f"Rejected {request.method} {path}: {e.kind}", extra={"path": path})
            return JSONResponse(
                status_code=e.status_code,
                content={"error": e.kind, "detail": e.message},
            )

        request.state.session = session
        return await call_next(request)
