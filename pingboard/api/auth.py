"""Authentication API endpoints."""

import logging
from contextvars import ContextVar

from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from pingboard.api.deps import get_engine
from pingboard.schemas.auth import ErrorResponse, LoginRequest, LoginResponse
from pingboard.services.engine import PingEngine

logger = logging.getLogger(__name__)

# Rate limiter instance - registered on app.state by create_app()
limiter = Limiter(key_func=get_remote_address)

DEFAULT_LOGIN_RATE_LIMIT = "10/minute"

# Limit string of the app serving the current request
_login_rate_limit: ContextVar[str] = ContextVar(
    "login_rate_limit", default=DEFAULT_LOGIN_RATE_LIMIT
)


async def bind_login_rate_limit(request: Request) -> None:
    """Publish the serving app's LOGIN_RATE_LIMIT for the login limiter.

    Async dependencies run in the endpoint's context, so the limit provider
    of the decorated endpoint sees the value set here.
    """
    settings = getattr(request.app.state, "settings", None)
    _login_rate_limit.set(settings.login_rate_limit if settings else DEFAULT_LOGIN_RATE_LIMIT)


def _current_login_rate_limit() -> str:
    return _login_rate_limit.get()


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/login",
    dependencies=[Depends(bind_login_rate_limit)],
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing credentials"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        403: {"model": ErrorResponse, "description": "User is blacklisted"},
    },
)
@limiter.limit(_current_login_rate_limit)
async def login(
    request: Request,
    body: LoginRequest | None = None,
    engine: PingEngine = Depends(get_engine),
) -> LoginResponse:
    """Log in with a username and one of the two role passwords.

    A new login replaces any earlier session of the same username; the old
    token stops working immediately.
    """
    body = body or LoginRequest()
    session = engine.login(body.username, body.password)
    return LoginResponse(token=session.token, role=session.role)
