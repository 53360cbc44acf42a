"""Blacklist management API endpoints (admin only)."""

from fastapi import APIRouter, Depends

from pingboard.api.deps import get_current_session, get_engine
from pingboard.schemas.auth import ErrorResponse
from pingboard.schemas.blacklist import BlacklistRequest, BlacklistResponse
from pingboard.services.engine import PingEngine
from pingboard.services.sessions import Session

router = APIRouter(
    prefix="/blacklist",
    tags=["blacklist"],
    responses={
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
        403: {"model": ErrorResponse, "description": "Admin required"},
    },
)


@router.get("", response_model=list[str])
async def get_blacklist(
    engine: PingEngine = Depends(get_engine),
    session: Session = Depends(get_current_session),
) -> list[str]:
    """List blacklisted usernames."""
    return engine.list_blacklist(session)


@router.post(
    "",
    response_model=BlacklistResponse,
    responses={400: {"model": ErrorResponse, "description": "Username required"}},
)
async def add_to_blacklist(
    data: BlacklistRequest | None = None,
    engine: PingEngine = Depends(get_engine),
    session: Session = Depends(get_current_session),
) -> BlacklistResponse:
    """Blacklist a username and revoke its active session.

    Adding an already-listed username succeeds without changes.
    """
    blacklist = await engine.ban(session, data.username if data else None)
    return BlacklistResponse(success=True, blacklist=blacklist)


@router.delete(
    "",
    response_model=BlacklistResponse,
    responses={400: {"model": ErrorResponse, "description": "Username required"}},
)
async def remove_from_blacklist(
    data: BlacklistRequest | None = None,
    engine: PingEngine = Depends(get_engine),
    session: Session = Depends(get_current_session),
) -> BlacklistResponse:
    """Remove a username from the blacklist. Removing an absent name is a no-op."""
    blacklist = await engine.unban(session, data.username if data else None)
    return BlacklistResponse(success=True, blacklist=blacklist)
