"""Ping API endpoints."""

from fastapi import APIRouter, Depends

from pingboard.api.deps import get_current_session, get_engine
from pingboard.schemas.auth import ErrorResponse
from pingboard.schemas.ping import PingCreate, PingDeleteResponse, PingResponse
from pingboard.services.engine import PingEngine
from pingboard.services.sessions import Session

router = APIRouter(
    prefix="/pings",
    tags=["pings"],
    responses={
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
        403: {"model": ErrorResponse, "description": "Forbidden"},
    },
)


@router.get("", response_model=list[PingResponse])
async def list_pings(
    engine: PingEngine = Depends(get_engine),
    session: Session = Depends(get_current_session),
) -> list[PingResponse]:
    """List live pings in the order they were posted."""
    return [PingResponse.model_validate(p) for p in engine.list_pings()]


@router.post(
    "",
    response_model=PingResponse,
    responses={400: {"model": ErrorResponse, "description": "Invalid ping type"}},
)
async def post_ping(
    data: PingCreate,
    engine: PingEngine = Depends(get_engine),
    session: Session = Depends(get_current_session),
) -> PingResponse:
    """Post a ping.

    - LOCATION: any user; replaces the caller's previous LOCATION ping
    - COORD: admins only
    """
    ping = engine.post_ping(
        session,
        ping_type=data.type,
        coords=(data.x, data.y, data.z),
        label=data.label,
        dimension=data.dimension,
        duration=data.duration,
    )
    return PingResponse.model_validate(ping)


@router.delete(
    "/{ping_id}",
    response_model=PingDeleteResponse,
    responses={404: {"model": ErrorResponse, "description": "Ping not found"}},
)
async def delete_ping(
    ping_id: str,
    engine: PingEngine = Depends(get_engine),
    session: Session = Depends(get_current_session),
) -> PingDeleteResponse:
    """Delete a ping. Admins may delete any ping, users only their own."""
    message = engine.delete_ping(session, ping_id)
    return PingDeleteResponse(success=True, message=message)
