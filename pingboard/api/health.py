"""Health check endpoint with in-memory state counts and persistence status.

Accessible without authentication; it exposes counts only, never names.
"""

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel

from pingboard.api.deps import get_engine
from pingboard.services.engine import PingEngine

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    sessions: int
    pings: int
    blacklisted: int
    persistence: str
    persistence_healthy: bool


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        status.HTTP_200_OK: {"description": "Service is healthy"},
        status.HTTP_503_SERVICE_UNAVAILABLE: {"description": "Blacklist storage unreachable"},
    },
)
async def health_check(
    request: Request,
    response: Response,
    engine: PingEngine = Depends(get_engine),
) -> HealthResponse:
    """
    Health check endpoint.

    Returns 503 when the blacklist storage is unreachable. The service keeps
    answering requests in that state, but bans would not survive a restart.
    """
    storage_healthy = await engine.repository.check_health()
    if not storage_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    stats = engine.stats()
    return HealthResponse(
        status="healthy" if storage_healthy else "degraded",
        version=request.app.version,
        sessions=stats.sessions,
        pings=stats.pings,
        blacklisted=stats.blacklisted,
        persistence=engine.repository.name,
        persistence_healthy=storage_healthy,
    )
