"""Pingboard - FastAPI Application Factory."""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from pingboard.api import api_router
from pingboard.api.auth import limiter
from pingboard.api.health import router as health_router
from pingboard.core import Settings, get_settings, setup_logging
from pingboard.core.logging import get_logger
from pingboard.middleware import TOKEN_HEADER, SecurityHeadersMiddleware, SessionAuthMiddleware
from pingboard.services.blacklist_repository import create_blacklist_repository
from pingboard.services.engine import PingEngine
from pingboard.services.errors import PingboardError
from pingboard.services.sweeper import PingSweeper

logger = get_logger("main")


def task_done_callback(task: asyncio.Task) -> None:
    """Log unhandled exceptions from background tasks."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error(f"Background task {task.get_name()} failed: {exc}")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings: Settings = app.state.settings
    engine: PingEngine = app.state.engine
    sweeper: PingSweeper = app.state.sweeper

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")

    for warning in settings.check_security_configuration():
        logger.warning(f"SECURITY: {warning}")

    await engine.startup()
    await sweeper.start()
    if sweeper.task is not None:
        sweeper.task.add_done_callback(task_done_callback)

    yield

    logger.info("Shutting down...")
    await sweeper.stop()
    await engine.shutdown()


async def pingboard_error_handler(request: Request, exc: PingboardError) -> JSONResponse:
    """Map domain errors to JSON responses with their status code."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.kind, "detail": exc.message},
    )


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Custom handler for rate limit exceeded errors."""
    return JSONResponse(
        status_code=429,
        content={
            "error": "RateLimited",
            "detail": f"Too many login attempts. Limit: {exc.detail}",
        },
        headers={"Retry-After": "60"},
    )


def create_app(settings: Settings | None = None, engine: PingEngine | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    The engine owns all session, ping and blacklist state for the lifetime
    of the returned app.
    """
    settings = settings or get_settings()

    setup_logging(
        level=settings.log_level,
        format_type="dev" if settings.debug else "structured",
    )

    if engine is None:
        engine = PingEngine(
            user_secret=settings.password_user,
            admin_secret=settings.password_admin,
            repository=create_blacklist_repository(settings),
        )

    app = FastAPI(
        title=settings.app_name,
        description="Shared-session ping board with role-gated posting and a persistent blacklist",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.sweeper = PingSweeper(engine)

    # Login rate limiting; the limit itself is read from app.state.settings per request
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(PingboardError, pingboard_error_handler)

    # Session token authentication for /api/*
    app.add_middleware(SessionAuthMiddleware)

    app.add_middleware(SecurityHeadersMiddleware)

    # CORS middleware - MUST be outermost (added last in Starlette LIFO order)
    # so that CORS headers are present on 401/403 responses from SessionAuth too.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", TOKEN_HEADER],
    )

    app.include_router(health_router)
    app.include_router(api_router)

    return app


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
