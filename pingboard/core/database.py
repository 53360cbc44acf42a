"""Pingboard Database Configuration - Async SQLAlchemy.

Only the blacklist is persisted, and only when DATABASE_URL is set, so the
engine is built on demand instead of at import time.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from pingboard.core.logging import get_logger

logger = get_logger("database")

# Base class for models
Base = declarative_base()


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine for the given URL."""
    options: dict = {"echo": echo}
    if not database_url.startswith("sqlite"):
        # SQLite drivers use a static pool; pool tuning only applies to servers
        options.update(pool_size=5, max_overflow=5, pool_recycle=1800)
    return create_async_engine(database_url, pool_pre_ping=True, **options)


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to *engine*."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create all registered tables that do not exist yet."""
    # Import models so they are registered with Base
    from pingboard.models import BlacklistEntry  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def check_db_connection(session_maker: async_sessionmaker[AsyncSession]) -> bool:
    """Check if database is reachable."""
    try:
        async with session_maker() as session:
            await session.execute(text("SELECT 1"))
            return True
    except (OSError, ConnectionError) as e:
        logger.debug(f"Database connection check failed: {e}")
        return False
    except Exception as e:
        logger.warning(f"Unexpected error checking database connection: {e}")
        return False
