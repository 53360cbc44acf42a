"""Durable storage backends for the blacklist.

The blacklist store keeps the authoritative in-memory view; a repository
only has to load everything at startup and apply single-entry upserts and
deletes afterwards. Failures are reported as PersistenceError.
"""

import asyncio
import json
import os
from abc import ABC, abstractmethod
from pathlib import Path

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from pingboard.core.database import (
    check_db_connection,
    create_engine,
    create_session_maker,
    create_tables,
)
from pingboard.core.logging import get_logger
from pingboard.models.blacklist_entry import BlacklistEntry
from pingboard.services.errors import PersistenceError

logger = get_logger("blacklist_repository")


class BlacklistRepository(ABC):
    """Load-all plus upsert/delete-one persistence keyed by username."""

    name = "abstract"

    @abstractmethod
    async def load_all(self) -> list[str]:
        """Return every persisted username."""

    @abstractmethod
    async def add(self, identity: str) -> None:
        """Persist *identity*; already-present entries are left alone."""

    @abstractmethod
    async def remove(self, identity: str) -> None:
        """Delete *identity*; absent entries are ignored."""

    async def check_health(self) -> bool:
        return True

    async def close(self) -> None:
        pass


class MemoryBlacklistRepository(BlacklistRepository):
    """No durability: the in-memory blacklist is lost on restart."""

    name = "memory"

    async def load_all(self) -> list[str]:
        return []

    async def add(self, identity: str) -> None:
        pass

    async def remove(self, identity: str) -> None:
        pass


class JsonFileBlacklistRepository(BlacklistRepository):
    """Blacklist stored as a JSON array in a single file.

    Each mutation rewrites the full file via a temp file and os.replace(),
    so a crash mid-write leaves the previous version intact. File I/O runs
    in a worker thread. The file is never rewritten until it has been read
    successfully; an unreadable file fails every write instead of being
    replaced by a partial list.
    """

    name = "file"

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._entries: list[str] = []
        self._loaded = False
        self._write_lock = asyncio.Lock()

    async def load_all(self) -> list[str]:
        async with self._write_lock:
            await self._load()
            return list(self._entries)

    async def add(self, identity: str) -> None:
        async with self._write_lock:
            await self._ensure_loaded()
            if identity in self._entries:
                return
            self._entries.append(identity)
            await self._flush()

    async def remove(self, identity: str) -> None:
        async with self._write_lock:
            await self._ensure_loaded()
            if identity not in self._entries:
                return
            self._entries.remove(identity)
            await self._flush()

    async def check_health(self) -> bool:
        parent = self.path.parent
        return parent.is_dir() and os.access(parent, os.W_OK)

    async def _load(self) -> None:
        self._loaded = False
        try:
            self._entries = await asyncio.to_thread(self._read)
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Failed to read blacklist file {self.path}: {e}") from e
        self._loaded = True

    async def _ensure_loaded(self) -> None:
        # Re-read before the first write so existing entries are kept
        if not self._loaded:
            await self._load()

    async def _flush(self) -> None:
        snapshot = list(self._entries)
        try:
            await asyncio.to_thread(self._write, snapshot)
        except OSError as e:
            raise PersistenceError(f"Failed to write blacklist file {self.path}: {e}") from e

    def _read(self) -> list[str]:
        if not self.path.exists():
            return []
        raw = json.loads(self.path.read_text(encoding="utf-8") or "[]")
        if not isinstance(raw, list) or not all(isinstance(e, str) for e in raw):
            raise ValueError("expected a JSON array of usernames")
        # Drop duplicates, keep first occurrence order
        return list(dict.fromkeys(raw))

    def _write(self, entries: list[str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(json.dumps(entries, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)


class SqlBlacklistRepository(BlacklistRepository):
    """Blacklist stored in the ``blacklist`` table via async SQLAlchemy."""

    name = "database"

    def __init__(self, database_url: str, create_tables: bool = True, echo: bool = False):
        self._engine = create_engine(database_url, echo=echo)
        self._session_maker = create_session_maker(self._engine)
        self._create_tables = create_tables
        # Commits happen in call order, matching the in-memory mutations
        self._write_lock = asyncio.Lock()

    async def load_all(self) -> list[str]:
        try:
            if self._create_tables:
                await create_tables(self._engine)
            async with self._session_maker() as session:
                result = await session.execute(
                    select(BlacklistEntry.username).order_by(
                        BlacklistEntry.created_at, BlacklistEntry.username
                    )
                )
                return list(result.scalars().all())
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceError(f"Failed to load blacklist: {e}") from e

    async def add(self, identity: str) -> None:
        async with self._write_lock:
            await self._add(identity)

    async def remove(self, identity: str) -> None:
        async with self._write_lock:
            await self._remove(identity)

    async def _add(self, identity: str) -> None:
        try:
            async with self._session_maker() as session:
                existing = await session.get(BlacklistEntry, identity)
                if existing is None:
                    session.add(BlacklistEntry(username=identity))
                    await session.commit()
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceError(f"Error adding {identity} to blacklist DB: {e}") from e

    async def _remove(self, identity: str) -> None:
        try:
            async with self._session_maker() as session:
                await session.execute(
                    delete(BlacklistEntry).where(BlacklistEntry.username == identity)
                )
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceError(f"Error removing {identity} from blacklist DB: {e}") from e

    async def check_health(self) -> bool:
        return await check_db_connection(self._session_maker)

    async def close(self) -> None:
        await self._engine.dispose()


def create_blacklist_repository(settings) -> BlacklistRepository:
    """Pick the backend configured in *settings*."""
    if settings.database_url:
        logger.info("Blacklist persistence: database")
        return SqlBlacklistRepository(
            settings.database_url,
            create_tables=settings.db_create_tables,
            echo=settings.debug and settings.log_level == "DEBUG",
        )
    if settings.blacklist_file:
        logger.info(f"Blacklist persistence: file {settings.blacklist_file}")
        return JsonFileBlacklistRepository(settings.blacklist_file)
    logger.warning(
        "WARNING: DATABASE_URL and BLACKLIST_FILE not set. "
        "Blacklist will be in-memory only (ephemeral)."
    )
    return MemoryBlacklistRepository()
