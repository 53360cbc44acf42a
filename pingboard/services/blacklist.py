"""Blacklist store - in-memory cache backed by a repository."""

import threading

from pingboard.core.logging import get_logger
from pingboard.services.blacklist_repository import (
    BlacklistRepository,
    MemoryBlacklistRepository,
)
from pingboard.services.errors import PersistenceError

logger = get_logger("blacklist")


class BlacklistStore:
    """Set of excluded usernames.

    The in-memory view is authoritative for the running process. Mutations
    are applied under the lock first; the repository write happens after
    the lock is released and a failed write is only logged.
    """

    def __init__(self, repository: BlacklistRepository | None = None):
        self.repository = repository or MemoryBlacklistRepository()
        self._lock = threading.Lock()
        self._entries: dict[str, None] = {}  # insertion-ordered set

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    async def load(self) -> list[str]:
        """Replace the cache with the repository contents."""
        try:
            loaded = await self.repository.load_all()
        except PersistenceError as e:
            logger.error(f"Failed to load blacklist: {e}")
            loaded = []
        with self._lock:
            self._entries = dict.fromkeys(loaded)
            entries = list(self._entries)
        logger.info(f"Loaded {len(entries)} blacklisted users from {self.repository.name}.")
        return entries

    def contains(self, identity: str) -> bool:
        with self._lock:
            return identity in self._entries

    def list(self) -> list[str]:
        with self._lock:
            return list(self._entries)

    async def add(self, identity: str) -> bool:
        """Blacklist *identity*. Returns False if it was already listed."""
        with self._lock:
            if identity in self._entries:
                return False
            self._entries[identity] = None

        try:
            await self.repository.add(identity)
        except PersistenceError as e:
            logger.error(f"Error adding to blacklist storage: {e}")
        return True

    async def remove(self, identity: str) -> bool:
        """Un-blacklist *identity*. Returns False if it was not listed."""
        with self._lock:
            if identity not in self._entries:
                return False
            del self._entries[identity]

        try:
            await self.repository.remove(identity)
        except PersistenceError as e:
            logger.error(f"Error removing from blacklist storage: {e}")
        return True
