"""Ping engine - composes sessions, blacklist and ping registry.

All shared state lives on one PingEngine instance owned by the
application; nothing here is a module-level singleton. Each store guards
itself with its own lock and no method holds two of those locks at once.
"""

from dataclasses import dataclass

from pingboard.core.logging import get_logger
from pingboard.services.auth import Authenticator
from pingboard.services.blacklist import BlacklistStore
from pingboard.services.blacklist_repository import BlacklistRepository
from pingboard.services.clock import Clock, now_ms
from pingboard.services.errors import AdminRequiredError, MissingUsernameError
from pingboard.services.pings import Coords, Ping, PingRegistry
from pingboard.services.sessions import Session, SessionStore

logger = get_logger("engine")


@dataclass
class EngineStats:
    sessions: int
    pings: int
    blacklisted: int


class PingEngine:
    """Login, ping and blacklist operations against shared in-memory state."""

    def __init__(
        self,
        user_secret: str,
        admin_secret: str,
        repository: BlacklistRepository | None = None,
        clock: Clock = now_ms,
    ):
        self.clock = clock
        self.sessions = SessionStore(clock=clock)
        self.blacklist = BlacklistStore(repository)
        self.pings = PingRegistry(clock=clock)
        self.auth = Authenticator(
            self.sessions,
            self.blacklist,
            user_secret=user_secret,
            admin_secret=admin_secret,
        )

    @property
    def repository(self) -> BlacklistRepository:
        return self.blacklist.repository

    async def startup(self) -> None:
        await self.blacklist.load()

    async def shutdown(self) -> None:
        await self.repository.close()

    # --- Sessions ---

    def login(self, username: str | None, password: str | None) -> Session:
        return self.auth.login(username, password)

    def authenticate(self, token: str | None) -> Session:
        return self.auth.resolve(token)

    # --- Pings ---

    def list_pings(self) -> list[Ping]:
        return self.pings.list()

    def post_ping(
        self,
        session: Session,
        ping_type: str | None,
        coords: Coords,
        label: str | None = None,
        dimension: str | None = None,
        duration: str | None = None,
    ) -> Ping:
        return self.pings.post(
            author=session.identity,
            role=session.role,
            ping_type=ping_type,
            coords=coords,
            label=label,
            dimension=dimension,
            duration=duration,
        )

    def delete_ping(self, session: Session, ping_id: str) -> str:
        return self.pings.delete(ping_id, session)

    def sweep_expired(self) -> int:
        return self.pings.sweep(self.clock())

    # --- Blacklist (admin only) ---

    def list_blacklist(self, session: Session) -> list[str]:
        _require_admin(session)
        return self.blacklist.list()

    async def ban(self, session: Session, username: str | None) -> list[str]:
        """Blacklist *username* and revoke their live session."""
        _require_admin(session)
        if not username:
            raise MissingUsernameError()

        if await self.blacklist.add(username):
            self.sessions.revoke(username)
            logger.info(
                f"User blacklisted: {username} (by {session.identity})",
                extra={"identity": username},
            )
        return self.blacklist.list()

    async def unban(self, session: Session, username: str | None) -> list[str]:
        _require_admin(session)
        if not username:
            raise MissingUsernameError()

        if await self.blacklist.remove(username):
            self.sessions.forget_revoked(username)
            logger.info(
                f"User un-blacklisted: {username} (by {session.identity})",
                extra={"identity": username},
            )
        return self.blacklist.list()

    def stats(self) -> EngineStats:
        return EngineStats(
            sessions=len(self.sessions),
            pings=len(self.pings),
            blacklisted=len(self.blacklist),
        )


def _require_admin(session: Session) -> None:
    if not session.is_admin:
        raise AdminRequiredError()
