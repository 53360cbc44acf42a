"""In-memory session store keyed by username and opaque token."""

import threading
import uuid
from dataclasses import dataclass, replace
from enum import Enum

from pingboard.services.clock import Clock, now_ms


class Role(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


@dataclass
class Session:
    """Live association between a token and a principal."""

    identity: str
    role: Role
    token: str
    last_activity: int  # epoch ms

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


class SessionStore:
    """One session per identity; a new login replaces the previous token.

    Sessions evicted because their identity was blacklisted leave their
    token behind in a revoked map, so the holder keeps getting a
    "blacklisted" answer instead of a generic invalid-token one.
    """

    def __init__(self, clock: Clock = now_ms):
        self._clock = clock
        self._lock = threading.Lock()
        self._sessions: dict[str, Session] = {}  # identity -> session
        self._tokens: dict[str, str] = {}  # token -> identity
        self._revoked: dict[str, str] = {}  # token -> identity

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def create(self, identity: str, role: Role) -> Session:
        """Issue a fresh token for *identity*, invalidating any previous one."""
        session = Session(
            identity=identity,
            role=role,
            token=str(uuid.uuid4()),
            last_activity=self._clock(),
        )
        with self._lock:
            previous = self._sessions.get(identity)
            if previous is not None:
                self._tokens.pop(previous.token, None)
            self._sessions[identity] = session
            self._tokens[session.token] = identity
        return replace(session)

    def get(self, token: str) -> Session | None:
        """Look up the session for *token* without touching it."""
        with self._lock:
            identity = self._tokens.get(token)
            if identity is None:
                return None
            return replace(self._sessions[identity])

    def touch(self, token: str) -> Session | None:
        """Refresh last_activity for *token* and return the updated session."""
        with self._lock:
            identity = self._tokens.get(token)
            if identity is None:
                return None
            session = self._sessions[identity]
            session.last_activity = self._clock()
            return replace(session)

    def revoke(self, identity: str) -> Session | None:
        """Drop the live session of *identity* and remember its token as revoked."""
        with self._lock:
            session = self._sessions.pop(identity, None)
            if session is None:
                return None
            self._tokens.pop(session.token, None)
            self._revoked[session.token] = identity
            return session

    def revoked_identity(self, token: str) -> str | None:
        """Identity a revoked token belonged to, if any."""
        with self._lock:
            return self._revoked.get(token)

    def forget_revoked(self, identity: str) -> int:
        """Discard revoked tokens of *identity*. Returns count removed."""
        with self._lock:
            tokens = [t for t, owner in self._revoked.items() if owner == identity]
            for token in tokens:
                del self._revoked[token]
            return len(tokens)
