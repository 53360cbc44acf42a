"""Ping registry - ordered store of live pings and their posting rules."""

import threading
import uuid
from dataclasses import dataclass, replace
from enum import Enum

from pingboard.core.logging import get_logger
from pingboard.services.clock import Clock, now_ms
from pingboard.services.duration import parse_duration
from pingboard.services.errors import (
    CoordForbiddenError,
    InvalidPingTypeError,
    OwnershipViolationError,
    PingNotFoundError,
)
from pingboard.services.sessions import Role, Session

logger = get_logger("pings")

# Coordinates may be omitted by the client
Coords = tuple[float | None, float | None, float | None]


class PingType(str, Enum):
    LOCATION = "LOCATION"
    COORD = "COORD"


@dataclass
class Ping:
    """A spatial marker owned by the registry."""

    id: str
    x: float | None
    y: float | None
    z: float | None
    label: str | None
    dimension: str | None
    type: PingType
    author: str
    expires_at: int  # epoch ms


class PingRegistry:
    """Append-only sequence of pings, filtered by deletes and expiry.

    Rules:
    - COORD pings may only be posted by admins
    - each author holds at most one LOCATION ping; posting a new one
      replaces the old
    - admins may delete any ping, users only their own
    """

    def __init__(self, clock: Clock = now_ms):
        self._clock = clock
        self._lock = threading.Lock()
        self._pings: list[Ping] = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._pings)

    def list(self) -> list[Ping]:
        """All pings in insertion order."""
        with self._lock:
            return [replace(p) for p in self._pings]

    def post(
        self,
        author: str,
        role: Role,
        ping_type: str | None,
        coords: Coords,
        label: str | None = None,
        dimension: str | None = None,
        duration: str | None = None,
    ) -> Ping:
        """Create a ping for *author* and append it to the registry."""
        try:
            kind = PingType(ping_type)
        except ValueError as e:
            raise InvalidPingTypeError() from e

        if kind is PingType.COORD and role is not Role.ADMIN:
            raise CoordForbiddenError()

        x, y, z = coords
        ping = Ping(
            id=str(uuid.uuid4()),
            x=x,
            y=y,
            z=z,
            label=label,
            dimension=dimension,
            type=kind,
            author=author,
            expires_at=self._clock() + parse_duration(duration),
        )

        with self._lock:
            if kind is PingType.LOCATION:
                self._pings = [
                    p
                    for p in self._pings
                    if not (p.author == author and p.type is PingType.LOCATION)
                ]
            self._pings.append(ping)

        logger.info(
            f"New Ping: {kind.value} by {author} ({label})",
            extra={"identity": author, "ping_id": ping.id},
        )
        return replace(ping)

    def get(self, ping_id: str) -> Ping | None:
        with self._lock:
            for ping in self._pings:
                if ping.id == ping_id:
                    return replace(ping)
        return None

    def delete(self, ping_id: str, requester: Session) -> str:
        """Delete a ping on behalf of *requester*. Returns a status message."""
        with self._lock:
            index = next(
                (i for i, p in enumerate(self._pings) if p.id == ping_id),
                None,
            )
            if index is None:
                raise PingNotFoundError()

            ping = self._pings[index]
            if requester.role is Role.ADMIN:
                message = "Ping deleted by admin"
            elif ping.author == requester.identity:
                message = "Ping deleted by author"
            else:
                raise OwnershipViolationError()
            del self._pings[index]

        logger.info(
            f"Ping {ping_id} deleted by {requester.identity}",
            extra={"identity": requester.identity, "ping_id": ping_id},
        )
        return message

    def sweep(self, now: int | None = None) -> int:
        """Remove every ping with expires_at <= now. Returns count removed."""
        if now is None:
            now = self._clock()
        with self._lock:
            initial_count = len(self._pings)
            self._pings = [p for p in self._pings if p.expires_at > now]
            removed = initial_count - len(self._pings)
        if removed > 0:
            logger.info(f"Auto-removed {removed} expired pings.")
        return removed
