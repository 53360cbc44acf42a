"""Authentication service - shared role secrets and opaque session tokens."""

import hmac

from pingboard.core.logging import get_logger
from pingboard.services.blacklist import BlacklistStore
from pingboard.services.errors import (
    BlacklistedError,
    InvalidCredentialsError,
    InvalidTokenError,
    LoginForbiddenError,
    MissingCredentialsError,
    MissingTokenError,
)
from pingboard.services.sessions import Role, Session, SessionStore

logger = get_logger("auth")


def _secret_matches(candidate: str, secret: str) -> bool:
    """Constant-time comparison of a presented password and a role secret."""
    return hmac.compare_digest(candidate.encode(), secret.encode())


class Authenticator:
    """Login and per-request token resolution.

    The blacklist is consulted on every resolve, not only at login, so a
    principal banned mid-session is cut off on their next call.
    """

    def __init__(
        self,
        sessions: SessionStore,
        blacklist: BlacklistStore,
        user_secret: str,
        admin_secret: str,
    ):
        self.sessions = sessions
        self.blacklist = blacklist
        self._user_secret = user_secret
        self._admin_secret = admin_secret

    def login(self, identity: str | None, secret: str | None) -> Session:
        if not identity or not secret:
            raise MissingCredentialsError()

        if self.blacklist.contains(identity):
            logger.warning(f"Blacklisted user attempted login: {identity}")
            raise LoginForbiddenError()

        if _secret_matches(secret, self._admin_secret):
            role = Role.ADMIN
        elif _secret_matches(secret, self._user_secret):
            role = Role.USER
        else:
            logger.warning(f"Invalid credentials for: {identity}")
            raise InvalidCredentialsError()

        session = self.sessions.create(identity, role)
        logger.info(
            f"User logged in: {identity} as {role.value}",
            extra={"identity": identity, "role": role.value},
        )
        return session

    def resolve(self, token: str | None) -> Session:
        if not token:
            raise MissingTokenError()

        session = self.sessions.get(token)
        if session is None:
            revoked_for = self.sessions.revoked_identity(token)
            if revoked_for is not None and self.blacklist.contains(revoked_for):
                raise BlacklistedError()
            raise InvalidTokenError()

        # Late ban check
        if self.blacklist.contains(session.identity):
            self.sessions.revoke(session.identity)
            logger.warning(f"Dropped session of blacklisted user: {session.identity}")
            raise BlacklistedError()

        touched = self.sessions.touch(token)
        if touched is None:
            # Superseded by a concurrent login between get() and touch()
            raise InvalidTokenError()
        return touched
