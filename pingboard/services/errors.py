"""Error types raised by the session, ping and blacklist services.

Every error carries a stable ``kind`` for clients to branch on and the
HTTP status the API layer answers with.
"""


class PingboardError(Exception):
    """Base error for all rejected operations."""

    kind = "Error"
    status_code = 400
    default_message = "Request rejected"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthError(PingboardError):
    """Base authentication/authorization error."""

    kind = "AuthError"
    status_code = 401


class MissingCredentialsError(AuthError):
    """Login without a username or password."""

    kind = "MissingCredentials"
    status_code = 400
    default_message = "Missing credentials"


class InvalidCredentialsError(AuthError):
    """Password matches neither role secret."""

    kind = "InvalidCredentials"
    status_code = 401
    default_message = "Invalid credentials"


class BlacklistedError(AuthError):
    """Principal is on the blacklist."""

    kind = "Blacklisted"
    status_code = 403
    default_message = "User is blacklisted"


class LoginForbiddenError(BlacklistedError):
    """Blacklisted principal attempted to log in."""

    kind = "Forbidden"
    default_message = "Forbidden"


class MissingTokenError(AuthError):
    kind = "MissingToken"
    status_code = 401
    default_message = "Missing token"


class InvalidTokenError(AuthError):
    kind = "InvalidToken"
    status_code = 401
    default_message = "Invalid token"


class AdminRequiredError(AuthError):
    kind = "AdminRequired"
    status_code = 403
    default_message = "Admin required"


class CoordForbiddenError(AuthError):
    """Non-admin attempted to post a COORD ping."""

    kind = "Forbidden"
    status_code = 403
    default_message = "Only admins can post COORD pings"


class OwnershipViolationError(AuthError):
    """Non-admin attempted to delete someone else's ping."""

    kind = "OwnershipViolation"
    status_code = 403
    default_message = "You can only delete your own pings"


class InvalidPingTypeError(PingboardError):
    kind = "InvalidPingType"
    status_code = 400
    default_message = "Invalid ping type. Must be LOCATION or COORD"


class PingNotFoundError(PingboardError):
    kind = "NotFound"
    status_code = 404
    default_message = "Ping not found"


class MissingUsernameError(PingboardError):
    kind = "MissingUsername"
    status_code = 400
    default_message = "Username required"


class PersistenceError(PingboardError):
    """Durable write of the blacklist failed.

    Never surfaced to clients: the in-memory state is authoritative.
    """

    kind = "PersistenceFailure"
    status_code = 500
    default_message = "Blacklist persistence failed"
