# Pingboard Pydantic Schemas
from pingboard.schemas.auth import ErrorResponse, LoginRequest, LoginResponse
from pingboard.schemas.blacklist import BlacklistRequest, BlacklistResponse
from pingboard.schemas.ping import PingCreate, PingDeleteResponse, PingResponse

__all__ = [
    "BlacklistRequest",
    "BlacklistResponse",
    "ErrorResponse",
    "LoginRequest",
    "LoginResponse",
    "PingCreate",
    "PingDeleteResponse",
    "PingResponse",
]
