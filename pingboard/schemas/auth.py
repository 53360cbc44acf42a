"""Pydantic schemas for authentication API."""

from pydantic import BaseModel, Field

from pingboard.services.sessions import Role


class LoginRequest(BaseModel):
    """Request for login.

    Both fields are optional at the schema level so that missing
    credentials are reported as 400 rather than a validation error.
    """

    username: str | None = Field(None, max_length=255)
    password: str | None = None


class LoginResponse(BaseModel):
    """Response with the opaque session token."""

    token: str
    role: Role


class ErrorResponse(BaseModel):
    """Error body for every rejected request."""

    error: str = Field(description="Stable machine-readable error kind")
    detail: str = Field(description="Human-readable message")
