"""Pydantic schemas for blacklist API."""

from pydantic import BaseModel, Field


class BlacklistRequest(BaseModel):
    """Ban or unban a username."""

    username: str | None = Field(None, max_length=255)


class BlacklistResponse(BaseModel):
    """Result of a ban/unban with the resulting blacklist."""

    success: bool = True
    blacklist: list[str]
