"""Pydantic schemas for ping API."""

from pydantic import BaseModel, ConfigDict, Field

from pingboard.services.pings import PingType


class PingCreate(BaseModel):
    """Request body for posting a ping.

    Every field is optional, so a body carrying only a type still reaches the
    type and role rules (400/403). Coordinates that are present must be
    finite numbers.
    """

    model_config = ConfigDict(allow_inf_nan=False)

    x: float | None = None
    y: float | None = None
    z: float | None = None
    label: str | None = Field(None, max_length=200)
    dimension: str | None = Field(None, max_length=100)
    duration: str | None = Field(
        None,
        max_length=32,
        description="Lifetime as <integer><unit>, unit one of s/m/h/d/w (default 5m)",
    )
    # Left as a plain string so unknown types are rejected with 400, not 422
    type: str | None = Field(None, description="LOCATION or COORD")


class PingResponse(BaseModel):
    """A live ping as returned to clients."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    x: float | None
    y: float | None
    z: float | None
    label: str | None
    dimension: str | None
    type: PingType
    author: str
    expires_at: int = Field(alias="expiresAt", description="Expiry as epoch milliseconds")


class PingDeleteResponse(BaseModel):
    success: bool = True
    message: str
