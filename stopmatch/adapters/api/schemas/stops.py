from __future__ import annotations

from pydantic import BaseModel, Field


class CoordinateRequestSchema(BaseModel):
    """Body of /addbusstop, /checkbusstop and /deletebus."""

    lt: float = Field(..., allow_inf_nan=False)
    ln: float = Field(..., allow_inf_nan=False)


class StopSchema(BaseModel):
    id: str | None = None
    lt: float
    ln: float


class NearestStopSchema(BaseModel):
    stop: StopSchema
    distance: float


class StopCreatedSchema(BaseModel):
    message: str
    data: StopSchema


class StopExistsSchema(BaseModel):
    exists: bool


class MessageSchema(BaseModel):
    message: str
