from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AddCheckpointRequestSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    lt: float = Field(..., allow_inf_nan=False)
    ln: float = Field(..., allow_inf_nan=False)
    name: str | None = Field(default=None, alias="namee")


class CheckCheckpointRequestSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, alias="namee")


class CheckpointSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    lt: float
    ln: float
    name: str = Field(..., alias="namee")


class CheckpointCreatedSchema(BaseModel):
    message: str
    data: CheckpointSchema


class CheckpointExistsSchema(BaseModel):
    exists: bool
    checkpoint: CheckpointSchema | None = None
