from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from .stops import NearestStopSchema

FiniteCoordinate = Annotated[float, Field(allow_inf_nan=False)]


class MarkerSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    lt: float = Field(..., ge=-90.0, le=90.0, allow_inf_nan=False)
    ln: float = Field(..., ge=-180.0, le=180.0, allow_inf_nan=False)
    kind: str = Field(..., alias="type")
    label: str | None = Field(default=None, alias="namee")


class AddRouteRequestSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    markers: list[MarkerSchema] = Field(default_factory=list, alias="markerPosition")
    polylines: list[list[FiniteCoordinate]] = Field(default_factory=list, alias="polyLines")


class RouteSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    markers: list[MarkerSchema] = Field(default_factory=list, alias="markerPosition")
    polylines: list[list[FiniteCoordinate]] = Field(default_factory=list, alias="polyLines")


class RouteCreatedSchema(BaseModel):
    message: str
    data: RouteSchema


class RouteLookupSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    result: RouteSchema | None = None
    closest_dest_stop: NearestStopSchema = Field(..., alias="closestDestStop")
    closest_source_stop: NearestStopSchema = Field(..., alias="closestSourceStop")
