from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from stopmatch.adapters.api.dependencies import get_network_admin_service
from stopmatch.adapters.api.presenters import stop_to_schema
from stopmatch.adapters.api.schemas.stops import (
    CoordinateRequestSchema,
    MessageSchema,
    StopCreatedSchema,
    StopExistsSchema,
)
from stopmatch.app.services.network_admin_service import NetworkAdminService
from stopmatch.domain.exceptions import InvalidCoordinates
from stopmatch.domain.models import GeoPoint

logger = logging.getLogger(__name__)

router = APIRouter(tags=["stops"])


@router.post("/addbusstop", response_model=StopCreatedSchema, status_code=201)
def add_bus_stop(
    req: CoordinateRequestSchema,
    service: NetworkAdminService = Depends(get_network_admin_service),
) -> StopCreatedSchema:
    stop = service.add_stop(GeoPoint.parse(req.lt, req.ln))
    return StopCreatedSchema(
        message="Bus stop added successfully", data=stop_to_schema(stop)
    )


@router.post("/checkbusstop", response_model=StopExistsSchema)
def check_bus_stop(
    req: CoordinateRequestSchema,
    service: NetworkAdminService = Depends(get_network_admin_service),
) -> StopExistsSchema:
    try:
        point = GeoPoint.parse(req.lt, req.ln)
    except InvalidCoordinates:
        return StopExistsSchema(exists=False)
    return StopExistsSchema(exists=service.stop_exists(point))


@router.delete("/deletebus", response_model=MessageSchema)
def delete_bus_stop(
    req: CoordinateRequestSchema,
    service: NetworkAdminService = Depends(get_network_admin_service),
) -> MessageSchema:
    # Succeeds whether or not a stop was actually removed.
    try:
        point = GeoPoint.parse(req.lt, req.ln)
    except InvalidCoordinates:
        # Out-of-range coordinates can never have been stored.
        logger.info("Delete of out-of-range bus stop (%s, %s) ignored", req.lt, req.ln)
    else:
        service.delete_stop(point)
    return MessageSchema(message="Bus stop deleted successfully")
