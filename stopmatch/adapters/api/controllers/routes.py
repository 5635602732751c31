from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from stopmatch.adapters.api.dependencies import (
    get_network_admin_service,
    get_route_lookup_service,
)
from stopmatch.adapters.api.presenters import nearest_to_schema, route_to_schema
from stopmatch.adapters.api.schemas.routes import (
    AddRouteRequestSchema,
    RouteCreatedSchema,
    RouteLookupSchema,
)
from stopmatch.app.services.network_admin_service import NetworkAdminService
from stopmatch.app.services.route_lookup_service import RouteLookupService
from stopmatch.domain.models import GeoPoint, Marker

router = APIRouter(tags=["routes"])


@router.get("/route", response_model=RouteLookupSchema)
def lookup_route(
    s_lat: float = Query(..., allow_inf_nan=False),
    s_lon: float = Query(..., allow_inf_nan=False),
    d_lat: float = Query(..., allow_inf_nan=False),
    d_lon: float = Query(..., allow_inf_nan=False),
    service: RouteLookupService = Depends(get_route_lookup_service),
) -> RouteLookupSchema:
    lookup = service.lookup(
        source=GeoPoint.parse(s_lat, s_lon),
        destination=GeoPoint.parse(d_lat, d_lon),
    )
    return RouteLookupSchema(
        result=route_to_schema(lookup.route) if lookup.route else None,
        closest_dest_stop=nearest_to_schema(lookup.closest_destination),
        closest_source_stop=nearest_to_schema(lookup.closest_source),
    )


@router.post("/addroute", response_model=RouteCreatedSchema, status_code=201)
def add_route(
    req: AddRouteRequestSchema,
    service: NetworkAdminService = Depends(get_network_admin_service),
) -> RouteCreatedSchema:
    markers = [
        Marker(location=GeoPoint.parse(m.lt, m.ln), kind=m.kind, label=m.label)
        for m in req.markers
    ]
    route = service.add_route(markers=markers, polylines=req.polylines)
    return RouteCreatedSchema(
        message="Route added successfully", data=route_to_schema(route)
    )
