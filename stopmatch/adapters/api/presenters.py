from __future__ import annotations

from stopmatch.adapters.api.schemas.checkpoints import CheckpointSchema
from stopmatch.adapters.api.schemas.routes import MarkerSchema, RouteSchema
from stopmatch.adapters.api.schemas.stops import NearestStopSchema, StopSchema
from stopmatch.domain.models import Checkpoint, NearestStop, Stop, TransitRoute


def stop_to_schema(stop: Stop) -> StopSchema:
    return StopSchema(id=stop.stop_id, lt=stop.location.lat, ln=stop.location.lon)


def nearest_to_schema(nearest: NearestStop) -> NearestStopSchema:
    return NearestStopSchema(
        stop=stop_to_schema(nearest.stop), distance=nearest.distance_km
    )


def checkpoint_to_schema(checkpoint: Checkpoint) -> CheckpointSchema:
    return CheckpointSchema(
        id=checkpoint.checkpoint_id,
        lt=checkpoint.location.lat,
        ln=checkpoint.location.lon,
        name=checkpoint.name,
    )


def route_to_schema(route: TransitRoute) -> RouteSchema:
    return RouteSchema(
        id=route.route_id,
        markers=[
            MarkerSchema(
                lt=m.location.lat,
                ln=m.location.lon,
                kind=m.kind,
                label=m.label,
            )
            for m in route.markers
        ],
        polylines=[list(row) for row in route.polylines],
    )
