from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from stopmatch.app.ports.output import (
    ICheckpointRepository,
    IRouteRepository,
    IStopRepository,
)
from stopmatch.domain.exceptions import (
    CheckpointAlreadyExists,
    InvalidInput,
    StopAlreadyExists,
)
from stopmatch.domain.models import Checkpoint, GeoPoint, Marker, Stop, TransitRoute

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class NetworkAdminService:
    """Create/check/delete operations for stops, checkpoints and routes."""

    stop_repository: IStopRepository
    checkpoint_repository: ICheckpointRepository
    route_repository: IRouteRepository

    def add_stop(self, point: GeoPoint) -> Stop:
        # Check first, then rely on the adapter's insert-if-absent for the race.
        if self.stop_repository.find_stop(point) is not None:
            raise StopAlreadyExists()
        stop = self.stop_repository.add_stop(point)
        logger.info("Added bus stop %s", stop.location)
        return stop

    def stop_exists(self, point: GeoPoint) -> bool:
        return self.stop_repository.find_stop(point) is not None

    def delete_stop(self, point: GeoPoint) -> bool:
        deleted = self.stop_repository.delete_stop(point)
        if not deleted:
            logger.info("No bus stop at %s to delete", point)
        return deleted

    def add_checkpoint(self, *, location: GeoPoint, name: str) -> Checkpoint:
        if not name:
            raise InvalidInput("Latitude, longitude, and name are required")
        if self.checkpoint_repository.find_by_name(name) is not None:
            raise CheckpointAlreadyExists()
        checkpoint = self.checkpoint_repository.add_checkpoint(
            location=location, name=name
        )
        logger.info("Added checkpoint %r at %s", name, location)
        return checkpoint

    def find_checkpoint(self, name: str) -> Checkpoint | None:
        if not name:
            raise InvalidInput("Checkpoint name is required")
        return self.checkpoint_repository.find_by_name(name)

    def add_route(
        self, *, markers: Sequence[Marker], polylines: Sequence[Sequence[float]]
    ) -> TransitRoute:
        route = self.route_repository.add_route(markers=markers, polylines=polylines)
        logger.info(
            "Added route %s with %d markers and %d polylines",
            route.route_id,
            len(route.markers),
            len(route.polylines),
        )
        return route
