from __future__ import annotations

import logging
from dataclasses import dataclass

from stopmatch.app.ports.output import IRouteRepository, IStopRepository
from stopmatch.domain.algorithms.nearest import nearest_stop
from stopmatch.domain.exceptions import NoStopsFound
from stopmatch.domain.models import GeoPoint, NearestStop, TransitRoute

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RouteLookup:
    route: TransitRoute | None
    closest_source: NearestStop
    closest_destination: NearestStop


@dataclass(slots=True)
class RouteLookupService:
    """Resolves the nearest stop to each endpoint and a route through the source stop.

    - The stop set is re-read on every call; nothing is cached.
    - Only the source-side stop is used to match a route. The destination
      stop is resolved and returned but never matched against markers.
    """

    stop_repository: IStopRepository
    route_repository: IRouteRepository

    def lookup(self, *, source: GeoPoint, destination: GeoPoint) -> RouteLookup:
        logger.info(
            "Route lookup source=(%s, %s) destination=(%s, %s)",
            source.lat,
            source.lon,
            destination.lat,
            destination.lon,
        )

        stops = self.stop_repository.list_stops()
        if not stops:
            raise NoStopsFound()

        closest_source = nearest_stop(source, stops)
        closest_destination = nearest_stop(destination, stops)
        logger.debug(
            "Closest stops source=%s (%.3f km) destination=%s (%.3f km)",
            closest_source.stop.location,
            closest_source.distance_km,
            closest_destination.stop.location,
            closest_destination.distance_km,
        )

        route = self.route_repository.find_route_with_bus_stop(
            closest_source.stop.location
        )
        if route is None:
            logger.info("No route has a busStop marker at %s", closest_source.stop.location)

        return RouteLookup(
            route=route,
            closest_source=closest_source,
            closest_destination=closest_destination,
        )
