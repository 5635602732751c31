from __future__ import annotations

from dataclasses import dataclass, field

from .geo import GeoPoint

BUS_STOP_KIND = "busStop"


@dataclass(frozen=True, slots=True)
class Marker:
    """Typed waypoint inside a route's marker sequence."""

    location: GeoPoint
    kind: str
    label: str | None = None

    @property
    def is_bus_stop(self) -> bool:
        return self.kind == BUS_STOP_KIND


@dataclass(frozen=True, slots=True)
class TransitRoute:
    """Stored route: ordered markers plus raw polyline coordinate rows.

    Created once with its full content; there is no partial update.
    """

    markers: tuple[Marker, ...] = field(default_factory=tuple)
    polylines: tuple[tuple[float, ...], ...] = field(default_factory=tuple)
    route_id: str | None = None

    def has_bus_stop_at(self, point: GeoPoint) -> bool:
        # Exact coordinate equality, no distance tolerance.
        return any(
            m.is_bus_stop and m.location.lat == point.lat and m.location.lon == point.lon
            for m in self.markers
        )
