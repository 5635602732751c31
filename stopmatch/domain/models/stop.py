from __future__ import annotations

from dataclasses import dataclass

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class Stop:
    location: GeoPoint
    stop_id: str | None = None


@dataclass(frozen=True, slots=True)
class NearestStop:
    """A resolved stop and its great-circle distance (km) to the query point."""

    stop: Stop
    distance_km: float
