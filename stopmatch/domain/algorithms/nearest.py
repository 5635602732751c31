from __future__ import annotations

from typing import Iterable

from stopmatch.domain.exceptions import NoStopsFound
from stopmatch.domain.models import GeoPoint, NearestStop, Stop

from .geo_utils import haversine_distance_km


def nearest_stop(point: GeoPoint, stops: Iterable[Stop]) -> NearestStop:
    """Exhaustive scan for the stop closest to ``point``.

    Ties keep the first stop encountered (strict ``<``), so the caller's
    iteration order decides between equidistant stops.
    """

    best: Stop | None = None
    best_km = float("inf")
    for stop in stops:
        d = haversine_distance_km(point, stop.location)
        if d < best_km:
            best, best_km = stop, d

    if best is None:
        raise NoStopsFound()
    return NearestStop(stop=best, distance_km=best_km)
