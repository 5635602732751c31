from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from stopmatch.domain.models import GeoPoint, Marker, TransitRoute


class IRouteRepository(ABC):
    """Port for stored transit routes."""

    @abstractmethod
    def add_route(
        self, *, markers: Sequence[Marker], polylines: Sequence[Sequence[float]]
    ) -> TransitRoute:
        raise NotImplementedError

    @abstractmethod
    def find_route_with_bus_stop(self, point: GeoPoint) -> TransitRoute | None:
        """First route (insertion order) with a busStop marker exactly at ``point``.

        Returns None when nothing matches; store failures raise StoreError.
        """
