from __future__ import annotations

from abc import ABC, abstractmethod

from stopmatch.domain.models import GeoPoint, Stop


class IStopRepository(ABC):
    """Port for the bus stop collection."""

    @abstractmethod
    def list_stops(self) -> list[Stop]:
        """Return every stop in the store's natural (insertion) order."""

    @abstractmethod
    def find_stop(self, point: GeoPoint) -> Stop | None:
        raise NotImplementedError

    @abstractmethod
    def add_stop(self, point: GeoPoint) -> Stop:
        """Insert a stop unless one already exists at exactly this coordinate.

        Must be atomic: raises StopAlreadyExists when the coordinate is taken,
        even if a concurrent writer won the race after the caller's check.
        """

    @abstractmethod
    def delete_stop(self, point: GeoPoint) -> bool:
        """Delete one stop at this coordinate. Returns False if none existed."""
