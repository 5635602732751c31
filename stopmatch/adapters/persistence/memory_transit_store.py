from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Sequence
from uuid import uuid4

from stopmatch.app.ports.output import (
    ICheckpointRepository,
    IRouteRepository,
    IStopRepository,
    TransitStore,
)
from stopmatch.domain.exceptions import CheckpointAlreadyExists, StopAlreadyExists
from stopmatch.domain.models import Checkpoint, GeoPoint, Marker, Stop, TransitRoute


def _same_point(a: GeoPoint, b: GeoPoint) -> bool:
    return a.lat == b.lat and a.lon == b.lon


@dataclass(slots=True)
class InMemoryStopRepository(IStopRepository):
    """Insertion-ordered stop list. Safe to share across request threads."""

    _stops: list[Stop] = field(default_factory=list, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def list_stops(self) -> list[Stop]:
        with self._lock:
            return list(self._stops)

    def find_stop(self, point: GeoPoint) -> Stop | None:
        with self._lock:
            return next((s for s in self._stops if _same_point(s.location, point)), None)

    def add_stop(self, point: GeoPoint) -> Stop:
        with self._lock:
            if any(_same_point(s.location, point) for s in self._stops):
                raise StopAlreadyExists()
            stop = Stop(location=point, stop_id=str(uuid4()))
            self._stops.append(stop)
            return stop

    def delete_stop(self, point: GeoPoint) -> bool:
        with self._lock:
            for i, stop in enumerate(self._stops):
                if _same_point(stop.location, point):
                    del self._stops[i]
                    return True
            return False


@dataclass(slots=True)
class InMemoryCheckpointRepository(ICheckpointRepository):
    _by_name: dict[str, Checkpoint] = field(default_factory=dict, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def find_by_name(self, name: str) -> Checkpoint | None:
        with self._lock:
            return self._by_name.get(name)

    def add_checkpoint(self, *, location: GeoPoint, name: str) -> Checkpoint:
        with self._lock:
            if name in self._by_name:
                raise CheckpointAlreadyExists()
            checkpoint = Checkpoint(location=location, name=name, checkpoint_id=str(uuid4()))
            self._by_name[name] = checkpoint
            return checkpoint


@dataclass(slots=True)
class InMemoryRouteRepository(IRouteRepository):
    _routes: list[TransitRoute] = field(default_factory=list, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def add_route(
        self, *, markers: Sequence[Marker], polylines: Sequence[Sequence[float]]
    ) -> TransitRoute:
        route = TransitRoute(
            markers=tuple(markers),
            polylines=tuple(tuple(float(v) for v in row) for row in polylines),
            route_id=str(uuid4()),
        )
        with self._lock:
            self._routes.append(route)
        return route

    def find_route_with_bus_stop(self, point: GeoPoint) -> TransitRoute | None:
        with self._lock:
            routes = list(self._routes)
        return next((r for r in routes if r.has_bus_stop_at(point)), None)


def build_memory_store() -> TransitStore:
    return TransitStore(
        stops=InMemoryStopRepository(),
        checkpoints=InMemoryCheckpointRepository(),
        routes=InMemoryRouteRepository(),
    )
