from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from stopmatch.adapters.persistence import build_memory_store
from stopmatch.adapters.persistence.memory_transit_store import InMemoryStopRepository
from stopmatch.app.services.network_admin_service import NetworkAdminService
from stopmatch.domain.exceptions import (
    CheckpointAlreadyExists,
    InvalidInput,
    StopAlreadyExists,
)
from stopmatch.domain.models import GeoPoint, Marker


def _service() -> NetworkAdminService:
    store = build_memory_store()
    return NetworkAdminService(
        stop_repository=store.stops,
        checkpoint_repository=store.checkpoints,
        route_repository=store.routes,
    )


def test_add_stop_twice_conflicts_and_keeps_one_instance() -> None:
    service = _service()
    point = GeoPoint(lat=1.0, lon=2.0)

    service.add_stop(point)
    with pytest.raises(StopAlreadyExists):
        service.add_stop(point)

    stops = service.stop_repository.list_stops()
    assert [s.location for s in stops] == [point]


def test_stop_exists_and_delete() -> None:
    service = _service()
    point = GeoPoint(lat=3.0, lon=4.0)
    assert not service.stop_exists(point)

    service.add_stop(point)
    assert service.stop_exists(point)

    assert service.delete_stop(point) is True
    assert not service.stop_exists(point)


def test_delete_missing_stop_is_not_an_error() -> None:
    assert _service().delete_stop(GeoPoint(lat=89.0, lon=99.0)) is False


class _StaleCheckStopRepository(InMemoryStopRepository):
    """Existence check always misses, as if a concurrent insert is not yet visible."""

    def find_stop(self, point):  # type: ignore[override]
        return None


def test_atomic_insert_rejects_duplicate_when_check_is_stale() -> None:
    store = build_memory_store()
    service = NetworkAdminService(
        stop_repository=_StaleCheckStopRepository(),
        checkpoint_repository=store.checkpoints,
        route_repository=store.routes,
    )
    point = GeoPoint(lat=1.0, lon=2.0)

    service.add_stop(point)
    with pytest.raises(StopAlreadyExists):
        service.add_stop(point)
    assert len(service.stop_repository.list_stops()) == 1


def test_concurrent_adds_of_same_stop_insert_exactly_once() -> None:
    service = _service()
    point = GeoPoint(lat=12.5, lon=-7.25)
    workers = 8
    barrier = threading.Barrier(workers)

    def _add() -> str:
        barrier.wait()
        try:
            service.add_stop(point)
            return "created"
        except StopAlreadyExists:
            return "conflict"

    with ThreadPoolExecutor(max_workers=workers) as pool:
        outcomes = list(pool.map(lambda _: _add(), range(workers)))

    assert outcomes.count("created") == 1
    assert outcomes.count("conflict") == workers - 1
    assert len(service.stop_repository.list_stops()) == 1


def test_checkpoints_are_unique_by_name() -> None:
    service = _service()
    service.add_checkpoint(location=GeoPoint(lat=1.0, lon=1.0), name="Main gate")

    with pytest.raises(CheckpointAlreadyExists):
        service.add_checkpoint(location=GeoPoint(lat=2.0, lon=2.0), name="Main gate")

    found = service.find_checkpoint("Main gate")
    assert found is not None
    assert found.location == GeoPoint(lat=1.0, lon=1.0)
    assert service.find_checkpoint("Library") is None


def test_checkpoint_name_is_required() -> None:
    service = _service()
    with pytest.raises(InvalidInput):
        service.add_checkpoint(location=GeoPoint(lat=1.0, lon=1.0), name="")
    with pytest.raises(InvalidInput):
        service.find_checkpoint("")


def test_add_route_keeps_marker_order_and_polylines() -> None:
    service = _service()
    markers = [
        Marker(location=GeoPoint(lat=1.0, lon=1.0), kind="busStop"),
        Marker(location=GeoPoint(lat=1.5, lon=1.5), kind="checkpoint", label="Gate"),
        Marker(location=GeoPoint(lat=2.0, lon=2.0), kind="busStop"),
    ]

    route = service.add_route(markers=markers, polylines=[[1, 1], [1.5, 1.5], [2, 2]])

    assert route.route_id
    assert list(route.markers) == markers
    assert route.polylines == ((1.0, 1.0), (1.5, 1.5), (2.0, 2.0))
