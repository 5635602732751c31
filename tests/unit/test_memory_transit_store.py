from __future__ import annotations

import pytest

from stopmatch.adapters.persistence import build_memory_store
from stopmatch.domain.exceptions import CheckpointAlreadyExists, StopAlreadyExists
from stopmatch.domain.models import GeoPoint, Marker


def test_stops_are_listed_in_insertion_order() -> None:
    store = build_memory_store()
    points = [GeoPoint(lat=3.0, lon=3.0), GeoPoint(lat=1.0, lon=1.0), GeoPoint(lat=2.0, lon=2.0)]
    for p in points:
        store.stops.add_stop(p)

    assert [s.location for s in store.stops.list_stops()] == points


def test_list_stops_returns_a_snapshot() -> None:
    store = build_memory_store()
    store.stops.add_stop(GeoPoint(lat=1.0, lon=1.0))
    snapshot = store.stops.list_stops()

    store.stops.add_stop(GeoPoint(lat=2.0, lon=2.0))

    assert len(snapshot) == 1


def test_add_stop_is_insert_if_absent() -> None:
    store = build_memory_store()
    first = store.stops.add_stop(GeoPoint(lat=1.0, lon=2.0))

    with pytest.raises(StopAlreadyExists):
        store.stops.add_stop(GeoPoint(lat=1.0, lon=2.0))

    assert store.stops.find_stop(GeoPoint(lat=1.0, lon=2.0)) == first


def test_delete_stop_reports_whether_anything_was_removed() -> None:
    store = build_memory_store()
    store.stops.add_stop(GeoPoint(lat=1.0, lon=2.0))

    assert store.stops.delete_stop(GeoPoint(lat=9.0, lon=9.0)) is False
    assert store.stops.delete_stop(GeoPoint(lat=1.0, lon=2.0)) is True
    assert store.stops.list_stops() == []


def test_checkpoint_insert_if_absent() -> None:
    store = build_memory_store()
    store.checkpoints.add_checkpoint(location=GeoPoint(lat=1.0, lon=1.0), name="A")

    with pytest.raises(CheckpointAlreadyExists):
        store.checkpoints.add_checkpoint(location=GeoPoint(lat=1.0, lon=1.0), name="A")


def test_route_match_requires_bus_stop_kind() -> None:
    store = build_memory_store()
    store.routes.add_route(
        markers=[Marker(location=GeoPoint(lat=10.0, lon=20.0), kind="checkpoint")],
        polylines=[],
    )
    assert store.routes.find_route_with_bus_stop(GeoPoint(lat=10.0, lon=20.0)) is None

    match = store.routes.add_route(
        markers=[Marker(location=GeoPoint(lat=10.0, lon=20.0), kind="busStop")],
        polylines=[],
    )
    assert store.routes.find_route_with_bus_stop(GeoPoint(lat=10.0, lon=20.0)) == match
