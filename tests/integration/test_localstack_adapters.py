from __future__ import annotations

import pytest

from stopmatch.app.ports.output import TransitStore
from stopmatch.app.services.network_admin_service import NetworkAdminService
from stopmatch.app.services.route_lookup_service import RouteLookupService
from stopmatch.domain.exceptions import CheckpointAlreadyExists, StopAlreadyExists
from stopmatch.domain.models import GeoPoint, Marker


@pytest.mark.integration
def test_dynamodb_stop_repository_insert_if_absent(dynamodb_store: TransitStore) -> None:
    stops = dynamodb_store.stops

    stops.add_stop(GeoPoint(lat=1.0, lon=2.0))
    with pytest.raises(StopAlreadyExists):
        stops.add_stop(GeoPoint(lat=1.0, lon=2.0))

    assert [s.location for s in stops.list_stops()] == [GeoPoint(lat=1.0, lon=2.0)]
    assert stops.find_stop(GeoPoint(lat=1.0, lon=2.0)) is not None


@pytest.mark.integration
def test_dynamodb_stops_list_in_insertion_order(dynamodb_store: TransitStore) -> None:
    points = [GeoPoint(lat=float(i), lon=-float(i)) for i in range(12)]
    for p in points:
        dynamodb_store.stops.add_stop(p)

    assert [s.location for s in dynamodb_store.stops.list_stops()] == points


@pytest.mark.integration
def test_dynamodb_delete_stop(dynamodb_store: TransitStore) -> None:
    dynamodb_store.stops.add_stop(GeoPoint(lat=1.0, lon=2.0))

    assert dynamodb_store.stops.delete_stop(GeoPoint(lat=3.0, lon=4.0)) is False
    assert dynamodb_store.stops.delete_stop(GeoPoint(lat=1.0, lon=2.0)) is True
    assert dynamodb_store.stops.list_stops() == []


@pytest.mark.integration
def test_dynamodb_checkpoints_unique_by_name(dynamodb_store: TransitStore) -> None:
    service = NetworkAdminService(
        stop_repository=dynamodb_store.stops,
        checkpoint_repository=dynamodb_store.checkpoints,
        route_repository=dynamodb_store.routes,
    )
    created = service.add_checkpoint(location=GeoPoint(lat=5.0, lon=6.0), name="Main gate")

    with pytest.raises(CheckpointAlreadyExists):
        dynamodb_store.checkpoints.add_checkpoint(
            location=GeoPoint(lat=7.0, lon=8.0), name="Main gate"
        )

    assert service.find_checkpoint("Main gate") == created


@pytest.mark.integration
def test_route_lookup_end_to_end(dynamodb_store: TransitStore) -> None:
    dynamodb_store.stops.add_stop(GeoPoint(lat=10.0, lon=20.0))
    dynamodb_store.stops.add_stop(GeoPoint(lat=30.0, lon=40.0))
    route = dynamodb_store.routes.add_route(
        markers=[
            Marker(location=GeoPoint(lat=10.0, lon=20.0), kind="busStop"),
            Marker(location=GeoPoint(lat=30.0, lon=40.0), kind="busStop", label="End"),
        ],
        polylines=[[10.0, 20.0], [30.0, 40.0]],
    )
    service = RouteLookupService(
        stop_repository=dynamodb_store.stops, route_repository=dynamodb_store.routes
    )

    lookup = service.lookup(
        source=GeoPoint(lat=10.001, lon=20.001), destination=GeoPoint(lat=29.9, lon=39.9)
    )

    assert lookup.route == route
    assert lookup.closest_source.stop.location == GeoPoint(lat=10.0, lon=20.0)
    assert lookup.closest_destination.stop.location == GeoPoint(lat=30.0, lon=40.0)
