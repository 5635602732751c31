from __future__ import annotations

import json
import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Sequence
from uuid import uuid4

from botocore.exceptions import BotoCoreError, ClientError

from stopmatch.adapters.aws import (
    AwsRuntimeConfig,
    DynamoDBClient,
    DynamoDbTables,
    dynamodb_client,
)
from stopmatch.app.ports.output import (
    ICheckpointRepository,
    IRouteRepository,
    IStopRepository,
    TransitStore,
)
from stopmatch.domain.exceptions import (
    CheckpointAlreadyExists,
    StopAlreadyExists,
    StoreError,
)
from stopmatch.domain.models import Checkpoint, GeoPoint, Marker, Stop, TransitRoute

logger = logging.getLogger(__name__)

Item = Mapping[str, Mapping[str, Any]]


_clock_lock = threading.Lock()
_last_created_at_ns = 0


def _next_created_at_ns() -> int:
    """Wall-clock ns, forced strictly increasing within the process."""

    global _last_created_at_ns
    with _clock_lock:
        _last_created_at_ns = max(time.time_ns(), _last_created_at_ns + 1)
        return _last_created_at_ns


def coordinate_key(point: GeoPoint) -> str:
    """Canonical hash key for a coordinate pair (repr round-trips floats)."""

    return f"{point.lat!r},{point.lon!r}"


def _is_conditional_check_failure(exc: ClientError) -> bool:
    code = (
        exc.response.get("Error", {}).get("Code")
        if isinstance(getattr(exc, "response", None), dict)
        else None
    )
    return code == "ConditionalCheckFailedException"


@contextmanager
def _store_errors(action: str) -> Iterator[None]:
    try:
        yield
    except (ClientError, BotoCoreError) as exc:
        raise StoreError(f"DynamoDB {action} failed: {exc}") from exc


def _num(value: float) -> dict[str, str]:
    return {"N": repr(float(value))}


def stop_to_item(stop: Stop, *, created_at_ns: int) -> dict[str, Any]:
    return {
        "stop_key": {"S": stop.stop_id or coordinate_key(stop.location)},
        "lt": _num(stop.location.lat),
        "ln": _num(stop.location.lon),
        "created_at_ns": {"N": str(created_at_ns)},
    }


def stop_from_item(item: Item) -> Stop:
    return Stop(
        location=GeoPoint(lat=float(item["lt"]["N"]), lon=float(item["ln"]["N"])),
        stop_id=item["stop_key"]["S"],
    )


def checkpoint_to_item(checkpoint: Checkpoint, *, created_at_ns: int) -> dict[str, Any]:
    return {
        "namee": {"S": checkpoint.name},
        "checkpoint_id": {"S": checkpoint.checkpoint_id or ""},
        "lt": _num(checkpoint.location.lat),
        "ln": _num(checkpoint.location.lon),
        "created_at_ns": {"N": str(created_at_ns)},
    }


def checkpoint_from_item(item: Item) -> Checkpoint:
    return Checkpoint(
        location=GeoPoint(lat=float(item["lt"]["N"]), lon=float(item["ln"]["N"])),
        name=item["namee"]["S"],
        checkpoint_id=item.get("checkpoint_id", {}).get("S") or None,
    )


def route_to_item(route: TransitRoute, *, created_at_ns: int) -> dict[str, Any]:
    markers = [
        {
            "lt": m.location.lat,
            "ln": m.location.lon,
            "type": m.kind,
            "namee": m.label,
        }
        for m in route.markers
    ]
    return {
        "route_id": {"S": route.route_id or ""},
        "markers": {"S": json.dumps(markers)},
        "polylines": {"S": json.dumps([list(row) for row in route.polylines])},
        "created_at_ns": {"N": str(created_at_ns)},
    }


def route_from_item(item: Item) -> TransitRoute:
    raw_markers = json.loads(item.get("markers", {}).get("S") or "[]")
    raw_polylines = json.loads(item.get("polylines", {}).get("S") or "[]")
    return TransitRoute(
        markers=tuple(
            Marker(
                location=GeoPoint(lat=float(m["lt"]), lon=float(m["ln"])),
                kind=str(m["type"]),
                label=m.get("namee"),
            )
            for m in raw_markers
        ),
        polylines=tuple(tuple(float(v) for v in row) for row in raw_polylines),
        route_id=item["route_id"]["S"],
    )


def _created_at(item: Item) -> int:
    return int(item.get("created_at_ns", {}).get("N", "0"))


@dataclass(slots=True)
class _DynamoDbTable:
    client: DynamoDBClient
    table_name: str

    def _scan_in_insertion_order(self) -> list[Item]:
        items: list[Item] = []
        with _store_errors(f"scan of {self.table_name}"):
            paginator = self.client.get_paginator("scan")
            for page in paginator.paginate(
                TableName=self.table_name, ConsistentRead=True
            ):
                items.extend(page.get("Items", []) or [])
        # Scan order is hash order; sort stably so callers see insertion order.
        items.sort(key=_created_at)
        return items

    def _get(self, key: dict[str, Any]) -> Item | None:
        with _store_errors(f"get_item on {self.table_name}"):
            resp = self.client.get_item(
                TableName=self.table_name, Key=key, ConsistentRead=True
            )
        return resp.get("Item") or None


@dataclass(slots=True)
class DynamoDbStopRepository(_DynamoDbTable, IStopRepository):
    """Bus stops keyed by their canonical coordinate string.

    The deterministic key plus a conditional put makes add_stop an atomic
    insert-if-absent, so concurrent duplicate inserts cannot both succeed.
    """

    def list_stops(self) -> list[Stop]:
        return [stop_from_item(item) for item in self._scan_in_insertion_order()]

    def find_stop(self, point: GeoPoint) -> Stop | None:
        item = self._get({"stop_key": {"S": coordinate_key(point)}})
        return stop_from_item(item) if item else None

    def add_stop(self, point: GeoPoint) -> Stop:
        stop = Stop(location=point, stop_id=coordinate_key(point))
        try:
            self.client.put_item(
                TableName=self.table_name,
                Item=stop_to_item(stop, created_at_ns=_next_created_at_ns()),
                ConditionExpression="attribute_not_exists(stop_key)",
            )
        except ClientError as exc:
            if _is_conditional_check_failure(exc):
                raise StopAlreadyExists() from exc
            raise StoreError(f"DynamoDB put_item on {self.table_name} failed: {exc}") from exc
        except BotoCoreError as exc:
            raise StoreError(f"DynamoDB put_item on {self.table_name} failed: {exc}") from exc
        return stop

    def delete_stop(self, point: GeoPoint) -> bool:
        with _store_errors(f"delete_item on {self.table_name}"):
            resp = self.client.delete_item(
                TableName=self.table_name,
                Key={"stop_key": {"S": coordinate_key(point)}},
                ReturnValues="ALL_OLD",
            )
        return bool(resp.get("Attributes"))


@dataclass(slots=True)
class DynamoDbCheckpointRepository(_DynamoDbTable, ICheckpointRepository):
    """Checkpoints keyed by name (``namee``)."""

    def find_by_name(self, name: str) -> Checkpoint | None:
        item = self._get({"namee": {"S": name}})
        return checkpoint_from_item(item) if item else None

    def add_checkpoint(self, *, location: GeoPoint, name: str) -> Checkpoint:
        checkpoint = Checkpoint(location=location, name=name, checkpoint_id=str(uuid4()))
        try:
            self.client.put_item(
                TableName=self.table_name,
                Item=checkpoint_to_item(checkpoint, created_at_ns=_next_created_at_ns()),
                ConditionExpression="attribute_not_exists(namee)",
            )
        except ClientError as exc:
            if _is_conditional_check_failure(exc):
                raise CheckpointAlreadyExists() from exc
            raise StoreError(f"DynamoDB put_item on {self.table_name} failed: {exc}") from exc
        except BotoCoreError as exc:
            raise StoreError(f"DynamoDB put_item on {self.table_name} failed: {exc}") from exc
        return checkpoint


@dataclass(slots=True)
class DynamoDbRouteRepository(_DynamoDbTable, IRouteRepository):
    """Routes with markers and polylines stored as JSON strings.

    Marker lists are nested documents, so matching happens client-side over
    a full scan rather than through a filter expression.
    """

    def add_route(
        self, *, markers: Sequence[Marker], polylines: Sequence[Sequence[float]]
    ) -> TransitRoute:
        route = TransitRoute(
            markers=tuple(markers),
            polylines=tuple(tuple(float(v) for v in row) for row in polylines),
            route_id=str(uuid4()),
        )
        with _store_errors(f"put_item on {self.table_name}"):
            self.client.put_item(
                TableName=self.table_name,
                Item=route_to_item(route, created_at_ns=_next_created_at_ns()),
            )
        return route

    def find_route_with_bus_stop(self, point: GeoPoint) -> TransitRoute | None:
        for item in self._scan_in_insertion_order():
            route = route_from_item(item)
            if route.has_bus_stop_at(point):
                return route
        return None


_KEY_ATTRIBUTES = {"stops": "stop_key", "checkpoints": "namee", "routes": "route_id"}


def ensure_tables(client: DynamoDBClient, tables: DynamoDbTables) -> list[str]:
    """Create any missing table (PAY_PER_REQUEST). Returns the names created."""

    with _store_errors("list_tables"):
        existing: set[str] = set()
        for page in client.get_paginator("list_tables").paginate():
            existing.update(page.get("TableNames", []) or [])

    created: list[str] = []
    for field_name, key_attr in _KEY_ATTRIBUTES.items():
        table = getattr(tables, field_name)
        if table in existing:
            continue
        with _store_errors(f"create_table {table}"):
            client.create_table(
                TableName=table,
                BillingMode="PAY_PER_REQUEST",
                AttributeDefinitions=[{"AttributeName": key_attr, "AttributeType": "S"}],
                KeySchema=[{"AttributeName": key_attr, "KeyType": "HASH"}],
            )
            client.get_waiter("table_exists").wait(TableName=table)
        logger.info("Created DynamoDB table %s", table)
        created.append(table)
    return created


def build_dynamodb_store(
    *,
    cfg: AwsRuntimeConfig | None = None,
    tables: DynamoDbTables | None = None,
    client: DynamoDBClient | None = None,
) -> TransitStore:
    client = client or dynamodb_client(cfg)
    tables = tables or DynamoDbTables.from_env()
    return TransitStore(
        stops=DynamoDbStopRepository(client=client, table_name=tables.stops),
        checkpoints=DynamoDbCheckpointRepository(
            client=client, table_name=tables.checkpoints
        ),
        routes=DynamoDbRouteRepository(client=client, table_name=tables.routes),
    )
