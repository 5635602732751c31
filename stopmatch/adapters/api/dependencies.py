from __future__ import annotations

import logging
import os

from fastapi import Depends, Request

from stopmatch.adapters.aws import DynamoDbTables, dynamodb_client, env_bool
from stopmatch.adapters.persistence import (
    build_dynamodb_store,
    build_memory_store,
    ensure_tables,
)
from stopmatch.app.ports.output import TransitStore
from stopmatch.app.services.network_admin_service import NetworkAdminService
from stopmatch.app.services.route_lookup_service import RouteLookupService

logger = logging.getLogger(__name__)


def build_transit_store() -> TransitStore:
    """Create the process-wide store handle from env.

    Env vars:
      - STORE_BACKEND: dynamodb|memory (default: dynamodb)
      - DDB_CREATE_TABLES: create missing DynamoDB tables on startup
    """

    backend = (os.getenv("STORE_BACKEND") or "dynamodb").strip().lower()
    if backend == "memory":
        logger.info("Using in-memory transit store")
        return build_memory_store()
    if backend != "dynamodb":
        raise RuntimeError(f"Unknown STORE_BACKEND: {backend}")

    client = dynamodb_client()
    tables = DynamoDbTables.from_env()
    if env_bool("DDB_CREATE_TABLES", False):
        ensure_tables(client, tables)
    logger.info(
        "Using DynamoDB transit store (stops=%s, checkpoints=%s, routes=%s)",
        tables.stops,
        tables.checkpoints,
        tables.routes,
    )
    return build_dynamodb_store(client=client, tables=tables)


def get_transit_store(request: Request) -> TransitStore:
    store = getattr(request.app.state, "transit_store", None)
    if store is None:
        raise RuntimeError("Transit store not initialized")
    return store


def get_route_lookup_service(
    store: TransitStore = Depends(get_transit_store),
) -> RouteLookupService:
    return RouteLookupService(
        stop_repository=store.stops, route_repository=store.routes
    )


def get_network_admin_service(
    store: TransitStore = Depends(get_transit_store),
) -> NetworkAdminService:
    return NetworkAdminService(
        stop_repository=store.stops,
        checkpoint_repository=store.checkpoints,
        route_repository=store.routes,
    )
