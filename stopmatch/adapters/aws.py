from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

import boto3
from botocore.client import BaseClient

if TYPE_CHECKING:
    from mypy_boto3_dynamodb import DynamoDBClient
else:
    DynamoDBClient = BaseClient  # type: ignore[misc,assignment]


def env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True, slots=True)
class AwsRuntimeConfig:
    use_localstack: bool
    region: str
    endpoint_url: str | None

    @staticmethod
    def from_env() -> "AwsRuntimeConfig":
        endpoint_url = os.getenv("ENDPOINT_URL")
        if endpoint_url is not None:
            endpoint_url = endpoint_url.strip() or None

        return AwsRuntimeConfig(
            use_localstack=env_bool("USE_LOCALSTACK", False),
            region=os.getenv("AWS_REGION", "eu-west-1"),
            endpoint_url=endpoint_url,
        )

    def resolved_endpoint_url(self) -> str | None:
        """ENDPOINT_URL wins; USE_LOCALSTACK falls back to LocalStack's edge port."""
        if self.endpoint_url:
            return self.endpoint_url
        if self.use_localstack:
            return os.getenv("LOCALSTACK_ENDPOINT_URL", "http://localhost:4566")
        return None


@dataclass(frozen=True, slots=True)
class DynamoDbTables:
    """Table names for the three collections.

    Env vars:
      - DDB_STOPS_TABLE (default: stopmatch-bus-stops)
      - DDB_CHECKPOINTS_TABLE (default: stopmatch-checkpoints)
      - DDB_ROUTES_TABLE (default: stopmatch-routes)
    """

    stops: str = "stopmatch-bus-stops"
    checkpoints: str = "stopmatch-checkpoints"
    routes: str = "stopmatch-routes"

    @staticmethod
    def from_env() -> "DynamoDbTables":
        defaults = DynamoDbTables()
        return DynamoDbTables(
            stops=os.getenv("DDB_STOPS_TABLE") or defaults.stops,
            checkpoints=os.getenv("DDB_CHECKPOINTS_TABLE") or defaults.checkpoints,
            routes=os.getenv("DDB_ROUTES_TABLE") or defaults.routes,
        )


def dynamodb_client(cfg: AwsRuntimeConfig | None = None) -> DynamoDBClient:
    cfg = cfg or AwsRuntimeConfig.from_env()
    session = boto3.session.Session(region_name=cfg.region)
    return session.client("dynamodb", endpoint_url=cfg.resolved_endpoint_url())
