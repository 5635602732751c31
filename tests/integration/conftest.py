from __future__ import annotations

import os
import urllib.request
from typing import Iterator
from uuid import uuid4

import pytest

from stopmatch.adapters.aws import DynamoDbTables, dynamodb_client
from stopmatch.adapters.persistence import build_dynamodb_store, ensure_tables
from stopmatch.app.ports.output import TransitStore


def _localstack_healthy(endpoint_url: str) -> bool:
    url = endpoint_url.rstrip("/") + "/_localstack/health"
    try:
        with urllib.request.urlopen(url, timeout=1.5) as resp:  # nosec B310
            return 200 <= resp.status < 300
    except OSError:
        return False


@pytest.fixture(scope="session", autouse=True)
def localstack_env() -> None:
    """Set sane defaults so boto3 can talk to LocalStack in integration tests."""

    os.environ.setdefault("USE_LOCALSTACK", "true")
    os.environ.setdefault("ENDPOINT_URL", "http://localhost:4566")
    os.environ.setdefault("AWS_REGION", "eu-west-1")

    # boto3 requires some credentials to be present, even for LocalStack.
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "test")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test")


@pytest.fixture(scope="session")
def require_localstack(localstack_env: None) -> str:
    endpoint_url = os.environ.get("ENDPOINT_URL", "http://localhost:4566")
    if not _localstack_healthy(endpoint_url):
        msg = f"LocalStack not reachable at {endpoint_url}"

        # CI starts LocalStack, so a missing instance there is a real failure.
        if (
            os.getenv("CI")
            or os.getenv("GITHUB_ACTIONS")
            or os.getenv("REQUIRE_LOCALSTACK")
        ):
            pytest.fail(msg, pytrace=False)

        pytest.skip(f"{msg}; skipping integration tests")
    return endpoint_url


@pytest.fixture
def dynamodb_store(require_localstack: str) -> Iterator[TransitStore]:
    """Fresh tables per test so insertion order and uniqueness start clean."""

    suffix = uuid4().hex[:8]
    tables = DynamoDbTables(
        stops=f"stopmatch-test-stops-{suffix}",
        checkpoints=f"stopmatch-test-checkpoints-{suffix}",
        routes=f"stopmatch-test-routes-{suffix}",
    )
    client = dynamodb_client()
    ensure_tables(client, tables)
    yield build_dynamodb_store(client=client, tables=tables)
    for name in (tables.stops, tables.checkpoints, tables.routes):
        client.delete_table(TableName=name)
