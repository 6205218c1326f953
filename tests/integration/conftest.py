"""Integration fixtures: Overlap tables on a LocalStack DynamoDB endpoint.

The endpoint comes from ``OVERLAP_DYNAMO_ENDPOINT_URL`` (LocalStack's default
port when unset). Tables are created and seeded once per session under their
own suffix and dropped when the session ends.
"""

from __future__ import annotations

import sys
from pathlib import Path

import boto3
import pytest
from botocore.exceptions import BotoCoreError, ClientError

from overlap.core.config import AppSettings, DynamoDBConfig
from overlap.persistence import Persistence, create_persistence

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent / "scripts"))
from seed_dynamodb import TABLE_DEFINITIONS, create_tables, seed_demo_data  # noqa: E402

INTEGRATION_SUFFIX = "-inttest"


def _dynamo_config() -> DynamoDBConfig:
    config = DynamoDBConfig(table_suffix=INTEGRATION_SUFFIX)
    if config.endpoint_url is None:
        config.endpoint_url = "http://localhost:4566"
    return config


DYNAMO = _dynamo_config()


def _endpoint_reachable(config: DynamoDBConfig) -> bool:
    client = boto3.client("dynamodb", region_name=config.region, endpoint_url=config.endpoint_url)
    try:
        client.list_tables(Limit=1)
    except (BotoCoreError, ClientError):
        return False
    return True


requires_dynamodb = pytest.mark.skipif(
    not _endpoint_reachable(DYNAMO),
    reason=f"No DynamoDB endpoint at {DYNAMO.endpoint_url}",
)


@pytest.fixture(scope="session")
def seeded_tables():
    """Create and seed the Overlap tables, then drop them after the session."""
    ddb = boto3.resource("dynamodb", region_name=DYNAMO.region, endpoint_url=DYNAMO.endpoint_url)
    create_tables(ddb, suffix=DYNAMO.table_suffix)
    seed_demo_data(ddb, suffix=DYNAMO.table_suffix)
    yield DYNAMO
    for defn in TABLE_DEFINITIONS:
        ddb.Table(f"{defn['name']}{DYNAMO.table_suffix}").delete()


@pytest.fixture
def persistence(seeded_tables) -> Persistence:
    """DynamoDB-backed stores wired the way the app wires them."""
    return create_persistence(AppSettings(backend="dynamodb", dynamodb=seeded_tables))
