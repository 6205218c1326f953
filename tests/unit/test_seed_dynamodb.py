"""Tests for DynamoDB seed script."""

from __future__ import annotations

import sys
from pathlib import Path

import boto3
import pytest
from moto import mock_aws

from overlap.matching.matcher import match_accounts
from overlap.persistence.dynamodb_backend import (
    DynamoDBAccountListStore,
    DynamoDBConnectionStore,
    DynamoDBUserDirectory,
)

# Make scripts/ importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent / "scripts"))

from seed_dynamodb import create_tables, seed_demo_data  # noqa: E402


@pytest.fixture
def ddb():
    with mock_aws():
        yield boto3.resource("dynamodb", region_name="us-east-1")


class TestCreateTables:
    def test_creates_all_three_tables(self, ddb):
        create_tables(ddb, suffix="-test")
        client = boto3.client("dynamodb", region_name="us-east-1")
        tables = client.list_tables()["TableNames"]
        assert len(tables) == 3
        assert "overlap-account-lists-test" in tables

    def test_idempotent_skips_existing(self, ddb):
        create_tables(ddb, suffix="-test")
        create_tables(ddb, suffix="-test")  # should not raise
        client = boto3.client("dynamodb", region_name="us-east-1")
        assert len(client.list_tables()["TableNames"]) == 3


class TestSeedDemoData:
    def test_seeded_items_load_through_stores(self, ddb):
        create_tables(ddb, suffix="-test")
        seed_demo_data(ddb, suffix="-test")

        users = DynamoDBUserDirectory(table_suffix="-test")
        lists = DynamoDBAccountListStore(table_suffix="-test")
        connections = DynamoDBConnectionStore(table_suffix="-test")

        assert users.find_by_email("bob@example.com").id == "u-bob"
        assert connections.get_connection("c-alice-bob").status == "accepted"
        results = match_accounts(
            lists.get_published_entries("u-alice"), lists.get_published_entries("u-bob"),
        )
        assert [(r.account_name, r.type, r.their_type) for r in results] == [
            ("Acme", "Customer", "Partner"),
        ]
