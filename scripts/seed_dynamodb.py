"""Create the Overlap DynamoDB tables and seed demo users, lists and a connection.

Usage:
    python scripts/seed_dynamodb.py --endpoint-url http://localhost:4566
"""

from __future__ import annotations

import argparse
from typing import Any

import boto3

TABLE_DEFINITIONS: list[dict[str, Any]] = [
    {"name": "overlap-users"},
    {"name": "overlap-account-lists"},
    {"name": "overlap-connections"},
]

SEED_TIMESTAMP = "2024-01-15T09:00:00+00:00"

DEMO_USERS: list[dict[str, str]] = [
    {"id": "u-alice", "name": "Alice Rep", "email": "alice@example.com"},
    {"id": "u-bob", "name": "Bob Rep", "email": "bob@example.com"},
]

DEMO_LISTS: list[dict[str, Any]] = [
    {
        "id": "l-alice-q1", "ownerId": "u-alice", "name": "Q1 targets", "status": "active",
        "accounts": [
            {"accountName": "Acme", "type": "Customer"},
            {"accountName": "Globex", "type": "Prospect"},
        ],
    },
    {
        "id": "l-bob-q1", "ownerId": "u-bob", "name": "Territory", "status": "active",
        "accounts": [
            {"accountName": "acme", "type": "Partner"},
            {"accountName": "Initech", "type": "Prospect"},
        ],
    },
]

DEMO_CONNECTION: dict[str, str] = {
    "id": "c-alice-bob", "senderId": "u-alice", "receiverId": "u-bob", "status": "accepted",
}


def create_tables(ddb: Any, suffix: str = "") -> None:
    """Create all 3 DynamoDB tables. Skips if table already exists."""
    client = ddb.meta.client
    existing = client.list_tables().get("TableNames", [])

    for defn in TABLE_DEFINITIONS:
        table_name = f"{defn['name']}{suffix}"
        if table_name in existing:
            print(f"  Table {table_name} already exists, skipping")
            continue
        client.create_table(
            TableName=table_name,
            KeySchema=[
                {"AttributeName": "PK", "KeyType": "HASH"},
                {"AttributeName": "SK", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "PK", "AttributeType": "S"},
                {"AttributeName": "SK", "AttributeType": "S"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        print(f"  Created table {table_name}")


def seed_demo_data(ddb: Any, suffix: str = "") -> None:
    """Write two demo users with published lists and an accepted connection."""
    tbl = ddb.Table(f"overlap-users{suffix}")
    with tbl.batch_writer() as batch:
        for user in DEMO_USERS:
            batch.put_item(Item={"PK": f"USER#{user['id']}", "SK": "PROFILE",
                                 **user, "createdAt": SEED_TIMESTAMP})
            batch.put_item(Item={"PK": f"EMAIL#{user['email']}", "SK": "USER", "userId": user["id"]})
    print(f"  Seeded {len(DEMO_USERS)} users")

    tbl = ddb.Table(f"overlap-account-lists{suffix}")
    with tbl.batch_writer() as batch:
        for item in DEMO_LISTS:
            pk, sk = f"OWNER#{item['ownerId']}", f"LIST#{item['id']}"
            meta = {k: v for k, v in item.items() if k != "accounts"}
            batch.put_item(Item={
                "PK": pk, "SK": sk, **meta, "entryCount": len(item["accounts"]),
                "createdAt": SEED_TIMESTAMP, "updatedAt": SEED_TIMESTAMP,
            })
            for position, account in enumerate(item["accounts"]):
                batch.put_item(Item={
                    "PK": pk, "SK": f"{sk}#ENTRY#{position:08d}",
                    "id": f"{item['id']}-{position}", **account,
                })
    print(f"  Seeded {len(DEMO_LISTS)} account lists")

    tbl = ddb.Table(f"overlap-connections{suffix}")
    conn = DEMO_CONNECTION
    with tbl.batch_writer() as batch:
        batch.put_item(Item={"PK": f"CONN#{conn['id']}", "SK": "META", **conn, "createdAt": SEED_TIMESTAMP})
        batch.put_item(Item={"PK": f"USER#{conn['senderId']}", "SK": f"CONN#{conn['id']}",
                             "otherUserId": conn["receiverId"]})
        batch.put_item(Item={"PK": f"USER#{conn['receiverId']}", "SK": f"CONN#{conn['id']}",
                             "otherUserId": conn["senderId"]})
    print("  Seeded 1 connection")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed DynamoDB tables for Overlap")
    parser.add_argument("--endpoint-url", default=None, help="DynamoDB endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--table-suffix", default="", help="Table name suffix (e.g. -dev)")
    parser.add_argument("--region", default="us-east-1", help="AWS region")
    parser.add_argument("--no-demo", action="store_true", help="Create tables only")
    args = parser.parse_args()

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url

    ddb = boto3.resource("dynamodb", **kwargs)

    print("Creating tables...")
    create_tables(ddb, suffix=args.table_suffix)

    if not args.no_demo:
        print("Seeding demo data...")
        seed_demo_data(ddb, suffix=args.table_suffix)

    print("Done!")


if __name__ == "__main__":
    main()
