"""DynamoDB backends for users, account lists and connections.

All tables share a PK/SK string key schema and an environment suffix.
Published entries are read through an optional cache.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from overlap.core.exceptions import PersistenceError
from overlap.models.accounts import AccountList, AccountListEntry
from overlap.models.connections import Connection
from overlap.models.users import User

logger = logging.getLogger(__name__)

USERS_TABLE = "overlap-users"
ACCOUNT_LISTS_TABLE = "overlap-account-lists"
CONNECTIONS_TABLE = "overlap-connections"


class _DynamoDBStore:
    """Shared table access for the DynamoDB stores."""

    def __init__(self, table_suffix: str = "", region: str = "us-east-1",
                 endpoint_url: str | None = None) -> None:
        self._table_suffix = table_suffix
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._ddb = boto3.resource("dynamodb", **kwargs)

    def _table(self, base: str):
        return self._ddb.Table(f"{base}{self._table_suffix}")

    def _query_pk(self, table_base: str, pk: str, sk_prefix: str | None = None) -> list[dict[str, Any]]:
        """Query all items with a given partition key, following pagination."""
        condition = Key("PK").eq(pk)
        if sk_prefix:
            condition = condition & Key("SK").begins_with(sk_prefix)
        kwargs: dict[str, Any] = {"KeyConditionExpression": condition}
        items: list[dict[str, Any]] = []
        try:
            while True:
                resp = self._table(table_base).query(**kwargs)
                items.extend(resp.get("Items", []))
                if "LastEvaluatedKey" not in resp:
                    return items
                kwargs["ExclusiveStartKey"] = resp["LastEvaluatedKey"]
        except ClientError as exc:
            raise PersistenceError(f"DynamoDB query {table_base} PK={pk!r} failed: {exc}") from exc

    def _get_item(self, table_base: str, pk: str, sk: str) -> dict[str, Any] | None:
        """Get a single item by PK + SK. Returns None if not found."""
        try:
            resp = self._table(table_base).get_item(Key={"PK": pk, "SK": sk})
        except ClientError as exc:
            raise PersistenceError(f"DynamoDB get {table_base} {pk}/{sk} failed: {exc}") from exc
        return resp.get("Item")

    def _put_items(self, table_base: str, items: list[dict[str, Any]]) -> None:
        try:
            with self._table(table_base).batch_writer() as batch:
                for item in items:
                    batch.put_item(Item=item)
        except ClientError as exc:
            raise PersistenceError(f"DynamoDB write to {table_base} failed: {exc}") from exc

    def _delete_items(self, table_base: str, keys: list[tuple[str, str]]) -> None:
        try:
            with self._table(table_base).batch_writer() as batch:
                for pk, sk in keys:
                    batch.delete_item(Key={"PK": pk, "SK": sk})
        except ClientError as exc:
            raise PersistenceError(f"DynamoDB delete from {table_base} failed: {exc}") from exc


class DynamoDBUserDirectory(_DynamoDBStore):
    """IUserDirectory over the users table (profile items plus an email index)."""

    def get_user(self, user_id: str) -> User | None:
        item = self._get_item(USERS_TABLE, f"USER#{user_id}", "PROFILE")
        return User.model_validate(item) if item else None

    def find_by_email(self, email: str) -> User | None:
        item = self._get_item(USERS_TABLE, f"EMAIL#{email.strip().lower()}", "USER")
        return self.get_user(item["userId"]) if item else None

    def put_user(self, user: User) -> None:
        profile = user.model_dump(mode="json", by_alias=True)
        self._put_items(USERS_TABLE, [
            {"PK": f"USER#{user.id}", "SK": "PROFILE", **profile},
            {"PK": f"EMAIL#{user.email.lower()}", "SK": "USER", "userId": user.id},
        ])


class DynamoDBAccountListStore(_DynamoDBStore):
    """IAccountListStore under the owner's partition.

    Each list is a META item ``LIST#<id>`` followed by one item per entry,
    ``LIST#<id>#ENTRY#<position>``, so list size is not bound by the item
    size limit and entries come back in sort-key order.

    Cached published entries are keyed by a per-owner generation that every
    write bumps after it reaches the table. A reader that loaded a snapshot
    before a write stores it under the old generation, where no later
    reader looks.
    """

    def __init__(self, table_suffix: str = "", region: str = "us-east-1",
                 endpoint_url: str | None = None, cache: Any = None,
                 cache_ttl: int = 300) -> None:
        super().__init__(table_suffix=table_suffix, region=region, endpoint_url=endpoint_url)
        self._cache = cache
        self._cache_ttl = cache_ttl

    # ---- keys ----

    @staticmethod
    def _list_sk(list_id: str) -> str:
        return f"LIST#{list_id}"

    @staticmethod
    def _entry_sk(list_id: str, position: int) -> str:
        return f"LIST#{list_id}#ENTRY#{position:08d}"

    @staticmethod
    def _generation_key(user_id: str) -> str:
        return f"published-gen:{user_id}"

    def _published_key(self, user_id: str) -> str:
        generation = self._cache.get(self._generation_key(user_id)) or "0"
        return f"published:{user_id}:{generation}"

    def _invalidate(self, owner_id: str) -> None:
        if self._cache is not None:
            self._cache.incr(self._generation_key(owner_id))

    # ---- item mapping ----

    @staticmethod
    def _assemble(items: list[dict[str, Any]]) -> list[AccountList]:
        """Group META and ENTRY items (sorted by SK) back into lists."""
        metas: dict[str, dict[str, Any]] = {}
        entries: dict[str, list[AccountListEntry]] = {}
        for item in items:
            sk = item["SK"].removeprefix("LIST#")
            list_id, marker, _ = sk.partition("#ENTRY#")
            if marker:
                entries.setdefault(list_id, []).append(AccountListEntry.model_validate(item))
            else:
                metas[list_id] = item
        return [
            AccountList.model_validate({**meta, "accounts": entries.get(list_id, [])})
            for list_id, meta in metas.items()
        ]

    def _list_items(self, owner_id: str, list_id: str) -> list[dict[str, Any]]:
        sk = self._list_sk(list_id)
        items = self._query_pk(ACCOUNT_LISTS_TABLE, f"OWNER#{owner_id}", sk)
        return [i for i in items if i["SK"] == sk or i["SK"].startswith(f"{sk}#ENTRY#")]

    # ---- IAccountListStore methods ----

    def put_list(self, account_list: AccountList) -> None:
        pk = f"OWNER#{account_list.owner_id}"
        meta = account_list.model_dump(mode="json", by_alias=True, exclude={"accounts"})
        items = [{"PK": pk, "SK": self._list_sk(account_list.id), **meta,
                  "entryCount": len(account_list.accounts)}]
        for position, entry in enumerate(account_list.accounts):
            items.append({"PK": pk, "SK": self._entry_sk(account_list.id, position),
                          **entry.model_dump(mode="json", by_alias=True)})

        written = {item["SK"] for item in items}
        stale = [(pk, i["SK"]) for i in self._list_items(account_list.owner_id, account_list.id)
                 if i["SK"] not in written]
        self._put_items(ACCOUNT_LISTS_TABLE, items)
        if stale:
            self._delete_items(ACCOUNT_LISTS_TABLE, stale)
        self._invalidate(account_list.owner_id)

    def get_list(self, owner_id: str, list_id: str) -> AccountList | None:
        lists = self._assemble(self._list_items(owner_id, list_id))
        return lists[0] if lists else None

    def list_for_owner(self, owner_id: str) -> list[AccountList]:
        return self._assemble(self._query_pk(ACCOUNT_LISTS_TABLE, f"OWNER#{owner_id}", "LIST#"))

    def delete_list(self, owner_id: str, list_id: str) -> bool:
        items = self._list_items(owner_id, list_id)
        if not any(i["SK"] == self._list_sk(list_id) for i in items):
            return False
        self._delete_items(ACCOUNT_LISTS_TABLE, [(i["PK"], i["SK"]) for i in items])
        self._invalidate(owner_id)
        return True

    def _load_published(self, user_id: str) -> list[AccountListEntry]:
        lists = sorted(self.list_for_owner(user_id), key=lambda item: item.created_at)
        return [e for item in lists if item.is_published for e in item.accounts]

    def get_published_entries(self, user_id: str) -> list[AccountListEntry]:
        if self._cache is None:
            return self._load_published(user_id)

        # Key is fixed before the table read
        cache_key = self._published_key(user_id)
        cached = self._cache.get(cache_key)
        if cached is not None:
            return [AccountListEntry.model_validate(e) for e in json.loads(cached)]

        entries = self._load_published(user_id)
        payload = json.dumps([e.model_dump(mode="json", by_alias=True) for e in entries])
        self._cache.setex(cache_key, self._cache_ttl, payload)
        logger.debug("Cached %d published entries for user %s", len(entries), user_id)
        return entries


class DynamoDBConnectionStore(_DynamoDBStore):
    """IConnectionStore: a META item per connection plus one index item per party."""

    def put_connection(self, connection: Connection) -> None:
        item = connection.model_dump(mode="json", by_alias=True)
        sender, receiver = connection.sender_id, connection.receiver_id
        self._put_items(CONNECTIONS_TABLE, [
            {"PK": f"CONN#{connection.id}", "SK": "META", **item},
            {"PK": f"USER#{sender}", "SK": f"CONN#{connection.id}", "otherUserId": receiver},
            {"PK": f"USER#{receiver}", "SK": f"CONN#{connection.id}", "otherUserId": sender},
        ])

    def get_connection(self, connection_id: str) -> Connection | None:
        item = self._get_item(CONNECTIONS_TABLE, f"CONN#{connection_id}", "META")
        return Connection.model_validate(item) if item else None

    def _index(self, user_id: str) -> list[dict[str, Any]]:
        return self._query_pk(CONNECTIONS_TABLE, f"USER#{user_id}", "CONN#")

    def list_for_user(self, user_id: str) -> list[Connection]:
        connections: list[Connection] = []
        for entry in self._index(user_id):
            connection = self.get_connection(entry["SK"].removeprefix("CONN#"))
            if connection is not None:
                connections.append(connection)
        return connections

    def find_between(self, user_a: str, user_b: str) -> Connection | None:
        for entry in self._index(user_a):
            if entry.get("otherUserId") == user_b:
                return self.get_connection(entry["SK"].removeprefix("CONN#"))
        return None

    def delete_connection(self, connection_id: str) -> bool:
        connection = self.get_connection(connection_id)
        if connection is None:
            return False
        self._delete_items(CONNECTIONS_TABLE, [
            (f"CONN#{connection_id}", "META"),
            (f"USER#{connection.sender_id}", f"CONN#{connection_id}"),
            (f"USER#{connection.receiver_id}", f"CONN#{connection_id}"),
        ])
        return True
