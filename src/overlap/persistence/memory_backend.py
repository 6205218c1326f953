"""In-memory backends: dict-backed, used by unit tests and the ``memory`` backend."""

from __future__ import annotations

from datetime import datetime, timezone

from overlap.models.accounts import AccountList, AccountListEntry
from overlap.models.connections import Connection
from overlap.models.users import User


class MemoryUserDirectory:
    """Dict-backed IUserDirectory."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    def add_user(self, user_id: str, name: str, email: str) -> User:
        user = User(id=user_id, name=name, email=email, created_at=datetime.now(timezone.utc))
        self._users[user_id] = user
        return user

    def get_user(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def find_by_email(self, email: str) -> User | None:
        wanted = email.strip().lower()
        for user in self._users.values():
            if user.email.lower() == wanted:
                return user
        return None


class MemoryAccountListStore:
    """Dict-backed IAccountListStore."""

    def __init__(self) -> None:
        self._lists: dict[str, dict[str, AccountList]] = {}

    def put_list(self, account_list: AccountList) -> None:
        owned = self._lists.setdefault(account_list.owner_id, {})
        owned[account_list.id] = account_list.model_copy(deep=True)

    def get_list(self, owner_id: str, list_id: str) -> AccountList | None:
        item = self._lists.get(owner_id, {}).get(list_id)
        return item.model_copy(deep=True) if item else None

    def list_for_owner(self, owner_id: str) -> list[AccountList]:
        return [item.model_copy(deep=True) for item in self._lists.get(owner_id, {}).values()]

    def delete_list(self, owner_id: str, list_id: str) -> bool:
        return self._lists.get(owner_id, {}).pop(list_id, None) is not None

    def get_published_entries(self, user_id: str) -> list[AccountListEntry]:
        entries: list[AccountListEntry] = []
        for item in self._lists.get(user_id, {}).values():
            if item.is_published:
                entries.extend(e.model_copy() for e in item.accounts)
        return entries


class MemoryConnectionStore:
    """Dict-backed IConnectionStore."""

    def __init__(self) -> None:
        self._connections: dict[str, Connection] = {}

    def put_connection(self, connection: Connection) -> None:
        self._connections[connection.id] = connection.model_copy()

    def get_connection(self, connection_id: str) -> Connection | None:
        item = self._connections.get(connection_id)
        return item.model_copy() if item else None

    def list_for_user(self, user_id: str) -> list[Connection]:
        return [c.model_copy() for c in self._connections.values() if c.involves(user_id)]

    def find_between(self, user_a: str, user_b: str) -> Connection | None:
        for c in self._connections.values():
            if c.involves(user_a) and c.other_party(user_a) == user_b:
                return c.model_copy()
        return None

    def delete_connection(self, connection_id: str) -> bool:
        return self._connections.pop(connection_id, None) is not None


class MemoryCacheBackend:
    """Dict-backed ICacheBackend."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._store.get(key)

    def setex(self, key: str, ttl: int, value: str) -> None:
        self._store[key] = value

    def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def incr(self, key: str) -> int:
        value = int(self._store.get(key, "0")) + 1
        self._store[key] = str(value)
        return value
