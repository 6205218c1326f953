"""Protocol interfaces for all Overlap abstractions.

All inter-layer communication uses these Protocols: structural typing,
no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from overlap.models.accounts import AccountList, AccountListEntry
from overlap.models.connections import Connection
from overlap.models.users import User


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------

@runtime_checkable
class IIdentityProvider(Protocol):
    """Resolves a bearer token issued by the external auth system."""

    def resolve(self, token: str) -> str | None: ...


@runtime_checkable
class IUserDirectory(Protocol):
    """Read-only view of the external user directory."""

    def get_user(self, user_id: str) -> User | None: ...

    def find_by_email(self, email: str) -> User | None: ...


# ---------------------------------------------------------------------------
# Persistence: Account Lists
# ---------------------------------------------------------------------------

@runtime_checkable
class IAccountListStore(Protocol):
    """Account list storage, keyed by owner."""

    def put_list(self, account_list: AccountList) -> None: ...

    def get_list(self, owner_id: str, list_id: str) -> AccountList | None: ...

    def list_for_owner(self, owner_id: str) -> list[AccountList]: ...

    def delete_list(self, owner_id: str, list_id: str) -> bool: ...

    def get_published_entries(self, user_id: str) -> list[AccountListEntry]: ...


# ---------------------------------------------------------------------------
# Persistence: Connections
# ---------------------------------------------------------------------------

@runtime_checkable
class IConnectionStore(Protocol):
    """Connection storage with a per-user index."""

    def put_connection(self, connection: Connection) -> None: ...

    def get_connection(self, connection_id: str) -> Connection | None: ...

    def list_for_user(self, user_id: str) -> list[Connection]: ...

    def find_between(self, user_a: str, user_b: str) -> Connection | None: ...

    def delete_connection(self, connection_id: str) -> bool: ...


# ---------------------------------------------------------------------------
# Persistence: Cache Backend
# ---------------------------------------------------------------------------

@runtime_checkable
class ICacheBackend(Protocol):
    """Redis-compatible cache interface."""

    def get(self, key: str) -> str | None: ...

    def setex(self, key: str, ttl: int, value: str) -> None: ...

    def delete(self, key: str) -> None: ...

    def incr(self, key: str) -> int: ...
