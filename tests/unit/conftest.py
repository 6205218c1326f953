"""Unit test fixtures: memory stores, two users, wired services."""

from __future__ import annotations

import pytest

from overlap.core.auth import AuthContext
from overlap.core.config import AppSettings
from overlap.matching.service import MatchingService
from overlap.services.account_lists import AccountListService
from overlap.services.connections import ConnectionService
from tests.fakes import MemoryAccountListStore, MemoryConnectionStore, MemoryUserDirectory


@pytest.fixture
def settings():
    return AppSettings()


@pytest.fixture
def users():
    directory = MemoryUserDirectory()
    directory.add_user("u-alice", "Alice", "alice@example.com")
    directory.add_user("u-bob", "Bob", "bob@example.com")
    directory.add_user("u-carol", "Carol", "carol@example.com")
    return directory


@pytest.fixture
def list_store():
    return MemoryAccountListStore()


@pytest.fixture
def connection_store():
    return MemoryConnectionStore()


@pytest.fixture
def alice():
    return AuthContext(user_id="u-alice")


@pytest.fixture
def bob():
    return AuthContext(user_id="u-bob")


@pytest.fixture
def carol():
    return AuthContext(user_id="u-carol")


@pytest.fixture
def list_service(settings, list_store):
    return AccountListService(settings=settings, account_lists=list_store)


@pytest.fixture
def connection_service(settings, connection_store, users):
    return ConnectionService(settings=settings, connections=connection_store, users=users)


@pytest.fixture
def matching_service(settings, list_store, connection_store):
    return MatchingService(settings=settings, account_lists=list_store, connections=connection_store)
