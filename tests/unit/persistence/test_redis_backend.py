"""Unit tests for RedisCacheBackend using fakeredis."""

from __future__ import annotations

import json
from unittest.mock import patch

import fakeredis
import pytest

from overlap.core.exceptions import CacheError
from overlap.persistence.redis_backend import RedisCacheBackend


@pytest.fixture
def fake_server():
    return fakeredis.FakeServer()


@pytest.fixture
def fake_client(fake_server):
    return fakeredis.FakeRedis(server=fake_server, decode_responses=True)


@pytest.fixture
def backend(fake_client):
    with patch("redis.Redis", return_value=fake_client):
        return RedisCacheBackend(host="localhost", port=6379, db=0)


class TestGet:
    def test_returns_none_on_miss(self, backend):
        assert backend.get("nonexistent") is None

    def test_returns_stored_string(self, backend):
        payload = json.dumps([{"accountName": "Acme", "type": None}])
        backend.setex("published:u-1", 300, payload)
        assert backend.get("published:u-1") == payload


class TestSetex:
    def test_keys_are_prefixed(self, backend, fake_client):
        backend.setex("published:u-1", 60, "[]")
        assert fake_client.get("overlap:published:u-1") == "[]"
        assert fake_client.ttl("overlap:published:u-1") > 0

    def test_overwrites_existing_value(self, backend):
        backend.setex("k", 60, "old")
        backend.setex("k", 60, "new")
        assert backend.get("k") == "new"


class TestDelete:
    def test_removes_existing_key(self, backend):
        backend.setex("del_me", 60, "val")
        backend.delete("del_me")
        assert backend.get("del_me") is None

    def test_noop_on_missing_key(self, backend):
        backend.delete("never_existed")


class TestIncr:
    def test_starts_at_one_and_counts_up(self, backend):
        assert backend.incr("published-gen:u-1") == 1
        assert backend.incr("published-gen:u-1") == 2

    def test_keys_are_prefixed(self, backend, fake_client):
        backend.incr("published-gen:u-1")
        assert fake_client.get("overlap:published-gen:u-1") == "1"


class TestPing:
    def test_ping(self, backend):
        assert backend.ping() is True


class TestErrorWrapping:
    def test_get_wraps_redis_error(self):
        b = RedisCacheBackend.__new__(RedisCacheBackend)
        b._prefix = ""
        b._client = None  # will cause AttributeError -> CacheError
        with pytest.raises(CacheError):
            b.get("k")
