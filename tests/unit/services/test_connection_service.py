"""Tests for ConnectionService."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import pytest

from overlap.core.exceptions import (
    ConnectionExistsError,
    ConnectionForbiddenError,
    ConnectionNotFoundError,
    InvalidRequestError,
    UserNotFoundError,
)
from overlap.models.connections import Connection, ConnectionStatus


class TestCreate:
    def test_creates_pending_connection(self, connection_service, alice):
        view = connection_service.create(alice, "Bob@Example.com ")
        assert view.status == ConnectionStatus.PENDING
        assert view.is_sender is True
        assert view.other_user.id == "u-bob"

    def test_unknown_email(self, connection_service, alice):
        with pytest.raises(UserNotFoundError):
            connection_service.create(alice, "nobody@example.com")

    def test_cannot_connect_to_self(self, connection_service, alice):
        with pytest.raises(InvalidRequestError):
            connection_service.create(alice, "alice@example.com")

    def test_duplicate_in_either_direction(self, connection_service, alice, bob):
        connection_service.create(alice, "bob@example.com")
        with pytest.raises(ConnectionExistsError):
            connection_service.create(alice, "bob@example.com")
        with pytest.raises(ConnectionExistsError):
            connection_service.create(bob, "alice@example.com")


class TestListAll:
    def test_each_party_sees_the_other(self, connection_service, alice, bob, carol):
        view = connection_service.create(alice, "bob@example.com")

        [for_bob] = connection_service.list_all(bob)
        assert for_bob.id == view.id
        assert for_bob.is_sender is False
        assert for_bob.other_user.email == "alice@example.com"
        assert connection_service.list_all(carol) == []

    def test_skips_connection_to_missing_user(self, connection_service, connection_store, alice, caplog):
        view = connection_service.create(alice, "bob@example.com")
        connection_store.put_connection(Connection(
            id="c-gone", sender_id="u-alice", receiver_id="u-deleted",
            created_at=datetime.now(timezone.utc),
        ))
        with caplog.at_level(logging.WARNING, logger="overlap.services.connections"):
            listed = connection_service.list_all(alice)
        assert [v.id for v in listed] == [view.id]
        assert "c-gone" in caplog.text


class TestAccept:
    def test_receiver_accepts(self, connection_service, alice, bob):
        view = connection_service.create(alice, "bob@example.com")
        accepted = connection_service.accept(bob, view.id)
        assert accepted.status == ConnectionStatus.ACCEPTED
        assert connection_service.list_all(alice)[0].status == ConnectionStatus.ACCEPTED

    def test_sender_cannot_accept(self, connection_service, alice):
        view = connection_service.create(alice, "bob@example.com")
        with pytest.raises(ConnectionForbiddenError):
            connection_service.accept(alice, view.id)

    def test_accepting_twice_is_noop(self, connection_service, alice, bob):
        view = connection_service.create(alice, "bob@example.com")
        connection_service.accept(bob, view.id)
        assert connection_service.accept(bob, view.id).status == ConnectionStatus.ACCEPTED

    def test_outsider_sees_not_found(self, connection_service, alice, carol):
        view = connection_service.create(alice, "bob@example.com")
        with pytest.raises(ConnectionNotFoundError):
            connection_service.accept(carol, view.id)


class TestDelete:
    def test_either_party_can_delete(self, connection_service, alice, bob):
        view = connection_service.create(alice, "bob@example.com")
        connection_service.delete(bob, view.id)
        assert connection_service.list_all(alice) == []

    def test_delete_missing(self, connection_service, alice):
        with pytest.raises(ConnectionNotFoundError):
            connection_service.delete(alice, "missing")

    def test_reconnect_after_delete(self, connection_service, alice, bob):
        view = connection_service.create(alice, "bob@example.com")
        connection_service.delete(alice, view.id)
        assert connection_service.create(bob, "alice@example.com").is_sender is True
