"""Connection lifecycle: request, accept, list, remove."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from overlap.core.auth import AuthContext
from overlap.core.config import AppSettings
from overlap.core.exceptions import (
    ConnectionExistsError,
    ConnectionForbiddenError,
    ConnectionNotFoundError,
    InvalidRequestError,
    UserNotFoundError,
)
from overlap.core.protocols import IConnectionStore, IUserDirectory
from overlap.models.connections import Connection, ConnectionStatus, ConnectionView
from overlap.services.base import BaseService

logger = logging.getLogger(__name__)


class ConnectionService(BaseService):
    """Manages connections between users."""

    def __init__(
        self,
        *,
        settings: AppSettings,
        connections: IConnectionStore,
        users: IUserDirectory,
    ) -> None:
        super().__init__(settings=settings)
        self._connections = connections
        self._users = users

    def _view(self, auth: AuthContext, connection: Connection) -> ConnectionView:
        other_id = connection.other_party(auth.user_id)
        other = self._users.get_user(other_id)
        if other is None:
            raise UserNotFoundError(f"User {other_id} not found")
        return ConnectionView(
            id=connection.id,
            status=connection.status,
            created_at=connection.created_at,
            other_user=other,
            is_sender=connection.sender_id == auth.user_id,
        )

    def _require_party(self, auth: AuthContext, connection_id: str) -> Connection:
        connection = self._connections.get_connection(connection_id)
        if connection is None or not connection.involves(auth.user_id):
            raise ConnectionNotFoundError(connection_id)
        return connection

    def create(self, auth: AuthContext, receiver_email: str) -> ConnectionView:
        receiver = self._users.find_by_email(receiver_email.strip())
        if receiver is None:
            raise UserNotFoundError(f"No user with email {receiver_email!r}")
        if receiver.id == auth.user_id:
            raise InvalidRequestError("Cannot connect with yourself")

        existing = self._connections.find_between(auth.user_id, receiver.id)
        if existing is not None:
            raise ConnectionExistsError(existing.id)

        connection = Connection(
            id=uuid.uuid4().hex,
            sender_id=auth.user_id,
            receiver_id=receiver.id,
            status=ConnectionStatus.PENDING,
            created_at=datetime.now(timezone.utc),
        )
        self._connections.put_connection(connection)
        logger.info("User %s requested connection %s with %s", auth.user_id, connection.id, receiver.id)
        return self._view(auth, connection)

    def list_all(self, auth: AuthContext) -> list[ConnectionView]:
        connections = self._connections.list_for_user(auth.user_id)
        connections.sort(key=lambda c: c.created_at, reverse=True)
        views: list[ConnectionView] = []
        for connection in connections:
            try:
                views.append(self._view(auth, connection))
            except UserNotFoundError:
                logger.warning(
                    "Skipping connection %s for user %s: other party no longer exists",
                    connection.id, auth.user_id,
                )
        return views

    def accept(self, auth: AuthContext, connection_id: str) -> ConnectionView:
        connection = self._require_party(auth, connection_id)
        if connection.status == ConnectionStatus.ACCEPTED:
            return self._view(auth, connection)
        if connection.receiver_id != auth.user_id:
            raise ConnectionForbiddenError(connection_id, "only the receiver can accept")

        accepted = connection.model_copy(update={"status": ConnectionStatus.ACCEPTED})
        self._connections.put_connection(accepted)
        logger.info("User %s accepted connection %s", auth.user_id, connection_id)
        return self._view(auth, accepted)

    def delete(self, auth: AuthContext, connection_id: str) -> None:
        self._require_party(auth, connection_id)
        self._connections.delete_connection(connection_id)
        logger.info("User %s removed connection %s", auth.user_id, connection_id)
