"""Connection lifecycle models."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from overlap.models.base import CamelModel
from overlap.models.users import User


class ConnectionStatus(StrEnum):
    PENDING = "pending"
    ACCEPTED = "accepted"


class Connection(CamelModel):
    """A relationship between two users, initiated by ``sender_id``."""

    id: str
    sender_id: str
    receiver_id: str
    status: ConnectionStatus = ConnectionStatus.PENDING
    created_at: datetime

    def involves(self, user_id: str) -> bool:
        return user_id in (self.sender_id, self.receiver_id)

    def other_party(self, user_id: str) -> str:
        return self.receiver_id if user_id == self.sender_id else self.sender_id


class ConnectionView(CamelModel):
    """A connection as seen by one of its parties."""

    id: str
    status: ConnectionStatus
    created_at: datetime
    other_user: User
    is_sender: bool


class ConnectionCreate(CamelModel):
    receiver_email: str
