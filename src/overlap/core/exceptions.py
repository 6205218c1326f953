"""Overlap exception hierarchy.

Every error carries the HTTP status the API layer answers with.
"""

from __future__ import annotations


class OverlapError(Exception):
    """Base exception for all Overlap errors."""

    http_status = 500


class InvalidRequestError(OverlapError):
    """Request is well-formed but cannot be honoured."""

    http_status = 400


class UnauthorizedError(OverlapError):
    """Missing or unknown bearer token."""

    http_status = 401


class ForbiddenError(OverlapError):
    """Authenticated user may not perform the operation."""

    http_status = 403


class NotFoundError(OverlapError):
    """Requested resource does not exist (or is not visible to the caller)."""

    http_status = 404


class ConflictError(OverlapError):
    """Operation conflicts with existing state."""

    http_status = 409


class ConnectionNotFoundError(NotFoundError):
    """No connection with the given id."""

    def __init__(self, connection_id: str) -> None:
        self.connection_id = connection_id
        super().__init__(f"Connection {connection_id} not found")


class ConnectionNotAcceptedError(ForbiddenError):
    """Connection exists but has not been accepted yet."""

    def __init__(self, connection_id: str, status: str) -> None:
        self.connection_id = connection_id
        self.status = status
        super().__init__(f"Connection {connection_id} is {status}, not accepted")


class ConnectionForbiddenError(ForbiddenError):
    """Requester is not allowed to act on this connection."""

    def __init__(self, connection_id: str, reason: str) -> None:
        self.connection_id = connection_id
        self.reason = reason
        super().__init__(f"Connection {connection_id}: {reason}")


class ConnectionExistsError(ConflictError):
    """A connection between the two users already exists."""

    def __init__(self, connection_id: str) -> None:
        self.connection_id = connection_id
        super().__init__(f"Connection already exists: {connection_id}")


class AccountListNotFoundError(NotFoundError):
    """No account list with the given id for this owner."""

    def __init__(self, list_id: str) -> None:
        self.list_id = list_id
        super().__init__(f"Account list {list_id} not found")


class UserNotFoundError(NotFoundError):
    """No user matches the lookup."""


class PersistenceError(OverlapError):
    """Backing store operation failed."""


class CacheError(OverlapError):
    """Redis cache operation failed."""
