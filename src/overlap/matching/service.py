"""Match query: resolve a connection, check it, compute the overlap."""

from __future__ import annotations

import logging

from overlap.core.auth import AuthContext
from overlap.core.config import AppSettings
from overlap.core.exceptions import (
    ConnectionForbiddenError,
    ConnectionNotAcceptedError,
    ConnectionNotFoundError,
)
from overlap.core.protocols import IAccountListStore, IConnectionStore
from overlap.matching.matcher import match_accounts
from overlap.models.connections import ConnectionStatus
from overlap.models.matching import MatchResult
from overlap.services.base import BaseService

logger = logging.getLogger(__name__)


class MatchingService(BaseService):
    """Computes overlapping accounts for an accepted connection."""

    def __init__(
        self,
        *,
        settings: AppSettings,
        account_lists: IAccountListStore,
        connections: IConnectionStore,
    ) -> None:
        super().__init__(settings=settings)
        self._lists = account_lists
        self._connections = connections

    def get_matches(self, auth: AuthContext, connection_id: str) -> list[MatchResult]:
        connection = self._connections.get_connection(connection_id)
        if connection is None:
            raise ConnectionNotFoundError(connection_id)
        if not connection.involves(auth.user_id):
            logger.warning(
                "User %s requested matches for foreign connection %s",
                auth.user_id, connection_id,
            )
            raise ConnectionForbiddenError(connection_id, "not a party to this connection")
        if connection.status != ConnectionStatus.ACCEPTED:
            raise ConnectionNotAcceptedError(connection_id, connection.status)

        mine = self._lists.get_published_entries(auth.user_id)
        theirs = self._lists.get_published_entries(connection.other_party(auth.user_id))
        results = match_accounts(mine, theirs)
        logger.info(
            "Computed %d matches for connection %s (%d vs %d entries)",
            len(results), connection_id, len(mine), len(theirs),
        )
        return results
