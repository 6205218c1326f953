"""Account list lifecycle: create, edit, publish, delete."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Iterable

from overlap.core.auth import AuthContext
from overlap.core.config import AppSettings
from overlap.core.exceptions import AccountListNotFoundError, InvalidRequestError
from overlap.core.protocols import IAccountListStore
from overlap.models.accounts import (
    AccountList,
    AccountListEntry,
    AccountListSummary,
    ListStatus,
)
from overlap.services.base import BaseService

logger = logging.getLogger(__name__)


def clean_entries(entries: Iterable[AccountListEntry]) -> list[AccountListEntry]:
    """Trim names and types, drop nameless rows, turn blank types into None.

    Entries keep a supplied id; new entries get a fresh one.
    """
    cleaned: list[AccountListEntry] = []
    for entry in entries:
        name = entry.account_name.strip()
        if not name:
            continue
        kind = entry.type.strip() if entry.type else None
        cleaned.append(AccountListEntry(
            id=entry.id or uuid.uuid4().hex,
            account_name=name,
            type=kind or None,
        ))
    return cleaned


class AccountListService(BaseService):
    """Owner-scoped CRUD over account lists."""

    def __init__(self, *, settings: AppSettings, account_lists: IAccountListStore) -> None:
        super().__init__(settings=settings)
        self._lists = account_lists

    def _require(self, auth: AuthContext, list_id: str) -> AccountList:
        account_list = self._lists.get_list(auth.user_id, list_id)
        if account_list is None:
            raise AccountListNotFoundError(list_id)
        return account_list

    def create(
        self, auth: AuthContext, name: str, accounts: Iterable[AccountListEntry] = ()
    ) -> AccountList:
        name = name.strip()
        if not name:
            raise InvalidRequestError("Account list name must not be blank")
        now = datetime.now(timezone.utc)
        account_list = AccountList(
            id=uuid.uuid4().hex,
            owner_id=auth.user_id,
            name=name,
            status=ListStatus.DRAFT,
            created_at=now,
            updated_at=now,
            accounts=clean_entries(accounts),
        )
        self._lists.put_list(account_list)
        logger.info(
            "User %s created list %s with %d accounts",
            auth.user_id, account_list.id, len(account_list.accounts),
        )
        return account_list

    def list_all(self, auth: AuthContext) -> list[AccountListSummary]:
        lists = self._lists.list_for_owner(auth.user_id)
        lists.sort(key=lambda item: item.created_at, reverse=True)
        return [AccountListSummary.from_list(item) for item in lists]

    def get(self, auth: AuthContext, list_id: str) -> AccountList:
        return self._require(auth, list_id)

    def update_accounts(
        self, auth: AuthContext, list_id: str, accounts: Iterable[AccountListEntry]
    ) -> AccountList:
        account_list = self._require(auth, list_id)
        updated = account_list.model_copy(update={
            "accounts": clean_entries(accounts),
            "updated_at": datetime.now(timezone.utc),
        })
        self._lists.put_list(updated)
        logger.info("User %s replaced accounts on list %s (%d)", auth.user_id, list_id, len(updated.accounts))
        return updated

    def publish(self, auth: AuthContext, list_id: str) -> AccountList:
        account_list = self._require(auth, list_id)
        if account_list.is_published:
            return account_list
        published = account_list.model_copy(update={
            "status": ListStatus.ACTIVE,
            "updated_at": datetime.now(timezone.utc),
        })
        self._lists.put_list(published)
        logger.info("User %s published list %s", auth.user_id, list_id)
        return published

    def delete(self, auth: AuthContext, list_id: str) -> None:
        if not self._lists.delete_list(auth.user_id, list_id):
            raise AccountListNotFoundError(list_id)
        logger.info("User %s deleted list %s", auth.user_id, list_id)
