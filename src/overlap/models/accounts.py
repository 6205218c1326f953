"""Account list and account entry models."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Optional

from pydantic import Field

from overlap.models.base import CamelModel


class ListStatus(StrEnum):
    DRAFT = "draft"
    ACTIVE = "active"  # published, eligible for matching


class AccountListEntry(CamelModel):
    """One account on a list. ``account_name`` is the matching key."""

    id: Optional[str] = None
    account_name: str
    type: Optional[str] = None


class AccountList(CamelModel):
    """A user-owned, ordered collection of accounts."""

    id: str
    owner_id: str
    name: str
    status: ListStatus = ListStatus.DRAFT
    created_at: datetime
    updated_at: datetime
    accounts: list[AccountListEntry] = Field(default_factory=list)

    @property
    def is_published(self) -> bool:
        return self.status == ListStatus.ACTIVE


class ListCounts(CamelModel):
    accounts: int = 0


class AccountListSummary(CamelModel):
    """List metadata without the entries. The entry count is sent as ``_count``."""

    id: str
    name: str
    status: ListStatus
    created_at: datetime
    updated_at: datetime
    counts: ListCounts = Field(default_factory=ListCounts, alias="_count")

    @classmethod
    def from_list(cls, account_list: AccountList) -> AccountListSummary:
        return cls(
            id=account_list.id,
            name=account_list.name,
            status=account_list.status,
            created_at=account_list.created_at,
            updated_at=account_list.updated_at,
            counts=ListCounts(accounts=len(account_list.accounts)),
        )


class AccountListCreate(CamelModel):
    """Request body for creating a list."""

    name: str
    accounts: list[AccountListEntry] = Field(default_factory=list)


class AccountsUpdate(CamelModel):
    """Request body for replacing a list's entries."""

    accounts: list[AccountListEntry]
