"""Account list endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from overlap.api.deps import get_account_list_service, get_auth_context
from overlap.core.auth import AuthContext
from overlap.models.accounts import (
    AccountList,
    AccountListCreate,
    AccountListSummary,
    AccountsUpdate,
)
from overlap.services.account_lists import AccountListService

router = APIRouter(tags=["account-lists"])


@router.post("", response_model=AccountList, status_code=status.HTTP_201_CREATED)
def create_list(
    body: AccountListCreate,
    auth: AuthContext = Depends(get_auth_context),
    service: AccountListService = Depends(get_account_list_service),
) -> AccountList:
    return service.create(auth, body.name, body.accounts)


@router.get("", response_model=list[AccountListSummary])
def list_lists(
    auth: AuthContext = Depends(get_auth_context),
    service: AccountListService = Depends(get_account_list_service),
) -> list[AccountListSummary]:
    return service.list_all(auth)


@router.get("/{list_id}", response_model=AccountList)
def get_list(
    list_id: str,
    auth: AuthContext = Depends(get_auth_context),
    service: AccountListService = Depends(get_account_list_service),
) -> AccountList:
    return service.get(auth, list_id)


@router.put("/{list_id}/accounts", response_model=AccountList)
def update_accounts(
    list_id: str,
    body: AccountsUpdate,
    auth: AuthContext = Depends(get_auth_context),
    service: AccountListService = Depends(get_account_list_service),
) -> AccountList:
    return service.update_accounts(auth, list_id, body.accounts)


@router.post("/{list_id}/publish", response_model=AccountList)
def publish_list(
    list_id: str,
    auth: AuthContext = Depends(get_auth_context),
    service: AccountListService = Depends(get_account_list_service),
) -> AccountList:
    return service.publish(auth, list_id)


@router.delete("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_list(
    list_id: str,
    auth: AuthContext = Depends(get_auth_context),
    service: AccountListService = Depends(get_account_list_service),
) -> Response:
    service.delete(auth, list_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
