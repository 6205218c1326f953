"""FastAPI dependencies: auth context and services from application state."""

from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from overlap.core.auth import AuthContext
from overlap.core.exceptions import UnauthorizedError
from overlap.matching.service import MatchingService
from overlap.services.account_lists import AccountListService
from overlap.services.connections import ConnectionService

bearer = HTTPBearer(auto_error=False)


def get_auth_context(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> AuthContext:
    """Resolve the bearer token into an AuthContext, or raise 401."""
    if credentials is None:
        raise UnauthorizedError("Missing bearer token")
    user_id = request.app.state.identity.resolve(credentials.credentials)
    if user_id is None:
        raise UnauthorizedError("Unknown or expired token")
    return AuthContext(user_id=user_id)


def get_account_list_service(request: Request) -> AccountListService:
    return request.app.state.account_list_service


def get_connection_service(request: Request) -> ConnectionService:
    return request.app.state.connection_service


def get_matching_service(request: Request) -> MatchingService:
    return request.app.state.matching_service
