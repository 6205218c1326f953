"""Connection endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from overlap.api.deps import get_auth_context, get_connection_service
from overlap.core.auth import AuthContext
from overlap.models.connections import ConnectionCreate, ConnectionView
from overlap.services.connections import ConnectionService

router = APIRouter(tags=["connections"])


@router.post("", response_model=ConnectionView, status_code=status.HTTP_201_CREATED)
def create_connection(
    body: ConnectionCreate,
    auth: AuthContext = Depends(get_auth_context),
    service: ConnectionService = Depends(get_connection_service),
) -> ConnectionView:
    return service.create(auth, body.receiver_email)


@router.get("", response_model=list[ConnectionView])
def list_connections(
    auth: AuthContext = Depends(get_auth_context),
    service: ConnectionService = Depends(get_connection_service),
) -> list[ConnectionView]:
    return service.list_all(auth)


@router.post("/{connection_id}/accept", response_model=ConnectionView)
def accept_connection(
    connection_id: str,
    auth: AuthContext = Depends(get_auth_context),
    service: ConnectionService = Depends(get_connection_service),
) -> ConnectionView:
    return service.accept(auth, connection_id)


@router.delete("/{connection_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_connection(
    connection_id: str,
    auth: AuthContext = Depends(get_auth_context),
    service: ConnectionService = Depends(get_connection_service),
) -> Response:
    service.delete(auth, connection_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
