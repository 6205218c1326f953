"""FastAPI application with lifespan and router mounting."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from overlap.api.routes import account_lists, connections, health, matching
from overlap.core.auth import StaticIdentityProvider
from overlap.core.config import AppSettings
from overlap.core.exceptions import OverlapError
from overlap.core.logging import configure_logging
from overlap.core.protocols import IIdentityProvider
from overlap.matching.service import MatchingService
from overlap.persistence import Persistence, create_persistence
from overlap.services.account_lists import AccountListService
from overlap.services.connections import ConnectionService

logger = logging.getLogger(__name__)


async def overlap_error_handler(request: Request, exc: OverlapError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=exc.http_status,
        content={"message": str(exc), "error": exc.__class__.__name__},
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed bodies and params in the same shape as service errors."""
    problems = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part != "body")
        problems.append(f"{field}: {error['msg']}" if field else error["msg"])
    logger.warning("%s %s rejected: %s", request.method, request.url.path, problems)
    return JSONResponse(
        status_code=422,
        content={"message": "; ".join(problems), "error": "RequestValidationError"},
    )


def create_app(
    settings: AppSettings | None = None,
    persistence: Persistence | None = None,
    identity: IIdentityProvider | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Stores and the identity provider default to what ``settings`` selects;
    tests pass their own.
    """
    settings = settings or AppSettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Initialize and tear down application resources."""
        configure_logging(settings.log_level, settings.log_format)
        logger.info("Starting overlap (%s, %s backend)", settings.environment, settings.backend)
        yield

    app = FastAPI(
        title="Overlap Account Matching Service",
        version="0.1.0",
        lifespan=lifespan,
    )

    stores = persistence or create_persistence(settings)
    app.state.settings = settings
    app.state.persistence = stores
    app.state.identity = identity or StaticIdentityProvider(settings.auth.static_tokens)
    app.state.account_list_service = AccountListService(
        settings=settings, account_lists=stores.account_lists,
    )
    app.state.connection_service = ConnectionService(
        settings=settings, connections=stores.connections, users=stores.users,
    )
    app.state.matching_service = MatchingService(
        settings=settings, account_lists=stores.account_lists, connections=stores.connections,
    )

    app.add_exception_handler(OverlapError, overlap_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.include_router(health.router)
    app.include_router(account_lists.router, prefix="/account-lists")
    app.include_router(connections.router, prefix="/connections")
    app.include_router(matching.router, prefix="/matching")
    return app
