"""Pluggable persistence backends behind Protocol interfaces."""

from __future__ import annotations

from dataclasses import dataclass

from overlap.core.config import AppSettings
from overlap.core.protocols import (
    IAccountListStore,
    ICacheBackend,
    IConnectionStore,
    IUserDirectory,
)


@dataclass
class Persistence:
    """The wired-up stores one application instance works against."""

    users: IUserDirectory
    account_lists: IAccountListStore
    connections: IConnectionStore
    cache: ICacheBackend | None = None


def create_persistence(settings: AppSettings | None = None) -> Persistence:
    """Create persistence backends from application settings."""
    if settings is None:
        settings = AppSettings()

    if settings.backend == "memory":
        from overlap.persistence.memory_backend import (
            MemoryAccountListStore,
            MemoryConnectionStore,
            MemoryUserDirectory,
        )

        return Persistence(
            users=MemoryUserDirectory(),
            account_lists=MemoryAccountListStore(),
            connections=MemoryConnectionStore(),
        )

    from overlap.persistence.dynamodb_backend import (
        DynamoDBAccountListStore,
        DynamoDBConnectionStore,
        DynamoDBUserDirectory,
    )
    from overlap.persistence.redis_backend import RedisCacheBackend

    cache = None
    if settings.redis.enabled:
        cache = RedisCacheBackend(
            host=settings.redis.host,
            port=settings.redis.port,
            db=settings.redis.db,
        )

    ddb = {
        "table_suffix": settings.dynamodb.table_suffix,
        "region": settings.dynamodb.region,
        "endpoint_url": settings.dynamodb.endpoint_url,
    }
    return Persistence(
        users=DynamoDBUserDirectory(**ddb),
        account_lists=DynamoDBAccountListStore(**ddb, cache=cache, cache_ttl=settings.redis.cache_ttl),
        connections=DynamoDBConnectionStore(**ddb),
        cache=cache,
    )


__all__ = ["Persistence", "create_persistence"]
