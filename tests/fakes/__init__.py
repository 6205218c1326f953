"""Shared test doubles: re-export memory backends."""

from __future__ import annotations

from overlap.persistence.memory_backend import (
    MemoryAccountListStore,
    MemoryCacheBackend,
    MemoryConnectionStore,
    MemoryUserDirectory,
)

__all__ = [
    "MemoryAccountListStore",
    "MemoryCacheBackend",
    "MemoryConnectionStore",
    "MemoryUserDirectory",
]
