"""Base service with common dependency wiring."""

from __future__ import annotations

from typing import Any

from overlap.core.config import AppSettings


class BaseService:
    """Common base for all Overlap services.

    Settings are injected at construction time; subclasses take their
    stores as keyword-only arguments.
    """

    def __init__(self, *, settings: AppSettings) -> None:
        self._settings = settings

    def health_check(self) -> dict[str, Any]:
        """Return service health status."""
        return {
            "service": self.__class__.__name__,
            "status": "healthy",
            "environment": self._settings.environment,
        }
