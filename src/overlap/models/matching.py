"""Match results. Derived per request, never persisted."""

from __future__ import annotations

from typing import Optional

from overlap.models.base import CamelModel


class MatchResult(CamelModel):
    """An account present on both sides, with each side's classification."""

    account_name: str
    type: Optional[str] = None
    their_type: Optional[str] = None
