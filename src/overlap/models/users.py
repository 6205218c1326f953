"""User profile as provided by the external identity system."""

from __future__ import annotations

from datetime import datetime

from overlap.models.base import CamelModel


class User(CamelModel):
    id: str
    name: str
    email: str
    created_at: datetime
