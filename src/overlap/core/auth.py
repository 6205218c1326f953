"""Per-request authentication context."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class AuthContext(BaseModel):
    """The authenticated caller, passed explicitly to every service call."""

    model_config = ConfigDict(frozen=True)

    user_id: str


class StaticIdentityProvider:
    """IIdentityProvider backed by a fixed token -> user id mapping."""

    def __init__(self, tokens: dict[str, str] | None = None) -> None:
        self._tokens = dict(tokens or {})

    def register(self, token: str, user_id: str) -> None:
        self._tokens[token] = user_id

    def resolve(self, token: str) -> str | None:
        return self._tokens.get(token)
