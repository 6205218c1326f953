"""Match query endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from overlap.api.deps import get_auth_context, get_matching_service
from overlap.core.auth import AuthContext
from overlap.matching.service import MatchingService
from overlap.models.matching import MatchResult

router = APIRouter(tags=["matching"])


@router.get("/connections/{connection_id}", response_model=list[MatchResult])
def get_matches(
    connection_id: str,
    auth: AuthContext = Depends(get_auth_context),
    service: MatchingService = Depends(get_matching_service),
) -> list[MatchResult]:
    """Accounts present on both parties' published lists."""
    return service.get_matches(auth, connection_id)
