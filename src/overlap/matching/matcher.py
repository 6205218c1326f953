"""Account overlap between two users' pooled published entries."""

from __future__ import annotations

from typing import Iterable

from overlap.models.accounts import AccountListEntry
from overlap.models.matching import MatchResult


def normalize_account_name(name: str) -> str:
    """Trim surrounding whitespace and casefold."""
    return name.strip().casefold()


def _first_occurrences(entries: Iterable[AccountListEntry]) -> dict[str, AccountListEntry]:
    """Map normalized name -> first entry with that name, in source order."""
    index: dict[str, AccountListEntry] = {}
    for entry in entries:
        key = normalize_account_name(entry.account_name)
        if key and key not in index:
            index[key] = entry
    return index


def match_accounts(
    mine: Iterable[AccountListEntry], theirs: Iterable[AccountListEntry]
) -> list[MatchResult]:
    """Return one result per normalized name present on both sides.

    Results follow the order of first appearance in ``mine``. The reported
    name and ``type`` come from the first occurrence in ``mine``;
    ``their_type`` from the first occurrence in ``theirs``.
    """
    their_index = _first_occurrences(theirs)
    results: list[MatchResult] = []
    for key, entry in _first_occurrences(mine).items():
        other = their_index.get(key)
        if other is None:
            continue
        results.append(
            MatchResult(
                account_name=entry.account_name.strip(),
                type=entry.type,
                their_type=other.type,
            )
        )
    return results
