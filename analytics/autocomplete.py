"""Autocomplete suggestions for the shorthand entry box."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Optional, Sequence

import structlog

from config.settings import get_settings
from core.data_loader import build_transaction_frame
from core.formatting import format_number
from core.models import Transaction

__all__ = [
    "AutoCompleteSuggestion",
    "CONTAINS_SCORE",
    "FULL_TEXT_SCORE",
    "MIN_QUERY_LENGTH",
    "PREFIX_BASE_SCORE",
    "shorthand_text",
    "suggest_completions",
    "suggestion_key",
]

logger = structlog.get_logger()

MIN_QUERY_LENGTH: Final[int] = 2
PREFIX_BASE_SCORE: Final[int] = 100
CONTAINS_SCORE: Final[int] = 50
FULL_TEXT_SCORE: Final[int] = 25


@dataclass(frozen=True, slots=True)
class AutoCompleteSuggestion:
    text: str
    transaction: Transaction
    match_score: int


def shorthand_text(txn: Transaction) -> str:
    """Rebuild the ``reason mode amount`` command that would recreate ``txn``."""

    return f"{txn.reason} {txn.payment_mode} {format_number(txn.amount)}"


def suggestion_key(txn: Transaction) -> tuple[str, str, float]:
    return txn.reason.lower(), txn.payment_mode, float(txn.amount)


def _score(reason: str, full_text: str, query: str) -> int:
    lower_reason = reason.lower()
    if lower_reason.startswith(query):
        return PREFIX_BASE_SCORE - len(query)
    if query in lower_reason:
        return CONTAINS_SCORE
    if query in full_text.lower():
        return FULL_TEXT_SCORE
    return 0


def suggest_completions(
    transactions: Sequence[Transaction],
    query: str,
    max_suggestions: Optional[int] = None,
    *,
    tz: Optional[str] = None,
) -> list[AutoCompleteSuggestion]:
    """Rank past expenses against a partial reason.

    Candidates are visited newest first so the most recent duplicate wins, then the
    matches are ordered by score with recency breaking ties.
    """

    settings = get_settings()
    limit = settings.autocomplete_limit if max_suggestions is None else max_suggestions
    search = query.strip().lower()
    if len(search) < MIN_QUERY_LENGTH or limit <= 0 or not transactions:
        return []

    frame = build_transaction_frame(transactions, tz or settings.timezone)
    expenses = frame[frame["type"] == "expense"]
    if expenses.empty:
        return []

    recent_first = expenses.sort_values(
        ["timestamp", "position"], ascending=[False, True], kind="mergesort"
    )

    seen: set[tuple[str, str, float]] = set()
    results: list[AutoCompleteSuggestion] = []
    for position in recent_first["position"]:
        txn = transactions[int(position)]
        key = suggestion_key(txn)
        if key in seen:
            continue

        text = shorthand_text(txn)
        score = _score(txn.reason, text, search)
        if score <= 0:
            continue

        seen.add(key)
        results.append(AutoCompleteSuggestion(text=text, transaction=txn, match_score=score))

    results.sort(key=lambda suggestion: suggestion.match_score, reverse=True)
    logger.debug("autocomplete_ranked", query=search, matches=len(results))
    return results[:limit]
