"""Quick-add shortcuts and amount presets mined from recent expenses."""

from __future__ import annotations

from datetime import datetime
from typing import Final, Optional, Sequence

import pandas as pd

from analytics.autocomplete import suggestion_key
from config.settings import get_settings
from core.data_loader import build_transaction_frame, local_today
from core.models import Transaction

__all__ = [
    "DEFAULT_AMOUNT_PRESETS",
    "PRESET_WINDOW_DAYS",
    "QUICK_ADD_LIMIT",
    "QUICK_ADD_MIN_USES",
    "QUICK_ADD_WINDOW_DAYS",
    "amount_presets",
    "quick_add_suggestions",
]

QUICK_ADD_WINDOW_DAYS: Final[int] = 7
QUICK_ADD_MIN_USES: Final[int] = 2
QUICK_ADD_LIMIT: Final[int] = 4
PRESET_WINDOW_DAYS: Final[int] = 30
DEFAULT_AMOUNT_PRESETS: Final[tuple[float, ...]] = (50.0, 100.0, 250.0, 500.0, 1000.0)


def _recent_expenses(
    transactions: Sequence[Transaction],
    days: int,
    now: Optional[datetime],
    tz: str,
) -> pd.DataFrame:
    frame = build_transaction_frame(transactions, tz)
    cutoff = local_today(now, tz) - pd.Timedelta(days=days)
    return frame[(frame["type"] == "expense") & (frame["day"] >= cutoff)]


def quick_add_suggestions(
    transactions: Sequence[Transaction],
    now: Optional[datetime] = None,
    *,
    tz: Optional[str] = None,
) -> tuple[Transaction, ...]:
    """Return up to four repeated expenses from the last week, most used first.

    Expenses are grouped like autocomplete duplicates; the first one seen represents
    its group.
    """

    tz = tz or get_settings().timezone
    recent = _recent_expenses(transactions, QUICK_ADD_WINDOW_DAYS, now, tz)

    counts: dict[tuple[str, str, float], int] = {}
    representative: dict[tuple[str, str, float], Transaction] = {}
    for position in recent["position"]:
        txn = transactions[int(position)]
        key = suggestion_key(txn)
        counts[key] = counts.get(key, 0) + 1
        representative.setdefault(key, txn)

    repeated = [key for key, count in counts.items() if count >= QUICK_ADD_MIN_USES]
    repeated.sort(key=lambda key: counts[key], reverse=True)
    return tuple(representative[key] for key in repeated[:QUICK_ADD_LIMIT])


def amount_presets(
    transactions: Sequence[Transaction],
    now: Optional[datetime] = None,
    max_presets: int = 5,
    *,
    tz: Optional[str] = None,
) -> tuple[float, ...]:
    """Return the most used expense amounts of the last month in ascending order.

    Short lists are padded from :data:`DEFAULT_AMOUNT_PRESETS`.
    """

    tz = tz or get_settings().timezone
    recent = _recent_expenses(transactions, PRESET_WINDOW_DAYS, now, tz)
    if recent.empty:
        return DEFAULT_AMOUNT_PRESETS[:max_presets]

    counts = recent["amount"].value_counts(sort=False)
    frequent = counts.sort_values(ascending=False, kind="mergesort").head(max_presets)
    presets = [float(amount) for amount in frequent.index]

    for default in DEFAULT_AMOUNT_PRESETS:
        if len(presets) >= max_presets:
            break
        if default not in presets:
            presets.append(default)
    return tuple(sorted(presets))
