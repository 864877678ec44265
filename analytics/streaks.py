"""Consecutive-day spending and no-spending streaks anchored at today."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Sequence

import pandas as pd

from config.settings import get_settings
from core.data_loader import build_transaction_frame, local_today
from core.models import StreakData, Transaction

__all__ = ["compute_streaks"]


def compute_streaks(
    transactions: Sequence[Transaction],
    now: Optional[datetime] = None,
    *,
    tz: Optional[str] = None,
) -> StreakData:
    """Return spending / no-expense streaks for the local day containing ``now``.

    Days are tested for membership, so several expenses on one day count once. When no
    expense has ever been logged the no-expense walk runs back to the earliest
    transaction day, or covers just today for an empty history.
    """

    tz = tz or get_settings().timezone
    today = local_today(now, tz).date()
    frame = build_transaction_frame(transactions, tz)

    past = frame[frame["day"] <= pd.Timestamp(today)]
    expense_days: set[date] = {
        day.date() for day in past.loc[past["type"] == "expense", "day"]
    }

    if today in expense_days:
        streak = 0
        cursor = today
        while cursor in expense_days:
            streak += 1
            cursor -= timedelta(days=1)
        return StreakData(
            no_expense_streak=0,
            spending_streak=streak,
            last_no_expense_date=cursor,
            last_spending_date=today,
        )

    if expense_days:
        last_expense = max(expense_days)
        no_expense = (today - last_expense).days
    else:
        last_expense = None
        first_day = past["day"].min() if not past.empty else None
        no_expense = 1 if first_day is None else (today - first_day.date()).days + 1

    return StreakData(
        no_expense_streak=no_expense,
        spending_streak=0,
        last_no_expense_date=today,
        last_spending_date=last_expense,
    )
