"""Synthetic ledger generator for Bujit demos and tests.

Produces a few months of everyday shorthand-style transactions (salary, rent, groceries,
chai, rides) so the dashboard has something realistic to aggregate.
"""

from __future__ import annotations

import calendar
import itertools
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Sequence, Tuple, TypeVar

import numpy as np
import pandas as pd

from core.models import Necessity, Transaction, TransactionType

T = TypeVar("T")


@dataclass(frozen=True)
class SpendProfile:
    """A recurring kind of transaction in the synthetic ledger."""

    reason: str
    payment_mode: str
    amount_range: Tuple[float, float]
    necessity: Optional[Necessity] = None
    monthly_count: Tuple[int, int] = (1, 1)
    round_to: float = 10.0


INCOME_PROFILES: Sequence[SpendProfile] = (
    SpendProfile("Salary", "Debit Card", (52000.0, 56000.0), round_to=1000.0),
)

FIXED_PROFILES: Sequence[Tuple[SpendProfile, int]] = (
    (SpendProfile("Rent", "Debit Card", (18000.0, 18000.0), "need"), 3),
    (SpendProfile("Electricity", "Debit Card", (1800.0, 3200.0), "need"), 9),
    (SpendProfile("Internet", "Credit Card", (1199.0, 1199.0), "need", round_to=1.0), 12),
    (SpendProfile("Netflix", "Credit Card", (649.0, 649.0), "want", round_to=1.0), 18),
)

EVERYDAY_PROFILES: Sequence[SpendProfile] = (
    SpendProfile("Groceries", "Debit Card", (600.0, 2400.0), "need", (4, 6)),
    SpendProfile("Chai", "Cash", (20.0, 50.0), None, (10, 18), round_to=10.0),
    SpendProfile("Uber", "Credit Card", (150.0, 450.0), "need", (4, 8)),
    SpendProfile("Lunch", "Cash", (120.0, 300.0), "want", (4, 8)),
    SpendProfile("Movies", "Credit Card", (300.0, 900.0), "want", (0, 2), round_to=50.0),
    SpendProfile("Pharmacy", "Cash", (80.0, 600.0), "need", (0, 2)),
)

SAVINGS_PROFILE = SpendProfile("Mutual Fund SIP", "Debit Card", (5000.0, 5000.0), round_to=500.0)


def generate_demo_transactions(
    end_date: date | datetime | str | None = None,
    months: int = 6,
    *,
    seed: Optional[int] = None,
) -> tuple[Transaction, ...]:
    """Generate ``months`` calendar months of transactions ending on ``end_date``.

    The current month is partial (up to ``end_date``, today by default). Transactions are
    returned newest first, the order a ledger list shows them in.
    """

    if months <= 0:
        raise ValueError("months must be a positive integer")

    rng = np.random.default_rng(seed)
    period_end = _normalize_date(end_date) if end_date is not None else date.today()
    period_start = _add_months(period_end.replace(day=1), -(months - 1))

    records: List[Transaction] = []
    txn_counter = itertools.count(1)

    def append_record(
        txn_date: date,
        profile: SpendProfile,
        txn_type: TransactionType = "expense",
    ) -> None:
        if txn_date < period_start or txn_date > period_end:
            return
        low, high = profile.amount_range
        amount = float(rng.uniform(low, high)) if high > low else low
        amount = max(round(amount / profile.round_to) * profile.round_to, profile.round_to)
        moment = datetime.combine(txn_date, time(hour=int(rng.integers(8, 22)), minute=int(rng.integers(0, 60))))
        records.append(
            Transaction(
                id=f"txn_{next(txn_counter):06d}",
                date=moment,
                reason=profile.reason,
                amount=float(amount),
                payment_mode=profile.payment_mode,
                type=txn_type,
                necessity=profile.necessity if txn_type == "expense" else None,
            )
        )

    anchor = period_start
    while anchor <= period_end:
        year, month = anchor.year, anchor.month

        for profile in INCOME_PROFILES:
            append_record(_clamp_day(year, month, 1), profile, "income")
        append_record(_clamp_day(year, month, 5), SAVINGS_PROFILE, "savings")

        for profile, day in FIXED_PROFILES:
            append_record(_clamp_day(year, month, day), profile)

        month_dates = [d for d in _month_date_range(year, month) if d <= period_end]
        for profile in EVERYDAY_PROFILES:
            low, high = profile.monthly_count
            for _ in range(int(rng.integers(low, high + 1))):
                append_record(_rng_choice(month_dates, rng), profile)

        anchor = _add_months(anchor, 1)

    records.sort(key=lambda txn: (txn.date, txn.id), reverse=True)
    return tuple(records)


def _normalize_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value).date()
    raise TypeError(f"Unsupported date value: {value!r}")


def _add_months(anchor: date, months: int) -> date:
    month = anchor.month - 1 + months
    year = anchor.year + month // 12
    month = month % 12 + 1
    day = min(anchor.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _clamp_day(year: int, month: int, day: int) -> date:
    _, max_day = calendar.monthrange(year, month)
    return date(year, month, max(1, min(day, max_day)))


def _month_date_range(year: int, month: int) -> List[date]:
    start = date(year, month, 1)
    end = _add_months(start, 1) - timedelta(days=1)
    return [d.date() for d in pd.date_range(start=start, end=end, freq="D")]


def _rng_choice(options: Sequence[T], rng: np.random.Generator) -> T:
    if not options:
        raise ValueError("Cannot choose from an empty sequence")
    idx = int(rng.integers(0, len(options)))
    return options[idx]
