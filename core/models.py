"""Shared data model definitions for Bujit."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any, Iterable, Literal, Optional

TransactionType = Literal["expense", "income", "savings"]
Necessity = Literal["need", "want"]

TRANSACTION_TYPES: tuple[str, ...] = ("expense", "income", "savings")
NECESSITIES: tuple[str, ...] = ("need", "want")


@dataclass(frozen=True, slots=True)
class Transaction:
    id: str
    date: datetime
    reason: str
    amount: float
    payment_mode: str
    type: TransactionType = "expense"
    necessity: Optional[Necessity] = None

    @property
    def is_expense(self) -> bool:
        return self.type == "expense"

    @property
    def is_income(self) -> bool:
        return self.type == "income"


@dataclass(frozen=True, slots=True)
class PaymentMode:
    id: str
    name: str
    shorthand: str

    def matches(self, token: str) -> bool:
        """Return ``True`` when ``token`` names this mode, ignoring case."""

        needle = token.upper()
        return self.shorthand.upper() == needle or self.name.upper() == needle


DEFAULT_PAYMENT_MODES: tuple[PaymentMode, ...] = (
    PaymentMode(id="1", name="Debit Card", shorthand="D"),
    PaymentMode(id="2", name="Cash", shorthand="C"),
    PaymentMode(id="3", name="Credit Card", shorthand="CC"),
)


@dataclass(frozen=True, slots=True)
class ParsedInput:
    reason: str
    payment_mode: str
    amount: Optional[float]
    is_valid: bool


@dataclass(frozen=True, slots=True)
class StreakData:
    no_expense_streak: int = 0
    spending_streak: int = 0
    last_no_expense_date: Optional[date] = None
    last_spending_date: Optional[date] = None


@dataclass(frozen=True, slots=True)
class CategoryTotal:
    name: str
    total: float
    count: int


@dataclass(frozen=True, slots=True)
class ModeTotal:
    name: str
    total: float


@dataclass(frozen=True, slots=True)
class PieSlice:
    name: str
    value: float
    color: str


@dataclass(frozen=True, slots=True)
class DayTotal:
    date: date
    total: float


@dataclass(frozen=True, slots=True)
class DailyPoint:
    label: str
    date: date
    expense: float
    income: float


@dataclass(frozen=True, slots=True)
class MonthlyPoint:
    label: str
    month_start: date
    month_end: date
    income: float
    expense: float
    savings: float


@dataclass(frozen=True, slots=True)
class FrequentCategory:
    name: str
    count: int


@dataclass(frozen=True, slots=True)
class DashboardAnalytics:
    """Read-only aggregates for one period, recomputed per request."""

    period_total: float = 0.0
    period_income_total: float = 0.0
    previous_period_total: float = 0.0
    previous_period_income_total: float = 0.0
    percent_change: float = 0.0
    savings_this_period: float = 0.0
    savings_rate: float = 0.0
    this_week_total: float = 0.0
    previous_week_total: float = 0.0
    week_change: float = 0.0
    avg_daily_spending: float = 0.0
    avg_transaction_size: float = 0.0
    transaction_count: int = 0
    needs_total: float = 0.0
    wants_total: float = 0.0
    uncategorized_total: float = 0.0
    needs_wants_ratio: Optional[float] = 0.0
    unique_spending_days: int = 0
    top_categories: tuple[CategoryTotal, ...] = ()
    most_frequent_category: Optional[FrequentCategory] = None
    biggest_expense: Optional[Transaction] = None
    best_day: Optional[DayTotal] = None
    worst_day: Optional[DayTotal] = None
    by_mode: tuple[ModeTotal, ...] = ()
    pie_data: tuple[PieSlice, ...] = ()
    daily_data: tuple[DailyPoint, ...] = field(default_factory=tuple)
    monthly_trend: tuple[MonthlyPoint, ...] = field(default_factory=tuple)


def apply_update(
    transactions: Iterable[Transaction],
    txn_id: str,
    **changes: Any,
) -> tuple[Transaction, ...]:
    """Return a new collection with the transaction ``txn_id`` updated.

    Unknown ids leave the collection unchanged; ``id`` itself cannot be changed.
    """

    changes.pop("id", None)
    return tuple(
        replace(txn, **changes) if txn.id == txn_id else txn for txn in transactions
    )


__all__ = [
    "TransactionType",
    "Necessity",
    "TRANSACTION_TYPES",
    "NECESSITIES",
    "Transaction",
    "PaymentMode",
    "DEFAULT_PAYMENT_MODES",
    "ParsedInput",
    "StreakData",
    "CategoryTotal",
    "ModeTotal",
    "PieSlice",
    "DayTotal",
    "DailyPoint",
    "MonthlyPoint",
    "FrequentCategory",
    "DashboardAnalytics",
    "apply_update",
]
