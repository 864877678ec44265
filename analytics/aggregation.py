"""Dashboard aggregates: period totals, comparisons, breakdowns and trends."""

from __future__ import annotations

from datetime import date, datetime
from typing import Final, Optional, Sequence

import numpy as np
import pandas as pd

from analytics.periods import (
    PeriodRange,
    TransactionFilter,
    filter_transactions,
    previous_period,
    week_range,
)
from config.settings import get_settings
from core.data_loader import build_transaction_frame, local_today
from core.models import (
    CategoryTotal,
    DailyPoint,
    DashboardAnalytics,
    DayTotal,
    FrequentCategory,
    ModeTotal,
    MonthlyPoint,
    PieSlice,
    Transaction,
)

__all__ = [
    "DAILY_WINDOW_DAYS",
    "MONTHLY_WINDOW_MONTHS",
    "PIE_COLORS",
    "analyze_transactions",
    "build_daily_data",
    "build_monthly_trend",
    "compute_dashboard_analytics",
    "percent_change",
]

DAILY_WINDOW_DAYS: Final[int] = 7
MONTHLY_WINDOW_MONTHS: Final[int] = 6
OTHER_CATEGORY: Final[str] = "Other"

PIE_COLORS: Final[dict[str, str]] = {
    "Needs": "hsl(190, 65%, 50%)",
    "Wants": "hsl(35, 85%, 55%)",
    "Other": "hsl(220, 15%, 40%)",
}


def percent_change(current: float, previous: float) -> float:
    """Return the change from ``previous`` to ``current`` in percent, 0 without a baseline."""

    if previous <= 0:
        return 0.0
    return float((current - previous) / previous * 100)


def _total(frame: pd.DataFrame) -> float:
    return float(frame["amount"].sum()) if not frame.empty else 0.0


def _of_type(frame: pd.DataFrame, txn_type: str) -> pd.DataFrame:
    return frame[frame["type"] == txn_type]


def _between(frame: pd.DataFrame, start: date, end: date) -> pd.DataFrame:
    mask = (frame["day"] >= pd.Timestamp(start)) & (frame["day"] <= pd.Timestamp(end))
    return frame[mask]


def _window_totals(frame: pd.DataFrame, window: Optional[PeriodRange]) -> tuple[float, float]:
    if window is None or window.start is None or window.end is None:
        return 0.0, 0.0
    scoped = _between(frame, window.start, window.end)
    return _total(_of_type(scoped, "expense")), _total(_of_type(scoped, "income"))


def _category_table(expenses: pd.DataFrame) -> pd.DataFrame:
    """Group expenses by lower-cased reason in first-seen order.

    The display name is the most recent spelling within each group.
    """

    if expenses.empty:
        return pd.DataFrame(columns=["name", "total", "count"])
    grouped = expenses.groupby("reason_key", sort=False).agg(
        name=("reason", "last"),
        total=("amount", "sum"),
        count=("amount", "size"),
    )
    grouped["name"] = grouped["name"].where(grouped["name"].str.strip() != "", OTHER_CATEGORY)
    return grouped


def _top_categories(table: pd.DataFrame, limit: int) -> tuple[CategoryTotal, ...]:
    if table.empty:
        return ()
    ranked = table.sort_values("total", ascending=False, kind="mergesort").head(limit)
    return tuple(
        CategoryTotal(name=str(name), total=float(total), count=int(count))
        for name, total, count in zip(ranked["name"], ranked["total"], ranked["count"])
    )


def _most_frequent(table: pd.DataFrame) -> Optional[FrequentCategory]:
    if table.empty:
        return None
    ranked = table.sort_values("count", ascending=False, kind="mergesort")
    top = ranked.iloc[0]
    return FrequentCategory(name=str(top["name"]), count=int(top["count"]))


def _best_and_worst_day(period_frame: pd.DataFrame) -> tuple[Optional[DayTotal], Optional[DayTotal]]:
    if period_frame.empty:
        return None, None

    spend = np.where(period_frame["type"] == "expense", period_frame["amount"], 0.0)
    day_totals = pd.Series(spend, index=period_frame["day"]).groupby(level=0).sum()
    best_day = day_totals.idxmin()
    worst_day = day_totals.idxmax()
    return (
        DayTotal(date=best_day.date(), total=float(day_totals[best_day])),
        DayTotal(date=worst_day.date(), total=float(day_totals[worst_day])),
    )


def _by_mode(expenses: pd.DataFrame) -> tuple[ModeTotal, ...]:
    if expenses.empty:
        return ()
    totals = (
        expenses.groupby("payment_mode", sort=False)["amount"]
        .sum()
        .sort_values(ascending=False, kind="mergesort")
    )
    return tuple(ModeTotal(name=str(name), total=float(value)) for name, value in totals.items())


def _necessity_totals(expenses: pd.DataFrame) -> tuple[float, float, float]:
    needs = _total(expenses[expenses["necessity"] == "need"])
    wants = _total(expenses[expenses["necessity"] == "want"])
    other = _total(expenses[~expenses["necessity"].isin(["need", "want"])])
    return needs, wants, other


def _needs_wants_ratio(needs: float, wants: float) -> Optional[float]:
    if wants > 0:
        return needs / wants
    # Needs without wants has no finite ratio.
    return None if needs > 0 else 0.0


def build_daily_data(frame: pd.DataFrame, today: pd.Timestamp) -> tuple[DailyPoint, ...]:
    """Return the last ``DAILY_WINDOW_DAYS`` local days ending today, zero-filled."""

    index = pd.date_range(end=today, periods=DAILY_WINDOW_DAYS, freq="D")
    expense = _of_type(frame, "expense").groupby("day")["amount"].sum().reindex(index, fill_value=0.0)
    income = _of_type(frame, "income").groupby("day")["amount"].sum().reindex(index, fill_value=0.0)
    return tuple(
        DailyPoint(
            label=day.strftime("%a"),
            date=day.date(),
            expense=float(expense[day]),
            income=float(income[day]),
        )
        for day in index
    )


def build_monthly_trend(frame: pd.DataFrame, today: pd.Timestamp) -> tuple[MonthlyPoint, ...]:
    """Return the last ``MONTHLY_WINDOW_MONTHS`` calendar months ending this month."""

    months = pd.period_range(end=today.to_period("M"), periods=MONTHLY_WINDOW_MONTHS, freq="M")
    month_keys = frame["day"].dt.to_period("M")
    expense = (
        frame[frame["type"] == "expense"]
        .groupby(month_keys[frame["type"] == "expense"])["amount"]
        .sum()
        .reindex(months, fill_value=0.0)
    )
    income = (
        frame[frame["type"] == "income"]
        .groupby(month_keys[frame["type"] == "income"])["amount"]
        .sum()
        .reindex(months, fill_value=0.0)
    )

    points: list[MonthlyPoint] = []
    for month in months:
        month_income = float(income[month])
        month_expense = float(expense[month])
        points.append(
            MonthlyPoint(
                label=month.strftime("%b"),
                month_start=month.start_time.date(),
                month_end=month.end_time.date(),
                income=month_income,
                expense=month_expense,
                savings=month_income - month_expense,
            )
        )
    return tuple(points)


def compute_dashboard_analytics(
    period_transactions: Sequence[Transaction],
    all_transactions: Sequence[Transaction],
    period: PeriodRange,
    now: Optional[datetime] = None,
    *,
    tz: Optional[str] = None,
    top_n: Optional[int] = None,
) -> DashboardAnalytics:
    """Aggregate ``period_transactions`` for the dashboard.

    Period comparisons, the weekly comparison, ``daily_data`` and ``monthly_trend`` are
    computed from ``all_transactions`` so they do not depend on the active filter.
    Records with an unusable date or amount are skipped.
    """

    settings = get_settings()
    tz = tz or settings.timezone
    top_n = settings.top_categories_limit if top_n is None else top_n
    today = local_today(now, tz)

    period_frame = build_transaction_frame(period_transactions, tz).sort_values(
        ["timestamp", "position"], kind="mergesort"
    )
    all_frame = build_transaction_frame(all_transactions, tz)

    expenses = _of_type(period_frame, "expense")
    period_total = _total(expenses)
    period_income_total = _total(_of_type(period_frame, "income"))
    savings = period_income_total - period_total
    savings_rate = savings / period_income_total * 100 if period_income_total > 0 else 0.0

    previous_total, previous_income = _window_totals(all_frame, previous_period(period))

    this_week_start, this_week_end = week_range(today.date(), 0)
    last_week_start, last_week_end = week_range(today.date(), 1)
    this_week_total = _total(_of_type(_between(all_frame, this_week_start, this_week_end), "expense"))
    last_week_total = _total(_of_type(_between(all_frame, last_week_start, last_week_end), "expense"))

    first_day = period_frame["day"].min().date() if not period_frame.empty else None
    days_spanned = period.day_count(today.date(), first_day)
    transaction_count = int(len(expenses))

    table = _category_table(expenses)
    best_day, worst_day = _best_and_worst_day(period_frame)
    needs, wants, other = _necessity_totals(expenses)
    pie_data = tuple(
        PieSlice(name=name, value=value, color=PIE_COLORS[name])
        for name, value in (("Needs", needs), ("Wants", wants), ("Other", other))
        if value > 0
    )

    biggest_expense = None
    if not expenses.empty:
        biggest_position = int(expenses.loc[expenses["amount"].idxmax(), "position"])
        biggest_expense = period_transactions[biggest_position]

    return DashboardAnalytics(
        period_total=period_total,
        period_income_total=period_income_total,
        previous_period_total=previous_total,
        previous_period_income_total=previous_income,
        percent_change=percent_change(period_total, previous_total),
        savings_this_period=savings,
        savings_rate=float(savings_rate),
        this_week_total=this_week_total,
        previous_week_total=last_week_total,
        week_change=percent_change(this_week_total, last_week_total),
        avg_daily_spending=period_total / days_spanned if days_spanned > 0 else 0.0,
        avg_transaction_size=period_total / transaction_count if transaction_count else 0.0,
        transaction_count=transaction_count,
        needs_total=needs,
        wants_total=wants,
        uncategorized_total=other,
        needs_wants_ratio=_needs_wants_ratio(needs, wants),
        unique_spending_days=int(expenses["day"].nunique()),
        top_categories=_top_categories(table, top_n),
        most_frequent_category=_most_frequent(table),
        biggest_expense=biggest_expense,
        best_day=best_day,
        worst_day=worst_day,
        by_mode=_by_mode(expenses),
        pie_data=pie_data,
        daily_data=build_daily_data(all_frame, today),
        monthly_trend=build_monthly_trend(all_frame, today),
    )


def analyze_transactions(
    transactions: Sequence[Transaction],
    filters: TransactionFilter = TransactionFilter(),
    now: Optional[datetime] = None,
    *,
    tz: Optional[str] = None,
) -> DashboardAnalytics:
    """Filter ``transactions`` and aggregate the result against the full collection."""

    tz = tz or get_settings().timezone
    period = filters.resolve(now, tz)
    selected = filter_transactions(transactions, filters, now, tz)
    return compute_dashboard_analytics(selected, transactions, period, now, tz=tz)
