"""Formatting helpers for Bujit summaries."""

from __future__ import annotations

from typing import Optional

from core.models import DashboardAnalytics, StreakData

__all__ = [
    "PERIOD_LABELS",
    "PERIOD_PHRASES",
    "build_insights",
    "format_amount",
    "format_delta",
    "format_number",
    "pluralize_days",
]

PERIOD_LABELS: dict[str, str] = {
    "this_week": "This Week",
    "last_week": "Last Week",
    "this_month": "This Month",
    "last_month": "Last Month",
    "this_year": "This Year",
    "last_year": "Last Year",
    "all_time": "All Time",
    "custom": "Custom Range",
}

PERIOD_PHRASES: dict[str, str] = {
    "this_week": "this week",
    "last_week": "last week",
    "this_month": "this month",
    "last_month": "last month",
    "this_year": "this year",
    "last_year": "last year",
    "all_time": "all time",
    "custom": "in range",
}


def format_number(value: float) -> str:
    """Render ``value`` with at most 2 decimals and no trailing zeros (``50``, ``10.5``)."""

    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def format_amount(value: float, currency_symbol: str = "") -> str:
    """Render ``value`` with thousands separators, e.g. ``Rs.1,250.5``."""

    text = f"{abs(value):,.2f}".rstrip("0").rstrip(".")
    sign = "-" if value < 0 and text != "0" else ""
    return f"{sign}{currency_symbol}{text}"


def format_delta(change_pct: float, label: str = "vs last period") -> str:
    if change_pct == 0:
        return f"No change {label}"
    sign = "+" if change_pct > 0 else ""
    return f"{sign}{change_pct:.1f}% {label}"


def pluralize_days(days: int) -> str:
    return f"{days} day" if days == 1 else f"{days} days"


def build_insights(
    analytics: DashboardAnalytics,
    *,
    period_phrase: str,
    currency_symbol: str = "",
    streaks: Optional[StreakData] = None,
) -> list[str]:
    insights: list[str] = []

    spent = format_amount(analytics.period_total, currency_symbol)
    insights.append(
        f"You've spent <strong>{spent}</strong> {period_phrase} "
        f"({format_delta(analytics.percent_change)})."
    )

    if analytics.period_income_total > 0:
        insights.append(
            f"Savings rate: <strong>{analytics.savings_rate:.0f}%</strong> "
            f"of {format_amount(analytics.period_income_total, currency_symbol)} income."
        )

    if analytics.top_categories:
        top = analytics.top_categories[0]
        insights.append(
            f"Top category: <strong>{top.name}</strong> at "
            f"{format_amount(top.total, currency_symbol)}."
        )

    if analytics.biggest_expense is not None:
        biggest = analytics.biggest_expense
        insights.append(
            f"Biggest expense: <strong>{biggest.reason}</strong> "
            f"({format_amount(biggest.amount, currency_symbol)} via {biggest.payment_mode})."
        )

    if streaks is not None:
        if streaks.spending_streak:
            insights.append(
                f"Spending streak: <strong>{pluralize_days(streaks.spending_streak)}</strong>."
            )
        elif streaks.no_expense_streak:
            insights.append(
                f"No-expense streak: <strong>{pluralize_days(streaks.no_expense_streak)}</strong>."
            )

    return insights
