"""Dashboard card registry.

Each card is a frozen record tagged by ``kind`` so the presentation layer can dispatch
on it without knowing how the values were derived.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Literal, Optional, Union

from core.formatting import format_amount, pluralize_days
from core.models import DashboardAnalytics, StreakData

__all__ = [
    "Card",
    "CardId",
    "ChartCard",
    "DEFAULT_CARD_ORDER",
    "InsightCard",
    "StatCard",
    "build_dashboard_cards",
]


class CardId(str, Enum):
    SPENT = "spent"
    INCOME = "income"
    SAVINGS = "savings"
    THIS_WEEK = "this-week"
    DAILY_AVG = "daily-avg"
    AVG_TXN = "avg-txn"
    NO_EXPENSE_STREAK = "no-expense-streak"
    SPENDING_STREAK = "spending-streak"
    ACTIVE_DAYS = "active-days"
    MOST_FREQUENT = "most-frequent"
    BIGGEST_EXPENSE = "biggest-expense"
    BEST_DAY = "best-day"
    WORST_DAY = "worst-day"
    DAILY_CHART = "daily-chart"
    TOP_CATEGORIES = "top-categories"
    NEEDS_WANTS = "needs-wants"
    PAYMENT_MODE = "payment-mode"
    MONTHLY_TREND = "monthly-trend"
    LAST_MONTH = "last-month"


DEFAULT_CARD_ORDER: tuple[CardId, ...] = tuple(CardId)


@dataclass(frozen=True, slots=True)
class StatCard:
    id: CardId
    label: str
    value: str
    subtitle: str = ""
    trend: Optional[float] = None
    kind: Literal["stat"] = "stat"


@dataclass(frozen=True, slots=True)
class ChartCard:
    id: CardId
    title: str
    data: tuple[Any, ...] = ()
    kind: Literal["chart"] = "chart"

    @property
    def is_empty(self) -> bool:
        return not self.data


@dataclass(frozen=True, slots=True)
class InsightCard:
    id: CardId
    label: str
    headline: str
    detail: str = ""
    kind: Literal["insight"] = "insight"


Card = Union[StatCard, ChartCard, InsightCard]


def _stat_cards(analytics: DashboardAnalytics, money) -> dict[CardId, Card]:
    savings_sign = "+" if analytics.savings_this_period >= 0 else "-"
    return {
        CardId.SPENT: StatCard(
            CardId.SPENT,
            "Spent",
            money(analytics.period_total),
            trend=analytics.percent_change,
        ),
        CardId.INCOME: StatCard(CardId.INCOME, "Income", money(analytics.period_income_total)),
        CardId.SAVINGS: StatCard(
            CardId.SAVINGS,
            "Savings",
            f"{savings_sign}{money(abs(analytics.savings_this_period))}",
            subtitle=f"{max(analytics.savings_rate, 0):.0f}% savings rate",
        ),
        CardId.THIS_WEEK: StatCard(
            CardId.THIS_WEEK,
            "This Week",
            money(analytics.this_week_total),
            trend=analytics.week_change,
        ),
        CardId.DAILY_AVG: StatCard(
            CardId.DAILY_AVG, "Daily Avg", money(analytics.avg_daily_spending)
        ),
        CardId.AVG_TXN: StatCard(
            CardId.AVG_TXN,
            "Avg Transaction",
            money(analytics.avg_transaction_size),
            subtitle=f"{analytics.transaction_count} transactions",
        ),
        CardId.ACTIVE_DAYS: StatCard(
            CardId.ACTIVE_DAYS,
            "Active Days",
            str(analytics.unique_spending_days),
            subtitle="days with spending",
        ),
        CardId.LAST_MONTH: StatCard(
            CardId.LAST_MONTH,
            "Previous Period",
            money(analytics.previous_period_total),
            subtitle=f"Income {money(analytics.previous_period_income_total)}",
        ),
    }


def _streak_cards(streaks: StreakData) -> dict[CardId, Card]:
    no_expense_since = (
        f"Since {streaks.last_spending_date:%d %b}" if streaks.last_spending_date else ""
    )
    return {
        CardId.NO_EXPENSE_STREAK: StatCard(
            CardId.NO_EXPENSE_STREAK,
            "No-Spend Streak",
            pluralize_days(streaks.no_expense_streak),
            subtitle=no_expense_since,
        ),
        CardId.SPENDING_STREAK: StatCard(
            CardId.SPENDING_STREAK,
            "Spending Streak",
            pluralize_days(streaks.spending_streak),
        ),
    }


def _insight_cards(analytics: DashboardAnalytics, money) -> dict[CardId, Card]:
    cards: dict[CardId, Card] = {}
    frequent = analytics.most_frequent_category
    if frequent is not None:
        cards[CardId.MOST_FREQUENT] = InsightCard(
            CardId.MOST_FREQUENT, "Most Frequent", frequent.name, f"{frequent.count} times"
        )
    biggest = analytics.biggest_expense
    if biggest is not None:
        cards[CardId.BIGGEST_EXPENSE] = InsightCard(
            CardId.BIGGEST_EXPENSE,
            "Biggest Expense",
            money(biggest.amount),
            f"{biggest.reason} via {biggest.payment_mode}",
        )
    if analytics.best_day is not None:
        cards[CardId.BEST_DAY] = InsightCard(
            CardId.BEST_DAY,
            "Best Day",
            f"{analytics.best_day.date:%a, %d %b}",
            f"{money(analytics.best_day.total)} spent",
        )
    if analytics.worst_day is not None:
        cards[CardId.WORST_DAY] = InsightCard(
            CardId.WORST_DAY,
            "Highest Spend Day",
            f"{analytics.worst_day.date:%a, %d %b}",
            f"{money(analytics.worst_day.total)} spent",
        )
    return cards


def _chart_cards(analytics: DashboardAnalytics) -> dict[CardId, Card]:
    return {
        CardId.DAILY_CHART: ChartCard(CardId.DAILY_CHART, "Last 7 Days", analytics.daily_data),
        CardId.TOP_CATEGORIES: ChartCard(
            CardId.TOP_CATEGORIES, "Top Categories", analytics.top_categories
        ),
        CardId.NEEDS_WANTS: ChartCard(CardId.NEEDS_WANTS, "Needs vs Wants", analytics.pie_data),
        CardId.PAYMENT_MODE: ChartCard(CardId.PAYMENT_MODE, "By Payment Mode", analytics.by_mode),
        CardId.MONTHLY_TREND: ChartCard(
            CardId.MONTHLY_TREND, "Monthly Trend", analytics.monthly_trend
        ),
    }


def build_dashboard_cards(
    analytics: DashboardAnalytics,
    streaks: Optional[StreakData] = None,
    *,
    currency_symbol: str = "",
    order: Iterable[CardId | str] = DEFAULT_CARD_ORDER,
) -> tuple[Card, ...]:
    """Return the dashboard cards in ``order``.

    Insight cards whose value is absent are left out, as are streak cards when no
    ``streaks`` are given. Unknown ids in ``order`` raise :class:`ValueError`.
    """

    def money(value: float) -> str:
        return format_amount(value, currency_symbol)

    available: dict[CardId, Card] = {}
    available.update(_stat_cards(analytics, money))
    if streaks is not None:
        available.update(_streak_cards(streaks))
    available.update(_insight_cards(analytics, money))
    available.update(_chart_cards(analytics))

    cards: list[Card] = []
    for card_id in order:
        card = available.get(CardId(card_id))
        if card is not None:
            cards.append(card)
    return tuple(cards)
