"""Analytics helpers shared across Bujit views."""

from analytics.aggregation import (
    PIE_COLORS,
    analyze_transactions,
    build_daily_data,
    build_monthly_trend,
    compute_dashboard_analytics,
    percent_change,
)
from analytics.autocomplete import AutoCompleteSuggestion, shorthand_text, suggest_completions
from analytics.cache import AnalyticsCache, transactions_fingerprint
from analytics.cards import CardId, ChartCard, InsightCard, StatCard, build_dashboard_cards
from analytics.necessity import (
    NecessityTally,
    is_learned,
    learn_necessity,
    record_necessity,
    suggest_necessity,
)
from analytics.periods import (
    InvalidPeriodError,
    PeriodRange,
    TimePeriod,
    TransactionFilter,
    filter_transactions,
    previous_period,
    resolve_period,
    week_range,
)
from analytics.streaks import compute_streaks
from analytics.suggestions import amount_presets, quick_add_suggestions

__all__ = [
    "PIE_COLORS",
    "analyze_transactions",
    "build_daily_data",
    "build_monthly_trend",
    "compute_dashboard_analytics",
    "percent_change",
    "AutoCompleteSuggestion",
    "shorthand_text",
    "suggest_completions",
    "AnalyticsCache",
    "transactions_fingerprint",
    "CardId",
    "ChartCard",
    "InsightCard",
    "StatCard",
    "build_dashboard_cards",
    "NecessityTally",
    "is_learned",
    "learn_necessity",
    "record_necessity",
    "suggest_necessity",
    "InvalidPeriodError",
    "PeriodRange",
    "TimePeriod",
    "TransactionFilter",
    "filter_transactions",
    "previous_period",
    "resolve_period",
    "week_range",
    "compute_streaks",
    "amount_presets",
    "quick_add_suggestions",
]
