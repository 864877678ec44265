"""Visualization utilities for Bujit dashboards."""

from .charts import (
    build_daily_chart,
    build_monthly_trend_chart,
    build_needs_wants_chart,
    build_payment_mode_chart,
    build_top_categories_chart,
)
from .theme import theme_tokens

__all__ = [
    "build_daily_chart",
    "build_monthly_trend_chart",
    "build_needs_wants_chart",
    "build_payment_mode_chart",
    "build_top_categories_chart",
    "theme_tokens",
]
