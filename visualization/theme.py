"""Shared Plotly theme tokens for Bujit visualizations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ThemeTokens:
    day_format: str = "%a %d %b"
    label_color: str = "#475569"
    label_font: str = "Inter"
    label_size: int = 12
    grid_color: str = "rgba(148, 163, 184, 0.25)"
    expense_color: str = "#EF4444"
    expense_soft: str = "rgba(239, 68, 68, 0.12)"
    income_color: str = "#22C55E"
    savings_color: str = "#2563EB"
    neutral_grey: str = "#94A3B8"
    neutral_white: str = "#FFFFFF"
    mode_palette: tuple[str, ...] = (
        "hsl(280, 65%, 60%)",
        "hsl(160, 60%, 45%)",
        "hsl(30, 80%, 55%)",
        "hsl(200, 70%, 50%)",
        "hsl(340, 65%, 55%)",
    )
    category_palette: tuple[str, ...] = (
        "#0C6FFD",
        "#5DA9FF",
        "#F97316",
        "#22C55E",
        "#7C3AED",
        "#F59E0B",
    )


_TOKENS = ThemeTokens()


def theme_tokens() -> ThemeTokens:
    """Return the shared visualization tokens.

    The tokens are frozen so every chart on the dashboard uses the same colours.
    """

    return _TOKENS
