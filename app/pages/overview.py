"""Overview dashboard page layout."""

from __future__ import annotations

from typing import Sequence

import plotly.graph_objects as go
import streamlit as st

from analytics.cards import Card, CardId, ChartCard, InsightCard, StatCard
from app.layout import card
from visualization import (
    build_daily_chart,
    build_monthly_trend_chart,
    build_needs_wants_chart,
    build_payment_mode_chart,
    build_top_categories_chart,
)

STAT_COLUMNS = 4


def _render_stat_cards(cards: Sequence[StatCard]) -> None:
    for offset in range(0, len(cards), STAT_COLUMNS):
        row = cards[offset : offset + STAT_COLUMNS]
        columns = st.columns(STAT_COLUMNS)
        for column, stat in zip(columns, row):
            delta = f"{stat.trend:+.1f}%" if stat.trend else None
            column.metric(stat.label, stat.value, delta, delta_color="inverse")
            if stat.subtitle:
                column.caption(stat.subtitle)


def _render_insight_cards(cards: Sequence[InsightCard]) -> None:
    if not cards:
        return
    columns = st.columns(len(cards))
    for column, insight in zip(columns, cards):
        with column:
            with card(insight.label):
                st.markdown(f"**{insight.headline}**")
                if insight.detail:
                    st.caption(insight.detail)


def _chart_for(chart: ChartCard, currency_symbol: str) -> go.Figure:
    if chart.id is CardId.DAILY_CHART:
        return build_daily_chart(chart.data, currency_symbol)
    if chart.id is CardId.MONTHLY_TREND:
        return build_monthly_trend_chart(chart.data, currency_symbol)
    if chart.id is CardId.NEEDS_WANTS:
        return build_needs_wants_chart(chart.data)
    if chart.id is CardId.PAYMENT_MODE:
        return build_payment_mode_chart(chart.data, currency_symbol)
    return build_top_categories_chart(chart.data, currency_symbol)


def _render_chart_cards(cards: Sequence[ChartCard], currency_symbol: str) -> None:
    for offset in range(0, len(cards), 2):
        columns = st.columns(2, gap="medium")
        for column, chart in zip(columns, cards[offset : offset + 2]):
            with column:
                with card(chart.title):
                    st.plotly_chart(
                        _chart_for(chart, currency_symbol),
                        use_container_width=True,
                        key=f"chart-{chart.id.value}",
                    )


def render_page(
    cards: Sequence[Card],
    insights: list[str],
    *,
    period_label: str,
    currency_symbol: str = "",
) -> None:
    """Render the dashboard cards grouped by kind, keeping their relative order."""

    st.title("Dashboard")
    st.caption(period_label)

    _render_stat_cards([item for item in cards if item.kind == "stat"])
    _render_insight_cards([item for item in cards if item.kind == "insight"])
    _render_chart_cards([item for item in cards if item.kind == "chart"], currency_symbol)

    with card("Highlights"):
        if insights:
            items = "".join(f"<li>{item}</li>" for item in insights)
            st.markdown(f"<ul class='bj-insights'>{items}</ul>", unsafe_allow_html=True)
        else:
            st.info("Add a few transactions to see highlights.")


__all__ = ["render_page"]
