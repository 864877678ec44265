"""Smoke tests for the Plotly chart builders."""

from __future__ import annotations

import plotly.graph_objects as go

from analytics.aggregation import analyze_transactions
from visualization import (
    build_daily_chart,
    build_monthly_trend_chart,
    build_needs_wants_chart,
    build_payment_mode_chart,
    build_top_categories_chart,
)


def test_builders_return_figures_for_populated_analytics(make_txn, now):
    analytics = analyze_transactions(
        (
            make_txn("chai", 20, now, necessity="want"),
            make_txn("rent", 900, "2024-03-02", payment_mode="Debit Card", necessity="need"),
            make_txn("salary", 5000, "2024-03-01", type="income"),
        ),
        now=now,
    )

    figures = [
        build_daily_chart(analytics.daily_data, "Rs."),
        build_monthly_trend_chart(analytics.monthly_trend, "Rs."),
        build_needs_wants_chart(analytics.pie_data),
        build_payment_mode_chart(analytics.by_mode, "Rs."),
        build_top_categories_chart(analytics.top_categories, "Rs."),
    ]

    assert all(isinstance(fig, go.Figure) for fig in figures)
    assert len(figures[0].data) == 2
    assert len(figures[1].data) == 3


def test_empty_inputs_render_placeholders():
    fig = build_daily_chart(())

    assert len(fig.data) == 0
    assert fig.layout.annotations[0].text == "No transactions in the last 7 days."
    assert isinstance(build_needs_wants_chart(()), go.Figure)
    assert isinstance(build_top_categories_chart(()), go.Figure)
