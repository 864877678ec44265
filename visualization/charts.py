"""Plotly chart builders for the Bujit dashboard."""

from __future__ import annotations

from typing import Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from core.models import CategoryTotal, DailyPoint, ModeTotal, MonthlyPoint, PieSlice

from .theme import theme_tokens

TOKENS = theme_tokens()

__all__ = [
    "build_daily_chart",
    "build_monthly_trend_chart",
    "build_needs_wants_chart",
    "build_payment_mode_chart",
    "build_top_categories_chart",
]


def _empty_plotly_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(
        annotations=[
            dict(
                text=message,
                x=0.5,
                y=0.5,
                xref="paper",
                yref="paper",
                showarrow=False,
                font=dict(color=TOKENS.neutral_grey, size=14, family=TOKENS.label_font),
            )
        ],
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        margin=dict(l=0, r=0, t=20, b=0),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def _transparent_layout(fig: go.Figure) -> go.Figure:
    fig.update_layout(
        margin=dict(l=0, r=0, t=20, b=0),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1.0),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
        font=dict(color=TOKENS.label_color, family=TOKENS.label_font, size=TOKENS.label_size),
    )
    return fig


def build_daily_chart(points: Sequence[DailyPoint], currency_symbol: str = "") -> go.Figure:
    """Render the last-7-days expense and income bars."""

    if not points or not any(point.expense or point.income for point in points):
        return _empty_plotly_figure("No transactions in the last 7 days.")

    df = pd.DataFrame(
        {
            "Day": [point.label for point in points],
            "Date": [point.date for point in points],
            "Expense": [point.expense for point in points],
            "Income": [point.income for point in points],
        }
    )
    hover_template = f"%{{customdata|{TOKENS.day_format}}}<br>{currency_symbol}%{{y:,.2f}}<extra></extra>"

    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=df["Day"],
            y=df["Expense"],
            name="Expense",
            marker_color=TOKENS.expense_color,
            customdata=pd.to_datetime(df["Date"]),
            hovertemplate=hover_template,
        )
    )
    fig.add_trace(
        go.Bar(
            x=df["Day"],
            y=df["Income"],
            name="Income",
            marker_color=TOKENS.income_color,
            customdata=pd.to_datetime(df["Date"]),
            hovertemplate=hover_template,
        )
    )
    fig.update_layout(
        barmode="group",
        bargap=0.3,
        xaxis=dict(showgrid=False),
        yaxis=dict(showgrid=True, gridcolor=TOKENS.grid_color, zeroline=False),
    )
    return _transparent_layout(fig)


def build_monthly_trend_chart(points: Sequence[MonthlyPoint], currency_symbol: str = "") -> go.Figure:
    """Render six months of income, expense and savings lines."""

    if not points or not any(point.expense or point.income for point in points):
        return _empty_plotly_figure("No monthly history yet.")

    hover_template = f"%{{x}}<br>{currency_symbol}%{{y:,.2f}}<extra></extra>"
    labels = [point.label for point in points]

    fig = go.Figure()
    for name, color, values in (
        ("Income", TOKENS.income_color, [point.income for point in points]),
        ("Expense", TOKENS.expense_color, [point.expense for point in points]),
        ("Savings", TOKENS.savings_color, [point.savings for point in points]),
    ):
        fig.add_trace(
            go.Scatter(
                x=labels,
                y=values,
                mode="lines+markers",
                name=name,
                line=dict(color=color, width=2, shape="spline", smoothing=0.4),
                marker=dict(size=6, color=color, line=dict(color=TOKENS.neutral_white, width=1.2)),
                hovertemplate=hover_template,
            )
        )
    fig.update_layout(
        hovermode="x unified",
        xaxis=dict(showgrid=False),
        yaxis=dict(showgrid=True, gridcolor=TOKENS.grid_color, zeroline=True),
    )
    return _transparent_layout(fig)


def build_needs_wants_chart(slices: Sequence[PieSlice]) -> go.Figure:
    """Render the needs / wants / other donut."""

    if not slices:
        return _empty_plotly_figure("No expenses to classify.")

    df = pd.DataFrame(
        {"Group": [item.name for item in slices], "Value": [item.value for item in slices]}
    )
    fig = px.pie(
        df,
        names="Group",
        values="Value",
        hole=0.55,
        color="Group",
        color_discrete_map={item.name: item.color for item in slices},
    )
    fig.update_traces(
        textposition="inside",
        texttemplate="%{label}<br>%{percent:.0%}",
        marker=dict(line=dict(color=TOKENS.neutral_white, width=2)),
    )
    return _transparent_layout(fig)


def build_payment_mode_chart(totals: Sequence[ModeTotal], currency_symbol: str = "") -> go.Figure:
    """Render a donut of expense totals per payment mode."""

    if not totals:
        return _empty_plotly_figure("No expenses by payment mode.")

    palette = list(TOKENS.mode_palette)
    df = pd.DataFrame({"Mode": [item.name for item in totals], "Total": [item.total for item in totals]})
    repeats = (len(df) // len(palette)) + 1
    fig = px.pie(
        df,
        names="Mode",
        values="Total",
        hole=0.55,
        color_discrete_sequence=(palette * repeats)[: len(df)],
    )
    fig.update_traces(
        hovertemplate=f"%{{label}}<br>{currency_symbol}%{{value:,.2f}}<extra></extra>",
        marker=dict(line=dict(color=TOKENS.neutral_white, width=2)),
    )
    return _transparent_layout(fig)


def build_top_categories_chart(
    categories: Sequence[CategoryTotal],
    currency_symbol: str = "",
) -> go.Figure:
    """Render a horizontal bar chart of the biggest categories."""

    if not categories:
        empty = pd.DataFrame({"Category": [], "Total": []})
        fig = px.bar(empty, x="Total", y="Category", orientation="h")
        fig.update_layout(showlegend=False, margin=dict(l=0, r=0, t=0, b=0))
        return fig

    df = pd.DataFrame(
        {
            "Category": [item.name for item in categories],
            "Total": [item.total for item in categories],
            "Count": [item.count for item in categories],
        }
    )
    df["formatted_total"] = df["Total"].map(lambda x: f"{currency_symbol}{x:,.0f}")

    fig = px.bar(
        df,
        x="Total",
        y="Category",
        orientation="h",
        text="formatted_total",
        color_discrete_sequence=[TOKENS.category_palette[0]],
    )
    fig.update_traces(
        hovertemplate="%{y}<br>Spend: %{text}<br>Transactions: %{customdata[0]}<extra></extra>",
        customdata=df[["Count"]].to_numpy(),
        textposition="outside",
        cliponaxis=False,
    )
    fig.update_layout(
        margin=dict(l=0, r=10, t=20, b=0),
        xaxis=dict(title="", showgrid=False, zeroline=False),
        yaxis=dict(title="", automargin=True, autorange="reversed"),
        bargap=0.35,
        height=240,
    )
    return fig
