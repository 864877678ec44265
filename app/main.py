"""Bujit dashboard with shorthand entry and responsive card layout."""

from __future__ import annotations

from datetime import datetime

import streamlit as st

from analytics.cache import AnalyticsCache
from analytics.cards import build_dashboard_cards
from analytics.necessity import learn_necessity
from analytics.periods import filter_transactions
from app.layout import (
    NAV_LINKS,
    determine_active_page,
    inject_css,
    render_navbar,
    render_sidebar_filters,
)
from app.pages import render_ledger_page, render_overview_page
from config.settings import get_settings
from core.formatting import PERIOD_LABELS, PERIOD_PHRASES, build_insights
from core.models import DEFAULT_PAYMENT_MODES
from data.synth import generate_demo_transactions

st.set_page_config(
    page_title="Bujit | Dashboard",
    page_icon="💸",
    layout="wide",
    initial_sidebar_state="expanded",
)

DEMO_SEED = 7


def _init_session_state() -> None:
    """Seed the session with demo transactions and the derived caches."""

    settings = get_settings()
    if "transactions" not in st.session_state:
        st.session_state["transactions"] = generate_demo_transactions(seed=DEMO_SEED)
    if "payment_modes" not in st.session_state:
        st.session_state["payment_modes"] = DEFAULT_PAYMENT_MODES
    if "necessity_profile" not in st.session_state:
        st.session_state["necessity_profile"] = learn_necessity(st.session_state["transactions"])
    if "analytics_cache" not in st.session_state:
        st.session_state["analytics_cache"] = AnalyticsCache(tz=settings.timezone)


def main() -> None:
    """Application entrypoint for the Bujit dashboard."""

    settings = get_settings()
    _init_session_state()
    inject_css()

    valid_pages = [link.slug for link in NAV_LINKS if link.enabled]
    active_page = determine_active_page(valid_pages)
    render_navbar(active_page)

    now = datetime.now(settings.tzinfo)
    filters = render_sidebar_filters(now.date())
    transactions = st.session_state["transactions"]

    if active_page == "ledger":
        visible = filter_transactions(transactions, filters, now, settings.timezone)
        render_ledger_page(
            transactions,
            visible,
            st.session_state["payment_modes"],
            settings,
            now,
        )
        return

    cache: AnalyticsCache = st.session_state["analytics_cache"]
    analytics = cache.dashboard(transactions, filters, now)
    streaks = cache.streaks(transactions, now)
    cards = build_dashboard_cards(analytics, streaks, currency_symbol=settings.currency_symbol)
    insights = build_insights(
        analytics,
        period_phrase=PERIOD_PHRASES[filters.period.value],
        currency_symbol=settings.currency_symbol,
        streaks=streaks,
    )
    render_overview_page(
        cards,
        insights,
        period_label=PERIOD_LABELS[filters.period.value],
        currency_symbol=settings.currency_symbol,
    )


if __name__ == "__main__":
    main()
