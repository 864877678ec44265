"""Shared layout primitives for the Bujit Streamlit app."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from typing import Iterable

import streamlit as st

from analytics.periods import InvalidPeriodError, TimePeriod, TransactionFilter, resolve_period
from core.formatting import PERIOD_LABELS


@dataclass(frozen=True)
class NavigationLink:
    slug: str
    label: str
    enabled: bool = True


NAV_LINKS: tuple[NavigationLink, ...] = (
    NavigationLink("overview", "Dashboard", True),
    NavigationLink("ledger", "Ledger", True),
    NavigationLink("settings", "Settings", False),
)

TYPE_FILTER_LABELS: dict[str, str] = {"all": "All", "expense": "Expenses", "income": "Income"}
NECESSITY_FILTER_LABELS: dict[str, str] = {
    "all": "All",
    "need": "Needs",
    "want": "Wants",
    "uncategorized": "Uncategorized",
}


def inject_css() -> None:
    """Inject global CSS tokens and card styling into the Streamlit app."""

    st.markdown(
        """
        <style>
          :root {
            --gap: 16px;
            --radius: 12px;
            --card-bg: #FFFFFF;
            --border: #E6EAF2;
            --shadow: 0 1px 2px rgba(16, 24, 40, 0.05), 0 1px 3px rgba(16, 24, 40, 0.06);
          }

          body, [data-testid="stAppViewContainer"] > .main {
            background: #F4F6FB;
          }

          .block-container {
            max-width: 1200px;
            padding-top: 2.5rem;
            padding-bottom: 4rem;
          }

          .bj-nav {
            display: flex;
            align-items: center;
            justify-content: space-between;
            gap: 2rem;
            padding: 0.9rem 0;
          }

          .bj-nav__brand {
            font-size: 1.5rem;
            font-weight: 700;
            color: #0F766E;
          }

          .bj-nav__links {
            display: flex;
            gap: 1.8rem;
          }

          .bj-nav__link,
          .bj-nav__link:visited {
            font-weight: 600;
            color: #5C6478;
            text-decoration: none;
          }

          .bj-nav__link.is-active {
            color: #0F766E;
          }

          .bj-nav__link.is-disabled {
            color: #B7C1D9;
            pointer-events: none;
          }

          .bj-card-anchor {
            display: none;
          }

          [data-testid="stVerticalBlock"]:has(> .bj-card-anchor) {
            background: var(--card-bg);
            border: 1px solid var(--border);
            border-radius: var(--radius);
            box-shadow: var(--shadow);
            padding: 16px;
            margin-bottom: var(--gap);
          }

          .bj-card__head {
            display: flex;
            align-items: center;
            justify-content: space-between;
            font-weight: 600;
            color: #111827;
          }

          .bj-chip {
            font-size: 12px;
            padding: 2px 8px;
            border-radius: 999px;
            border: 1px solid #CCEFEA;
            background: #F0FDFA;
            color: #0F766E;
          }

          .bj-insights {
            margin: 0;
            padding-left: 1.1rem;
            color: #4B5563;
          }

          .bj-insights li strong {
            color: #111827;
          }
        </style>
        """,
        unsafe_allow_html=True,
    )


@contextmanager
def card(title: str, suffix: str | None = None):
    """Render content inside a reusable Bujit card."""

    chip_html = f'<span class="bj-chip">{suffix}</span>' if suffix else ""
    container = st.container()
    with container:
        st.markdown('<div class="bj-card-anchor"></div>', unsafe_allow_html=True)
        st.markdown(
            f'<div class="bj-card__head"><span>{title}</span>{chip_html}</div>',
            unsafe_allow_html=True,
        )
        yield


def render_navbar(active_page: str) -> None:
    """Render the navigation bar with active state."""

    link_markup: list[str] = []
    for link in NAV_LINKS:
        css_class = "bj-nav__link"
        if link.slug == active_page:
            css_class += " is-active"
        if link.enabled:
            link_markup.append(
                f'<a class="{css_class}" href="?page={link.slug}" target="_self">{link.label}</a>'
            )
        else:
            link_markup.append(f'<span class="{css_class} is-disabled">{link.label}</span>')

    st.markdown(
        f"""
        <nav class="bj-nav">
            <div class="bj-nav__brand">Bujit</div>
            <div class="bj-nav__links">{''.join(link_markup)}</div>
        </nav>
        """,
        unsafe_allow_html=True,
    )


def determine_active_page(valid_pages: Iterable[str]) -> str:
    """Determine the active page from the query params or session state."""

    default_page = st.session_state.get("active_page", "overview")
    raw_page = st.query_params.get("page", default_page)
    if isinstance(raw_page, list):
        raw_page = raw_page[0]

    page = raw_page if raw_page in set(valid_pages) else "overview"
    st.session_state["active_page"] = page
    if st.query_params.get("page") != page:
        st.query_params["page"] = page
    return page


def render_sidebar_filters(today: date) -> TransactionFilter:
    """Render the sidebar filters and return the selected :class:`TransactionFilter`."""

    periods = list(TimePeriod)
    with st.sidebar:
        st.markdown("### Filters")
        period = st.selectbox(
            "Period",
            periods,
            index=periods.index(TimePeriod.THIS_MONTH),
            key="period_selector",
            format_func=lambda item: PERIOD_LABELS[item.value],
        )

        custom_start = custom_end = None
        if period is TimePeriod.CUSTOM:
            month_range = resolve_period(TimePeriod.THIS_MONTH, today)
            custom_start = st.date_input("From", value=month_range.start, key="custom_start")
            custom_end = st.date_input("To", value=today, key="custom_end")

        search_query = st.text_input("Search", key="search_query", placeholder="Reason or mode")
        type_filter = st.radio(
            "Type",
            list(TYPE_FILTER_LABELS),
            format_func=TYPE_FILTER_LABELS.get,
            horizontal=True,
            key="type_filter",
        )
        necessity_filter = st.radio(
            "Necessity",
            list(NECESSITY_FILTER_LABELS),
            format_func=NECESSITY_FILTER_LABELS.get,
            horizontal=True,
            key="necessity_filter",
        )

    filters = TransactionFilter(
        period=period,
        custom_start=custom_start,
        custom_end=custom_end,
        search_query=search_query,
        type_filter=type_filter,
        necessity_filter=necessity_filter,
    )
    try:
        filters.resolve(today)
    except InvalidPeriodError as exc:
        st.sidebar.error(str(exc))
        return TransactionFilter()
    return filters


__all__ = [
    "NavigationLink",
    "NAV_LINKS",
    "card",
    "determine_active_page",
    "inject_css",
    "render_navbar",
    "render_sidebar_filters",
]
