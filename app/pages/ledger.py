"""Ledger page: shorthand entry box and the filtered transaction list."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional, Sequence

import pandas as pd
import streamlit as st
import structlog

from analytics.autocomplete import shorthand_text, suggest_completions
from analytics.necessity import NecessityTally, is_learned, record_necessity, suggest_necessity
from analytics.suggestions import amount_presets, quick_add_suggestions
from app.layout import card
from config.settings import Settings
from core.formatting import format_amount, format_number
from core.models import Necessity, PaymentMode, Transaction, apply_update
from core.parser import parse_input

logger = structlog.get_logger()

NECESSITY_OPTIONS: tuple[Optional[Necessity], ...] = (None, "need", "want")
NECESSITY_LABELS: dict[Optional[str], str] = {None: "Uncategorized", "need": "Need", "want": "Want"}


def _store_transactions(transactions: Sequence[Transaction]) -> None:
    st.session_state["transactions"] = tuple(transactions)


def _add_transaction(
    transactions: Sequence[Transaction],
    *,
    reason: str,
    payment_mode: str,
    amount: float,
    necessity: Optional[Necessity],
    now: datetime,
) -> None:
    txn = Transaction(
        id=uuid.uuid4().hex,
        date=now,
        reason=reason,
        amount=amount,
        payment_mode=payment_mode,
        necessity=necessity,
    )
    _store_transactions((txn, *transactions))
    profile: dict[str, NecessityTally] = st.session_state.get("necessity_profile", {})
    st.session_state["necessity_profile"] = record_necessity(profile, reason, necessity)
    logger.info("transaction_added", reason=reason, amount=amount, payment_mode=payment_mode)


def _set_entry_text(value: str) -> None:
    st.session_state["entry_text"] = value


def _append_amount(label: str) -> None:
    raw = str(st.session_state.get("entry_text", "")).strip()
    if raw:
        st.session_state["entry_text"] = f"{raw} {label}"


def _render_entry(
    transactions: Sequence[Transaction],
    modes: Sequence[PaymentMode],
    settings: Settings,
    now: datetime,
) -> None:
    raw = st.text_input(
        "Add transaction",
        key="entry_text",
        placeholder="chai C 50 · groceries 200-30*2",
    )
    parsed = parse_input(raw, modes, settings.default_payment_mode)

    suggestions = suggest_completions(transactions, raw, tz=settings.timezone)
    if suggestions:
        st.caption("Suggestions")
        columns = st.columns(len(suggestions))
        for column, suggestion in zip(columns, suggestions):
            column.button(
                suggestion.text,
                key=f"suggest-{suggestion.transaction.id}",
                on_click=_set_entry_text,
                args=(suggestion.text,),
            )

    presets = amount_presets(transactions, now, tz=settings.timezone)
    preset_columns = st.columns(len(presets))
    for column, preset in zip(preset_columns, presets):
        label = format_number(preset)
        column.button(label, key=f"preset-{label}", on_click=_append_amount, args=(label,))

    profile = st.session_state.get("necessity_profile", {})
    suggested = suggest_necessity(profile, parsed.reason)
    necessity = st.radio(
        "Necessity",
        NECESSITY_OPTIONS,
        index=NECESSITY_OPTIONS.index(suggested),
        format_func=NECESSITY_LABELS.get,
        horizontal=True,
        key="entry_necessity",
    )
    if is_learned(profile, parsed.reason):
        st.caption(f"Learned from your history: {NECESSITY_LABELS[suggested]}")

    if parsed.is_valid and parsed.amount is not None:
        st.caption(
            f"{parsed.reason} · {parsed.payment_mode} · "
            f"{format_amount(parsed.amount, settings.currency_symbol)}"
        )
    if st.button("Add", type="primary", disabled=not parsed.is_valid):
        _add_transaction(
            transactions,
            reason=parsed.reason,
            payment_mode=parsed.payment_mode,
            amount=float(parsed.amount),
            necessity=necessity,
            now=now,
        )
        st.session_state.pop("entry_text", None)
        st.rerun()

    quick = quick_add_suggestions(transactions, now, tz=settings.timezone)
    if quick:
        st.caption("Quick add")
        columns = st.columns(len(quick))
        for column, txn in zip(columns, quick):
            if column.button(shorthand_text(txn), key=f"quick-{txn.id}"):
                _add_transaction(
                    transactions,
                    reason=txn.reason,
                    payment_mode=txn.payment_mode,
                    amount=txn.amount,
                    necessity=txn.necessity,
                    now=now,
                )
                st.rerun()


def _render_list(
    transactions: Sequence[Transaction],
    visible: Sequence[Transaction],
    currency_symbol: str,
) -> None:
    if not visible:
        st.info("No transactions match the current filters.")
        return

    for txn in visible:
        left, middle, right = st.columns((3, 2, 1))
        sign = "+" if txn.type == "income" else ""
        left.markdown(f"**{txn.reason}** · {txn.payment_mode}")
        left.caption(f"{pd.Timestamp(txn.date):%d %b %Y %H:%M}")
        middle.markdown(f"{sign}{format_amount(txn.amount, currency_symbol)}")
        if txn.type == "expense":
            choice = middle.selectbox(
                "Necessity",
                NECESSITY_OPTIONS,
                index=NECESSITY_OPTIONS.index(txn.necessity),
                format_func=NECESSITY_LABELS.get,
                key=f"necessity-{txn.id}",
                label_visibility="collapsed",
            )
            if choice != txn.necessity:
                _store_transactions(apply_update(transactions, txn.id, necessity=choice))
                profile = st.session_state.get("necessity_profile", {})
                st.session_state["necessity_profile"] = record_necessity(profile, txn.reason, choice)
                st.rerun()
        if right.button("Delete", key=f"delete-{txn.id}"):
            _store_transactions([item for item in transactions if item.id != txn.id])
            logger.info("transaction_deleted", id=txn.id)
            st.rerun()


def render_page(
    transactions: Sequence[Transaction],
    visible: Sequence[Transaction],
    modes: Sequence[PaymentMode],
    settings: Settings,
    now: datetime,
) -> None:
    """Render the entry box followed by the filtered ledger."""

    st.title("Ledger")
    with card("New entry", suffix="reason mode amount"):
        _render_entry(transactions, modes, settings, now)
    with card("Transactions", suffix=f"{len(visible)} shown"):
        _render_list(transactions, visible, settings.currency_symbol)


__all__ = ["render_page"]
