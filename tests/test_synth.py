"""Tests for the synthetic demo ledger."""

from __future__ import annotations

from datetime import date

import pytest

from data.synth import generate_demo_transactions


def test_generator_is_deterministic_for_a_seed():
    first = generate_demo_transactions(date(2024, 3, 15), months=2, seed=3)
    second = generate_demo_transactions(date(2024, 3, 15), months=2, seed=3)

    assert first == second


def test_generator_stays_within_window_newest_first():
    transactions = generate_demo_transactions(date(2024, 3, 15), months=3, seed=1)
    dates = [txn.date for txn in transactions]

    assert dates == sorted(dates, reverse=True)
    assert min(dates).date() >= date(2024, 1, 1)
    assert max(dates).date() <= date(2024, 3, 15)
    assert {txn.type for txn in transactions} == {"expense", "income", "savings"}
    assert all(txn.amount > 0 for txn in transactions)


def test_generator_rejects_non_positive_months():
    with pytest.raises(ValueError):
        generate_demo_transactions(date(2024, 3, 15), months=0)
