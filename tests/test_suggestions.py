"""Tests for quick-add shortcuts and amount presets."""

from __future__ import annotations

from datetime import timedelta

from analytics.suggestions import DEFAULT_AMOUNT_PRESETS, amount_presets, quick_add_suggestions


def test_quick_add_needs_repeats_within_a_week(make_txn, now):
    transactions = (
        make_txn("chai", 20, now, id="chai-1"),
        make_txn("Chai", 20, now - timedelta(days=1), id="chai-2"),
        make_txn("chai", 20, now - timedelta(days=2), id="chai-3"),
        make_txn("lunch", 200, now - timedelta(days=1)),
        make_txn("lunch", 200, now - timedelta(days=3)),
        make_txn("movie", 500, now),
        make_txn("rent", 1000, now - timedelta(days=9)),
        make_txn("rent", 1000, now - timedelta(days=10)),
    )

    suggestions = quick_add_suggestions(transactions, now)

    assert [txn.reason for txn in suggestions] == ["chai", "lunch"]
    assert suggestions[0].id == "chai-1"


def test_quick_add_caps_at_four(make_txn, now):
    transactions = tuple(
        make_txn(f"item {index}", 10, now - timedelta(hours=hour))
        for index in range(6)
        for hour in range(2)
    )

    assert len(quick_add_suggestions(transactions, now)) == 4


def test_amount_presets_default_without_history(now):
    assert amount_presets((), now) == DEFAULT_AMOUNT_PRESETS


def test_amount_presets_prefer_frequent_amounts(make_txn, now):
    transactions = (
        make_txn("chai", 20, now),
        make_txn("chai", 20, now - timedelta(days=1)),
        make_txn("chai", 20, now - timedelta(days=2)),
        make_txn("lunch", 300, now - timedelta(days=3)),
        make_txn("lunch", 300, now - timedelta(days=4)),
        make_txn("fuel", 2000, now - timedelta(days=5)),
        make_txn("old", 75, now - timedelta(days=45)),
        make_txn("salary", 9000, now, type="income"),
    )

    presets = amount_presets(transactions, now, max_presets=3)

    assert presets == (20.0, 300.0, 2000.0)


def test_amount_presets_pad_with_defaults(make_txn, now):
    transactions = (make_txn("chai", 100, now), make_txn("chai", 35, now))

    assert amount_presets(transactions, now) == (35.0, 50.0, 100.0, 250.0, 500.0)
