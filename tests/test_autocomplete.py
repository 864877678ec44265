"""Tests for autocomplete ranking and deduplication."""

from __future__ import annotations

import dataclasses
import math
from datetime import timedelta

from analytics.autocomplete import (
    CONTAINS_SCORE,
    FULL_TEXT_SCORE,
    shorthand_text,
    suggest_completions,
)


def test_prefix_match_ranks_first(make_txn, now):
    transactions = (
        make_txn("lunch", 300, now),
        make_txn("coffee shop", 250, now - timedelta(days=1)),
        make_txn("coffee", 150, now - timedelta(hours=1)),
    )

    results = suggest_completions(transactions, "cof")

    assert results[0].match_score > CONTAINS_SCORE
    assert {result.transaction.reason for result in results} == {"coffee", "coffee shop"}
    assert results[0].transaction.reason == "coffee"


def test_shorter_prefix_scores_higher(make_txn):
    transactions = (make_txn("coffee"),)

    short = suggest_completions(transactions, "co")[0].match_score
    longer = suggest_completions(transactions, "coff")[0].match_score

    assert short > longer


def test_contains_match_scores_fifty(make_txn):
    results = suggest_completions((make_txn("starbucks coffee"),), "coffee")

    assert len(results) == 1
    assert results[0].match_score == CONTAINS_SCORE


def test_full_text_match_on_payment_mode(make_txn):
    results = suggest_completions((make_txn("tea", payment_mode="JazzCash"),), "jazz")

    assert results[0].match_score == FULL_TEXT_SCORE
    assert results[0].text == "tea JazzCash 50"


def test_identical_records_collapse_to_most_recent(make_txn, now):
    transactions = (
        make_txn("coffee", 100, now - timedelta(days=2), id="old"),
        make_txn("coffee", 100, now, id="newest"),
        make_txn("Coffee", 100, now - timedelta(days=1), id="middle"),
    )

    results = suggest_completions(transactions, "coffee")

    assert len(results) == 1
    assert results[0].transaction.id == "newest"


def test_short_query_and_non_expenses_are_ignored(make_txn):
    transactions = (make_txn("salary", 5000, type="income"), make_txn("samosa", 30))

    assert suggest_completions(transactions, "s") == []
    assert [result.transaction.reason for result in suggest_completions(transactions, "sa")] == [
        "samosa"
    ]


def test_results_are_capped(make_txn, now):
    transactions = tuple(
        make_txn("chai", 10 + index, now - timedelta(minutes=index)) for index in range(10)
    )

    assert len(suggest_completions(transactions, "chai", max_suggestions=3)) == 3
    assert len(suggest_completions(transactions, "chai")) == 5


def test_shorthand_text_trims_trailing_zeros(make_txn):
    assert shorthand_text(make_txn("chai", 50.0)) == "chai Cash 50"
    assert shorthand_text(make_txn("fuel", 10.5, payment_mode="Debit Card")) == "fuel Debit Card 10.5"


def test_unusable_records_are_skipped(make_txn, now):
    transactions = (
        dataclasses.replace(make_txn("chai", 20, now, id="a"), date="not-a-date"),
        make_txn("chai", math.nan, now, id="b"),
        make_txn("chai", 30, now - timedelta(hours=1), id="c"),
    )

    results = suggest_completions(transactions, "ch")

    assert [result.transaction.id for result in results] == ["c"]
