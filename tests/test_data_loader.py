"""Tests for record coercion and frame building."""

from __future__ import annotations

import math
from datetime import datetime

import pandas as pd
import pytest

from core.data_loader import (
    InvalidRecordError,
    build_transaction_frame,
    coerce_transaction,
    load_payment_modes,
    load_transactions,
    local_today,
    localize_timestamp,
)


def test_coerce_transaction_accepts_camel_case_records():
    txn = coerce_transaction(
        {
            "id": "1",
            "date": "2024-03-15T10:00:00",
            "reason": " chai ",
            "amount": "50",
            "paymentMode": "Cash",
        }
    )

    assert txn.reason == "chai"
    assert txn.amount == 50.0
    assert txn.type == "expense"
    assert txn.date == datetime(2024, 3, 15, 10, 0)


@pytest.mark.parametrize(
    "record",
    [
        {"date": "2024-03-15", "reason": "x", "amount": 1, "payment_mode": "Cash"},
        {"id": "1", "date": "soon", "reason": "x", "amount": 1, "payment_mode": "Cash"},
        {"id": "1", "date": "2024-03-15", "reason": "", "amount": 1, "payment_mode": "Cash"},
        {"id": "1", "date": "2024-03-15", "reason": "x", "amount": -1, "payment_mode": "Cash"},
        {"id": "1", "date": "2024-03-15", "reason": "x", "amount": "nan", "payment_mode": "Cash"},
        {"id": "1", "date": "2024-03-15", "reason": "x", "amount": 1, "payment_mode": "Cash", "type": "gift"},
        {"id": "1", "date": "2024-03-15", "reason": "x", "amount": 1, "payment_mode": "Cash", "necessity": "maybe"},
        {"id": "1", "date": "2024-03-15", "reason": "x", "amount": 1},
    ],
)
def test_coerce_transaction_rejects_invalid_records(record):
    with pytest.raises(InvalidRecordError):
        coerce_transaction(record)


def test_load_transactions_skips_bad_records():
    records = [
        {"id": "1", "date": "2024-03-15", "reason": "chai", "amount": 20, "payment_mode": "Cash"},
        {"id": "2", "date": "2024-03-15", "reason": "chai", "amount": math.inf, "payment_mode": "Cash"},
        "not a record",
    ]

    loaded = load_transactions(records)

    assert [txn.id for txn in loaded] == ["1"]


def test_load_payment_modes_skips_incomplete_modes():
    modes = load_payment_modes(
        [{"id": "4", "name": "JazzCash", "shorthand": "JC"}, {"id": "5", "name": "Wallet"}]
    )

    assert [mode.name for mode in modes] == ["JazzCash"]


def test_localize_timestamp_converts_aware_values():
    local = localize_timestamp(datetime.fromisoformat("2024-03-14T23:30:00+00:00"), "Asia/Karachi")

    assert local == pd.Timestamp("2024-03-15 04:30")
    assert localize_timestamp("2024-03-14 23:30", "Asia/Karachi") == pd.Timestamp("2024-03-14 23:30")
    assert localize_timestamp("garbage", "UTC") is None


def test_local_today_rejects_unparsable_reference():
    assert local_today("2024-03-15T18:00", "UTC") == pd.Timestamp("2024-03-15")
    with pytest.raises(ValueError):
        local_today("not a date", "UTC")


def test_build_transaction_frame_skips_unusable_rows(make_txn, now):
    frame = build_transaction_frame(
        (make_txn("Chai", 20, now), make_txn("bad", math.nan, now), make_txn("lunch", 100, now)),
        "UTC",
    )

    assert list(frame["position"]) == [0, 2]
    assert list(frame["reason_key"]) == ["chai", "lunch"]
    assert frame["day"].iloc[0] == pd.Timestamp("2024-03-15")


def test_build_transaction_frame_handles_empty_input():
    frame = build_transaction_frame((), "UTC")

    assert frame.empty
    assert pd.api.types.is_datetime64_any_dtype(frame["day"])
