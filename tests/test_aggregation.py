"""Tests for dashboard aggregation."""

from __future__ import annotations

import math
from datetime import date, datetime

import pytest

from analytics.aggregation import PIE_COLORS, analyze_transactions, compute_dashboard_analytics
from analytics.periods import PeriodRange, TimePeriod, TransactionFilter
from core.models import DashboardAnalytics


@pytest.fixture()
def march_ledger(make_txn):
    return (
        make_txn("Groceries", 200, "2024-03-15T09:00", payment_mode="Debit Card", necessity="need", id="g1"),
        make_txn("chai", 40, "2024-03-11T08:00", necessity="want", id="c1"),
        make_txn("Chai", 60, "2024-03-12T08:00", id="c2"),
        make_txn("salary", 5000, "2024-03-01T10:00", payment_mode="Debit Card", type="income", id="s1"),
        make_txn("rent", 150, "2024-02-10T10:00", payment_mode="Debit Card", necessity="need", id="r1"),
        make_txn("movie", 50, "2024-03-10T20:00", payment_mode="Credit Card", necessity="want", id="m1"),
    )


def test_savings_and_rate(make_txn, now):
    transactions = (
        make_txn("rent", 100, "2024-03-02T10:00"),
        make_txn("food", 200, "2024-03-03T10:00"),
        make_txn("salary", 5000, "2024-03-01T10:00", type="income"),
    )

    analytics = analyze_transactions(transactions, now=now)

    assert analytics.period_total == pytest.approx(300)
    assert analytics.period_income_total == pytest.approx(5000)
    assert analytics.savings_this_period == pytest.approx(4700)
    assert analytics.savings_rate == pytest.approx(94)


def test_empty_period_yields_zeros(now):
    analytics = analyze_transactions((), now=now)

    assert analytics.period_total == 0
    assert analytics.percent_change == 0
    assert analytics.avg_daily_spending == 0
    assert analytics.needs_wants_ratio == 0
    assert analytics.top_categories == ()
    assert analytics.most_frequent_category is None
    assert analytics.biggest_expense is None
    assert analytics.best_day is None
    assert analytics.pie_data == ()
    assert len(analytics.daily_data) == 7
    assert len(analytics.monthly_trend) == 6
    assert all(point.expense == 0 for point in analytics.daily_data)


def test_aggregation_is_idempotent(march_ledger, now):
    first = analyze_transactions(march_ledger, now=now)
    second = analyze_transactions(march_ledger, now=now)

    assert isinstance(first, DashboardAnalytics)
    assert first == second


def test_period_comparison_uses_previous_month(march_ledger, now):
    analytics = analyze_transactions(march_ledger, now=now)

    assert analytics.period_total == pytest.approx(350)
    assert analytics.previous_period_total == pytest.approx(150)
    assert analytics.percent_change == pytest.approx((350 - 150) / 150 * 100)


def test_week_comparison_runs_monday_to_sunday(march_ledger, now):
    analytics = analyze_transactions(march_ledger, now=now)

    # Monday 11th to Friday 15th against the week ending Sunday 10th.
    assert analytics.this_week_total == pytest.approx(300)
    assert analytics.previous_week_total == pytest.approx(50)
    assert analytics.week_change == pytest.approx(500)


def test_averages_and_counts(march_ledger, now):
    analytics = analyze_transactions(march_ledger, now=now)

    assert analytics.transaction_count == 4
    assert analytics.avg_transaction_size == pytest.approx(350 / 4)
    assert analytics.avg_daily_spending == pytest.approx(350 / 15)
    assert analytics.unique_spending_days == 4


def test_categories_group_case_insensitively(march_ledger, now):
    analytics = analyze_transactions(march_ledger, now=now)

    names = [category.name for category in analytics.top_categories]
    assert names == ["Groceries", "Chai", "movie"]
    chai = analytics.top_categories[1]
    assert chai.total == pytest.approx(100)
    assert chai.count == 2
    assert analytics.most_frequent_category.name == "Chai"
    assert analytics.most_frequent_category.count == 2


def test_biggest_expense_and_day_extremes(march_ledger, now):
    analytics = analyze_transactions(march_ledger, now=now)

    assert analytics.biggest_expense.id == "g1"
    assert analytics.worst_day.date == date(2024, 3, 15)
    assert analytics.worst_day.total == pytest.approx(200)
    # The salary day has a transaction but no spending.
    assert analytics.best_day.date == date(2024, 3, 1)
    assert analytics.best_day.total == 0


def test_biggest_expense_tie_keeps_earliest(make_txn, now):
    transactions = (
        make_txn("b", 100, "2024-03-05T10:00", id="later"),
        make_txn("a", 100, "2024-03-02T10:00", id="earlier"),
    )

    assert analyze_transactions(transactions, now=now).biggest_expense.id == "earlier"


def test_necessity_split_and_pie(march_ledger, now):
    analytics = analyze_transactions(march_ledger, now=now)

    assert analytics.needs_total == pytest.approx(200)
    assert analytics.wants_total == pytest.approx(90)
    assert analytics.uncategorized_total == pytest.approx(60)
    assert analytics.needs_wants_ratio == pytest.approx(200 / 90)
    assert [(item.name, item.color) for item in analytics.pie_data] == [
        ("Needs", PIE_COLORS["Needs"]),
        ("Wants", PIE_COLORS["Wants"]),
        ("Other", PIE_COLORS["Other"]),
    ]


def test_ratio_without_wants_is_none(make_txn, now):
    analytics = analyze_transactions((make_txn("rent", 100, "2024-03-02", necessity="need"),), now=now)

    assert analytics.needs_wants_ratio is None
    assert [item.name for item in analytics.pie_data] == ["Needs"]


def test_by_mode_sorted_by_total(march_ledger, now):
    analytics = analyze_transactions(march_ledger, now=now)

    assert [(item.name, item.total) for item in analytics.by_mode] == [
        ("Debit Card", 200),
        ("Cash", 100),
        ("Credit Card", 50),
    ]


def test_daily_and_monthly_windows(march_ledger, now):
    analytics = analyze_transactions(march_ledger, now=now)

    assert [point.label for point in analytics.daily_data] == ["Sat", "Sun", "Mon", "Tue", "Wed", "Thu", "Fri"]
    assert analytics.daily_data[-1].date == date(2024, 3, 15)
    assert analytics.daily_data[-1].expense == pytest.approx(200)
    assert [point.label for point in analytics.monthly_trend] == ["Oct", "Nov", "Dec", "Jan", "Feb", "Mar"]
    march = analytics.monthly_trend[-1]
    assert march.month_start == date(2024, 3, 1)
    assert march.month_end == date(2024, 3, 31)
    assert march.savings == pytest.approx(5000 - 350)
    assert analytics.monthly_trend[-2].expense == pytest.approx(150)


def test_trends_ignore_active_filters(march_ledger, now):
    filters = TransactionFilter(search_query="chai")

    analytics = analyze_transactions(march_ledger, filters, now=now)

    assert analytics.period_total == pytest.approx(100)
    assert analytics.monthly_trend[-1].expense == pytest.approx(350)
    assert analytics.this_week_total == pytest.approx(300)


def test_type_filter_income_only(march_ledger, now):
    analytics = analyze_transactions(march_ledger, TransactionFilter(type_filter="income"), now=now)

    assert analytics.period_total == 0
    assert analytics.period_income_total == pytest.approx(5000)
    assert analytics.savings_rate == pytest.approx(100)


def test_all_time_has_no_comparison(march_ledger, now):
    analytics = analyze_transactions(march_ledger, TransactionFilter(period=TimePeriod.ALL_TIME), now=now)

    assert analytics.period_total == pytest.approx(500)
    assert analytics.percent_change == 0
    # 10 Feb to 15 Mar 2024 inclusive.
    assert analytics.avg_daily_spending == pytest.approx(500 / 35)


def test_custom_period_compares_with_window_of_same_length(make_txn, now):
    transactions = (
        make_txn("a", 100, "2024-03-05"),
        make_txn("b", 40, "2024-02-20"),
        make_txn("c", 999, "2024-02-19"),
    )
    filters = TransactionFilter(
        period=TimePeriod.CUSTOM,
        custom_start=date(2024, 3, 1),
        custom_end=date(2024, 3, 10),
    )

    analytics = analyze_transactions(transactions, filters, now=now)

    assert analytics.period_total == pytest.approx(100)
    assert analytics.previous_period_total == pytest.approx(40)
    assert analytics.avg_daily_spending == pytest.approx(10)


def test_malformed_records_are_skipped(make_txn, now):
    transactions = (
        make_txn("good", 100, "2024-03-02"),
        make_txn("bad", math.nan, "2024-03-03"),
        make_txn("worse", math.inf, "2024-03-04"),
    )

    analytics = analyze_transactions(transactions, now=now)

    assert analytics.period_total == pytest.approx(100)
    assert analytics.transaction_count == 1


def test_month_end_uses_local_calendar(make_txn):
    now = datetime.fromisoformat("2024-03-31T18:00:00+00:00")  # 23:00 in Karachi
    transactions = (
        make_txn("late", 30, datetime.fromisoformat("2024-03-31T18:30:00+00:00")),
        make_txn("next day", 70, datetime.fromisoformat("2024-03-31T19:30:00+00:00")),
    )
    period = PeriodRange(TimePeriod.THIS_MONTH, date(2024, 3, 1), date(2024, 3, 31))

    analytics = compute_dashboard_analytics(
        transactions[:1], transactions, period, now, tz="Asia/Karachi"
    )

    assert analytics.period_total == pytest.approx(30)
    assert analytics.daily_data[-1].date == date(2024, 3, 31)
    assert analytics.daily_data[-1].expense == pytest.approx(30)
    assert analytics.monthly_trend[-1].expense == pytest.approx(30)


def test_daylight_saving_change_does_not_merge_days(make_txn):
    # Clocks in London went forward at 01:00 UTC on 2024-03-31.
    now = datetime.fromisoformat("2024-04-01T12:00:00+01:00")
    transactions = (
        make_txn("before", 10, datetime.fromisoformat("2024-03-31T00:30:00+00:00")),
        make_txn("after", 20, datetime.fromisoformat("2024-03-31T23:30:00+00:00")),
    )

    analytics = analyze_transactions(
        transactions,
        TransactionFilter(period=TimePeriod.ALL_TIME),
        now=now,
        tz="Europe/London",
    )

    by_day = {point.date: point.expense for point in analytics.daily_data}
    assert by_day[date(2024, 3, 31)] == pytest.approx(10)
    assert by_day[date(2024, 4, 1)] == pytest.approx(20)
    assert analytics.this_week_total == pytest.approx(20)
    assert analytics.previous_week_total == pytest.approx(10)
