"""Period resolution, comparison windows and transaction filtering."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterable, Literal, Optional

import pandas as pd

from config.settings import get_settings
from core.data_loader import local_today, localize_timestamp
from core.models import Transaction

__all__ = [
    "InvalidPeriodError",
    "TimePeriod",
    "PeriodRange",
    "TypeFilter",
    "NecessityFilter",
    "TransactionFilter",
    "resolve_period",
    "previous_period",
    "week_range",
    "filter_transactions",
]

TypeFilter = Literal["all", "expense", "income"]
NecessityFilter = Literal["all", "need", "want", "uncategorized"]


class InvalidPeriodError(ValueError):
    """Raised when a custom period is contradictory."""


class TimePeriod(str, Enum):
    THIS_WEEK = "this_week"
    LAST_WEEK = "last_week"
    THIS_MONTH = "this_month"
    LAST_MONTH = "last_month"
    THIS_YEAR = "this_year"
    LAST_YEAR = "last_year"
    ALL_TIME = "all_time"
    CUSTOM = "custom"


@dataclass(frozen=True, slots=True)
class PeriodRange:
    """Inclusive calendar-day window; ``None`` bounds are open."""

    period: TimePeriod
    start: Optional[date] = None
    end: Optional[date] = None

    @property
    def is_bounded(self) -> bool:
        return self.start is not None and self.end is not None

    def contains(self, day: date) -> bool:
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True

    def day_count(self, today: date, first_day: Optional[date] = None) -> int:
        """Return the number of elapsed days the window spans up to ``today``.

        Open starts fall back to ``first_day`` (usually the first transaction day).
        """

        start = self.start if self.start is not None else first_day
        if start is None:
            return 0
        end = today if self.end is None else min(self.end, today)
        if end < start:
            return 0
        return (end - start).days + 1


def _month_bounds(period: pd.Period) -> tuple[date, date]:
    return period.start_time.date(), period.end_time.date()


def resolve_period(
    period: TimePeriod | str,
    now: Optional[datetime] = None,
    *,
    custom_start: Optional[date] = None,
    custom_end: Optional[date] = None,
    tz: Optional[str] = None,
) -> PeriodRange:
    """Return the calendar window for ``period`` relative to ``now``."""

    period = TimePeriod(period)
    today = local_today(now, tz or get_settings().timezone)

    if period is TimePeriod.THIS_WEEK:
        return PeriodRange(period, *week_range(today.date(), 0))
    if period is TimePeriod.LAST_WEEK:
        return PeriodRange(period, *week_range(today.date(), 1))
    if period is TimePeriod.THIS_MONTH:
        return PeriodRange(period, *_month_bounds(today.to_period("M")))
    if period is TimePeriod.LAST_MONTH:
        return PeriodRange(period, *_month_bounds(today.to_period("M") - 1))
    if period is TimePeriod.THIS_YEAR:
        return PeriodRange(period, *_month_bounds(today.to_period("Y")))
    if period is TimePeriod.LAST_YEAR:
        return PeriodRange(period, *_month_bounds(today.to_period("Y") - 1))
    if period is TimePeriod.ALL_TIME:
        return PeriodRange(period)

    if custom_start is not None and custom_end is not None and custom_end < custom_start:
        raise InvalidPeriodError(
            f"Custom period ends ({custom_end}) before it starts ({custom_start})"
        )
    return PeriodRange(period, custom_start, custom_end)


def previous_period(current: PeriodRange) -> Optional[PeriodRange]:
    """Return the window of identical type and length immediately before ``current``."""

    if current.start is None or current.end is None:
        return None

    if current.period in (TimePeriod.THIS_MONTH, TimePeriod.LAST_MONTH):
        month = pd.Timestamp(current.start).to_period("M") - 1
        return PeriodRange(current.period, *_month_bounds(month))
    if current.period in (TimePeriod.THIS_YEAR, TimePeriod.LAST_YEAR):
        year = pd.Timestamp(current.start).to_period("Y") - 1
        return PeriodRange(current.period, *_month_bounds(year))

    length = (current.end - current.start).days + 1
    end = current.start - timedelta(days=1)
    return PeriodRange(current.period, end - timedelta(days=length - 1), end)


def week_range(today: date, weeks_ago: int = 0) -> tuple[date, date]:
    """Return the Monday-to-Sunday week containing ``today`` shifted back ``weeks_ago``."""

    start = today - timedelta(days=today.weekday() + 7 * weeks_ago)
    return start, start + timedelta(days=6)


@dataclass(frozen=True, slots=True)
class TransactionFilter:
    period: TimePeriod = TimePeriod.THIS_MONTH
    custom_start: Optional[date] = None
    custom_end: Optional[date] = None
    search_query: str = ""
    type_filter: TypeFilter = "all"
    necessity_filter: NecessityFilter = "all"

    @property
    def has_active_filters(self) -> bool:
        return self != TransactionFilter()

    def resolve(self, now: Optional[datetime] = None, tz: Optional[str] = None) -> PeriodRange:
        if self.period is TimePeriod.CUSTOM:
            return resolve_period(
                self.period,
                now,
                custom_start=self.custom_start,
                custom_end=self.custom_end,
                tz=tz,
            )
        return resolve_period(self.period, now, tz=tz)

    def matches(self, txn: Transaction) -> bool:
        """Apply the non-date criteria to ``txn``."""

        query = self.search_query.strip().lower()
        if query and query not in txn.reason.lower() and query not in txn.payment_mode.lower():
            return False

        if self.type_filter != "all" and txn.type != self.type_filter:
            return False

        if self.necessity_filter != "all":
            if txn.type != "expense":
                return False
            if self.necessity_filter == "uncategorized":
                return txn.necessity is None
            return txn.necessity == self.necessity_filter
        return True


def filter_transactions(
    transactions: Iterable[Transaction],
    filters: TransactionFilter,
    now: Optional[datetime] = None,
    tz: Optional[str] = None,
) -> tuple[Transaction, ...]:
    """Return the transactions selected by ``filters``, preserving order."""

    tz = tz or get_settings().timezone
    window = filters.resolve(now, tz)
    selected: list[Transaction] = []
    for txn in transactions:
        if window.start is not None or window.end is not None:
            timestamp = localize_timestamp(txn.date, tz)
            if timestamp is None or not window.contains(timestamp.date()):
                continue
        if filters.matches(txn):
            selected.append(txn)
    return tuple(selected)
