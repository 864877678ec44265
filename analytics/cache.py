"""Explicit memoization for dashboard analytics and streaks.

Results are keyed by a content fingerprint of the transaction collection, the filter
state and the local day of the reference time, so a new day or any edit to the
collection yields a fresh computation.
"""

from __future__ import annotations

import hashlib
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional, Sequence

import structlog

from analytics.aggregation import analyze_transactions
from analytics.periods import TransactionFilter
from analytics.streaks import compute_streaks
from config.settings import get_settings
from core.data_loader import local_today
from core.models import DashboardAnalytics, StreakData, Transaction

__all__ = ["AnalyticsCache", "CacheStats", "transactions_fingerprint"]

logger = structlog.get_logger()


def transactions_fingerprint(transactions: Sequence[Transaction]) -> str:
    """Return a digest that changes whenever any transaction field changes."""

    digest = hashlib.sha256()
    for txn in transactions:
        fields = (
            txn.id,
            str(txn.date),
            txn.reason,
            repr(txn.amount),
            txn.payment_mode,
            txn.type,
            txn.necessity or "",
        )
        digest.update("\x1f".join(map(str, fields)).encode("utf-8"))
        digest.update(b"\x1e")
    return digest.hexdigest()


@dataclass(frozen=True, slots=True)
class CacheStats:
    hits: int
    misses: int
    size: int


class AnalyticsCache:
    """Bounded LRU cache in front of :func:`analyze_transactions` and :func:`compute_streaks`."""

    def __init__(self, max_entries: Optional[int] = None, *, tz: Optional[str] = None) -> None:
        settings = get_settings()
        self.max_entries = settings.cache_size if max_entries is None else max_entries
        if self.max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.tz = tz or settings.timezone
        self._entries: OrderedDict[tuple, Any] = OrderedDict()
        self._hits = 0
        self._misses = 0

    @property
    def stats(self) -> CacheStats:
        return CacheStats(hits=self._hits, misses=self._misses, size=len(self._entries))

    def clear(self) -> None:
        self._entries.clear()
        self._hits = 0
        self._misses = 0

    def dashboard(
        self,
        transactions: Sequence[Transaction],
        filters: TransactionFilter = TransactionFilter(),
        now: Optional[datetime] = None,
    ) -> DashboardAnalytics:
        key = ("dashboard", transactions_fingerprint(transactions), filters, self._day(now))
        return self._get_or_compute(
            key, lambda: analyze_transactions(transactions, filters, now, tz=self.tz)
        )

    def streaks(
        self,
        transactions: Sequence[Transaction],
        now: Optional[datetime] = None,
    ) -> StreakData:
        key = ("streaks", transactions_fingerprint(transactions), self._day(now))
        return self._get_or_compute(key, lambda: compute_streaks(transactions, now, tz=self.tz))

    def _day(self, now: Optional[datetime]) -> str:
        return local_today(now, self.tz).date().isoformat()

    def _get_or_compute(self, key: tuple, compute: Callable[[], Any]) -> Any:
        if key in self._entries:
            self._hits += 1
            self._entries.move_to_end(key)
            return self._entries[key]

        self._misses += 1
        logger.debug("analytics_cache_miss", kind=key[0], day=key[-1])
        value = compute()
        self._entries[key] = value
        if len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("analytics_cache_evicted", kind=evicted[0], day=evicted[-1])
        return value
