"""Shared fixtures for the Bujit test-suite."""

from __future__ import annotations

import sys
from datetime import datetime
from itertools import count
from pathlib import Path
from typing import Callable, Optional

import pytest
import streamlit as st

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config.settings import get_settings
from core.models import Transaction

# Friday; the week started on Monday 2024-03-11.
NOW = datetime(2024, 3, 15, 12, 0)


@pytest.fixture(autouse=True)
def clear_streamlit_secrets(monkeypatch):
    """Provide an empty secrets mapping so tests don't rely on Streamlit runtime."""

    monkeypatch.setattr(st, "secrets", {}, raising=False)
    for name in ("BUJIT_TIMEZONE", "BUJIT_DEFAULT_PAYMENT_MODE", "BUJIT_CURRENCY_SYMBOL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def make_txn() -> Callable[..., Transaction]:
    ids = count(1)

    def factory(
        reason: str = "chai",
        amount: float = 50.0,
        when: datetime | str = NOW,
        *,
        payment_mode: str = "Cash",
        type: str = "expense",
        necessity: Optional[str] = None,
        id: Optional[str] = None,
    ) -> Transaction:
        moment = datetime.fromisoformat(when) if isinstance(when, str) else when
        return Transaction(
            id=id or f"t{next(ids)}",
            date=moment,
            reason=reason,
            amount=amount,
            payment_mode=payment_mode,
            type=type,
            necessity=necessity,
        )

    return factory
