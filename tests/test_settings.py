"""Tests for settings resolution."""

from __future__ import annotations

import pytest
import streamlit as st
from pydantic import ValidationError

from config.settings import DEFAULT_PAYMENT_MODE, Settings, get_settings


def test_defaults():
    settings = get_settings()

    assert settings.timezone == "UTC"
    assert settings.default_payment_mode == DEFAULT_PAYMENT_MODE
    assert settings.autocomplete_limit == 5


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("BUJIT_TIMEZONE", "Asia/Karachi")
    monkeypatch.setenv("BUJIT_CACHE_SIZE", "4")

    settings = Settings()

    assert settings.timezone == "Asia/Karachi"
    assert settings.cache_size == 4
    assert settings.tzinfo.key == "Asia/Karachi"


def test_streamlit_secrets_override(monkeypatch):
    monkeypatch.setattr(st, "secrets", {"bujit": {"currency_symbol": "$"}}, raising=False)
    get_settings.cache_clear()

    assert get_settings().currency_symbol == "$"


@pytest.mark.parametrize(
    "overrides",
    [{"timezone": "Mars/Olympus"}, {"autocomplete_limit": 0}, {"cache_size": -1}],
)
def test_invalid_settings_are_rejected(overrides):
    with pytest.raises(ValidationError):
        Settings(**overrides)
