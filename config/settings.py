"""Centralised configuration handling for Bujit."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import streamlit as st
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PAYMENT_MODE = "Cash"
DEFAULT_TIMEZONE = "UTC"


def _streamlit_section(name: str) -> Mapping[str, Any] | None:
    """Return a mapping from Streamlit secrets for the given section."""

    try:
        if hasattr(st, "secrets") and name in st.secrets:
            section = st.secrets[name]
            if isinstance(section, Mapping):
                return section
            return dict(section)
    except Exception:  # pragma: no cover - accessing secrets may fail in tests
        return None
    return None


class Settings(BaseSettings):
    """Application settings sourced from env vars and Streamlit secrets."""

    timezone: str = DEFAULT_TIMEZONE
    default_payment_mode: str = DEFAULT_PAYMENT_MODE
    currency_symbol: str = "Rs."
    autocomplete_limit: int = 5
    top_categories_limit: int = 5
    cache_size: int = 16

    model_config = SettingsConfigDict(env_prefix="BUJIT_", extra="ignore")

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value!r}") from exc
        return value

    @field_validator("autocomplete_limit", "top_categories_limit", "cache_size")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be at least 1")
        return value

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


@lru_cache
def get_settings() -> Settings:
    """Load and cache application settings."""

    overrides: dict[str, Any] = {}
    secrets_section = _streamlit_section("bujit")
    if secrets_section:
        overrides = {
            "timezone": secrets_section.get("timezone"),
            "default_payment_mode": secrets_section.get("default_payment_mode"),
            "currency_symbol": secrets_section.get("currency_symbol"),
        }

    return Settings(**{k: v for k, v in overrides.items() if v is not None})
