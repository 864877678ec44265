"""Application configuration utilities."""

from .settings import DEFAULT_PAYMENT_MODE, DEFAULT_TIMEZONE, Settings, get_settings

__all__ = [
    "DEFAULT_PAYMENT_MODE",
    "DEFAULT_TIMEZONE",
    "Settings",
    "get_settings",
]
