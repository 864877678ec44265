"""Core domain package for the Bujit application."""

from .data_loader import InvalidRecordError, build_transaction_frame, load_payment_modes, load_transactions
from .expressions import evaluate_expression, has_operators
from .models import (
    DEFAULT_PAYMENT_MODES,
    DashboardAnalytics,
    ParsedInput,
    PaymentMode,
    StreakData,
    Transaction,
    apply_update,
)
from .parser import parse_amount, parse_input

__all__ = [
    "DEFAULT_PAYMENT_MODES",
    "DashboardAnalytics",
    "ParsedInput",
    "PaymentMode",
    "StreakData",
    "Transaction",
    "apply_update",
    "InvalidRecordError",
    "build_transaction_frame",
    "load_payment_modes",
    "load_transactions",
    "evaluate_expression",
    "has_operators",
    "parse_amount",
    "parse_input",
]
