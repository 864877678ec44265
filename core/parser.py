"""Shorthand command parsing ("reason mode amount") for quick transaction entry."""

from __future__ import annotations

import math
import re
from typing import Optional, Sequence

from config.settings import DEFAULT_PAYMENT_MODE
from core.expressions import evaluate_expression, has_operators
from core.models import ParsedInput, PaymentMode

__all__ = [
    "DEFAULT_PAYMENT_MODE",
    "UNKNOWN_REASON",
    "parse_amount",
    "parse_input",
    "resolve_payment_mode",
]

UNKNOWN_REASON = "Unknown"

_DECIMAL = re.compile(r"^\d+(\.\d*)?$|^\.\d+$")


def parse_amount(token: str) -> Optional[float]:
    """Return the positive amount in ``token`` or ``None``.

    Tokens containing an operator are evaluated as arithmetic; anything else must be a
    plain decimal, optionally with ``,`` thousands separators.
    """

    if has_operators(token):
        return evaluate_expression(token)

    cleaned = token.replace(",", "")
    if not _DECIMAL.match(cleaned):
        return None
    value = float(cleaned)
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def resolve_payment_mode(token: str, modes: Sequence[PaymentMode]) -> Optional[PaymentMode]:
    """Return the mode whose shorthand or name equals ``token`` ignoring case."""

    for mode in modes:
        if mode.matches(token):
            return mode
    return None


def parse_input(
    text: str,
    modes: Sequence[PaymentMode],
    default_mode: str = DEFAULT_PAYMENT_MODE,
) -> ParsedInput:
    """Split a raw entry line into reason, payment mode and amount.

    The result is recomputed on every edit and is never persisted. Incomplete input
    keeps the user's text as the reason so editing can continue.
    """

    trimmed = text.strip()
    if not trimmed:
        return ParsedInput(reason="", payment_mode=default_mode, amount=None, is_valid=False)

    parts = trimmed.split()
    if len(parts) < 2:
        return ParsedInput(reason=trimmed, payment_mode=default_mode, amount=None, is_valid=False)

    amount = parse_amount(parts[-1])
    if amount is None:
        return ParsedInput(reason=trimmed, payment_mode=default_mode, amount=None, is_valid=False)

    payment_mode = default_mode
    reason_parts = parts[:-1]
    if len(parts) >= 3:
        matched = resolve_payment_mode(parts[-2], modes)
        if matched is not None:
            payment_mode = matched.name
            reason_parts = parts[:-2]

    reason = " ".join(reason_parts)
    return ParsedInput(
        reason=reason or UNKNOWN_REASON,
        payment_mode=payment_mode,
        amount=amount,
        is_valid=bool(reason) and amount > 0,
    )
