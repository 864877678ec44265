"""Restricted arithmetic evaluation for amount tokens such as ``100+50``.

Operators follow standard precedence: ``*`` and ``/`` bind tighter than ``+`` and
``-``, operators of equal rank associate left, and parentheses group. Evaluation walks
a whitelisted :mod:`ast` tree, so names, calls and every other construct are refused.
"""

from __future__ import annotations

import ast
import math
import operator
import re
from typing import Callable, Final, Optional

__all__ = [
    "MAX_EXPRESSION_LENGTH",
    "evaluate_expression",
    "has_operators",
]

MAX_EXPRESSION_LENGTH: Final[int] = 50

_ALLOWED_CHARACTERS = re.compile(r"^[\d\s+\-*/().]+$")
_EMPTY_PARENTHESES = re.compile(r"\(\s*\)")
_DOUBLED_OPERATORS = re.compile(r"[+*/]{2,}|-{2,}")
_OPERATORS = re.compile(r"[+\-*/]")
# Python rejects integer literals such as ``050``.
_LEADING_ZEROS = re.compile(r"(?<![\d.])0+(?=\d)")

_BINARY: dict[type, Callable[[float, float], float]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
}
_UNARY: dict[type, Callable[[float], float]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}


class _Rejected(Exception):
    """Internal signal for an expression outside the supported grammar."""


def has_operators(expr: str) -> bool:
    """Return ``True`` when ``expr`` contains an arithmetic operator."""

    return bool(_OPERATORS.search(expr.strip()))


def evaluate_expression(expr: str) -> Optional[float]:
    """Evaluate ``expr`` and return a positive amount rounded to 2 decimals.

    ``None`` is returned for malformed input, division by zero, non-finite values and
    results that are zero or negative. This function never raises.
    """

    trimmed = expr.strip()
    if not trimmed or len(trimmed) > MAX_EXPRESSION_LENGTH:
        return None
    if not _ALLOWED_CHARACTERS.match(trimmed):
        return None
    if _EMPTY_PARENTHESES.search(trimmed) or _DOUBLED_OPERATORS.search(trimmed):
        return None

    try:
        tree = ast.parse(_LEADING_ZEROS.sub("", trimmed), mode="eval")
        result = _evaluate(tree.body)
    except (SyntaxError, ValueError, ZeroDivisionError, OverflowError, _Rejected):
        return None

    if not math.isfinite(result) or result <= 0:
        return None
    rounded = round(result, 2)
    return rounded if rounded > 0 else None


def _evaluate(node: ast.AST) -> float:
    if isinstance(node, ast.Constant):
        value = node.value
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise _Rejected(repr(value))
        return float(value)
    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY:
        return _BINARY[type(node.op)](_evaluate(node.left), _evaluate(node.right))
    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY:
        return _UNARY[type(node.op)](_evaluate(node.operand))
    raise _Rejected(type(node).__name__)
