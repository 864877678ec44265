"""Data loading utilities for Bujit's analytics pipeline.

Records arrive from the persistence collaborator as mappings (camelCase or snake_case
keys) or as :class:`~core.models.Transaction` objects. Everything here follows the same
policy: a record that cannot be interpreted is skipped and logged, never fatal.
"""

from __future__ import annotations

import math
from typing import Any, Final, Iterable, Mapping, Optional, Sequence

import pandas as pd
import structlog

from core.models import NECESSITIES, TRANSACTION_TYPES, PaymentMode, Transaction

__all__ = [
    "FRAME_COLUMNS",
    "InvalidRecordError",
    "build_transaction_frame",
    "coerce_payment_mode",
    "coerce_transaction",
    "finite_amount",
    "load_payment_modes",
    "load_transactions",
    "local_today",
    "localize_timestamp",
]

logger = structlog.get_logger()

FRAME_COLUMNS: Final[list[str]] = [
    "position",
    "id",
    "timestamp",
    "day",
    "reason",
    "reason_key",
    "amount",
    "payment_mode",
    "type",
    "necessity",
]


class InvalidRecordError(ValueError):
    """Raised when a raw record cannot be turned into a domain object."""


def localize_timestamp(value: Any, tz: str) -> Optional[pd.Timestamp]:
    """Return ``value`` as naive wall-clock time in ``tz``, or ``None``.

    Aware timestamps are converted into ``tz``; naive ones are taken to already be
    wall-clock time there.
    """

    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError):
        return None
    if pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_convert(tz).tz_localize(None)
    return ts


def local_today(now: Any, tz: str) -> pd.Timestamp:
    """Return local midnight of the day containing ``now`` (the current time if ``None``)."""

    if now is None:
        return pd.Timestamp.now(tz=tz).tz_localize(None).normalize()
    ts = localize_timestamp(now, tz)
    if ts is None:
        raise ValueError(f"Cannot interpret reference time: {now!r}")
    return ts.normalize()


def finite_amount(value: Any) -> Optional[float]:
    """Return ``value`` as a finite float, or ``None``."""

    if isinstance(value, bool):
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    return amount if math.isfinite(amount) else None


def _field(record: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        if name in record:
            return record[name]
    return None


def coerce_transaction(record: Mapping[str, Any]) -> Transaction:
    """Build a :class:`Transaction` from a raw mapping or raise :class:`InvalidRecordError`."""

    txn_id = record.get("id")
    if not isinstance(txn_id, str) or not txn_id:
        raise InvalidRecordError("missing id")

    raw_date = record.get("date")
    try:
        parsed = pd.Timestamp(raw_date)
    except (TypeError, ValueError) as exc:
        raise InvalidRecordError(f"unparsable date {raw_date!r}") from exc
    if pd.isna(parsed):
        raise InvalidRecordError(f"unparsable date {raw_date!r}")

    reason = record.get("reason")
    if not isinstance(reason, str) or not reason.strip():
        raise InvalidRecordError("empty reason")

    amount = finite_amount(record.get("amount"))
    if amount is None or amount <= 0:
        raise InvalidRecordError(f"invalid amount {record.get('amount')!r}")

    txn_type = record.get("type", "expense")
    if txn_type not in TRANSACTION_TYPES:
        raise InvalidRecordError(f"unknown type {txn_type!r}")

    necessity = record.get("necessity")
    if necessity is not None and necessity not in NECESSITIES:
        raise InvalidRecordError(f"unknown necessity {necessity!r}")

    payment_mode = _field(record, "payment_mode", "paymentMode")
    if not isinstance(payment_mode, str) or not payment_mode:
        raise InvalidRecordError("missing payment mode")

    return Transaction(
        id=txn_id,
        date=parsed.to_pydatetime(),
        reason=reason.strip(),
        amount=amount,
        payment_mode=payment_mode,
        type=txn_type,
        necessity=necessity,
    )


def load_transactions(records: Iterable[Mapping[str, Any]]) -> tuple[Transaction, ...]:
    """Coerce raw records, skipping the ones that fail validation."""

    loaded: list[Transaction] = []
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            logger.warning("transaction_record_skipped", index=index, error="not a mapping")
            continue
        try:
            loaded.append(coerce_transaction(record))
        except InvalidRecordError as exc:
            logger.warning(
                "transaction_record_skipped",
                index=index,
                id=record.get("id"),
                error=str(exc),
            )
    return tuple(loaded)


def coerce_payment_mode(record: Mapping[str, Any]) -> PaymentMode:
    """Build a :class:`PaymentMode` from a raw mapping or raise :class:`InvalidRecordError`."""

    values = [record.get(key) for key in ("id", "name", "shorthand")]
    if not all(isinstance(value, str) and value.strip() for value in values):
        raise InvalidRecordError("payment modes need id, name and shorthand")
    mode_id, name, shorthand = (str(value).strip() for value in values)
    return PaymentMode(id=mode_id, name=name, shorthand=shorthand)


def load_payment_modes(records: Iterable[Mapping[str, Any]]) -> tuple[PaymentMode, ...]:
    """Coerce raw payment mode records, skipping invalid ones."""

    modes: list[PaymentMode] = []
    for index, record in enumerate(records):
        try:
            modes.append(coerce_payment_mode(record))
        except (InvalidRecordError, AttributeError) as exc:
            logger.warning("payment_mode_record_skipped", index=index, error=str(exc))
    return tuple(modes)


def build_transaction_frame(transactions: Sequence[Transaction], tz: str) -> pd.DataFrame:
    """Return a dataframe with one row per interpretable transaction.

    ``timestamp`` is naive local time in ``tz`` and ``day`` its local midnight. The
    ``position`` column keeps the caller's ordering for stable tie-breaks.
    """

    rows: list[dict[str, Any]] = []
    for position, txn in enumerate(transactions):
        timestamp = localize_timestamp(getattr(txn, "date", None), tz)
        amount = finite_amount(getattr(txn, "amount", None))
        if timestamp is None or amount is None:
            logger.warning(
                "transaction_skipped",
                id=getattr(txn, "id", None),
                date=str(getattr(txn, "date", None)),
                amount=str(getattr(txn, "amount", None)),
            )
            continue

        reason = str(getattr(txn, "reason", "") or "")
        rows.append(
            {
                "position": position,
                "id": getattr(txn, "id", None),
                "timestamp": timestamp,
                "day": timestamp.normalize(),
                "reason": reason,
                "reason_key": reason.strip().lower(),
                "amount": amount,
                "payment_mode": str(getattr(txn, "payment_mode", "") or ""),
                "type": getattr(txn, "type", None),
                "necessity": getattr(txn, "necessity", None),
            }
        )

    frame = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    frame["timestamp"] = pd.to_datetime(frame["timestamp"])
    frame["day"] = pd.to_datetime(frame["day"])
    frame["amount"] = frame["amount"].astype(float)
    frame["position"] = frame["position"].astype(int)
    return frame
