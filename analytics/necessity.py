"""Learned need/want classification per reason."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Final, Iterable, Mapping, Optional

from core.models import Necessity, Transaction

__all__ = [
    "MIN_SAMPLES",
    "NEED_THRESHOLD",
    "NecessityProfile",
    "NecessityTally",
    "WANT_THRESHOLD",
    "is_learned",
    "learn_necessity",
    "record_necessity",
    "suggest_necessity",
]

MIN_SAMPLES: Final[int] = 2
NEED_THRESHOLD: Final[float] = 0.7
WANT_THRESHOLD: Final[float] = 0.3


@dataclass(frozen=True, slots=True)
class NecessityTally:
    need: int = 0
    want: int = 0
    last_used: Optional[Necessity] = None

    @property
    def samples(self) -> int:
        return self.need + self.want

    def add(self, necessity: Necessity) -> "NecessityTally":
        if necessity == "need":
            return replace(self, need=self.need + 1, last_used="need")
        return replace(self, want=self.want + 1, last_used="want")


NecessityProfile = Mapping[str, NecessityTally]


def _reason_key(reason: str) -> str:
    return reason.strip().lower()


def learn_necessity(transactions: Iterable[Transaction]) -> dict[str, NecessityTally]:
    """Tally need/want choices per reason over classified expenses."""

    profile: dict[str, NecessityTally] = {}
    for txn in transactions:
        if txn.type != "expense" or txn.necessity is None or not txn.reason:
            continue
        key = _reason_key(txn.reason)
        profile[key] = profile.get(key, NecessityTally()).add(txn.necessity)
    return profile


def record_necessity(
    profile: NecessityProfile,
    reason: str,
    necessity: Optional[Necessity],
) -> dict[str, NecessityTally]:
    """Return a copy of ``profile`` with one more choice for ``reason``."""

    updated = dict(profile)
    if not reason or necessity is None:
        return updated
    key = _reason_key(reason)
    updated[key] = updated.get(key, NecessityTally()).add(necessity)
    return updated


def suggest_necessity(profile: NecessityProfile, reason: str) -> Optional[Necessity]:
    tally = profile.get(_reason_key(reason))
    if tally is None:
        return None
    if tally.samples < MIN_SAMPLES:
        return tally.last_used

    need_share = tally.need / tally.samples
    if need_share >= NEED_THRESHOLD:
        return "need"
    if need_share <= WANT_THRESHOLD:
        return "want"
    return tally.last_used


def is_learned(profile: NecessityProfile, reason: str) -> bool:
    tally = profile.get(_reason_key(reason))
    return tally is not None and tally.samples >= MIN_SAMPLES
