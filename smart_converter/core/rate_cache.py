# Role: In-memory, time-bounded exchange-rate cache keyed by the lowercase (from, to) pair.
# Entries are immutable and replaced wholesale on refresh; expired entries are ignored, never evicted.

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional, Tuple

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class RateCacheEntry:
    rate: float
    fetched_at: datetime


class RateCache:
    def __init__(self, ttl_minutes: int = 10, clock: Optional[Clock] = None) -> None:
        self._entries: Dict[Tuple[str, str], RateCacheEntry] = {}
        self._ttl = timedelta(minutes=ttl_minutes)
        self._clock = clock or _utcnow

    @staticmethod
    def _key(from_ccy: str, to_ccy: str) -> Tuple[str, str]:
        return from_ccy.strip().lower(), to_ccy.strip().lower()

    def get(self, from_ccy: str, to_ccy: str) -> Optional[float]:
        # Key line: valid only while now - fetched_at < ttl.
        entry = self._entries.get(self._key(from_ccy, to_ccy))
        if entry is None:
            return None
        if self._clock() - entry.fetched_at >= self._ttl:
            return None
        return entry.rate

    def put(self, from_ccy: str, to_ccy: str, rate: float) -> RateCacheEntry:
        entry = RateCacheEntry(rate=float(rate), fetched_at=self._clock())
        self._entries[self._key(from_ccy, to_ccy)] = entry
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
