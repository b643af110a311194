"""
In-memory TTL cache for the merged token list.

One instance per process, owned by the API lifespan and passed to the
aggregator. No lock: concurrent refreshes race and the last writer wins.
"""

from __future__ import annotations

import time
from typing import Callable

from backend_x402.scanner.models import Token


class TokenCache:
    """Holds {entries, timestamp, ttl} for the last successful aggregation."""

    def __init__(self, ttl_sec: float, *, clock: Callable[[], float] = time.monotonic) -> None:
        if ttl_sec < 0:
            raise ValueError("ttl_sec must be non-negative")
        self._ttl_sec = float(ttl_sec)
        self._clock = clock
        self._entries: list[Token] = []
        self._timestamp: float | None = None

    @property
    def ttl_sec(self) -> float:
        return self._ttl_sec

    @property
    def timestamp(self) -> float | None:
        """Clock value of the last set(), or None if never set."""
        return self._timestamp

    def get(self) -> list[Token]:
        """Return a copy of the cached entries (possibly stale, possibly empty). Tokens are frozen."""
        return list(self._entries)

    def set(self, entries: list[Token]) -> None:
        """Replace entries wholesale and refresh the timestamp."""
        self._entries = list(entries)
        self._timestamp = self._clock()

    def age_sec(self) -> float | None:
        if self._timestamp is None:
            return None
        return max(0.0, self._clock() - self._timestamp)

    def is_fresh(self) -> bool:
        """True when non-empty and younger than the TTL."""
        age = self.age_sec()
        if age is None or not self._entries:
            return False
        return age < self._ttl_sec

    def clear(self) -> None:
        self._entries = []
        self._timestamp = None

    def __len__(self) -> int:
        return len(self._entries)
