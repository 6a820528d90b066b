"""TTL-aware key/value store backing webhook trust decisions.

The dispatcher keeps two kinds of entries here: the currently trusted
subscription ARN (one key, effectively permanent) and the ids of recently
processed messages (one key each, short TTL).
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Protocol


class TrustStore(Protocol):
    """Structural interface for trust store backends.

    ``write_if_absent`` must be atomic: of two concurrent calls for the
    same key, exactly one returns ``True``.
    """

    async def write(self, key: str, value: Any, ttl: timedelta) -> None:
        ...

    async def fetch(self, key: str) -> Any | None:
        ...

    async def write_if_absent(self, key: str, value: Any, ttl: timedelta) -> bool:
        ...


@dataclass(slots=True)
class _Entry:
    value: Any
    expires_at: float


class MemoryTrustStore:
    """In-process trust store.

    Safe to share between threads and event loops. Expired entries are
    dropped lazily on access and swept every ``sweep_every`` writes.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], float] = time.monotonic,
        sweep_every: int = 256,
    ) -> None:
        self._clock = clock
        self._sweep_every = max(1, sweep_every)
        self._writes = 0
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            self._sweep_locked(self._clock())
            return len(self._entries)

    def _live_locked(self, key: str, now: float) -> _Entry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at <= now:
            del self._entries[key]
            return None
        return entry

    def _sweep_locked(self, now: float) -> None:
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in expired:
            del self._entries[key]

    def _store_locked(self, key: str, value: Any, ttl: timedelta, now: float) -> None:
        self._entries[key] = _Entry(value=value, expires_at=now + ttl.total_seconds())
        self._writes += 1
        if self._writes % self._sweep_every == 0:
            self._sweep_locked(now)

    async def write(self, key: str, value: Any, ttl: timedelta) -> None:
        with self._lock:
            self._store_locked(key, value, ttl, self._clock())

    async def fetch(self, key: str) -> Any | None:
        with self._lock:
            entry = self._live_locked(key, self._clock())
            return entry.value if entry is not None else None

    async def write_if_absent(self, key: str, value: Any, ttl: timedelta) -> bool:
        with self._lock:
            now = self._clock()
            if self._live_locked(key, now) is not None:
                return False
            self._store_locked(key, value, ttl, now)
            return True
