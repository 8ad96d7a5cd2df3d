"""
In-memory feed cache with per-entry expiration.

Keeps upstream feed content for a while so repeated page loads and downloads
do not hit the provider (and get rate limited). Nothing survives a restart.
"""
import asyncio
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from cachetools import TLRUCache

logger = logging.getLogger(__name__)

DEFAULT_FEED_TTL = 12 * 3600  # seconds
DEFAULT_SWEEP_INTERVAL = 3600  # seconds


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    expires_at: float


def _entry_expiry(key: str, entry: CacheEntry, now: float) -> float:
    return entry.expires_at


class FeedCache:
    """Thread-safe key/value store where every entry has its own TTL."""

    def __init__(self, maxsize: int = 100, timer: Callable[[], float] = time.monotonic):
        self._timer = timer
        self._store: TLRUCache = TLRUCache(maxsize=maxsize, ttu=_entry_expiry, timer=timer)
        self._lock = threading.Lock()

    def set(self, key: str, value: Any, ttl: float = DEFAULT_FEED_TTL) -> None:
        """Store value under key for ttl seconds, replacing any existing entry."""
        entry = CacheEntry(value=value, expires_at=self._timer() + ttl)
        with self._lock:
            if ttl <= 0:
                # TLRUCache silently drops already-expired items on insert
                self._store.pop(key, None)
                return
            self._store[key] = entry

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None if missing or expired."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                # An expired entry is still held until expire() runs
                self._store.expire()
                return None
            return entry.value

    def delete(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._store.expire()
            self._store.clear()

    def sweep(self) -> int:
        """Evict every expired entry. Returns the number of entries removed."""
        with self._lock:
            expired = self._store.expire()
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)


async def run_periodic_sweep(cache: FeedCache, interval: float = DEFAULT_SWEEP_INTERVAL) -> None:
    """Sweep the cache every `interval` seconds until cancelled."""
    while True:
        await asyncio.sleep(interval)
        removed = cache.sweep()
        if removed:
            logger.info(f"[Cache] Swept {removed} expired entries")
