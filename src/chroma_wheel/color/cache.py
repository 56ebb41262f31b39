"""
Bounded LRU cache with TTL expiry for color conversions.

Entries are evicted by least-recent use when the cache is full, or by age
once their TTL passes, whichever comes first. The cache is an ordinary
object injected into ColorModel so tests can build isolated instances.

Lifecycle:
    cache = ColorCache(max_size=1000, ttl=1800.0, sweep_interval=60.0)
    cache.init()     # starts the periodic expiry sweep (if configured)
    ...
    cache.clear()    # drop all entries, keep running
    cache.destroy()  # stop the sweep and drop all entries
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from typing import Callable

from .types import CacheEntry

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 1000
DEFAULT_TTL_SECONDS = 1800.0


class ColorCache:
    """LRU + TTL cache keyed by normalized hex."""

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_SIZE,
        ttl: float | None = DEFAULT_TTL_SECONDS,
        sweep_interval: float | None = None,
        *,
        _clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the cache.

        Args:
            max_size: Maximum number of entries (must be positive)
            ttl: Seconds an entry stays valid, or None for no expiry
            sweep_interval: Seconds between background expiry sweeps,
                or None to only expire lazily on read
        """
        if max_size <= 0:
            raise ValueError(f"max_size must be positive, got {max_size}")

        self.max_size = max_size
        self.ttl = ttl
        self.sweep_interval = sweep_interval
        self._clock = _clock

        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.RLock()
        self._sweeper: threading.Timer | None = None
        self._running = False

        # Counters for stats()
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._expirations = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def init(self) -> None:
        """Start the periodic sweep if an interval is configured."""
        with self._lock:
            if self._running:
                return
            self._running = True
        self._schedule_sweep()

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._entries.clear()

    def destroy(self) -> None:
        """Stop the sweep and remove all entries."""
        with self._lock:
            self._running = False
            sweeper = self._sweeper
            self._sweeper = None
            self._entries.clear()
        if sweeper is not None:
            sweeper.cancel()

    def _schedule_sweep(self) -> None:
        if not self.sweep_interval or self.sweep_interval <= 0:
            return
        with self._lock:
            if not self._running:
                return
            timer = threading.Timer(self.sweep_interval, self._sweep_tick)
            timer.daemon = True
            self._sweeper = timer
        timer.start()

    def _sweep_tick(self) -> None:
        removed = self.sweep_expired()
        if removed:
            logger.debug("Swept %d expired color entries", removed)
        self._schedule_sweep()

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def get(self, key: str) -> CacheEntry | None:
        """
        Look up an entry, refreshing its recency.

        Expired entries are removed and reported as a miss.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None

            now = self._clock()
            if entry.is_expired(now):
                del self._entries[key]
                self._expirations += 1
                self._misses += 1
                return None

            # Move to most-recently-used position
            self._entries.move_to_end(key)
            entry.last_accessed = now
            entry.access_count += 1
            self._hits += 1
            return entry

    def put(self, entry: CacheEntry) -> CacheEntry:
        """Insert or replace an entry, evicting the LRU entry if full."""
        with self._lock:
            now = self._clock()
            entry.created_at = now
            entry.last_accessed = now
            entry.expires_at = now + self.ttl if self.ttl is not None else None

            if entry.hex in self._entries:
                self._entries.move_to_end(entry.hex)
            elif len(self._entries) >= self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                self._evictions += 1
                logger.debug("Evicted %s from color cache", evicted)

            self._entries[entry.hex] = entry
            return entry

    def get_or_compute(
        self, key: str, compute: Callable[[str], CacheEntry]
    ) -> CacheEntry:
        """Return the cached entry for key, computing and storing it on a miss."""
        with self._lock:
            entry = self.get(key)
            if entry is not None:
                return entry
            return self.put(compute(key))

    def sweep_expired(self) -> int:
        """
        Remove expired entries only; live entries keep their LRU position.

        Returns:
            Number of entries removed
        """
        with self._lock:
            now = self._clock()
            expired = [k for k, e in self._entries.items() if e.is_expired(now)]
            for key in expired:
                del self._entries[key]
            self._expirations += len(expired)
            return len(expired)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def size(self) -> int:
        return len(self)

    def keys(self) -> list[str]:
        """Keys from least to most recently used."""
        with self._lock:
            return list(self._entries.keys())

    def stats(self) -> dict:
        """Get cache counters for display/debugging."""
        with self._lock:
            return {
                "size": len(self._entries),
                "max_size": self.max_size,
                "ttl": self.ttl,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
                "expirations": self._expirations,
            }
