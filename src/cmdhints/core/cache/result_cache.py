"""Bounded result cache with TTL expiry and access-count eviction.

Entries expire ``ttl`` milliseconds after they were last written. When the
cache is full, inserting a new key evicts the entry with the lowest access
counter; ties go to the entry inserted first.

Note that this is a frequency-based policy: an entry read many times long
ago survives an entry written a moment ago and never read.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from cmdhints.domain.protocols.cache import Cache
from cmdhints.logger import get_logger

logger = get_logger("cache")

V = TypeVar("V")


def _now_ms() -> float:
    return time.time() * 1000


@dataclass(slots=True)
class CacheEntry(Generic[V]):
    value: V
    timestamp: float
    access_count: int = 1


class ResultCache(Cache[V]):
    """String-keyed cache bounded by ``max_size`` entries and ``ttl`` milliseconds.

    Example:
        >>> cache = ResultCache[str](max_size=3, ttl=1000)
        >>> cache.set("build:ja", "rendered hint")
        >>> cache.get("build:ja")
        'rendered hint'
    """

    def __init__(
        self,
        max_size: int,
        ttl: float,
        *,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            max_size: Maximum number of entries held at once (at least 1)
            ttl: Time-to-live in milliseconds
            clock: Source of the current time in epoch milliseconds
        """
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self._data: dict[str, CacheEntry[V]] = {}
        self.max_size = max_size
        self.ttl = ttl
        self._clock = clock or _now_ms

    def _is_expired(self, entry: CacheEntry[V]) -> bool:
        return self._clock() - entry.timestamp > self.ttl

    def get(self, key: str) -> V | None:
        """Get a value, counting the access.

        Expired entries are evicted and reported as a miss.

        Args:
            key: The cache key

        Returns:
            The cached value if found and not expired, None otherwise
        """
        entry = self._data.get(key)
        if entry is None:
            return None

        if self._is_expired(entry):
            del self._data[key]
            return None

        entry.access_count += 1
        return entry.value

    def set(self, key: str, value: V) -> None:
        """Store a value.

        Rewriting an existing key resets its timestamp and access counter to 1.
        Adding a key to a full cache evicts first.

        Args:
            key: The cache key
            value: The value to cache
        """
        now = self._clock()
        if key in self._data:
            self._data[key] = CacheEntry(value=value, timestamp=now)
            return

        if len(self._data) >= self.max_size:
            self._evict()

        self._data[key] = CacheEntry(value=value, timestamp=now)

    def has(self, key: str) -> bool:
        """Check for a live entry without counting an access."""
        entry = self._data.get(key)
        if entry is None:
            return False

        if self._is_expired(entry):
            del self._data[key]
            return False

        return True

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def clear(self) -> None:
        self._data.clear()

    def size(self) -> int:
        return len(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def _evict(self) -> None:
        """Remove the entry with the lowest access counter."""
        victim: str | None = None
        lowest = float("inf")
        for key, entry in self._data.items():
            if entry.access_count < lowest:
                lowest = entry.access_count
                victim = key

        if victim is not None:
            del self._data[victim]
            logger.debug(f"Evicted cache entry '{victim}' (access_count={lowest})")
