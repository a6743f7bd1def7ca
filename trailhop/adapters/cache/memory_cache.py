"""Thread-safe in-memory cache with optional TTL.

Unlike a plain dict this cache can hold None as a real value, which is
how negative stop area lookups are remembered.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")


@dataclass
class InMemoryCache(Generic[T]):
    """In-memory CachePort implementation.

    Attributes:
        default_ttl_seconds: Time-to-live for entries (None = no expiry)
        max_size: Maximum number of entries, oldest evicted first
        name: Cache name for logging

    Example:
        cache = InMemoryCache[StopArea](name="nearest", default_ttl_seconds=3600)
        stop = cache.get_or_compute("1200:3300", lambda: provider.nearest(...))
    """

    default_ttl_seconds: Optional[float] = None
    max_size: Optional[int] = None
    name: str = "cache"

    _store: Dict[str, Tuple[Any, float]] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"cache.{self.name}")

    def _live_entry(self, key: str) -> Optional[Tuple[Any, float]]:
        entry = self._store.get(key)
        if entry is not None and time.time() > entry[1]:
            del self._store[key]
            self._logger.debug("Cache entry expired", extra={"key": key})
            return None
        return entry

    def get(self, key: str) -> Optional[T]:
        with self._lock:
            entry = self._live_entry(key)
            return None if entry is None else entry[0]

    def contains(self, key: str) -> bool:
        with self._lock:
            return self._live_entry(key) is not None

    def set(self, key: str, value: T, ttl: Optional[float] = None) -> None:
        with self._lock:
            if (
                self.max_size is not None
                and key not in self._store
                and len(self._store) >= self.max_size
            ):
                oldest_key = next(iter(self._store))
                del self._store[oldest_key]
                self._logger.debug("Cache evicted entry", extra={"key": oldest_key})

            effective_ttl = ttl if ttl is not None else self.default_ttl_seconds
            expiry = time.time() + effective_ttl if effective_ttl is not None else float("inf")
            self._store[key] = (value, expiry)

    def get_or_compute(self, key: str, compute_fn: Callable[[], T]) -> T:
        with self._lock:
            entry = self._live_entry(key)
        if entry is not None:
            self._logger.debug("Cache hit", extra={"key": key})
            return entry[0]

        # Computed outside the lock so slow lookups do not serialize.
        computed = compute_fn()
        self.set(key, computed)
        return computed

    def clear(self) -> int:
        with self._lock:
            count = len(self._store)
            self._store.clear()
            self._logger.info("Cache cleared", extra={"entries_cleared": count})
            return count

    def size(self) -> int:
        with self._lock:
            return len(self._store)
