"""Cache port - Injectable caching abstraction.

Used by the transit adapter to avoid asking the provider for the same
stop area twice during a harvesting run.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol, TypeVar

T = TypeVar("T")


class CachePort(Protocol[T]):
    """Port for caching.

    Implementations:
    - adapters/cache/memory_cache.py (InMemoryCache) - Production
    - adapters/cache/null_cache.py (NullCache) - Testing
    """

    def get(self, key: str) -> Optional[T]:
        """Return the cached value, or None if absent or expired."""
        ...

    def set(self, key: str, value: T) -> None:
        ...

    def contains(self, key: str) -> bool:
        """True if ``key`` holds a live entry, even one caching None."""
        ...

    def get_or_compute(self, key: str, compute_fn: Callable[[], T]) -> T:
        """Return the cached value or compute, store and return it.

        A computed None is cached too, so negative lookups are not
        repeated.
        """
        ...

    def clear(self) -> int:
        """Drop all entries and return how many there were."""
        ...
