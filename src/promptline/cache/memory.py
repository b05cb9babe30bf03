"""Thread-safe in-memory LRU cache."""

import threading
from collections import OrderedDict
from collections.abc import Callable, Hashable
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class MemoryCache(Generic[K, V]):
    """
    In-memory LRU cache owned by the object that creates it.

    This cache uses an OrderedDict to maintain LRU ordering.
    When the cache exceeds max_size, the least recently used
    entries are evicted. A max_size of 0 disables storage.

    Example:
        cache: MemoryCache[str, Encoding] = MemoryCache(max_size=8)

        encoder = cache.get_or_create("gpt-4", build_encoder)
        cache.get("gpt-4")  # -> same encoder
    """

    def __init__(self, max_size: int = 128):
        """
        Initialize the memory cache.

        Args:
            max_size: Maximum number of entries to store
        """
        if max_size < 0:
            raise ValueError(f"max_size must be >= 0, got {max_size}")
        self._max_size = max_size
        self._cache: OrderedDict[K, V] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, key: K) -> V | None:
        """Retrieve a cached value, or None if not present."""
        with self._lock:
            if key not in self._cache:
                self._misses += 1
                return None

            # Move to end (most recently used)
            self._cache.move_to_end(key)
            self._hits += 1
            return self._cache[key]

    def set(self, key: K, value: V) -> None:
        """Store a value in the cache."""
        with self._lock:
            self._cache[key] = value
            self._cache.move_to_end(key)

            # Evict LRU entries if over capacity
            while len(self._cache) > self._max_size:
                self._cache.popitem(last=False)

    def get_or_create(self, key: K, factory: Callable[[K], V]) -> V:
        """
        Return the cached value for key, building and storing it on a miss.

        The factory runs outside the lock; concurrent misses may build the
        value more than once, and the last one stored wins.
        """
        value = self.get(key)
        if value is None:
            value = factory(key)
            self.set(key, value)
        return value

    def delete(self, key: K) -> bool:
        """Delete a cached entry."""
        with self._lock:
            if key in self._cache:
                del self._cache[key]
                return True
            return False

    def clear(self) -> int:
        """Clear all cached entries."""
        with self._lock:
            count = len(self._cache)
            self._cache.clear()
            self._hits = 0
            self._misses = 0
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._cache

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def hits(self) -> int:
        """Number of cache hits."""
        return self._hits

    @property
    def misses(self) -> int:
        """Number of cache misses."""
        return self._misses

    @property
    def hit_rate(self) -> float:
        """Cache hit rate (0.0 to 1.0)."""
        total = self._hits + self._misses
        if total == 0:
            return 0.0
        return self._hits / total

    def stats(self) -> dict[str, int | float]:
        """Get cache statistics."""
        return {
            "size": len(self),
            "max_size": self._max_size,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": self.hit_rate,
        }
