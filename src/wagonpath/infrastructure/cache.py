"""
Generic LRU cache.

This module provides a thread-safe LRU (Least Recently Used) cache with
hit/miss metrics. Callers invalidate entries by clearing the cache.
"""

from collections import OrderedDict
from threading import Lock
from typing import Dict, Generic, Hashable, Optional, TypeVar

T = TypeVar("T")  # Type of cached values


class LRUCache(Generic[T]):
    """
    Thread-safe LRU cache.

    Entries beyond ``max_size`` are evicted least recently used first.

    Attributes:
        max_size: Maximum number of entries to store
    """

    def __init__(self, max_size: int):
        """Initialize cache with given parameters."""
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self._entries: "OrderedDict[Hashable, T]" = OrderedDict()
        self._lock = Lock()
        self._max_size = max_size
        self._hits = 0
        self._misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: Hashable) -> Optional[T]:
        """
        Get value from cache.

        Args:
            key: Cache key to look up

        Returns:
            Cached value if found, None otherwise
        """
        with self._lock:
            if key not in self._entries:
                self._misses += 1
                return None

            self._entries.move_to_end(key)
            self._hits += 1
            return self._entries[key]

    def put(self, key: Hashable, value: T) -> None:
        """
        Store value in cache, evicting the least recently used entry when full.

        Args:
            key: Cache key to store value under
            value: Value to cache
        """
        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_size:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        """Clear all entries and reset metrics."""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def get_metrics(self) -> Dict[str, float]:
        """
        Get cache performance metrics.

        Returns:
            Dictionary containing:
            - hits: Number of cache hits
            - misses: Number of cache misses
            - size: Current cache size
            - hit_rate: Cache hit rate
        """
        with self._lock:
            total = self._hits + self._misses
            return {
                "hits": float(self._hits),
                "misses": float(self._misses),
                "size": float(len(self._entries)),
                "hit_rate": float(self._hits) / total if total > 0 else 0.0,
            }
