# ABOUTME: Bounded in-memory cache with time-to-live expiry and least-recently-used eviction.
# ABOUTME: Each catalog source and the title resolver owns one instance; nothing is shared.

import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from typing import Generic, NamedTuple, TypeVar

from booklookup.metadata.config import DEFAULT_CACHE_SIZE, DEFAULT_CACHE_TTL

T = TypeVar("T")


class CacheEntry(NamedTuple, Generic[T]):
    """A stored value and the clock reading when it was inserted."""

    value: T
    inserted_at: float


class BoundedCache(Generic[T]):
    """Key/value cache bounded by entry count and entry age.

    Expired entries are dropped lazily when read; there is no background
    sweep. At capacity, inserting a new key evicts the single least recently
    used entry. Negative results are cached like any other value, so callers
    that store None should pass a sentinel as ``default`` to tell a cached
    None apart from a miss.
    """

    def __init__(
        self,
        *,
        max_size: int = DEFAULT_CACHE_SIZE,
        ttl: float = DEFAULT_CACHE_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_size < 1:
            msg = f"max_size must be at least 1, got {max_size}"
            raise ValueError(msg)
        if ttl <= 0:
            msg = f"ttl must be positive, got {ttl}"
            raise ValueError(msg)
        self._entries: OrderedDict[str, CacheEntry[T]] = OrderedDict()
        self._max_size = max_size
        self._ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def size(self) -> int:
        """Number of stored entries, including any not yet found to be expired."""
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.size

    def get(self, key: str, default: T | None = None) -> T | None:
        """Return the value for key, or default if absent or expired.

        A hit moves the entry to the most-recently-used position.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            if self._clock() - entry.inserted_at > self._ttl:
                del self._entries[key]
                return default
            self._entries.move_to_end(key)
            return entry.value

    def set(self, key: str, value: T) -> None:
        """Store value under key, replacing any existing entry."""
        with self._lock:
            if key in self._entries:
                del self._entries[key]
            elif len(self._entries) >= self._max_size:
                self._entries.popitem(last=False)
            self._entries[key] = CacheEntry(value, self._clock())

    def delete(self, key: str) -> bool:
        """Remove key. Returns True if an entry was removed."""
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
