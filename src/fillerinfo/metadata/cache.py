"""In-process caches for metadata provider lookups.

Series and season lookups are cached for the lifetime of the process. The
cache sits behind a tiny interface so tests can pass ``NullCache`` (never
stores) or their own instrumented version.
"""

import time
from collections import OrderedDict
from typing import Generic, Hashable, Protocol, TypeVar

V = TypeVar("V")

# Sentinel distinguishing "not cached" from a cached None.
MISSING = object()


class MetadataCache(Protocol[V]):
    """Minimal key/value cache used by metadata providers."""

    def get(self, key: Hashable) -> V | object: ...

    def set(self, key: Hashable, value: V) -> None: ...

    def clear(self) -> None: ...


class MemoryCache(Generic[V]):
    """Bounded in-memory cache with optional TTL.

    Entries are stored as ``(expires_ts, value)``. When ``max_entries`` is
    exceeded the least recently used entry is evicted. ``ttl=None`` means
    entries never expire.
    """

    def __init__(self, max_entries: int = 1024, ttl: float | None = None) -> None:
        """Create a cache holding at most *max_entries* items."""
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self.ttl = ttl
        self._entries: OrderedDict[Hashable, tuple[float, V]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: Hashable) -> V | object:
        """Return the cached value for *key*, or MISSING."""
        entry = self._entries.get(key)
        if entry is None:
            return MISSING
        expires_ts, value = entry
        if expires_ts <= time.time():
            del self._entries[key]
            return MISSING
        self._entries.move_to_end(key)
        return value

    def set(self, key: Hashable, value: V) -> None:
        """Store *value* under *key*, evicting the oldest entry if full."""
        expires_ts = time.time() + self.ttl if self.ttl else float("inf")
        self._entries[key] = (expires_ts, value)
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()


class NullCache(Generic[V]):
    """A cache that never stores anything."""

    def get(self, key: Hashable) -> V | object:
        return MISSING

    def set(self, key: Hashable, value: V) -> None:
        return None

    def clear(self) -> None:
        return None
