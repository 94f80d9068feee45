"""TTL cache for product lookups."""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


class Cache(Protocol):
    """Key-value cache with per-entry expiry."""

    def get(self, key: str) -> object:
        """Return a cached value, or MISSING when absent or expired."""

    def set(self, key: str, value: object, ttl_seconds: float) -> None:
        """Store a value for ttl_seconds."""


@dataclass
class _CacheEntry:
    value: object
    expires_at: float


@dataclass
class InMemoryCache(Cache):
    """In-process cache.

    ``None`` is a valid cached value (a barcode the database does not know),
    so misses are reported with ``MISSING``.
    """

    clock: Callable[[], float] = time.monotonic
    _entries: dict[str, _CacheEntry] = field(default_factory=dict, repr=False)

    def get(self, key: str) -> object:
        """Return a cached value if it hasn't expired."""
        entry = self._entries.get(key)
        if entry is None:
            return MISSING
        if self.clock() >= entry.expires_at:
            self._entries.pop(key, None)
            return MISSING
        return entry.value

    def set(self, key: str, value: object, ttl_seconds: float) -> None:
        """Store a value with a TTL."""
        self._entries[key] = _CacheEntry(value=value, expires_at=self.clock() + ttl_seconds)
