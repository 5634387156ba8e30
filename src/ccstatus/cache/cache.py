"""In-memory TTL cache with bounded capacity.

:class:`TTLCache` stores arbitrary values under string keys. Each entry
expires ``ttl`` seconds after it was written; expired entries are purged
lazily on access and in bulk before every write. When the cache is full,
the oldest-inserted entry is evicted (insertion order, not LRU: reads never
refresh an entry's position).

None of the operations raise for unknown or expired keys -- a miss is a
normal result, not a failure.

See Also:
    :class:`~ccstatus.models.CacheConfig` -- the Pydantic model that
    controls ``ttl_seconds`` and ``max_size``.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from ccstatus.models import CacheConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TTL_SECONDS = 300.0
DEFAULT_MAX_ENTRIES = 100


@dataclass(frozen=True)
class _Entry(Generic[T]):
    value: T
    created_at: float
    expires_at: float


class TTLCache(Generic[T]):
    """Key/value store with per-entry expiration and a maximum entry count.

    Args:
        ttl: Default time-to-live in seconds for entries written without
            an explicit ``ttl``.
        max_entries: Maximum number of live entries.
        clock: Zero-argument callable returning the current time in seconds.
            Defaults to :func:`time.monotonic`; tests pass a fake clock.

    Example::

        cache: TTLCache[list[str]] = TTLCache(ttl=60, max_entries=10)
        cache.set("incidents", ["a", "b"])
        cache.get("incidents")   # ["a", "b"]
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._ttl = ttl
        self._max_entries = max_entries
        self._clock = clock
        self._store: dict[str, _Entry[T]] = {}
        self._lock = threading.RLock()

    @classmethod
    def from_config(
        cls,
        config: CacheConfig,
        clock: Callable[[], float] = time.monotonic,
    ) -> TTLCache[Any]:
        """Build a cache from the ``cache`` section of the settings."""
        return cls(ttl=config.ttl_seconds, max_entries=config.max_size, clock=clock)

    @property
    def ttl(self) -> float:
        """Default time-to-live in seconds."""
        return self._ttl

    @property
    def max_entries(self) -> int:
        """Capacity of the cache."""
        return self._max_entries

    def set(self, key: str, value: T, ttl: Optional[float] = None) -> None:
        """Store *value* under *key*, replacing any previous entry.

        Expired entries are swept first. If the cache is still at capacity,
        the oldest-inserted entry is evicted to make room -- even when *key*
        is already present.

        Args:
            key: Cache key.
            value: Value to store.
            ttl: Time-to-live in seconds for this entry. Defaults to the
                cache-wide ``ttl``.
        """
        ttl = self._ttl if ttl is None else ttl
        if ttl <= 0:
            raise ValueError("ttl must be positive")

        with self._lock:
            now = self._clock()
            self._sweep(now)

            if len(self._store) >= self._max_entries:
                oldest = next(iter(self._store))
                del self._store[oldest]
                logger.debug("Cache full (%d entries), evicted '%s'", self._max_entries, oldest)

            self._store[key] = _Entry(value=value, created_at=now, expires_at=now + ttl)

    def get(self, key: str, default: Optional[T] = None) -> Optional[T]:
        """Return the live value for *key*, or *default* on a miss.

        An expired entry is deleted as a side effect.
        """
        with self._lock:
            entry = self._live_entry(key)
        if entry is None:
            return default
        return entry.value

    def has(self, key: str) -> bool:
        """Return whether *key* holds a live entry (same expiry rules as :meth:`get`)."""
        with self._lock:
            return self._live_entry(key) is not None

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def delete(self, key: str) -> bool:
        """Remove *key* if present.

        Returns:
            ``True`` if an entry was removed, ``False`` otherwise.
        """
        with self._lock:
            return self._store.pop(key, None) is not None

    def clear(self) -> None:
        """Remove all entries unconditionally."""
        with self._lock:
            self._store.clear()

    def size(self) -> int:
        """Sweep expired entries and return the number of live entries."""
        with self._lock:
            self._sweep(self._clock())
            return len(self._store)

    def __len__(self) -> int:
        return self.size()

    def keys(self) -> list[str]:
        """Sweep expired entries and return the live keys in insertion order."""
        with self._lock:
            self._sweep(self._clock())
            return list(self._store)

    def stats(self) -> dict[str, Any]:
        """Return a diagnostic snapshot.

        Returns:
            A ``dict`` with ``size`` (live entries), ``max_entries``,
            ``ttl_seconds`` (the default TTL), and ``keys`` (live keys in
            insertion order).
        """
        with self._lock:
            self._sweep(self._clock())
            return {
                "size": len(self._store),
                "max_entries": self._max_entries,
                "ttl_seconds": self._ttl,
                "keys": list(self._store),
            }

    def _live_entry(self, key: str) -> Optional[_Entry[T]]:
        """Look up *key*, purging it if expired. Caller holds the lock."""
        entry = self._store.get(key)
        if entry is None:
            return None
        if self._clock() > entry.expires_at:
            del self._store[key]
            logger.debug("Cache entry '%s' expired", key)
            return None
        return entry

    def _sweep(self, now: float) -> None:
        """Drop every entry whose expiry is in the past. Caller holds the lock."""
        expired = [key for key, entry in self._store.items() if now > entry.expires_at]
        for key in expired:
            del self._store[key]
        if expired:
            logger.debug("Swept %d expired cache entries", len(expired))
