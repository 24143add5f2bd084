"""Time-bounded in-memory cache for decoded responses.

Entries are never evicted: a stale entry stays in place (and counts toward
:meth:`ResponseCache.size`) until it is overwritten by a fresh fetch or the
cache is cleared. Staleness is decided at read time by comparing the
entry's ``stored_at`` against the caller's clock reading and TTL.

All operations are guarded by a :class:`threading.Lock` so a single cache
can be shared by several pipelines or threads. Concurrent fetches of the
same key are not coordinated; the last :meth:`~ResponseCache.put` wins.

See Also:
    :class:`~skyfetch.models.CacheEntry` -- the stored record.
"""

from __future__ import annotations

import threading
from typing import Any, Optional

from skyfetch.models import CacheEntry


class ResponseCache:
    """In-memory mapping from cache key to :class:`~skyfetch.models.CacheEntry`.

    Example::

        from skyfetch.cache import ResponseCache

        cache = ResponseCache()
        cache.put("apod_today", {"url": "https://..."}, now=100.0)
        entry = cache.get_fresh("apod_today", now=130.0, ttl=3600)
    """

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[CacheEntry]:
        """Return the entry stored under *key*, fresh or not, or ``None``."""
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, value: Any, now: float) -> None:
        """Store *value* under *key*, replacing any previous entry.

        Args:
            key: Cache key.
            value: Decoded response, stored by reference.
            now: Clock reading recorded as the entry's ``stored_at``.
        """
        with self._lock:
            self._entries[key] = CacheEntry(value=value, stored_at=now)

    @staticmethod
    def is_fresh(entry: CacheEntry, now: float, ttl: float) -> bool:
        """Return ``True`` while ``now - entry.stored_at`` is below *ttl*."""
        return now - entry.stored_at < ttl

    def get_fresh(self, key: str, now: float, ttl: float) -> Optional[CacheEntry]:
        """Return the entry for *key* only if it is still fresh.

        Expired entries are treated as misses but are left in place.
        """
        with self._lock:
            entry = self._entries.get(key)
        if entry is None or not self.is_fresh(entry, now, ttl):
            return None
        return entry

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._entries.clear()

    def size(self) -> int:
        """Number of stored entries, stale ones included."""
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def stats(self) -> dict[str, Any]:
        """Return cache statistics.

        Returns:
            A ``dict`` with ``size`` (number of entries) and ``keys``
            (sorted list of stored keys).
        """
        with self._lock:
            return {"size": len(self._entries), "keys": sorted(self._entries)}
