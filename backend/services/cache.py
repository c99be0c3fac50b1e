"""In-memory cache with per-entry freshness windows. No Redis needed.

Staleness is discovered lazily: nothing is swept in the background, an entry
is only evicted when `get` or `has` finds it stale. `get_age` and `is_stale`
only look, so callers can decide on a refetch without losing the old value.

Note: each uvicorn worker owns its own cache instance (created in the app
factory). With --workers 2 the dashboard may be fetched once per worker.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")

DEFAULT_FRESH_FOR_MS = 5 * 60 * 1000


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


@dataclass
class CacheEntry(Generic[T]):
    value: T
    stored_at: float
    fresh_for: int

    def age(self, now: float) -> float:
        return now - self.stored_at

    def is_fresh(self, now: float) -> bool:
        # Boundary counts as fresh.
        return self.age(now) <= self.fresh_for


class StaleAwareCache(Generic[T]):
    """Key/value store where every entry carries its own freshness window.

    Times are milliseconds. `clock` must be monotonically non-decreasing and is
    shared by every operation on the instance; tests pass a fake one.
    """

    def __init__(
        self,
        default_fresh_for_ms: int = DEFAULT_FRESH_FOR_MS,
        clock: Callable[[], float] = _monotonic_ms,
    ):
        self.default_fresh_for_ms = max(0, default_fresh_for_ms)
        self._clock = clock
        self._store: dict[str, CacheEntry[T]] = {}

    def set(self, key: str, value: T, fresh_for_ms: int | None = None) -> None:
        """Store or replace `key`. Negative windows are clamped to zero."""
        if fresh_for_ms is None:
            fresh_for_ms = self.default_fresh_for_ms
        self._store[key] = CacheEntry(
            value=value,
            stored_at=self._clock(),
            fresh_for=max(0, fresh_for_ms),
        )

    def get(self, key: str) -> T | None:
        """Return the value if fresh. A stale entry is evicted and None returned."""
        entry = self._fresh_entry(key)
        return entry.value if entry is not None else None

    def has(self, key: str) -> bool:
        """Same staleness test and eviction as `get`, without the value."""
        return self._fresh_entry(key) is not None

    def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def clear(self) -> None:
        self._store.clear()

    def get_age(self, key: str) -> float | None:
        """Milliseconds since the entry was stored, fresh or not. Never evicts."""
        entry = self._store.get(key)
        if entry is None:
            return None
        return entry.age(self._clock())

    def is_stale(self, key: str) -> bool:
        """True for stale or missing entries. Never evicts."""
        entry = self._store.get(key)
        if entry is None:
            return True
        return not entry.is_fresh(self._clock())

    def _fresh_entry(self, key: str) -> CacheEntry[T] | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        if not entry.is_fresh(self._clock()):
            del self._store[key]
            return None
        return entry

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __len__(self) -> int:
        # Includes stale entries nobody has read yet.
        return len(self._store)

    def __repr__(self) -> str:
        return f"StaleAwareCache(default_fresh_for_ms={self.default_fresh_for_ms}, size={len(self._store)})"


# Dashboard sections and how long each stays fresh (ms).
CACHE_KEYS = {
    "DASHBOARD_STATS": "dashboard-stats",
    "RECENT_UPLOADS": "recent-uploads",
    "RECENT_DONATIONS": "recent-donations",
    "RECENT_CONTACTS": "recent-contacts",
}

STALE_TIMES = {
    CACHE_KEYS["DASHBOARD_STATS"]: 2 * 60 * 1000,
    CACHE_KEYS["RECENT_UPLOADS"]: 1 * 60 * 1000,
    CACHE_KEYS["RECENT_DONATIONS"]: 1 * 60 * 1000,
    CACHE_KEYS["RECENT_CONTACTS"]: 30 * 1000,
}


def clear_dashboard_cache(cache: StaleAwareCache) -> None:
    """Drop the dashboard sections; call after creating/updating/deleting data."""
    for key in CACHE_KEYS.values():
        cache.delete(key)


def clear_all_cache(cache: StaleAwareCache) -> None:
    cache.clear()
