"""Coordinates dashboard fetches through the stale-aware cache.

Flow per load:
  1. Unless forced, try every section from cache (`get`). All hits -> done.
  2. Fetch concurrently every section that is forced or was a miss.
  3. `set` each successful result with its section's stale window.

A failing section is logged and reported in `errors`; the others still load.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable

from services.cache import STALE_TIMES, StaleAwareCache

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Awaitable[Any]]


class DashboardLoader:
    def __init__(
        self,
        cache: StaleAwareCache,
        fetchers: dict[str, Fetcher],
        stale_times: dict[str, int] | None = None,
    ):
        self.cache = cache
        self.fetchers = fetchers
        self.stale_times = stale_times if stale_times is not None else STALE_TIMES

    async def load(self, force_refresh: bool = False) -> dict:
        if force_refresh:
            sections: dict[str, Any] = {key: None for key in self.fetchers}
        else:
            sections = {key: self.cache.get(key) for key in self.fetchers}
            if all(value is not None for value in sections.values()):
                return {"sections": sections, "fetched": [], "errors": []}

        to_fetch = [key for key, value in sections.items() if value is None]
        results = await asyncio.gather(
            *[self.fetchers[key]() for key in to_fetch], return_exceptions=True
        )

        errors = []
        for key, result in zip(to_fetch, results):
            if isinstance(result, Exception):
                logger.warning("Dashboard section %s failed: %s", key, result)
                errors.append(key)
                continue
            self.cache.set(key, result, self.stale_times.get(key))
            sections[key] = result

        logger.info("Dashboard fetched %s (errors: %s)", ", ".join(to_fetch), errors or "none")
        return {"sections": sections, "fetched": to_fetch, "errors": errors}


def freshness_report(cache: StaleAwareCache, stale_times: dict[str, int]) -> dict[str, dict]:
    """Age and staleness per key. Inspection only, nothing is evicted."""
    report = {}
    for key, window in stale_times.items():
        age = cache.get_age(key)
        report[key] = {
            "age_ms": round(age) if age is not None else None,
            "stale": cache.is_stale(key),
            "stale_after_ms": window,
        }
    return report
