"""Expiring cache with read-time freshness checks over a pluggable store."""
import asyncio
import json
import math
import time
from typing import Any, Awaitable, Callable, Dict, Optional

from rate_weather.storage import KeyValueStore
from rate_weather.utils.errors import CacheError
from rate_weather.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_FRESHNESS_SECONDS = 600.0


class ExpiringCache:
    """Serve stored payloads while they are fresh; evict them on the first stale read.

    The cache is advisory: storage failures and corrupt entries read as a
    miss and failed writes are dropped, so a broken store never blocks a
    fetch.
    """

    def __init__(
        self,
        store: KeyValueStore,
        freshness_seconds: float = DEFAULT_FRESHNESS_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.freshness_seconds = freshness_seconds
        self._clock = clock
        self._inflight: Dict[str, "asyncio.Future[Any]"] = {}

    def get(self, key: str) -> Optional[Any]:
        """Return the fresh payload for key, or None."""
        try:
            raw = self.store.get(key)
        except CacheError as e:
            logger.warning(f"Cache read failed for {key}: {e}")
            return None
        if raw is None:
            return None

        entry = self._decode(raw)
        if entry is None:
            logger.warning(f"Discarding corrupt cache entry for {key}")
            self.evict(key)
            return None

        payload, timestamp = entry
        if self._clock() - timestamp < self.freshness_seconds:
            return payload

        logger.debug(f"Cache entry for {key} expired")
        self.evict(key)
        return None

    def set(self, key: str, payload: Any) -> None:
        """Store payload under key stamped with the current time."""
        try:
            raw = json.dumps({"payload": payload, "timestamp": self._clock()})
            self.store.set(key, raw)
        except (CacheError, TypeError, ValueError) as e:
            logger.warning(f"Cache write failed for {key}: {e}")

    def evict(self, key: str) -> None:
        try:
            self.store.delete(key)
        except CacheError as e:
            logger.warning(f"Cache eviction failed for {key}: {e}")

    def clear(self) -> None:
        try:
            self.store.clear()
        except CacheError as e:
            logger.warning(f"Cache clear failed: {e}")

    async def fetch_with_cache(
        self, key: str, fetch_fn: Callable[[], Awaitable[Any]]
    ) -> Any:
        """Return the cached payload for key, or fetch, store and return a fresh one.

        Overlapping calls for the same key share one in-flight fetch. Empty
        results are cached like any other. Exceptions raised by
        ``fetch_fn`` propagate to every waiting caller and leave the cache
        untouched.
        """
        cached = self.get(key)
        if cached is not None:
            logger.debug(f"Cache hit for {key}")
            return cached

        task = self._inflight.get(key)
        if task is None or task.done():
            logger.debug(f"Cache miss for {key}")
            task = asyncio.ensure_future(self._fetch_and_store(key, fetch_fn))
            self._inflight[key] = task
            task.add_done_callback(lambda done: self._forget(key, done))
        else:
            logger.debug(f"Joining in-flight fetch for {key}")
        # One caller being cancelled must not cancel the shared fetch
        return await asyncio.shield(task)

    async def _fetch_and_store(
        self, key: str, fetch_fn: Callable[[], Awaitable[Any]]
    ) -> Any:
        result = await fetch_fn()
        self.set(key, result)
        return result

    def _forget(self, key: str, task: "asyncio.Future[Any]") -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]

    @staticmethod
    def _decode(raw: str):
        try:
            entry = json.loads(raw)
        except (TypeError, ValueError):
            return None
        if not isinstance(entry, dict) or "payload" not in entry:
            return None
        timestamp = entry.get("timestamp")
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            return None
        if not math.isfinite(timestamp):
            return None
        return entry["payload"], timestamp


def create_cache(config) -> ExpiringCache:
    """Build the expiring cache described by a loaded ``Config``."""
    from rate_weather.storage import create_store

    return ExpiringCache(
        create_store(config.cache_backend),
        freshness_seconds=config.cache_freshness_seconds,
    )
