"""In-memory query cache with stale times, request sharing and retries.

Keys are tuples such as ``("movies", "search", "matrix", 1)``. Invalidation
works on key prefixes so a mutation can mark a whole family of queries stale
with ``cache.invalidate(("movies", "favorites"))``.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass
from typing import Any

from movie_client.errors import ApiError
from movie_client.result import Failure, Result, Success
from movie_client.retry import retry_delay_seconds, should_retry

logger = logging.getLogger(__name__)

QueryKey = tuple[Hashable, ...]
Fetcher = Callable[[], Awaitable[Result[Any]]]


@dataclass
class _Entry:
    value: Any
    updated_at: float
    invalidated: bool = False


class QueryCache:
    def __init__(
        self,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        retry: Callable[[int, ApiError], bool] = should_retry,
        retry_delay: Callable[[int], float] = retry_delay_seconds,
    ) -> None:
        self._clock = clock
        self._sleep = sleep
        self._retry = retry
        self._retry_delay = retry_delay
        self._entries: dict[QueryKey, _Entry] = {}
        self._inflight: dict[QueryKey, asyncio.Task[Result[Any]]] = {}

    def get(self, key: QueryKey) -> Any | None:
        entry = self._entries.get(key)
        return entry.value if entry is not None else None

    def set(self, key: QueryKey, value: Any) -> None:
        self._entries[key] = _Entry(value=value, updated_at=self._clock())

    def is_fresh(self, key: QueryKey, stale_time: float) -> bool:
        entry = self._entries.get(key)
        if entry is None or entry.invalidated:
            return False
        return self._clock() - entry.updated_at < stale_time

    def invalidate(self, prefix: QueryKey = ()) -> int:
        """Mark every entry whose key starts with ``prefix`` as stale."""

        count = 0
        for key, entry in self._entries.items():
            if key[: len(prefix)] == prefix:
                entry.invalidated = True
                count += 1
        if count:
            logger.debug("Invalidated %d queries under %r", count, prefix)
        return count

    def clear(self) -> None:
        self._entries.clear()

    async def fetch(
        self,
        key: QueryKey,
        fetcher: Fetcher,
        *,
        stale_time: float,
        retry: bool = True,
    ) -> Result[Any]:
        if self.is_fresh(key, stale_time):
            return Success(self._entries[key].value)

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._run(key, fetcher, retry=retry))
            self._inflight[key] = task
            task.add_done_callback(lambda _: self._inflight.pop(key, None))
        return await asyncio.shield(task)

    async def _run(self, key: QueryKey, fetcher: Fetcher, *, retry: bool) -> Result[Any]:
        failure_count = 0
        while True:
            result = await fetcher()
            if not isinstance(result, Failure):
                self.set(key, result.value)
                return result

            if not retry or not self._retry(failure_count, result.error):
                return result

            delay = self._retry_delay(failure_count)
            logger.debug(
                "Query %r failed (%s); retrying in %.1fs", key, result.error.message, delay
            )
            await self._sleep(delay)
            failure_count += 1


__all__ = ["QueryCache", "QueryKey"]
