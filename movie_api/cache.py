"""Two-tier cache for provider search pages (Redis + in-process fallback)."""

from __future__ import annotations

import asyncio
import json
import logging
import time
from hashlib import sha256
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from movie_api.settings import get_settings

logger = logging.getLogger(__name__)

_DEFAULT_TTL_SECONDS = 300
_LOCAL_CACHE_MAX_ENTRIES = 1024
_SEARCH_PREFIX = "movies:search"

_local_cache: dict[str, tuple[float, Any]] = {}
_local_cache_lock = asyncio.Lock()

_redis_client: Redis | None = None
_client_lock = asyncio.Lock()
_redis_disabled_until: float | None = None


async def local_cache_get(key: str) -> Any | None:
    """Return a value from the in-process fallback cache when it remains valid."""

    async with _local_cache_lock:
        cached_entry = _local_cache.get(key)
        if cached_entry is None:
            return None

        expires_at, value = cached_entry
        if expires_at < time.monotonic():
            _local_cache.pop(key, None)
            return None
        return value


async def local_cache_set(key: str, value: Any, ttl: int | None = None) -> None:
    """Persist ``value`` in the in-process cache while respecting the supplied TTL.

    Expired entries are swept on every write and the oldest entries are dropped
    once ``_LOCAL_CACHE_MAX_ENTRIES`` is reached, so distinct search terms cannot
    grow the cache without bound.
    """

    ttl_seconds = ttl if ttl is not None and ttl > 0 else _DEFAULT_TTL_SECONDS
    async with _local_cache_lock:
        now = time.monotonic()
        for expired_key in [k for k, (expires_at, _) in _local_cache.items() if expires_at < now]:
            del _local_cache[expired_key]

        _local_cache.pop(key, None)
        while len(_local_cache) >= _LOCAL_CACHE_MAX_ENTRIES:
            del _local_cache[next(iter(_local_cache))]
        _local_cache[key] = (now + ttl_seconds, value)


def search_key(query: str, page: int) -> str:
    normalized = f"{query.strip().lower()}|{page}"
    digest = sha256(normalized.encode("utf-8")).hexdigest()
    return f"{_SEARCH_PREFIX}:{digest}"


def _redis_factory(url: str) -> Redis:
    return Redis.from_url(url, decode_responses=True, encoding="utf-8")


def _is_redis_connection_error(exc: BaseException) -> bool:
    return isinstance(exc, (RedisConnectionError, RedisTimeoutError, OSError))


async def get_redis() -> Redis | None:
    """Return the shared Redis client, or ``None`` when Redis is unavailable.

    A failed connection attempt disables Redis for
    ``REDIS_RETRY_BACKOFF_SECONDS``; the next call after the cool-down tries
    again.
    """

    global _redis_client, _redis_disabled_until

    settings = get_settings()
    if not settings.redis_url:
        return None

    async with _client_lock:
        if _redis_client is not None:
            return _redis_client

        now = time.monotonic()
        if _redis_disabled_until is not None and now < _redis_disabled_until:
            logger.debug(
                "Redis disabled for another %.1fs; skipping attempt.",
                _redis_disabled_until - now,
            )
            return None

        client = _redis_factory(settings.redis_url)
        try:
            await client.ping()
        except Exception as exc:
            if not _is_redis_connection_error(exc):
                raise
            backoff = settings.redis_retry_backoff_seconds
            _redis_disabled_until = now + backoff
            logger.warning(
                "Redis connection failed: %s. Retrying after %.0fs; using in-process cache.",
                exc,
                backoff,
            )
            await client.aclose()
            return None

        _redis_client = client
        _redis_disabled_until = None
        logger.info("Redis connection established successfully")
        return _redis_client


class CacheClient:
    """JSON cache facade that writes through Redis and the in-process cache."""

    def __init__(self, redis: Redis | None) -> None:
        self._redis = redis

    async def get_json(self, key: str) -> Any:
        if self._redis is not None:
            try:
                payload = await self._redis.get(key)
            except Exception as exc:
                if not _is_redis_connection_error(exc):
                    raise
                logger.debug("Redis get failed for key %s: %s", key, exc)
            else:
                if payload is not None:
                    try:
                        return json.loads(payload)
                    except json.JSONDecodeError:
                        logger.warning("Discarding undecodable cache entry %s", key)
        return await local_cache_get(key)

    async def set_json(self, key: str, value: Any, ttl: int | None = None) -> None:
        if ttl is None:
            ttl = _DEFAULT_TTL_SECONDS
        if ttl <= 0:
            return
        if self._redis is not None:
            try:
                await self._redis.set(key, json.dumps(value, default=str), ex=ttl)
            except Exception as exc:
                if not _is_redis_connection_error(exc):
                    raise
                logger.debug("Redis set failed for key %s: %s", key, exc)
        await local_cache_set(key, value, ttl=ttl)


async def get_cache_client() -> CacheClient:
    redis = await get_redis()
    return CacheClient(redis)


async def close_redis() -> None:
    """Close the global Redis connection gracefully."""

    global _redis_client, _redis_disabled_until
    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None
    _redis_disabled_until = None


__all__ = [
    "CacheClient",
    "close_redis",
    "get_cache_client",
    "get_redis",
    "local_cache_get",
    "local_cache_set",
    "search_key",
]
