"""Startup warmup so the first request does not pay for cold resources.

The favorites file is read into memory and the Redis connection (when one is
configured) is established before the API begins serving traffic.
"""

from __future__ import annotations

import logging
import time

from movie_api.services.favorites import FavoritesStore

logger = logging.getLogger(__name__)


async def warmup_favorites(store: FavoritesStore) -> None:
    """Load the favorites list; failures here abort startup."""

    start = time.time()
    await store.load()
    elapsed = (time.time() - start) * 1000
    logger.info(
        "✓ Favorites store loaded with %s entries (%.0fms)",
        len(store.snapshot()),
        elapsed,
    )


async def warmup_redis() -> None:
    """Establish the Redis connection, degrading gracefully when unavailable."""

    from movie_api.cache import get_redis

    try:
        start = time.time()
        redis = await get_redis()

        if redis is None:
            logger.info("⚠ Redis warmup skipped (not configured or unavailable)")
            return

        elapsed = (time.time() - start) * 1000
        logger.info("✓ Redis connection warmed up (%.0fms)", elapsed)
    except Exception as e:
        logger.warning("Redis warmup failed: %s", e)


async def warmup_all(store: FavoritesStore) -> None:
    """Run every warmup step in sequence and log the total time."""

    logger.info("=" * 60)
    logger.info("Warming up backend resources...")
    logger.info("=" * 60)

    start = time.time()

    await warmup_favorites(store)
    await warmup_redis()

    total_elapsed = (time.time() - start) * 1000
    logger.info("=" * 60)
    logger.info("✓ Backend warmup complete (%.0fms)", total_elapsed)
    logger.info("=" * 60)
