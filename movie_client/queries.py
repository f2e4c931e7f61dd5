"""Cached reads and invalidating mutations over :class:`MovieApiClient`."""

from __future__ import annotations

import logging
from collections.abc import Callable

from movie_client.api import MovieApiClient
from movie_client.errors import ApiError, describe_error
from movie_client.models import FavoritesResponse, Movie, SearchMoviesResponse
from movie_client.query_cache import QueryCache, QueryKey
from movie_client.result import Failure, Result

logger = logging.getLogger(__name__)

SEARCH_STALE_SECONDS = 60.0
FAVORITES_STALE_SECONDS = 30.0

FAVORITES_KEY: QueryKey = ("movies", "favorites")
SEARCH_KEY: QueryKey = ("movies", "search")


def search_key(query: str, page: int) -> QueryKey:
    return (*SEARCH_KEY, query, page)


def favorites_key(page: int) -> QueryKey:
    return (*FAVORITES_KEY, page)


class MovieQueries:
    """Application-facing facade used by the CLI and the favorite toggler.

    Reads go through the :class:`QueryCache` (and its retry policy).
    Mutations are sent once and, on success, mark the favorites and search
    queries stale so the next read reflects the new ``isFavorite`` flags.
    """

    def __init__(
        self,
        api: MovieApiClient,
        *,
        cache: QueryCache | None = None,
        on_error: Callable[[str], None] | None = None,
    ) -> None:
        self.api = api
        self.cache = cache or QueryCache()
        self._on_error = on_error

    async def search(self, query: str, page: int = 1) -> Result[SearchMoviesResponse]:
        query = query.strip() if isinstance(query, str) else query
        if not query:
            # Disabled query: nothing to fetch until there is something to search for.
            return await self.api.search_movies(query, page)
        return await self.cache.fetch(
            search_key(query, page),
            lambda: self.api.search_movies(query, page),
            stale_time=SEARCH_STALE_SECONDS,
        )

    async def favorites(self, page: int = 1) -> Result[FavoritesResponse]:
        return await self.cache.fetch(
            favorites_key(page),
            lambda: self.api.get_favorites(page),
            stale_time=FAVORITES_STALE_SECONDS,
        )

    async def add_favorite(self, movie: Movie) -> Result[None]:
        result = await self.api.add_to_favorites(movie)
        return self._after_mutation(result)

    async def remove_favorite(self, imdb_id: str) -> Result[None]:
        result = await self.api.remove_from_favorites(imdb_id)
        return self._after_mutation(result)

    def report(self, error: ApiError) -> str:
        message = describe_error(error)
        logger.info("Movie API request failed: %s", error.message)
        if self._on_error is not None:
            self._on_error(message)
        return message

    def _after_mutation(self, result: Result[None]) -> Result[None]:
        if isinstance(result, Failure):
            self.report(result.error)
            return result
        self.cache.invalidate(FAVORITES_KEY)
        self.cache.invalidate(SEARCH_KEY)
        return result


__all__ = [
    "FAVORITES_STALE_SECONDS",
    "MovieQueries",
    "SEARCH_STALE_SECONDS",
    "favorites_key",
    "search_key",
]
