from __future__ import annotations

import logging
import re
from typing import Any

from fastapi import Depends, Request

from movie_api.cache import CacheClient, get_cache_client, search_key
from movie_api.schemas.movies import SearchMoviesData, SearchMoviesResponse, SearchResultItem
from movie_api.services.favorites import FavoritesStore
from movie_api.services.favorites_service import get_favorites_store
from movie_api.services.omdb_client import OmdbClient, ProviderSearchPage
from movie_api.settings import get_settings
from movie_api.utils.validation import require, validate_positive_int, validate_search_title

logger = logging.getLogger(__name__)

_YEAR_PATTERN = re.compile(r"^\d{4}")


def parse_year(raw: str | None) -> int:
    """Return the leading 4-digit year of ``raw`` or ``0`` when there is none.

    OMDb years are free text: ``"1999"``, ``"2008–2012"``, ``"2019–"``,
    ``"N/A"``.
    """

    if not raw:
        return 0
    match = _YEAR_PATTERN.match(raw)
    return int(match.group(0)) if match else 0


class SearchService:
    def __init__(
        self,
        provider: OmdbClient,
        favorites: FavoritesStore,
        *,
        cache: CacheClient | None = None,
        cache_ttl: int = 0,
    ) -> None:
        self._provider = provider
        self._favorites = favorites
        self._cache = cache
        self._cache_ttl = cache_ttl

    async def search_movies(self, title: Any, page: Any = 1) -> SearchMoviesResponse:
        """Search the provider and flag hits that are already favorites."""

        query = require(validate_search_title(title))
        page_number = require(validate_positive_int(page))

        provider_page = await self._fetch_page(query, page_number)

        movies = [
            SearchResultItem(
                title=movie.title,
                imdb_id=movie.imdb_id,
                year=parse_year(movie.year),
                poster=movie.poster,
                is_favorite=self._favorites.contains(movie.imdb_id),
            )
            for movie in provider_page.movies
        ]
        return SearchMoviesResponse(
            data=SearchMoviesData(
                movies=movies,
                count=len(movies),
                total_results=provider_page.total_results,
            )
        )

    async def _fetch_page(self, query: str, page: int) -> ProviderSearchPage:
        if self._cache is None or self._cache_ttl <= 0:
            return await self._provider.search(query, page)

        cache_key = search_key(query, page)
        cached = await self._cache.get_json(cache_key)
        if cached is not None:
            logger.debug("Search cache hit for '%s' page %s", query, page)
            return ProviderSearchPage.from_payload(cached)

        provider_page = await self._provider.search(query, page)
        await self._cache.set_json(cache_key, provider_page.to_payload(), ttl=self._cache_ttl)
        return provider_page


def get_omdb_client(request: Request) -> OmdbClient:
    """Return the provider client created by the application lifespan."""

    return request.app.state.omdb_client


def get_search_service(
    provider: OmdbClient = Depends(get_omdb_client),
    favorites: FavoritesStore = Depends(get_favorites_store),
    cache: CacheClient = Depends(get_cache_client),
) -> SearchService:
    return SearchService(
        provider,
        favorites,
        cache=cache,
        cache_ttl=get_settings().search_cache_ttl_seconds,
    )


__all__ = ["SearchService", "get_omdb_client", "get_search_service", "parse_year"]
