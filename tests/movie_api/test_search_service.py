"""Unit tests for search orchestration: year parsing, favorite flags and caching."""

from __future__ import annotations

from typing import Any

import pytest

from movie_api.cache import CacheClient
from movie_api.errors import InvalidInputError
from movie_api.schemas.movies import Movie
from movie_api.services.favorites import JsonFavoritesStore
from movie_api.services.omdb_client import OmdbClient
from movie_api.services.search_service import SearchService, parse_year
from tests.movie_api.conftest import FakeOmdb, omdb_movie, omdb_search_payload


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("1999", 1999),
        ("2008–2012", 2008),
        ("2019–", 2019),
        ("N/A", 0),
        ("", 0),
        (None, 0),
        ("99", 0),
        ("c. 1920", 0),
    ],
)
def test_parse_year(raw: str | None, expected: int) -> None:
    assert parse_year(raw) == expected


class MemoryCache(CacheClient):
    """Cache double that keeps JSON payloads in a dict."""

    def __init__(self) -> None:
        super().__init__(None)
        self.entries: dict[str, Any] = {}
        self.ttls: dict[str, int | None] = {}

    async def get_json(self, key: str) -> Any:
        return self.entries.get(key)

    async def set_json(self, key: str, value: Any, ttl: int | None = None) -> None:
        self.entries[key] = value
        self.ttls[key] = ttl


@pytest.mark.asyncio
async def test_results_are_flagged_from_current_favorites(
    store: JsonFavoritesStore, omdb_client: OmdbClient, fake_omdb: FakeOmdb, matrix: Movie
) -> None:
    await store.add(matrix)
    fake_omdb.respond_with(
        omdb_search_payload(omdb_movie("tt0133093", "The Matrix"), omdb_movie("tt2", "Other"))
    )
    service = SearchService(omdb_client, store)

    response = await service.search_movies("  matrix  ")

    flags = {movie.imdb_id: movie.is_favorite for movie in response.data.movies}
    assert flags == {"tt0133093": True, "tt2": False}
    assert response.data.count == 2
    assert fake_omdb.requests[0].url.params["s"] == "matrix"


@pytest.mark.asyncio
async def test_no_results_yields_empty_page(
    store: JsonFavoritesStore, omdb_client: OmdbClient, fake_omdb: FakeOmdb
) -> None:
    fake_omdb.respond_with({"Response": "False", "Error": "Movie not found!"})

    response = await SearchService(omdb_client, store).search_movies("zzzz")

    assert response.data.movies == []
    assert response.data.count == 0
    assert response.data.total_results == "0"


@pytest.mark.asyncio
@pytest.mark.parametrize(("title", "page"), [("", 1), ("   ", 1), ("matrix", 0), ("matrix", -3)])
async def test_invalid_input_never_reaches_provider(
    store: JsonFavoritesStore,
    omdb_client: OmdbClient,
    fake_omdb: FakeOmdb,
    title: str,
    page: int,
) -> None:
    with pytest.raises(InvalidInputError):
        await SearchService(omdb_client, store).search_movies(title, page)

    assert fake_omdb.requests == []


@pytest.mark.asyncio
async def test_cached_page_is_reused_but_flags_are_recomputed(
    store: JsonFavoritesStore, omdb_client: OmdbClient, fake_omdb: FakeOmdb, matrix: Movie
) -> None:
    fake_omdb.respond_with(omdb_search_payload(omdb_movie("tt0133093", "The Matrix")))
    cache = MemoryCache()
    service = SearchService(omdb_client, store, cache=cache, cache_ttl=300)

    first = await service.search_movies("Matrix")
    await store.add(matrix)
    second = await service.search_movies("matrix")

    assert len(fake_omdb.requests) == 1
    assert first.data.movies[0].is_favorite is False
    assert second.data.movies[0].is_favorite is True
    assert list(cache.ttls.values()) == [300]


@pytest.mark.asyncio
async def test_zero_ttl_bypasses_the_cache(
    store: JsonFavoritesStore, omdb_client: OmdbClient, fake_omdb: FakeOmdb
) -> None:
    cache = MemoryCache()
    service = SearchService(omdb_client, store, cache=cache, cache_ttl=0)

    await service.search_movies("matrix")
    await service.search_movies("matrix")

    assert len(fake_omdb.requests) == 2
    assert cache.entries == {}
