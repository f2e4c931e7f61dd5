from __future__ import annotations

import pytest

from movie_client.api import MovieApiClient
from movie_client.models import Movie
from movie_client.queries import MovieQueries, favorites_key, search_key
from movie_client.query_cache import QueryCache
from movie_client.result import Failure, Success
from tests.movie_client.conftest import (
    ScriptedApi,
    error_payload,
    favorites_payload,
    search_movie,
    search_payload,
)


async def _no_sleep(_: float) -> None:
    return None


@pytest.fixture
def messages() -> list[str]:
    return []


@pytest.fixture
def queries(api: MovieApiClient, messages: list[str]) -> MovieQueries:
    return MovieQueries(api, cache=QueryCache(sleep=_no_sleep), on_error=messages.append)


@pytest.mark.asyncio
async def test_search_is_cached_per_query_and_page(
    queries: MovieQueries, scripted_api: ScriptedApi
) -> None:
    scripted_api.push(payload=search_payload(search_movie("tt1")))
    scripted_api.push(payload=search_payload(search_movie("tt2")))

    await queries.search("matrix", 1)
    await queries.search("matrix", 1)
    await queries.search("matrix", 2)

    assert len(scripted_api.requests) == 2
    assert queries.cache.get(search_key("matrix", 2)) is not None


@pytest.mark.asyncio
async def test_blank_search_is_not_cached_or_sent(
    queries: MovieQueries, scripted_api: ScriptedApi
) -> None:
    result = await queries.search("   ")

    assert isinstance(result, Failure)
    assert scripted_api.requests == []


@pytest.mark.asyncio
async def test_successful_mutation_invalidates_favorites_and_search(
    queries: MovieQueries, scripted_api: ScriptedApi
) -> None:
    scripted_api.push(payload=favorites_payload())
    scripted_api.push(payload=search_payload(search_movie("tt1")))
    await queries.favorites(1)
    await queries.search("matrix")

    result = await queries.add_favorite(Movie(title="The Matrix", imdb_id="tt1", year=1999))

    assert isinstance(result, Success)
    assert not queries.cache.is_fresh(favorites_key(1), 30)
    assert not queries.cache.is_fresh(search_key("matrix", 1), 60)


@pytest.mark.asyncio
async def test_failed_mutation_reports_and_keeps_cache(
    queries: MovieQueries, scripted_api: ScriptedApi, messages: list[str]
) -> None:
    scripted_api.push(payload=favorites_payload())
    await queries.favorites(1)
    scripted_api.push(400, error_payload("Movie already in favorites", 400))

    result = await queries.add_favorite(Movie(title="The Matrix", imdb_id="tt1"))

    assert isinstance(result, Failure)
    assert messages == ["This movie is already in your favorites."]
    assert queries.cache.is_fresh(favorites_key(1), 30)


@pytest.mark.asyncio
async def test_mutations_are_never_retried(
    queries: MovieQueries, scripted_api: ScriptedApi, messages: list[str]
) -> None:
    scripted_api.push(500, error_payload("Internal server error", 500))

    await queries.remove_favorite("tt1")

    assert len(scripted_api.requests) == 1
    assert messages == ["Server error. Please try again later."]


@pytest.mark.asyncio
async def test_reads_are_retried(queries: MovieQueries, scripted_api: ScriptedApi) -> None:
    scripted_api.push_error()
    scripted_api.push(payload=favorites_payload())

    result = await queries.favorites(1)

    assert isinstance(result, Success)
    assert len(scripted_api.requests) == 2
