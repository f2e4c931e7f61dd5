"""Shared fixtures for the movie API: a temp favorites file and a fake OMDb."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator, Callable, Iterator
from pathlib import Path
from typing import Any

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from movie_api import cache
from movie_api.main import app
from movie_api.schemas.movies import Movie
from movie_api.services.favorites import JsonFavoritesStore
from movie_api.services.favorites_service import get_favorites_store
from movie_api.services.omdb_client import OmdbClient
from movie_api.services.search_service import get_omdb_client

OMDB_URL = "http://omdb.test/"


def omdb_search_payload(*movies: dict[str, str], total: str | None = None) -> dict[str, Any]:
    """Build a successful OMDb ``?s=`` response body."""

    return {
        "Search": list(movies),
        "totalResults": total if total is not None else str(len(movies)),
        "Response": "True",
    }


def omdb_movie(imdb_id: str, title: str, year: str = "1999") -> dict[str, str]:
    return {
        "Title": title,
        "Year": year,
        "imdbID": imdb_id,
        "Type": "movie",
        "Poster": f"https://img.test/{imdb_id}.jpg",
    }


class FakeOmdb:
    """Records OMDb requests and answers them with a configurable handler."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = lambda _: httpx.Response(
            200, json=omdb_search_payload()
        )

    def respond_with(self, payload: Any, status_code: int = 200) -> None:
        self.handler = lambda _: httpx.Response(status_code, json=payload)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture(autouse=True)
def _clear_local_cache() -> Iterator[None]:
    cache._local_cache.clear()
    yield
    cache._local_cache.clear()


@pytest.fixture
def favorites_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "favorites.json"


@pytest.fixture
def write_favorites(favorites_path: Path) -> Callable[[Any], None]:
    def _write(records: Any) -> None:
        favorites_path.parent.mkdir(parents=True, exist_ok=True)
        favorites_path.write_text(json.dumps(records), encoding="utf-8")

    return _write


@pytest_asyncio.fixture
async def store(favorites_path: Path) -> JsonFavoritesStore:
    favorites = JsonFavoritesStore(favorites_path)
    await favorites.load()
    return favorites


@pytest.fixture
def matrix() -> Movie:
    return Movie(title="The Matrix", imdb_id="tt0133093", year=1999, poster="https://img.test/m.jpg")


@pytest.fixture
def fake_omdb() -> FakeOmdb:
    return FakeOmdb()


@pytest_asyncio.fixture
async def omdb_client(fake_omdb: FakeOmdb) -> AsyncIterator[OmdbClient]:
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_omdb)) as http_client:
        yield OmdbClient(api_key="test-key", http_client=http_client, base_url=OMDB_URL)


@pytest_asyncio.fixture
async def api_client(
    store: JsonFavoritesStore, omdb_client: OmdbClient
) -> AsyncIterator[AsyncClient]:
    """HTTP client bound to the app with the store and provider swapped for test doubles."""

    app.dependency_overrides[get_favorites_store] = lambda: store
    app.dependency_overrides[get_omdb_client] = lambda: omdb_client
    app.dependency_overrides[cache.get_cache_client] = lambda: cache.CacheClient(None)
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://testserver"
        ) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
