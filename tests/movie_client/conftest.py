"""Fixtures for the client data layer: a scripted movies API behind MockTransport."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx
import pytest
import pytest_asyncio

from movie_client.api import MovieApiClient

API_URL = "http://api.test/movies"


class ScriptedApi:
    """Answers requests from a queue of responses and records what was sent.

    When the queue is empty every request gets a 200 with ``default_payload``.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.queue: list[httpx.Response | Callable[[httpx.Request], httpx.Response]] = []
        self.default_payload: Any = {"data": {"message": "ok"}}

    def push(self, status_code: int = 200, payload: Any = None) -> None:
        self.queue.append(httpx.Response(status_code, json=payload))

    def push_error(self, exc_type: type[httpx.TransportError] = httpx.ConnectError) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc_type("unreachable", request=request)

        self.queue.append(_raise)

    def bodies(self) -> list[Any]:
        return [json.loads(request.content) if request.content else None for request in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.queue:
            return httpx.Response(200, json=self.default_payload)
        item = self.queue.pop(0)
        return item(request) if callable(item) else item


def search_payload(*movies: dict[str, Any], total: str = "1") -> dict[str, Any]:
    return {"data": {"movies": list(movies), "count": len(movies), "totalResults": total}}


def search_movie(imdb_id: str, title: str = "The Matrix", *, favorite: bool = False) -> dict[str, Any]:
    return {"title": title, "imdbID": imdb_id, "year": 1999, "poster": "", "isFavorite": favorite}


def favorites_payload(*movies: dict[str, Any], page: int = 1, total_pages: int = 1) -> dict[str, Any]:
    return {
        "data": {
            "favorites": list(movies),
            "count": len(movies),
            "totalResults": str(len(movies)),
            "currentPage": page,
            "totalPages": total_pages,
        }
    }


def error_payload(message: str, status_code: int) -> dict[str, Any]:
    return {"error_type": "validation_error", "message": message, "status_code": status_code}


@pytest.fixture
def scripted_api() -> ScriptedApi:
    return ScriptedApi()


@pytest_asyncio.fixture
async def api(scripted_api: ScriptedApi) -> AsyncIterator[MovieApiClient]:
    async with httpx.AsyncClient(transport=httpx.MockTransport(scripted_api)) as http_client:
        yield MovieApiClient(API_URL, http_client=http_client)
