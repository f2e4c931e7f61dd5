"""Typed REST client for the movie search API.

Every method returns :class:`~movie_client.result.Success` or
:class:`~movie_client.result.Failure` instead of raising, so callers (the
query layer, the CLI) branch on the result rather than on exception types.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from movie_client.errors import NETWORK_ERROR_MESSAGE, ApiError
from movie_client.models import FavoritesResponse, Movie, SearchMoviesResponse
from movie_client.result import Failure, Result, Success
from movie_client.settings import get_client_settings

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _error_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


class MovieApiClient:
    """Async client for the ``/movies`` router.

    Pass an ``http_client`` to share a connection pool (or a mock transport in
    tests); otherwise the client owns one and closes it in :meth:`aclose`.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        settings = get_client_settings()
        self._base_url = (base_url or settings.api_url).rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=timeout or settings.timeout_seconds
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> "MovieApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def search_movies(self, query: str, page: int = 1) -> Result[SearchMoviesResponse]:
        if not isinstance(query, str) or not query.strip():
            return Failure(ApiError("Search query is required"))
        if not _is_positive_int(page):
            return Failure(ApiError("Page must be a positive integer"))

        return await self._request(
            "GET",
            "/search",
            params={"q": query.strip(), "page": page},
            model=SearchMoviesResponse,
            fallback_message="Failed to search movies",
            unexpected_message="Unable to search for movies. Please try again later.",
        )

    async def get_favorites(self, page: int = 1) -> Result[FavoritesResponse]:
        if not _is_positive_int(page):
            return Failure(ApiError("Page must be a positive integer"))

        result = await self._request(
            "GET",
            "/favorites/list",
            params={"page": page},
            model=FavoritesResponse,
            fallback_message="Failed to get favorites",
            unexpected_message="Unable to load favorites. Please try again later.",
        )
        if isinstance(result, Failure) and result.error.status == 404:
            return Success(FavoritesResponse.empty(page))
        return result

    async def add_to_favorites(self, movie: Movie) -> Result[None]:
        if movie is None or not movie.imdb_id:
            return Failure(ApiError("Invalid movie data"))

        return await self._request(
            "POST",
            "/favorites",
            json=movie.to_payload(),
            fallback_message="Failed to add movie to favorites",
            unexpected_message="Unable to add movie to favorites. Please try again.",
        )

    async def remove_from_favorites(self, imdb_id: str) -> Result[None]:
        if not isinstance(imdb_id, str) or not imdb_id.strip():
            return Failure(ApiError("Movie ID is required"))

        return await self._request(
            "DELETE",
            f"/favorites/{quote(imdb_id, safe='')}",
            fallback_message="Failed to remove movie from favorites",
            unexpected_message="Unable to remove movie from favorites. Please try again.",
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        fallback_message: str,
        unexpected_message: str,
        model: type[ModelT] | None = None,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Result[Any]:
        url = f"{self._base_url}{path}"
        try:
            response = await self._http.request(method, url, params=params, json=json)
        except httpx.TransportError as exc:
            logger.debug("%s %s failed: %s", method, url, exc)
            return Failure(ApiError(NETWORK_ERROR_MESSAGE, 0))

        if response.is_error:
            body = _error_body(response)
            return Failure(
                ApiError(
                    str(body.get("message") or fallback_message),
                    response.status_code,
                    body,
                )
            )

        if model is None:
            return Success(None)

        try:
            return Success(model.model_validate(response.json()))
        except (ValueError, ValidationError) as exc:
            logger.warning("Unexpected payload from %s %s: %s", method, url, exc)
            return Failure(ApiError(unexpected_message, response.status_code))


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


__all__ = ["MovieApiClient"]
