"""Business logic powering the favorites endpoints.

Responsibilities handled by collaborators:

* :class:`~movie_api.services.favorites.FavoritesStore` – the authoritative
  list, uniqueness check and flush-to-disk under a single writer lock.
* :func:`~movie_api.services.favorites.paginate` – slicing and page totals for
  the listing endpoint.

:class:`FavoritesService` validates raw inputs, delegates to the store and
shapes the ``{data: ...}`` envelopes returned by the API.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from fastapi import Depends, Request
from pydantic import ValidationError

from movie_api.errors import InvalidInputError
from movie_api.schemas.movies import (
    FavoritesPageData,
    FavoritesResponse,
    MessageResponse,
    Movie,
)
from movie_api.services.favorites import DEFAULT_PAGE_SIZE, FavoritesStore, paginate
from movie_api.utils.validation import (
    require,
    validate_movie_id,
    validate_page_size,
    validate_positive_int,
)

logger = logging.getLogger(__name__)

ADDED_MESSAGE = "Movie added to favorites"
REMOVED_MESSAGE = "Movie removed from favorites"


class FavoritesService:
    """Coordinates validation, persistence and pagination for favorites."""

    def __init__(self, store: FavoritesStore) -> None:
        self._store = store

    def is_favorite(self, imdb_id: str) -> bool:
        return self._store.contains(imdb_id)

    async def add_favorite(self, movie: Movie | Mapping[str, Any] | None) -> MessageResponse:
        if movie is None:
            raise InvalidInputError("Invalid movie data")
        if not isinstance(movie, Movie):
            try:
                movie = Movie.model_validate(movie)
            except ValidationError as exc:
                raise InvalidInputError("Invalid movie data", detail=str(exc)) from exc

        await self._store.add(movie)
        logger.info("Added %s (%s) to favorites", movie.imdb_id, movie.title)
        return MessageResponse.of(ADDED_MESSAGE)

    async def remove_favorite(self, imdb_id: Any) -> MessageResponse:
        movie_id = require(validate_movie_id(imdb_id))
        removed = await self._store.remove(movie_id)
        logger.info("Removed %s (%s) from favorites", removed.imdb_id, removed.title)
        return MessageResponse.of(REMOVED_MESSAGE)

    async def list_favorites(
        self, *, page: Any = 1, page_size: Any = DEFAULT_PAGE_SIZE
    ) -> FavoritesResponse:
        page_number = require(validate_positive_int(page))
        size = require(validate_page_size(page_size))

        result = paginate(self._store.snapshot(), page=page_number, page_size=size)
        return FavoritesResponse(
            data=FavoritesPageData(
                favorites=result.items,
                count=len(result.items),
                total_results=str(result.total),
                current_page=result.page,
                total_pages=result.total_pages,
            )
        )


def get_favorites_store(request: Request) -> FavoritesStore:
    """Return the store created by the application lifespan."""

    return request.app.state.favorites_store


def get_favorites_service(
    store: FavoritesStore = Depends(get_favorites_store),
) -> FavoritesService:
    """FastAPI dependency that wires the service to the shared store."""

    return FavoritesService(store)


__all__ = [
    "ADDED_MESSAGE",
    "FavoritesService",
    "REMOVED_MESSAGE",
    "get_favorites_service",
    "get_favorites_store",
]
