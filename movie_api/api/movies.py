"""FastAPI router exposing movie search and favorites management."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query

from movie_api.schemas.movies import (
    FavoritesResponse,
    MessageResponse,
    SearchMoviesResponse,
)
from movie_api.services.favorites import DEFAULT_PAGE_SIZE
from movie_api.services.favorites_service import FavoritesService, get_favorites_service
from movie_api.services.search_service import SearchService, get_search_service

router = APIRouter()


@router.get("/search", response_model=SearchMoviesResponse)
async def search_movies(
    q: str = Query("", description="Free-text movie title to search for."),
    page: int = Query(1, description="1-based provider result page."),
    service: SearchService = Depends(get_search_service),
) -> SearchMoviesResponse:
    """Search the provider by title, flagging movies already in favorites.

    Examples:
        /movies/search?q=batman
        /movies/search?q=star%20wars&page=2
    """

    return await service.search_movies(q, page)


@router.post("/favorites", response_model=MessageResponse)
async def add_to_favorites(
    payload: Any = Body(
        None,
        description="Movie record: title, imdbID, year and poster.",
        examples=[{"title": "The Matrix", "imdbID": "tt0133093", "year": 1999, "poster": ""}],
    ),
    service: FavoritesService = Depends(get_favorites_service),
) -> MessageResponse:
    """Store a movie in favorites; resubmitting an imdbID is rejected.

    The body is validated by the service so every malformed record is
    reported as "Invalid movie data".
    """

    return await service.add_favorite(payload)


@router.delete("/favorites/{imdb_id}", response_model=MessageResponse)
async def remove_from_favorites(
    imdb_id: str,
    service: FavoritesService = Depends(get_favorites_service),
) -> MessageResponse:
    """Remove a favorite by imdbID."""

    return await service.remove_favorite(imdb_id)


@router.get("/favorites/list", response_model=FavoritesResponse)
async def list_favorites(
    page: int = Query(1, description="1-based page of favorites."),
    page_size: int = Query(
        DEFAULT_PAGE_SIZE,
        alias="pageSize",
        description="Number of favorites per page (1-100).",
    ),
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoritesResponse:
    """Return one page of favorites with pagination totals."""

    return await service.list_favorites(page=page, page_size=page_size)
