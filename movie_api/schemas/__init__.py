"""Pydantic schemas for API requests and responses."""

from movie_api.schemas.error import (  # noqa: F401
    ErrorResponse,
    ErrorType,
    ValidationErrorDetail,
    ValidationErrorResponse,
)
from movie_api.schemas.movies import (  # noqa: F401
    FavoritesPageData,
    FavoritesResponse,
    MessageResponse,
    Movie,
    SearchMoviesData,
    SearchMoviesResponse,
    SearchResultItem,
)
