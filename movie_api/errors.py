"""Domain exceptions raised by the service layer.

Each exception carries the HTTP status and :class:`ErrorType` it maps to so the
single handler registered in :mod:`movie_api.main` can turn any of them into a
structured error payload without a per-route ``try``/``except`` ladder.
"""

from __future__ import annotations

from fastapi import status

from movie_api.schemas.error import ErrorType


class MovieApiError(Exception):
    """Base class for errors that translate directly into an HTTP response."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    error_type: ErrorType = ErrorType.VALIDATION_ERROR
    retry_after: int | None = None

    def __init__(self, message: str, *, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail or message


class InvalidInputError(MovieApiError):
    """Raised when a request parameter fails validation."""


class DuplicateFavoriteError(MovieApiError):
    """Raised when an identifier already present in favorites is resubmitted."""

    error_type = ErrorType.CONFLICT

    def __init__(self, imdb_id: str) -> None:
        super().__init__(
            "Movie already in favorites",
            detail=f"A favorite with imdbID '{imdb_id}' already exists.",
        )
        self.imdb_id = imdb_id


class FavoriteNotFoundError(MovieApiError):
    """Raised when removing an identifier that is not in favorites."""

    status_code = status.HTTP_404_NOT_FOUND
    error_type = ErrorType.NOT_FOUND

    def __init__(self, imdb_id: str) -> None:
        super().__init__(
            "Movie not found in favorites",
            detail=f"No favorite with imdbID '{imdb_id}' exists.",
        )
        self.imdb_id = imdb_id


class ProviderUnavailableError(MovieApiError):
    """Raised when the movie-database provider cannot be reached."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error_type = ErrorType.UPSTREAM_ERROR
    retry_after = 5

    def __init__(self, detail: str | None = None) -> None:
        super().__init__("Failed to fetch movies from OMDb API", detail=detail)


__all__ = [
    "DuplicateFavoriteError",
    "FavoriteNotFoundError",
    "InvalidInputError",
    "MovieApiError",
    "ProviderUnavailableError",
]
