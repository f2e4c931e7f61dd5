"""Pydantic schemas that power the movie search and favorites API surface.

Field names are snake_case in Python and camelCase on the wire (``imdbID``,
``isFavorite``, ``totalResults``...). FastAPI serialises response models by
alias, and the favorites store dumps records by alias as well, so the JSON
file and the HTTP payloads share a single shape.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Movie(BaseModel):
    """A favorite movie record, persisted verbatim in the favorites file."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    title: str = Field(..., min_length=1, description="Display title of the movie")
    imdb_id: str = Field(
        ...,
        alias="imdbID",
        min_length=1,
        description="External identifier; primary key within the favorites list",
    )
    year: int = Field(..., ge=0, strict=True, description="Release year, 0 when unknown")
    poster: str = Field(..., description="Poster URL or an empty string")

    @field_validator("title", "imdb_id")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Value must not be blank once whitespace is removed")
        return cleaned


class SearchResultItem(BaseModel):
    """A provider search hit enriched with the caller's favorite state."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    imdb_id: str = Field(..., alias="imdbID")
    year: int = Field(..., ge=0)
    poster: str = ""
    is_favorite: bool = Field(False, alias="isFavorite")


class SearchMoviesData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    movies: list[SearchResultItem] = Field(default_factory=list)
    count: int = Field(..., ge=0, description="Number of movies in this page")
    total_results: str = Field(
        "0",
        alias="totalResults",
        description="Provider-reported total, kept as a decimal string",
    )


class SearchMoviesResponse(BaseModel):
    data: SearchMoviesData


class FavoritesPageData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    favorites: list[Movie] = Field(default_factory=list)
    count: int = Field(..., ge=0)
    total_results: str = Field("0", alias="totalResults")
    current_page: int = Field(..., ge=1, alias="currentPage")
    total_pages: int = Field(..., ge=0, alias="totalPages")


class FavoritesResponse(BaseModel):
    data: FavoritesPageData


class MessageData(BaseModel):
    message: str


class MessageResponse(BaseModel):
    data: MessageData

    @classmethod
    def of(cls, message: str) -> "MessageResponse":
        return cls(data=MessageData(message=message))


__all__ = [
    "FavoritesPageData",
    "FavoritesResponse",
    "MessageData",
    "MessageResponse",
    "Movie",
    "SearchMoviesData",
    "SearchMoviesResponse",
    "SearchResultItem",
]
