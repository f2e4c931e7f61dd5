"""Typed payloads exchanged with the movie search API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Movie(_ApiModel):
    title: str
    imdb_id: str = Field(..., alias="imdbID")
    year: int = 0
    poster: str = ""

    def to_payload(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)


class SearchMovie(Movie):
    is_favorite: bool = Field(False, alias="isFavorite")


class SearchMoviesData(_ApiModel):
    movies: list[SearchMovie] = Field(default_factory=list)
    count: int = 0
    total_results: str = Field("0", alias="totalResults")


class SearchMoviesResponse(_ApiModel):
    data: SearchMoviesData


class FavoritesData(_ApiModel):
    favorites: list[Movie] = Field(default_factory=list)
    count: int = 0
    total_results: str = Field("0", alias="totalResults")
    current_page: int = Field(1, alias="currentPage")
    total_pages: int = Field(0, alias="totalPages")


class FavoritesResponse(_ApiModel):
    data: FavoritesData

    @classmethod
    def empty(cls, page: int) -> "FavoritesResponse":
        return cls(data=FavoritesData(current_page=page))


__all__ = [
    "FavoritesData",
    "FavoritesResponse",
    "Movie",
    "SearchMovie",
    "SearchMoviesData",
    "SearchMoviesResponse",
]
