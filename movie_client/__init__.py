"""Client data layer for the movie search API."""

from movie_client.api import MovieApiClient
from movie_client.errors import ApiError, describe_error
from movie_client.models import Movie, SearchMovie
from movie_client.queries import MovieQueries
from movie_client.query_cache import QueryCache
from movie_client.result import Failure, Result, Success
from movie_client.toggle import FavoriteToggler

__all__ = [
    "ApiError",
    "FavoriteToggler",
    "Failure",
    "Movie",
    "MovieApiClient",
    "MovieQueries",
    "QueryCache",
    "Result",
    "SearchMovie",
    "Success",
    "describe_error",
]
