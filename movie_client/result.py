"""Success/failure values returned by :class:`~movie_client.api.MovieApiClient`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from movie_client.errors import ApiError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    ok = True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    error: ApiError

    ok = False

    def unwrap(self):
        raise self.error


Result = Success[T] | Failure

__all__ = ["Failure", "Result", "Success"]
