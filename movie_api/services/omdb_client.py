"""Async client for the OMDb movie-database API."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from movie_api.errors import ProviderUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderMovie:
    """One entry of the provider's ``Search`` array, kept in provider terms."""

    title: str
    year: str
    imdb_id: str
    type: str = ""
    poster: str = ""

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ProviderMovie":
        return cls(
            title=str(payload.get("Title") or ""),
            year=str(payload.get("Year") or ""),
            imdb_id=str(payload.get("imdbID") or ""),
            type=str(payload.get("Type") or ""),
            poster=str(payload.get("Poster") or ""),
        )

    def to_payload(self) -> dict[str, str]:
        return {
            "Title": self.title,
            "Year": self.year,
            "imdbID": self.imdb_id,
            "Type": self.type,
            "Poster": self.poster,
        }


@dataclass(frozen=True)
class ProviderSearchPage:
    movies: list[ProviderMovie] = field(default_factory=list)
    total_results: str = "0"

    @classmethod
    def empty(cls) -> "ProviderSearchPage":
        return cls(movies=[], total_results="0")

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ProviderSearchPage":
        """Build a page from an OMDb response body.

        ``Response: "False"`` (or any ``Error`` field) is how OMDb reports
        "Movie not found!" and similar conditions; those become an empty page.
        """

        if payload.get("Response") == "False" or payload.get("Error"):
            return cls.empty()
        movies = [
            ProviderMovie.from_payload(item)
            for item in payload.get("Search") or []
            if isinstance(item, dict)
        ]
        return cls(movies=movies, total_results=str(payload.get("totalResults") or "0"))

    def to_payload(self) -> dict[str, Any]:
        return {
            "Search": [movie.to_payload() for movie in self.movies],
            "totalResults": self.total_results,
            "Response": "True",
        }


class OmdbClient:
    """Thin wrapper over :class:`httpx.AsyncClient` for OMDb title searches.

    The client does not own the HTTP connection pool when one is injected; the
    application lifespan creates one shared ``AsyncClient`` and closes it on
    shutdown.
    """

    def __init__(
        self,
        *,
        api_key: str,
        http_client: httpx.AsyncClient,
        base_url: str,
    ) -> None:
        self._api_key = api_key
        self._http = http_client
        self._base_url = base_url

    async def search(self, title: str, page: int = 1) -> ProviderSearchPage:
        """Search titles; raises :class:`ProviderUnavailableError` on transport failure."""

        params = {
            "apikey": self._api_key,
            "s": title,
            "plot": "full",
            "page": page,
        }
        try:
            response = await self._http.get(self._base_url, params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            logger.error("OMDb API error for '%s' (page %s): %s", title, page, exc)
            raise ProviderUnavailableError(f"{type(exc).__name__}: {exc}") from exc
        except ValueError as exc:
            logger.error("OMDb API returned an undecodable body for '%s': %s", title, exc)
            raise ProviderUnavailableError("Provider returned an invalid response") from exc

        if not isinstance(payload, dict):
            raise ProviderUnavailableError("Provider returned an invalid response")

        search_page = ProviderSearchPage.from_payload(payload)
        if not search_page.movies and payload.get("Error"):
            logger.info("OMDb reported no results for '%s': %s", title, payload["Error"])
        return search_page


__all__ = ["OmdbClient", "ProviderMovie", "ProviderSearchPage"]
