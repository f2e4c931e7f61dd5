"""Persistence for the favorites list.

:class:`JsonFavoritesStore` keeps one authoritative in-memory list and flushes
the whole list to a JSON file after every mutation. Mutations are serialised
by a single :class:`asyncio.Lock`, so the duplicate check and the write happen
atomically with respect to other requests handled by the same process.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from movie_api.errors import DuplicateFavoriteError, FavoriteNotFoundError
from movie_api.schemas.movies import Movie

logger = logging.getLogger(__name__)


class FavoritesStore(Protocol):
    """Operations the favorites service relies on."""

    async def load(self) -> None: ...

    def snapshot(self) -> tuple[Movie, ...]: ...

    def contains(self, imdb_id: str) -> bool: ...

    async def add(self, movie: Movie) -> None: ...

    async def remove(self, imdb_id: str) -> Movie: ...


def _encode(movies: list[Movie]) -> str:
    records = [movie.model_dump(by_alias=True) for movie in movies]
    return json.dumps(records, indent=2, ensure_ascii=False)


def _decode(raw: str, path: Path) -> list[Movie]:
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.error("Failed to load favorites from %s: %s", path, exc)
        return []

    if not isinstance(parsed, list):
        logger.warning(
            "Favorites file %s contains invalid data, resetting to empty list", path
        )
        return []

    movies: list[Movie] = []
    seen: set[str] = set()
    for index, record in enumerate(parsed):
        try:
            movie = Movie.model_validate(record)
        except ValidationError as exc:
            logger.warning("Skipping invalid favorite #%s in %s: %s", index, path, exc)
            continue
        if movie.imdb_id in seen:
            logger.warning("Skipping duplicate favorite %s in %s", movie.imdb_id, path)
            continue
        seen.add(movie.imdb_id)
        movies.append(movie)
    return movies


class JsonFavoritesStore:
    """Favorites backed by a single JSON array on local disk."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._movies: list[Movie] = []
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> None:
        """Read the file, creating an empty one when it does not exist yet."""

        async with self._lock:
            exists = await asyncio.to_thread(self._path.exists)
            if not exists:
                self._movies = []
                await asyncio.to_thread(self._write, [])
                logger.info("Created empty favorites file at %s", self._path)
                return

            raw = await asyncio.to_thread(self._path.read_text, encoding="utf-8")
            self._movies = _decode(raw, self._path)
            logger.info("Loaded %s favorites from %s", len(self._movies), self._path)

    def snapshot(self) -> tuple[Movie, ...]:
        return tuple(self._movies)

    def contains(self, imdb_id: str) -> bool:
        return any(movie.imdb_id == imdb_id for movie in self._movies)

    async def add(self, movie: Movie) -> None:
        async with self._lock:
            if self.contains(movie.imdb_id):
                raise DuplicateFavoriteError(movie.imdb_id)
            updated = [*self._movies, movie]
            await asyncio.to_thread(self._write, updated)
            self._movies = updated

    async def remove(self, imdb_id: str) -> Movie:
        async with self._lock:
            index = next(
                (i for i, movie in enumerate(self._movies) if movie.imdb_id == imdb_id),
                None,
            )
            if index is None:
                raise FavoriteNotFoundError(imdb_id)
            removed = self._movies[index]
            updated = self._movies[:index] + self._movies[index + 1 :]
            await asyncio.to_thread(self._write, updated)
            self._movies = updated
            return removed

    def _write(self, movies: list[Movie]) -> None:
        """Write ``movies`` to a temp file in the data dir, then swap it in."""

        directory = self._path.parent
        if not directory.exists():
            directory.mkdir(parents=True, exist_ok=True)
            logger.info("Created data directory: %s", directory)

        temp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                delete=False,
                dir=directory,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            ) as handle:
                temp_name = handle.name
                handle.write(_encode(movies))
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_name, self._path)
            temp_name = None
        except OSError:
            logger.exception("Failed to save favorites to %s", self._path)
            raise
        finally:
            if temp_name is not None and os.path.exists(temp_name):
                os.remove(temp_name)


__all__ = ["FavoritesStore", "JsonFavoritesStore"]
