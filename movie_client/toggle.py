"""Optimistic, debounced favorite toggling."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from movie_client.models import Movie
from movie_client.queries import MovieQueries
from movie_client.result import Failure

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.3


def _already_favorite(result: Failure) -> bool:
    # The server already holds the movie, so the add reached its goal.
    error = result.error
    return error.status == 400 and "already in favorites" in error.message.lower()


class FavoriteToggler:
    """Flip favorite state locally and sync it to the API after a quiet period.

    Every :meth:`toggle` updates the optimistic state at once. Toggles of the
    same movie that arrive within ``debounce`` seconds of each other collapse
    into a single reconciliation which adds or removes the movie only when
    the final desired state differs from the last known server state. A
    failed call rolls the optimistic state back and ``on_change`` is told
    about the reverted value. An add refused because the movie is already a
    favorite is treated as a successful add.
    """

    def __init__(
        self,
        queries: MovieQueries,
        *,
        debounce: float = DEFAULT_DEBOUNCE_SECONDS,
        on_change: Callable[[str, bool], None] | None = None,
    ) -> None:
        self._queries = queries
        self._debounce = debounce
        self._on_change = on_change
        self._server: dict[str, bool] = {}
        self._desired: dict[str, bool] = {}
        self._movies: dict[str, Movie] = {}
        self._timers: dict[str, asyncio.Task[None]] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._pending: set[asyncio.Task[None]] = set()

    def is_favorite(self, imdb_id: str, default: bool = False) -> bool:
        if imdb_id in self._desired:
            return self._desired[imdb_id]
        return self._server.get(imdb_id, default)

    def toggle(self, movie: Movie, is_favorite: bool) -> bool:
        """Flip ``movie`` and return its new optimistic state.

        ``is_favorite`` is the state the caller last saw from the server; it is
        only used the first time a movie is toggled.
        """

        imdb_id = movie.imdb_id
        self._server.setdefault(imdb_id, is_favorite)
        self._movies[imdb_id] = movie

        desired = not self.is_favorite(imdb_id)
        self._desired[imdb_id] = desired

        timer = self._timers.pop(imdb_id, None)
        if timer is not None:
            timer.cancel()
        task = asyncio.get_running_loop().create_task(self._debounced(imdb_id))
        self._timers[imdb_id] = task
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return desired

    async def flush(self) -> None:
        """Wait for every scheduled reconciliation to finish."""

        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _debounced(self, imdb_id: str) -> None:
        await asyncio.sleep(self._debounce)
        # Past the quiet period the call must not be cancelled by a new toggle.
        if self._timers.get(imdb_id) is asyncio.current_task():
            del self._timers[imdb_id]
        await self._reconcile(imdb_id)

    async def _reconcile(self, imdb_id: str) -> None:
        lock = self._locks.setdefault(imdb_id, asyncio.Lock())
        async with lock:
            if imdb_id not in self._desired:
                return
            desired = self._desired[imdb_id]
            if desired == self._server[imdb_id]:
                self._desired.pop(imdb_id, None)
                return

            if desired:
                result = await self._queries.add_favorite(self._movies[imdb_id])
            else:
                result = await self._queries.remove_favorite(imdb_id)

            if isinstance(result, Failure) and not (desired and _already_favorite(result)):
                logger.info("Rolling back favorite state for %s", imdb_id)
                self._desired.pop(imdb_id, None)
                if self._on_change is not None:
                    self._on_change(imdb_id, self._server[imdb_id])
                return

            self._server[imdb_id] = desired
            if self._desired.get(imdb_id) == desired:
                del self._desired[imdb_id]


__all__ = ["DEFAULT_DEBOUNCE_SECONDS", "FavoriteToggler"]
