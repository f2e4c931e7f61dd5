"""Favorites domain components split by responsibility.

``store`` owns persistence of the favorites list and ``pagination`` slices it
for the listing endpoint; :mod:`movie_api.services.favorites_service`
coordinates both.
"""

from .pagination import DEFAULT_PAGE_SIZE, Page, paginate
from .store import FavoritesStore, JsonFavoritesStore

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "FavoritesStore",
    "JsonFavoritesStore",
    "Page",
    "paginate",
]
