"""Slicing helpers for the paginated favorites listing."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        if self.total == 0:
            return 0
        return math.ceil(self.total / self.page_size)


def paginate(items: Sequence[T], *, page: int, page_size: int = DEFAULT_PAGE_SIZE) -> Page[T]:
    """Return the 1-based ``page`` of ``items``; out-of-range pages are empty."""

    if page < 1 or page_size < 1:
        raise ValueError("page and page_size must be positive integers")
    start = (page - 1) * page_size
    return Page(
        items=list(items[start : start + page_size]),
        total=len(items),
        page=page,
        page_size=page_size,
    )


__all__ = ["DEFAULT_PAGE_SIZE", "Page", "paginate"]
