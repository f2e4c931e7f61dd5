"""Explicit input validation for request parameters.

Validators return :class:`Valid` or :class:`Invalid` instead of raising, so the
service layer decides how a rejected value is reported. :func:`require` is the
bridge used by services to turn an :class:`Invalid` into
:class:`~movie_api.errors.InvalidInputError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from movie_api.errors import InvalidInputError

T = TypeVar("T")

MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class Valid(Generic[T]):
    value: T


@dataclass(frozen=True)
class Invalid:
    message: str


ValidationResult = Valid[T] | Invalid


def require(result: ValidationResult[T]) -> T:
    """Return the validated value or raise :class:`InvalidInputError`."""

    if isinstance(result, Invalid):
        raise InvalidInputError(result.message)
    return result.value


def validate_search_title(title: Any) -> ValidationResult[str]:
    """Accept any non-blank string, returning it trimmed."""

    if not isinstance(title, str) or not title.strip():
        return Invalid("Search query is required")
    return Valid(title.strip())


def validate_positive_int(value: Any, *, label: str = "Page") -> ValidationResult[int]:
    """Accept integers (or integer strings) greater than zero."""

    if isinstance(value, bool):
        return Invalid(f"{label} must be a positive integer")
    if isinstance(value, str):
        candidate = value.strip()
        if not candidate.lstrip("-").isdigit():
            return Invalid(f"{label} must be a positive integer")
        value = int(candidate)
    if not isinstance(value, int) or value < 1:
        return Invalid(f"{label} must be a positive integer")
    return Valid(value)


def validate_page_size(value: Any) -> ValidationResult[int]:
    result = validate_positive_int(value, label="Page size")
    if isinstance(result, Valid) and result.value > MAX_PAGE_SIZE:
        return Invalid(f"Page size must not exceed {MAX_PAGE_SIZE}")
    return result


def validate_movie_id(imdb_id: Any) -> ValidationResult[str]:
    if not isinstance(imdb_id, str) or not imdb_id.strip():
        return Invalid("Movie ID is required")
    return Valid(imdb_id.strip())


__all__ = [
    "Invalid",
    "MAX_PAGE_SIZE",
    "Valid",
    "ValidationResult",
    "require",
    "validate_movie_id",
    "validate_page_size",
    "validate_positive_int",
    "validate_search_title",
]
