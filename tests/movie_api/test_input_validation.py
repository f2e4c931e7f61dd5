from __future__ import annotations

import pytest

from movie_api.errors import InvalidInputError
from movie_api.utils.validation import (
    Invalid,
    Valid,
    require,
    validate_movie_id,
    validate_page_size,
    validate_positive_int,
    validate_search_title,
)


def test_search_title_is_trimmed() -> None:
    assert validate_search_title("  matrix ") == Valid("matrix")


@pytest.mark.parametrize("title", ["", "   ", None, 42])
def test_blank_or_non_string_title_is_rejected(title: object) -> None:
    assert validate_search_title(title) == Invalid("Search query is required")


@pytest.mark.parametrize(("raw", "expected"), [(1, 1), ("7", 7), (" 3 ", 3)])
def test_positive_int_accepts_ints_and_digit_strings(raw: object, expected: int) -> None:
    assert validate_positive_int(raw) == Valid(expected)


@pytest.mark.parametrize("raw", [0, -1, "0", "-2", "abc", "1.5", True, None, 2.0])
def test_positive_int_rejects_everything_else(raw: object) -> None:
    assert validate_positive_int(raw) == Invalid("Page must be a positive integer")


def test_page_size_is_capped() -> None:
    assert validate_page_size(100) == Valid(100)
    assert isinstance(validate_page_size(101), Invalid)
    assert validate_page_size(0) == Invalid("Page size must be a positive integer")


def test_movie_id_must_not_be_blank() -> None:
    assert validate_movie_id(" tt1 ") == Valid("tt1")
    assert validate_movie_id("  ") == Invalid("Movie ID is required")


def test_require_raises_invalid_input() -> None:
    with pytest.raises(InvalidInputError) as excinfo:
        require(Invalid("Movie ID is required"))

    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "Movie ID is required"
    assert require(Valid(5)) == 5
