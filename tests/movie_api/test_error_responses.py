"""Tests covering the helper utilities that construct error responses."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from movie_api.errors import (
    DuplicateFavoriteError,
    FavoriteNotFoundError,
    InvalidInputError,
    ProviderUnavailableError,
)
from movie_api.schemas.error import ErrorType
from movie_api.utils import error_responses
from movie_api.utils.error_responses import (
    build_error_response,
    error_response_from_exception,
    to_json_response,
    validation_details,
)
from movie_api.utils.request_context import clear_request_id, set_request_id

FIXED = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _freeze_timestamp(monkeypatch: pytest.MonkeyPatch) -> None:
    """Override ``_current_timestamp`` so payloads are deterministic."""

    monkeypatch.setattr(error_responses, "_current_timestamp", lambda: FIXED)


def test_build_error_response_embeds_request_context() -> None:
    token = set_request_id("req-123")
    try:
        response = build_error_response(
            error_type=ErrorType.NOT_FOUND,
            message="Movie not found in favorites",
            detail="missing",
            status_code=404,
            path="/movies/favorites/tt1",
        )
    finally:
        clear_request_id(token)

    assert response.request_id == "req-123"
    assert response.timestamp == FIXED
    assert response.retry_after is None


def test_explicit_request_id_takes_precedence() -> None:
    token = set_request_id("from-context")
    try:
        response = build_error_response(
            error_type=ErrorType.INTERNAL_ERROR,
            message="boom",
            detail="boom",
            status_code=500,
            path="/",
            request_id="explicit",
        )
    finally:
        clear_request_id(token)

    assert response.request_id == "explicit"


@pytest.mark.parametrize(
    ("exc", "status_code", "error_type", "message"),
    [
        (InvalidInputError("Search query is required"), 400, ErrorType.VALIDATION_ERROR,
         "Search query is required"),
        (DuplicateFavoriteError("tt1"), 400, ErrorType.CONFLICT, "Movie already in favorites"),
        (FavoriteNotFoundError("tt1"), 404, ErrorType.NOT_FOUND, "Movie not found in favorites"),
        (ProviderUnavailableError("timeout"), 503, ErrorType.UPSTREAM_ERROR,
         "Failed to fetch movies from OMDb API"),
    ],
)
def test_domain_errors_map_to_status_and_type(
    exc: Exception, status_code: int, error_type: ErrorType, message: str
) -> None:
    response = error_response_from_exception(exc, path="/movies")

    assert response.status_code == status_code
    assert response.error_type is error_type
    assert response.message == message


def test_json_response_sets_retry_after_for_upstream_failures() -> None:
    payload = error_response_from_exception(ProviderUnavailableError("down"), path="/movies/search")

    response = to_json_response(payload)

    assert response.status_code == 503
    assert response.headers["Retry-After"] == "5"


def test_json_response_omits_retry_after_by_default() -> None:
    payload = error_response_from_exception(FavoriteNotFoundError("tt1"), path="/movies/favorites")

    assert "Retry-After" not in to_json_response(payload).headers


def test_validation_details_flatten_locations() -> None:
    details = validation_details(
        [{"loc": ("query", "page"), "msg": "Input should be a valid integer", "input": "x"}]
    )

    assert details[0].field == "query.page"
    assert details[0].value == "x"
