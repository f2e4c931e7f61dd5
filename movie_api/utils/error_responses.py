"""Builders for the JSON error bodies returned by every non-2xx response.

All bodies carry the request id from :mod:`movie_api.utils.request_context`
and a UTC timestamp, so a client-reported failure can be matched to the
server log line that produced it.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from fastapi.responses import JSONResponse

from movie_api.errors import MovieApiError
from movie_api.schemas.error import (
    ErrorResponse,
    ErrorType,
    ValidationErrorDetail,
    ValidationErrorResponse,
)
from movie_api.utils.request_context import get_request_id

__all__ = [
    "build_error_response",
    "build_validation_error_response",
    "error_response_from_exception",
    "to_json_response",
    "validation_details",
]


def _current_timestamp() -> datetime:
    """Return the current UTC time; tests patch this to freeze timestamps."""

    return datetime.now(UTC)


def validation_details(errors: Sequence[dict[str, Any]]) -> list[ValidationErrorDetail]:
    """Flatten pydantic/FastAPI error dictionaries into response details."""

    return [
        ValidationErrorDetail(
            field=".".join(str(loc) for loc in error.get("loc", ())),
            message=error.get("msg", "Invalid value"),
            value=error.get("input"),
        )
        for error in errors
    ]


def build_validation_error_response(
    *,
    errors: Sequence[ValidationErrorDetail],
    message: str,
    detail: str,
    status_code: int,
    path: str,
    error_type: ErrorType = ErrorType.VALIDATION_ERROR,
    request_id: str | None = None,
) -> ValidationErrorResponse:
    """Build the 400 body for request validation failures, one detail per field."""

    resolved_request_id = request_id or get_request_id()
    return ValidationErrorResponse(
        error_type=error_type,
        message=message,
        detail=detail,
        status_code=status_code,
        timestamp=_current_timestamp(),
        request_id=resolved_request_id,
        path=path,
        errors=list(errors),
    )


def build_error_response(
    *,
    error_type: ErrorType,
    message: str,
    detail: str,
    status_code: int,
    path: str,
    retry_after: int | None = None,
    request_id: str | None = None,
) -> ErrorResponse:
    """Construct a generic ``ErrorResponse`` enriched with metadata."""

    resolved_request_id = request_id or get_request_id()
    return ErrorResponse(
        error_type=error_type,
        message=message,
        detail=detail,
        status_code=status_code,
        timestamp=_current_timestamp(),
        request_id=resolved_request_id,
        path=path,
        retry_after=retry_after,
    )


def error_response_from_exception(exc: MovieApiError, *, path: str) -> ErrorResponse:
    """Translate a domain exception into its structured payload."""

    return build_error_response(
        error_type=exc.error_type,
        message=exc.message,
        detail=exc.detail,
        status_code=exc.status_code,
        path=path,
        retry_after=exc.retry_after,
    )


def to_json_response(payload: ErrorResponse) -> JSONResponse:
    """Serialise ``payload`` with its own status code and ``Retry-After`` hint."""

    headers = None
    if payload.retry_after is not None:
        headers = {"Retry-After": str(payload.retry_after)}
    return JSONResponse(
        status_code=payload.status_code,
        content=payload.model_dump(mode="json"),
        headers=headers,
    )
