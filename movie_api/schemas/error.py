"""Shape of the JSON body sent with every 4xx/5xx response."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorType(str, Enum):
    """Coarse error category, stable for clients to branch on."""

    VALIDATION_ERROR = "validation_error"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UPSTREAM_ERROR = "upstream_error"
    INTERNAL_ERROR = "internal_error"


class ErrorResponse(BaseModel):
    """Body of every non-2xx response; ``message`` is what clients show users."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_type": "upstream_error",
                "message": "Failed to fetch movies from OMDb API",
                "detail": "ConnectTimeout: timed out",
                "status_code": 503,
                "timestamp": "2025-11-03T10:30:00Z",
                "request_id": "req_abc123xyz",
                "path": "/movies/search",
                "retry_after": 5,
            }
        }
    )

    error_type: ErrorType = Field(..., description="Category of error")
    message: str = Field(..., description="Human-readable error message")
    detail: str | None = Field(None, description="Additional error details or context")
    status_code: int = Field(..., description="HTTP status code")
    timestamp: datetime = Field(..., description="UTC time the error was produced")
    request_id: str | None = Field(None, description="Value of the X-Request-ID response header")
    path: str | None = Field(None, description="Request path that caused the error")
    retry_after: int | None = Field(
        None, description="Seconds to wait before retrying (for upstream failures)"
    )


class ValidationErrorDetail(BaseModel):
    """One rejected field of a request."""

    field: str = Field(..., description="Field that failed validation")
    message: str = Field(..., description="Validation error message")
    value: Any = Field(None, description="Value that failed validation")


class ValidationErrorResponse(ErrorResponse):
    """Error body for request validation failures, listing each bad field."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_type": "validation_error",
                "message": "Request validation failed",
                "detail": "1 validation error(s)",
                "status_code": 400,
                "timestamp": "2025-11-03T10:30:00Z",
                "request_id": "req_abc123xyz",
                "path": "/movies/favorites",
                "errors": [
                    {"field": "body.year", "message": "Input should be greater than or equal to 0", "value": -1},
                ],
            }
        }
    )

    error_type: ErrorType = Field(default=ErrorType.VALIDATION_ERROR)
    errors: list[ValidationErrorDetail] = Field(
        default_factory=list, description="List of validation errors"
    )
