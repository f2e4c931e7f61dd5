"""Client-side error type and user-facing error messages."""

from __future__ import annotations

from typing import Any

NETWORK_ERROR_MESSAGE = (
    "Network error: Unable to connect to server. Please check your internet connection."
)


class ApiError(Exception):
    """Failure reported by the API or raised before a request is sent.

    ``status`` is the HTTP status code, ``0`` for network failures and
    ``None`` for local validation failures that never reached the server.
    """

    def __init__(self, message: str, status: int | None = None, data: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.data = data

    @property
    def is_network_error(self) -> bool:
        return self.status == 0

    @property
    def is_client_error(self) -> bool:
        return self.status is not None and 400 <= self.status < 500

    def __repr__(self) -> str:
        return f"ApiError(message={self.message!r}, status={self.status!r})"


def describe_error(error: BaseException | None) -> str:
    """Map an error onto the message shown to the user."""

    if not isinstance(error, Exception):
        return "An unexpected error occurred. Please try again."

    if not isinstance(error, ApiError):
        return str(error) or "An unexpected error occurred. Please try again."

    message = error.message
    if error.is_network_error:
        return "Unable to connect to the server. Please check your internet connection."

    if error.status == 400:
        lowered = message.lower()
        if "already in favorites" in lowered:
            return "This movie is already in your favorites."
        if "required" in lowered or "invalid" in lowered:
            return "Please provide valid information."
        return "Invalid request. Please try again."

    if error.status == 404:
        return "The requested item was not found."

    if error.status is not None and error.status >= 500:
        return "Server error. Please try again later."

    return message


__all__ = ["ApiError", "NETWORK_ERROR_MESSAGE", "describe_error"]
