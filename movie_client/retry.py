"""Retry policy for idempotent reads."""

from __future__ import annotations

MAX_RETRIES = 2
BASE_DELAY_MS = 1000
MAX_DELAY_MS = 30_000

# Client errors that a retry cannot fix.
_NON_RETRYABLE_STATUSES = frozenset({400, 404})


def should_retry(failure_count: int, error: BaseException) -> bool:
    """Return ``True`` when a read that has failed ``failure_count`` times may run again."""

    status = getattr(error, "status", None)
    if status in _NON_RETRYABLE_STATUSES:
        return False
    return failure_count < MAX_RETRIES


def retry_delay_ms(attempt: int) -> int:
    return min(BASE_DELAY_MS * 2**attempt, MAX_DELAY_MS)


def retry_delay_seconds(attempt: int) -> float:
    return retry_delay_ms(attempt) / 1000


__all__ = [
    "MAX_DELAY_MS",
    "MAX_RETRIES",
    "retry_delay_ms",
    "retry_delay_seconds",
    "should_retry",
]
