"""Retry utilities for key-value store calls with exponential backoff and a deadline."""
import logging
from typing import Any, Callable, TypeVar

import httpx
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    stop_after_delay,
    wait_exponential,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Default retry configuration
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_MIN_WAIT_SECONDS = 0.5
DEFAULT_MAX_WAIT_SECONDS = 5
DEFAULT_TIMEOUT_SECONDS = 10


def is_retryable_error(exception: BaseException) -> bool:
    """
    Determine if a store failure is worth retrying.

    Retryable errors include:
    - Transport failures (connect/read timeouts, dropped connections)
    - Server errors (5xx) and rate limits (429)

    Non-retryable errors include:
    - Authentication / permission errors (401, 403)
    - Bad requests and schema errors (400, 404)
    """
    if isinstance(exception, (httpx.TransportError, TimeoutError, ConnectionError)):
        return True

    if isinstance(exception, httpx.HTTPStatusError):
        status = exception.response.status_code
        return status == 429 or status >= 500

    # postgrest raises APIError with the status in its message/code
    error_str = str(exception).lower()
    if any(code in error_str for code in ["400", "401", "403", "404"]):
        return False
    if "unauthorized" in error_str or "permission denied" in error_str:
        return False
    if any(code in error_str for code in ["429", "500", "502", "503", "504"]):
        return True
    if "timeout" in error_str or "timed out" in error_str or "connection" in error_str:
        return True

    # Unknown errors are retried; a store write is idempotent
    return True


def _validate_retry_params(
    max_attempts: int,
    min_wait_seconds: float,
    max_wait_seconds: float,
    timeout_seconds: float,
) -> None:
    """
    Validate retry parameters.

    Raises:
        ValueError: If any parameter is invalid
    """
    if max_attempts < 1:
        raise ValueError(
            f"max_attempts must be >= 1, got {max_attempts}. "
            "If max_attempts <= 0, the retry loop will never execute."
        )
    if min_wait_seconds < 0:
        raise ValueError(
            f"min_wait_seconds must not be negative, got {min_wait_seconds}"
        )
    if max_wait_seconds < 0:
        raise ValueError(
            f"max_wait_seconds must not be negative, got {max_wait_seconds}"
        )
    if min_wait_seconds > max_wait_seconds:
        raise ValueError(
            f"min_wait_seconds ({min_wait_seconds}) cannot exceed "
            f"max_wait_seconds ({max_wait_seconds})"
        )
    if timeout_seconds <= 0:
        raise ValueError(f"timeout_seconds must be positive, got {timeout_seconds}")


def create_retrying(
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    min_wait_seconds: float = DEFAULT_MIN_WAIT_SECONDS,
    max_wait_seconds: float = DEFAULT_MAX_WAIT_SECONDS,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> Retrying:
    """
    Create a tenacity controller with exponential backoff.

    Retrying stops at whichever comes first: ``max_attempts`` or
    ``timeout_seconds`` elapsed since the first attempt.

    Raises:
        ValueError: If parameters are invalid
    """
    _validate_retry_params(max_attempts, min_wait_seconds, max_wait_seconds, timeout_seconds)

    return Retrying(
        retry=retry_if_exception(is_retryable_error),
        stop=stop_after_attempt(max_attempts) | stop_after_delay(timeout_seconds),
        wait=wait_exponential(
            multiplier=min_wait_seconds or 1,
            min=min_wait_seconds,
            max=max_wait_seconds,
        ),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


def retry_sync_call(
    func: Callable[..., T],
    *args: Any,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    min_wait_seconds: float = DEFAULT_MIN_WAIT_SECONDS,
    max_wait_seconds: float = DEFAULT_MAX_WAIT_SECONDS,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    **kwargs: Any,
) -> T:
    """
    Execute a sync function with retry logic.

    Args:
        func: Sync function to execute
        *args: Positional arguments for the function
        max_attempts: Maximum number of attempts
        min_wait_seconds: Minimum wait time between retries
        max_wait_seconds: Maximum wait time between retries
        timeout_seconds: Overall deadline across all attempts
        **kwargs: Keyword arguments for the function

    Returns:
        Result of the function call

    Raises:
        Exception: The last error once attempts or the deadline are exhausted
        ValueError: If parameters are invalid
    """
    retrying = create_retrying(
        max_attempts=max_attempts,
        min_wait_seconds=min_wait_seconds,
        max_wait_seconds=max_wait_seconds,
        timeout_seconds=timeout_seconds,
    )
    try:
        return retrying(func, *args, **kwargs)
    except Exception as e:
        logger.error(
            "Store call %s failed after retries: %s",
            getattr(func, "__name__", repr(func)),
            e,
        )
        raise
