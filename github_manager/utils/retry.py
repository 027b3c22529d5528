"""When and how long HTTPClient waits before repeating a request.

A request is repeated after a rate limit (429, or a 403 carrying rate
limit headers), a 500/502/503/504, or a dropped or timed out connection.
Any other failure is raised on the first attempt.

"""

from __future__ import annotations

import random
import time

from github_manager.exceptions import NetworkError, RateLimitError, ServerError

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


def is_retryable_error(error: Exception) -> bool:
    """Tell whether repeating the request may succeed."""
    if isinstance(error, RateLimitError):
        return True
    if isinstance(error, ServerError):
        return error.status_code in RETRYABLE_STATUS_CODES
    if isinstance(error, NetworkError):
        return error.is_retryable
    return False


def calculate_backoff(
    attempt: int,
    base_delay: float = 1.0,
    factor: float = 2.0,
    max_delay: float = 60.0,
    jitter: bool = True,
) -> float:
    """Delay before retry number ``attempt + 1``.

    Args:
        attempt: Zero-based index of the attempt that failed.
        base_delay: Delay after the first failure, in seconds.
        factor: Growth per attempt.
        max_delay: Upper bound before jitter.
        jitter: Scale the delay by a random 0.75 to 1.25.

    """
    delay = min(base_delay * factor**attempt, max_delay)
    if jitter:
        delay *= random.uniform(0.75, 1.25)  # nosec B311
    return delay


def get_retry_after(error: RateLimitError) -> float | None:
    """Seconds GitHub asked us to wait, None if it didn't say.

    Retry-After takes precedence over the window reset time; a reset
    time in the past means no wait.
    """
    if error.retry_after:
        return float(error.retry_after)
    if error.reset_at:
        return max(0.0, error.reset_at.timestamp() - time.time())
    return None
