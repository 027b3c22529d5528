"""Typed errors raised by the GitHub Manager.

Every failure surfaces as a GitHubError subclass, chosen from the HTTP
status (or the transport failure) so callers can catch the case they
care about instead of inspecting messages.

Exception Hierarchy:
    GitHubError (base)
    ├── ConfigurationError     - Invalid config values
    ├── AuthenticationError    - 401, or a token-only operation without a token
    ├── AuthorizationError     - 403, insufficient permissions
    ├── NotFoundError          - 404, resource doesn't exist
    ├── ValidationError        - 422, invalid request payload
    ├── RateLimitError         - 429/403 rate limit exceeded
    ├── ServerError            - 5xx server errors
    ├── NetworkError           - Connection failures, timeouts
    └── ResponseDecodeError    - Body doesn't match the expected record

Example:
    >>> try:
    ...     usage = manager.caches.get_repository_usage("octocat/hello-world")
    ... except NotFoundError as e:
    ...     print(f"No such repository: {e}")
    ... except GitHubError as e:
    ...     print(e.response_data)

"""

from __future__ import annotations

from datetime import datetime
from typing import Any

# Substrings of a transport error that point at a bad host, not a blip
_DNS_FAILURES = (
    "failed to resolve",
    "nodename nor servname",
    "name or service not known",
    "getaddrinfo failed",
)
_TRANSIENT_FAILURES = (
    "connection refused",
    "connection reset",
    "broken pipe",
    "timed out",
    "timeout",
)


class GitHubError(Exception):
    """Root of every error this library raises.

    Attributes:
        message: Human-readable error description.
        response_data: Error body returned by the API ({} when there was none).

    """

    def __init__(self, message: str, response_data: dict[str, Any] | None = None) -> None:
        self.message = message
        self.response_data = response_data or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r})"


class ConfigurationError(GitHubError):
    """A configuration value is out of range or malformed.

    Example:
        >>> GitHubManager(base_url="not-a-url")
        ConfigurationError: Invalid base_url: not-a-url

    """


class AuthenticationError(GitHubError):
    """HTTP 401, or a token-only operation attempted anonymously."""

    status_code: int = 401

    def __init__(
        self,
        message: str = "Authentication failed",
        response_data: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, response_data)


class AuthorizationError(GitHubError):
    """HTTP 403 that isn't a rate limit: the token lacks a permission."""

    status_code: int = 403

    def __init__(
        self,
        message: str = "Permission denied",
        response_data: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, response_data)


class NotFoundError(GitHubError):
    """HTTP 404.

    GitHub answers 404 rather than 403 for private resources the token
    can't see, so this may also mean "not yours".
    """

    status_code: int = 404

    def __init__(
        self,
        message: str = "Resource not found",
        response_data: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, response_data)


class ValidationError(GitHubError):
    """HTTP 422: GitHub rejected the payload.

    Attributes:
        errors: The ``errors`` array of the response, one dict per field.

    Example:
        >>> manager.commit_comments.create("octocat/hello-world", "6dcb09b", body="")
        ValidationError: Validation Failed

    """

    status_code: int = 422

    def __init__(
        self,
        message: str = "Validation failed",
        response_data: dict[str, Any] | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        self.errors = errors or []
        super().__init__(message, response_data)

    @property
    def field_errors(self) -> dict[str, str]:
        """Map each offending field to its message."""
        return {
            error.get("field", "unknown"): error.get("message", "invalid") for error in self.errors
        }


class RateLimitError(GitHubError):
    """The primary or secondary rate limit was hit (HTTP 429, or 403).

    Attributes:
        limit: Requests allowed in the window, from X-RateLimit-Limit.
        remaining: Requests left, from X-RateLimit-Remaining.
        reset_at: Local time at which the window resets.
        retry_after: Seconds to wait, from Retry-After.
        is_secondary: True when GitHub reports a secondary (abuse) limit.

    """

    status_code: int = 429

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        response_data: dict[str, Any] | None = None,
        limit: int | None = None,
        remaining: int = 0,
        reset_at: datetime | None = None,
        retry_after: int | None = None,
        is_secondary: bool = False,
    ) -> None:
        self.limit = limit
        self.remaining = remaining
        self.reset_at = reset_at
        self.retry_after = retry_after
        self.is_secondary = is_secondary
        super().__init__(message, response_data)

    def __str__(self) -> str:
        text = self.message
        if self.reset_at:
            text += f" (resets at {self.reset_at.isoformat()})"
        if self.retry_after:
            text += f" (retry after {self.retry_after}s)"
        return text


class ServerError(GitHubError):
    """HTTP 5xx; ``status_code`` holds the exact code."""

    def __init__(
        self,
        message: str = "GitHub server error",
        response_data: dict[str, Any] | None = None,
        status_code: int = 500,
    ) -> None:
        self.status_code = status_code
        super().__init__(message, response_data)


class NetworkError(GitHubError):
    """The request never got an HTTP answer.

    Attributes:
        original_error: The httpx exception behind it.
        is_retryable: False for name resolution failures, True for
            connection drops and timeouts.

    """

    def __init__(
        self,
        message: str = "Network error",
        original_error: Exception | None = None,
    ) -> None:
        self.original_error = original_error
        self.is_retryable = _looks_transient(original_error)
        super().__init__(message)


class ResponseDecodeError(GitHubError):
    """A 2xx body that isn't valid JSON or doesn't fit its record type.

    An enumerated field carrying a value this library doesn't know about
    ends up here as well.

    Attributes:
        target: Name of the record type being decoded.
        original_error: The json or pydantic exception.

    """

    def __init__(
        self,
        message: str = "Could not decode response",
        target: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.target = target
        self.original_error = original_error
        super().__init__(message)


def _looks_transient(error: Exception | None) -> bool:
    if error is None:
        return True
    text = str(error).lower()
    if any(marker in text for marker in _DNS_FAILURES):
        return False
    return any(marker in text for marker in _TRANSIENT_FAILURES)


# =============================================================================
# Exception Factory
# =============================================================================


def exception_from_response(
    status_code: int,
    response_data: dict[str, Any],
    headers: dict[str, str] | None = None,
) -> GitHubError:
    """Pick the GitHubError subclass for an error response.

    Args:
        status_code: HTTP status code.
        response_data: Parsed error body.
        headers: Response headers, read for rate limit details.

    Returns:
        The exception to raise.

    """
    headers = headers or {}
    # GitHub may send "message": null
    message = str(response_data.get("message") or f"HTTP {status_code}")

    exhausted = _header(headers, "X-RateLimit-Remaining") == "0"
    limited = "rate limit" in message.lower() or exhausted
    if status_code == 429 or (status_code == 403 and limited):
        return _rate_limit_error(message, response_data, headers)

    if 500 <= status_code < 600:
        return ServerError(message, response_data, status_code=status_code)

    by_status: dict[int, type[GitHubError]] = {
        401: AuthenticationError,
        403: AuthorizationError,
        404: NotFoundError,
    }
    if status_code in by_status:
        return by_status[status_code](message, response_data)

    if status_code == 422:
        return ValidationError(message, response_data, errors=response_data.get("errors") or [])

    return GitHubError(f"HTTP {status_code}: {message}", response_data)


def _header(headers: dict[str, str], name: str) -> str | None:
    return headers.get(name) or headers.get(name.lower())


def _rate_limit_error(
    message: str,
    response_data: dict[str, Any],
    headers: dict[str, str],
) -> RateLimitError:
    limit = _header(headers, "X-RateLimit-Limit")
    reset = _header(headers, "X-RateLimit-Reset")
    retry_after = _header(headers, "Retry-After")
    lowered = message.lower()

    return RateLimitError(
        message=message,
        response_data=response_data,
        limit=int(limit) if limit else None,
        remaining=int(_header(headers, "X-RateLimit-Remaining") or 0),
        reset_at=datetime.fromtimestamp(int(reset)) if reset else None,
        retry_after=int(retry_after) if retry_after else None,
        is_secondary="secondary" in lowered or "abuse" in lowered,
    )
