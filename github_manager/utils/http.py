"""HTTP client wrapper for the GitHub API.

A thin layer over httpx that handles:
- Base URL, GitHub media type and API version headers
- Authentication injection
- Mapping error statuses to typed exceptions
- Retries with exponential backoff for transient failures
- Rate limit tracking and throttling
- GET response caching with TTL and ETag revalidation, emptied by any write

HTTPClient is internal; endpoint groups talk to it, callers use
GitHubManager.

"""

from __future__ import annotations

import json
import logging
import time
from typing import TYPE_CHECKING, Any

import httpx

from github_manager.exceptions import (
    NetworkError,
    RateLimitError,
    ServerError,
    exception_from_response,
)
from github_manager.utils.cache import ResponseCache, make_cache_key
from github_manager.utils.rate_limiter import RateLimiter
from github_manager.utils.retry import calculate_backoff, get_retry_after, is_retryable_error

if TYPE_CHECKING:
    from github_manager.auth import AuthStrategy
    from github_manager.config import ClientConfig

logger = logging.getLogger(__name__)

JSONBody = dict[str, Any] | list[Any]


class HTTPClient:
    """Low-level HTTP client for GitHub API requests.

    Note:
        This is an internal class. Use GitHubManager for the public API.

    """

    __slots__ = ("_auth", "_cache", "_client", "_config", "_last_status_code", "_rate_limiter")

    ACCEPT_HEADER = "application/vnd.github+json"
    API_VERSION_HEADER = "2022-11-28"

    def __init__(
        self,
        config: ClientConfig,
        auth: AuthStrategy,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            config: Client configuration.
            auth: Authentication strategy.
            transport: Optional httpx transport (e.g. httpx.MockTransport).

        """
        self._config = config
        self._auth = auth
        self._client = self._create_client(transport)
        self._rate_limiter = RateLimiter(buffer=config.rate_limit_buffer)
        self._cache = ResponseCache(default_ttl=config.cache_ttl) if config.cache_enabled else None
        self._last_status_code: int | None = None

    @property
    def rate_limiter(self) -> RateLimiter:
        """Get the rate limiter instance."""
        return self._rate_limiter

    @property
    def cache(self) -> ResponseCache | None:
        """Get the cache instance, None when caching is disabled."""
        return self._cache

    @property
    def last_status_code(self) -> int | None:
        """Status code of the most recent response received, if any."""
        return self._last_status_code

    def _create_client(self, transport: httpx.BaseTransport | None) -> httpx.Client:
        """Create and configure the httpx client."""
        return httpx.Client(
            base_url=self._config.base_url,
            timeout=httpx.Timeout(self._config.timeout),
            headers={
                "Accept": self.ACCEPT_HEADER,
                "X-GitHub-Api-Version": self.API_VERSION_HEADER,
                "User-Agent": self._config.user_agent,
            },
            follow_redirects=True,
            transport=transport,
        )

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: dict[str, Any] | None = None,
        json_data: JSONBody | None = None,
        use_cache: bool = True,
    ) -> HTTPResponse:
        """Make an HTTP request to the GitHub API.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE).
            endpoint: API endpoint path (e.g., "/orgs/github").
            params: Query parameters.
            json_data: JSON body.
            use_cache: Whether a GET may be served from or stored in the cache.

        Returns:
            HTTPResponse with the body and metadata.

        Raises:
            GitHubError: For API errors (4xx, 5xx).
            NetworkError: For connection failures.

        """
        cache_key = None
        if method == "GET" and use_cache and self._cache:
            cache_key = make_cache_key(method, endpoint, params, self._auth.is_authenticated)
            cached = self._cache.get(cache_key)
            if cached:
                return cached.data  # type: ignore[no-any-return]

        if method == "GET" or not self._cache:
            return self._request_with_retry(method, endpoint, params, json_data, cache_key)

        # No cached read survives a write, successful or not
        try:
            return self._request_with_retry(method, endpoint, params, json_data, cache_key)
        finally:
            self._cache.clear()

    def _request_with_retry(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None,
        json_data: JSONBody | None,
        cache_key: str | None,
    ) -> HTTPResponse:
        """Execute request, retrying transient failures."""
        max_attempts = self._config.max_retries + 1

        for attempt in range(max_attempts):
            try:
                self._rate_limiter.wait_if_needed("core")
                return self._execute_request(method, endpoint, params, json_data, cache_key)

            except (RateLimitError, ServerError, NetworkError) as e:
                if not is_retryable_error(e):
                    raise

                if attempt >= max_attempts - 1:
                    # The caller reports the failure
                    if max_attempts > 1:
                        logger.info(
                            "Max retries (%d) exhausted for %s %s",
                            max_attempts - 1,
                            method,
                            endpoint,
                        )
                    raise

                delay = get_retry_after(e) if isinstance(e, RateLimitError) else None
                if delay is None:
                    delay = calculate_backoff(
                        attempt,
                        base_delay=1.0,
                        factor=self._config.retry_backoff_factor,
                    )

                logger.info(
                    "Retry %d/%d for %s %s after %.2fs: %s",
                    attempt + 1,
                    max_attempts - 1,
                    method,
                    endpoint,
                    delay,
                    str(e),
                )
                time.sleep(delay)

        raise RuntimeError("Unexpected retry loop exit")

    def _execute_request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None,
        json_data: JSONBody | None,
        cache_key: str | None,
    ) -> HTTPResponse:
        """Execute a single HTTP request."""
        request = self._client.build_request(
            method=method,
            url=endpoint,
            params=params,
            json=json_data,
        )
        request = self._auth.apply(request)

        if cache_key and self._cache:
            stale = self._cache.get_stale(cache_key)
            if stale and stale.etag:
                request.headers["If-None-Match"] = stale.etag

        logger.debug("Request: %s %s", method, request.url)

        try:
            response = self._client.send(request)
        except httpx.TimeoutException as e:
            raise NetworkError(f"Request timed out: {e}", original_error=e) from e
        except httpx.ConnectError as e:
            raise NetworkError(f"Connection failed: {e}", original_error=e) from e
        except httpx.HTTPError as e:
            raise NetworkError(f"HTTP error: {e}", original_error=e) from e

        return self._process_response(response, cache_key)

    def _process_response(
        self,
        response: httpx.Response,
        cache_key: str | None = None,
    ) -> HTTPResponse:
        """Turn an httpx response into an HTTPResponse or an exception.

        Raises:
            GitHubError: If the response indicates an error.

        """
        self._last_status_code = response.status_code
        self._rate_limiter.update_from_headers(response.headers)

        if response.status_code == 304 and cache_key and self._cache:
            cached = self._cache.get_stale(cache_key)
            if cached:
                self._cache.refresh_ttl(cache_key)
                logger.debug("304 Not Modified, using cached response")
                return cached.data  # type: ignore[no-any-return]

        logger.debug(
            "Response: %d %s (remaining: %s)",
            response.status_code,
            response.reason_phrase,
            response.headers.get("X-RateLimit-Remaining", "N/A"),
        )

        result = HTTPResponse(
            content=response.content,
            status_code=response.status_code,
            headers=response.headers,
        )

        if response.status_code >= 400:
            data = result.data
            if isinstance(data, dict) and data:
                error_data = data
            elif result.text.strip():
                error_data = {"message": result.text.strip()}
            else:
                error_data = {}
            raise exception_from_response(
                status_code=response.status_code,
                response_data=error_data,
                headers=dict(response.headers),
            )

        if cache_key and self._cache and response.status_code == 200:
            self._cache.set(cache_key, result, etag=result.etag)

        return result

    def get(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        *,
        use_cache: bool = True,
    ) -> HTTPResponse:
        """Make a GET request."""
        return self.request("GET", endpoint, params=params, use_cache=use_cache)

    def post(
        self,
        endpoint: str,
        json_data: JSONBody | None = None,
    ) -> HTTPResponse:
        """Make a POST request."""
        return self.request("POST", endpoint, json_data=json_data)

    def put(
        self,
        endpoint: str,
        json_data: JSONBody | None = None,
    ) -> HTTPResponse:
        """Make a PUT request."""
        return self.request("PUT", endpoint, json_data=json_data)

    def patch(
        self,
        endpoint: str,
        json_data: JSONBody | None = None,
    ) -> HTTPResponse:
        """Make a PATCH request."""
        return self.request("PATCH", endpoint, json_data=json_data)

    def delete(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        json_data: JSONBody | None = None,
    ) -> HTTPResponse:
        """Make a DELETE request.

        Args:
            endpoint: API endpoint path.
            params: Query parameters (e.g. the cache key to delete).
            json_data: JSON body (deleting a file needs message and sha).

        Returns:
            HTTPResponse with the response data.

        """
        return self.request("DELETE", endpoint, params=params, json_data=json_data)

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> HTTPClient:
        """Enter context manager."""
        return self

    def __exit__(self, *args: object) -> None:
        """Exit context manager and close client."""
        self.close()


class HTTPResponse:
    """Container for a response body and its metadata.

    Attributes:
        content: Raw response body.
        status_code: HTTP status code.
        headers: Response headers (case-insensitive).

    """

    __slots__ = ("_data", "content", "headers", "status_code")

    def __init__(
        self,
        content: bytes,
        status_code: int,
        headers: httpx.Headers | dict[str, str] | None = None,
    ) -> None:
        """Initialize the response container.

        Args:
            content: Raw response body.
            status_code: HTTP status code.
            headers: Response headers.

        """
        self.content = content
        self.status_code = status_code
        self.headers = httpx.Headers(headers or {})
        self._data: JSONBody | None = None

    @property
    def text(self) -> str:
        """Body decoded as UTF-8."""
        return self.content.decode("utf-8", errors="replace")

    @property
    def data(self) -> JSONBody:
        """Body parsed as JSON; {} for empty or non-JSON bodies."""
        if self._data is None:
            self._data = {}
            if self.content and "json" in self.headers.get("content-type", ""):
                try:
                    self._data = json.loads(self.content)
                except ValueError:
                    logger.debug("Response declared JSON but could not be parsed")
        return self._data

    @property
    def rate_limit_remaining(self) -> int | None:
        """Get remaining rate limit from headers."""
        value = self.headers.get("X-RateLimit-Remaining")
        return int(value) if value else None

    @property
    def rate_limit_reset(self) -> int | None:
        """Get rate limit reset timestamp from headers."""
        value = self.headers.get("X-RateLimit-Reset")
        return int(value) if value else None

    @property
    def etag(self) -> str | None:
        """Get ETag for conditional requests."""
        return self.headers.get("ETag")

    @property
    def link_header(self) -> str | None:
        """Get Link header for pagination."""
        return self.headers.get("Link")

    def __repr__(self) -> str:
        """Return a representation of the response."""
        return f"HTTPResponse(status={self.status_code}, bytes={len(self.content)})"
