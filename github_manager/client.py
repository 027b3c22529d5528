"""Main GitHub Manager class.

GitHubManager wires configuration, authentication and the shared HTTP
client together and exposes one attribute per endpoint group.

Example:
    >>> from github_manager import GitHubManager
    >>>
    >>> with GitHubManager(token="ghp_xxx") as manager:
    ...     usage = manager.caches.get_organization_usage("my-org")
    ...     print(usage.total_active_caches_count)

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from github_manager.auth import create_auth
from github_manager.config import ClientConfig
from github_manager.endpoints.caches import CachesEndpoint
from github_manager.endpoints.commit_comments import CommitCommentsEndpoint
from github_manager.endpoints.contents import ContentsEndpoint
from github_manager.endpoints.orgs import OrgsEndpoint
from github_manager.endpoints.repos import ReposEndpoint
from github_manager.utils.http import HTTPClient

if TYPE_CHECKING:
    import httpx

    from github_manager.formats import ReturnFormat
    from github_manager.utils.cache import ResponseCache
    from github_manager.utils.rate_limiter import RateLimiter


class GitHubManager:
    """GitHub API client with typed endpoint groups.

    Attributes:
        caches: GitHub Actions cache endpoints.
        commit_comments: Commit comment endpoints.
        contents: Repository contents endpoints.
        orgs: Organization endpoints.
        repos: Repository endpoints.

    Example:
        >>> manager = GitHubManager(token="ghp_xxx", return_format="json")
        >>> manager.repos.get("octocat/hello-world")["full_name"]
        'octocat/Hello-World'
        >>> manager.close()

    """

    __slots__ = (
        "_caches",
        "_commit_comments",
        "_config",
        "_contents",
        "_http",
        "_orgs",
        "_repos",
    )

    def __init__(
        self,
        token: str | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        cache_enabled: bool | None = None,
        cache_ttl: int | None = None,
        per_page: int | None = None,
        return_format: ReturnFormat | str | None = None,
        config: ClientConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the GitHub Manager.

        Args:
            token: GitHub personal access token. Falls back to the
                   GITHUB_TOKEN environment variable, then anonymous access.
            base_url: API base URL; override for GitHub Enterprise Server.
            timeout: Request timeout in seconds. Default 30.
            max_retries: Retry attempts for transient failures. Default 3.
            cache_enabled: Enable GET response caching. Default True.
            cache_ttl: Cache time-to-live in seconds. Default 300.
            per_page: Default items per page for list operations. Default 30.
            return_format: Default output shape. Default LIBRARY_OBJECT.
            config: A ready ClientConfig; the keyword overrides above apply on top.
            transport: Custom httpx transport, e.g. httpx.MockTransport in tests.

        Example:
            >>> # GitHub Enterprise Server
            >>> manager = GitHubManager(token="ghp_xxx", base_url="https://ghe.example.com/api/v3")

        """
        overrides: dict[str, object] = {
            key: value
            for key, value in {
                "token": token,
                "base_url": base_url,
                "timeout": timeout,
                "max_retries": max_retries,
                "cache_enabled": cache_enabled,
                "cache_ttl": cache_ttl,
                "per_page": per_page,
                "return_format": return_format,
            }.items()
            if value is not None
        }

        if config is None:
            self._config = ClientConfig(**overrides)  # type: ignore[arg-type]
        else:
            self._config = config.with_overrides(**overrides) if overrides else config

        self._http = HTTPClient(self._config, create_auth(self._config.token), transport=transport)

        self._caches = CachesEndpoint(self._http, self._config)
        self._commit_comments = CommitCommentsEndpoint(self._http, self._config)
        self._contents = ContentsEndpoint(self._http, self._config)
        self._orgs = OrgsEndpoint(self._http, self._config)
        self._repos = ReposEndpoint(self._http, self._config)

    # =========================================================================
    # Endpoint Properties
    # =========================================================================

    @property
    def caches(self) -> CachesEndpoint:
        """Access GitHub Actions cache endpoints.

        Example:
            >>> manager.caches.get_repository_usage("octocat/hello-world")

        """
        return self._caches

    @property
    def commit_comments(self) -> CommitCommentsEndpoint:
        """Access commit comment endpoints.

        Example:
            >>> manager.commit_comments.list_for_repository("octocat/hello-world")

        """
        return self._commit_comments

    @property
    def contents(self) -> ContentsEndpoint:
        """Access repository contents endpoints.

        Example:
            >>> manager.contents.get_readme("octocat/hello-world")

        """
        return self._contents

    @property
    def orgs(self) -> OrgsEndpoint:
        """Access organization endpoints.

        Example:
            >>> manager.orgs.get("github")

        """
        return self._orgs

    @property
    def repos(self) -> ReposEndpoint:
        """Access repository endpoints.

        Example:
            >>> manager.repos.list_for_org("github", per_page=10)

        """
        return self._repos

    # =========================================================================
    # Client Properties
    # =========================================================================

    @property
    def config(self) -> ClientConfig:
        """Get the immutable client configuration."""
        return self._config

    @property
    def is_authenticated(self) -> bool:
        """Check if a token is configured."""
        return self._config.is_authenticated

    @property
    def last_status_code(self) -> int | None:
        """HTTP status code of the most recent response, if any."""
        return self._http.last_status_code

    @property
    def rate_limiter(self) -> RateLimiter:
        """Get the rate limiter tracking GitHub's limits.

        Example:
            >>> remaining = manager.rate_limiter.get_remaining("core")

        """
        return self._http.rate_limiter

    @property
    def cache(self) -> ResponseCache | None:
        """Get the response cache, None if caching is disabled."""
        return self._http.cache

    # =========================================================================
    # Lifecycle Methods
    # =========================================================================

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._http.close()

    def __enter__(self) -> GitHubManager:
        """Enter context manager."""
        return self

    def __exit__(self, *args: object) -> None:
        """Exit context manager and close the client."""
        self.close()

    def __repr__(self) -> str:
        """Return a string representation of the client."""
        auth_status = "authenticated" if self.is_authenticated else "anonymous"
        return f"GitHubManager(base_url={self._config.base_url!r}, {auth_status})"
