"""Settings of a GitHubManager.

Values come from, in order of precedence:
    1. Constructor arguments
    2. GITHUB_* environment variables (a .env file is loaded on import)
    3. The defaults below

Environment Variables:
    GITHUB_TOKEN: Personal access token; unset or empty means anonymous
    GITHUB_BASE_URL: API root, for GitHub Enterprise (default: https://api.github.com)
    GITHUB_TIMEOUT: Request timeout in seconds (default: 30)
    GITHUB_MAX_RETRIES: Retries of 429, 5xx and dropped connections (default: 3)
    GITHUB_CACHE_TTL: Seconds a cached GET stays fresh (default: 300)
    GITHUB_RETURN_FORMAT: library_object, json or string (default: library_object)

Example:
    >>> config = ClientConfig(timeout=60.0, return_format=ReturnFormat.JSON)
    >>> config.with_overrides(max_retries=0).max_retries
    0

"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import ClassVar

from dotenv import load_dotenv

from github_manager.exceptions import ConfigurationError
from github_manager.formats import ReturnFormat

# A .env in the working directory wins over one found in a parent
_env_file = Path.cwd() / ".env"
if _env_file.exists():
    load_dotenv(_env_file)
else:
    load_dotenv()


def _env(key: str) -> str | None:
    """Read a variable; an empty value counts as unset."""
    return os.environ.get(key) or None


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Immutable settings shared by the HTTP layer and every endpoint group.

    Attributes:
        base_url: API root without a trailing slash.
        token: Personal access token, None for anonymous access.
        timeout: Request timeout in seconds.
        max_retries: Retries of 429, 5xx and transient network errors.
        retry_backoff_factor: Growth of the delay between retries.
        cache_enabled: Whether GET responses are cached.
        cache_ttl: Seconds a cached GET stays fresh.
        rate_limit_buffer: Share of the rate limit kept in reserve (0.0-1.0).
        user_agent: User-Agent header.
        per_page: Page size used when a listing call doesn't give one.
        return_format: Result shape used when a call doesn't ask for one.

    """

    DEFAULT_BASE_URL: ClassVar[str] = "https://api.github.com"
    DEFAULT_TIMEOUT: ClassVar[float] = 30.0
    DEFAULT_MAX_RETRIES: ClassVar[int] = 3
    DEFAULT_CACHE_TTL: ClassVar[int] = 300
    DEFAULT_PER_PAGE: ClassVar[int] = 30
    MAX_PER_PAGE: ClassVar[int] = 100

    base_url: str = field(
        default_factory=lambda: _env("GITHUB_BASE_URL") or ClientConfig.DEFAULT_BASE_URL
    )
    token: str | None = field(default_factory=lambda: _env("GITHUB_TOKEN"))
    timeout: float = field(
        default_factory=lambda: float(_env("GITHUB_TIMEOUT") or ClientConfig.DEFAULT_TIMEOUT)
    )
    max_retries: int = field(
        default_factory=lambda: int(_env("GITHUB_MAX_RETRIES") or ClientConfig.DEFAULT_MAX_RETRIES)
    )
    retry_backoff_factor: float = 1.5
    cache_enabled: bool = True
    cache_ttl: int = field(
        default_factory=lambda: int(_env("GITHUB_CACHE_TTL") or ClientConfig.DEFAULT_CACHE_TTL)
    )
    rate_limit_buffer: float = 0.1
    user_agent: str = "python-github-manager/1.0"
    per_page: int = DEFAULT_PER_PAGE
    return_format: ReturnFormat = field(
        default_factory=lambda: _env("GITHUB_RETURN_FORMAT")  # type: ignore[arg-type, return-value]
        or ReturnFormat.LIBRARY_OBJECT
    )

    def __post_init__(self) -> None:
        """Normalize and check the values.

        Raises:
            ConfigurationError: If a value is out of range or malformed.

        """
        if not self.base_url.startswith(("http://", "https://")):
            raise ConfigurationError(
                f"Invalid base_url: {self.base_url} (must start with http:// or https://)"
            )
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")
        if self.max_retries < 0:
            raise ConfigurationError(f"max_retries cannot be negative, got {self.max_retries}")
        if self.retry_backoff_factor < 1.0:
            raise ConfigurationError(
                f"retry_backoff_factor must be >= 1.0, got {self.retry_backoff_factor}"
            )
        if self.cache_ttl < 0:
            raise ConfigurationError(f"cache_ttl cannot be negative, got {self.cache_ttl}")
        if not 0.0 <= self.rate_limit_buffer < 1.0:
            raise ConfigurationError(
                f"rate_limit_buffer must be between 0.0 and 1.0, got {self.rate_limit_buffer}"
            )
        if not 1 <= self.per_page <= self.MAX_PER_PAGE:
            raise ConfigurationError(
                f"per_page must be between 1 and {self.MAX_PER_PAGE}, got {self.per_page}"
            )

        try:
            return_format = ReturnFormat.coerce(self.return_format)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        # frozen dataclass
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        object.__setattr__(self, "return_format", return_format)

    @property
    def is_authenticated(self) -> bool:
        """Whether requests carry a token."""
        return bool(self.token)

    def with_overrides(self, **kwargs: object) -> ClientConfig:
        """Copy the configuration with some values replaced.

        The copy goes through the same checks as a new configuration.

        Example:
            >>> test_config = ClientConfig(token="ghp_xxx").with_overrides(timeout=5.0)

        """
        values: dict[str, object] = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update(kwargs)
        return ClientConfig(**values)  # type: ignore[arg-type]
