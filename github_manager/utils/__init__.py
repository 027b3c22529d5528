"""Utility modules for the GitHub Manager.

This package contains cross-cutting concerns and helper utilities:
- http: HTTP client wrapper
- logger: Library logger and configure_logging()
- retry: Retry policy with exponential backoff
- rate_limiter: Proactive rate limiting
- cache: Response caching with TTL
- pagination: Link-header pagination

"""

from github_manager.utils.cache import ResponseCache, make_cache_key
from github_manager.utils.http import HTTPClient, HTTPResponse
from github_manager.utils.logger import configure_logging
from github_manager.utils.pagination import LinkInfo, paginate, parse_link_header
from github_manager.utils.rate_limiter import RateLimiter, RateLimitInfo

__all__ = [
    "HTTPClient",
    "HTTPResponse",
    "LinkInfo",
    "RateLimitInfo",
    "RateLimiter",
    "ResponseCache",
    "configure_logging",
    "make_cache_key",
    "paginate",
    "parse_link_header",
]
