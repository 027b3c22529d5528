"""GitHub Manager - a typed client for managing GitHub through its REST API.

Endpoint groups cover GitHub Actions caches, commit comments, repository
contents, organizations and repositories. Every read can return a typed
record, the parsed JSON or the raw text.

Example:
    >>> from github_manager import GitHubManager, ReturnFormat
    >>>
    >>> with GitHubManager(token="ghp_xxx") as manager:
    ...     usage = manager.caches.get_repository_usage("octocat/hello-world")
    ...     raw = manager.repos.get("octocat/hello-world", return_format=ReturnFormat.STRING)
    ...     ok = manager.commit_comments.delete("octocat/hello-world", 1)

"""

from github_manager.client import GitHubManager
from github_manager.config import ClientConfig
from github_manager.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    GitHubError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ResponseDecodeError,
    ServerError,
    ValidationError,
)
from github_manager.formats import ReturnFormat, materialize

__version__ = "1.0.0"

__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "ClientConfig",
    "ConfigurationError",
    "GitHubError",
    "GitHubManager",
    "NetworkError",
    "NotFoundError",
    "RateLimitError",
    "ResponseDecodeError",
    "ReturnFormat",
    "ServerError",
    "ValidationError",
    "__version__",
    "materialize",
]
