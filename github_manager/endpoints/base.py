"""Base class for API endpoint groups.

Provides what every group needs: access to the HTTP client and config,
resolving identifiers from records or plain values, query parameter
cleanup, pagination, output materialization and the boolean handling of
no-content operations.

"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel

from github_manager.exceptions import AuthenticationError, GitHubError
from github_manager.formats import Decoder, ReturnFormat, list_decoder, materialize
from github_manager.models import ActionCache, CommitComment, Organization, Repository
from github_manager.utils.pagination import paginate

if TYPE_CHECKING:
    from github_manager.config import ClientConfig
    from github_manager.utils.http import HTTPClient, HTTPResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

RepositoryRef = Repository | str
OrganizationRef = Organization | str


# =============================================================================
# Identifier Resolution
# =============================================================================


def repository_path(repository: RepositoryRef) -> str:
    """Build the ``/repos/{owner}/{repo}`` prefix for a repository.

    Args:
        repository: A Repository record or an "owner/name" string.

    Returns:
        The API path of the repository.

    Raises:
        ValueError: If owner or name can't be determined.

    Example:
        >>> repository_path("octocat/hello-world")
        '/repos/octocat/hello-world'

    """
    if isinstance(repository, Repository):
        owner, name = repository.owner_login, repository.repo_name
    else:
        owner, _, name = str(repository).strip().strip("/").partition("/")

    if not owner or not name or "/" in name:
        raise ValueError(f"Expected a Repository or an 'owner/name' string, got {repository!r}")
    return f"/repos/{owner}/{name}"


def org_login(org: OrganizationRef) -> str:
    """Get the login of an organization given as record or string.

    Raises:
        ValueError: If the login is empty.

    """
    login = org.login if isinstance(org, Organization) else str(org).strip()
    if not login:
        raise ValueError(f"Expected an Organization or a login, got {org!r}")
    return login


def record_id(value: BaseModel | int, kind: str) -> int:
    """Get the numeric id of a record, or pass an int through.

    Args:
        value: A record with an ``id`` field, or the id itself.
        kind: What the id identifies, for the error message.

    Raises:
        ValueError: If no positive id is available.

    """
    identifier = getattr(value, "id", None) if isinstance(value, BaseModel) else value
    if isinstance(identifier, bool) or not isinstance(identifier, int) or identifier <= 0:
        raise ValueError(f"Expected a {kind} record or a positive id, got {value!r}")
    return identifier


CommentRef = CommitComment | int
CacheRef = ActionCache | int


# =============================================================================
# Base Endpoint
# =============================================================================


class BaseEndpoint:
    """Base class for API endpoint groups.

    Attributes:
        _http: The HTTP client for making requests.
        _config: Client configuration.

    """

    __slots__ = ("_config", "_http")

    def __init__(self, http: HTTPClient, config: ClientConfig) -> None:
        """Initialize the endpoint with HTTP client and config.

        Args:
            http: The HTTP client for making requests.
            config: Client configuration.

        """
        self._http = http
        self._config = config

    def _materialize(
        self,
        response: HTTPResponse,
        decoder: Decoder[T],
        return_format: ReturnFormat | str | None,
    ) -> Any:
        """Shape a response as requested, falling back to the client default."""
        fmt = self._config.return_format if return_format is None else return_format
        return materialize(response.text, fmt, decoder)

    @staticmethod
    def _clean_params(params: Mapping[str, Any]) -> dict[str, Any]:
        """Drop unset values and unwrap enums so only real values go on the wire."""
        return {
            key: value.value if isinstance(value, Enum) else value
            for key, value in params.items()
            if value is not None
        }

    def _build_pagination_params(
        self,
        page: int | None = None,
        per_page: int | None = None,
    ) -> dict[str, int]:
        """Build pagination query parameters.

        Args:
            page: Page number (1-indexed).
            per_page: Items per page (capped at 100).

        Returns:
            Dictionary of pagination parameters.

        """
        params: dict[str, int] = {}
        if page is not None:
            params["page"] = page
        if per_page is not None:
            params["per_page"] = min(per_page, self._config.MAX_PER_PAGE)
        elif self._config.per_page != self._config.DEFAULT_PER_PAGE:
            params["per_page"] = self._config.per_page
        return params

    def _iter_pages(
        self,
        endpoint: str,
        model: type[M],
        params: dict[str, Any] | None = None,
        max_items: int | None = None,
    ) -> Iterator[M]:
        """Lazily yield records from every page of a list endpoint.

        Args:
            endpoint: API endpoint path.
            model: Record type of each item.
            params: Additional query parameters.
            max_items: Maximum items to yield (None for unlimited).

        Yields:
            Decoded records, one page request at a time.

        """
        base_params = self._clean_params(params or {})
        decoder = list_decoder(model)

        def fetch(page: int, per_page: int) -> tuple[list[M], Mapping[str, str]]:
            response = self._http.get(
                endpoint, params={**base_params, "page": page, "per_page": per_page}
            )
            items = materialize(response.text, ReturnFormat.LIBRARY_OBJECT, decoder)
            return items, response.headers

        return paginate(fetch, per_page=self._config.MAX_PER_PAGE, max_items=max_items)

    def _require_auth(self, action: str) -> None:
        """Fail fast when a token-only operation is called anonymously.

        Raises:
            AuthenticationError: If no token is configured.

        """
        if not self._config.is_authenticated:
            raise AuthenticationError(f"Authentication required to {action}")

    def _expect_no_content(
        self,
        method: str,
        endpoint: str,
        *,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
    ) -> bool:
        """Run an operation whose only success answer is 204 No Content.

        Failures never propagate. Each one is logged once as a warning.

        Returns:
            True on HTTP 204, False for any other status or error.

        """
        try:
            response = self._http.request(method, endpoint, params=params, json_data=json_data)
        except GitHubError as e:
            logger.warning("%s %s failed: %s", method, endpoint, e)
            return False

        if response.status_code != 204:
            logger.warning(
                "%s %s returned %d, expected 204 No Content",
                method,
                endpoint,
                response.status_code,
            )
            return False
        return True
