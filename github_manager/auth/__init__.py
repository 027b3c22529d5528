"""Authentication strategies for the GitHub API.

Supported Authentication Methods:
    - TokenAuth: Personal access token (classic or fine-grained)
    - NoAuth: Anonymous requests (60 requests/hour)

Most manager operations (organization settings, Actions caches, file
writes) need a token; anonymous access only covers public reads.

Example:
    >>> from github_manager.auth import create_auth
    >>> create_auth("ghp_xxxxxxxxxxxx")
    TokenAuth(token='ghp_...')
    >>> create_auth(None)
    NoAuth()

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class AuthStrategy(ABC):
    """Abstract base class for authentication strategies."""

    @abstractmethod
    def apply(self, request: httpx.Request) -> httpx.Request:
        """Apply authentication to an outgoing request.

        Args:
            request: The httpx request to authenticate.

        Returns:
            The request with authentication applied.

        """

    @property
    @abstractmethod
    def is_authenticated(self) -> bool:
        """Check if this strategy provides authentication."""


class TokenAuth(AuthStrategy):
    """Personal access token authentication.

    The token is sent as a Bearer token in the Authorization header and
    is masked in the repr.

    """

    __slots__ = ("_token",)

    def __init__(self, token: str) -> None:
        """Initialize with a personal access token.

        Args:
            token: GitHub personal access token.

        Raises:
            ValueError: If token is empty or whitespace.

        """
        if not token or not token.strip():
            raise ValueError("Token cannot be empty")
        self._token = token.strip()

    def apply(self, request: httpx.Request) -> httpx.Request:
        """Set the Authorization header on the request."""
        request.headers["Authorization"] = f"Bearer {self._token}"
        return request

    @property
    def is_authenticated(self) -> bool:
        """Return True as this strategy provides authentication."""
        return True

    def __repr__(self) -> str:
        """Return a safe representation without exposing the token."""
        masked = f"{self._token[:4]}..." if len(self._token) > 4 else "***"
        return f"TokenAuth(token={masked!r})"


class NoAuth(AuthStrategy):
    """Anonymous requests, sent without an Authorization header."""

    __slots__ = ()

    def apply(self, request: httpx.Request) -> httpx.Request:
        """Return the request unchanged."""
        return request

    @property
    def is_authenticated(self) -> bool:
        """Return False as this strategy provides no authentication."""
        return False

    def __repr__(self) -> str:
        """Return a simple representation."""
        return "NoAuth()"


def create_auth(token: str | None) -> AuthStrategy:
    """Pick the auth strategy for an optional token.

    Args:
        token: Personal access token, or None for anonymous access.

    Returns:
        TokenAuth if a token is provided, NoAuth otherwise.

    """
    if token:
        return TokenAuth(token)
    return NoAuth()
