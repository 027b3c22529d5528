"""Test configuration and shared fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from typing import Any

import httpx
import pytest

from github_manager import ClientConfig, GitHubManager

# =============================================================================
# Environment
# =============================================================================


@pytest.fixture(autouse=True)
def _clean_github_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's GITHUB_* variables out of the tests."""
    for name in (
        "GITHUB_TOKEN",
        "GITHUB_BASE_URL",
        "GITHUB_TIMEOUT",
        "GITHUB_MAX_RETRIES",
        "GITHUB_CACHE_TTL",
        "GITHUB_RETURN_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Mock GitHub
# =============================================================================


class MockGitHub:
    """Canned GitHub API for httpx.MockTransport.

    Responses are registered per (method, path). Registering several for
    the same route queues them; the last one keeps answering. Unknown
    routes answer 404 like GitHub does.

    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], list[Callable[[httpx.Request], httpx.Response]]] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        status: int = 200,
        json_body: Any = None,
        *,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Register a response for a route."""

        def respond(request: httpx.Request) -> httpx.Response:
            if content is not None:
                return httpx.Response(status, content=content, headers=headers)
            if json_body is not None:
                return httpx.Response(status, json=json_body, headers=headers)
            return httpx.Response(status, headers=headers)

        self.routes.setdefault((method, path), []).append(respond)

    def add_handler(
        self, method: str, path: str, respond: Callable[[httpx.Request], httpx.Response]
    ) -> None:
        """Register a function that builds the response from the request."""
        self.routes.setdefault((method, path), []).append(respond)

    def fail(self, method: str, path: str, error: Exception) -> None:
        """Make a route raise a transport error."""

        def respond(request: httpx.Request) -> httpx.Response:
            raise error

        self.routes.setdefault((method, path), []).append(respond)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json={"message": "Not Found"})

        respond = queue.pop(0) if len(queue) > 1 else queue[0]
        return respond(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        """Decoded JSON body of the most recent request."""
        return json.loads(self.last_request.content)


@pytest.fixture
def github() -> MockGitHub:
    """A fresh mock GitHub API."""
    return MockGitHub()


@pytest.fixture
def make_manager(github: MockGitHub) -> Iterator[Callable[..., GitHubManager]]:
    """Factory for managers talking to the mock API."""
    created: list[GitHubManager] = []

    def factory(**kwargs: Any) -> GitHubManager:
        kwargs.setdefault("token", "test_token_12345")
        kwargs.setdefault("max_retries", 0)
        kwargs.setdefault("cache_enabled", False)
        manager = GitHubManager(transport=httpx.MockTransport(github.handler), **kwargs)
        created.append(manager)
        return manager

    yield factory

    for manager in created:
        manager.close()


@pytest.fixture
def manager(make_manager: Callable[..., GitHubManager]) -> GitHubManager:
    """Authenticated manager without cache or retries."""
    return make_manager()


@pytest.fixture
def anonymous_manager(make_manager: Callable[..., GitHubManager]) -> GitHubManager:
    """Manager without a token."""
    return make_manager(token=None)


@pytest.fixture
def default_manager(github: MockGitHub) -> Iterator[GitHubManager]:
    """Authenticated manager with the library defaults: cache on, three retries."""
    manager = GitHubManager(token="test_token_12345", transport=httpx.MockTransport(github.handler))
    yield manager
    manager.close()


# =============================================================================
# Sample API Responses
# =============================================================================


@pytest.fixture
def sample_user_response() -> dict[str, Any]:
    """Sample embedded user payload."""
    return {
        "login": "octocat",
        "id": 1,
        "node_id": "MDQ6VXNlcjE=",
        "avatar_url": "https://github.com/images/error/octocat_happy.gif",
        "gravatar_id": "",
        "url": "https://api.github.com/users/octocat",
        "html_url": "https://github.com/octocat",
        "repos_url": "https://api.github.com/users/octocat/repos",
        "type": "User",
        "site_admin": False,
    }


@pytest.fixture
def sample_repo_response(sample_user_response: dict[str, Any]) -> dict[str, Any]:
    """Sample GitHub repository API response."""
    return {
        "id": 1296269,
        "node_id": "MDEwOlJlcG9zaXRvcnkxMjk2MjY5",
        "name": "Hello-World",
        "full_name": "octocat/Hello-World",
        "private": False,
        "owner": sample_user_response,
        "html_url": "https://github.com/octocat/Hello-World",
        "description": "This your first repo!",
        "fork": False,
        "url": "https://api.github.com/repos/octocat/Hello-World",
        "archive_url": "https://api.github.com/repos/octocat/Hello-World/{archive_format}{/ref}",
        "contents_url": "https://api.github.com/repos/octocat/Hello-World/contents/{+path}",
        "clone_url": "https://github.com/octocat/Hello-World.git",
        "created_at": "2011-01-26T19:01:12Z",
        "updated_at": "2022-06-10T12:42:47Z",
        "pushed_at": "2022-06-10T12:41:42Z",
        "homepage": "https://github.com",
        "size": 108,
        "stargazers_count": 80,
        "watchers_count": 80,
        "language": "Python",
        "has_issues": True,
        "has_projects": True,
        "has_downloads": True,
        "has_wiki": True,
        "has_pages": False,
        "forks_count": 9,
        "archived": False,
        "disabled": False,
        "open_issues_count": 0,
        "license": {
            "key": "mit",
            "name": "MIT License",
            "spdx_id": "MIT",
            "url": "https://api.github.com/licenses/mit",
            "node_id": "MDc6TGljZW5zZTEz",
        },
        "topics": ["octocat", "api", "example"],
        "visibility": "public",
        "forks": 9,
        "open_issues": 0,
        "watchers": 80,
        "default_branch": "main",
        "permissions": {"admin": False, "push": False, "pull": True},
    }


@pytest.fixture
def sample_org_response() -> dict[str, Any]:
    """Sample GitHub organization API response (as seen by an owner)."""
    return {
        "login": "github",
        "id": 1,
        "node_id": "MDEyOk9yZ2FuaXphdGlvbjE=",
        "url": "https://api.github.com/orgs/github",
        "repos_url": "https://api.github.com/orgs/github/repos",
        "avatar_url": "https://github.com/images/error/octocat_happy.gif",
        "description": "A great organization",
        "name": "github",
        "company": "GitHub",
        "blog": "https://github.com/blog",
        "location": "San Francisco",
        "email": "octocat@github.com",
        "is_verified": True,
        "has_organization_projects": True,
        "has_repository_projects": True,
        "public_repos": 2,
        "public_gists": 1,
        "followers": 20,
        "following": 0,
        "html_url": "https://github.com/octocat",
        "created_at": "2008-01-14T04:33:35Z",
        "type": "Organization",
        "total_private_repos": 100,
        "owned_private_repos": 100,
        "billing_email": "mona@github.com",
        "plan": {"name": "Medium", "space": 400, "private_repos": 20, "seats": None},
        "default_repository_permission": "read",
        "members_can_create_repositories": True,
        "two_factor_requirement_enabled": True,
        "dependabot_alerts_enabled_for_new_repositories": True,
        "secret_scanning_enabled_for_new_repositories": None,
        "updated_at": "2014-03-03T18:58:10Z",
    }


@pytest.fixture
def sample_commit_comment_response(sample_user_response: dict[str, Any]) -> dict[str, Any]:
    """Sample commit comment API response."""
    return {
        "html_url": "https://github.com/octocat/Hello-World/commit/6dcb09b#commitcomment-1",
        "url": "https://api.github.com/repos/octocat/Hello-World/comments/1",
        "id": 1,
        "node_id": "MDEzOkNvbW1pdENvbW1lbnQx",
        "body": "Great stuff",
        "path": "file1.txt",
        "position": 4,
        "line": 14,
        "commit_id": "6dcb09b5b57875f334f61aebed695e2e4193db5e",
        "user": sample_user_response,
        "created_at": "2011-04-14T16:00:49Z",
        "updated_at": "2011-04-14T16:00:49Z",
        "author_association": "COLLABORATOR",
        "reactions": {
            "url": "https://api.github.com/repos/octocat/Hello-World/comments/1/reactions",
            "total_count": 3,
            "+1": 2,
            "-1": 0,
            "heart": 1,
        },
    }


@pytest.fixture
def sample_content_response() -> dict[str, Any]:
    """Sample file payload from the contents API."""
    return {
        "type": "file",
        "encoding": "base64",
        "size": 13,
        "name": "README.md",
        "path": "README.md",
        "content": "SGVsbG8gV29ybGQhCg==\n",
        "sha": "3d21ec53a331a6f037a91c368710b99387d012c1",
        "url": "https://api.github.com/repos/octocat/hello-world/contents/README.md",
        "git_url": "https://api.github.com/repos/octocat/hello-world/git/blobs/3d21ec5",
        "html_url": "https://github.com/octocat/hello-world/blob/main/README.md",
        "download_url": "https://raw.githubusercontent.com/octocat/hello-world/main/README.md",
        "_links": {
            "git": "https://api.github.com/repos/octocat/hello-world/git/blobs/3d21ec5",
            "self": "https://api.github.com/repos/octocat/hello-world/contents/README.md",
            "html": "https://github.com/octocat/hello-world/blob/main/README.md",
        },
    }


@pytest.fixture
def sample_caches_response() -> dict[str, Any]:
    """Sample Actions cache listing."""
    return {
        "total_count": 3,
        "actions_caches": [
            {
                "id": 505,
                "ref": "refs/heads/main",
                "key": "Linux-node-958aff96db2d75d67787d1e634ae70b659de937b",
                "version": "73885106f58cc52a7df9ec4d4a5622a5614813162cb516c759a30af6bf56e6f0",
                "last_accessed_at": "2019-01-24T22:45:36.000Z",
                "created_at": "2019-01-24T22:45:36.000Z",
                "size_in_bytes": 1024,
            },
            {
                "id": 506,
                "ref": "refs/heads/main",
                "key": "Linux-pip-1",
                "last_accessed_at": "2019-01-26T10:00:00.000Z",
                "created_at": "2019-01-25T10:00:00.000Z",
                "size_in_bytes": 4096,
            },
            {
                "id": 507,
                "ref": "refs/heads/feature",
                "key": "Linux-pip-2",
                "last_accessed_at": None,
                "created_at": "2019-01-20T10:00:00.000Z",
                "size_in_bytes": 2048,
            },
        ],
    }


# =============================================================================
# Client Fixtures
# =============================================================================


@pytest.fixture
def config() -> ClientConfig:
    """Create a test configuration."""
    return ClientConfig(
        token="test_token_12345",
        timeout=5.0,
        max_retries=0,
        cache_enabled=False,
    )


@pytest.fixture
def unauthenticated_config() -> ClientConfig:
    """Create an unauthenticated test configuration."""
    return ClientConfig(
        token=None,
        timeout=5.0,
        max_retries=0,
        cache_enabled=False,
    )


# =============================================================================
# Rate Limit Headers
# =============================================================================


@pytest.fixture
def rate_limit_headers() -> dict[str, str]:
    """Sample rate limit headers."""
    return {
        "X-RateLimit-Limit": "5000",
        "X-RateLimit-Remaining": "4999",
        "X-RateLimit-Reset": "1609459200",
        "X-RateLimit-Resource": "core",
    }


@pytest.fixture
def rate_limit_exceeded_headers() -> dict[str, str]:
    """Rate limit exceeded headers."""
    return {
        "X-RateLimit-Limit": "5000",
        "X-RateLimit-Remaining": "0",
        "X-RateLimit-Reset": "1609459200",
        "X-RateLimit-Resource": "core",
        "Retry-After": "3600",
    }
