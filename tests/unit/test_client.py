"""Unit tests for GitHubManager, authentication and logging setup."""

from __future__ import annotations

import io
import logging

import httpx
import pytest

from github_manager import GitHubManager
from github_manager.auth import NoAuth, TokenAuth, create_auth
from github_manager.endpoints import (
    CachesEndpoint,
    CommitCommentsEndpoint,
    ContentsEndpoint,
    OrgsEndpoint,
    ReposEndpoint,
)
from github_manager.exceptions import ConfigurationError
from github_manager.formats import ReturnFormat
from github_manager.utils.logger import configure_logging


class TestGitHubManager:
    """Tests for the top-level manager."""

    def test_endpoint_groups(self, manager):
        """Every endpoint group is available."""
        assert isinstance(manager.caches, CachesEndpoint)
        assert isinstance(manager.commit_comments, CommitCommentsEndpoint)
        assert isinstance(manager.contents, ContentsEndpoint)
        assert isinstance(manager.orgs, OrgsEndpoint)
        assert isinstance(manager.repos, ReposEndpoint)

    def test_keyword_overrides(self):
        """Keyword arguments end up in the config."""
        with GitHubManager(
            token="ghp_x", timeout=10.0, per_page=50, return_format="string"
        ) as manager:
            assert manager.config.timeout == 10.0
            assert manager.config.per_page == 50
            assert manager.config.return_format is ReturnFormat.STRING
            assert manager.is_authenticated

    def test_config_with_overrides(self, config):
        """A passed config is used, with keyword overrides on top."""
        with GitHubManager(config=config, max_retries=5) as manager:
            assert manager.config.max_retries == 5
            assert manager.config.token == config.token

    def test_config_without_overrides_is_kept(self, config):
        """A passed config is used as is."""
        with GitHubManager(config=config) as manager:
            assert manager.config is config

    def test_token_from_environment(self, monkeypatch):
        """GITHUB_TOKEN is picked up when no token is given."""
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_env")
        with GitHubManager() as manager:
            assert manager.is_authenticated

    def test_invalid_config(self):
        """Bad settings fail at construction."""
        with pytest.raises(ConfigurationError):
            GitHubManager(base_url="not-a-url")

    def test_cache_toggle(self):
        """The cache exists only when enabled."""
        with GitHubManager(cache_enabled=False) as manager:
            assert manager.cache is None
        with GitHubManager(cache_enabled=True) as manager:
            assert manager.cache is not None

    def test_repr(self, anonymous_manager):
        """repr shows the base URL and auth state."""
        assert "anonymous" in repr(anonymous_manager)
        assert "api.github.com" in repr(anonymous_manager)

    def test_enterprise_base_url(self, github):
        """Requests go to a GitHub Enterprise Server URL."""
        github.add("GET", "/api/v3/orgs/github", json_body={"login": "github"})
        with GitHubManager(
            token="ghp_x",
            base_url="https://ghe.example.com/api/v3",
            transport=httpx.MockTransport(github.handler),
        ) as manager:
            assert manager.orgs.get("github").login == "github"
        assert github.last_request.url.host == "ghe.example.com"

    def test_last_status_code(self, github, manager):
        """The last status code is tracked."""
        assert manager.last_status_code is None
        github.add("GET", "/orgs/github", json_body={"login": "github"})
        manager.orgs.get("github")
        assert manager.last_status_code == 200


class TestAuth:
    """Tests for authentication strategies."""

    def test_create_auth(self):
        """A token selects TokenAuth, nothing selects NoAuth."""
        assert isinstance(create_auth("ghp_abc"), TokenAuth)
        assert isinstance(create_auth(None), NoAuth)
        assert isinstance(create_auth(""), NoAuth)

    def test_token_masked(self):
        """The token never shows in repr."""
        auth = TokenAuth("ghp_supersecret")
        assert "supersecret" not in repr(auth)
        assert auth.is_authenticated

    def test_blank_token_rejected(self):
        """Whitespace isn't a token."""
        with pytest.raises(ValueError):
            TokenAuth("   ")

    def test_apply(self):
        """The bearer header is set."""
        authenticated = TokenAuth("ghp_abc").apply(httpx.Request("GET", "https://api.github.com/"))
        anonymous = NoAuth().apply(httpx.Request("GET", "https://api.github.com/"))
        assert authenticated.headers["Authorization"] == "Bearer ghp_abc"
        assert "Authorization" not in anonymous.headers


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_attaches_handler(self):
        """Library records reach the configured stream."""
        stream = io.StringIO()
        library_logger = logging.getLogger("github_manager")
        handler = configure_logging(level=logging.DEBUG, format_string="%(message)s", stream=stream)
        try:
            logging.getLogger("github_manager.endpoints.base").warning("hello %s", "world")
        finally:
            library_logger.removeHandler(handler)
            library_logger.setLevel(logging.WARNING)

        assert stream.getvalue() == "hello world\n"

    def test_quiet_by_default(self):
        """The library logger only passes warnings by default."""
        assert logging.getLogger("github_manager").level == logging.WARNING
