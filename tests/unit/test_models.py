"""Unit tests for Pydantic models."""

from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import ValidationError as PydanticValidationError

from github_manager.models import (
    ActionCache,
    CacheSort,
    CommitComment,
    CompleteRepository,
    ContentFile,
    Direction,
    FileContents,
    Organization,
    RepositoriesCacheUsagesList,
    Repository,
    RepositoryCachesList,
    RepositoryPermission,
    RepositoryVisibility,
    User,
)


class TestUserModel:
    """Tests for the User model."""

    def test_parse_user(self, sample_user_response):
        """Test parsing an embedded user."""
        user = User.model_validate(sample_user_response)
        assert user.login == "octocat"
        assert user.id == 1
        assert str(user) == "octocat"

    def test_empty_payload(self):
        """Missing fields fall back to defaults."""
        user = User.model_validate({"id": None, "site_admin": None})
        assert user.login is None
        assert user.id == 0
        assert user.site_admin is False


class TestRepositoryModel:
    """Tests for Repository and CompleteRepository."""

    def test_parse_full_repository(self, sample_repo_response):
        """Test parsing a full repository response."""
        repo = CompleteRepository.model_validate(sample_repo_response)

        assert repo.full_name == "octocat/Hello-World"
        assert repo.owner.login == "octocat"
        assert repo.stars == 80
        assert repo.forks_count == 9
        assert repo.topics == ["octocat", "api", "example"]
        assert repo.license is not None and repo.license.spdx_id == "MIT"
        assert repo.permissions is not None and repo.permissions.pull
        assert isinstance(repo.created_at, datetime)
        assert str(repo) == "octocat/Hello-World"

    def test_keyword_and_json_construction_agree(self):
        """Both ways of building a record give the same value."""
        from_json = Repository.model_validate({"full_name": "octocat/hello-world", "id": 7})
        by_keyword = Repository(full_name="octocat/hello-world", id=7)
        assert from_json == by_keyword

    def test_nulls_become_defaults(self):
        """Null counters, flags and lists read back as empty values."""
        repo = CompleteRepository.model_validate(
            {
                "stargazers_count": None,
                "archived": None,
                "topics": None,
                "owner": None,
            }
        )
        assert repo.stargazers_count == 0
        assert repo.archived is False
        assert repo.topics == []
        assert repo.owner.login is None
        assert repo.description is None

    @pytest.mark.parametrize(
        ("payload", "expected"),
        [
            ({"private": True}, "private"),
            ({"private": False}, "public"),
            ({}, "public"),
            ({"private": True, "visibility": "internal"}, "internal"),
        ],
    )
    def test_visibility(self, payload, expected):
        """Visibility is read, or derived from the private flag."""
        repo = Repository.model_validate(payload)
        assert repo.visibility is RepositoryVisibility(expected)

    def test_unknown_visibility_rejected(self):
        """An unknown visibility is a validation error."""
        with pytest.raises(PydanticValidationError):
            Repository.model_validate({"visibility": "secret"})

    def test_names_from_full_name(self):
        """Owner and name fall back to full_name."""
        repo = Repository(full_name="octocat/hello-world")
        assert repo.owner_login == "octocat"
        assert repo.repo_name == "hello-world"

    def test_template_repository_is_nested(self, sample_repo_response):
        """A template repository decodes as a full repository."""
        payload = {**sample_repo_response, "template_repository": {"full_name": "octocat/tpl"}}
        repo = CompleteRepository.model_validate(payload)
        assert isinstance(repo.template_repository, CompleteRepository)
        assert repo.template_repository.full_name == "octocat/tpl"

    def test_unknown_fields_ignored(self):
        """Fields added to the API later don't break decoding."""
        repo = Repository.model_validate({"full_name": "a/b", "brand_new_field": 1})
        assert repo.full_name == "a/b"

    def test_records_are_read_only(self):
        """Assigning to a decoded record fails."""
        repo = Repository.model_validate({"full_name": "a/b"})
        with pytest.raises(PydanticValidationError):
            repo.full_name = "c/d"
        assert repo.full_name == "a/b"


class TestOrganizationModel:
    """Tests for the Organization model."""

    def test_parse_organization(self, sample_org_response):
        """Test parsing a full organization response."""
        org = Organization.model_validate(sample_org_response)

        assert org.login == "github"
        assert org.public_repos == 2
        assert org.plan is not None and org.plan.seats == 0
        assert org.default_repository_permission == RepositoryPermission.READ
        assert org.dependabot_alerts_enabled_for_new_repositories is True
        assert org.secret_scanning_enabled_for_new_repositories is False
        assert str(org) == "github"

    def test_unknown_permission_rejected(self):
        """An unknown base permission is a validation error."""
        with pytest.raises(PydanticValidationError):
            Organization.model_validate({"default_repository_permission": "owner"})


class TestCommitCommentModel:
    """Tests for the CommitComment model."""

    def test_parse_comment(self, sample_commit_comment_response):
        """Test parsing a commit comment with reactions."""
        comment = CommitComment.model_validate(sample_commit_comment_response)

        assert comment.body == "Great stuff"
        assert comment.line == 14
        assert comment.user is not None and comment.user.login == "octocat"
        assert comment.author_association == "COLLABORATOR"
        assert comment.reactions is not None
        assert comment.reactions.plus_one == 2
        assert comment.reactions.heart == 1
        assert comment.reactions.rocket == 0

    def test_unanchored_comment(self):
        """A comment without a file position has zero line and position."""
        comment = CommitComment.model_validate({"id": 2, "body": "LGTM", "line": None})
        assert comment.path is None
        assert comment.line == 0
        assert comment.position == 0

    def test_unknown_association_rejected(self):
        """An unknown author association is a validation error."""
        with pytest.raises(PydanticValidationError):
            CommitComment.model_validate({"author_association": "STRANGER"})


class TestCacheModels:
    """Tests for the Actions cache models."""

    def test_repository_usages(self):
        """Usage lists decode each repository entry."""
        usages = RepositoriesCacheUsagesList.model_validate(
            {
                "total_count": 1,
                "repository_cache_usages": [
                    {
                        "full_name": "octo-org/Hello-World",
                        "active_caches_size_in_bytes": 2322142,
                        "active_caches_count": 3,
                    }
                ],
            }
        )
        assert usages.repository_cache_usages[0].active_caches_count == 3

    def test_sorted_by_size(self, sample_caches_response):
        """Caches sort locally by size."""
        caches = RepositoryCachesList.model_validate(sample_caches_response)
        ordered = caches.sorted_by(CacheSort.SIZE_IN_BYTES, Direction.DESC)
        assert [cache.id for cache in ordered] == [506, 507, 505]

    def test_sorted_by_last_access_puts_missing_last(self, sample_caches_response):
        """Caches without the sort field go last in descending order."""
        caches = RepositoryCachesList.model_validate(sample_caches_response)
        assert [cache.id for cache in caches.sorted_by()] == [506, 505, 507]
        assert [cache.id for cache in caches.sorted_by(direction="asc")] == [507, 505, 506]

    def test_sorted_by_leaves_record_unchanged(self, sample_caches_response):
        """Sorting returns a new list."""
        caches = RepositoryCachesList.model_validate(sample_caches_response)
        caches.sorted_by("size_in_bytes")
        assert [cache.id for cache in caches.actions_caches] == [505, 506, 507]

    def test_missing_size_defaults_to_zero(self):
        """A cache entry without size reads back as 0."""
        assert ActionCache.model_validate({"id": 1}).size_in_bytes == 0


class TestContentModels:
    """Tests for contents models."""

    def test_decoded_content(self, sample_content_response):
        """Base64 content is decoded, line breaks included."""
        content = ContentFile.model_validate(sample_content_response)
        assert content.decoded_content() == b"Hello World!\n"
        assert content.links is not None
        assert content.links.self_url.endswith("/contents/README.md")

    def test_no_content(self):
        """Directory entries carry no content."""
        assert ContentFile.model_validate({"type": "dir", "name": "src"}).decoded_content() == b""

    def test_file_contents_after_delete(self):
        """A delete result has no content but a commit."""
        result = FileContents.model_validate(
            {"content": None, "commit": {"sha": "7638417db6d59f3c431d3e1f261cc637155684cd"}}
        )
        assert result.content is None
        assert result.commit.sha.startswith("7638417")
