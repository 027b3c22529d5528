"""Pydantic models for GitHub API payloads.

Every record can be built two ways that behave the same:

    >>> Repository(full_name="octocat/hello-world")              # by keyword
    >>> Repository.model_validate(api_response)                    # from JSON

Missing or null fields never fail decoding: counters read back as 0,
flags as False, lists as [], everything else as None. Enumerated fields
are the exception. A value outside the known set is a validation error,
since guessing a fallback would hide a real API change.

"""

from __future__ import annotations

import base64
from datetime import datetime
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator


def _none_to_zero(value: Any) -> Any:
    return 0 if value is None else value


def _none_to_false(value: Any) -> Any:
    return False if value is None else value


def _none_to_list(value: Any) -> Any:
    return [] if value is None else value


def _none_to_dict(value: Any) -> Any:
    return {} if value is None else value


Count = Annotated[int, BeforeValidator(_none_to_zero)]
Flag = Annotated[bool, BeforeValidator(_none_to_false)]


class GitHubModel(BaseModel):
    """Base model for all GitHub API records.

    Records are read-only snapshots of a response: unknown fields are
    dropped, enumerated fields hold enum members, and both aliases and
    field names are accepted when building one.

    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )


# =============================================================================
# Enumerations
# =============================================================================


class RepositoryVisibility(str, Enum):
    """Visibility of a repository."""

    PUBLIC = "public"
    PRIVATE = "private"
    INTERNAL = "internal"


class SecurityProduct(str, Enum):
    """Security features that can be toggled for all repositories of an organization."""

    DEPENDENCY_GRAPH = "dependency_graph"
    DEPENDABOT_ALERTS = "dependabot_alerts"
    DEPENDABOT_SECURITY_UPDATES = "dependabot_security_updates"
    ADVANCED_SECURITY = "advanced_security"
    CODE_SCANNING_DEFAULT_SETUP = "code_scanning_default_setup"
    SECRET_SCANNING = "secret_scanning"
    SECRET_SCANNING_PUSH_PROTECTION = "secret_scanning_push_protection"


class Enablement(str, Enum):
    """Whether a security feature is switched on or off everywhere."""

    ENABLE_ALL = "enable_all"
    DISABLE_ALL = "disable_all"


class RepositoryPermission(str, Enum):
    """Base permission organization members get on its repositories."""

    READ = "read"
    WRITE = "write"
    ADMIN = "admin"
    NONE = "none"


class AuthorAssociation(str, Enum):
    """How the author of a comment relates to the repository."""

    COLLABORATOR = "COLLABORATOR"
    CONTRIBUTOR = "CONTRIBUTOR"
    FIRST_TIMER = "FIRST_TIMER"
    FIRST_TIME_CONTRIBUTOR = "FIRST_TIME_CONTRIBUTOR"
    MANNEQUIN = "MANNEQUIN"
    MEMBER = "MEMBER"
    NONE = "NONE"
    OWNER = "OWNER"


class CacheSort(str, Enum):
    """Sort keys for Actions caches."""

    CREATED_AT = "created_at"
    LAST_ACCESSED_AT = "last_accessed_at"
    SIZE_IN_BYTES = "size_in_bytes"


class Direction(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class ArchiveFormat(str, Enum):
    """Repository archive formats."""

    TARBALL = "tarball"
    ZIPBALL = "zipball"


class RepositoryType(str, Enum):
    """Type filter for repository listings."""

    ALL = "all"
    OWNER = "owner"
    PUBLIC = "public"
    PRIVATE = "private"
    MEMBER = "member"
    FORKS = "forks"
    SOURCES = "sources"


class RepositorySort(str, Enum):
    """Sort keys for repository listings."""

    CREATED = "created"
    UPDATED = "updated"
    PUSHED = "pushed"
    FULL_NAME = "full_name"


class RepositorySelection(str, Enum):
    """Which repositories an app installation can access."""

    ALL = "all"
    SELECTED = "selected"


# =============================================================================
# User Models
# =============================================================================


class User(GitHubModel):
    """GitHub account as embedded in other payloads (owner, author...).

    Attributes:
        login: Username (handle).
        id: Unique identifier, 0 when absent.
        type: Account type ("User", "Organization" or "Bot").
        site_admin: Whether the account is GitHub staff.

    """

    login: str | None = None
    id: Count = 0
    node_id: str | None = None
    avatar_url: str | None = None
    gravatar_id: str | None = None
    url: str | None = None
    html_url: str | None = None
    followers_url: str | None = None
    following_url: str | None = None
    gists_url: str | None = None
    starred_url: str | None = None
    subscriptions_url: str | None = None
    organizations_url: str | None = None
    repos_url: str | None = None
    events_url: str | None = None
    received_events_url: str | None = None
    type: str | None = None
    site_admin: Flag = False

    def __str__(self) -> str:
        """Return the login."""
        return self.login or ""


# =============================================================================
# Repository Models
# =============================================================================


class Permissions(GitHubModel):
    """Permissions the authenticated user holds on a repository."""

    admin: Flag = False
    maintain: Flag = False
    push: Flag = False
    triage: Flag = False
    pull: Flag = False


class License(GitHubModel):
    """Repository license summary."""

    key: str | None = None
    name: str | None = None
    spdx_id: str | None = None
    url: str | None = None
    node_id: str | None = None


class Repository(GitHubModel):
    """Repository as it appears in listings and nested payloads.

    When a payload has no ``visibility`` it's derived from ``private``.

    Example:
        >>> repo = Repository.model_validate({"full_name": "octocat/hello-world"})
        >>> repo.owner_login, repo.repo_name, repo.visibility
        ('octocat', 'hello-world', <RepositoryVisibility.PUBLIC: 'public'>)

    """

    id: Count = 0
    node_id: str | None = None
    name: str | None = None
    full_name: str | None = None
    owner: Annotated[User, BeforeValidator(_none_to_dict)] = Field(default_factory=User)
    private: Flag = False
    visibility: RepositoryVisibility = RepositoryVisibility.PUBLIC
    html_url: str | None = None
    description: str | None = None
    fork: Flag = False
    url: str | None = None

    # API links
    forks_url: str | None = None
    keys_url: str | None = None
    collaborators_url: str | None = None
    teams_url: str | None = None
    hooks_url: str | None = None
    issue_events_url: str | None = None
    events_url: str | None = None
    assignees_url: str | None = None
    branches_url: str | None = None
    tags_url: str | None = None
    blobs_url: str | None = None
    git_tags_url: str | None = None
    git_refs_url: str | None = None
    trees_url: str | None = None
    statuses_url: str | None = None
    languages_url: str | None = None
    stargazers_url: str | None = None
    contributors_url: str | None = None
    subscribers_url: str | None = None
    subscription_url: str | None = None
    commits_url: str | None = None
    git_commits_url: str | None = None
    comments_url: str | None = None
    issue_comment_url: str | None = None
    contents_url: str | None = None
    compare_url: str | None = None
    merges_url: str | None = None
    archive_url: str | None = None
    downloads_url: str | None = None
    issues_url: str | None = None
    pulls_url: str | None = None
    milestones_url: str | None = None
    notifications_url: str | None = None
    labels_url: str | None = None
    releases_url: str | None = None
    deployments_url: str | None = None

    # Clone URLs
    git_url: str | None = None
    ssh_url: str | None = None
    clone_url: str | None = None
    mirror_url: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _derive_visibility(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("visibility") is None:
            data = {**data, "visibility": "private" if data.get("private") else "public"}
        return data

    @property
    def owner_login(self) -> str | None:
        """Login of the owner, falling back to the full name prefix."""
        if self.owner.login:
            return self.owner.login
        if self.full_name and "/" in self.full_name:
            return self.full_name.split("/", 1)[0]
        return None

    @property
    def repo_name(self) -> str | None:
        """Short repository name, falling back to the full name suffix."""
        if self.name:
            return self.name
        if self.full_name and "/" in self.full_name:
            return self.full_name.split("/", 1)[1]
        return None

    def __str__(self) -> str:
        """Return the full repository name."""
        return self.full_name or ""


class CompleteRepository(Repository):
    """Repository with the full detail returned by ``GET /repos/{owner}/{repo}``.

    Attributes:
        stargazers_count: Number of stars.
        topics: Repository topics.
        template_repository: The template this repository was created from.
        permissions: The caller's permissions, when authenticated.

    """

    svn_url: str | None = None
    homepage: str | None = None
    language: str | None = None

    forks_count: Count = 0
    stargazers_count: Count = 0
    watchers_count: Count = 0
    size: Count = 0
    open_issues_count: Count = 0
    subscribers_count: Count = 0
    network_count: Count = 0
    forks: Count = 0
    open_issues: Count = 0
    watchers: Count = 0

    default_branch: str | None = None
    is_template: Flag = False
    template_repository: CompleteRepository | None = None
    topics: Annotated[list[str], BeforeValidator(_none_to_list)] = Field(default_factory=list)

    has_issues: Flag = False
    has_projects: Flag = False
    has_wiki: Flag = False
    has_pages: Flag = False
    has_downloads: Flag = False
    has_discussions: Flag = False
    archived: Flag = False
    disabled: Flag = False

    pushed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    permissions: Permissions | None = None
    allow_rebase_merge: Flag = False
    allow_squash_merge: Flag = False
    allow_merge_commit: Flag = False
    allow_auto_merge: Flag = False
    allow_forking: Flag = False
    temp_clone_token: str | None = None
    delete_branch_on_merge: Flag = False
    license: License | None = None

    @property
    def stars(self) -> int:
        """Shortcut for stargazers_count."""
        return self.stargazers_count


class RepositoriesList(GitHubModel):
    """A page of repositories with the total across all pages."""

    total_count: Count = 0
    repositories: Annotated[list[Repository], BeforeValidator(_none_to_list)] = Field(
        default_factory=list
    )


class OrganizationRepositoriesList(GitHubModel):
    """A page of fully detailed repositories with the total across all pages."""

    total_count: Count = 0
    repositories: Annotated[list[CompleteRepository], BeforeValidator(_none_to_list)] = Field(
        default_factory=list
    )


class Contributor(User):
    """A repository contributor.

    Anonymous contributors (``type`` "Anonymous") have no login; only
    ``name`` and ``email`` identify them.

    """

    contributions: Count = 0
    name: str | None = None
    email: str | None = None


class TagCommit(GitHubModel):
    """Commit a tag points at."""

    sha: str | None = None
    url: str | None = None


class RepositoryTag(GitHubModel):
    """A git tag with its archive links."""

    name: str | None = None
    commit: TagCommit | None = None
    zipball_url: str | None = None
    tarball_url: str | None = None
    node_id: str | None = None

    def __str__(self) -> str:
        return self.name or ""


class Team(GitHubModel):
    """A team with access to a repository.

    ``parent`` is the team this one is nested under, if any.

    """

    id: Count = 0
    node_id: str | None = None
    url: str | None = None
    html_url: str | None = None
    name: str | None = None
    slug: str | None = None
    description: str | None = None
    privacy: str | None = None
    permission: str | None = None
    members_url: str | None = None
    repositories_url: str | None = None
    parent: Team | None = None


class RepositoryTopics(GitHubModel):
    """The ``{"names": [...]}`` payload of the topics endpoints."""

    names: Annotated[list[str], BeforeValidator(_none_to_list)] = Field(default_factory=list)


class CodeOwnersError(GitHubModel):
    """A syntax error in a CODEOWNERS file.

    Attributes:
        line: 1-based line of the error.
        column: 1-based column of the error.
        source: The offending line.
        kind: Error kind, e.g. "Invalid pattern".
        suggestion: Suggested fix, if GitHub has one.

    """

    line: Count = 0
    column: Count = 0
    source: str | None = None
    kind: str | None = None
    suggestion: str | None = None
    message: str | None = None
    path: str | None = None


class CodeOwnersErrors(GitHubModel):
    """The ``{"errors": [...]}`` payload of the CODEOWNERS check."""

    errors: Annotated[list[CodeOwnersError], BeforeValidator(_none_to_list)] = Field(
        default_factory=list
    )


# =============================================================================
# Organization Models
# =============================================================================


class OrganizationPlan(GitHubModel):
    """Billing plan of an organization (visible to its owners)."""

    name: str | None = None
    space: Count = 0
    private_repos: Count = 0
    filled_seats: Count = 0
    seats: Count = 0


class Organization(GitHubModel):
    """GitHub organization.

    Listing endpoints return only the summary fields (login through
    description); ``GET /orgs/{org}`` fills the rest.

    """

    login: str | None = None
    id: Count = 0
    node_id: str | None = None
    url: str | None = None
    repos_url: str | None = None
    events_url: str | None = None
    hooks_url: str | None = None
    issues_url: str | None = None
    members_url: str | None = None
    public_members_url: str | None = None
    avatar_url: str | None = None
    description: str | None = None

    name: str | None = None
    company: str | None = None
    blog: str | None = None
    location: str | None = None
    email: str | None = None
    twitter_username: str | None = None
    is_verified: Flag = False
    html_url: str | None = None
    type: str | None = None
    has_organization_projects: Flag = False
    has_repository_projects: Flag = False

    public_repos: Count = 0
    public_gists: Count = 0
    followers: Count = 0
    following: Count = 0
    total_private_repos: Count = 0
    owned_private_repos: Count = 0
    private_gists: Count = 0
    disk_usage: Count = 0
    collaborators: Count = 0

    billing_email: str | None = None
    plan: OrganizationPlan | None = None
    default_repository_permission: RepositoryPermission | None = None
    members_can_create_repositories: Flag = False
    two_factor_requirement_enabled: Flag = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    advanced_security_enabled_for_new_repositories: Flag = False
    dependabot_alerts_enabled_for_new_repositories: Flag = False
    dependabot_security_updates_enabled_for_new_repositories: Flag = False
    dependency_graph_enabled_for_new_repositories: Flag = False
    secret_scanning_enabled_for_new_repositories: Flag = False
    secret_scanning_push_protection_enabled_for_new_repositories: Flag = False

    def __str__(self) -> str:
        """Return the organization login."""
        return self.login or ""


class Installation(GitHubModel):
    """A GitHub App installed on an organization.

    Attributes:
        account: Organization or user the app is installed on.
        app_slug: URL-friendly name of the app.
        repository_selection: Whether the app sees all repositories or a selection.
        permissions: Permission name to access level ("read", "write").
        events: Webhook events the app subscribes to.
        suspended_at: When the installation was suspended, None if active.

    """

    id: Count = 0
    account: User | None = None
    access_tokens_url: str | None = None
    repositories_url: str | None = None
    html_url: str | None = None
    app_id: Count = 0
    app_slug: str | None = None
    target_id: Count = 0
    target_type: str | None = None
    repository_selection: RepositorySelection | None = None
    permissions: Annotated[dict[str, str], BeforeValidator(_none_to_dict)] = Field(
        default_factory=dict
    )
    events: Annotated[list[str], BeforeValidator(_none_to_list)] = Field(default_factory=list)
    single_file_name: str | None = None
    has_multiple_single_files: Flag = False
    single_file_paths: Annotated[list[str], BeforeValidator(_none_to_list)] = Field(
        default_factory=list
    )
    created_at: datetime | None = None
    updated_at: datetime | None = None
    suspended_at: datetime | None = None
    suspended_by: User | None = None


class InstallationsList(GitHubModel):
    """App installations of an organization."""

    total_count: Count = 0
    installations: Annotated[list[Installation], BeforeValidator(_none_to_list)] = Field(
        default_factory=list
    )


# =============================================================================
# Commit Comment Models
# =============================================================================


class Reactions(GitHubModel):
    """Reaction counters on a comment."""

    url: str | None = None
    total_count: Count = 0
    plus_one: Count = Field(default=0, alias="+1")
    minus_one: Count = Field(default=0, alias="-1")
    laugh: Count = 0
    confused: Count = 0
    heart: Count = 0
    hooray: Count = 0
    eyes: Count = 0
    rocket: Count = 0


class CommitComment(GitHubModel):
    """A comment on a commit, optionally anchored to a file line.

    Attributes:
        body: Comment text.
        path: File the comment refers to, if any.
        position: Line index in the diff, 0 when not anchored.
        line: Line number in the file, 0 when not anchored.
        commit_id: SHA of the commented commit.

    """

    id: Count = 0
    node_id: str | None = None
    url: str | None = None
    html_url: str | None = None
    body: str | None = None
    path: str | None = None
    position: Count = 0
    line: Count = 0
    commit_id: str | None = None
    user: User | None = None
    author_association: AuthorAssociation | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    reactions: Reactions | None = None


# =============================================================================
# Actions Cache Models
# =============================================================================


class CacheUsage(GitHubModel):
    """Actions cache usage of an enterprise or organization."""

    total_active_caches_size_in_bytes: Count = 0
    total_active_caches_count: Count = 0


class RepositoryCacheUsage(GitHubModel):
    """Actions cache usage of a single repository."""

    full_name: str | None = None
    active_caches_size_in_bytes: Count = 0
    active_caches_count: Count = 0


class RepositoriesCacheUsagesList(GitHubModel):
    """Per-repository cache usage across an organization."""

    total_count: Count = 0
    repository_cache_usages: Annotated[
        list[RepositoryCacheUsage], BeforeValidator(_none_to_list)
    ] = Field(default_factory=list)


class ActionCache(GitHubModel):
    """A single Actions cache entry."""

    id: Count = 0
    ref: str | None = None
    key: str | None = None
    version: str | None = None
    last_accessed_at: datetime | None = None
    created_at: datetime | None = None
    size_in_bytes: Count = 0


class RepositoryCachesList(GitHubModel):
    """The Actions caches of a repository."""

    total_count: Count = 0
    actions_caches: Annotated[list[ActionCache], BeforeValidator(_none_to_list)] = Field(
        default_factory=list
    )

    def sorted_by(
        self,
        sort: CacheSort | str = CacheSort.LAST_ACCESSED_AT,
        direction: Direction | str = Direction.DESC,
    ) -> list[ActionCache]:
        """Return the caches ordered locally.

        Caches missing the sort field go last in descending order and
        first in ascending order.

        Args:
            sort: Field to sort by.
            direction: Sort direction.

        Returns:
            A new list; the record itself is unchanged.

        Example:
            >>> biggest = caches.sorted_by(CacheSort.SIZE_IN_BYTES)[0]

        """
        field_name = CacheSort(sort).value
        reverse = Direction(direction) is Direction.DESC

        def key(cache: ActionCache) -> tuple[bool, Any]:
            value = getattr(cache, field_name)
            return (value is not None, value if value is not None else 0)

        return sorted(self.actions_caches, key=key, reverse=reverse)


# =============================================================================
# Contents Models
# =============================================================================


class ContentLinks(GitHubModel):
    """The ``_links`` block of a content payload."""

    self_url: str | None = Field(default=None, alias="self")
    git: str | None = None
    html: str | None = None


class ContentFile(GitHubModel):
    """A file, directory entry, symlink or submodule in a repository.

    ``content`` is only present when a single file was requested and is
    base64 encoded; use decoded_content() to read it.

    """

    type: str | None = None
    encoding: str | None = None
    size: Count = 0
    name: str | None = None
    path: str | None = None
    content: str | None = None
    sha: str | None = None
    url: str | None = None
    git_url: str | None = None
    html_url: str | None = None
    download_url: str | None = None
    links: ContentLinks | None = Field(default=None, alias="_links")
    target: str | None = None
    submodule_git_url: str | None = None

    def decoded_content(self) -> bytes:
        """Return the file content as bytes.

        Returns:
            Decoded bytes, or b"" when the payload carried no content.

        """
        if not self.content:
            return b""
        if self.encoding and self.encoding != "base64":
            return self.content.encode()
        return base64.b64decode(self.content)


class GitActor(GitHubModel):
    """Author or committer of a git commit."""

    name: str | None = None
    email: str | None = None
    date: datetime | None = None


class GitReference(GitHubModel):
    """Pointer to a git object (tree or parent commit)."""

    sha: str | None = None
    url: str | None = None
    html_url: str | None = None


class Verification(GitHubModel):
    """Signature verification of a commit."""

    verified: Flag = False
    reason: str | None = None
    signature: str | None = None
    payload: str | None = None


class GitCommit(GitHubModel):
    """Git commit created by a contents write."""

    sha: str | None = None
    node_id: str | None = None
    url: str | None = None
    html_url: str | None = None
    author: GitActor | None = None
    committer: GitActor | None = None
    message: str | None = None
    tree: GitReference | None = None
    parents: Annotated[list[GitReference], BeforeValidator(_none_to_list)] = Field(
        default_factory=list
    )
    verification: Verification | None = None


class FileContents(GitHubModel):
    """Result of creating, updating or deleting a file.

    ``content`` is None after a delete.

    """

    content: ContentFile | None = None
    commit: Annotated[GitCommit, BeforeValidator(_none_to_dict)] = Field(default_factory=GitCommit)
