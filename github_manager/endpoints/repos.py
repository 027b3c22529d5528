"""Repositories endpoint implementation.

This module provides methods for GitHub's Repositories API and the
repository selection used by organization-level Actions permissions:
- Get a repository, list repositories of an org, a user, the caller or everyone
- Create (directly or from a template), update, transfer and delete repositories
- Read topics, languages, contributors, tags, teams and CODEOWNERS errors
- Dispatch repository events and toggle Dependabot alerts and security fixes
- List and change which repositories may run GitHub Actions
- List repositories reachable by an app installation token

API Reference: https://docs.github.com/en/rest/repos

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from pydantic import TypeAdapter

from github_manager.endpoints.base import (
    BaseEndpoint,
    OrganizationRef,
    RepositoryRef,
    org_login,
    record_id,
    repository_path,
)
from github_manager.formats import ReturnFormat, field_decoder, list_decoder, model_decoder
from github_manager.models import (
    CodeOwnersError,
    CodeOwnersErrors,
    CompleteRepository,
    Contributor,
    Direction,
    OrganizationRepositoriesList,
    RepositoriesList,
    Repository,
    RepositorySort,
    RepositoryTag,
    RepositoryTopics,
    RepositoryType,
    RepositoryVisibility,
    Team,
)

_LANGUAGES = TypeAdapter(dict[str, int])


class ReposEndpoint(BaseEndpoint):
    """Endpoint for repository-related API calls.

    Example:
        >>> repo = manager.repos.get("python/cpython")
        >>> print(f"{repo.full_name}: {repo.stars} stars, {repo.visibility.value}")

    """

    def get(
        self,
        repository: RepositoryRef,
        *,
        return_format: ReturnFormat | str | None = None,
    ) -> CompleteRepository | Any:
        """Get a repository with full details.

        Args:
            repository: Repository record or "owner/name".
            return_format: Output shape (defaults to the client setting).

        Returns:
            CompleteRepository.

        Raises:
            NotFoundError: If the repository doesn't exist or isn't visible.

        """
        response = self._http.get(repository_path(repository))
        return self._materialize(response, model_decoder(CompleteRepository), return_format)

    def list_for_org(
        self,
        org: OrganizationRef,
        *,
        type_: RepositoryType | str | None = None,
        sort: RepositorySort | str | None = None,
        direction: Direction | str | None = None,
        page: int | None = None,
        per_page: int | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> list[CompleteRepository] | Any:
        """List repositories of an organization.

        Args:
            org: Organization record or login.
            type_: Type filter ("all", "public", "private", "forks", "sources", "member").
            sort: Sort field ("created", "updated", "pushed", "full_name").
            direction: Sort direction ("asc", "desc").
            page: Page number.
            per_page: Results per page.
            return_format: Output shape (defaults to the client setting).

        Returns:
            List of CompleteRepository objects.

        """
        params = self._listing_params(type_, sort, direction, page, per_page)
        response = self._http.get(f"/orgs/{org_login(org)}/repos", params=params or None)
        return self._materialize(response, list_decoder(CompleteRepository), return_format)

    def iter_for_org(
        self,
        org: OrganizationRef,
        *,
        type_: RepositoryType | str | None = None,
        sort: RepositorySort | str | None = None,
        direction: Direction | str | None = None,
        max_items: int | None = None,
    ) -> Iterator[CompleteRepository]:
        """Iterate over every repository of an organization.

        Example:
            >>> for repo in manager.repos.iter_for_org("github", max_items=250):
            ...     print(repo.full_name)

        """
        params = {"type": type_, "sort": sort, "direction": direction}
        return self._iter_pages(
            f"/orgs/{org_login(org)}/repos", CompleteRepository, params, max_items=max_items
        )

    def list_for_user(
        self,
        username: str,
        *,
        type_: RepositoryType | str | None = None,
        sort: RepositorySort | str | None = None,
        direction: Direction | str | None = None,
        page: int | None = None,
        per_page: int | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> list[CompleteRepository] | Any:
        """List public repositories of a user.

        Args:
            username: The user's login.
            type_: Type filter ("all", "owner", "member").
            sort: Sort field.
            direction: Sort direction.
            page: Page number.
            per_page: Results per page.
            return_format: Output shape (defaults to the client setting).

        Returns:
            List of CompleteRepository objects.

        """
        params = self._listing_params(type_, sort, direction, page, per_page)
        response = self._http.get(f"/users/{username}/repos", params=params or None)
        return self._materialize(response, list_decoder(CompleteRepository), return_format)

    def list_for_authenticated_user(
        self,
        *,
        type_: RepositoryType | str | None = None,
        sort: RepositorySort | str | None = None,
        direction: Direction | str | None = None,
        page: int | None = None,
        per_page: int | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> list[CompleteRepository] | Any:
        """List repositories the authenticated user can access.

        Raises:
            AuthenticationError: If not authenticated.

        """
        self._require_auth("list your repositories")
        params = self._listing_params(type_, sort, direction, page, per_page)
        response = self._http.get("/user/repos", params=params or None)
        return self._materialize(response, list_decoder(CompleteRepository), return_format)

    def list_public(
        self,
        *,
        since: int | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> list[Repository] | Any:
        """List public repositories in the order they were created.

        Pages by id: pass the id of the last repository seen as ``since``.

        Returns:
            List of Repository summaries.

        """
        params = self._clean_params({"since": since})
        response = self._http.get("/repositories", params=params or None)
        return self._materialize(response, list_decoder(Repository), return_format)

    # =========================================================================
    # Creating and administering repositories
    # =========================================================================

    def create_for_authenticated_user(
        self,
        name: str,
        *,
        description: str | None = None,
        homepage: str | None = None,
        private: bool | None = None,
        has_issues: bool | None = None,
        has_projects: bool | None = None,
        has_wiki: bool | None = None,
        has_discussions: bool | None = None,
        is_template: bool | None = None,
        auto_init: bool | None = None,
        gitignore_template: str | None = None,
        license_template: str | None = None,
        allow_squash_merge: bool | None = None,
        allow_merge_commit: bool | None = None,
        allow_rebase_merge: bool | None = None,
        allow_auto_merge: bool | None = None,
        delete_branch_on_merge: bool | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> CompleteRepository | Any:
        """Create a repository owned by the authenticated user.

        Only the arguments that are given are sent.

        Args:
            name: Repository name.
            description: Short description.
            homepage: Project URL.
            private: Create a private repository.
            has_issues: Enable issues.
            has_projects: Enable projects.
            has_wiki: Enable the wiki.
            has_discussions: Enable discussions.
            is_template: Make the repository usable as a template.
            auto_init: Create an initial commit with an empty README.
            gitignore_template: .gitignore template name, e.g. "Python".
            license_template: License keyword, e.g. "mit".
            allow_squash_merge: Allow squash merges.
            allow_merge_commit: Allow merge commits.
            allow_rebase_merge: Allow rebase merges.
            allow_auto_merge: Allow auto-merge on pull requests.
            delete_branch_on_merge: Delete head branches after merging.
            return_format: Output shape (defaults to the client setting).

        Returns:
            The new CompleteRepository.

        Raises:
            AuthenticationError: If not authenticated.
            ValidationError: If the name is taken or a value is rejected.

        """
        self._require_auth("create repositories")
        data = self._clean_params(
            {
                "name": name,
                "description": description,
                "homepage": homepage,
                "private": private,
                "has_issues": has_issues,
                "has_projects": has_projects,
                "has_wiki": has_wiki,
                "has_discussions": has_discussions,
                "is_template": is_template,
                "auto_init": auto_init,
                "gitignore_template": gitignore_template,
                "license_template": license_template,
                "allow_squash_merge": allow_squash_merge,
                "allow_merge_commit": allow_merge_commit,
                "allow_rebase_merge": allow_rebase_merge,
                "allow_auto_merge": allow_auto_merge,
                "delete_branch_on_merge": delete_branch_on_merge,
            }
        )
        response = self._http.post("/user/repos", json_data=data)
        return self._materialize(response, model_decoder(CompleteRepository), return_format)

    def create_for_org(
        self,
        org: OrganizationRef,
        name: str,
        *,
        description: str | None = None,
        homepage: str | None = None,
        private: bool | None = None,
        visibility: RepositoryVisibility | str | None = None,
        has_issues: bool | None = None,
        has_projects: bool | None = None,
        has_wiki: bool | None = None,
        is_template: bool | None = None,
        team_id: int | None = None,
        auto_init: bool | None = None,
        gitignore_template: str | None = None,
        license_template: str | None = None,
        allow_squash_merge: bool | None = None,
        allow_merge_commit: bool | None = None,
        allow_rebase_merge: bool | None = None,
        allow_auto_merge: bool | None = None,
        delete_branch_on_merge: bool | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> CompleteRepository | Any:
        """Create a repository in an organization.

        Takes the same settings as create_for_authenticated_user() plus
        ``visibility`` ("internal" needs an enterprise organization) and
        ``team_id``, the team granted access to the new repository.

        Raises:
            AuthenticationError: If not authenticated.
            ValidationError: If the name is taken or a value is rejected.

        """
        self._require_auth("create repositories")
        data = self._clean_params(
            {
                "name": name,
                "description": description,
                "homepage": homepage,
                "private": private,
                "visibility": visibility,
                "has_issues": has_issues,
                "has_projects": has_projects,
                "has_wiki": has_wiki,
                "is_template": is_template,
                "team_id": team_id,
                "auto_init": auto_init,
                "gitignore_template": gitignore_template,
                "license_template": license_template,
                "allow_squash_merge": allow_squash_merge,
                "allow_merge_commit": allow_merge_commit,
                "allow_rebase_merge": allow_rebase_merge,
                "allow_auto_merge": allow_auto_merge,
                "delete_branch_on_merge": delete_branch_on_merge,
            }
        )
        response = self._http.post(f"/orgs/{org_login(org)}/repos", json_data=data)
        return self._materialize(response, model_decoder(CompleteRepository), return_format)

    def create_from_template(
        self,
        template: RepositoryRef,
        name: str,
        *,
        owner: str | None = None,
        description: str | None = None,
        include_all_branches: bool | None = None,
        private: bool | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> CompleteRepository | Any:
        """Create a repository from a template repository.

        Args:
            template: The template, a record or "owner/name".
            name: Name of the new repository.
            owner: User or organization that will own it (defaults to the caller).
            description: Short description.
            include_all_branches: Copy every branch, not only the default one.
            private: Create a private repository.
            return_format: Output shape (defaults to the client setting).

        Returns:
            The new CompleteRepository.

        """
        self._require_auth("create repositories")
        data = self._clean_params(
            {
                "owner": owner,
                "name": name,
                "description": description,
                "include_all_branches": include_all_branches,
                "private": private,
            }
        )
        response = self._http.post(f"{repository_path(template)}/generate", json_data=data)
        return self._materialize(response, model_decoder(CompleteRepository), return_format)

    def update(
        self,
        repository: RepositoryRef,
        *,
        name: str | None = None,
        description: str | None = None,
        homepage: str | None = None,
        private: bool | None = None,
        visibility: RepositoryVisibility | str | None = None,
        has_issues: bool | None = None,
        has_projects: bool | None = None,
        has_wiki: bool | None = None,
        is_template: bool | None = None,
        default_branch: str | None = None,
        allow_squash_merge: bool | None = None,
        allow_merge_commit: bool | None = None,
        allow_rebase_merge: bool | None = None,
        allow_auto_merge: bool | None = None,
        allow_forking: bool | None = None,
        delete_branch_on_merge: bool | None = None,
        archived: bool | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> CompleteRepository | Any:
        """Change repository settings.

        Only the arguments that are given are sent. Passing ``name``
        renames the repository.

        Returns:
            The updated CompleteRepository.

        Raises:
            AuthenticationError: If not authenticated.
            ValidationError: If GitHub rejects a value.

        """
        self._require_auth("update repositories")
        data = self._clean_params(
            {
                "name": name,
                "description": description,
                "homepage": homepage,
                "private": private,
                "visibility": visibility,
                "has_issues": has_issues,
                "has_projects": has_projects,
                "has_wiki": has_wiki,
                "is_template": is_template,
                "default_branch": default_branch,
                "allow_squash_merge": allow_squash_merge,
                "allow_merge_commit": allow_merge_commit,
                "allow_rebase_merge": allow_rebase_merge,
                "allow_auto_merge": allow_auto_merge,
                "allow_forking": allow_forking,
                "delete_branch_on_merge": delete_branch_on_merge,
                "archived": archived,
            }
        )
        response = self._http.patch(repository_path(repository), json_data=data)
        return self._materialize(response, model_decoder(CompleteRepository), return_format)

    def transfer(
        self,
        repository: RepositoryRef,
        new_owner: str,
        *,
        new_name: str | None = None,
        team_ids: Iterable[int] | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> CompleteRepository | Any:
        """Start moving a repository to another user or organization.

        GitHub answers 202 Accepted and finishes the move in the background.

        Args:
            repository: Repository record or "owner/name".
            new_owner: Login of the receiving user or organization.
            new_name: Rename the repository while moving it.
            team_ids: Teams of the receiving organization to grant access.
            return_format: Output shape (defaults to the client setting).

        Returns:
            The repository as GitHub reports it after accepting the transfer.

        """
        self._require_auth("transfer repositories")
        data = self._clean_params(
            {
                "new_owner": new_owner,
                "new_name": new_name,
                "team_ids": list(team_ids) if team_ids is not None else None,
            }
        )
        response = self._http.post(f"{repository_path(repository)}/transfer", json_data=data)
        return self._materialize(response, model_decoder(CompleteRepository), return_format)

    def delete(self, repository: RepositoryRef) -> bool:
        """Delete a repository. Needs the delete_repo scope.

        Returns:
            True if GitHub answered 204 No Content, False otherwise.

        """
        return self._expect_no_content("DELETE", repository_path(repository))

    # =========================================================================
    # Repository metadata
    # =========================================================================

    def list_topics(
        self,
        repository: RepositoryRef,
        *,
        page: int | None = None,
        per_page: int | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> list[str] | Any:
        """List the topics of a repository.

        Returns:
            Topic names. JSON and STRING give the ``{"names": [...]}`` envelope.

        """
        response = self._http.get(
            f"{repository_path(repository)}/topics",
            params=self._build_pagination_params(page, per_page) or None,
        )
        return self._materialize(response, field_decoder(RepositoryTopics, "names"), return_format)

    def replace_topics(
        self,
        repository: RepositoryRef,
        names: Iterable[str],
        *,
        return_format: ReturnFormat | str | None = None,
    ) -> list[str] | Any:
        """Replace every topic of a repository; an empty list removes them all.

        Returns:
            The topic names now set.

        """
        self._require_auth("change repository topics")
        response = self._http.put(
            f"{repository_path(repository)}/topics", json_data={"names": list(names)}
        )
        return self._materialize(response, field_decoder(RepositoryTopics, "names"), return_format)

    def list_languages(
        self,
        repository: RepositoryRef,
        *,
        return_format: ReturnFormat | str | None = None,
    ) -> dict[str, int] | Any:
        """Get the languages of a repository.

        Returns:
            Language name to bytes of code, largest first as GitHub orders it.

        Example:
            >>> manager.repos.list_languages("octocat/hello-world")
            {'C': 78769, 'Python': 7769}

        """
        response = self._http.get(f"{repository_path(repository)}/languages")
        return self._materialize(response, _LANGUAGES.validate_python, return_format)

    def list_contributors(
        self,
        repository: RepositoryRef,
        *,
        anon: bool | None = None,
        page: int | None = None,
        per_page: int | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> list[Contributor] | Any:
        """List contributors by number of commits, most active first.

        Args:
            repository: Repository record or "owner/name".
            anon: Include contributors without a GitHub account.
            page: Page number.
            per_page: Results per page.
            return_format: Output shape (defaults to the client setting).

        Returns:
            List of Contributor records.

        """
        params = self._clean_params(
            {"anon": anon, **self._build_pagination_params(page, per_page)}
        )
        response = self._http.get(
            f"{repository_path(repository)}/contributors", params=params or None
        )
        return self._materialize(response, list_decoder(Contributor), return_format)

    def list_tags(
        self,
        repository: RepositoryRef,
        *,
        page: int | None = None,
        per_page: int | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> list[RepositoryTag] | Any:
        """List the tags of a repository."""
        response = self._http.get(
            f"{repository_path(repository)}/tags",
            params=self._build_pagination_params(page, per_page) or None,
        )
        return self._materialize(response, list_decoder(RepositoryTag), return_format)

    def list_teams(
        self,
        repository: RepositoryRef,
        *,
        page: int | None = None,
        per_page: int | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> list[Team] | Any:
        """List the teams with access to an organization repository."""
        self._require_auth("list repository teams")
        response = self._http.get(
            f"{repository_path(repository)}/teams",
            params=self._build_pagination_params(page, per_page) or None,
        )
        return self._materialize(response, list_decoder(Team), return_format)

    def list_codeowners_errors(
        self,
        repository: RepositoryRef,
        *,
        ref: str | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> list[CodeOwnersError] | Any:
        """Check the CODEOWNERS file of a repository for syntax errors.

        Args:
            repository: Repository record or "owner/name".
            ref: Branch, tag or commit to check (defaults to the default branch).
            return_format: Output shape (defaults to the client setting).

        Returns:
            The errors found; empty when the file is valid.

        Raises:
            NotFoundError: If there is no CODEOWNERS file.

        """
        params = self._clean_params({"ref": ref})
        response = self._http.get(
            f"{repository_path(repository)}/codeowners/errors", params=params or None
        )
        return self._materialize(
            response, field_decoder(CodeOwnersErrors, "errors"), return_format
        )

    def dispatch_event(
        self,
        repository: RepositoryRef,
        event_type: str,
        client_payload: dict[str, Any] | None = None,
    ) -> bool:
        """Trigger a ``repository_dispatch`` webhook and workflows.

        Args:
            repository: Repository record or "owner/name".
            event_type: Custom event name workflows filter on.
            client_payload: Extra JSON handed to the workflows.

        Returns:
            True if GitHub answered 204 No Content, False otherwise.

        """
        data = self._clean_params({"event_type": event_type, "client_payload": client_payload})
        return self._expect_no_content(
            "POST", f"{repository_path(repository)}/dispatches", json_data=data
        )

    # =========================================================================
    # Security settings
    # =========================================================================

    def vulnerability_alerts_enabled(self, repository: RepositoryRef) -> bool:
        """Check whether Dependabot alerts are on for a repository.

        Returns:
            True on 204 No Content. GitHub answers 404 when alerts are off,
            which reads as False like any other failure.

        """
        return self._expect_no_content(
            "GET", f"{repository_path(repository)}/vulnerability-alerts"
        )

    def enable_vulnerability_alerts(self, repository: RepositoryRef) -> bool:
        """Turn Dependabot alerts on.

        Returns:
            True if GitHub answered 204 No Content, False otherwise.

        """
        return self._expect_no_content(
            "PUT", f"{repository_path(repository)}/vulnerability-alerts"
        )

    def disable_vulnerability_alerts(self, repository: RepositoryRef) -> bool:
        """Turn Dependabot alerts off.

        Returns:
            True if GitHub answered 204 No Content, False otherwise.

        """
        return self._expect_no_content(
            "DELETE", f"{repository_path(repository)}/vulnerability-alerts"
        )

    def enable_automated_security_fixes(self, repository: RepositoryRef) -> bool:
        """Turn Dependabot security updates on.

        Returns:
            True if GitHub answered 204 No Content, False otherwise.

        """
        return self._expect_no_content(
            "PUT", f"{repository_path(repository)}/automated-security-fixes"
        )

    def disable_automated_security_fixes(self, repository: RepositoryRef) -> bool:
        """Turn Dependabot security updates off.

        Returns:
            True if GitHub answered 204 No Content, False otherwise.

        """
        return self._expect_no_content(
            "DELETE", f"{repository_path(repository)}/automated-security-fixes"
        )

    # =========================================================================
    # Actions repository selection
    # =========================================================================

    def list_actions_selected(
        self,
        org: OrganizationRef,
        *,
        page: int | None = None,
        per_page: int | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> OrganizationRepositoriesList | Any:
        """List repositories allowed to run GitHub Actions in an organization.

        Only meaningful when the organization's Actions policy is set to
        "selected repositories".

        Args:
            org: Organization record or login.
            page: Page number.
            per_page: Results per page.
            return_format: Output shape (defaults to the client setting).

        Returns:
            OrganizationRepositoriesList.

        """
        self._require_auth("read Actions permissions")
        response = self._http.get(
            f"/orgs/{org_login(org)}/actions/permissions/repositories",
            params=self._build_pagination_params(page, per_page) or None,
        )
        return self._materialize(
            response, model_decoder(OrganizationRepositoriesList), return_format
        )

    def set_actions_selected(
        self,
        org: OrganizationRef,
        repositories: Iterable[Repository | int],
    ) -> bool:
        """Replace the set of repositories allowed to run GitHub Actions.

        Args:
            org: Organization record or login.
            repositories: Repository records or repository ids.

        Returns:
            True if GitHub answered 204 No Content, False otherwise.

        """
        ids = [record_id(repository, "Repository") for repository in repositories]
        return self._expect_no_content(
            "PUT",
            f"/orgs/{org_login(org)}/actions/permissions/repositories",
            json_data={"selected_repository_ids": ids},
        )

    def enable_actions_repository(self, org: OrganizationRef, repository: Repository | int) -> bool:
        """Add one repository to the Actions selection.

        Returns:
            True if GitHub answered 204 No Content, False otherwise.

        """
        repository_id = record_id(repository, "Repository")
        return self._expect_no_content(
            "PUT", f"/orgs/{org_login(org)}/actions/permissions/repositories/{repository_id}"
        )

    def disable_actions_repository(
        self, org: OrganizationRef, repository: Repository | int
    ) -> bool:
        """Remove one repository from the Actions selection.

        Returns:
            True if GitHub answered 204 No Content, False otherwise.

        """
        repository_id = record_id(repository, "Repository")
        return self._expect_no_content(
            "DELETE", f"/orgs/{org_login(org)}/actions/permissions/repositories/{repository_id}"
        )

    def list_installation_repositories(
        self,
        *,
        page: int | None = None,
        per_page: int | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> RepositoriesList | Any:
        """List repositories an installation access token can reach.

        Requires a GitHub App installation token as the client token.

        Returns:
            RepositoriesList.

        """
        self._require_auth("list installation repositories")
        response = self._http.get(
            "/installation/repositories",
            params=self._build_pagination_params(page, per_page) or None,
        )
        return self._materialize(response, model_decoder(RepositoriesList), return_format)

    def _listing_params(
        self,
        type_: RepositoryType | str | None,
        sort: RepositorySort | str | None,
        direction: Direction | str | None,
        page: int | None,
        per_page: int | None,
    ) -> dict[str, Any]:
        return self._clean_params(
            {
                "type": type_,
                "sort": sort,
                "direction": direction,
                **self._build_pagination_params(page, per_page),
            }
        )
