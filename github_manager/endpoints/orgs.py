"""Organizations endpoint implementation.

This module provides methods for GitHub's Organizations API:
- List organizations (all, the caller's, a user's)
- Get and update an organization
- Enable or disable security features for all repositories
- List the GitHub Apps installed on an organization

API Reference: https://docs.github.com/en/rest/orgs

"""

from __future__ import annotations

from typing import Any

from github_manager.endpoints.base import BaseEndpoint, OrganizationRef, org_login
from github_manager.formats import ReturnFormat, list_decoder, model_decoder
from github_manager.models import (
    Enablement,
    InstallationsList,
    Organization,
    RepositoryPermission,
    SecurityProduct,
)


class OrgsEndpoint(BaseEndpoint):
    """Endpoint for organization-related API calls.

    Example:
        >>> org = manager.orgs.get("github")
        >>> print(f"{org.name}: {org.public_repos} repos")

    """

    def list_all(
        self,
        *,
        since: int | None = None,
        per_page: int | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> list[Organization] | Any:
        """List organizations in the order they were created.

        This endpoint pages by id rather than page number: pass the id of
        the last organization seen as ``since``.

        Args:
            since: Only organizations with an id greater than this.
            per_page: Results per page.
            return_format: Output shape (defaults to the client setting).

        Returns:
            List of Organization summaries.

        """
        params = self._clean_params(
            {"since": since, **self._build_pagination_params(per_page=per_page)}
        )
        response = self._http.get("/organizations", params=params or None)
        return self._materialize(response, list_decoder(Organization), return_format)

    def get(
        self,
        org: OrganizationRef,
        *,
        return_format: ReturnFormat | str | None = None,
    ) -> Organization | Any:
        """Get an organization.

        Args:
            org: Organization record or login.
            return_format: Output shape (defaults to the client setting).

        Returns:
            Organization with full details. Billing and security fields
            are only filled for organization owners.

        Example:
            >>> org = manager.orgs.get("python")
            >>> print(org.name, org.public_repos)

        """
        response = self._http.get(f"/orgs/{org_login(org)}")
        return self._materialize(response, model_decoder(Organization), return_format)

    def update(
        self,
        org: OrganizationRef,
        *,
        billing_email: str | None = None,
        company: str | None = None,
        email: str | None = None,
        twitter_username: str | None = None,
        location: str | None = None,
        name: str | None = None,
        description: str | None = None,
        blog: str | None = None,
        has_organization_projects: bool | None = None,
        has_repository_projects: bool | None = None,
        default_repository_permission: RepositoryPermission | str | None = None,
        members_can_create_repositories: bool | None = None,
        advanced_security_enabled_for_new_repositories: bool | None = None,
        dependabot_alerts_enabled_for_new_repositories: bool | None = None,
        dependabot_security_updates_enabled_for_new_repositories: bool | None = None,
        dependency_graph_enabled_for_new_repositories: bool | None = None,
        secret_scanning_enabled_for_new_repositories: bool | None = None,
        secret_scanning_push_protection_enabled_for_new_repositories: bool | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> Organization | Any:
        """Update an organization's profile and member settings.

        Only the arguments that are given are sent.

        Args:
            org: Organization record or login.
            billing_email: Billing email address (not public).
            company: Company name.
            email: Publicly visible email address.
            twitter_username: Twitter handle.
            location: Location.
            name: Display name.
            description: Short description.
            blog: Website URL.
            has_organization_projects: Allow organization projects.
            has_repository_projects: Allow repository projects.
            default_repository_permission: Base permission for members.
            members_can_create_repositories: Let members create repositories.
            advanced_security_enabled_for_new_repositories: Default for new repositories.
            dependabot_alerts_enabled_for_new_repositories: Default for new repositories.
            dependabot_security_updates_enabled_for_new_repositories: Default for new
                repositories.
            dependency_graph_enabled_for_new_repositories: Default for new repositories.
            secret_scanning_enabled_for_new_repositories: Default for new repositories.
            secret_scanning_push_protection_enabled_for_new_repositories: Default for new
                repositories.
            return_format: Output shape (defaults to the client setting).

        Returns:
            The updated Organization.

        Raises:
            AuthenticationError: If not authenticated.
            ValidationError: If GitHub rejects a value.

        """
        self._require_auth("update organizations")

        data: dict[str, Any] = self._clean_params(
            {
                "billing_email": billing_email,
                "company": company,
                "email": email,
                "twitter_username": twitter_username,
                "location": location,
                "name": name,
                "description": description,
                "blog": blog,
                "has_organization_projects": has_organization_projects,
                "has_repository_projects": has_repository_projects,
                "default_repository_permission": default_repository_permission,
                "members_can_create_repositories": members_can_create_repositories,
                "advanced_security_enabled_for_new_repositories": (
                    advanced_security_enabled_for_new_repositories
                ),
                "dependabot_alerts_enabled_for_new_repositories": (
                    dependabot_alerts_enabled_for_new_repositories
                ),
                "dependabot_security_updates_enabled_for_new_repositories": (
                    dependabot_security_updates_enabled_for_new_repositories
                ),
                "dependency_graph_enabled_for_new_repositories": (
                    dependency_graph_enabled_for_new_repositories
                ),
                "secret_scanning_enabled_for_new_repositories": (
                    secret_scanning_enabled_for_new_repositories
                ),
                "secret_scanning_push_protection_enabled_for_new_repositories": (
                    secret_scanning_push_protection_enabled_for_new_repositories
                ),
            }
        )
        response = self._http.patch(f"/orgs/{org_login(org)}", json_data=data)
        return self._materialize(response, model_decoder(Organization), return_format)

    def set_security_feature(
        self,
        org: OrganizationRef,
        security_product: SecurityProduct | str,
        enablement: Enablement | str,
    ) -> bool:
        """Enable or disable a security feature for every repository of an organization.

        Args:
            org: Organization record or login.
            security_product: The feature to toggle.
            enablement: Enablement.ENABLE_ALL or Enablement.DISABLE_ALL.

        Returns:
            True if GitHub answered 204 No Content, False otherwise.

        Example:
            >>> manager.orgs.set_security_feature(
            ...     "my-org", SecurityProduct.DEPENDABOT_ALERTS, Enablement.ENABLE_ALL
            ... )
            True

        """
        product = SecurityProduct(security_product).value
        action = Enablement(enablement).value
        return self._expect_no_content("POST", f"/orgs/{org_login(org)}/{product}/{action}")

    def list_for_authenticated_user(
        self,
        *,
        page: int | None = None,
        per_page: int | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> list[Organization] | Any:
        """List organizations the authenticated user belongs to.

        Raises:
            AuthenticationError: If not authenticated.

        """
        self._require_auth("list your organizations")
        response = self._http.get(
            "/user/orgs", params=self._build_pagination_params(page, per_page) or None
        )
        return self._materialize(response, list_decoder(Organization), return_format)

    def list_for_user(
        self,
        username: str,
        *,
        page: int | None = None,
        per_page: int | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> list[Organization] | Any:
        """List public organization memberships of a user.

        Args:
            username: The user's login.
            page: Page number.
            per_page: Results per page.
            return_format: Output shape (defaults to the client setting).

        Returns:
            List of Organization summaries.

        """
        response = self._http.get(
            f"/users/{username}/orgs",
            params=self._build_pagination_params(page, per_page) or None,
        )
        return self._materialize(response, list_decoder(Organization), return_format)

    def list_app_installations(
        self,
        org: OrganizationRef,
        *,
        page: int | None = None,
        per_page: int | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> InstallationsList | Any:
        """List the GitHub Apps installed on an organization.

        Needs an organization owner token with the admin:read scope.

        Args:
            org: Organization record or login.
            page: Page number.
            per_page: Results per page.
            return_format: Output shape (defaults to the client setting).

        Returns:
            InstallationsList with the total count and this page.

        Raises:
            AuthenticationError: If not authenticated.

        """
        self._require_auth("list app installations")
        response = self._http.get(
            f"/orgs/{org_login(org)}/installations",
            params=self._build_pagination_params(page, per_page) or None,
        )
        return self._materialize(response, model_decoder(InstallationsList), return_format)
