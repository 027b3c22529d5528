"""GitHub Actions cache endpoints.

Covers storage usage reporting at enterprise, organization and repository
level, listing a repository's caches and deleting them.

API Reference: https://docs.github.com/en/rest/actions/cache

"""

from __future__ import annotations

from typing import Any

from github_manager.endpoints.base import (
    BaseEndpoint,
    CacheRef,
    OrganizationRef,
    RepositoryRef,
    org_login,
    record_id,
    repository_path,
)
from github_manager.formats import ReturnFormat, model_decoder
from github_manager.models import (
    CacheSort,
    CacheUsage,
    Direction,
    RepositoriesCacheUsagesList,
    RepositoryCacheUsage,
    RepositoryCachesList,
)


class CachesEndpoint(BaseEndpoint):
    """Endpoint for GitHub Actions cache usage and cache management.

    Example:
        >>> usage = manager.caches.get_repository_usage("octocat/hello-world")
        >>> print(f"{usage.active_caches_count} caches, {usage.active_caches_size_in_bytes} bytes")

    """

    def get_enterprise_usage(
        self,
        enterprise: str,
        *,
        return_format: ReturnFormat | str | None = None,
    ) -> CacheUsage | Any:
        """Get the Actions cache usage of an enterprise.

        Args:
            enterprise: The enterprise slug.
            return_format: Output shape (defaults to the client setting).

        Returns:
            CacheUsage summed over every organization of the enterprise.

        """
        response = self._http.get(f"/enterprises/{enterprise}/actions/cache/usage")
        return self._materialize(response, model_decoder(CacheUsage), return_format)

    def get_organization_usage(
        self,
        org: OrganizationRef,
        *,
        return_format: ReturnFormat | str | None = None,
    ) -> CacheUsage | Any:
        """Get the Actions cache usage of an organization.

        Args:
            org: Organization record or login.
            return_format: Output shape (defaults to the client setting).

        Returns:
            CacheUsage summed over every repository of the organization.

        """
        response = self._http.get(f"/orgs/{org_login(org)}/actions/cache/usage")
        return self._materialize(response, model_decoder(CacheUsage), return_format)

    def list_repository_usages(
        self,
        org: OrganizationRef,
        *,
        page: int | None = None,
        per_page: int | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> RepositoriesCacheUsagesList | Any:
        """List the cache usage of each repository in an organization.

        Args:
            org: Organization record or login.
            page: Page number.
            per_page: Results per page.
            return_format: Output shape (defaults to the client setting).

        Returns:
            RepositoriesCacheUsagesList with one entry per repository.

        """
        response = self._http.get(
            f"/orgs/{org_login(org)}/actions/cache/usage-by-repository",
            params=self._build_pagination_params(page, per_page) or None,
        )
        return self._materialize(
            response, model_decoder(RepositoriesCacheUsagesList), return_format
        )

    def get_repository_usage(
        self,
        repository: RepositoryRef,
        *,
        return_format: ReturnFormat | str | None = None,
    ) -> RepositoryCacheUsage | Any:
        """Get the Actions cache usage of a repository.

        Args:
            repository: Repository record or "owner/name".
            return_format: Output shape (defaults to the client setting).

        Returns:
            RepositoryCacheUsage for the repository.

        Example:
            >>> usage = manager.caches.get_repository_usage("octocat/hello-world")
            >>> usage.active_caches_count
            3

        """
        response = self._http.get(f"{repository_path(repository)}/actions/cache/usage")
        return self._materialize(response, model_decoder(RepositoryCacheUsage), return_format)

    def list_caches(
        self,
        repository: RepositoryRef,
        *,
        ref: str | None = None,
        key: str | None = None,
        sort: CacheSort | str | None = None,
        direction: Direction | str | None = None,
        page: int | None = None,
        per_page: int | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> RepositoryCachesList | Any:
        """List the Actions caches of a repository.

        Args:
            repository: Repository record or "owner/name".
            ref: Only caches of this git reference (e.g. "refs/heads/main").
            key: Only caches whose key starts with this prefix.
            sort: Sort field.
            direction: Sort direction.
            page: Page number.
            per_page: Results per page.
            return_format: Output shape (defaults to the client setting).

        Returns:
            RepositoryCachesList with the matching caches.

        """
        params = self._clean_params(
            {
                "ref": ref,
                "key": key,
                "sort": sort,
                "direction": direction,
                **self._build_pagination_params(page, per_page),
            }
        )
        response = self._http.get(
            f"{repository_path(repository)}/actions/caches", params=params or None
        )
        return self._materialize(response, model_decoder(RepositoryCachesList), return_format)

    def delete_caches_by_key(
        self,
        repository: RepositoryRef,
        key: str,
        *,
        ref: str | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> RepositoryCachesList | Any:
        """Delete every cache of a repository with the given key.

        Args:
            repository: Repository record or "owner/name".
            key: Exact cache key to delete.
            ref: Restrict deletion to this git reference.
            return_format: Output shape (defaults to the client setting).

        Returns:
            RepositoryCachesList of the caches that were deleted.

        Raises:
            NotFoundError: If no cache matches.

        """
        self._require_auth("delete Actions caches")
        params = self._clean_params({"key": key, "ref": ref})
        response = self._http.delete(f"{repository_path(repository)}/actions/caches", params=params)
        return self._materialize(response, model_decoder(RepositoryCachesList), return_format)

    def delete_cache(self, repository: RepositoryRef, cache: CacheRef) -> bool:
        """Delete one Actions cache by id.

        Args:
            repository: Repository record or "owner/name".
            cache: ActionCache record or cache id.

        Returns:
            True if GitHub answered 204 No Content, False otherwise.

        """
        cache_id = record_id(cache, "ActionCache")
        return self._expect_no_content(
            "DELETE", f"{repository_path(repository)}/actions/caches/{cache_id}"
        )
