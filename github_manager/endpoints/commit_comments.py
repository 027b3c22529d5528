"""Commit comments endpoint implementation.

API Reference: https://docs.github.com/en/rest/commits/comments

"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from github_manager.endpoints.base import (
    BaseEndpoint,
    CommentRef,
    RepositoryRef,
    record_id,
    repository_path,
)
from github_manager.formats import ReturnFormat, list_decoder, model_decoder
from github_manager.models import CommitComment


class CommitCommentsEndpoint(BaseEndpoint):
    """Endpoint for comments attached to commits.

    Example:
        >>> comments = manager.commit_comments.list_for_commit("octocat/hello-world", "6dcb09b")
        >>> for comment in comments:
        ...     print(comment.user.login, comment.body)

    """

    def list_for_repository(
        self,
        repository: RepositoryRef,
        *,
        page: int | None = None,
        per_page: int | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> list[CommitComment] | Any:
        """List commit comments of a repository, oldest first.

        Args:
            repository: Repository record or "owner/name".
            page: Page number.
            per_page: Results per page.
            return_format: Output shape (defaults to the client setting).

        Returns:
            List of CommitComment objects.

        """
        response = self._http.get(
            f"{repository_path(repository)}/comments",
            params=self._build_pagination_params(page, per_page) or None,
        )
        return self._materialize(response, list_decoder(CommitComment), return_format)

    def iter_for_repository(
        self,
        repository: RepositoryRef,
        *,
        max_items: int | None = None,
    ) -> Iterator[CommitComment]:
        """Iterate over every commit comment of a repository.

        Args:
            repository: Repository record or "owner/name".
            max_items: Stop after this many comments.

        Yields:
            CommitComment objects, fetching pages as needed.

        """
        return self._iter_pages(
            f"{repository_path(repository)}/comments", CommitComment, max_items=max_items
        )

    def get(
        self,
        repository: RepositoryRef,
        comment: CommentRef,
        *,
        return_format: ReturnFormat | str | None = None,
    ) -> CommitComment | Any:
        """Get a single commit comment.

        Args:
            repository: Repository record or "owner/name".
            comment: CommitComment record or comment id.
            return_format: Output shape (defaults to the client setting).

        Returns:
            The CommitComment.

        """
        response = self._http.get(self._comment_path(repository, comment))
        return self._materialize(response, model_decoder(CommitComment), return_format)

    def update(
        self,
        repository: RepositoryRef,
        comment: CommentRef,
        *,
        body: str,
        return_format: ReturnFormat | str | None = None,
    ) -> CommitComment | Any:
        """Replace the text of a commit comment.

        Args:
            repository: Repository record or "owner/name".
            comment: CommitComment record or comment id.
            body: New comment text.
            return_format: Output shape (defaults to the client setting).

        Returns:
            The updated CommitComment.

        Raises:
            AuthenticationError: If not authenticated.

        """
        self._require_auth("update commit comments")
        response = self._http.patch(
            self._comment_path(repository, comment), json_data={"body": body}
        )
        return self._materialize(response, model_decoder(CommitComment), return_format)

    def delete(self, repository: RepositoryRef, comment: CommentRef) -> bool:
        """Delete a commit comment.

        Args:
            repository: Repository record or "owner/name".
            comment: CommitComment record or comment id.

        Returns:
            True if GitHub answered 204 No Content, False otherwise.

        """
        return self._expect_no_content("DELETE", self._comment_path(repository, comment))

    def list_for_commit(
        self,
        repository: RepositoryRef,
        commit_sha: str,
        *,
        page: int | None = None,
        per_page: int | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> list[CommitComment] | Any:
        """List the comments of one commit.

        Args:
            repository: Repository record or "owner/name".
            commit_sha: SHA of the commit.
            page: Page number.
            per_page: Results per page.
            return_format: Output shape (defaults to the client setting).

        Returns:
            List of CommitComment objects.

        """
        response = self._http.get(
            f"{repository_path(repository)}/commits/{commit_sha}/comments",
            params=self._build_pagination_params(page, per_page) or None,
        )
        return self._materialize(response, list_decoder(CommitComment), return_format)

    def create(
        self,
        repository: RepositoryRef,
        commit_sha: str,
        *,
        body: str,
        path: str | None = None,
        position: int | None = None,
        line: int | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> CommitComment | Any:
        """Comment on a commit, optionally on a line of one of its files.

        Args:
            repository: Repository record or "owner/name".
            commit_sha: SHA of the commit.
            body: Comment text.
            path: Relative path of the file to comment on.
            position: Line index in the diff to comment on.
            line: Line number in the file to comment on.
            return_format: Output shape (defaults to the client setting).

        Returns:
            The created CommitComment.

        Raises:
            AuthenticationError: If not authenticated.
            ValidationError: If GitHub rejects the comment.

        Example:
            >>> comment = manager.commit_comments.create(
            ...     "octocat/hello-world",
            ...     "6dcb09b5b57875f334f61aebed695e2e4193db5e",
            ...     body="Great stuff",
            ...     path="README.md",
            ...     line=1,
            ... )

        """
        self._require_auth("create commit comments")

        data: dict[str, Any] = self._clean_params(
            {"body": body, "path": path, "position": position, "line": line}
        )
        response = self._http.post(
            f"{repository_path(repository)}/commits/{commit_sha}/comments", json_data=data
        )
        return self._materialize(response, model_decoder(CommitComment), return_format)

    @staticmethod
    def _comment_path(repository: RepositoryRef, comment: CommentRef) -> str:
        return f"{repository_path(repository)}/comments/{record_id(comment, 'CommitComment')}"
