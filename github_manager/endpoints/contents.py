"""Repository contents endpoint implementation.

This module provides methods for GitHub's Repository Contents API:
- Read files, directories and READMEs
- Create, update and delete files (each write is a commit)
- Download tarball and zipball archives

API Reference: https://docs.github.com/en/rest/repos/contents

"""

from __future__ import annotations

import base64
import logging
from pathlib import Path
from typing import Any
from urllib.parse import quote

from github_manager.endpoints.base import BaseEndpoint, RepositoryRef, repository_path
from github_manager.formats import ReturnFormat, list_decoder, model_decoder
from github_manager.models import ArchiveFormat, ContentFile, FileContents

logger = logging.getLogger(__name__)

_decode_content_list = list_decoder(ContentFile)

_ARCHIVE_SUFFIXES = {
    ArchiveFormat.TARBALL: ".tar.gz",
    ArchiveFormat.ZIPBALL: ".zip",
}


def _decode_content(data: Any) -> ContentFile | list[ContentFile]:
    """Decode a file payload, or the entry list GitHub returns for a directory."""
    if isinstance(data, list):
        return _decode_content_list(data)
    return ContentFile.model_validate(data)


def _content_path(repository: RepositoryRef, path: str) -> str:
    return f"{repository_path(repository)}/contents/{quote(path.strip('/'), safe='/')}"


class ContentsEndpoint(BaseEndpoint):
    """Endpoint for repository files, READMEs and archives.

    Example:
        >>> readme = manager.contents.get_readme("octocat/hello-world")
        >>> print(readme.decoded_content().decode())

    """

    def get(
        self,
        repository: RepositoryRef,
        path: str = "",
        *,
        ref: str | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> ContentFile | list[ContentFile] | Any:
        """Get a file or a directory listing.

        Args:
            repository: Repository record or "owner/name".
            path: Path inside the repository ("" for the root).
            ref: Branch, tag or commit (defaults to the default branch).
            return_format: Output shape (defaults to the client setting).

        Returns:
            A ContentFile for a file, symlink or submodule; a list of
            ContentFile entries for a directory.

        """
        response = self._http.get(
            _content_path(repository, path), params=self._clean_params({"ref": ref}) or None
        )
        return self._materialize(response, _decode_content, return_format)

    def create_or_update_file(
        self,
        repository: RepositoryRef,
        path: str,
        *,
        message: str,
        content: bytes | str,
        sha: str | None = None,
        branch: str | None = None,
        committer: dict[str, str] | None = None,
        author: dict[str, str] | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> FileContents | Any:
        """Create a file, or replace it when ``sha`` is given.

        Args:
            repository: Repository record or "owner/name".
            path: Path of the file inside the repository.
            message: Commit message.
            content: New file content; base64 encoding is done here.
            sha: Blob SHA of the file being replaced (required for updates).
            branch: Target branch (defaults to the default branch).
            committer: {"name": ..., "email": ...} of the committer.
            author: {"name": ..., "email": ...} of the author.
            return_format: Output shape (defaults to the client setting).

        Returns:
            FileContents with the new file and the created commit.

        Raises:
            AuthenticationError: If not authenticated.
            ValidationError: If sha is missing or stale for an existing file.

        Example:
            >>> result = manager.contents.create_or_update_file(
            ...     "octocat/hello-world",
            ...     "notes/hello.txt",
            ...     message="Add greeting",
            ...     content="Hello, world!\\n",
            ... )
            >>> result.commit.sha

        """
        self._require_auth("write repository files")

        raw = content.encode("utf-8") if isinstance(content, str) else content
        data: dict[str, Any] = self._clean_params(
            {
                "message": message,
                "content": base64.b64encode(raw).decode("ascii"),
                "sha": sha,
                "branch": branch,
                "committer": committer,
                "author": author,
            }
        )
        response = self._http.put(_content_path(repository, path), json_data=data)
        return self._materialize(response, model_decoder(FileContents), return_format)

    def delete_file(
        self,
        repository: RepositoryRef,
        path: str,
        *,
        message: str,
        sha: str,
        branch: str | None = None,
        committer: dict[str, str] | None = None,
        author: dict[str, str] | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> FileContents | Any:
        """Delete a file.

        Args:
            repository: Repository record or "owner/name".
            path: Path of the file inside the repository.
            message: Commit message.
            sha: Blob SHA of the file being deleted.
            branch: Target branch (defaults to the default branch).
            committer: {"name": ..., "email": ...} of the committer.
            author: {"name": ..., "email": ...} of the author.
            return_format: Output shape (defaults to the client setting).

        Returns:
            FileContents whose ``content`` is None and whose commit is the deletion.

        Raises:
            AuthenticationError: If not authenticated.
            NotFoundError: If the file doesn't exist.

        """
        self._require_auth("delete repository files")

        data: dict[str, Any] = self._clean_params(
            {
                "message": message,
                "sha": sha,
                "branch": branch,
                "committer": committer,
                "author": author,
            }
        )
        response = self._http.delete(_content_path(repository, path), json_data=data)
        return self._materialize(response, model_decoder(FileContents), return_format)

    def get_readme(
        self,
        repository: RepositoryRef,
        *,
        directory: str | None = None,
        ref: str | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> ContentFile | Any:
        """Get the preferred README of a repository or of one of its directories.

        Args:
            repository: Repository record or "owner/name".
            directory: Directory to look in (None for the repository root).
            ref: Branch, tag or commit (defaults to the default branch).
            return_format: Output shape (defaults to the client setting).

        Returns:
            The README as a ContentFile.

        """
        endpoint = f"{repository_path(repository)}/readme"
        if directory and directory.strip("/"):
            endpoint += f"/{quote(directory.strip('/'), safe='/')}"

        response = self._http.get(endpoint, params=self._clean_params({"ref": ref}) or None)
        return self._materialize(response, model_decoder(ContentFile), return_format)

    def download_archive(
        self,
        repository: RepositoryRef,
        archive_format: ArchiveFormat | str = ArchiveFormat.TARBALL,
        *,
        ref: str | None = None,
    ) -> bytes:
        """Download a tarball or zipball of a repository.

        Args:
            repository: Repository record or "owner/name".
            archive_format: ArchiveFormat.TARBALL or ArchiveFormat.ZIPBALL.
            ref: Branch, tag or commit (defaults to the default branch).

        Returns:
            The archive bytes.

        """
        fmt = ArchiveFormat(archive_format)
        endpoint = f"{repository_path(repository)}/{fmt.value}"
        if ref:
            endpoint += f"/{quote(ref, safe='')}"

        response = self._http.get(endpoint, use_cache=False)
        return response.content

    def save_archive(
        self,
        repository: RepositoryRef,
        destination: str | Path,
        archive_format: ArchiveFormat | str = ArchiveFormat.TARBALL,
        *,
        ref: str | None = None,
    ) -> Path:
        """Download an archive and write it to disk.

        Args:
            repository: Repository record or "owner/name".
            destination: Target file, or an existing directory to put
                ``{owner}-{repo}[-{ref}].tar.gz`` / ``.zip`` into.
            archive_format: ArchiveFormat.TARBALL or ArchiveFormat.ZIPBALL.
            ref: Branch, tag or commit (defaults to the default branch).

        Returns:
            Path of the written file.

        Example:
            >>> manager.contents.save_archive("octocat/hello-world", "/tmp", ArchiveFormat.ZIPBALL)
            PosixPath('/tmp/octocat-hello-world.zip')

        """
        fmt = ArchiveFormat(archive_format)
        payload = self.download_archive(repository, fmt, ref=ref)

        target = Path(destination)
        if target.is_dir():
            _, owner, name = repository_path(repository).rsplit("/", 2)
            stem = f"{owner}-{name}" + (f"-{ref.replace('/', '-')}" if ref else "")
            target = target / f"{stem}{_ARCHIVE_SUFFIXES[fmt]}"
        else:
            target.parent.mkdir(parents=True, exist_ok=True)

        target.write_bytes(payload)
        logger.info("Saved %d bytes of %s to %s", len(payload), fmt.value, target)
        return target
