"""Unit tests for the repository contents endpoint."""

from __future__ import annotations

import base64

import pytest

from github_manager.exceptions import AuthenticationError, NotFoundError
from github_manager.models import ArchiveFormat, ContentFile, FileContents

REPO = "octocat/hello-world"
COMMIT = {
    "sha": "7638417db6d59f3c431d3e1f261cc637155684cd",
    "message": "my commit message",
    "author": {
        "name": "Monalisa Octocat",
        "email": "mona@github.com",
        "date": "2014-11-07T22:01:45Z",
    },
    "parents": [{"sha": "1acc419d4d6a9ce985db7be48c6349a0475975b5"}],
    "verification": {"verified": False, "reason": "unsigned"},
}


class TestReadContents:
    """Tests for reading files and directories."""

    def test_get_file(self, github, manager, sample_content_response):
        """A file path returns one decoded record."""
        github.add("GET", f"/repos/{REPO}/contents/README.md", json_body=sample_content_response)

        readme = manager.contents.get(REPO, "README.md", ref="main")

        assert isinstance(readme, ContentFile)
        assert readme.decoded_content() == b"Hello World!\n"
        assert github.last_request.url.params["ref"] == "main"

    def test_get_directory(self, github, manager):
        """A directory returns a list of entries."""
        github.add(
            "GET",
            f"/repos/{REPO}/contents/src",
            json_body=[
                {"type": "file", "name": "app.py", "path": "src/app.py", "size": 625},
                {"type": "dir", "name": "lib", "path": "src/lib", "size": 0},
            ],
        )

        entries = manager.contents.get(REPO, "/src/")

        assert [entry.name for entry in entries] == ["app.py", "lib"]
        assert all(isinstance(entry, ContentFile) for entry in entries)

    def test_path_is_quoted(self, github, manager, sample_content_response):
        """Special characters in paths are escaped."""
        github.add(
            "GET", f"/repos/{REPO}/contents/docs/my notes.md", json_body=sample_content_response
        )
        manager.contents.get(REPO, "docs/my notes.md")
        assert github.last_request.url.raw_path.startswith(
            f"/repos/{REPO}/contents/docs/my%20notes.md".encode()
        )

    def test_get_readme(self, github, manager, sample_content_response):
        """The README of the repository root."""
        github.add("GET", f"/repos/{REPO}/readme", json_body=sample_content_response)
        assert manager.contents.get_readme(REPO).name == "README.md"

    def test_get_readme_in_directory(self, github, manager, sample_content_response):
        """The README of a subdirectory."""
        github.add("GET", f"/repos/{REPO}/readme/docs", json_body=sample_content_response)

        manager.contents.get_readme(REPO, directory="docs/", ref="v1.0")

        assert github.last_request.url.path == f"/repos/{REPO}/readme/docs"
        assert github.last_request.url.params["ref"] == "v1.0"

    def test_get_readme_missing(self, github, manager):
        """No README raises NotFoundError."""
        with pytest.raises(NotFoundError):
            manager.contents.get_readme(REPO)


class TestWriteContents:
    """Tests for creating, updating and deleting files."""

    def test_create_file(self, github, manager, sample_content_response):
        """Content is base64 encoded and unset fields are left out."""
        github.add(
            "PUT",
            f"/repos/{REPO}/contents/notes/hello.txt",
            201,
            {"content": sample_content_response, "commit": COMMIT},
        )

        result = manager.contents.create_or_update_file(
            REPO, "notes/hello.txt", message="Add greeting", content="Hello, world!\n"
        )

        assert isinstance(result, FileContents)
        assert result.commit.sha == COMMIT["sha"]
        assert result.commit.author.name == "Monalisa Octocat"
        body = github.last_json()
        assert body == {
            "message": "Add greeting",
            "content": base64.b64encode(b"Hello, world!\n").decode(),
        }

    def test_update_file(self, github, manager, sample_content_response):
        """Updating sends the sha and optional branch and committer."""
        github.add(
            "PUT",
            f"/repos/{REPO}/contents/README.md",
            json_body={"content": sample_content_response, "commit": COMMIT},
        )
        committer = {"name": "Monalisa Octocat", "email": "mona@github.com"}

        manager.contents.create_or_update_file(
            REPO,
            "README.md",
            message="Update",
            content=b"\x00\x01",
            sha="3d21ec5",
            branch="dev",
            committer=committer,
        )

        body = github.last_json()
        assert body["sha"] == "3d21ec5"
        assert body["branch"] == "dev"
        assert body["committer"] == committer
        assert base64.b64decode(body["content"]) == b"\x00\x01"

    def test_delete_file(self, github, manager):
        """Deleting sends a JSON body on DELETE."""
        github.add(
            "DELETE",
            f"/repos/{REPO}/contents/README.md",
            json_body={"content": None, "commit": COMMIT},
        )

        result = manager.contents.delete_file(REPO, "README.md", message="Remove", sha="3d21ec5")

        assert result.content is None
        assert result.commit.sha == COMMIT["sha"]
        assert github.last_request.method == "DELETE"
        assert github.last_json() == {"message": "Remove", "sha": "3d21ec5"}

    def test_writes_require_token(self, github, anonymous_manager):
        """Anonymous managers can't write files."""
        with pytest.raises(AuthenticationError):
            anonymous_manager.contents.create_or_update_file(
                REPO, "a.txt", message="m", content="x"
            )
        with pytest.raises(AuthenticationError):
            anonymous_manager.contents.delete_file(REPO, "a.txt", message="m", sha="abc")
        assert github.requests == []


class TestArchives:
    """Tests for archive downloads."""

    def test_download_tarball(self, github, manager):
        """The tarball bytes are returned unchanged."""
        payload = b"\x1f\x8b\x08\x00fake-tarball"
        github.add(
            "GET",
            f"/repos/{REPO}/tarball",
            content=payload,
            headers={"Content-Type": "application/x-gzip"},
        )

        assert manager.contents.download_archive(REPO) == payload

    def test_download_zipball_at_ref(self, github, manager):
        """A ref is appended to the archive path."""
        github.add("GET", f"/repos/{REPO}/zipball/v1.0", content=b"PK\x03\x04")

        data = manager.contents.download_archive(REPO, ArchiveFormat.ZIPBALL, ref="v1.0")

        assert data == b"PK\x03\x04"

    def test_invalid_archive_format(self, manager):
        """Unknown archive formats are rejected."""
        with pytest.raises(ValueError):
            manager.contents.download_archive(REPO, "rar")

    def test_save_archive_to_directory(self, github, manager, tmp_path):
        """A directory destination gets a generated file name."""
        github.add("GET", f"/repos/{REPO}/zipball/feature/x", content=b"PK\x03\x04")

        path = manager.contents.save_archive(REPO, tmp_path, "zipball", ref="feature/x")

        assert path == tmp_path / "octocat-hello-world-feature-x.zip"
        assert path.read_bytes() == b"PK\x03\x04"

    def test_save_archive_to_file(self, github, manager, tmp_path):
        """A file destination is written as is, creating parents."""
        github.add("GET", f"/repos/{REPO}/tarball", content=b"tar-bytes")
        target = tmp_path / "out" / "archive.tar.gz"

        path = manager.contents.save_archive(REPO, target)

        assert path == target
        assert target.read_bytes() == b"tar-bytes"
