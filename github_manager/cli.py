"""Command-line interface for the GitHub Manager.

Usage:
    github-manager repo octocat/hello-world
    github-manager org github --format json
    github-manager cache-usage octocat/hello-world
    github-manager caches octocat/hello-world --sort size_in_bytes
    github-manager comments octocat/hello-world --commit 6dcb09b
    github-manager readme octocat/hello-world
    github-manager archive octocat/hello-world ./downloads --zip
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Callable
from typing import Any

from github_manager import GitHubManager
from github_manager.exceptions import GitHubError, NotFoundError, RateLimitError
from github_manager.formats import ReturnFormat
from github_manager.models import ArchiveFormat, CacheSort
from github_manager.utils.logger import configure_logging

# ============================================================================
# Display Utilities
# ============================================================================


def format_header(text: str) -> str:
    """Format a header string."""
    return f"\n{'=' * 60}\n  {text}\n{'=' * 60}"


def format_json(data: Any) -> str:
    """Format data as JSON."""
    return json.dumps(data, indent=2, default=str)


def format_size(size: int) -> str:
    """Render a byte count for humans."""
    value = float(size)
    for unit in ("B", "KB", "MB"):
        if value < 1024:
            return f"{value:.0f} B" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"


def emit(result: Any, fmt: ReturnFormat, render: Callable[[Any], None]) -> None:
    """Print a result in the shape it was requested in."""
    if fmt is ReturnFormat.STRING:
        print(result)
    elif fmt is ReturnFormat.JSON:
        print(format_json(result))
    else:
        render(result)


# ============================================================================
# Command Handlers
# ============================================================================


def cmd_repo(manager: GitHubManager, repository: str, fmt: ReturnFormat) -> int:
    """Fetch and display repository info."""

    def render(repo: Any) -> None:
        print(format_header(f"Repository: {repo.full_name}"))
        print(f"  Description:  {repo.description or 'N/A'}")
        print(f"  Visibility:   {repo.visibility.value}")
        print(f"  Language:     {repo.language or 'N/A'}")
        print(f"  Stars:        {repo.stargazers_count:,}")
        print(f"  Forks:        {repo.forks_count:,}")
        print(f"  Topics:       {', '.join(repo.topics) or 'N/A'}")
        license_name = repo.license.name if repo.license else "N/A"
        print(f"  License:      {license_name}")
        print(f"  URL:          {repo.html_url}")

    try:
        emit(manager.repos.get(repository, return_format=fmt), fmt, render)
        return 0
    except NotFoundError:
        print(f"Error: Repository '{repository}' not found", file=sys.stderr)
        return 1


def cmd_org(manager: GitHubManager, name: str, fmt: ReturnFormat) -> int:
    """Fetch organization info."""

    def render(org: Any) -> None:
        print(format_header(f"Organization: {org.login}"))
        print(f"  Name:         {org.name or 'N/A'}")
        print(f"  Description:  {org.description or 'N/A'}")
        print(f"  Location:     {org.location or 'N/A'}")
        print(f"  Public Repos: {org.public_repos}")
        print(f"  URL:          {org.html_url}")

    try:
        emit(manager.orgs.get(name, return_format=fmt), fmt, render)
        return 0
    except NotFoundError:
        print(f"Error: Organization '{name}' not found", file=sys.stderr)
        return 1


def cmd_cache_usage(
    manager: GitHubManager, target: str, is_org: bool, fmt: ReturnFormat
) -> int:
    """Show Actions cache usage of a repository or an organization."""
    if is_org:
        usage = manager.caches.get_organization_usage(target, return_format=fmt)

        def render(result: Any) -> None:
            print(format_header(f"Actions cache usage: {target}"))
            print(f"  Active caches: {result.total_active_caches_count}")
            print(f"  Total size:    {format_size(result.total_active_caches_size_in_bytes)}")

    else:
        usage = manager.caches.get_repository_usage(target, return_format=fmt)

        def render(result: Any) -> None:
            print(format_header(f"Actions cache usage: {result.full_name or target}"))
            print(f"  Active caches: {result.active_caches_count}")
            print(f"  Total size:    {format_size(result.active_caches_size_in_bytes)}")

    emit(usage, fmt, render)
    return 0


def cmd_caches(
    manager: GitHubManager, repository: str, sort: str, limit: int, fmt: ReturnFormat
) -> int:
    """List Actions caches of a repository."""

    def render(caches: Any) -> None:
        print(format_header(f"Actions caches: {repository} ({caches.total_count} total)"))
        for i, cache in enumerate(caches.sorted_by(sort)[:limit], 1):
            print(f"  {i:2}. {format_size(cache.size_in_bytes):>10}  {cache.key}  [{cache.ref}]")

    result = manager.caches.list_caches(
        repository, sort=sort, per_page=min(limit, 100), return_format=fmt
    )
    emit(result, fmt, render)
    return 0


def cmd_comments(
    manager: GitHubManager, repository: str, commit: str | None, limit: int, fmt: ReturnFormat
) -> int:
    """List commit comments of a repository or of one commit."""

    def render(comments: Any) -> None:
        title = f"{repository}@{commit[:7]}" if commit else repository
        print(format_header(f"Commit comments: {title}"))
        for comment in comments[:limit]:
            author = comment.user.login if comment.user else "unknown"
            where = f" {comment.path}:{comment.line}" if comment.path else ""
            print(f"  #{comment.id} {author} on {(comment.commit_id or '')[:7]}{where}")
            print(f"      {(comment.body or '').splitlines()[0] if comment.body else ''}")

    per_page = min(limit, 100)
    if commit:
        result = manager.commit_comments.list_for_commit(
            repository, commit, per_page=per_page, return_format=fmt
        )
    else:
        result = manager.commit_comments.list_for_repository(
            repository, per_page=per_page, return_format=fmt
        )
    emit(result, fmt, render)
    return 0


def cmd_readme(
    manager: GitHubManager,
    repository: str,
    directory: str | None,
    ref: str | None,
    fmt: ReturnFormat,
) -> int:
    """Print the README of a repository."""

    def render(readme: Any) -> None:
        print(readme.decoded_content().decode("utf-8", errors="replace"))

    try:
        result = manager.contents.get_readme(
            repository, directory=directory, ref=ref, return_format=fmt
        )
    except NotFoundError:
        print(f"Error: No README found in '{repository}'", file=sys.stderr)
        return 1
    emit(result, fmt, render)
    return 0


def cmd_archive(
    manager: GitHubManager, repository: str, destination: str, as_zip: bool, ref: str | None
) -> int:
    """Download a repository archive."""
    archive_format = ArchiveFormat.ZIPBALL if as_zip else ArchiveFormat.TARBALL
    path = manager.contents.save_archive(repository, destination, archive_format, ref=ref)
    print(f"Saved {archive_format.value} to {path}")
    return 0


def cmd_rate_limit(manager: GitHubManager) -> int:
    """Show the rate limit status seen so far."""
    try:
        manager.orgs.list_all(per_page=1)
    except GitHubError as e:
        print(f"Warning: could not refresh rate limit ({e.message})", file=sys.stderr)

    print(format_header("Rate Limit Status"))
    remaining = manager.rate_limiter.get_remaining("core")
    reset_time = manager.rate_limiter.get_reset_time("core")
    if remaining is None:
        print("  CORE       Not yet tracked")
    else:
        print(f"  CORE       {remaining} remaining")
        if reset_time:
            print(f"             Resets at: {reset_time}")
    return 0


# ============================================================================
# Argument Parser
# ============================================================================


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="github-manager",
        description="GitHub Manager - manage GitHub resources from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  github-manager repo octocat/hello-world           Repository info
  github-manager org github --format json           Organization as JSON
  github-manager cache-usage my-org --org           Actions cache usage of an org
  github-manager caches octocat/hello-world -n 5    Biggest Actions caches
  github-manager comments octocat/hello-world       Commit comments
  github-manager readme octocat/hello-world         Print the README
  github-manager archive octocat/hello-world .      Download a tarball
        """,
    )

    parser.add_argument("--token", "-t", help="GitHub token (or set GITHUB_TOKEN)")
    parser.add_argument(
        "--format",
        "-f",
        choices=[member.value for member in ReturnFormat],
        default=ReturnFormat.LIBRARY_OBJECT.value,
        help="Output shape (default: library_object, a readable summary)",
    )
    parser.add_argument("--no-cache", action="store_true", help="Disable caching")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log HTTP activity")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    p = subparsers.add_parser("repo", help="Get repository info")
    p.add_argument("repository", help="Repository as owner/name")

    p = subparsers.add_parser("org", help="Get organization info")
    p.add_argument("name", help="Organization login")

    p = subparsers.add_parser("cache-usage", help="Show Actions cache usage")
    p.add_argument("target", help="Repository as owner/name, or an organization with --org")
    p.add_argument("--org", action="store_true", help="Treat target as an organization")

    p = subparsers.add_parser("caches", help="List Actions caches of a repository")
    p.add_argument("repository", help="Repository as owner/name")
    p.add_argument(
        "--sort",
        choices=[member.value for member in CacheSort],
        default=CacheSort.SIZE_IN_BYTES.value,
        help="Sort field (default: size_in_bytes)",
    )
    p.add_argument("-n", "--limit", type=int, default=10, help="Number of caches (default: 10)")

    p = subparsers.add_parser("comments", help="List commit comments")
    p.add_argument("repository", help="Repository as owner/name")
    p.add_argument("--commit", help="Only comments of this commit SHA")
    p.add_argument("-n", "--limit", type=int, default=10, help="Number of comments (default: 10)")

    p = subparsers.add_parser("readme", help="Print a README")
    p.add_argument("repository", help="Repository as owner/name")
    p.add_argument("--dir", dest="directory", help="Directory to read the README from")
    p.add_argument("--ref", help="Branch, tag or commit")

    p = subparsers.add_parser("archive", help="Download a repository archive")
    p.add_argument("repository", help="Repository as owner/name")
    p.add_argument("destination", help="Target file or directory")
    p.add_argument("--zip", action="store_true", help="Download a zipball instead of a tarball")
    p.add_argument("--ref", help="Branch, tag or commit")

    subparsers.add_parser("rate-limit", help="Show rate limit status")

    return parser


# ============================================================================
# Main Entry Point
# ============================================================================

COMMANDS: dict[str, Callable[[GitHubManager, argparse.Namespace, ReturnFormat], int]] = {
    "repo": lambda m, a, f: cmd_repo(m, a.repository, f),
    "org": lambda m, a, f: cmd_org(m, a.name, f),
    "cache-usage": lambda m, a, f: cmd_cache_usage(m, a.target, a.org, f),
    "caches": lambda m, a, f: cmd_caches(m, a.repository, a.sort, a.limit, f),
    "comments": lambda m, a, f: cmd_comments(m, a.repository, a.commit, a.limit, f),
    "readme": lambda m, a, f: cmd_readme(m, a.repository, a.directory, a.ref, f),
    "archive": lambda m, a, _: cmd_archive(m, a.repository, a.destination, a.zip, a.ref),
    "rate-limit": lambda m, _, __: cmd_rate_limit(m),
}


def main(argv: list[str] | None = None, manager: GitHubManager | None = None) -> int:
    """Main entry point.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:]).
        manager: Ready client to use instead of building one from the arguments.
            It is left open; only a client built here is closed.

    Returns:
        Process exit code.

    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.verbose:
        configure_logging(level=logging.DEBUG)

    fmt = ReturnFormat.coerce(args.format)
    owned = manager is None
    if manager is None:
        manager = GitHubManager(token=args.token, cache_enabled=not args.no_cache)

    try:
        handler = COMMANDS.get(args.command)
        if handler:
            return handler(manager, args, fmt)
        parser.print_help()
        return 0
    except RateLimitError as e:
        print(f"Error: Rate limit exceeded! Resets at: {e.reset_at}", file=sys.stderr)
        return 1
    except GitHubError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    finally:
        if owned:
            manager.close()


if __name__ == "__main__":
    sys.exit(main())
