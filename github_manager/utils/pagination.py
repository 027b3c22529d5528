"""Link-header pagination for list endpoints.

GitHub Link Header Format:
    Link: <url>; rel="next", <url>; rel="last", <url>; rel="first", <url>; rel="prev"

"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")

# <url>; rel="relation"
LINK_PATTERN = re.compile(r'<([^>]+)>;\s*rel="([^"]+)"')

PageFetcher = Callable[[int, int], tuple[list[T], Mapping[str, str]]]


@dataclass
class LinkInfo:
    """Parsed pagination links from GitHub's Link header."""

    next_url: str | None = None
    prev_url: str | None = None
    first_url: str | None = None
    last_url: str | None = None

    @property
    def has_next(self) -> bool:
        """Check if there's a next page."""
        return self.next_url is not None

    @property
    def last_page(self) -> int | None:
        """Page number of the last page, if GitHub announced it."""
        if not self.last_url:
            return None
        match = re.search(r"[?&]page=(\d+)", self.last_url)
        return int(match.group(1)) if match else None


def parse_link_header(link_header: str | None) -> LinkInfo:
    """Parse GitHub's Link header into structured data.

    Args:
        link_header: The Link header value.

    Returns:
        LinkInfo with parsed URLs.

    Example:
        >>> header = '<https://api.github.com/orgs/github/repos?page=2>; rel="next"'
        >>> parse_link_header(header).next_url
        'https://api.github.com/orgs/github/repos?page=2'

    """
    links = LinkInfo()
    if not link_header:
        return links

    for match in LINK_PATTERN.finditer(link_header):
        url, rel = match.groups()
        if rel == "next":
            links.next_url = url
        elif rel == "prev":
            links.prev_url = url
        elif rel == "first":
            links.first_url = url
        elif rel == "last":
            links.last_url = url

    return links


def paginate(
    fetch_func: PageFetcher[T],
    per_page: int = 100,
    max_items: int | None = None,
) -> Iterator[T]:
    """Lazily walk every page of a list endpoint.

    Pages are requested only when the previous one has been consumed,
    so breaking out of the loop stops further requests.

    Args:
        fetch_func: Takes (page, per_page), returns (items, headers).
        per_page: Items per page.
        max_items: Stop after this many items (None for unlimited).

    Yields:
        Individual items from all pages.

    Example:
        >>> for comment in manager.commit_comments.iter_for_repository("octocat/hello-world"):
        ...     print(comment.body)

    """
    page = 1
    yielded = 0

    while True:
        items, headers = fetch_func(page, per_page)
        if not items:
            return

        for item in items:
            yield item
            yielded += 1
            if max_items and yielded >= max_items:
                return

        link = headers.get("Link") or headers.get("link")
        if not parse_link_header(link).has_next:
            return

        page += 1
