"""In-memory store for GET responses.

Entries expire after a TTL but stay around so their ETag can be sent as
``If-None-Match``; a 304 answer then revives the stored response without
spending a rate limit point. HTTPClient empties the store on every write.

"""

from __future__ import annotations

import hashlib
import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """A stored response.

    Attributes:
        data: The stored value (an HTTPResponse in practice).
        etag: ETag the server sent with it, if any.
        expires_at: Unix time after which the entry is stale.

    """

    data: Any
    etag: str | None
    expires_at: float
    created_at: float = field(default_factory=time.time)

    @property
    def is_expired(self) -> bool:
        return time.time() > self.expires_at


class ResponseCache:
    """Thread-safe TTL store keyed by make_cache_key().

    Example:
        >>> cache = ResponseCache(default_ttl=300)
        >>> cache.set("GET:/orgs/github:auth", response, etag='W/"abc"')
        >>> cache.get("GET:/orgs/github:auth").etag
        'W/"abc"'

    """

    __slots__ = ("_default_ttl", "_entries", "_lock")

    def __init__(self, default_ttl: int = 300) -> None:
        self._default_ttl = default_ttl
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> CacheEntry | None:
        """Return the entry if it exists and hasn't expired."""
        entry = self.get_stale(key)
        if entry is None or entry.is_expired:
            return None
        logger.debug("Cache hit: %s", key[:60])
        return entry

    def get_stale(self, key: str) -> CacheEntry | None:
        """Return the entry whether or not it expired."""
        with self._lock:
            return self._entries.get(key)

    def set(self, key: str, data: Any, etag: str | None = None, ttl: int | None = None) -> None:
        """Store a response for ``ttl`` seconds (the default TTL when None)."""
        lifetime = self._default_ttl if ttl is None else ttl
        with self._lock:
            self._entries[key] = CacheEntry(data=data, etag=etag, expires_at=time.time() + lifetime)
        logger.debug("Cache set: %s (TTL: %ds)", key[:60], lifetime)

    def refresh_ttl(self, key: str, ttl: int | None = None) -> bool:
        """Restart the lifetime of an entry after a 304 Not Modified.

        Returns:
            False if there is no such entry.

        """
        lifetime = self._default_ttl if ttl is None else ttl
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False
            entry.expires_at = time.time() + lifetime
        return True

    def clear(self) -> int:
        """Drop every entry and return how many there were."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        if count:
            logger.debug("Cache cleared: %d entries", count)
        return count

    @property
    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def __repr__(self) -> str:
        return f"ResponseCache(size={self.size}, default_ttl={self._default_ttl})"


def make_cache_key(
    method: str,
    endpoint: str,
    params: dict[str, Any] | None = None,
    is_authenticated: bool = False,
) -> str:
    """Build the key of a request.

    Anonymous and token-backed reads never share a key. Long query strings
    are hashed to keep keys short.

    Returns:
        ``METHOD:path:auth|anon[:params]``.

    """
    key = f"{method}:{endpoint}:{'auth' if is_authenticated else 'anon'}"
    if not params:
        return key

    query = "&".join(f"{name}={value}" for name, value in sorted(params.items()))
    if len(query) > 50:
        digest = hashlib.md5(query.encode(), usedforsecurity=False).hexdigest()[:8]
        return f"{key}:p={digest}"
    return f"{key}:{query}"
