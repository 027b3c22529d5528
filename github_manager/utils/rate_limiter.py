"""Client-side view of GitHub's rate limit buckets.

Every response updates the bucket named by X-RateLimit-Resource (core
when absent) from X-RateLimit-Limit, X-RateLimit-Remaining and
X-RateLimit-Reset. Before a request, HTTPClient sleeps until the reset
if the bucket has dropped into the configured reserve.

"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime

logger = logging.getLogger(__name__)


@dataclass
class RateLimitInfo:
    """Last reported state of one bucket."""

    limit: int
    remaining: int
    reset_at: datetime
    resource: str = "core"

    @property
    def reset_timestamp(self) -> float:
        return self.reset_at.timestamp()


@dataclass
class RateLimiter:
    """Tracks rate limit headers and throttles before the limit is hit.

    Attributes:
        buffer: Share of each bucket kept in reserve (0.0-1.0).

    Example:
        >>> limiter = RateLimiter(buffer=0.1)
        >>> limiter.update_from_headers(response.headers)
        >>> limiter.wait_if_needed("core")

    """

    buffer: float = 0.1
    _limits: dict[str, RateLimitInfo] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def update_from_headers(self, headers: Mapping[str, str]) -> RateLimitInfo | None:
        """Store the bucket state carried by a response.

        Returns:
            The stored state, or None when the headers are missing or malformed.

        """
        lowered = {key.lower(): value for key, value in headers.items()}
        resource = lowered.get("x-ratelimit-resource") or "core"
        limit = lowered.get("x-ratelimit-limit")
        remaining = lowered.get("x-ratelimit-remaining")
        reset = lowered.get("x-ratelimit-reset")
        if not (limit and remaining and reset):
            return None

        try:
            info = RateLimitInfo(
                limit=int(limit),
                remaining=int(remaining),
                reset_at=datetime.fromtimestamp(int(reset)),
                resource=resource,
            )
        except (ValueError, OverflowError):
            logger.warning("Ignoring malformed rate limit headers for %s", resource)
            return None

        with self._lock:
            self._limits[resource] = info
        logger.debug(
            "Rate limit for %s: %d/%d (resets at %s)",
            resource,
            info.remaining,
            info.limit,
            info.reset_at.isoformat(),
        )
        return info

    def get_limit_info(self, resource: str = "core") -> RateLimitInfo | None:
        with self._lock:
            return self._limits.get(resource)

    def get_remaining(self, resource: str = "core") -> int | None:
        """Requests left in a bucket, None if no response reported it yet."""
        info = self.get_limit_info(resource)
        return info.remaining if info else None

    def get_reset_time(self, resource: str = "core") -> datetime | None:
        """When a bucket resets, None if unknown."""
        info = self.get_limit_info(resource)
        return info.reset_at if info else None

    def should_throttle(self, resource: str = "core") -> bool:
        """Whether the bucket is inside its reserve and hasn't reset yet."""
        info = self.get_limit_info(resource)
        if info is None or time.time() > info.reset_timestamp:
            return False
        return info.remaining <= int(info.limit * self.buffer)

    def wait_if_needed(self, resource: str = "core") -> float:
        """Sleep until the bucket resets if it is inside its reserve.

        Returns:
            Seconds slept, 0 when no wait was needed.

        """
        info = self.get_limit_info(resource)
        if info is None or not self.should_throttle(resource):
            return 0.0

        wait_time = max(0.0, info.reset_timestamp - time.time())
        if wait_time > 0:
            logger.info("Rate limit reserve reached for %s, waiting %.2fs", resource, wait_time)
            time.sleep(wait_time)
        return wait_time

    def __repr__(self) -> str:
        with self._lock:
            resources = list(self._limits)
        return f"RateLimiter(buffer={self.buffer}, resources={resources})"
