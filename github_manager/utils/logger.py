"""Logging configuration for the GitHub Manager.

Every module logs through ``logging.getLogger(__name__)``, so all records
end up under the ``github_manager`` logger configured here.

Example:
    >>> import logging
    >>> logging.getLogger("github_manager").setLevel(logging.DEBUG)

"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

logger = logging.getLogger("github_manager")

# Quiet unless the application opts in
logger.setLevel(logging.WARNING)
logger.addHandler(logging.NullHandler())


def configure_logging(
    level: int = logging.INFO,
    format_string: str | None = None,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Attach a stream handler to the library logger.

    Applications with their own logging setup should configure the
    ``github_manager`` logger there instead.

    Args:
        level: Logging level (e.g., logging.DEBUG, logging.INFO).
        format_string: Custom format string for log messages.
        stream: Output stream (defaults to sys.stderr).

    Returns:
        The handler that was added, so callers can remove it again.

    Example:
        >>> from github_manager.utils.logger import configure_logging
        >>> configure_logging(level=logging.DEBUG)

    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    if stream is None:
        stream = sys.stderr

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(format_string))

    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
