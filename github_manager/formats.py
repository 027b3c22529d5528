"""Output formats and the generic response materializer.

Every endpoint method can hand back its response in one of three shapes:

    ReturnFormat.LIBRARY_OBJECT  - a typed record (the default)
    ReturnFormat.JSON            - the parsed JSON (dict or list)
    ReturnFormat.STRING          - the raw response text

Endpoint methods don't switch on the format themselves. They pass the raw
text and a decoder to materialize(), which picks the shape.

Example:
    >>> from github_manager.models import CacheUsage
    >>> text = '{"total_active_caches_count": 3}'
    >>> materialize(text, ReturnFormat.LIBRARY_OBJECT, model_decoder(CacheUsage))
    CacheUsage(total_active_caches_size_in_bytes=0, total_active_caches_count=3)
    >>> materialize(text, "json", model_decoder(CacheUsage))
    {'total_active_caches_count': 3}

"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from github_manager.exceptions import ResponseDecodeError

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

Decoder = Callable[[Any], T]


class ReturnFormat(str, Enum):
    """Shape of the value returned by endpoint methods."""

    JSON = "json"
    LIBRARY_OBJECT = "library_object"
    STRING = "string"

    @classmethod
    def coerce(cls, value: ReturnFormat | str) -> ReturnFormat:
        """Accept either a member or its (case-insensitive) string value.

        Raises:
            ValueError: If the value names no format.

        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise ValueError(
                f"Unknown return format {value!r} (expected one of: {valid})"
            ) from None


def model_decoder(model: type[M]) -> Decoder[M]:
    """Build a decoder that validates a JSON object into ``model``."""
    return model.model_validate


def list_decoder(model: type[M]) -> Decoder[list[M]]:
    """Build a decoder that validates a JSON array into a list of ``model``."""
    adapter = TypeAdapter(list[model])  # type: ignore[valid-type]
    return adapter.validate_python


def field_decoder(model: type[M], field: str) -> Decoder[Any]:
    """Build a decoder that validates into ``model`` and keeps one field.

    For envelopes like ``{"names": [...]}`` whose single member is the result.
    """

    def decode(data: Any) -> Any:
        return getattr(model.model_validate(data), field)

    decode.__name__ = model.__name__
    return decode


def materialize(
    text: str,
    return_format: ReturnFormat | str,
    decoder: Decoder[T],
) -> T | Any | str:
    """Turn raw response text into the requested shape.

    Args:
        text: Raw response body.
        return_format: Requested output shape.
        decoder: Builds the typed value from parsed JSON.

    Returns:
        The text unchanged, the parsed JSON, or the decoded record.

    Raises:
        ResponseDecodeError: If the text isn't JSON or doesn't fit the record.

    """
    fmt = ReturnFormat.coerce(return_format)

    if fmt is ReturnFormat.STRING:
        return text

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ResponseDecodeError(f"Response is not valid JSON: {e}", original_error=e) from e

    if fmt is ReturnFormat.JSON:
        return data

    target = _decoder_target(decoder)
    try:
        return decoder(data)
    except PydanticValidationError as e:
        logger.debug("Decoding into %s failed: %s", target, e)
        raise ResponseDecodeError(
            f"Response does not match {target}: {e.error_count()} validation error(s)",
            target=target,
            original_error=e,
        ) from e


def _decoder_target(decoder: Callable[..., Any]) -> str:
    """Best-effort name of what a decoder produces, for error messages."""
    owner = getattr(decoder, "__self__", None)
    if isinstance(owner, type):
        return owner.__name__
    if isinstance(owner, TypeAdapter):
        return str(owner.core_schema.get("type", "value"))
    return getattr(decoder, "__name__", "value")
