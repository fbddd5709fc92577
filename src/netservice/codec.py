"""JSON codec used for request bodies and typed responses."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import JsonValue, PydanticUserError, TypeAdapter, ValidationError

from .errors import DecodeError, SerializationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

JsonObject = dict[str, JsonValue]


def serialize(body: JsonObject) -> bytes:
    """
    Serialize a request body to a compact UTF-8 JSON payload.

    NaN and Infinity are rejected since they are not valid JSON.

    Args:
        body: Mapping of string keys to JSON-serializable values

    Returns:
        Encoded JSON bytes

    Raises:
        SerializationError: If the body contains a value JSON cannot represent
            (functions, arbitrary objects, cycles, non-finite floats)
    """
    try:
        return json.dumps(body, ensure_ascii=False, allow_nan=False, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError, RecursionError) as e:
        raise SerializationError(e) from e


@lru_cache(maxsize=256)
def _cached_adapter(response_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_type)


def _adapter(response_type: Any) -> TypeAdapter[Any]:
    try:
        hash(response_type)
    except TypeError:
        return TypeAdapter(response_type)
    return _cached_adapter(response_type)


def deserialize(data: bytes, response_type: type[T]) -> T:
    """
    Decode a JSON payload into ``response_type``.

    ``response_type`` can be anything pydantic can validate: models,
    dataclasses, TypedDicts, builtin containers and scalars. Before
    Python 3.12 pydantic only accepts ``typing_extensions.TypedDict``.

    Raises:
        DecodeError: If the payload is not valid JSON for the target type,
            or the target type cannot be validated at all. The underlying
            error is logged at DEBUG and not attached.
    """
    try:
        return _adapter(response_type).validate_json(data)  # type: ignore[no-any-return]
    except ValidationError as e:
        logger.debug(f"Failed to decode response as {response_type!r}: {e}")
        raise DecodeError() from None
    except PydanticUserError as e:
        logger.debug(f"Cannot decode into {response_type!r}: {e}")
        raise DecodeError() from None
    except Exception as e:
        # validators and __post_init__ may raise anything pydantic does not wrap
        logger.debug(f"Decoding into {response_type!r} raised {e!r}")
        raise DecodeError() from None
