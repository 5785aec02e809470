"""
Decoder for the Bittrex response envelope.

Every response is {"success": bool, "message": str, "result": ...}.
The decoder either returns the result validated into the requested type or
raises; it never hands back a partially-filled object.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, TypeVar, cast, get_origin

import orjson
from pydantic import BaseModel, ConfigDict, StrictBool, TypeAdapter, ValidationError

from bittrexkit.errors import (
    ExchangeRejectedError,
    MalformedEnvelopeError,
    ResultShapeMismatchError,
)

T = TypeVar("T")

# Body excerpt kept on MalformedEnvelopeError
_BODY_EXCERPT = 500


class Envelope(BaseModel):
    """The exchange's uniform response wrapper."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    success: StrictBool
    message: str | None = None
    result: Any = None


@lru_cache(maxsize=128)
def _adapter(result_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(result_type)


def _type_name(result_type: Any) -> str:
    # list[Market].__name__ is just "list"
    if get_origin(result_type) is not None:
        return repr(result_type)
    return getattr(result_type, "__name__", None) or repr(result_type)


def _excerpt(raw: str | bytes) -> str:
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    return raw[:_BODY_EXCERPT]


def parse_envelope(raw: str | bytes) -> Envelope:
    """
    Parse a raw body into an Envelope.

    Raises:
        MalformedEnvelopeError: If the body is not JSON or not an envelope.
    """
    excerpt = _excerpt(raw)
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise MalformedEnvelopeError("Response body is not JSON", body=excerpt) from e

    if not isinstance(data, dict):
        raise MalformedEnvelopeError("Response body is not a JSON object", body=excerpt)

    try:
        return Envelope.model_validate(data)
    except ValidationError as e:
        raise MalformedEnvelopeError("Response body is not an envelope", body=excerpt) from e


def decode_envelope(raw: str | bytes, result_type: type[T] | Any) -> T:
    """
    Decode a raw response body into result_type.

    Args:
        raw: Response body, text or bytes.
        result_type: Target type, e.g. Ticker or list[Market]. Pass object to
            get the raw JSON value back.

    Returns:
        The envelope's result validated into result_type.

    Raises:
        MalformedEnvelopeError: Body is not an envelope.
        ExchangeRejectedError: Envelope reports success=false.
        ResultShapeMismatchError: Result does not fit result_type.
    """
    envelope = parse_envelope(raw)

    if not envelope.success:
        raise ExchangeRejectedError(envelope.message or "")

    if result_type is object:
        return cast("T", envelope.result)

    try:
        return cast("T", _adapter(result_type).validate_python(envelope.result))
    except ValidationError as e:
        raise ResultShapeMismatchError(
            f"Error converting result to {_type_name(result_type)}",
            json=orjson.dumps(envelope.result).decode("utf-8"),
            target_type=_type_name(result_type),
        ) from e
