"""Generic entry points used by serialization frameworks."""

from __future__ import annotations

from typing import Any

from pymillis._codecs import (
    Deserializer,
    Serializer,
    check_width,
    codec_for,
    codec_for_value,
)
from pymillis._errors import (
    ERR_MSG_INVALID_WIRE_VALUE,
    ERR_MSG_UNSUPPORTED_TYPE,
    InvalidWireValueError,
    UnsupportedTypeError,
)


def _emit(millis: int | None) -> int | None:
    return millis


def read_integer(data: Any) -> int:
    """Default deserializer: accept a plain int within the wire width."""
    if isinstance(data, bool) or not isinstance(data, int):
        raise InvalidWireValueError(
            ERR_MSG_INVALID_WIRE_VALUE,
            f"expected an integer, got {type(data).__name__}",
        )
    return check_width(data)


def serialize(
    value: Any,
    serializer: Serializer | None = None,
    *,
    target: Any = None,
) -> Any:
    """Encode a time-like value as milliseconds.

    Args:
        value: A timedelta, datetime, MonotonicInstant or None.
        serializer: Callable receiving the wire integer (or None for an
            absent optional). Defaults to returning it unchanged.
        target: Optional type hint selecting the codec. Without it the
            codec is chosen from the runtime type of ``value``.

    Returns:
        Whatever ``serializer`` returns.

    Raises:
        MillisecondRangeError: If the value has no millisecond representation.
        UnsupportedTypeError: If the type is not supported.
    """
    if serializer is None:
        serializer = _emit
    if target is not None:
        codec = codec_for(target)
        if not codec.accepts(value):
            raise UnsupportedTypeError(
                ERR_MSG_UNSUPPORTED_TYPE,
                f"value of type {type(value).__name__} does not match {target!r}",
            )
    elif value is None:
        return serializer(None)
    else:
        codec = codec_for_value(value)
    return codec.encode(value, serializer)


def deserialize(
    data: Any,
    target: Any,
    deserializer: Deserializer | None = None,
) -> Any:
    """Decode milliseconds read from ``data`` into an instance of ``target``.

    Args:
        data: Raw wire data.
        target: The type to reconstruct, e.g. ``timedelta`` or
            ``Optional[datetime]``.
        deserializer: Callable reading the integer out of ``data``.
            Defaults to accepting plain ints only.

    Raises:
        MillisecondRangeError: If the integer cannot be represented by ``target``.
        InvalidWireValueError: If ``data`` is not an integer (or null, for optionals).
        UnsupportedTypeError: If ``target`` is not supported.
    """
    if deserializer is None:
        deserializer = read_integer
    return codec_for(target).decode(data, deserializer)


def to_millis(value: Any) -> int:
    """Convert a single time-like value to milliseconds."""
    return check_width(codec_for_value(value).to_millis(value))


def from_millis(millis: int, target: Any) -> Any:
    """Reconstruct a ``target`` value from milliseconds."""
    return codec_for(target).from_millis(read_integer(millis))
