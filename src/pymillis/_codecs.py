"""Per-type millisecond codecs.

The codec set is closed: DurationCodec, SystemTimeCodec, MonotonicCodec and
OptionalCodec are the only implementations. Subclassing MillisCodec from
another module raises TypeError when the class is created; the check reads
the class's __module__, so it guards against mistakes, not against code that
forges that attribute.
"""

from __future__ import annotations

import logging
import time
import types
import typing
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from pymillis._constants import (
    MAX_MILLIS,
    MIN_MILLIS,
    NANOS_PER_MILLI,
    UNIX_EPOCH,
)
from pymillis._errors import (
    ERR_MSG_OUT_OF_RANGE,
    ERR_MSG_UNSUPPORTED_TYPE,
    MillisecondRangeError,
    UnsupportedTypeError,
)
from pymillis.instant import MonotonicInstant, timedelta_to_nanos

logger = logging.getLogger(__name__)

Serializer = Callable[[int | None], Any]
"""Receives the wire integer (or None) and returns the framework's output."""

Deserializer = Callable[[Any], int | None]
"""Reads the wire integer (or None) out of framework input."""


def out_of_range(internal_details: str, wrapped: Exception | None = None) -> MillisecondRangeError:
    logger.debug("millisecond conversion failed: %s", internal_details)
    return MillisecondRangeError(ERR_MSG_OUT_OF_RANGE, internal_details, wrapped)


def check_width(millis: int) -> int:
    """Reject millisecond counts that do not fit a signed 64-bit integer."""
    if not MIN_MILLIS <= millis <= MAX_MILLIS:
        raise out_of_range(f"{millis} does not fit in a signed 64-bit integer")
    return millis


def _truncate_nanos(nanos: int) -> int:
    # toward zero: the magnitude is never rounded up
    millis = abs(nanos) // NANOS_PER_MILLI
    return -millis if nanos < 0 else millis


class MillisCodec(ABC):
    """Bidirectional conversion between one time-like type and milliseconds."""

    value_type: Any = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__module__ != __name__:
            raise TypeError(
                f"{cls.__qualname__}: MillisCodec is sealed and cannot be "
                "subclassed outside pymillis"
            )

    @abstractmethod
    def to_millis(self, value: Any) -> int: ...

    @abstractmethod
    def from_millis(self, millis: int) -> Any: ...

    def accepts(self, value: Any) -> bool:
        return isinstance(value, self.value_type)

    @property
    def nullable(self) -> bool:
        return False

    def encode(self, value: Any, serializer: Serializer) -> Any:
        return serializer(check_width(self.to_millis(value)))

    def decode(self, data: Any, deserializer: Deserializer) -> Any:
        return self.from_millis(deserializer(data))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class DurationCodec(MillisCodec):
    """timedelta <-> signed milliseconds."""

    value_type = timedelta

    def to_millis(self, value: timedelta) -> int:
        return _truncate_nanos(timedelta_to_nanos(value))

    def from_millis(self, millis: int) -> timedelta:
        try:
            return timedelta(milliseconds=millis)
        except OverflowError as exc:
            raise out_of_range(f"duration of {millis}ms exceeds timedelta range", exc) from exc


class SystemTimeCodec(MillisCodec):
    """datetime <-> milliseconds since the Unix epoch.

    Naive datetimes (no tzinfo, or a tzinfo without an offset) are taken
    to be UTC. Times before the epoch are not
    representable in either direction.
    """

    value_type = datetime

    def to_millis(self, value: datetime) -> int:
        if value.utcoffset() is None:
            value = value.replace(tzinfo=timezone.utc)
        since_epoch = value - UNIX_EPOCH
        if since_epoch < timedelta(0):
            raise out_of_range(f"invalid system time {value.isoformat()}: before the epoch")
        return DURATION.to_millis(since_epoch)

    def from_millis(self, millis: int) -> datetime:
        if millis < 0:
            raise out_of_range(f"invalid system time: {millis}ms is before the epoch")
        try:
            return UNIX_EPOCH + DURATION.from_millis(millis)
        except OverflowError as exc:
            raise out_of_range(f"invalid system time: {millis}ms exceeds datetime range", exc) from exc


class MonotonicCodec(MillisCodec):
    """MonotonicInstant <-> milliseconds since the Unix epoch.

    A monotonic reading has no wire-stable meaning of its own. Each call
    reads the monotonic clock and then the wall clock, and maps the target
    through the offset between the two:

        wall = wall_now + (target - monotonic_now)

    Decoding applies the inverse against a fresh pair of readings. The
    result of a round trip is therefore only accurate to within the time
    that passed between the calls (plus the gap between the two reads and
    the millisecond truncation).
    """

    value_type = MonotonicInstant

    def to_millis(self, value: MonotonicInstant) -> int:
        mono_now = time.monotonic_ns()
        wall_now = time.time_ns()
        wall = wall_now + (value.nanos - mono_now)
        if wall < 0:
            raise out_of_range(f"instant out of range: {wall}ns is before the epoch")
        return wall // NANOS_PER_MILLI

    def from_millis(self, millis: int) -> MonotonicInstant:
        if millis < 0:
            raise out_of_range(f"instant out of range: {millis}ms is before the epoch")
        mono_now = time.monotonic_ns()
        wall_now = time.time_ns()
        return MonotonicInstant(mono_now + (millis * NANOS_PER_MILLI - wall_now))


class OptionalCodec(MillisCodec):
    """Lifts another codec over None, which maps to the wire null."""

    def __init__(self, inner: MillisCodec) -> None:
        if isinstance(inner, OptionalCodec):
            inner = inner.inner
        self.inner = inner
        self.value_type = typing.Optional[inner.value_type]

    @property
    def nullable(self) -> bool:
        return True

    def accepts(self, value: Any) -> bool:
        return value is None or self.inner.accepts(value)

    def to_millis(self, value: Any) -> int:
        if value is None:
            raise out_of_range("None has no millisecond value")
        return self.inner.to_millis(value)

    def from_millis(self, millis: int) -> Any:
        return self.inner.from_millis(millis)

    def encode(self, value: Any, serializer: Serializer) -> Any:
        if value is None:
            return serializer(None)
        return self.inner.encode(value, serializer)

    def decode(self, data: Any, deserializer: Deserializer) -> Any:
        if data is None:
            return None
        millis = deserializer(data)
        if millis is None:
            return None
        return self.inner.from_millis(millis)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, OptionalCodec) and other.inner == self.inner

    def __hash__(self) -> int:
        return hash((OptionalCodec, self.inner))

    def __repr__(self) -> str:
        return f"OptionalCodec({self.inner!r})"


DURATION = DurationCodec()
SYSTEM_TIME = SystemTimeCodec()
MONOTONIC = MonotonicCodec()

_CODECS: dict[type, MillisCodec] = {
    timedelta: DURATION,
    datetime: SYSTEM_TIME,
    MonotonicInstant: MONOTONIC,
}


def _lookup(klass: type) -> MillisCodec | None:
    for base in klass.__mro__:
        codec = _CODECS.get(base)
        if codec is not None:
            return codec
    return None


def codec_for(target: Any) -> MillisCodec:
    """Resolve a type hint to its codec.

    Accepts the supported types, their subclasses, and ``Optional[...]`` /
    ``... | None`` over them. Subclasses decode to the supported base type.
    """
    origin = typing.get_origin(target)
    if origin is None and isinstance(target, type):
        codec = _lookup(target)
        if codec is not None:
            return codec

    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(target) if arg is not type(None)]
        if len(args) == 1 and len(args) < len(typing.get_args(target)):
            return OptionalCodec(codec_for(args[0]))

    raise UnsupportedTypeError(
        ERR_MSG_UNSUPPORTED_TYPE,
        f"no millisecond codec for {target!r}",
    )


def codec_for_value(value: Any) -> MillisCodec:
    """Resolve a runtime value to its codec, honouring subclasses."""
    codec = _lookup(type(value))
    if codec is not None:
        return codec
    raise UnsupportedTypeError(
        ERR_MSG_UNSUPPORTED_TYPE,
        f"no millisecond codec for value of type {type(value).__name__}",
    )
