"""Monotonic clock readings."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import timedelta

from pymillis._constants import MICROS_PER_SECOND, SECONDS_PER_DAY


def timedelta_to_nanos(delta: timedelta) -> int:
    """Exact nanosecond count of a timedelta."""
    micros = (delta.days * SECONDS_PER_DAY + delta.seconds) * MICROS_PER_SECOND
    return (micros + delta.microseconds) * 1000


@dataclass(frozen=True, order=True)
class MonotonicInstant:
    """A reading of the process-local monotonic clock.

    Readings are only comparable within one process. They carry no
    relation to wall-clock time, so they are serialized by anchoring
    against the wall clock at the moment of conversion.
    """

    nanos: int

    @classmethod
    def now(cls) -> MonotonicInstant:
        return cls(time.monotonic_ns())

    def elapsed(self) -> timedelta:
        return MonotonicInstant.now() - self

    def __add__(self, other: timedelta) -> MonotonicInstant:
        if not isinstance(other, timedelta):
            return NotImplemented
        return MonotonicInstant(self.nanos + timedelta_to_nanos(other))

    __radd__ = __add__

    def __sub__(self, other: MonotonicInstant | timedelta) -> timedelta | MonotonicInstant:
        if isinstance(other, MonotonicInstant):
            # timedelta has microsecond resolution
            return timedelta(microseconds=(self.nanos - other.nanos) // 1000)
        if isinstance(other, timedelta):
            return MonotonicInstant(self.nanos - timedelta_to_nanos(other))
        return NotImplemented
