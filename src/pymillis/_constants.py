"""Unit factors, epoch and wire width for millisecond conversion."""

from datetime import datetime, timezone

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
"""Reference point for absolute times."""

NANOS_PER_MILLI = 1_000_000
MICROS_PER_SECOND = 1_000_000
SECONDS_PER_DAY = 86_400

MAX_MILLIS = 2**63 - 1
"""Largest millisecond count accepted on the wire (signed 64-bit)."""

MIN_MILLIS = -(2**63)
"""Smallest millisecond count accepted on the wire (signed 64-bit)."""
