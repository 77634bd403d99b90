"""pymillis - Serialize durations, timestamps and monotonic instants as milliseconds.

Values travel as a single integer count of milliseconds, which is what most
JSON consumers expect::

    from datetime import datetime, timedelta
    from typing import Annotated

    from pydantic import BaseModel
    from pymillis import Millis, MonotonicInstant

    class Timestamps(BaseModel):
        time: Annotated[datetime, Millis()]
        latency: Annotated[timedelta, Millis()]

        # A monotonic instant is sent relative to the current time:
        #
        #   ts = wall_now - (monotonic_now - target)
        #
        timestamp: Annotated[MonotonicInstant, Millis()]

Sub-millisecond precision is dropped.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pymillis")
except PackageNotFoundError:  # running from a source checkout
    __version__ = "0.0.0.dev0"

from pymillis._codecs import MillisCodec, codec_for
from pymillis._constants import UNIX_EPOCH
from pymillis._errors import (
    InvalidWireValueError,
    MillisError,
    MillisecondRangeError,
    UnsupportedTypeError,
)
from pymillis._funcs import deserialize, from_millis, serialize, to_millis
from pymillis._pydantic import Millis, MillisDatetime, MillisDuration, MillisInstant
from pymillis.instant import MonotonicInstant

__all__ = [
    "serialize",
    "deserialize",
    "to_millis",
    "from_millis",
    "codec_for",
    "Millis",
    "MillisCodec",
    "MillisDatetime",
    "MillisDuration",
    "MillisInstant",
    "MonotonicInstant",
    "UNIX_EPOCH",
    "MillisError",
    "MillisecondRangeError",
    "InvalidWireValueError",
    "UnsupportedTypeError",
]
