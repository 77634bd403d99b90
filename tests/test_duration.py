"""timedelta <-> milliseconds."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from pymillis import MillisecondRangeError, from_millis, to_millis


class TestEncode:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (timedelta(0), "0"),
            (timedelta(seconds=1), "1000"),
            (timedelta(seconds=1234), "1234000"),
            (timedelta(seconds=1, microseconds=2300), "1002"),
            (timedelta(microseconds=134), "0"),
            (timedelta(microseconds=2000), "2"),
            (timedelta(milliseconds=1), "1"),
            (timedelta(days=1), "86400000"),
        ],
    )
    def test_encode(self, encode, value, expected):
        assert encode(value, timedelta) == expected

    def test_sub_millisecond_is_floored(self):
        assert to_millis(timedelta(microseconds=1999)) == 1

    @pytest.mark.parametrize(
        "seconds, micros",
        [(0, 999), (1, 0), (59, 999_999), (86_399, 500_000), (123_456_789, 1)],
    )
    def test_truncation_law(self, seconds, micros):
        value = timedelta(seconds=seconds, microseconds=micros)
        assert to_millis(value) == seconds * 1000 + micros // 1000

    def test_largest_timedelta_fits(self):
        assert to_millis(timedelta.max) == 86_399_999_999_999_999


class TestNegative:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (timedelta(seconds=-1234), "-1234000"),
            (timedelta(microseconds=-1), "0"),
            (timedelta(microseconds=-1500), "-1"),
            (timedelta(days=-1), "-86400000"),
        ],
    )
    def test_encode_truncates_toward_zero(self, encode, value, expected):
        assert encode(value, timedelta) == expected

    def test_decode(self, decode):
        assert decode("-1234000", timedelta) == timedelta(seconds=-1234)


class TestDecode:
    @pytest.mark.parametrize(
        "src, expected",
        [
            ("0", timedelta(0)),
            ("1002", timedelta(seconds=1, microseconds=2000)),
            ("1000", timedelta(seconds=1)),
            ("1234000", timedelta(seconds=1234)),
        ],
    )
    def test_decode(self, decode, src, expected):
        assert decode(src, timedelta) == expected

    @pytest.mark.parametrize("millis", [0, 1, 999, 1000, 1_511_885_454_870])
    def test_whole_milliseconds_round_trip(self, millis):
        value = timedelta(milliseconds=millis)
        assert from_millis(to_millis(value), timedelta) == value

    def test_beyond_timedelta_range(self, decode):
        with pytest.raises(ValidationError, match="millisecond value is out of range") as exc_info:
            decode("100000000000000000", timedelta)
        assert exc_info.value.errors()[0]["type"] == "millis_out_of_range"

    def test_beyond_64_bits(self):
        with pytest.raises(MillisecondRangeError, match="millisecond value is out of range"):
            from_millis(2**63, timedelta)

    def test_direct_overflow(self):
        with pytest.raises(MillisecondRangeError) as exc_info:
            from_millis(10**17, timedelta)
        assert isinstance(exc_info.value.wrapped, OverflowError)
