"""Tests for the raw sentinel boundary."""

from datetime import datetime, timedelta, timezone

import numpy as np
import pytest

from timeshift.codec import (
    check_operand_value,
    decode_instants,
    decode_operand,
    encode_datetime64,
    encode_instants,
)
from timeshift.util import INSTANT_NA, INT64_MAX, OPERAND_NA


def test_decode_int64_sentinel():
    raw = np.array([1, INSTANT_NA, -1], dtype=np.int64)

    assert decode_instants(raw) == (1, None, -1)


def test_decode_plain_sequence_with_none():
    assert decode_instants([0, None, 5]) == (0, None, 5)


def test_decode_sentinel_in_plain_sequence():
    assert decode_instants([INSTANT_NA, 3]) == (None, 3)


def test_instant_sentinel_is_not_operand_sentinel():
    """The int32 minimum is an ordinary instant."""
    assert decode_instants([OPERAND_NA]) == (OPERAND_NA,)
    assert decode_operand([OPERAND_NA]) == (None,)


def test_decode_float_nan():
    raw = np.array([1.0, np.nan, -2.0])

    assert decode_instants(raw) == (1, None, -2)


def test_decode_rejects_fractional_seconds():
    with pytest.raises(ValueError, match="whole number"):
        decode_instants([1.5])


def test_decode_rejects_infinity():
    with pytest.raises(ValueError):
        decode_instants([float("inf")])


def test_decode_datetime64_truncates_to_seconds():
    raw = np.array(["2025-01-01T00:00:01.750", "NaT"], dtype="datetime64[ms]")

    assert decode_instants(raw) == (1735689601, None)


def test_decode_aware_datetime():
    tz = timezone(timedelta(hours=-5))
    value = datetime(2025, 1, 1, 0, 0, tzinfo=tz)

    assert decode_instants([value]) == (1735689600 + 5 * 3600,)


def test_decode_naive_datetime_hint():
    with pytest.raises(TypeError, match="Add timezone info"):
        decode_instants([datetime(2025, 1, 1)])


def test_decode_rejects_unsupported_types():
    with pytest.raises(TypeError, match="Instant must be int"):
        decode_instants(["2025-01-01"])


def test_decode_rejects_strings_and_bools():
    with pytest.raises(TypeError):
        decode_instants("123")
    with pytest.raises(TypeError):
        decode_instants([True])


def test_decode_rejects_out_of_range():
    with pytest.raises(ValueError, match="64-bit"):
        decode_instants([INT64_MAX + 1])


def test_decode_rejects_matrices():
    with pytest.raises(ValueError, match="one-dimensional"):
        decode_instants(np.zeros((2, 2), dtype=np.int64))


def test_decode_operand_absent():
    assert decode_operand(None) is None


def test_decode_operand_numpy_scalar():
    assert decode_operand(np.int32(3)) == (3,)


def test_decode_operand_int64_array():
    raw = np.array([OPERAND_NA, 2], dtype=np.int64)

    assert decode_operand(raw, "days") == (None, 2)


def test_decode_operand_rejects_datetime64():
    with pytest.raises(TypeError, match="Unsupported days array dtype"):
        decode_operand(np.array(["2025-01-01"], dtype="datetime64[D]"), "days")


def test_encode_instants():
    encoded = encode_instants([5, None])

    assert encoded.dtype == np.int64
    assert encoded.tolist() == [5, INSTANT_NA]


def test_encode_datetime64_uses_nat():
    encoded = encode_datetime64([0, None])

    assert encoded[0] == np.datetime64("1970-01-01T00:00:00")
    assert np.isnat(encoded[1])


def test_decode_datetime_floors_before_epoch():
    """Half a second before the epoch is second -1, whatever the input type."""
    value = datetime(1969, 12, 31, 23, 59, 59, 500000, tzinfo=timezone.utc)
    raw = np.array(["1969-12-31T23:59:59.500"], dtype="datetime64[ms]")

    assert decode_instants([value]) == (-1,)
    assert decode_instants([value]) == decode_instants(raw)


def test_decode_datetime_is_exact_far_from_epoch():
    value = datetime(9999, 12, 31, 23, 59, 59, 999999, tzinfo=timezone.utc)

    assert decode_instants([value]) == (253402300799,)


def test_check_operand_value():
    check_operand_value(None, "days")
    check_operand_value(-(2**31) + 1, "days")

    with pytest.raises(ValueError, match="days value 2147483648"):
        check_operand_value(2**31, "days")
    with pytest.raises(TypeError, match="days must contain integers"):
        check_operand_value(1.0, "days")  # type: ignore[arg-type]
