"""Conversion between raw sentinel-coded arrays and `int | None` values.

Raw instants are signed 64-bit seconds since the epoch, with INSTANT_NA
(the int64 minimum, numpy's NaT bit pattern) marking a missing element.
Raw operands are signed 32-bit integers with OPERAND_NA (the int32 minimum)
marking a missing element. Float inputs use NaN for missing.

Inside the engine every element is a plain `int` or `None`; sentinels only
exist on this boundary.
"""

import math
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta, timezone
from numbers import Integral, Real
from typing import Any

import numpy as np
import numpy.typing as npt

from timeshift.util import (
    INSTANT_NA,
    OPERAND_NA,
    in_instant_range,
    in_operand_range,
)

RawInstants = Sequence[Any] | npt.NDArray[Any]
RawOperand = int | Sequence[int | None] | npt.NDArray[Any] | None

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _from_float(value: float, what: str) -> int | None:
    if math.isnan(value):
        return None
    if not float(value).is_integer():
        raise ValueError(
            f"{what} must be a whole number of seconds or units, got {value!r}.\n"
            f"Hint: round or truncate before shifting, or use NaN for missing."
        )
    return int(value)


def _decode_instant(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise TypeError(f"Instant must be an integer, got bool: {value!r}")
    if isinstance(value, Integral):
        result = int(value)
        if result == INSTANT_NA:
            return None
    elif isinstance(value, np.datetime64):
        if np.isnat(value):
            return None
        result = int(value.astype("datetime64[s]").astype(np.int64))
    elif isinstance(value, datetime):
        if value.tzinfo is None:
            raise TypeError(
                f"Instant must be a timezone-aware datetime.\n"
                f"Got naive datetime: {value!r}\n"
                f"Hint: Add timezone info:\n"
                f"  from zoneinfo import ZoneInfo\n"
                f"  dt = datetime(..., tzinfo=ZoneInfo('UTC'))  "
                f"# or 'US/Pacific', etc.\n"
                f"  # Or use timezone.utc for UTC:\n"
                f"  dt = datetime(..., tzinfo=timezone.utc)"
            )
        # Floor to whole seconds, as numpy does for datetime64
        result = (value - _EPOCH) // timedelta(seconds=1)
    elif isinstance(value, Real):
        decoded = _from_float(float(value), "Instant")
        if decoded is None:
            return None
        result = decoded
    else:
        raise TypeError(
            f"Instant must be int, float, datetime, or None.\n"
            f"Got {type(value).__name__!r}: {value!r}\n"
            f"Examples:\n"
            f"  shift([1704067200], days=1)  # int (Unix seconds)\n"
            f"  shift([datetime(2025,1,1,tzinfo=timezone.utc)], days=1)"
        )

    if not in_instant_range(result):
        raise ValueError(
            f"Instant {result} is outside the signed 64-bit range of seconds."
        )
    return result


def _operand_type_error(value: Any, unit: str) -> TypeError:
    return TypeError(
        f"{unit} must contain integers or None.\n"
        f"Got {type(value).__name__!r}: {value!r}"
    )


def check_operand_value(value: int | None, unit: str) -> None:
    """Check a decoded operand element is None or an int in the 32-bit range.

    Raises:
        TypeError: If value is not an int or None
        ValueError: If value does not fit in a signed 32-bit integer
    """
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise _operand_type_error(value, unit)
    if not in_operand_range(value):
        raise ValueError(
            f"{unit} value {value} is outside the signed 32-bit range.\n"
            f"Hint: express large offsets in a bigger unit "
            f"(e.g. days instead of seconds)."
        )


def _decode_operand_value(value: Any, unit: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise TypeError(f"{unit} must be an integer, got bool: {value!r}")
    if isinstance(value, Integral):
        result = int(value)
        if result == OPERAND_NA:
            return None
    elif isinstance(value, Real):
        decoded = _from_float(float(value), unit)
        if decoded is None:
            return None
        result = decoded
    else:
        raise _operand_type_error(value, unit)

    check_operand_value(result, unit)
    return result


def _check_vector(raw: npt.NDArray[Any], what: str) -> None:
    if raw.ndim != 1:
        raise ValueError(
            f"{what} must be a one-dimensional array, got shape {raw.shape}."
        )


def decode_instants(raw: RawInstants) -> tuple[int | None, ...]:
    """Decode raw instants into a tuple of `int | None`.

    Accepts any iterable of ints, floats, timezone-aware datetimes, numpy
    scalars or None, and numpy arrays of integer, float or datetime64 dtype.

    Raises:
        TypeError: If an element has an unsupported type or is a naive datetime
        ValueError: If an element is fractional or outside the int64 range
    """
    if isinstance(raw, np.ndarray):
        _check_vector(raw, "Instants")
        kind = raw.dtype.kind
        if kind == "M":
            seconds = raw.astype("datetime64[s]").view(np.int64)
            return tuple(None if v == INSTANT_NA else int(v) for v in seconds)
        if kind in "iuf":
            return tuple(_decode_instant(v) for v in raw.tolist())
        if kind != "O":
            raise TypeError(f"Unsupported instant array dtype: {raw.dtype}")
    if isinstance(raw, (str, bytes)):
        raise TypeError(f"Instants must be a sequence of values, got {raw!r}")
    return tuple(_decode_instant(v) for v in raw)


def decode_operand(
    raw: RawOperand, unit: str = "operand"
) -> tuple[int | None, ...] | None:
    """Decode one raw unit operand.

    None stays absent. A bare number becomes a length-1 (broadcast) operand.
    Sequences and numpy arrays decode element-wise with OPERAND_NA or NaN
    meaning missing.
    """
    if raw is None:
        return None
    if isinstance(raw, Real):
        return (_decode_operand_value(raw, unit),)
    if isinstance(raw, np.ndarray):
        _check_vector(raw, unit)
        if raw.dtype.kind not in "iufO":
            raise TypeError(f"Unsupported {unit} array dtype: {raw.dtype}")
        values: Iterable[Any] = raw.tolist()
    elif isinstance(raw, (str, bytes)):
        raise TypeError(f"{unit} must be an integer or a sequence, got {raw!r}")
    else:
        values = raw
    return tuple(_decode_operand_value(v, unit) for v in values)


def encode_instants(values: Iterable[int | None]) -> npt.NDArray[np.int64]:
    """Encode instants as an int64 array with INSTANT_NA for missing."""
    return np.array(
        [INSTANT_NA if v is None else v for v in values], dtype=np.int64
    )


def encode_datetime64(values: Iterable[int | None]) -> npt.NDArray[np.datetime64]:
    """Encode instants as a datetime64[s] array with NaT for missing."""
    return encode_instants(values).view("datetime64[s]")
