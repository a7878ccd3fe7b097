import logging
from collections.abc import Iterable
from typing import Any

from timeshift.accumulate import DurationAccumulator
from timeshift.codec import RawInstants, RawOperand
from timeshift.errors import ArithmeticOverflow, LengthMismatch
from timeshift.instants import InstantArray
from timeshift.operands import OperandSet, operands
from timeshift.util import in_instant_range

logger = logging.getLogger(__name__)


class InstantAdder:
    """Shift every base instant by the offset its operands describe.

    The base may have length 1 (reused at every index) or `size`. Names are
    carried to the output when the base already has the output length; the
    zone tag is always carried unchanged.
    """

    def __init__(self, base: InstantArray, operands: OperandSet, size: int):
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        self.base: InstantArray = base
        self.operands: OperandSet = operands
        self.size: int = size
        self.accumulator: DurationAccumulator = DurationAccumulator(operands)

    def validate(self) -> None:
        """Check every input can be recycled to `size`.

        Raises:
            LengthMismatch: If the base or a present operand cannot
        """
        if len(self.base) != 1 and len(self.base) != self.size:
            raise LengthMismatch("base", len(self.base), self.size)
        self.operands.validate(self.size)

    def run(self) -> InstantArray:
        """Compute the shifted instants.

        All lengths are validated before any element is computed, and the
        output is only assembled once every element succeeded.

        Raises:
            LengthMismatch: If an input cannot be recycled to `size`
            ArithmeticOverflow: If a result leaves the int64 range
        """
        self.validate()
        logger.debug(
            "Shifting %d instants by %s",
            self.size,
            ", ".join(self.operands.present()) or "nothing",
        )

        values = self.base.values
        recycle = len(values) == 1
        out: list[int | None] = []

        for i in range(self.size):
            elt = values[0] if recycle else values[i]
            if elt is None:
                out.append(None)
                continue

            offset = self.accumulator.accumulate(i)
            if offset is None:
                out.append(None)
                continue

            shifted = elt + offset
            if not in_instant_range(shifted):
                raise ArithmeticOverflow(i)
            out.append(shifted)

        names = self.base.names if len(values) == self.size else None
        logger.debug("Shifted %d instants, %d missing", len(out), out.count(None))
        return InstantArray(values=tuple(out), names=names, zone=self.base.zone)


def add_duration(base: InstantArray, operands: OperandSet, size: int) -> InstantArray:
    """Shift `base` by `operands`, producing an array of length `size`."""
    return InstantAdder(base, operands, size).run()


def _common_size(*sizes: int | None) -> int:
    known = [s for s in sizes if s is not None]
    if 0 in known:
        return 0
    return max(known)


def shift(
    x: InstantArray | RawInstants,
    *,
    years: RawOperand = None,
    months: RawOperand = None,
    weeks: RawOperand = None,
    days: RawOperand = None,
    hours: RawOperand = None,
    minutes: RawOperand = None,
    seconds: RawOperand = None,
    size: int | None = None,
    names: Iterable[str] | None = None,
    zone: Any = None,
) -> InstantArray:
    """
    Shift instants by calendar-unaware amounts of time.

    Years and months are converted with fixed average lengths
    (1 year = 365.2425 days = 12 months), so this never clamps to a
    day of month and ignores leap years and zones.

    Args:
        x: InstantArray, or raw instants (ints, floats, aware datetimes,
            None, or a numpy int64/float/datetime64 array)
        years .. seconds: Unit operands, each None, an int, or one value
            per instant (None or the raw missing marker for missing)
        size: Output length; defaults to the common length of x and operands
        names: Element names, only when x is raw
        zone: Opaque zone tag, only when x is raw

    Returns:
        InstantArray of shifted instants; missing wherever the base or an
        applied operand is missing

    Raises:
        LengthMismatch: If an input has neither length 1 nor the output length
        ArithmeticOverflow: If a result leaves the int64 range

    Example:
        >>> from timeshift import shift
        >>> shift([0, None], weeks=2, days=[3, 1]).values
        (1468800, None)
    """
    if isinstance(x, InstantArray):
        if names is not None or zone is not None:
            raise ValueError(
                "names and zone can only be given with raw instants.\n"
                "Hint: InstantArray already carries them; use\n"
                "  dataclasses.replace(array, names=..., zone=...)"
            )
        base = x
    else:
        base = InstantArray.from_raw(x, names=names, zone=zone)

    ops = operands(
        years=years,
        months=months,
        weeks=weeks,
        days=days,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
    )

    if size is None:
        size = _common_size(len(base), ops.common_size())

    return add_duration(base, ops, size)
