"""Unit operands and their broadcast rules.

Each of the seven units is absent (None), a scalar (length 1, reused at every
index) or a full sequence with one value per output element. Elements are
ints or None for missing.
"""

import logging
from dataclasses import dataclass

from timeshift.codec import RawOperand, check_operand_value, decode_operand
from timeshift.errors import LengthMismatch
from timeshift.util import UNITS, Unit

logger = logging.getLogger(__name__)

Operand = tuple[int | None, ...]


@dataclass(frozen=True, kw_only=True)
class OperandSet:
    years: Operand | None = None
    months: Operand | None = None
    weeks: Operand | None = None
    days: Operand | None = None
    hours: Operand | None = None
    minutes: Operand | None = None
    seconds: Operand | None = None

    def __post_init__(self) -> None:
        for unit in self.present():
            operand = getattr(self, unit)
            if not isinstance(operand, tuple):
                raise TypeError(
                    f"{unit} must be a tuple of int | None, "
                    f"got {type(operand).__name__!r}.\n"
                    f"Hint: use operands({unit}=...) to convert lists, "
                    f"scalars or numpy arrays."
                )
            for value in operand:
                check_operand_value(value, unit)

    def operand(self, unit: Unit) -> Operand | None:
        if unit not in UNITS:
            valid = ", ".join(UNITS)
            raise ValueError(f"Invalid unit '{unit}'. Valid units: {valid}")
        return getattr(self, unit)

    def present(self) -> tuple[Unit, ...]:
        """Units that will be applied, in application order."""
        return tuple(unit for unit in UNITS if getattr(self, unit) is not None)

    def common_size(self) -> int | None:
        """Length all present operands recycle to, or None if none is present.

        A zero-length operand makes the common size 0; otherwise it is the
        longest operand. Lengths are not checked here, see `validate`.
        """
        lengths = [len(getattr(self, unit)) for unit in self.present()]
        if not lengths:
            return None
        if 0 in lengths:
            return 0
        return max(lengths)

    def validate(self, size: int) -> None:
        """Check every present operand has length 1 or `size`.

        Raises:
            LengthMismatch: For the first operand (in unit order) that does not
        """
        for unit in self.present():
            length = len(getattr(self, unit))
            if length != 1 and length != size:
                raise LengthMismatch(unit, length, size)

    def is_broadcast(self, unit: Unit) -> bool:
        operand = self.operand(unit)
        return operand is not None and len(operand) == 1

    def value(self, unit: Unit, index: int) -> int | None:
        """Resolved value of `unit` at `index` (the scalar when broadcasting)."""
        operand = self.operand(unit)
        if operand is None:
            raise ValueError(f"{unit} is absent and has no value at index {index}")
        if len(operand) == 1:
            return operand[0]
        return operand[index]

    def is_missing(self, unit: Unit, index: int) -> bool:
        return self.value(unit, index) is None


def operands(
    *,
    years: RawOperand = None,
    months: RawOperand = None,
    weeks: RawOperand = None,
    days: RawOperand = None,
    hours: RawOperand = None,
    minutes: RawOperand = None,
    seconds: RawOperand = None,
) -> OperandSet:
    """
    Build an operand set from raw unit values.

    Args:
        years .. seconds: For each unit, one of
            - None: the unit is not applied
            - int: applied to every instant
            - sequence of int | None: one value per instant (None = missing)
            - numpy integer array: OPERAND_NA marks missing
            - numpy float array: NaN marks missing

    Returns:
        OperandSet with every unit decoded to a tuple of int | None

    Raises:
        TypeError: If a unit holds non-integer values
        ValueError: If a value does not fit in a signed 32-bit integer

    Example:
        >>> ops = operands(weeks=2, days=[1, None, 3])
        >>> ops.present()
        ('weeks', 'days')
    """
    result = OperandSet(
        years=decode_operand(years, "years"),
        months=decode_operand(months, "months"),
        weeks=decode_operand(weeks, "weeks"),
        days=decode_operand(days, "days"),
        hours=decode_operand(hours, "hours"),
        minutes=decode_operand(minutes, "minutes"),
        seconds=decode_operand(seconds, "seconds"),
    )
    logger.debug("Decoded operands: %s", ", ".join(result.present()) or "none")
    return result
