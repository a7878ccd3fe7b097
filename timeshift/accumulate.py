from timeshift.operands import OperandSet
from timeshift.util import UNIT_SECONDS, Unit


class DurationAccumulator:
    """Fold the present operands at one index into an offset in seconds.

    Years and months use the fixed average lengths from `timeshift.util`;
    they never look at an actual calendar date.

    Operands are signed 32-bit, so even all seven units at their extremes
    stay far below 2**63 seconds and the offset itself cannot overflow.
    """

    def __init__(self, operands: OperandSet):
        self.operands: OperandSet = operands
        self.units: tuple[Unit, ...] = operands.present()

    def accumulate(self, index: int) -> int | None:
        """Return the signed offset at `index`, or None if any applied unit is missing.

        Units are walked in application order and evaluation stops at the
        first missing value.
        """
        offset = 0
        for unit in self.units:
            value = self.operands.value(unit, index)
            if value is None:
                return None
            offset += value * UNIT_SECONDS[unit]
        return offset
