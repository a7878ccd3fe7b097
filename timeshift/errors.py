"""Exceptions raised by timeshift.

Missing values are never errors; these cover contract violations only.
"""


class LengthMismatch(ValueError):
    """A present input can neither be broadcast nor matched to the output size."""

    def __init__(self, unit: str, length: int, size: int):
        self.unit: str = unit
        self.length: int = length
        self.size: int = size
        super().__init__(
            f"{unit} must have length 1 or {size}, got length {length}.\n"
            f"Hint: a single value is reused at every index;\n"
            f"      otherwise pass exactly one value per output element.\n"
            f"Example: shift([0, 60], days=1) or shift([0, 60], days=[1, 2])"
        )


class ArithmeticOverflow(OverflowError):
    """A shifted instant left the signed 64-bit range."""

    def __init__(self, index: int):
        self.index: int = index
        super().__init__(
            f"Signed 64-bit overflow at index {index} while adding the offset "
            f"to the base instant.\n"
            f"Instants are seconds since 1970-01-01 and must stay within "
            f"[-(2**63 - 1), 2**63 - 1]."
        )
