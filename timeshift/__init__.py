from importlib.resources import files

from .accumulate import DurationAccumulator
from .core import InstantAdder, add_duration, shift
from .errors import ArithmeticOverflow, LengthMismatch
from .instants import InstantArray
from .operands import OperandSet, operands
from .util import DAY, HOUR, INSTANT_NA, MINUTE, MONTH, OPERAND_NA, SECOND, WEEK, YEAR

# Load documentation files for programmatic access by agents and code-aware tools
_docs_path = files(__package__) / "docs"
docs = {
    "readme": (_docs_path / "README.md").read_text(),
}

__all__ = [
    "InstantArray",
    "OperandSet",
    "DurationAccumulator",
    "InstantAdder",
    "operands",
    "add_duration",
    "shift",
    "LengthMismatch",
    "ArithmeticOverflow",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "WEEK",
    "MONTH",
    "YEAR",
    "INSTANT_NA",
    "OPERAND_NA",
    "docs",
]
