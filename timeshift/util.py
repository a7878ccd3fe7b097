"""Utility constants and helpers for timeshift.

Time unit constants represent durations in seconds.
Years and months use the average Gregorian lengths (365.2425 days per year),
so twelve months add up to exactly one year.
"""

from typing import Literal, TypeAlias

# Time unit constants (all values in seconds)
SECOND = 1
MINUTE = 60
HOUR = 3600
DAY = 86400
WEEK = 604800
MONTH = 2629746
YEAR = 31556952

Unit: TypeAlias = Literal[
    "years", "months", "weeks", "days", "hours", "minutes", "seconds"
]

# Application order when folding operands into an offset
UNITS: tuple[Unit, ...] = (
    "years",
    "months",
    "weeks",
    "days",
    "hours",
    "minutes",
    "seconds",
)

UNIT_SECONDS: dict[Unit, int] = {
    "years": YEAR,
    "months": MONTH,
    "weeks": WEEK,
    "days": DAY,
    "hours": HOUR,
    "minutes": MINUTE,
    "seconds": SECOND,
}

# Integer ranges of the raw representations
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

# Reserved missing markers at the raw boundary
INSTANT_NA = INT64_MIN
OPERAND_NA = INT32_MIN


def in_instant_range(value: int) -> bool:
    """True if value is a representable instant (the NA bit pattern is not)."""
    return INT64_MIN < value <= INT64_MAX


def in_operand_range(value: int) -> bool:
    return INT32_MIN < value <= INT32_MAX
