from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, overload

import numpy as np
import numpy.typing as npt
from typing_extensions import override

from timeshift.codec import (
    RawInstants,
    decode_instants,
    encode_datetime64,
    encode_instants,
)
from timeshift.util import in_instant_range


@dataclass(frozen=True, kw_only=True)
class InstantArray(Sequence[int | None]):
    """Seconds since the epoch, with None for missing elements.

    `names` and `zone` travel with the values but are never interpreted:
    the zone tag is whatever the caller attached to the base array.
    """

    values: tuple[int | None, ...]
    names: tuple[str, ...] | None = None
    zone: Any = None

    def __post_init__(self) -> None:
        for value in self.values:
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(
                    f"InstantArray values must be int or None, "
                    f"got {type(value).__name__!r}: {value!r}\n"
                    f"Hint: use InstantArray.from_raw(...) to convert "
                    f"numpy arrays, floats or datetimes."
                )
            if not in_instant_range(value):
                raise ValueError(
                    f"Instant {value} is outside the signed 64-bit range of seconds."
                )
        if self.names is not None and len(self.names) != len(self.values):
            raise ValueError(
                f"InstantArray names ({len(self.names)}) must match "
                f"values ({len(self.values)})"
            )

    @classmethod
    def from_raw(
        cls,
        raw: RawInstants,
        names: Iterable[str] | None = None,
        zone: Any = None,
    ) -> "InstantArray":
        """Build an array from raw instants (see `timeshift.codec`)."""
        return cls(
            values=decode_instants(raw),
            names=None if names is None else tuple(names),
            zone=zone,
        )

    def to_numpy(self) -> npt.NDArray[np.int64]:
        """Raw int64 seconds, INSTANT_NA for missing."""
        return encode_instants(self.values)

    def to_datetime64(self) -> npt.NDArray[np.datetime64]:
        return encode_datetime64(self.values)

    @property
    def missing(self) -> tuple[bool, ...]:
        return tuple(value is None for value in self.values)

    @override
    def __len__(self) -> int:
        return len(self.values)

    @overload
    def __getitem__(self, index: int) -> int | None: ...

    @overload
    def __getitem__(self, index: slice) -> "InstantArray": ...

    @override
    def __getitem__(self, index: int | slice) -> "int | None | InstantArray":
        if isinstance(index, slice):
            return InstantArray(
                values=self.values[index],
                names=None if self.names is None else self.names[index],
                zone=self.zone,
            )
        return self.values[index]

    @override
    def __str__(self) -> str:
        """Human-friendly summary showing size, missing count and zone."""
        missing = sum(self.missing)
        return (
            f"InstantArray({len(self.values)} instants, {missing} missing, "
            f"zone={self.zone!r})"
        )
