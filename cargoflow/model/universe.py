"""Dense indexing of flow values and bit-vector flow sets.

A :class:`FlowUniverse` maps each distinct cargo value that occurs as some
station's unload or load attribute to a contiguous index in ascending value
order. Flow sets over the universe are fixed-width numpy boolean arrays, so
union, difference and equality become vectorized operations.

Example:
    >>> universe = FlowUniverse.from_values([30, 10, 20, 10])
    >>> universe.values
    (10, 20, 30)
    >>> bits = universe.from_iterable([30, 10])
    >>> universe.to_values(bits)
    (10, 30)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Tuple

import numpy as np

from cargoflow.types.base import FlowValue

#: Bit-vector representation of a flow set.
FlowBits = np.ndarray


@dataclass(frozen=True)
class FlowUniverse:
    """Bijection between flow values and dense indices ``0..width-1``.

    Attributes:
        values: Distinct flow values in ascending order; position is the index.
        to_index: Read-only map from flow value to its index, derived from
            ``values``.
    """

    values: Tuple[FlowValue, ...] = ()
    to_index: Mapping[FlowValue, int] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "to_index",
            MappingProxyType({v: i for i, v in enumerate(self.values)}),
        )

    @classmethod
    def from_values(cls, values: Iterable[FlowValue]) -> "FlowUniverse":
        """Create a universe from arbitrary (possibly repeated) values."""
        ordered = tuple(sorted(set(values)))
        return cls(values=ordered)

    @property
    def width(self) -> int:
        """Number of distinct flow values (bit-vector width)."""
        return len(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __contains__(self, value: object) -> bool:
        return value in self.to_index

    def __iter__(self) -> Iterator[FlowValue]:
        return iter(self.values)

    def index_of(self, value: FlowValue) -> int:
        """Return the dense index of ``value``.

        Raises:
            KeyError: If the value is not part of the universe.
        """
        try:
            return self.to_index[value]
        except KeyError:
            raise KeyError(f"Flow value {value!r} is not in the universe") from None

    def value_at(self, index: int) -> FlowValue:
        """Return the flow value stored at ``index``."""
        if not 0 <= index < len(self.values):
            raise IndexError(f"Flow index {index} out of range 0..{len(self.values)}")
        return self.values[index]

    def empty_set(self) -> FlowBits:
        """Return a fresh all-clear bit-vector."""
        return np.zeros(len(self.values), dtype=bool)

    def from_iterable(self, values: Iterable[FlowValue]) -> FlowBits:
        """Return a bit-vector with the bits of ``values`` set."""
        bits = self.empty_set()
        for value in values:
            bits[self.index_of(value)] = True
        return bits

    def to_values(self, bits: FlowBits) -> Tuple[FlowValue, ...]:
        """Return the flow values whose bits are set, ascending."""
        return tuple(self.values[i] for i in np.flatnonzero(bits))
