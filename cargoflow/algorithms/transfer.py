"""Per-station transfer function: unload one cargo value, then load one."""

from __future__ import annotations

from dataclasses import dataclass

from cargoflow.model.graph import Station
from cargoflow.model.universe import FlowBits, FlowUniverse


@dataclass(frozen=True)
class StationTransfer:
    """Transfer function of a single station, resolved to bit indices.

    Attributes:
        unload_index: Bit cleared by the station.
        load_index: Bit set by the station.
    """

    unload_index: int
    load_index: int

    @classmethod
    def for_station(cls, station: Station, universe: FlowUniverse) -> "StationTransfer":
        return cls(
            unload_index=universe.index_of(station.unload),
            load_index=universe.index_of(station.load),
        )

    def apply(self, in_bits: FlowBits) -> FlowBits:
        """Return ``(in_bits - {unload}) | {load}`` as a new bit-vector.

        The input is left untouched. Unload is applied before load, so a
        station whose unload and load values coincide passes the value on.
        """
        out_bits = in_bits.copy()
        out_bits[self.unload_index] = False
        out_bits[self.load_index] = True
        return out_bits


def transfer(station: Station, in_bits: FlowBits, universe: FlowUniverse) -> FlowBits:
    """Apply ``station``'s transfer function to ``in_bits``.

    Args:
        station: Station whose unload/load values drive the transfer.
        in_bits: Input flow set over ``universe``.
        universe: Universe containing the station's unload and load values.

    Returns:
        New output flow set.
    """
    return StationTransfer.for_station(station, universe).apply(in_bits)
