"""Base type aliases and enums for the flow analysis."""

from __future__ import annotations

from enum import IntEnum

#: Station (node) identifier as declared in the input.
NodeID = int

#: Opaque cargo token tracked by the analysis.
FlowValue = int


class WorklistOrder(IntEnum):
    """Node selection policy for the fixpoint worklist.

    Both policies converge to the same least fixpoint; they differ only in
    how many node visits it takes on cyclic graphs.
    """

    #: Always pick the queued node with the lowest reverse-postorder rank.
    RPO = 1
    #: Pick queued nodes in the order they were enqueued.
    FIFO = 2

    @classmethod
    def from_string(cls, value: str) -> "WorklistOrder":
        """Parse a string into a WorklistOrder enum value.

        Args:
            value: Case-insensitive name (e.g., "rpo", "FIFO").

        Returns:
            The corresponding WorklistOrder member.

        Raises:
            ValueError: If the string doesn't match any member.
        """
        try:
            return cls[value.upper()]
        except KeyError:
            valid = ", ".join(e.name for e in cls)
            raise ValueError(
                f"Invalid worklist order '{value}'. Valid values are: {valid}"
            ) from None
