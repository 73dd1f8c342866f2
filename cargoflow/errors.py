"""Exception types raised by cargoflow.

All structural input defects derive from :class:`CargoFlowError`, which is a
``ValueError`` so callers that only care about "bad input" can catch the
builtin. Once a valid graph exists the fixpoint engine cannot fail.
:class:`IterationLimitExceeded` is an internal-error diagnostic and is kept
outside that hierarchy.
"""

from __future__ import annotations

from typing import Hashable, Optional


class CargoFlowError(ValueError):
    """Base class for all cargoflow input errors."""


class MalformedInput(CargoFlowError):
    """Input text or document does not follow the expected format.

    Attributes:
        line_no: 1-based line number of the offending line, if known.
    """

    def __init__(self, message: str, line_no: Optional[int] = None) -> None:
        self.line_no = line_no
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)


class UnknownNodeReference(CargoFlowError):
    """An edge endpoint or the entry id names a node that was never declared."""

    def __init__(self, node_id: Hashable, context: str = "edge") -> None:
        self.node_id = node_id
        self.context = context
        super().__init__(f"{context} references unknown node '{node_id}'")


class DuplicateNodeId(CargoFlowError):
    """Two node declarations share the same id."""

    def __init__(self, node_id: Hashable) -> None:
        self.node_id = node_id
        super().__init__(f"Node '{node_id}' is declared more than once")


class IterationLimitExceeded(RuntimeError):
    """The fixpoint engine exceeded its work bound.

    Monotone transfer functions over a finite universe always converge well
    inside the bound, so this indicates a defect rather than bad input.
    """

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"Fixpoint iteration did not converge within {limit} visits")
