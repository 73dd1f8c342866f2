"""Configuration classes for cargoflow analyses."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict

from cargoflow.types.base import WorklistOrder


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for the fixpoint engine."""

    # Worklist selection policy
    order: WorklistOrder = WorklistOrder.RPO

    # Work bound is (nodes + edges) * universe width * guard_factor, plus one visit per node
    guard_factor: int = 4

    def __post_init__(self) -> None:
        if not isinstance(self.order, WorklistOrder):
            raise ValueError(f"order must be a WorklistOrder, got {self.order!r}")
        if isinstance(self.guard_factor, bool) or not isinstance(
            self.guard_factor, int
        ):
            raise ValueError(
                f"guard_factor must be an integer, got {self.guard_factor!r}"
            )
        if self.guard_factor < 1:
            raise ValueError(f"guard_factor must be >= 1, got {self.guard_factor}")

    def iteration_limit(self, num_nodes: int, num_edges: int, width: int) -> int:
        """Return the maximum number of station visits allowed for a graph.

        Every visit that changes an output re-queues at most one entry per
        outgoing edge, and each output changes at most ``width`` times.
        """
        return (num_nodes + num_edges) * max(width, 1) * self.guard_factor + num_nodes

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisConfig":
        """Build a config from a plain mapping (e.g. parsed YAML/JSON).

        Args:
            data: Mapping with optional keys ``order`` and ``guard_factor``.

        Returns:
            AnalysisConfig instance.

        Raises:
            ValueError: On unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(str(k) for k in data if k not in known)
        if unknown:
            raise ValueError(f"Unknown analysis config keys: {', '.join(unknown)}")

        kwargs: Dict[str, Any] = dict(data)
        order = kwargs.get("order")
        if isinstance(order, str):
            kwargs["order"] = WorklistOrder.from_string(order)
        return cls(**kwargs)


# Global default configuration instance
DEFAULT_CONFIG = AnalysisConfig()
