"""Primary analysis entry point and result container."""

from __future__ import annotations

from typing import Any, Dict, FrozenSet, Iterator, List, Mapping, Optional, Tuple

from cargoflow.algorithms.fixpoint import FixpointStats, Observer, solve
from cargoflow.analysis.extract import extract_flow_sets
from cargoflow.config import AnalysisConfig
from cargoflow.logging import get_logger
from cargoflow.model.graph import FlowGraph
from cargoflow.types.base import FlowValue, NodeID

logger = get_logger(__name__)


class AnalysisResult(Mapping[NodeID, FrozenSet[FlowValue]]):
    """Read-only mapping from station id to the cargo present on arrival.

    Every station of the analyzed graph is a key; stations unreachable from
    the entry map to an empty set.

    Attributes:
        outputs: Mapping from station id to the cargo present on departure.
        stats: Work counters of the fixpoint run.
    """

    def __init__(
        self,
        inputs: Dict[NodeID, FrozenSet[FlowValue]],
        outputs: Dict[NodeID, FrozenSet[FlowValue]],
        stats: FixpointStats,
    ) -> None:
        self._inputs = inputs
        self._outputs = outputs
        self.stats = stats

    def __getitem__(self, node_id: NodeID) -> FrozenSet[FlowValue]:
        return self._inputs[node_id]

    def __iter__(self) -> Iterator[NodeID]:
        return iter(self._inputs)

    def __len__(self) -> int:
        return len(self._inputs)

    @property
    def outputs(self) -> Mapping[NodeID, FrozenSet[FlowValue]]:
        return dict(self._outputs)

    def sorted_items(self) -> List[Tuple[NodeID, Tuple[FlowValue, ...]]]:
        """Return ``(station id, ascending cargo values)`` by ascending id."""
        return [
            (node_id, tuple(sorted(self._inputs[node_id])))
            for node_id in sorted(self._inputs)
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation.

        Station ids become string keys (JSON object keys are strings).
        """
        return {
            "stations": {
                str(node_id): list(values) for node_id, values in self.sorted_items()
            },
            "stats": {
                "iterations": self.stats.iterations,
                "updates": self.stats.updates,
                "order": self.stats.order.name.lower(),
                "reachable": self.stats.reachable,
            },
        }

    def __repr__(self) -> str:
        return f"AnalysisResult({dict(self.sorted_items())!r})"


def analyze(
    graph: FlowGraph,
    config: Optional[AnalysisConfig] = None,
    observer: Optional[Observer] = None,
) -> AnalysisResult:
    """Compute the cargo present on arrival at every station.

    Args:
        graph: Validated station graph. It is not modified, so repeated calls
            return equal results.
        config: Optional engine configuration.
        observer: Optional per-visit callback forwarded to the engine.

    Returns:
        AnalysisResult keyed by every station id of ``graph``.
    """
    state, stats = solve(graph, config=config, observer=observer)
    result = AnalysisResult(
        inputs=extract_flow_sets(graph, state.inputs),
        outputs=extract_flow_sets(graph, state.outputs),
        stats=stats,
    )
    logger.debug(
        "Analysis complete: %d stations, %d visits", len(result), stats.iterations
    )
    return result
