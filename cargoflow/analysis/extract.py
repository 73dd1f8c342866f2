"""Translate bit-vector tables back into sets of cargo values."""

from __future__ import annotations

from typing import Dict, FrozenSet

import numpy as np

from cargoflow.model.graph import FlowGraph
from cargoflow.types.base import FlowValue, NodeID


def extract_flow_sets(
    graph: FlowGraph, table: np.ndarray
) -> Dict[NodeID, FrozenSet[FlowValue]]:
    """Map every station id to the cargo values set in its row of ``table``.

    Args:
        graph: Graph whose dense indices address the rows of ``table``.
        table: ``(num_nodes, width)`` boolean table.

    Returns:
        Dict keyed by station id (declaration order), covering all stations.
    """
    values = np.asarray(graph.universe.values, dtype=object)
    return {
        station.id: frozenset(values[table[row]].tolist())
        for row, station in enumerate(graph.stations)
    }
