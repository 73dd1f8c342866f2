"""cargoflow: cargo-flow analysis over railway station graphs.

Every station of a directed (possibly cyclic) graph unloads one cargo value
and loads another. Starting from an entry station with no cargo, cargoflow
computes the complete set of cargo values that can be on board when a train
arrives at each station. This is a monotone forward dataflow problem solved
with a reverse-postorder worklist over numpy bit-vectors.

Primary API:
    FlowGraph, Station - Immutable station graph model
    analyze() - Run the fixpoint analysis
    AnalysisResult - Mapping from station id to cargo set
    parse_text(), load_graph() - Graph readers
    from_networkx(), to_networkx() - NetworkX conversion

Example:
    from cargoflow import FlowGraph, Station, analyze

    graph = FlowGraph.build(
        [Station(1, 10, 20), Station(2, 30, 40), Station(3, 20, 50)],
        [(1, 2), (2, 3)],
        entry=1,
    )
    result = analyze(graph)
    sorted(result[3])  # [20, 40]
"""

from __future__ import annotations

from cargoflow import cli, logging
from cargoflow._version import __version__
from cargoflow.analysis import AnalysisResult, analyze
from cargoflow.config import DEFAULT_CONFIG, AnalysisConfig
from cargoflow.errors import (
    CargoFlowError,
    DuplicateNodeId,
    IterationLimitExceeded,
    MalformedInput,
    UnknownNodeReference,
)
from cargoflow.io import (
    format_text,
    graph_to_node_link,
    load_graph,
    node_link_to_graph,
    parse_text,
    result_to_json,
)
from cargoflow.lib.nx import from_networkx, to_networkx
from cargoflow.model import FlowGraph, FlowUniverse, Station
from cargoflow.types.base import WorklistOrder

__all__ = [
    # Version
    "__version__",
    # Model
    "FlowGraph",
    "FlowUniverse",
    "Station",
    # Analysis (primary API)
    "analyze",
    "AnalysisResult",
    "AnalysisConfig",
    "DEFAULT_CONFIG",
    "WorklistOrder",
    # Errors
    "CargoFlowError",
    "MalformedInput",
    "UnknownNodeReference",
    "DuplicateNodeId",
    "IterationLimitExceeded",
    # I/O
    "parse_text",
    "load_graph",
    "format_text",
    "result_to_json",
    "graph_to_node_link",
    "node_link_to_graph",
    # Library integrations (NetworkX)
    "from_networkx",
    "to_networkx",
    # Utilities
    "cli",
    "logging",
]
