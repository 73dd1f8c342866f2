"""NetworkX graph conversion utilities.

Example:
    >>> import networkx as nx
    >>> from cargoflow.lib.nx import from_networkx, to_networkx
    >>>
    >>> G = nx.DiGraph()
    >>> G.add_node(1, unload=10, load=20)
    >>> G.add_node(2, unload=30, load=40)
    >>> G.add_edge(1, 2)
    >>> graph = from_networkx(G, entry=1)
    >>>
    >>> G_out = to_networkx(graph)
    >>> G_out.graph["entry"]
    1
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Tuple, Union

import networkx as nx

from cargoflow.errors import MalformedInput
from cargoflow.io import check_int
from cargoflow.model.graph import FlowGraph, Station
from cargoflow.types.base import NodeID

if TYPE_CHECKING:
    NxGraph = Union[nx.DiGraph, nx.MultiDiGraph]
else:
    NxGraph = Any


def from_networkx(
    G: NxGraph,
    entry: Optional[NodeID] = None,
    *,
    unload_attr: str = "unload",
    load_attr: str = "load",
) -> FlowGraph:
    """Convert a directed NetworkX graph into a FlowGraph.

    Node iteration order of ``G`` becomes declaration order; parallel edges
    of a MultiDiGraph are kept.

    Args:
        G: Directed NetworkX graph whose nodes carry unload/load attributes.
        entry: Entry station id. Defaults to ``G.graph["entry"]``.
        unload_attr: Node attribute holding the unload value.
        load_attr: Node attribute holding the load value.

    Returns:
        FlowGraph built from ``G``.

    Raises:
        MalformedInput: If ``G`` is undirected, a node lacks an attribute,
            an id or attribute is not an integer, or no entry is given.
        UnknownNodeReference: If the entry is not a node of ``G``.
    """
    if not G.is_directed():
        raise MalformedInput("cargo flow requires a directed graph")

    if entry is None:
        if "entry" not in G.graph:
            raise MalformedInput("no entry given and graph has no 'entry' attribute")
        entry = G.graph["entry"]

    stations: List[Station] = []
    for node_id, attrs in G.nodes(data=True):
        missing = [a for a in (unload_attr, load_attr) if a not in attrs]
        if missing:
            raise MalformedInput(
                f"node '{node_id}' is missing attribute(s): {', '.join(missing)}"
            )
        stations.append(
            Station(
                check_int(node_id, "node id"),
                check_int(attrs[unload_attr], f"node '{node_id}' attribute '{unload_attr}'"),
                check_int(attrs[load_attr], f"node '{node_id}' attribute '{load_attr}'"),
            )
        )

    edges: List[Tuple[NodeID, NodeID]] = [
        (check_int(u, "edge source"), check_int(v, "edge target")) for u, v in G.edges()
    ]
    return FlowGraph.build(stations, edges, check_int(entry, "entry"))


def to_networkx(graph: FlowGraph) -> nx.MultiDiGraph:
    """Convert a FlowGraph into a NetworkX MultiDiGraph.

    Stations become nodes with ``unload`` and ``load`` attributes, every edge
    (duplicates included) becomes an edge, and the entry id is stored in
    ``G.graph["entry"]``.
    """
    G = nx.MultiDiGraph(entry=graph.entry)
    for station in graph.stations:
        G.add_node(station.id, unload=station.unload, load=station.load)
    for src, dst in graph.edges:
        G.add_edge(src, dst)
    return G
