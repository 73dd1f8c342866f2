"""Reverse-postorder (RPO) ranking of stations reachable from a start node.

The traversal is an iterative depth-first search that reproduces the
postorder of the textbook recursive formulation: successors are explored in
stored order, each station is visited at most once, and a station is
emitted once all of its outgoing edges have been examined. An explicit stack
keeps long chains clear of the interpreter recursion limit.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

from cargoflow.model.graph import FlowGraph
from cargoflow.types.base import NodeID


def reverse_postorder(
    graph: FlowGraph, start: Optional[NodeID] = None
) -> List[NodeID]:
    """Return reachable station ids in reverse postorder.

    Args:
        graph: Station graph.
        start: Traversal root; defaults to the graph entry.

    Returns:
        Station ids reachable from ``start``; ``start`` comes first.
        Unreachable stations are absent.
    """
    root = graph.entry if start is None else start
    graph.index_of(root)  # raises UnknownNodeReference for foreign ids

    visited: Set[NodeID] = {root}
    postorder: List[NodeID] = []
    stack: List[Tuple[NodeID, Iterator[NodeID]]] = [
        (root, iter(graph.successors(root)))
    ]
    while stack:
        node_id, successors = stack[-1]
        for neighbor_id in successors:
            if neighbor_id not in visited:
                visited.add(neighbor_id)
                stack.append((neighbor_id, iter(graph.successors(neighbor_id))))
                break
        else:
            # All outgoing edges explored
            stack.pop()
            postorder.append(node_id)

    postorder.reverse()
    return postorder


def rpo_rank(order: Sequence[NodeID]) -> Dict[NodeID, int]:
    """Map each station id in ``order`` to its position."""
    return {node_id: rank for rank, node_id in enumerate(order)}
