"""Worklist fixpoint engine for the forward cargo-flow analysis.

Solves, for every station ``n`` reachable from the entry::

    IN(n)  = union of OUT(p) over predecessors p of n   (IN(entry) starts empty)
    OUT(n) = (IN(n) - {unload(n)}) | {load(n)}

Notes:
    ``IN(n)`` is accumulated: each visit ORs the predecessors' outputs into
    the stored input instead of replacing it. Under a union-only join this
    reaches the same least fixpoint as replacement, while guaranteeing that
    every bit, once set, stays set. Termination follows: each output row
    can change at most ``width`` times and a station is re-queued only when
    a predecessor's output changed.

    The worklist starts with the entry station. Visiting it derives
    ``OUT(entry)`` from the empty boundary input and queues its successors.
    Stations without an RPO rank (unreachable from the entry) are never
    scheduled, so their rows stay empty.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from heapq import heappop, heappush
from typing import Callable, Deque, Dict, List, Optional, Set, Tuple

import numpy as np

from cargoflow.algorithms.ordering import reverse_postorder, rpo_rank
from cargoflow.algorithms.transfer import StationTransfer
from cargoflow.config import DEFAULT_CONFIG, AnalysisConfig
from cargoflow.errors import IterationLimitExceeded
from cargoflow.logging import get_logger
from cargoflow.model.graph import FlowGraph
from cargoflow.model.universe import FlowBits
from cargoflow.types.base import NodeID, WorklistOrder

logger = get_logger(__name__)

#: Callback invoked after each station visit with (station id, IN copy, OUT copy).
Observer = Callable[[NodeID, FlowBits, FlowBits], None]


@dataclass
class FixpointState:
    """Array-backed per-station flow sets.

    Row ``i`` of each table belongs to the station with dense index ``i``
    (see :meth:`FlowGraph.index_of`).

    Attributes:
        inputs: ``(num_nodes, width)`` boolean table of input sets.
        outputs: ``(num_nodes, width)`` boolean table of output sets.
    """

    inputs: np.ndarray
    outputs: np.ndarray

    @classmethod
    def empty(cls, num_nodes: int, width: int) -> "FixpointState":
        return cls(
            inputs=np.zeros((num_nodes, width), dtype=bool),
            outputs=np.zeros((num_nodes, width), dtype=bool),
        )


@dataclass(frozen=True)
class FixpointStats:
    """Work counters of a solver run.

    Attributes:
        iterations: Number of station visits (worklist pops).
        updates: Number of visits that changed a station's output set.
        order: Worklist policy used.
        reachable: Number of stations reachable from the entry.
    """

    iterations: int
    updates: int
    order: WorklistOrder
    reachable: int


class _Worklist:
    """Deduplicated queue of station ids.

    A station already queued is not queued twice; once popped it may be
    queued again.
    """

    def __init__(self, order: WorklistOrder, rank: Dict[NodeID, int]) -> None:
        self._order = order
        self._rank = rank
        self._queued: Set[NodeID] = set()
        self._heap: List[Tuple[int, NodeID]] = []
        self._fifo: Deque[NodeID] = deque()

    def __bool__(self) -> bool:
        return bool(self._queued)

    def __len__(self) -> int:
        return len(self._queued)

    def push(self, node_id: NodeID) -> None:
        if node_id in self._queued:
            return
        self._queued.add(node_id)
        if self._order == WorklistOrder.RPO:
            heappush(self._heap, (self._rank[node_id], node_id))
        else:
            self._fifo.append(node_id)

    def pop(self) -> NodeID:
        if self._order == WorklistOrder.RPO:
            _, node_id = heappop(self._heap)
        else:
            node_id = self._fifo.popleft()
        self._queued.discard(node_id)
        return node_id


def solve(
    graph: FlowGraph,
    config: Optional[AnalysisConfig] = None,
    observer: Optional[Observer] = None,
) -> Tuple[FixpointState, FixpointStats]:
    """Run the worklist iteration to its least fixpoint.

    Args:
        graph: Validated station graph.
        config: Engine configuration; defaults to ``DEFAULT_CONFIG``.
        observer: Optional callback receiving copies of a station's input and
            output sets after every visit.

    Returns:
        Tuple of (final state, run statistics).

    Raises:
        IterationLimitExceeded: If the visit count exceeds the configured
            bound. Cannot happen for the unload/load transfer.
    """
    cfg = config if config is not None else DEFAULT_CONFIG
    universe = graph.universe
    num_nodes = graph.number_of_nodes()
    width = len(universe)

    order = reverse_postorder(graph)
    rank = rpo_rank(order)
    limit = cfg.iteration_limit(num_nodes, graph.number_of_edges(), width)

    state = FixpointState.empty(num_nodes, width)
    transfers = [StationTransfer.for_station(s, universe) for s in graph.stations]
    pred_rows = [
        np.fromiter(
            (graph.index_of(p) for p in graph.predecessors(s.id)), dtype=np.intp
        )
        for s in graph.stations
    ]

    logger.debug(
        "Solving fixpoint: %d reachable of %d stations, width=%d, order=%s",
        len(order),
        num_nodes,
        width,
        cfg.order.name,
    )

    worklist = _Worklist(cfg.order, rank)
    worklist.push(graph.entry)

    iterations = 0
    updates = 0
    while worklist:
        if iterations >= limit:
            raise IterationLimitExceeded(limit)
        iterations += 1

        node_id = worklist.pop()
        row = graph.index_of(node_id)
        in_bits = state.inputs[row]

        # Accumulate: fold predecessor outputs into the stored input
        np.logical_or(in_bits, state.outputs[pred_rows[row]].any(axis=0), out=in_bits)

        candidate = transfers[row].apply(in_bits)
        if not np.array_equal(candidate, state.outputs[row]):
            state.outputs[row] = candidate
            updates += 1
            for succ_id in graph.successors(node_id):
                if succ_id in rank:
                    worklist.push(succ_id)

        if observer is not None:
            observer(node_id, in_bits.copy(), state.outputs[row].copy())

    stats = FixpointStats(
        iterations=iterations,
        updates=updates,
        order=cfg.order,
        reachable=len(order),
    )
    logger.debug(
        "Fixpoint reached after %d visits (%d output updates)", iterations, updates
    )
    return state, stats
