"""Station graph model.

`FlowGraph` is an immutable directed multigraph of stations. Each station
carries an ``unload`` and a ``load`` cargo value. Successor and predecessor
lists keep edge declaration order; parallel edges, self-loops and cycles are
all legal. Construction validates references and assigns every station a
dense index (declaration order) used by the array-backed analysis state.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Sequence, Set, Tuple

from cargoflow.errors import DuplicateNodeId, UnknownNodeReference
from cargoflow.logging import get_logger
from cargoflow.model.universe import FlowUniverse
from cargoflow.types.base import FlowValue, NodeID

logger = get_logger(__name__)

EdgeTuple = Tuple[NodeID, NodeID]

_NO_NEIGHBORS: Tuple[NodeID, ...] = ()


@dataclass(frozen=True)
class Station:
    """A graph node.

    Attributes:
        id: Unique station identifier.
        unload: Cargo value removed when passing through the station.
        load: Cargo value added when passing through the station.
    """

    id: NodeID
    unload: FlowValue
    load: FlowValue


class FlowGraph:
    """Immutable station graph with forward and reverse adjacency.

    Use :meth:`build` to construct; it validates the input and raises
    :class:`DuplicateNodeId` or :class:`UnknownNodeReference` on defects.
    """

    __slots__ = (
        "_stations",
        "_index",
        "_edges",
        "_succ",
        "_pred",
        "_entry",
        "_universe",
    )

    def __init__(
        self,
        stations: Tuple[Station, ...],
        edges: Tuple[EdgeTuple, ...],
        successors: Mapping[NodeID, Tuple[NodeID, ...]],
        predecessors: Mapping[NodeID, Tuple[NodeID, ...]],
        entry: NodeID,
    ) -> None:
        self._stations = stations
        self._index = MappingProxyType({s.id: i for i, s in enumerate(stations)})
        self._edges = edges
        self._succ = MappingProxyType(dict(successors))
        self._pred = MappingProxyType(dict(predecessors))
        self._entry = entry
        self._universe = FlowUniverse.from_values(
            value for s in stations for value in (s.unload, s.load)
        )

    @classmethod
    def build(
        cls,
        stations: Iterable[Station],
        edges: Iterable[EdgeTuple],
        entry: NodeID,
    ) -> "FlowGraph":
        """Validate and assemble a graph.

        Args:
            stations: Station declarations; ids must be unique.
            edges: ``(source, target)`` pairs in declaration order.
            entry: Id of the entry station.

        Returns:
            FlowGraph instance.

        Raises:
            DuplicateNodeId: If two stations share an id.
            UnknownNodeReference: If an edge endpoint or the entry is undeclared.
        """
        station_list: List[Station] = []
        seen: Set[NodeID] = set()
        for station in stations:
            if station.id in seen:
                raise DuplicateNodeId(station.id)
            seen.add(station.id)
            station_list.append(station)

        succ: Dict[NodeID, List[NodeID]] = {}
        pred: Dict[NodeID, List[NodeID]] = {}
        edge_list: List[EdgeTuple] = []
        for src, dst in edges:
            if src not in seen:
                raise UnknownNodeReference(src, context=f"edge ({src}, {dst})")
            if dst not in seen:
                raise UnknownNodeReference(dst, context=f"edge ({src}, {dst})")
            succ.setdefault(src, []).append(dst)
            pred.setdefault(dst, []).append(src)
            edge_list.append((src, dst))

        if entry not in seen:
            raise UnknownNodeReference(entry, context="entry")

        graph = cls(
            stations=tuple(station_list),
            edges=tuple(edge_list),
            successors={k: tuple(v) for k, v in succ.items()},
            predecessors={k: tuple(v) for k, v in pred.items()},
            entry=entry,
        )
        logger.debug(
            "Built graph with %d stations, %d edges, %d cargo values, entry=%s",
            graph.number_of_nodes(),
            graph.number_of_edges(),
            len(graph.universe),
            entry,
        )
        return graph

    @property
    def entry(self) -> NodeID:
        """Id of the entry station."""
        return self._entry

    @property
    def universe(self) -> FlowUniverse:
        """Flow universe derived from all unload and load values."""
        return self._universe

    @property
    def stations(self) -> Tuple[Station, ...]:
        """Stations in declaration order (dense index order)."""
        return self._stations

    @property
    def node_ids(self) -> Tuple[NodeID, ...]:
        """Station ids in declaration order."""
        return tuple(s.id for s in self._stations)

    @property
    def edges(self) -> Tuple[EdgeTuple, ...]:
        """Edges in declaration order, duplicates included."""
        return self._edges

    def number_of_nodes(self) -> int:
        return len(self._stations)

    def number_of_edges(self) -> int:
        return len(self._edges)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def __len__(self) -> int:
        return len(self._stations)

    def index_of(self, node_id: NodeID) -> int:
        """Return the dense index of a station.

        Raises:
            UnknownNodeReference: If the station does not exist.
        """
        try:
            return self._index[node_id]
        except KeyError:
            raise UnknownNodeReference(node_id, context="lookup") from None

    def station(self, node_id: NodeID) -> Station:
        """Return the station with the given id."""
        return self._stations[self.index_of(node_id)]

    def station_at(self, index: int) -> Station:
        """Return the station at a dense index."""
        return self._stations[index]

    def successors(self, node_id: NodeID) -> Sequence[NodeID]:
        """Return successor ids in edge declaration order (may repeat)."""
        return self._succ.get(node_id, _NO_NEIGHBORS)

    def predecessors(self, node_id: NodeID) -> Sequence[NodeID]:
        """Return predecessor ids in edge declaration order (may repeat)."""
        return self._pred.get(node_id, _NO_NEIGHBORS)

    def reachable_from_entry(self) -> Set[NodeID]:
        """Return the ids of all stations reachable from the entry."""
        seen = {self._entry}
        stack = [self._entry]
        while stack:
            node_id = stack.pop()
            for neighbor_id in self.successors(node_id):
                if neighbor_id not in seen:
                    seen.add(neighbor_id)
                    stack.append(neighbor_id)
        return seen

    def __repr__(self) -> str:
        return (
            f"FlowGraph(nodes={self.number_of_nodes()}, "
            f"edges={self.number_of_edges()}, entry={self._entry})"
        )
