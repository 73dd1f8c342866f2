"""Global pytest configuration and shared sample graphs.

Each fixture returns a freshly built :class:`FlowGraph`. The small scenario
graphs come with their expected per-station arrival cargo sets in the
docstrings.
"""

from __future__ import annotations

import pytest

from cargoflow.logging import install_handler, reset_logging
from cargoflow.model.graph import FlowGraph, Station


@pytest.fixture(autouse=True)
def _isolated_logging():
    """Give every test a freshly configured cargoflow root logger."""
    reset_logging()
    install_handler()
    yield
    reset_logging()


@pytest.fixture
def chain_graph() -> FlowGraph:
    #  1 ──► 2 ──► 3
    #
    # unload/load: 1: 10/20, 2: 30/40, 3: 20/50
    # expected: 1: {}, 2: {20}, 3: {20, 40}
    return FlowGraph.build(
        [Station(1, 10, 20), Station(2, 30, 40), Station(3, 20, 50)],
        [(1, 2), (2, 3)],
        entry=1,
    )


@pytest.fixture
def two_cycle_graph() -> FlowGraph:
    #  1 ◄──► 2
    #
    # unload/load: 1: 1/2, 2: 3/4
    # expected: 1: {2, 4}, 2: {2, 4}
    return FlowGraph.build(
        [Station(1, 1, 2), Station(2, 3, 4)],
        [(1, 2), (2, 1)],
        entry=1,
    )


@pytest.fixture
def diamond_graph() -> FlowGraph:
    #       ┌──► 2 ──┐
    #   1 ──┤        ├──► 4
    #       └──► 3 ──┘
    #
    # unload/load: 1: 0/10, 2: 10/20, 3: 99/30, 4: 0/40
    # expected: 4: {10, 20, 30}
    return FlowGraph.build(
        [
            Station(1, 0, 10),
            Station(2, 10, 20),
            Station(3, 99, 30),
            Station(4, 0, 40),
        ],
        [(1, 2), (1, 3), (2, 4), (3, 4)],
        entry=1,
    )


@pytest.fixture
def disconnected_graph() -> FlowGraph:
    #  1 ──► 2 ──► 3        4 ──► 5
    #
    # entry 1; expected: 4: {}, 5: {}
    return FlowGraph.build(
        [
            Station(1, 1, 11),
            Station(2, 2, 12),
            Station(3, 3, 13),
            Station(4, 4, 14),
            Station(5, 5, 15),
        ],
        [(1, 2), (2, 3), (4, 5)],
        entry=1,
    )


@pytest.fixture
def loop_graph() -> FlowGraph:
    # Loop with a self-loop, a back edge into the entry and a parallel edge.
    #
    #   ┌───────────────┐
    #   ▼               │
    #   1 ──► 2 ══► 3 ──┤
    #         ▲ ↺       ▼
    #         └──────── 4 ──► 5
    #
    # 2 has a self-loop; 2 ══► 3 is a doubled edge.
    return FlowGraph.build(
        [
            Station(1, 5, 1),
            Station(2, 1, 2),
            Station(3, 2, 3),
            Station(4, 3, 4),
            Station(5, 4, 5),
        ],
        [(1, 2), (2, 2), (2, 3), (2, 3), (3, 1), (3, 4), (4, 2), (4, 5)],
        entry=1,
    )
