"""Cargo-flow analysis API.

Usage:
    from cargoflow import FlowGraph, Station, analyze

    graph = FlowGraph.build(
        [Station(1, 10, 20), Station(2, 30, 40)],
        [(1, 2)],
        entry=1,
    )
    result = analyze(graph)
    result[2]  # frozenset({20})
"""

from __future__ import annotations

from cargoflow.analysis.context import AnalysisResult, analyze
from cargoflow.analysis.extract import extract_flow_sets

__all__ = ["AnalysisResult", "analyze", "extract_flow_sets"]
