"""Immutable analysis model: flow-value universe and station graph."""

from cargoflow.model.graph import FlowGraph, Station
from cargoflow.model.universe import FlowUniverse

__all__ = ["FlowGraph", "FlowUniverse", "Station"]
