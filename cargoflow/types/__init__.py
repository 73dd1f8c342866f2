"""Shared type aliases and enums."""

from cargoflow.types.base import FlowValue, NodeID, WorklistOrder

__all__ = ["FlowValue", "NodeID", "WorklistOrder"]
