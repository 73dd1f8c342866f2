"""Graph ordering, transfer and fixpoint algorithms."""

from cargoflow.algorithms.fixpoint import (
    FixpointState,
    FixpointStats,
    Observer,
    solve,
)
from cargoflow.algorithms.ordering import reverse_postorder, rpo_rank
from cargoflow.algorithms.transfer import StationTransfer, transfer

__all__ = [
    "FixpointState",
    "FixpointStats",
    "Observer",
    "StationTransfer",
    "reverse_postorder",
    "rpo_rank",
    "solve",
    "transfer",
]
