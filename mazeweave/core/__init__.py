"""Graph core: node pool, connectivity, distances and generation algorithms."""

from .algorithms import (
    ALGORITHM_NAMES,
    ALGORITHMS,
    DIRECTIONAL_ALGORITHMS,
    aldous_broder,
    binary_tree,
    carve_maze,
    hunt_and_kill,
    recursive_backtracker,
    sidewinder,
    wilson,
)
from .connectivity import DisjointSet, is_adjacently_connected, require_connected
from .distances import INFINITE, Distance, Distances, compute_distances
from .pool import Node, NodeId, Pool
from .walker import LoopErasedWalker

__all__ = [
    "ALGORITHM_NAMES",
    "ALGORITHMS",
    "DIRECTIONAL_ALGORITHMS",
    "aldous_broder",
    "binary_tree",
    "carve_maze",
    "hunt_and_kill",
    "recursive_backtracker",
    "sidewinder",
    "wilson",
    "DisjointSet",
    "is_adjacently_connected",
    "require_connected",
    "INFINITE",
    "Distance",
    "Distances",
    "compute_distances",
    "Node",
    "NodeId",
    "Pool",
    "LoopErasedWalker",
]
