"""Procedural maze generation over arbitrary cell layouts."""

__all__ = [
    "Pool",
    "NodeId",
    "Distance",
    "Distances",
    "LoopErasedWalker",
    "ALGORITHM_NAMES",
    "carve_maze",
    "GraphContractError",
    "DisconnectedLayoutError",
    "MaskedGrid",
    "PolarGrid",
    "MazeGenerator",
    "MaskedMazeGenerator",
    "PolarMazeGenerator",
]

__version__ = "0.1.0"

from .core import ALGORITHM_NAMES, Distance, Distances, LoopErasedWalker, NodeId, Pool, carve_maze
from .errors import DisconnectedLayoutError, GraphContractError
from .maze import MaskedGrid, MaskedMazeGenerator, MazeGenerator, PolarGrid, PolarMazeGenerator
