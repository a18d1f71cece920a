"""Exception types shared across the maze toolkit.

Two families live here. ``GraphContractError`` and its subclasses signal a
bug in whoever built the graph (linking cells that were never adjacent,
walking out of an isolated node, carving a layout that falls apart into
islands). They are not meant to be caught and recovered from.

``MazeFileError`` lives in :mod:`mazeweave.maze.maze_masked.mazefile` because
only the file codec produces recoverable data errors.
"""

from __future__ import annotations

from typing import Tuple


class GraphContractError(RuntimeError):
    """A collaborator misused the node pool."""

    def __init__(self, message: str, *nodes: int) -> None:
        super().__init__(message)
        self.nodes: Tuple[int, ...] = tuple(nodes)


class UnknownNodeError(GraphContractError):
    def __init__(self, node: int) -> None:
        super().__init__(f"Node({node}) does not belong to this pool", node)


class NonAdjacentLinkError(GraphContractError):
    def __init__(self, here: int, there: int) -> None:
        super().__init__(f"Attempted to link non-adjacent cells Node({here}) and Node({there})", here, there)


class EmptyNeighborhoodError(GraphContractError):
    def __init__(self, node: int) -> None:
        super().__init__(f"Attempted to walk out of Node({node}) with empty neighborhood", node)


class DisconnectedLayoutError(GraphContractError):
    """The adjacency graph has more than one connected component."""

    def __init__(self, message: str = "Given layout comprises disjoint parts") -> None:
        super().__init__(message)


__all__ = [
    "GraphContractError",
    "UnknownNodeError",
    "NonAdjacentLinkError",
    "EmptyNeighborhoodError",
    "DisconnectedLayoutError",
]
