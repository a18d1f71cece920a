"""Loop-erased random walks, the building block of Wilson's algorithm."""

from __future__ import annotations

import random
from typing import Any, Collection, List

from mazeweave.core.pool import NodeId, Pool
from mazeweave.errors import EmptyNeighborhoodError


class LoopErasedWalker:
    """A simple path growing out of ``start_node``.

    ``path`` holds the nodes after the start. Loops are erased as soon as the
    walk closes them, so the path never repeats a node.
    """

    def __init__(self, start_node: NodeId) -> None:
        self.start_node = start_node
        self.path: List[NodeId] = []

    def __repr__(self) -> str:
        return f"LoopErasedWalker(start_node={self.start_node}, path={self.path})"

    @property
    def final_node(self) -> NodeId:
        return self.path[-1] if self.path else self.start_node

    def total_path(self) -> List[NodeId]:
        return [self.start_node, *self.path]

    def step(self, next_node: NodeId) -> None:
        """Move to ``next_node``, erasing any loop the move closes.

        Returning to the start empties the path; landing on the node at index
        ``i`` truncates the path to length ``i``.
        """

        if next_node == self.start_node:
            self.path.clear()
            return
        try:
            index = self.path.index(next_node)
        except ValueError:
            self.path.append(next_node)
        else:
            del self.path[index:]

    def random_step(self, pool: Pool[Any], rng: random.Random) -> None:
        here = self.final_node
        neighbors = sorted(pool.neighborhood_of(here))
        if not neighbors:
            raise EmptyNeighborhoodError(here)
        self.step(rng.choice(neighbors))

    def walk_until_in(self, pool: Pool[Any], targets: Collection[NodeId], rng: random.Random) -> None:
        while self.final_node not in targets:
            self.random_step(pool, rng)

    def carve(self, pool: Pool[Any]) -> None:
        """Link every consecutive pair of the path, start included."""

        route = self.total_path()
        for here, there in zip(route, route[1:]):
            pool.link_cells(here, there, True)


__all__ = ["LoopErasedWalker"]
