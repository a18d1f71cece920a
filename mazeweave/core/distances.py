"""Unweighted shortest-path distances over the link graph of a pool."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterator, List, Optional, Tuple

from mazeweave.core.pool import NodeId

if TYPE_CHECKING:
    from mazeweave.core.pool import Pool


@functools.total_ordering
@dataclass(frozen=True)
class Distance:
    """Either a finite number of steps or infinity (unreachable).

    Infinity sorts above every finite distance.
    """

    steps: Optional[int] = None

    def __post_init__(self) -> None:
        if self.steps is not None and self.steps < 0:
            raise ValueError("finite distances must be non-negative")

    @classmethod
    def finite(cls, steps: int) -> "Distance":
        return cls(steps)

    @classmethod
    def infinite(cls) -> "Distance":
        return cls(None)

    @property
    def is_finite(self) -> bool:
        return self.steps is not None

    def as_finite(self) -> Optional[int]:
        return self.steps

    def __add__(self, other: int) -> "Distance":
        if not isinstance(other, int):
            return NotImplemented
        if self.steps is None:
            return self
        return Distance(self.steps + other)

    __radd__ = __add__

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Distance):
            return NotImplemented
        if self.steps is None:
            return False
        if other.steps is None:
            return True
        return self.steps < other.steps

    def __str__(self) -> str:
        return "∞" if self.steps is None else str(self.steps)


INFINITE = Distance.infinite()


class Distances:
    """Read-only snapshot of distances from ``start_node``.

    Shares node ids with the pool it was computed from but never writes back
    into it.
    """

    def __init__(self, pool: "Pool[Distance]", start_node: NodeId) -> None:
        self.pool = pool
        self.start_node = start_node
        self._max_finite: Optional[int] = None

    def __getitem__(self, node_id: NodeId) -> Distance:
        return self.pool[node_id].payload

    def __len__(self) -> int:
        return len(self.pool)

    def items(self) -> Iterator[Tuple[NodeId, Distance]]:
        return ((node.id, node.payload) for node in self.pool)

    def max_finite(self) -> int:
        """Largest finite distance; unreachable nodes count as 0."""

        if self._max_finite is None:
            self._max_finite = max((distance.steps or 0 for _, distance in self.items()), default=0)
        return self._max_finite

    def farthest(self) -> Tuple[NodeId, Distance]:
        """The node with the largest finite distance (the start node on ties at 0)."""

        best_id = self.start_node
        best_steps = 0
        for node_id, distance in self.items():
            steps = distance.steps or 0
            if steps > best_steps:
                best_id, best_steps = node_id, steps
        return best_id, self[best_id]

    def normalized(self, node_id: NodeId) -> Optional[float]:
        """Distance scaled into ``[0, 1]`` by the maximum finite distance.

        ``None`` for unreachable nodes and when every reachable node sits at
        distance 0; callers paint those with a neutral colour.
        """

        steps = self[node_id].steps
        maximum = self.max_finite()
        if steps is None or maximum == 0:
            return None
        return steps / maximum

    def path_to(self, goal: NodeId) -> List[NodeId]:
        """Shortest passage route from the start node to ``goal``, both included."""

        current = self[goal].steps
        if current is None:
            raise ValueError(f"Node({goal}) is unreachable from Node({self.start_node})")
        path = [goal]
        node_id = goal
        while node_id != self.start_node:
            for neighbor in sorted(self.pool[node_id].links):
                if self[neighbor].steps == current - 1:
                    node_id = neighbor
                    current -= 1
                    break
            else:
                raise ValueError(f"Links around Node({node_id}) are not symmetric")
            path.append(node_id)
        path.reverse()
        return path


def compute_distances(pool: "Pool[Any]", start: NodeId) -> Distances:
    """Breadth-first distances from ``start`` following links only.

    Each node receives its distance the first time a frontier touches it.
    """

    pad: "Pool[Optional[Distance]]" = pool.map_nodes(
        lambda node: Distance.finite(0) if node.id == start else None
    )
    frontier: List[NodeId] = [start]
    while frontier:
        next_frontier: List[NodeId] = []
        for cell in frontier:
            reached = pad[cell].payload
            for neighbor in sorted(pad[cell].links):
                target = pad[neighbor]
                if target.payload is None:
                    target.payload = reached + 1
                    next_frontier.append(neighbor)
        frontier = next_frontier
    resolved = pad.map_nodes(lambda node: node.payload if node.payload is not None else INFINITE)
    return Distances(resolved, start)


__all__ = ["Distance", "Distances", "INFINITE", "compute_distances"]
