"""Node pool holding both the adjacency graph and the link graph of a maze.

A pool consists of two graphs over the same nodes. The adjacency graph says
which nodes *might* be connected; it is the geometry of the layout and is
fixed once the grid constructor is done with it. The link graph is a subgraph
of the adjacency graph recording the passages that were actually carved.
Generation algorithms poll the neighbourhood of a node and decide which
adjacencies to turn into links.

Nodes are addressed by ``NodeId`` handles, plain integers issued in order by
the pool that owns them.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING,
    Callable,
    Generic,
    Iterable,
    Iterator,
    List,
    NewType,
    Optional,
    Set,
    Tuple,
    TypeVar,
)

from mazeweave.errors import NonAdjacentLinkError, UnknownNodeError

if TYPE_CHECKING:
    from mazeweave.core.distances import Distances

NodeId = NewType("NodeId", int)
PayloadT = TypeVar("PayloadT")
MappedT = TypeVar("MappedT")


@dataclass
class Node(Generic[PayloadT]):
    id: NodeId
    payload: PayloadT
    adjacencies: Set[NodeId] = field(default_factory=set)
    links: Set[NodeId] = field(default_factory=set)


class Pool(Generic[PayloadT]):
    """Owns every node of a maze layout and both of its relations."""

    def __init__(self) -> None:
        self._nodes: List[Node[PayloadT]] = []

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node[PayloadT]]:
        return iter(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return isinstance(node_id, int) and 0 <= node_id < len(self._nodes)

    def __getitem__(self, node_id: NodeId) -> Node[PayloadT]:
        if node_id not in self:
            raise UnknownNodeError(node_id)
        return self._nodes[node_id]

    def __str__(self) -> str:
        lines = []
        for node in self._nodes:
            parts = []
            for neighbor in sorted(node.adjacencies):
                parts.append(f"[{neighbor}]" if neighbor in node.links else f"{neighbor} ")
            lines.append(f"Node({node.id}) -> {''.join(parts)}")
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Construction

    def new_node(self, construct: Callable[[NodeId], PayloadT]) -> NodeId:
        """Allocate a node and return its id.

        ``construct`` receives the freshly assigned id so that payloads can
        refer to their own identity.
        """

        new_id = NodeId(len(self._nodes))
        self._nodes.append(Node(id=new_id, payload=construct(new_id)))
        return new_id

    def make_adjacent(self, here: NodeId, there: NodeId, bidirectional: bool = True) -> None:
        """Mark two nodes as adjacent. Only adjacent nodes can later be linked."""

        self[here].adjacencies.add(there)
        if bidirectional:
            self[there].adjacencies.add(here)

    def link_cells(self, here: NodeId, there: NodeId, bidirectional: bool = True) -> None:
        """Carve a passage between two adjacent nodes.

        Raises :class:`NonAdjacentLinkError` when the nodes were never made
        adjacent; that means the grid constructor is broken.
        """

        if there not in self[here].adjacencies:
            raise NonAdjacentLinkError(here, there)
        if bidirectional and here not in self[there].adjacencies:
            raise NonAdjacentLinkError(there, here)
        self[here].links.add(there)
        if bidirectional:
            self[there].links.add(here)

    # ------------------------------------------------------------------
    # Queries

    def node_ids(self) -> Iterator[NodeId]:
        return (NodeId(i) for i in range(len(self._nodes)))

    def payloads(self) -> Iterator[PayloadT]:
        return (node.payload for node in self._nodes)

    def payload_of(self, node_id: NodeId) -> PayloadT:
        return self[node_id].payload

    def random_node_id(self, rng: random.Random) -> NodeId:
        """Return a node chosen uniformly over the whole pool."""

        return NodeId(rng.randrange(len(self._nodes)))

    def arbitrary_node_id(self) -> NodeId:
        """Return some valid node. It is always the same one."""

        return self._nodes[0].id

    def is_adjacent(self, here: NodeId, there: NodeId) -> bool:
        return there in self[here].adjacencies

    def is_linked(self, here: NodeId, there: NodeId) -> bool:
        """Check whether ``here`` and ``there`` are joined by a passage."""

        return there in self[here].links

    def neighborhood_of(self, node_id: NodeId) -> Set[NodeId]:
        """Nodes adjacent to ``node_id``; not the same as its passages."""

        return set(self[node_id].adjacencies)

    def passages_of(self, node_id: NodeId) -> Set[NodeId]:
        """Nodes reachable through a carved passage from ``node_id``."""

        return set(self[node_id].links)

    def walls_of(self, node_id: NodeId) -> Set[NodeId]:
        node = self[node_id]
        return node.adjacencies - node.links

    def unvisited_neighborhood_of(self, visited: Iterable[NodeId], node_id: NodeId) -> Set[NodeId]:
        return self[node_id].adjacencies.difference(visited)

    def scan_frontier(self, visited: Set[NodeId]) -> Optional[Tuple[NodeId, NodeId]]:
        """Find a node outside ``visited`` that is adjacent to one inside it.

        Returns ``(unvisited, visited_neighbor)`` for the first match in id
        order, or ``None`` when the visited set has no frontier left.
        """

        for node in self._nodes:
            if node.id in visited:
                continue
            for wall in sorted(node.adjacencies - node.links):
                if wall in visited:
                    return node.id, wall
        return None

    def link_count(self) -> int:
        """Number of undirected passages, assuming symmetric links."""

        return sum(len(node.links) for node in self._nodes) // 2

    def dead_ends(self) -> List[NodeId]:
        return [node.id for node in self._nodes if len(node.links) == 1]

    def map_nodes(self, transform: Callable[[Node[PayloadT]], MappedT]) -> "Pool[MappedT]":
        """Build a pool with the same ids and relations but new payloads."""

        mapped: Pool[MappedT] = Pool()
        for node in self._nodes:
            mapped._nodes.append(
                Node(
                    id=node.id,
                    payload=transform(node),
                    adjacencies=set(node.adjacencies),
                    links=set(node.links),
                )
            )
        return mapped

    # ------------------------------------------------------------------
    # Whole-graph analyses

    def is_adjacently_connected(self, progress: Optional[Callable[[int, int], None]] = None) -> bool:
        from mazeweave.core.connectivity import is_adjacently_connected

        return is_adjacently_connected(self, progress=progress)

    def distances_from(self, start: NodeId) -> "Distances":
        from mazeweave.core.distances import compute_distances

        return compute_distances(self, start)

    def furthest_pair(self) -> Optional[Tuple[NodeId, NodeId]]:
        """Approximate the two most distant nodes of the link graph.

        Runs a BFS from an arbitrary node, takes the farthest node ``x``, runs
        a second BFS from ``x`` and returns ``(x, y)`` with ``y`` farthest from
        ``x``. The result is the true diameter only when the link graph is a
        tree, which holds after any of the single-pass generators. On graphs
        with cycles it is merely a heuristic. Returns ``None`` for an empty
        pool.
        """

        if not self._nodes:
            return None
        first, _ = self.distances_from(self.arbitrary_node_id()).farthest()
        second, _ = self.distances_from(first).farthest()
        return first, second


__all__ = ["NodeId", "Node", "Pool"]
