"""Union-find check that a layout forms a single connected region."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, List, Optional

from mazeweave.errors import DisconnectedLayoutError

if TYPE_CHECKING:
    from mazeweave.core.pool import Pool

ProgressCallback = Callable[[int, int], None]


class DisjointSet:
    """Disjoint-set forest over ``0..size-1`` with path halving and union by size."""

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError("size must be non-negative")
        self._parent: List[int] = list(range(size))
        self._size: List[int] = [1] * size
        self._sets = size

    def __len__(self) -> int:
        return len(self._parent)

    @property
    def set_count(self) -> int:
        return self._sets

    def find(self, item: int) -> int:
        parent = self._parent
        while parent[item] != item:
            parent[item] = parent[parent[item]]
            item = parent[item]
        return item

    def union(self, a: int, b: int) -> bool:
        """Merge the sets holding ``a`` and ``b``. Returns False if already merged."""

        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return False
        if self._size[root_a] < self._size[root_b]:
            root_a, root_b = root_b, root_a
        self._parent[root_b] = root_a
        self._size[root_a] += self._size[root_b]
        self._sets -= 1
        return True

    def same_set(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)


def is_adjacently_connected(pool: "Pool[Any]", progress: Optional[ProgressCallback] = None) -> bool:
    """Return True when the adjacency graph of ``pool`` has no disjoint islands.

    ``progress`` is called as ``progress(done, total)`` after each node is
    processed.
    """

    total = len(pool)
    if total <= 1:
        return True
    forest = DisjointSet(total)
    for done, node in enumerate(pool, start=1):
        for neighbor in node.adjacencies:
            forest.union(node.id, neighbor)
        if progress is not None:
            progress(done, total)
    return forest.set_count == 1


def require_connected(pool: "Pool[Any]", progress: Optional[ProgressCallback] = None) -> None:
    if not is_adjacently_connected(pool, progress=progress):
        raise DisconnectedLayoutError(f"Layout of {len(pool)} cells comprises disjoint parts")


__all__ = ["DisjointSet", "is_adjacently_connected", "require_connected", "ProgressCallback"]
