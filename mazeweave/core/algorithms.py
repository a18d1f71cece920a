"""Maze generation algorithms.

Every algorithm mutates the link graph of a pool in place and uses only the
``random.Random`` instance passed in, so a fixed seed reproduces a maze.
Neighbour candidates are sorted before sampling for the same reason.

``binary_tree`` and ``sidewinder`` need to know about two fixed reference
directions, which the pool does not model; grid classes supply them.
The remaining algorithms work on any connected pool.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Callable, Dict, List, Optional, Sequence, Set, Tuple, Union

from mazeweave.core.connectivity import require_connected
from mazeweave.core.pool import NodeId, Pool
from mazeweave.core.walker import LoopErasedWalker
from mazeweave.errors import EmptyNeighborhoodError

logger = logging.getLogger(__name__)

ReferenceLookup = Callable[[NodeId], Tuple[Optional[NodeId], Optional[NodeId]]]
Probability = Union[float, Callable[[NodeId], float]]


def _sample(candidates: Set[NodeId], rng: random.Random) -> NodeId:
    return rng.choice(sorted(candidates))


def binary_tree(
    pool: Pool[Any],
    references: ReferenceLookup,
    rng: random.Random,
    probability: Probability = 0.5,
) -> None:
    """Link each node to one of its two reference neighbours.

    ``references(node)`` returns the two reference neighbours (``None`` where
    the layout has none). When both exist the first is chosen with
    ``probability``, which is either a constant or a per-node function.
    """

    for node_id in pool.node_ids():
        candidates = [ref for ref in references(node_id) if ref is not None]
        if not candidates:
            continue
        if len(candidates) == 1:
            chosen = candidates[0]
        else:
            p = probability(node_id) if callable(probability) else probability
            chosen = candidates[0] if rng.random() < p else candidates[1]
        pool.link_cells(node_id, chosen, True)


def _run_length(maximum: int, rng: random.Random) -> int:
    if maximum <= 0:
        raise ValueError("maximum run length must be positive")
    taken = 1
    while rng.getrandbits(1) and taken < maximum:
        taken += 1
    return taken


def sidewinder(pool: Pool[Any], lines: Sequence[Sequence[NodeId]], rng: random.Random) -> None:
    """Sidewinder over a rectangular arrangement of nodes.

    ``lines[r][c]`` must be adjacent to ``lines[r][c + 1]`` and to
    ``lines[r - 1][c]``. Each line after the first is cut into runs; every run
    is linked horizontally and exactly one of its cells is linked to the line
    before. The first line becomes one long corridor.
    """

    if not lines:
        return
    width = len(lines[0])
    if any(len(line) != width for line in lines):
        raise ValueError("sidewinder requires lines of equal length")
    for row in range(1, len(lines)):
        line = lines[row]
        previous = lines[row - 1]
        run_start = 0
        while run_start < width - 1:
            taken = _run_length(width - run_start, rng)
            for offset in range(taken - 1):
                pool.link_cells(line[run_start + offset], line[run_start + offset + 1], True)
            door = run_start + rng.randrange(taken)
            pool.link_cells(line[door], previous[door], True)
            run_start += taken
        if run_start == width - 1:
            pool.link_cells(line[width - 1], previous[width - 1], True)
    first = lines[0]
    for col in range(width - 1):
        pool.link_cells(first[col], first[col + 1], True)


def aldous_broder(pool: Pool[Any], rng: random.Random) -> None:
    """Unbiased random walk linking every node the first time it is entered."""

    if not pool:
        return
    cell = pool.random_node_id(rng)
    unvisited = len(pool) - 1
    while unvisited > 0:
        neighbors = sorted(pool.neighborhood_of(cell))
        if not neighbors:
            raise EmptyNeighborhoodError(cell)
        neighbor = rng.choice(neighbors)
        if not pool[neighbor].links:
            pool.link_cells(cell, neighbor, True)
            unvisited -= 1
        cell = neighbor


def hunt_and_kill(pool: Pool[Any], rng: random.Random) -> None:
    """Random walk through unvisited cells, hunting for a new start when stuck."""

    if not pool:
        return
    visited: Set[NodeId] = {pool.arbitrary_node_id()}
    while True:
        found = pool.scan_frontier(visited)
        if found is None:
            break
        current, root = found
        pool.link_cells(current, root, True)
        visited.add(current)
        candidates = pool.unvisited_neighborhood_of(visited, current)
        while candidates:
            next_cell = _sample(candidates, rng)
            pool.link_cells(current, next_cell, True)
            current = next_cell
            visited.add(current)
            candidates = pool.unvisited_neighborhood_of(visited, current)


def recursive_backtracker(pool: Pool[Any], rng: random.Random, start: Optional[NodeId] = None) -> None:
    """Depth-first carving with an explicit stack."""

    if not pool:
        return
    origin = start if start is not None else pool.arbitrary_node_id()
    visited: Set[NodeId] = {origin}
    stack: List[NodeId] = [origin]
    while stack:
        top = stack[-1]
        viable = pool.unvisited_neighborhood_of(visited, top)
        if not viable:
            stack.pop()
            continue
        next_cell = _sample(viable, rng)
        pool.link_cells(top, next_cell, True)
        visited.add(next_cell)
        stack.append(next_cell)


def wilson(pool: Pool[Any], rng: random.Random) -> None:
    """Wilson's algorithm: uniform spanning trees from loop-erased walks.

    Walk starts are taken in descending id order; the uniformity guarantee
    does not depend on how starts are chosen.
    """

    starts = list(pool.node_ids())
    if not starts:
        return
    visited: Set[NodeId] = {starts.pop()}
    while starts:
        start = starts.pop()
        if start in visited:
            continue
        walker = LoopErasedWalker(start)
        walker.walk_until_in(pool, visited, rng)
        walker.carve(pool)
        visited.update(walker.total_path())


PoolAlgorithm = Callable[[Pool[Any], random.Random], None]

ALGORITHMS: Dict[str, PoolAlgorithm] = {
    "aldous_broder": aldous_broder,
    "hunt_and_kill": hunt_and_kill,
    "recursive_backtracker": recursive_backtracker,
    "wilson": wilson,
}

# Algorithms that need grid-supplied reference directions.
DIRECTIONAL_ALGORITHMS = ("binary_tree", "sidewinder")

ALGORITHM_NAMES = tuple(sorted((*ALGORITHMS, *DIRECTIONAL_ALGORITHMS)))


def carve_maze(pool: Pool[Any], algorithm: str, rng: random.Random) -> None:
    """Run one of the pool-level algorithms after checking connectivity."""

    try:
        carve = ALGORITHMS[algorithm]
    except KeyError as exc:
        if algorithm in DIRECTIONAL_ALGORITHMS:
            raise ValueError(f"Algorithm '{algorithm}' needs a grid with reference directions") from exc
        raise ValueError(f"Unknown algorithm '{algorithm}'. Choose from: {', '.join(ALGORITHM_NAMES)}") from exc
    require_connected(pool)
    logger.debug(f"Carving {len(pool)} cells with {algorithm}")
    carve(pool, rng)


__all__ = [
    "binary_tree",
    "sidewinder",
    "aldous_broder",
    "hunt_and_kill",
    "recursive_backtracker",
    "wilson",
    "ALGORITHMS",
    "ALGORITHM_NAMES",
    "DIRECTIONAL_ALGORITHMS",
    "carve_maze",
]
