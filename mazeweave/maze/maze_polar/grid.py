"""Circular grid of concentric rings around a single centre cell."""

from __future__ import annotations

import enum
import math
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from mazeweave.core.algorithms import ALGORITHMS, DIRECTIONAL_ALGORITHMS, carve_maze
from mazeweave.core.pool import NodeId, Pool


class RingStep(enum.Enum):
    UP_SPLIT_LEFT = "up_split_left"
    UP_SPLIT_RIGHT = "up_split_right"
    UP_SINGLE = "up_single"
    CW = "cw"
    CCW = "ccw"
    DOWN = "down"


@dataclass(frozen=True, order=True)
class RingPosition:
    ring: int
    column: int


class RingProfile:
    """How many cells each ring holds.

    Ring 0 is the centre cell and ring 1 holds ``branches`` cells. Moving
    outwards, the count doubles whenever a cell of the next ring would
    otherwise be more than twice as wide as it is tall.
    """

    def __init__(self, branches: int) -> None:
        if branches <= 1:
            raise ValueError("branches must be greater than 1")
        self.branches = int(branches)

    def ring_cell_count(self, ring: int) -> int:
        if ring == 0:
            return 1
        count = self.branches
        for r in range(1, ring):
            if 2.0 * math.pi * (r + 1) / count > 2.0:
                count *= 2
        return count

    def above(self, position: RingPosition) -> List[RingPosition]:
        """Cells of the next ring outwards that border ``position``."""

        above_count = self.ring_cell_count(position.ring + 1)
        if position.ring == 0:
            return [RingPosition(1, column) for column in range(above_count)]
        if above_count > self.ring_cell_count(position.ring):
            return [
                RingPosition(position.ring + 1, position.column * 2),
                RingPosition(position.ring + 1, position.column * 2 + 1),
            ]
        return [RingPosition(position.ring + 1, position.column)]

    def take_step(self, position: RingPosition, step: RingStep) -> Optional[RingPosition]:
        """Neighbouring position in direction ``step``; ``None`` from the centre
        or when the ring above does not split the way ``step`` asks."""

        ring, column = position.ring, position.column
        if ring == 0:
            return None
        width = self.ring_cell_count(ring)
        if step is RingStep.CW:
            return RingPosition(ring, (column + 1) % width)
        if step is RingStep.CCW:
            return RingPosition(ring, (column - 1) % width)
        if step is RingStep.DOWN:
            if ring == 1:
                return RingPosition(0, 0)
            if self.ring_cell_count(ring - 1) < width:
                return RingPosition(ring - 1, column // 2)
            return RingPosition(ring - 1, column)
        splits = self.ring_cell_count(ring + 1) > width
        if step is RingStep.UP_SINGLE:
            return None if splits else RingPosition(ring + 1, column)
        if not splits:
            return None
        if step is RingStep.UP_SPLIT_LEFT:
            return RingPosition(ring + 1, column * 2)
        return RingPosition(ring + 1, column * 2 + 1)

    def sector_angles(self, position: RingPosition) -> Tuple[float, float]:
        """Start and end angle of the cell in radians."""

        width = self.ring_cell_count(position.ring)
        return (
            position.column / width * 2.0 * math.pi,
            (position.column + 1) / width * 2.0 * math.pi,
        )

    def __repr__(self) -> str:
        return f"RingProfile({self.branches})"


class PolarGrid:
    """Rings of cells, each adjacent to its clockwise neighbour and to the
    cells bordering it in the next ring outwards."""

    def __init__(self, branches: int, ring_count: int) -> None:
        if ring_count <= 1:
            raise ValueError("ring_count must be greater than 1")
        self.profile = RingProfile(branches)
        self.pool: Pool[RingPosition] = Pool()
        self.rings: List[List[NodeId]] = []
        for ring in range(ring_count):
            self.rings.append(
                [
                    self.pool.new_node(lambda _id, pos=RingPosition(ring, column): pos)
                    for column in range(self.profile.ring_cell_count(ring))
                ]
            )

        for above in self.profile.above(RingPosition(0, 0)):
            self.pool.make_adjacent(self.rings[0][0], self[above], True)

        for ring in range(1, ring_count):
            for column in range(len(self.rings[ring])):
                here = RingPosition(ring, column)
                self.pool.make_adjacent(self[here], self[self.profile.take_step(here, RingStep.CW)], True)
                if ring < ring_count - 1:
                    for above in self.profile.above(here):
                        self.pool.make_adjacent(self[here], self[above], True)

    def __getitem__(self, position: RingPosition) -> NodeId:
        return self.rings[position.ring][position.column]

    def __len__(self) -> int:
        return len(self.pool)

    def __str__(self) -> str:
        return f"Branching factor: {self.profile.branches}\nRings: {self.rings}\nPool:\n{self.pool}"

    @property
    def ring_count(self) -> int:
        return len(self.rings)

    @property
    def branches(self) -> int:
        return self.profile.branches

    @property
    def center(self) -> NodeId:
        return self.rings[0][0]

    def position_of(self, node_id: NodeId) -> RingPosition:
        return self.pool.payload_of(node_id)

    def positions(self) -> List[RingPosition]:
        return [RingPosition(ring, column) for ring, cells in enumerate(self.rings) for column in range(len(cells))]

    def is_linked_step(self, position: RingPosition, step: RingStep) -> bool:
        other = self.profile.take_step(position, step)
        return other is not None and self.pool.is_linked(self[position], self[other])

    def is_floor(self, position: RingPosition) -> bool:
        """Whether a wall separates the cell from the ring below it."""

        if position.ring == 0:
            return False
        return not self.is_linked_step(position, RingStep.DOWN)

    def is_left_wall(self, position: RingPosition) -> bool:
        """Whether a wall separates the cell from its counter-clockwise neighbour."""

        if position.ring == 0:
            return False
        return not self.is_linked_step(position, RingStep.CCW)

    def carve(self, algorithm: str, rng: random.Random) -> None:
        if algorithm in DIRECTIONAL_ALGORITHMS:
            raise ValueError(
                f"Algorithm '{algorithm}' is not available on polar grids. Choose from: {', '.join(sorted(ALGORITHMS))}"
            )
        carve_maze(self.pool, algorithm, rng)


__all__ = ["RingStep", "RingPosition", "RingProfile", "PolarGrid"]
