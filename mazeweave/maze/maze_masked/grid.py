"""Rectangular grid of square cells, optionally restricted by a mask."""

from __future__ import annotations

import enum
import random
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, Set, Tuple, Union

import numpy as np

from mazeweave.core.algorithms import ALGORITHM_NAMES, binary_tree, carve_maze, sidewinder
from mazeweave.core.connectivity import ProgressCallback, is_adjacently_connected
from mazeweave.core.pool import NodeId, Pool
from mazeweave.errors import DisconnectedLayoutError
from mazeweave.masks import FullMask, GridMask, Mask

Position = Tuple[int, int]


class Direction(enum.Enum):
    NORTH = (-1, 0, 0b1000)
    EAST = (0, 1, 0b0100)
    WEST = (0, -1, 0b0010)
    SOUTH = (1, 0, 0b0001)

    def __init__(self, drow: int, dcol: int, bit: int) -> None:
        self.drow = drow
        self.dcol = dcol
        self.bit = bit

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    def step(self, position: Position) -> Position:
        return position[0] + self.drow, position[1] + self.dcol

    def __str__(self) -> str:
        return self.name.lower()


_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}


@dataclass(frozen=True)
class BinaryTreeSettings:
    """Chance of carving north rather than east when both are possible.

    ``probability_north`` is a constant or a function of ``(row, col)``.
    """

    probability_north: Union[float, Callable[[int, int], float]] = 0.5

    def probability(self, row: int, col: int) -> float:
        if callable(self.probability_north):
            return self.probability_north(row, col)
        return self.probability_north


class MaskedGrid:
    """Square cells laid out in ``height`` rows and ``width`` columns.

    Only positions accepted by ``mask`` get a node. Node payloads are the
    ``(row, col)`` positions. Construction fails with
    :class:`DisconnectedLayoutError` when the mask falls apart into islands.
    """

    def __init__(
        self,
        width: int,
        height: int,
        mask: Optional[Mask] = None,
        *,
        progress: Optional[ProgressCallback] = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be positive")
        self.width = int(width)
        self.height = int(height)
        self.mask: Mask = mask if mask is not None else FullMask()
        self.pool: Pool[Position] = Pool()
        self.cell_grid: Dict[Position, NodeId] = {}

        for row in range(self.height):
            for col in range(self.width):
                if self.mask.contains(row, col):
                    self.cell_grid[(row, col)] = self.pool.new_node(lambda _id, pos=(row, col): pos)

        for (row, col), here in self.cell_grid.items():
            for direction in (Direction.EAST, Direction.SOUTH):
                there = self.cell_grid.get(direction.step((row, col)))
                if there is not None:
                    self.pool.make_adjacent(here, there, True)

        if not is_adjacently_connected(self.pool, progress=progress):
            raise DisconnectedLayoutError("Given mask comprises disjoint parts")

    @classmethod
    def unmasked(cls, width: int, height: int) -> "MaskedGrid":
        return cls(width, height)

    def __len__(self) -> int:
        return len(self.pool)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MaskedGrid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and set(self.cell_grid) == set(other.cell_grid)
            and self.linked_pairs() == other.linked_pairs()
        )

    __hash__ = None  # type: ignore[assignment]

    @property
    def is_full(self) -> bool:
        return len(self.cell_grid) == self.width * self.height

    # ------------------------------------------------------------------
    # Lookup

    def contains(self, row: int, col: int) -> bool:
        return (row, col) in self.cell_grid

    def get_id_at(self, row: int, col: int) -> Optional[NodeId]:
        return self.cell_grid.get((row, col))

    def position_of(self, node_id: NodeId) -> Position:
        return self.pool.payload_of(node_id)

    def neighbor_at(self, node_id: NodeId, direction: Direction) -> Optional[NodeId]:
        return self.cell_grid.get(direction.step(self.position_of(node_id)))

    def rows(self) -> List[List[NodeId]]:
        """Node ids line by line; only meaningful for a full rectangle."""

        if not self.is_full:
            raise ValueError("rows() requires an unmasked grid")
        return [[self.cell_grid[(row, col)] for col in range(self.width)] for row in range(self.height)]

    def is_linked_at(self, here: Position, there: Position) -> bool:
        a = self.cell_grid.get(here)
        b = self.cell_grid.get(there)
        return a is not None and b is not None and self.pool.is_linked(a, b)

    def link_cells_at(self, here: Position, there: Position) -> None:
        self.pool.link_cells(self.cell_grid[here], self.cell_grid[there], True)

    def linked_pairs(self) -> Set[Tuple[Position, Position]]:
        """Every passage as an ordered pair of positions."""

        pairs: Set[Tuple[Position, Position]] = set()
        for node in self.pool:
            for other in node.links:
                a, b = node.payload, self.position_of(other)
                pairs.add((a, b) if a <= b else (b, a))
        return pairs

    # ------------------------------------------------------------------
    # Generation

    def carve(
        self,
        algorithm: str,
        rng: random.Random,
        *,
        settings: Optional[BinaryTreeSettings] = None,
    ) -> None:
        if algorithm == "binary_tree":
            self.binary_tree(rng, settings or BinaryTreeSettings())
        elif algorithm == "sidewinder":
            self.sidewinder(rng)
        elif algorithm in ALGORITHM_NAMES:
            carve_maze(self.pool, algorithm, rng)
        else:
            raise ValueError(f"Unknown algorithm '{algorithm}'. Choose from: {', '.join(ALGORITHM_NAMES)}")

    def binary_tree(self, rng: random.Random, settings: Optional[BinaryTreeSettings] = None) -> None:
        if not self.is_full:
            raise ValueError("binary_tree requires an unmasked grid")
        settings = settings or BinaryTreeSettings()

        def references(node_id: NodeId) -> Tuple[Optional[NodeId], Optional[NodeId]]:
            return self.neighbor_at(node_id, Direction.NORTH), self.neighbor_at(node_id, Direction.EAST)

        binary_tree(
            self.pool,
            references,
            rng,
            probability=lambda node_id: settings.probability(*self.position_of(node_id)),
        )

    def sidewinder(self, rng: random.Random) -> None:
        sidewinder(self.pool, self.rows(), rng)

    # ------------------------------------------------------------------
    # Walls and encoding

    def _present(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width and (row, col) in self.cell_grid

    def is_h_wall(self, row: int, col: int) -> bool:
        """Whether a wall runs along the top edge of ``(row, col)``.

        ``row`` ranges over ``0..height`` so the bottom border is included.
        """

        if col < 0 or col >= self.width:
            return False
        above = self._present(row - 1, col)
        center = self._present(row, col)
        if above and center:
            return not self.is_linked_at((row, col), (row - 1, col))
        return above or center

    def is_v_wall(self, row: int, col: int) -> bool:
        """Whether a wall runs along the left edge of ``(row, col)``."""

        if row < 0 or row >= self.height:
            return False
        left = self._present(row, col - 1)
        center = self._present(row, col)
        if left and center:
            return not self.is_linked_at((row, col), (row, col - 1))
        return left or center

    def open_directions(self, row: int, col: int) -> List[Direction]:
        return [
            direction
            for direction in Direction
            if self.is_linked_at((row, col), direction.step((row, col)))
        ]

    def cell_to_byte(self, row: int, col: int) -> int:
        """Bitmask of linked directions (N=8, E=4, W=2, S=1); 0 outside the mask."""

        value = 0
        for direction in self.open_directions(row, col):
            value |= direction.bit
        return value

    def iter_positions(self) -> Iterator[Position]:
        for row in range(self.height):
            for col in range(self.width):
                yield row, col

    def to_text(self) -> str:
        """ASCII drawing of the maze; cells outside the mask are left blank."""

        lines = []
        top = "+"
        for col in range(self.width):
            top += ("---" if self.is_h_wall(0, col) else "   ") + "+"
        lines.append(top)
        for row in range(self.height):
            body = "|" if self.is_v_wall(row, 0) else " "
            bottom = "+"
            for col in range(self.width):
                body += "   " + ("|" if self.is_v_wall(row, col + 1) else " ")
                bottom += ("---" if self.is_h_wall(row + 1, col) else "   ") + "+"
            lines.append(body)
            lines.append(bottom)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.to_text()

    def render_to_mask(
        self,
        rng: random.Random,
        *,
        cell_size: int,
        wall_half_width: int = 1,
        shortcut_probability: float = 0.0,
        shortcut_thickness: int = 1,
    ) -> GridMask:
        """Rasterise the carved maze into a pixel mask for a finer maze.

        Every cell becomes a ``cell_size`` square inside a margin of
        ``wall_half_width`` pixels. Passages fill the margin towards the linked
        neighbour. A wall between two present cells is bridged by a strip
        ``shortcut_thickness`` wide with probability ``shortcut_probability``.
        """

        if cell_size <= 0 or wall_half_width < 0 or shortcut_thickness <= 0:
            raise ValueError("cell_size and shortcut_thickness must be positive, wall_half_width non-negative")
        spacing = cell_size + 2 * wall_half_width
        cells = np.zeros((self.height * spacing, self.width * spacing), dtype=bool)
        for row, col in sorted(self.cell_grid):
            grid_top, grid_left = row * spacing, col * spacing
            cell_top, cell_left = grid_top + wall_half_width, grid_left + wall_half_width
            cell_bottom, cell_right = cell_top + cell_size, cell_left + cell_size
            shortcut_top = grid_top + spacing // 2 - shortcut_thickness // 2
            shortcut_left = grid_left + spacing // 2 - shortcut_thickness // 2

            cells[cell_top:cell_bottom, cell_left:cell_right] = True
            if not self.is_h_wall(row, col):
                cells[grid_top:cell_top, cell_left:cell_right] = True
            if not self.is_h_wall(row + 1, col):
                cells[cell_bottom:grid_top + spacing, cell_left:cell_right] = True
            elif self._present(row + 1, col) and rng.random() < shortcut_probability:
                cells[cell_bottom:cell_top + spacing, shortcut_left:shortcut_left + shortcut_thickness] = True
            if not self.is_v_wall(row, col):
                cells[cell_top:cell_bottom, grid_left:cell_left] = True
            if not self.is_v_wall(row, col + 1):
                cells[cell_top:cell_bottom, cell_right:grid_left + spacing] = True
            elif self._present(row, col + 1) and rng.random() < shortcut_probability:
                cells[shortcut_top:shortcut_top + shortcut_thickness, cell_right:cell_left + spacing] = True
        return GridMask(cells)


__all__ = ["Direction", "BinaryTreeSettings", "MaskedGrid", "Position"]
