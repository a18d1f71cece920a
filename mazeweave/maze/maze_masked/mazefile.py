"""Binary ``.maze`` file format for masked square grids.

Layout: six big-endian unsigned 32-bit integers ``width, height, start_row,
start_col, end_row, end_col``, then ``width * height`` bytes in row-major
order. Each byte ORs the directions the cell is linked towards
(north=8, east=4, west=2, south=1). A zero byte marks a cell outside the mask,
so a lone cell with no passages cannot be told apart from a missing one.
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import numpy as np

from mazeweave.errors import DisconnectedLayoutError
from mazeweave.masks import GridMask
from mazeweave.maze.maze_masked.grid import Direction, MaskedGrid, Position

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_HEADER = struct.Struct(">6I")


class MazeFileError(ValueError):
    """The bytes do not describe a valid maze."""


class NotEnoughBytes(MazeFileError):
    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Maze data is truncated: expected {expected} bytes, got {actual}")
        self.expected = expected
        self.actual = actual


class TooManyBytes(MazeFileError):
    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Maze data has trailing bytes: expected {expected} bytes, got {actual}")
        self.expected = expected
        self.actual = actual


class UnrequitedConnection(MazeFileError):
    """``linked`` opens towards ``unlinked`` but not the other way round."""

    def __init__(self, linked: Position, unlinked: Position, direction: Direction) -> None:
        super().__init__(
            f"Cell {linked} is connected {direction} to cell {unlinked}, which is not connected back"
        )
        self.linked = linked
        self.unlinked = unlinked
        self.direction = direction


class ConnectedOutOfBounds(MazeFileError):
    def __init__(self, cell: Position, direction: Direction) -> None:
        super().__init__(f"Cell {cell} is connected {direction} past the edge of the maze")
        self.cell = cell
        self.direction = direction


class ConnectedOutOfMask(MazeFileError):
    def __init__(self, linked: Position, missing: Position, direction: Direction) -> None:
        super().__init__(f"Cell {linked} is connected {direction} to cell {missing}, which is not in the maze")
        self.linked = linked
        self.missing = missing
        self.direction = direction


class DisconnectedMaskError(MazeFileError):
    def __init__(self) -> None:
        super().__init__("The cells of the maze comprise disjoint parts")


@dataclass
class DecodedMaze:
    grid: MaskedGrid
    start: Position
    end: Position


def encode_maze(grid: MaskedGrid, start: Position, end: Position) -> bytes:
    header = _HEADER.pack(grid.width, grid.height, start[0], start[1], end[0], end[1])
    body = bytes(grid.cell_to_byte(row, col) for row, col in grid.iter_positions())
    return header + body


def write_maze(path: PathLike, grid: MaskedGrid, start: Position, end: Position) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(encode_maze(grid, start, end))
    logger.info(f"Wrote {grid.width}x{grid.height} maze to {target}")
    return target


def validate_link_grid(cells: np.ndarray) -> None:
    """Check that every opening in ``cells`` is matched by its neighbour.

    Cells are visited in row-major order and directions in the order north,
    east, west, south; the first problem found is raised.
    """

    height, width = cells.shape
    for row in range(height):
        for col in range(width):
            value = int(cells[row, col])
            if value == 0:
                continue
            for direction in Direction:
                if not value & direction.bit:
                    continue
                other_row, other_col = direction.step((row, col))
                if not (0 <= other_row < height and 0 <= other_col < width):
                    raise ConnectedOutOfBounds((row, col), direction)
                other = int(cells[other_row, other_col])
                if other == 0:
                    raise ConnectedOutOfMask((row, col), (other_row, other_col), direction)
                if not other & direction.opposite.bit:
                    raise UnrequitedConnection((row, col), (other_row, other_col), direction)


def decode_maze(data: bytes) -> DecodedMaze:
    if len(data) < _HEADER.size:
        raise NotEnoughBytes(_HEADER.size, len(data))
    width, height, start_row, start_col, end_row, end_col = _HEADER.unpack_from(data)
    if width == 0 or height == 0:
        raise MazeFileError(f"Maze dimensions must be positive, got {width}x{height}")
    expected = _HEADER.size + width * height
    if len(data) < expected:
        raise NotEnoughBytes(expected, len(data))
    if len(data) > expected:
        raise TooManyBytes(expected, len(data))

    cells = np.frombuffer(data, dtype=np.uint8, offset=_HEADER.size).reshape((height, width))
    validate_link_grid(cells)

    try:
        grid = MaskedGrid(width, height, GridMask(cells != 0))
    except DisconnectedLayoutError as exc:
        raise DisconnectedMaskError() from exc

    for row, col in grid.iter_positions():
        value = int(cells[row, col])
        for direction in (Direction.EAST, Direction.SOUTH):
            if value & direction.bit:
                grid.link_cells_at((row, col), direction.step((row, col)))

    return DecodedMaze(grid=grid, start=(start_row, start_col), end=(end_row, end_col))


def read_maze(path: PathLike) -> DecodedMaze:
    return decode_maze(Path(path).read_bytes())


__all__ = [
    "MazeFileError",
    "NotEnoughBytes",
    "TooManyBytes",
    "UnrequitedConnection",
    "ConnectedOutOfBounds",
    "ConnectedOutOfMask",
    "DisconnectedMaskError",
    "DecodedMaze",
    "encode_maze",
    "write_maze",
    "validate_link_grid",
    "decode_maze",
    "read_maze",
]
