import random
import struct
import tempfile
import unittest
from pathlib import Path

from mazeweave.masks import DiskMask
from mazeweave.maze.maze_masked.grid import Direction, MaskedGrid
from mazeweave.maze.maze_masked.mazefile import (
    ConnectedOutOfBounds,
    ConnectedOutOfMask,
    DisconnectedMaskError,
    MazeFileError,
    NotEnoughBytes,
    TooManyBytes,
    UnrequitedConnection,
    decode_maze,
    encode_maze,
    read_maze,
    write_maze,
)


def raw_maze(width: int, height: int, cells: bytes, start=(0, 0), end=(0, 0)) -> bytes:
    return struct.pack(">6I", width, height, start[0], start[1], end[0], end[1]) + cells


class EncodeTests(unittest.TestCase):
    def test_layout(self) -> None:
        grid = MaskedGrid(2, 2)
        grid.link_cells_at((0, 0), (0, 1))
        grid.link_cells_at((0, 1), (1, 1))
        grid.link_cells_at((1, 0), (1, 1))
        data = encode_maze(grid, (0, 0), (1, 0))
        self.assertEqual(data[:24], struct.pack(">6I", 2, 2, 0, 0, 1, 0))
        self.assertEqual(list(data[24:]), [0b0100, 0b0011, 0b0100, 0b1010])

    def test_cells_outside_mask_encode_as_zero(self) -> None:
        grid = MaskedGrid(10, 10, DiskMask(10, 10))
        grid.carve("wilson", random.Random(1))
        data = encode_maze(grid, (5, 5), (5, 6))
        self.assertEqual(len(data), 24 + 100)
        self.assertEqual(data[24], 0)


class DecodeTests(unittest.TestCase):
    def test_file_round_trip_preserves_coordinates(self) -> None:
        grid = MaskedGrid(12, 12, DiskMask(12, 12))
        grid.carve("recursive_backtracker", random.Random(8))
        with tempfile.TemporaryDirectory() as tmp:
            path = write_maze(Path(tmp) / "nested" / "disk.maze", grid, (6, 6), (1, 6))
            decoded = read_maze(path)
        self.assertEqual(decoded.grid, grid)
        self.assertEqual(set(decoded.grid.cell_grid), set(grid.cell_grid))
        self.assertEqual(decoded.start, (6, 6))
        self.assertEqual(decoded.end, (1, 6))

    def test_short_header(self) -> None:
        with self.assertRaises(NotEnoughBytes):
            decode_maze(b"\x00\x00\x00\x02")

    def test_short_body(self) -> None:
        with self.assertRaises(NotEnoughBytes) as ctx:
            decode_maze(raw_maze(2, 2, bytes([4, 2, 0])))
        self.assertEqual(ctx.exception.expected, 28)
        self.assertEqual(ctx.exception.actual, 27)

    def test_trailing_bytes(self) -> None:
        with self.assertRaises(TooManyBytes):
            decode_maze(raw_maze(2, 1, bytes([4, 2, 0])))

    def test_zero_dimensions(self) -> None:
        with self.assertRaises(MazeFileError):
            decode_maze(raw_maze(0, 3, b""))

    def test_north_link_from_top_row(self) -> None:
        with self.assertRaises(ConnectedOutOfBounds) as ctx:
            decode_maze(raw_maze(2, 1, bytes([0b1100, 0b0010])))
        self.assertEqual(ctx.exception.cell, (0, 0))
        self.assertIs(ctx.exception.direction, Direction.NORTH)

    def test_east_link_off_the_edge(self) -> None:
        with self.assertRaises(ConnectedOutOfBounds) as ctx:
            decode_maze(raw_maze(2, 1, bytes([0b0100, 0b0110])))
        self.assertEqual(ctx.exception.cell, (0, 1))
        self.assertIs(ctx.exception.direction, Direction.EAST)

    def test_unrequited_connection(self) -> None:
        # (0,0) opens east and south, (0,1) only south: (0,1) never answers (0,0).
        cells = bytes([0b0101, 0b0001, 0b1000, 0b1000])
        with self.assertRaises(UnrequitedConnection) as ctx:
            decode_maze(raw_maze(2, 2, cells))
        self.assertEqual(ctx.exception.linked, (0, 0))
        self.assertEqual(ctx.exception.unlinked, (0, 1))
        self.assertIs(ctx.exception.direction, Direction.EAST)

    def test_link_into_missing_cell(self) -> None:
        cells = bytes([0b0101, 0b0010, 0b1000, 0b0000])
        decoded = decode_maze(raw_maze(2, 2, cells))
        self.assertEqual(len(decoded.grid), 3)
        cells = bytes([0b0001, 0b0000, 0b1100, 0b0000])
        with self.assertRaises(ConnectedOutOfMask) as ctx:
            decode_maze(raw_maze(2, 2, cells))
        self.assertEqual(ctx.exception.linked, (1, 0))
        self.assertEqual(ctx.exception.missing, (1, 1))

    def test_disconnected_cells(self) -> None:
        with self.assertRaises(DisconnectedMaskError):
            decode_maze(raw_maze(5, 1, bytes([0b0100, 0b0010, 0b0000, 0b0100, 0b0010])))

    def test_errors_are_value_errors(self) -> None:
        self.assertTrue(issubclass(MazeFileError, ValueError))


if __name__ == "__main__":
    unittest.main()
