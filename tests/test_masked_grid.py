import random
import tempfile
import unittest
from pathlib import Path

import numpy as np
from PIL import Image

from mazeweave.errors import DisconnectedLayoutError
from mazeweave.masks import DiskMask, FullMask, GridMask, build_mask
from mazeweave.maze.maze_masked.grid import Direction, MaskedGrid


class MaskedGridLayoutTests(unittest.TestCase):
    def test_unmasked_layout(self) -> None:
        grid = MaskedGrid.unmasked(4, 3)
        self.assertEqual(len(grid), 12)
        self.assertTrue(grid.is_full)
        node = grid.get_id_at(1, 1)
        neighbors = {grid.position_of(other) for other in grid.pool.neighborhood_of(node)}
        self.assertEqual(neighbors, {(0, 1), (2, 1), (1, 0), (1, 2)})
        corner = grid.get_id_at(0, 0)
        self.assertEqual(len(grid.pool.neighborhood_of(corner)), 2)

    def test_mask_drops_cells(self) -> None:
        cells = np.ones((3, 3), dtype=bool)
        cells[1, 1] = False
        grid = MaskedGrid(3, 3, GridMask(cells))
        self.assertEqual(len(grid), 8)
        self.assertIsNone(grid.get_id_at(1, 1))
        self.assertFalse(grid.is_full)
        with self.assertRaises(ValueError):
            grid.rows()

    def test_disjoint_mask_rejected(self) -> None:
        mask = GridMask.from_cells(3, 1, [(0, 0), (0, 2)])
        with self.assertRaises(DisconnectedLayoutError):
            MaskedGrid(3, 1, mask)

    def test_progress_callback(self) -> None:
        calls = []
        MaskedGrid(3, 2, progress=lambda done, total: calls.append(done))
        self.assertEqual(calls, [1, 2, 3, 4, 5, 6])

    def test_invalid_dimensions(self) -> None:
        with self.assertRaises(ValueError):
            MaskedGrid(0, 3)

    def test_rows(self) -> None:
        grid = MaskedGrid(3, 2)
        self.assertEqual(grid.rows(), [[0, 1, 2], [3, 4, 5]])


class WallTests(unittest.TestCase):
    def setUp(self) -> None:
        self.grid = MaskedGrid(2, 2)
        self.grid.link_cells_at((0, 0), (0, 1))
        self.grid.link_cells_at((0, 0), (1, 0))

    def test_cell_bytes(self) -> None:
        self.assertEqual(self.grid.cell_to_byte(0, 0), Direction.EAST.bit | Direction.SOUTH.bit)
        self.assertEqual(self.grid.cell_to_byte(0, 1), 0b0010)
        self.assertEqual(self.grid.cell_to_byte(1, 0), 0b1000)
        self.assertEqual(self.grid.cell_to_byte(1, 1), 0)

    def test_walls(self) -> None:
        self.assertTrue(self.grid.is_h_wall(0, 0))
        self.assertFalse(self.grid.is_h_wall(1, 0))
        self.assertTrue(self.grid.is_h_wall(1, 1))
        self.assertTrue(self.grid.is_h_wall(2, 1))
        self.assertFalse(self.grid.is_v_wall(0, 1))
        self.assertTrue(self.grid.is_v_wall(1, 1))
        self.assertTrue(self.grid.is_v_wall(1, 2))
        self.assertFalse(self.grid.is_h_wall(0, 5))

    def test_no_wall_between_absent_cells(self) -> None:
        grid = MaskedGrid(3, 1, GridMask.from_cells(3, 1, [(0, 0), (0, 1)]))
        self.assertTrue(grid.is_v_wall(0, 2))
        self.assertFalse(grid.is_v_wall(0, 3))
        self.assertFalse(grid.is_h_wall(0, 2))

    def test_linked_pairs(self) -> None:
        self.assertEqual(self.grid.linked_pairs(), {((0, 0), (0, 1)), ((0, 0), (1, 0))})

    def test_text_drawing(self) -> None:
        grid = MaskedGrid(2, 1)
        grid.link_cells_at((0, 0), (0, 1))
        self.assertEqual(grid.to_text(), "+---+---+\n|       |\n+---+---+")

    def test_equality_compares_links(self) -> None:
        other = MaskedGrid(2, 2)
        self.assertNotEqual(self.grid, other)
        other.link_cells_at((0, 1), (0, 0))
        other.link_cells_at((1, 0), (0, 0))
        self.assertEqual(self.grid, other)


class MaskTests(unittest.TestCase):
    def test_full_mask(self) -> None:
        self.assertTrue(FullMask().contains(100, 3))

    def test_disk_mask_keeps_centre(self) -> None:
        mask = DiskMask(10, 10)
        self.assertTrue(mask.contains(5, 5))
        self.assertFalse(mask.contains(0, 0))

    def test_grid_mask_bounds(self) -> None:
        mask = GridMask.from_cells(2, 2, [(0, 0)])
        self.assertTrue(mask.contains(0, 0))
        self.assertFalse(mask.contains(1, 1))
        self.assertFalse(mask.contains(-1, 0))
        self.assertFalse(mask.contains(0, 2))
        self.assertEqual(mask.count(), 1)

    def test_presets(self) -> None:
        self.assertIsInstance(build_mask(None, 4, 4), FullMask)
        self.assertIsInstance(build_mask("disk", 4, 4), DiskMask)
        with self.assertRaises(ValueError):
            build_mask("stars", 4, 4)

    def test_image_mask_ignores_transparent_pixels(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "mask.png"
            image = Image.new("RGBA", (4, 4), (0, 0, 0, 0))
            image.putpixel((1, 2), (0, 0, 0, 255))
            image.putpixel((2, 2), (0, 0, 0, 255))
            image.putpixel((3, 0), (0, 0, 0, 100))
            image.putpixel((0, 0), (255, 255, 255, 255))
            image.save(path)
            mask = GridMask.from_image(path)
        self.assertEqual((mask.width, mask.height), (4, 4))
        self.assertEqual(mask.count(), 2)
        self.assertTrue(mask.contains(2, 1))
        self.assertTrue(mask.contains(2, 2))
        self.assertFalse(mask.contains(0, 3))
        self.assertFalse(mask.contains(0, 0))

    def test_image_mask_from_greyscale(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "mask.png"
            image = Image.new("L", (3, 2), 255)
            image.putpixel((0, 1), 0)
            image.putpixel((1, 1), 40)
            image.save(path)
            mask = GridMask.from_image(path)
        self.assertEqual(mask.count(), 2)
        self.assertTrue(mask.contains(1, 0))
        self.assertTrue(mask.contains(1, 1))


class RenderToMaskTests(unittest.TestCase):
    def test_passages_fill_the_margin(self) -> None:
        grid = MaskedGrid(2, 1)
        grid.link_cells_at((0, 0), (0, 1))
        mask = grid.render_to_mask(random.Random(0), cell_size=2, wall_half_width=1)
        self.assertEqual((mask.width, mask.height), (8, 4))
        self.assertEqual(mask.count(), 12)
        self.assertTrue(all(mask.contains(1, col) for col in range(1, 7)))
        self.assertFalse(mask.contains(1, 0))
        self.assertFalse(mask.contains(0, 3))
        self.assertEqual(len(MaskedGrid(mask.width, mask.height, mask)), 12)

    def test_walls_stay_closed_without_shortcuts(self) -> None:
        grid = MaskedGrid(2, 1)
        mask = grid.render_to_mask(random.Random(0), cell_size=2, wall_half_width=1)
        self.assertEqual(mask.count(), 8)
        with self.assertRaises(DisconnectedLayoutError):
            MaskedGrid(mask.width, mask.height, mask)

    def test_shortcuts_bridge_walls(self) -> None:
        grid = MaskedGrid(2, 1)
        mask = grid.render_to_mask(random.Random(0), cell_size=2, wall_half_width=1, shortcut_probability=1.0)
        self.assertEqual(mask.count(), 10)
        self.assertTrue(mask.contains(2, 3))
        self.assertTrue(mask.contains(2, 4))
        self.assertFalse(mask.contains(1, 3))

    def test_carved_maze_becomes_a_connected_layout(self) -> None:
        grid = MaskedGrid(5, 4)
        grid.carve("recursive_backtracker", random.Random(3))
        mask = grid.render_to_mask(random.Random(4), cell_size=3, wall_half_width=1, shortcut_probability=0.3)
        finer = MaskedGrid(mask.width, mask.height, mask)
        self.assertEqual((finer.width, finer.height), (25, 20))
        finer.carve("wilson", random.Random(5))
        self.assertEqual(finer.pool.link_count(), len(finer) - 1)

    def test_invalid_sizes(self) -> None:
        with self.assertRaises(ValueError):
            MaskedGrid(2, 2).render_to_mask(random.Random(0), cell_size=0)


if __name__ == "__main__":
    unittest.main()
