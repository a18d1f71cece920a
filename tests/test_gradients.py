import unittest

from mazeweave.core.pool import NodeId
from mazeweave.gradients import (
    NEUTRAL_COLOR,
    PALETTES,
    distance_painter,
    exp_in_out,
    gradient,
    lerp,
    multi_lerp,
)
from mazeweave.maze.maze_masked.grid import MaskedGrid


class InterpolationTests(unittest.TestCase):
    def test_lerp(self) -> None:
        self.assertAlmostEqual(lerp(10, 20)(0.25), 12.5)
        self.assertEqual(lerp((0, 0, 0), (10, 20, 30))(0.5), (5.0, 10.0, 15.0))

    def test_multi_lerp_segments(self) -> None:
        f = multi_lerp([0, 100, 50])
        self.assertAlmostEqual(f(0.0), 0)
        self.assertAlmostEqual(f(0.25), 50)
        self.assertAlmostEqual(f(0.5), 100)
        self.assertAlmostEqual(f(0.75), 75)
        self.assertAlmostEqual(f(1.0), 50)

    def test_multi_lerp_clamps_and_single_point(self) -> None:
        f = multi_lerp([1, 3])
        self.assertAlmostEqual(f(-1.0), 1)
        self.assertAlmostEqual(f(2.0), 3)
        self.assertEqual(multi_lerp([7])(0.4), 7)
        with self.assertRaises(ValueError):
            multi_lerp([])

    def test_exp_in_out(self) -> None:
        self.assertAlmostEqual(exp_in_out(0.5), 0.5)
        self.assertLess(exp_in_out(0.1), 0.01)
        self.assertGreater(exp_in_out(0.9), 0.99)


class PaletteTests(unittest.TestCase):
    def test_endpoints_match_palette(self) -> None:
        for name, stops in PALETTES.items():
            with self.subTest(palette=name):
                color = gradient(name)
                self.assertEqual(color(0.0), stops[0])
                self.assertEqual(color(1.0), stops[-1])

    def test_unknown_palette(self) -> None:
        with self.assertRaises(ValueError):
            gradient("rainbow")

    def test_distance_painter(self) -> None:
        grid = MaskedGrid(3, 1)
        grid.link_cells_at((0, 0), (0, 1))
        paint = distance_painter(grid.pool.distances_from(NodeId(0)), gradient("fire"))
        self.assertEqual(paint(NodeId(0)), PALETTES["fire"][0])
        self.assertEqual(paint(NodeId(1)), PALETTES["fire"][-1])
        self.assertEqual(paint(NodeId(2)), NEUTRAL_COLOR)

    def test_painter_is_neutral_when_nothing_is_reachable(self) -> None:
        grid = MaskedGrid(2, 1)
        paint = distance_painter(grid.pool.distances_from(NodeId(0)), gradient("glacier"))
        self.assertEqual(paint(NodeId(0)), NEUTRAL_COLOR)


if __name__ == "__main__":
    unittest.main()
