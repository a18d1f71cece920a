import random
import unittest

from mazeweave.core.algorithms import ALGORITHM_NAMES, ALGORITHMS, carve_maze, sidewinder
from mazeweave.core.pool import NodeId, Pool
from mazeweave.errors import DisconnectedLayoutError
from mazeweave.masks import DiskMask
from mazeweave.maze.maze_masked.grid import BinaryTreeSettings, MaskedGrid
from mazeweave.maze.maze_polar.grid import PolarGrid


def assert_perfect_maze(case: unittest.TestCase, pool: Pool) -> None:
    """Spanning tree: every node reachable and exactly |V| - 1 passages."""

    case.assertEqual(pool.link_count(), len(pool) - 1)
    distances = pool.distances_from(pool.arbitrary_node_id())
    case.assertTrue(all(distance.is_finite for _, distance in distances.items()))
    for node in pool:
        case.assertTrue(node.links <= node.adjacencies)
        for other in node.links:
            case.assertIn(node.id, pool[other].links)


class SpanningTreeTests(unittest.TestCase):
    def test_every_algorithm_on_rectangle(self) -> None:
        for name in ALGORITHM_NAMES:
            with self.subTest(algorithm=name):
                grid = MaskedGrid(9, 7)
                grid.carve(name, random.Random(2024))
                assert_perfect_maze(self, grid.pool)

    def test_pool_algorithms_on_disk_mask(self) -> None:
        for name in ALGORITHMS:
            with self.subTest(algorithm=name):
                grid = MaskedGrid(12, 12, DiskMask(12, 12))
                self.assertFalse(grid.is_full)
                grid.carve(name, random.Random(5))
                assert_perfect_maze(self, grid.pool)

    def test_pool_algorithms_on_polar_grid(self) -> None:
        for name in ALGORITHMS:
            with self.subTest(algorithm=name):
                grid = PolarGrid(6, 5)
                grid.carve(name, random.Random(9))
                assert_perfect_maze(self, grid.pool)

    def test_same_seed_same_maze(self) -> None:
        for name in ALGORITHM_NAMES:
            with self.subTest(algorithm=name):
                first = MaskedGrid(6, 6)
                second = MaskedGrid(6, 6)
                first.carve(name, random.Random(77))
                second.carve(name, random.Random(77))
                self.assertEqual(first.linked_pairs(), second.linked_pairs())

    def test_single_cell(self) -> None:
        for name in ALGORITHM_NAMES:
            with self.subTest(algorithm=name):
                grid = MaskedGrid(1, 1)
                grid.carve(name, random.Random(0))
                self.assertEqual(grid.pool.link_count(), 0)


class BinaryTreeTests(unittest.TestCase):
    def test_always_north_builds_columns(self) -> None:
        grid = MaskedGrid(5, 4)
        grid.binary_tree(random.Random(1), BinaryTreeSettings(1.0))
        for row in range(1, 4):
            for col in range(5):
                self.assertTrue(grid.is_linked_at((row, col), (row - 1, col)))
        for col in range(4):
            self.assertTrue(grid.is_linked_at((0, col), (0, col + 1)))

    def test_per_cell_probability(self) -> None:
        grid = MaskedGrid(4, 4)
        settings = BinaryTreeSettings(lambda row, col: 0.0 if row == 3 else 1.0)
        grid.binary_tree(random.Random(1), settings)
        for col in range(3):
            self.assertTrue(grid.is_linked_at((3, col), (3, col + 1)))
        self.assertTrue(grid.is_linked_at((3, 3), (2, 3)))
        assert_perfect_maze(self, grid.pool)

    def test_requires_full_rectangle(self) -> None:
        grid = MaskedGrid(10, 10, DiskMask(10, 10))
        with self.assertRaises(ValueError):
            grid.carve("binary_tree", random.Random(0))


class SidewinderTests(unittest.TestCase):
    def test_first_line_is_one_corridor(self) -> None:
        grid = MaskedGrid(6, 5)
        grid.sidewinder(random.Random(4))
        for col in range(5):
            self.assertTrue(grid.is_linked_at((0, col), (0, col + 1)))
        assert_perfect_maze(self, grid.pool)

    def test_unequal_lines_rejected(self) -> None:
        grid = MaskedGrid(3, 2)
        lines = [[NodeId(0), NodeId(1), NodeId(2)], [NodeId(3), NodeId(4)]]
        with self.assertRaises(ValueError):
            sidewinder(grid.pool, lines, random.Random(0))


class DispatchTests(unittest.TestCase):
    def test_unknown_algorithm(self) -> None:
        with self.assertRaises(ValueError):
            carve_maze(MaskedGrid(2, 2).pool, "prim", random.Random(0))
        with self.assertRaises(ValueError):
            MaskedGrid(2, 2).carve("prim", random.Random(0))

    def test_directional_algorithms_need_a_grid(self) -> None:
        with self.assertRaises(ValueError):
            carve_maze(MaskedGrid(2, 2).pool, "sidewinder", random.Random(0))
        with self.assertRaises(ValueError):
            PolarGrid(4, 3).carve("binary_tree", random.Random(0))

    def test_disconnected_pool_refused(self) -> None:
        pool: Pool = Pool()
        pool.new_node(lambda _id: None)
        pool.new_node(lambda _id: None)
        with self.assertRaises(DisconnectedLayoutError):
            carve_maze(pool, "wilson", random.Random(0))


if __name__ == "__main__":
    unittest.main()
