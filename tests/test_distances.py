import unittest

from mazeweave.core.distances import INFINITE, Distance, compute_distances
from mazeweave.core.pool import NodeId, Pool


def linked_chain(length: int, *, unlinked_tail: int = 0) -> Pool:
    """A row of cells, all adjacent; the last ``unlinked_tail`` are walled off."""

    pool: Pool = Pool()
    for _ in range(length):
        pool.new_node(lambda node_id: node_id)
    for i in range(length - 1):
        pool.make_adjacent(NodeId(i), NodeId(i + 1))
        if i + 1 < length - unlinked_tail:
            pool.link_cells(NodeId(i), NodeId(i + 1))
    return pool


class DistanceValueTests(unittest.TestCase):
    def test_ordering(self) -> None:
        self.assertLess(Distance.finite(3), Distance.finite(4))
        self.assertLess(Distance.finite(10 ** 9), INFINITE)
        self.assertEqual(max(Distance.finite(2), INFINITE, Distance.finite(7)), INFINITE)
        self.assertFalse(INFINITE < INFINITE)

    def test_addition(self) -> None:
        self.assertEqual(Distance.finite(2) + 3, Distance.finite(5))
        self.assertEqual(INFINITE + 1, INFINITE)
        self.assertEqual(1 + Distance.finite(1), Distance.finite(2))

    def test_rendering(self) -> None:
        self.assertEqual(str(Distance.finite(4)), "4")
        self.assertEqual(str(INFINITE), "∞")
        self.assertIsNone(INFINITE.as_finite())

    def test_negative_steps_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Distance.finite(-1)


class DistancesTests(unittest.TestCase):
    def test_breadth_first_distances(self) -> None:
        distances = compute_distances(linked_chain(5), NodeId(0))
        self.assertEqual([distances[NodeId(i)].steps for i in range(5)], [0, 1, 2, 3, 4])
        self.assertEqual(distances.max_finite(), 4)
        self.assertEqual(distances.farthest(), (4, Distance.finite(4)))

    def test_unreachable_nodes_are_infinite(self) -> None:
        pool = linked_chain(5, unlinked_tail=2)
        distances = pool.distances_from(NodeId(0))
        self.assertEqual(distances[NodeId(2)], Distance.finite(2))
        self.assertEqual(distances[NodeId(3)], INFINITE)
        self.assertEqual(distances.max_finite(), 2)
        self.assertIsNone(distances.normalized(NodeId(4)))
        self.assertAlmostEqual(distances.normalized(NodeId(1)), 0.5)

    def test_distances_leave_pool_untouched(self) -> None:
        pool = linked_chain(3)
        compute_distances(pool, NodeId(1))
        self.assertEqual(list(pool.payloads()), [0, 1, 2])

    def test_all_zero_normalizes_to_none(self) -> None:
        pool = linked_chain(3, unlinked_tail=2)
        distances = pool.distances_from(NodeId(0))
        self.assertEqual(distances.max_finite(), 0)
        self.assertIsNone(distances.normalized(NodeId(0)))

    def test_path_to(self) -> None:
        distances = linked_chain(4).distances_from(NodeId(3))
        self.assertEqual(distances.path_to(NodeId(0)), [3, 2, 1, 0])
        self.assertEqual(distances.path_to(NodeId(3)), [3])

    def test_path_to_unreachable(self) -> None:
        distances = linked_chain(4, unlinked_tail=1).distances_from(NodeId(0))
        with self.assertRaises(ValueError):
            distances.path_to(NodeId(3))


if __name__ == "__main__":
    unittest.main()
