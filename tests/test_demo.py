import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import numpy as np

from avl import demo
from avl.avl_tree import AVLTree


class TestOrderedKeys(unittest.TestCase):
    def test_orders(self):
        self.assertEqual(demo.ordered_keys(4, "sorted"), [0, 1, 2, 3])
        self.assertEqual(demo.ordered_keys(4, "reversed"), [3, 2, 1, 0])
        self.assertEqual(sorted(demo.ordered_keys(50, "shuffled")), list(range(50)))

    def test_shuffle_is_seeded(self):
        self.assertEqual(demo.ordered_keys(30, "shuffled", 3), demo.ordered_keys(30, "shuffled", 3))

    def test_unknown_order_raises(self):
        with self.assertRaises(ValueError):
            demo.ordered_keys(3, "zigzag")


class TestProfiles(unittest.TestCase):
    def test_bound_values(self):
        bound = demo.avl_height_bound(np.array([0, 2, 6]))
        np.testing.assert_allclose(bound, [1.112, 2.552, 3.992])

    def test_sorted_height_profile(self):
        heights, bound = demo.height_profile([1, 2, 3, 4, 7], "sorted")
        np.testing.assert_array_equal(heights, [1, 2, 2, 3, 3])
        self.assertTrue(np.all(heights <= bound))

    def test_heights_within_bound_for_all_orders(self):
        sizes = [10, 100, 500]
        for order in ("sorted", "reversed", "shuffled"):
            heights, bound = demo.height_profile(sizes, order)
            self.assertTrue(np.all(heights <= bound), order)

    def test_rotation_profile(self):
        rates = demo.rotation_profile([2, 3])
        np.testing.assert_allclose(rates, [0.0, 1.0 / 3.0])


class TestTreeLayout(unittest.TestCase):
    def test_positions_follow_rank_and_depth(self):
        tree: AVLTree[int] = AVLTree()
        for key in (10, 20, 30):
            tree.insert(key)
        self.assertEqual(demo.tree_layout(tree), {
            10: (0.0, -1.0),
            20: (1.0, 0.0),
            30: (2.0, -1.0),
        })

    def test_empty_tree_layout(self):
        self.assertEqual(demo.tree_layout(AVLTree()), {})


class TestWalkthrough(unittest.TestCase):
    def test_walkthrough_final_state(self):
        with tempfile.TemporaryDirectory() as tmp, \
                patch.object(demo, "VIZ_DIR", Path(tmp)), \
                patch("builtins.print"):
            _, (before, tree) = demo.example_1_walkthrough()
            self.assertTrue((Path(tmp) / "01_walkthrough.png").exists())
        self.assertEqual(tree.in_order(), [5, 10, 15, 25, 40, 50, 60, 70])
        self.assertTrue(tree.is_valid())
        self.assertEqual(before.levels(), [[30], [20, 50], [10, 25, 40, 60], [5, 15, 70]])


if __name__ == '__main__':
    unittest.main()
