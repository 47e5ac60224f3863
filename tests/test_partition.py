import unittest

from strands.engine.partition import partition_words, region_sizes_feasible, subset_sums


class SubsetSumTests(unittest.TestCase):
    def test_subset_sums(self) -> None:
        self.assertEqual(subset_sums([2, 3]), {0, 2, 3, 5})
        self.assertEqual(subset_sums([]), {0})

    def test_region_sizes_feasible(self) -> None:
        self.assertTrue(region_sizes_feasible([5, 4], [4, 5]))
        self.assertTrue(region_sizes_feasible([9], [4, 5]))
        self.assertFalse(region_sizes_feasible([3, 6], [4, 5]))
        self.assertFalse(region_sizes_feasible([8], [4, 5]))
        self.assertTrue(region_sizes_feasible([], []))


class PartitionTests(unittest.TestCase):
    def test_split_is_even_when_possible(self) -> None:
        words = ["tulip", "daisy", "orchid", "violet", "lily", "rose", "aster", "iris"]
        left, right = partition_words(words)
        self.assertEqual(sorted(left + right), sorted(words))
        self.assertEqual(sum(map(len, left)), 19)
        self.assertEqual(sum(map(len, right)), 20)

    def test_unreachable_half_uses_closest_total(self) -> None:
        left, right = partition_words(["abcdefg", "ab"])
        self.assertEqual(left, ["ab"])
        self.assertEqual(right, ["abcdefg"])

    def test_empty(self) -> None:
        self.assertEqual(partition_words([]), ([], []))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
