import random
import unittest

from strands.core.constants import ALPHABET, Bounds
from strands.core.exceptions import CoverageError
from strands.engine.gaps import GapFiller
from strands.engine.grid import StrandsGrid


class GapFillerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.grid = StrandsGrid(Bounds(rows=2, cols=3))
        self.grid.place_path("abcd", [(0, 0), (0, 1), (1, 1), (1, 0)])

    def test_gaps_are_the_uncovered_cells(self) -> None:
        gaps = GapFiller(random.Random(1)).gaps(self.grid)
        self.assertEqual(set(gaps), {(0, 2), (1, 2)})

    def test_most_isolated_gap_comes_first(self) -> None:
        grid = StrandsGrid(Bounds(rows=3, cols=3))
        grid.place_path("abcd", [(0, 0), (0, 1), (1, 1), (1, 0)])
        gaps = GapFiller(random.Random(1)).gaps(grid)
        self.assertEqual(gaps[0], (2, 2))
        counts = [grid.used_neighbor_count(*pos) for pos in gaps]
        self.assertEqual(counts, sorted(counts))
        self.assertEqual(counts, [1, 2, 2, 2, 2])

    def test_isolated_gap_gets_first_pool_letter(self) -> None:
        grid = StrandsGrid(Bounds(rows=3, cols=3))
        grid.place_path("abcd", [(0, 0), (0, 1), (1, 1), (1, 0)])
        GapFiller(random.Random(1)).fill(grid, ["v", "w", "x", "y", "z"])
        self.assertEqual(grid.cell(2, 2).letter, "v")

    def test_pool_letters_fill_gaps(self) -> None:
        fillers = GapFiller(random.Random(1)).fill(self.grid, ["x", "y"])
        self.assertEqual(fillers, 0)
        self.assertTrue(self.grid.is_complete())
        self.assertEqual({self.grid.cell(0, 2).letter, self.grid.cell(1, 2).letter}, {"x", "y"})

    def test_strict_mismatch_raises(self) -> None:
        with self.assertRaises(CoverageError):
            GapFiller(random.Random(1)).fill(self.grid, ["x"])
        with self.assertRaises(CoverageError):
            GapFiller(random.Random(1)).fill(self.grid, ["x", "y", "z"], strict=False)

    def test_lenient_fill_uses_random_letters(self) -> None:
        fillers = GapFiller(random.Random(1)).fill(self.grid, [], strict=False)
        self.assertEqual(fillers, 2)
        self.assertTrue(self.grid.is_complete())
        self.assertIn(self.grid.cell(1, 2).letter, ALPHABET)
        self.assertFalse(self.grid.cell(1, 2).is_spangram)

    def test_full_grid_needs_nothing(self) -> None:
        grid = StrandsGrid(Bounds(rows=1, cols=2))
        grid.place_path("ab", [(0, 0), (0, 1)])
        self.assertEqual(GapFiller(random.Random(1)).fill(grid), 0)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
