import random
import unittest

from strands.core.constants import Bounds, SpanAxis, SpangramStrategy
from strands.core.exceptions import SpangramPlacementError
from strands.engine.grid import StrandsGrid, is_simple_path
from strands.engine.spangram import SpangramPlacer, feasible_axes, side_cells, spanned_axes

REMAINING = [5, 5, 6, 6, 4, 4, 5, 4]


class SpanHelperTests(unittest.TestCase):
    def test_feasible_axes(self) -> None:
        bounds = Bounds()
        self.assertEqual(feasible_axes(5, bounds), [])
        self.assertEqual(feasible_axes(6, bounds), [SpanAxis.HORIZONTAL])
        self.assertEqual(feasible_axes(8, bounds), [SpanAxis.HORIZONTAL, SpanAxis.VERTICAL])

    def test_spanned_axes(self) -> None:
        bounds = Bounds()
        row = [(2, c) for c in range(6)]
        self.assertEqual(spanned_axes(row, bounds), [SpanAxis.HORIZONTAL])
        column = [(r, 0) for r in range(8)]
        self.assertEqual(spanned_axes(column, bounds), [SpanAxis.VERTICAL])
        self.assertEqual(spanned_axes(row[:5], bounds), [])

    def test_side_cells(self) -> None:
        first, second = side_cells(Bounds(), SpanAxis.VERTICAL)
        self.assertEqual(first, [(0, c) for c in range(6)])
        self.assertEqual(second, [(7, c) for c in range(6)])


class SpangramPlacerTests(unittest.TestCase):
    def assert_valid_spangram(self, grid: StrandsGrid, word: str) -> None:
        placement = grid.spangram_placement()
        self.assertIsNotNone(placement)
        self.assertEqual(placement.word, word)
        self.assertTrue(is_simple_path(placement.path))
        self.assertTrue(spanned_axes(placement.path, grid.bounds))
        self.assertEqual(grid.spangram_cells(), set(placement.path))
        self.assertTrue(grid.leaves_tileable([], REMAINING))

    def test_every_strategy_places_a_spanning_spangram(self) -> None:
        for index, strategy in enumerate(SpangramStrategy):
            with self.subTest(strategy=strategy.value):
                grid = StrandsGrid()
                placer = SpangramPlacer(grid, random.Random(100 + index))
                placement = placer.place("gardening", strategy, remaining_lengths=REMAINING)
                self.assertEqual(placement.strategy, strategy.value)
                self.assert_valid_spangram(grid, "gardening")

    def test_bfs_span_handles_long_spangram(self) -> None:
        grid = StrandsGrid()
        placer = SpangramPlacer(grid, random.Random(9))
        placer.place("chrysanthemums", SpangramStrategy.BFS_SPAN, remaining_lengths=[6, 6, 6, 6, 5, 5])
        placement = grid.spangram_placement()
        self.assertEqual(len(placement.path), 14)
        self.assertTrue(spanned_axes(placement.path, grid.bounds))

    def test_short_spangram_does_not_need_to_span(self) -> None:
        grid = StrandsGrid()
        placer = SpangramPlacer(grid, random.Random(1))
        self.assertFalse(placer.must_span(5))
        placer.place("bloom", SpangramStrategy.BFS_SPAN, remaining_lengths=[43])
        self.assertEqual(len(grid.spangram_cells()), 5)

    def test_span_requirement_can_be_disabled(self) -> None:
        grid = StrandsGrid()
        placer = SpangramPlacer(grid, random.Random(1), require_span=False)
        self.assertFalse(placer.must_span(9))

    def test_failure_raises(self) -> None:
        grid = StrandsGrid(Bounds(rows=2, cols=3))
        placer = SpangramPlacer(grid, random.Random(1), attempts=3)
        with self.assertRaises(SpangramPlacementError):
            placer.place("abcdefg", SpangramStrategy.RANDOM_WALK)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
