import random
import unittest

from strands.core.constants import Bounds, WordStrategy
from strands.core.exceptions import WordPlacementError
from strands.engine.gaps import GapFiller
from strands.engine.grid import StrandsGrid, is_simple_path
from strands.engine.pathfinder import Deadline
from strands.engine.placement import WordPlacer, rotate_strategies


class RotateStrategiesTests(unittest.TestCase):
    def test_no_strategy_repeats_back_to_back(self) -> None:
        strategies = rotate_strategies(50, random.Random(3))
        self.assertEqual(len(strategies), 50)
        for previous, current in zip(strategies, strategies[1:]):
            self.assertNotEqual(previous, current)


class WordPlacerTests(unittest.TestCase):
    def test_place_all_covers_small_grid(self) -> None:
        grid = StrandsGrid(Bounds(rows=2, cols=3))
        placements = WordPlacer(grid, random.Random(8)).place_all(["abc", "def"])
        self.assertEqual(grid.free_count, 0)
        self.assertEqual(sorted(p.word for p in placements), ["abc", "def"])
        for placement in placements:
            self.assertTrue(is_simple_path(placement.path))

    def test_place_all_fills_around_spangram(self) -> None:
        words = ["tulips", "violet", "orchid", "irises", "dahlia", "poppy", "lilac"]
        self.assertEqual(sum(map(len, words)), 40)
        failures = 0
        for seed in range(10):
            grid = StrandsGrid()
            grid.place_path("gardener", [(r, 2) for r in range(8)], is_spangram=True)
            try:
                WordPlacer(grid, random.Random(seed)).place_all(words)
            except WordPlacementError:
                failures += 1
                continue
            self.assertEqual(grid.free_count, 0)
            self.assertEqual(len(grid.placements), 8)
        self.assertLess(failures, 10)

    def test_start_position_prefers_corners(self) -> None:
        grid = StrandsGrid()
        placer = WordPlacer(grid, random.Random(4))
        start = placer.start_position(WordStrategy.CORNER_FILL)
        self.assertTrue(grid.bounds.is_corner(*start))

    def test_start_position_gap_bridging_hugs_used_cells(self) -> None:
        grid = StrandsGrid()
        grid.place_path("abc", [(3, 2), (3, 3), (3, 4)])
        placer = WordPlacer(grid, random.Random(4))
        start = placer.start_position(WordStrategy.GAP_BRIDGING)
        self.assertEqual(grid.used_neighbor_count(*start), 3)

    def test_start_position_excludes_dead_starts(self) -> None:
        grid = StrandsGrid(Bounds(rows=1, cols=2))
        placer = WordPlacer(grid, random.Random(4))
        self.assertEqual(placer.start_position(WordStrategy.SCATTERED_RANDOM, exclude={(0, 0)}), (0, 1))
        self.assertIsNone(placer.start_position(WordStrategy.SCATTERED_RANDOM, exclude={(0, 0), (0, 1)}))

    def test_expired_deadline_stops_search(self) -> None:
        grid = StrandsGrid(Bounds(rows=2, cols=3))
        placer = WordPlacer(grid, random.Random(4), deadline=Deadline(0))
        with self.assertRaises(WordPlacementError):
            placer.place_word("abc", WordStrategy.CORNER_FILL, [3])
        self.assertEqual(grid.used_count, 0)

    def test_unplaceable_word_raises(self) -> None:
        grid = StrandsGrid(Bounds(rows=2, cols=3))
        grid.place_path("ab", [(0, 1), (1, 1)])
        with self.assertRaises(WordPlacementError):
            WordPlacer(grid, random.Random(4), attempts=10).place_word("abc", WordStrategy.CORNER_FILL, [1])


class PartitionedPlacementTests(unittest.TestCase):
    def test_partitioned_words_cover_grid(self) -> None:
        grid = StrandsGrid(Bounds(rows=2, cols=3))
        placements, spilled = WordPlacer(grid, random.Random(6)).place_partitioned(["abcd", "ef"])
        self.assertEqual(spilled, [])
        self.assertEqual(grid.free_count, 0)
        spelled = {
            p.word: "".join(grid.cell(*pos).letter for pos in p.path) for p in placements
        }
        self.assertEqual(spelled, {"abcd": "abcd", "ef": "ef"})

    def test_spill_hands_back_missing_letters(self) -> None:
        grid = StrandsGrid(Bounds(rows=2, cols=3))
        grid.place_path("xy", [(0, 1), (1, 1)])
        placements, spilled = WordPlacer(grid, random.Random(6)).place_partitioned(
            ["abc", "d"], allow_spill=True
        )
        placed_letters = sum(len(p.path) for p in placements)
        self.assertEqual(placed_letters + len(spilled), 4)
        self.assertEqual(len(spilled), grid.free_count)
        GapFiller(random.Random(6)).fill(grid, spilled)
        self.assertTrue(grid.is_complete())

    def test_no_spill_raises_when_word_does_not_fit(self) -> None:
        grid = StrandsGrid(Bounds(rows=2, cols=3))
        grid.place_path("xy", [(0, 1), (1, 1)])
        with self.assertRaises(WordPlacementError):
            WordPlacer(grid, random.Random(6)).place_partitioned(["abc", "d"])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
