import unittest

from strands.core.models import Cell
from strands.engine.grid import StrandsGrid
from strands.engine.validator import GridValidator, find_word_path

SIX_LETTER_WORDS = ["garden", "flower", "petals", "blooms", "thorns", "leaves", "sprout", "nectar"]


def build_rows_grid() -> StrandsGrid:
    grid = StrandsGrid()
    for row, word in enumerate(SIX_LETTER_WORDS):
        grid.place_path(word, [(row, col) for col in range(6)], is_spangram=row == 0)
    return grid


class FindWordPathTests(unittest.TestCase):
    def test_finds_row_word(self) -> None:
        grid = build_rows_grid()
        self.assertEqual(find_word_path(grid, "nectar"), [(7, c) for c in range(6)])

    def test_finds_diagonal_word(self) -> None:
        grid = build_rows_grid()
        # g(0,0) -> l(1,1) -> t(2,2)
        path = find_word_path(grid, "glt")
        self.assertEqual(path, [(0, 0), (1, 1), (2, 2)])

    def test_missing_word(self) -> None:
        self.assertIsNone(find_word_path(build_rows_grid(), "zebra"))
        self.assertIsNone(find_word_path(build_rows_grid(), ""))


class GridValidatorTests(unittest.TestCase):
    def test_valid_grid(self) -> None:
        result = GridValidator().validate(build_rows_grid(), SIX_LETTER_WORDS)
        self.assertTrue(result.ok)
        self.assertEqual(result.messages, [])

    def test_uncovered_cells_fail(self) -> None:
        grid = StrandsGrid()
        grid.place_path("garden", [(0, c) for c in range(6)], is_spangram=True)
        result = GridValidator().validate(grid, ["garden"])
        self.assertFalse(result.ok)
        self.assertIn("42 cells left uncovered", result.messages[0])

    def test_tampered_letter_fails(self) -> None:
        grid = build_rows_grid()
        grid.cells[3][3] = Cell(letter="z")
        result = GridValidator().validate(grid, SIX_LETTER_WORDS)
        self.assertFalse(result.ok)
        self.assertIn("spells", result.messages[0])

    def test_word_list_mismatch_fails(self) -> None:
        words = list(SIX_LETTER_WORDS)
        words[-1] = "nectry"
        result = GridValidator().validate(build_rows_grid(), words)
        self.assertFalse(result.ok)
        self.assertIn("missing ['nectry']", result.messages[0])

    def test_spangram_flags_must_match_path(self) -> None:
        grid = build_rows_grid()
        grid.cell(5, 0).is_spangram = True
        result = GridValidator().validate(grid, SIX_LETTER_WORDS)
        self.assertFalse(result.ok)
        self.assertIn("flags", result.messages[0])

    def test_non_spanning_spangram_fails(self) -> None:
        grid = StrandsGrid()
        grid.place_path("garden", [(r, 0) for r in range(6)], is_spangram=True)
        grid.place_path("fl", [(6, 0), (7, 0)])
        for col in range(1, 6):
            grid.place_path("abcdefgh", [(r, col) for r in range(8)])
        words = ["garden", "fl"] + ["abcdefgh"] * 5
        result = GridValidator().validate(grid, words)
        self.assertFalse(result.ok)
        self.assertIn("does not span", result.messages[0])
        self.assertTrue(GridValidator(require_span=False).validate(grid, words).ok)

    def test_partial_placements_need_relaxed_mode(self) -> None:
        grid = StrandsGrid()
        grid.place_path("garden", [(0, c) for c in range(6)], is_spangram=True)
        grid.place_partial("flowers", [(1, c) for c in range(6)])
        for row, word in enumerate(SIX_LETTER_WORDS[2:], start=2):
            grid.place_path(word, [(row, c) for c in range(6)])
        words = ["garden", "flowers"] + SIX_LETTER_WORDS[2:]
        self.assertFalse(GridValidator().validate(grid, words).ok)
        self.assertTrue(GridValidator(require_word_paths=False).validate(grid, words).ok)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
