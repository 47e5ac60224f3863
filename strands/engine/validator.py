"""Deterministic rule validation for generated grids."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set

from ..core.constants import ALPHABET
from ..core.exceptions import ValidationError
from ..core.models import Position
from ..utils.logger import get_logger
from .grid import StrandsGrid, is_simple_path
from .spangram import feasible_axes, spanned_axes


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


def find_word_path(grid: StrandsGrid, word: str) -> Optional[List[Position]]:
    """Some simple adjacent path spelling ``word`` on the grid, if any."""

    word = word.lower()
    if not word:
        return None

    def extend(path: List[Position], visited: Set[Position]) -> bool:
        if len(path) == len(word):
            return True
        row, col = path[-1]
        for nxt in grid.neighbors(row, col):
            if nxt in visited or grid.cell(*nxt).letter != word[len(path)]:
                continue
            path.append(nxt)
            visited.add(nxt)
            if extend(path, visited):
                return True
            path.pop()
            visited.discard(nxt)
        return False

    for pos in grid.positions():
        if grid.cell(*pos).letter != word[0]:
            continue
        path = [pos]
        if extend(path, {pos}):
            return path
    return None


class GridValidator:
    """Runs deterministic validation over a finished grid."""

    def __init__(self, require_span: bool = True, require_word_paths: bool = True) -> None:
        self.require_span = require_span
        self.require_word_paths = require_word_paths

    def validate(self, grid: StrandsGrid, words: Sequence[str]) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_coverage(grid)
            self._check_placements(grid, words)
            self._check_spangram(grid, words)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def _check_coverage(self, grid: StrandsGrid) -> None:
        if grid.free_count:
            raise ValidationError(f"{grid.free_count} cells left uncovered")
        for row, col in grid.positions():
            letter = grid.cell(row, col).letter
            if letter is None or len(letter) != 1 or letter not in ALPHABET:
                raise ValidationError(f"Invalid letter {letter!r} at ({row},{col})")

    def _check_placements(self, grid: StrandsGrid, words: Sequence[str]) -> None:
        placed = Counter(placement.word for placement in grid.placements)
        expected = Counter(words)
        if placed != expected:
            missing = sorted((expected - placed).elements())
            extra = sorted((placed - expected).elements())
            raise ValidationError(f"Placed words differ from input (missing {missing}, extra {extra})")

        claimed: Set[Position] = set()
        for placement in grid.placements:
            if not placement.complete:
                if self.require_word_paths:
                    raise ValidationError(
                        f"'{placement.word}' only has {len(placement.path)} cells on its path"
                    )
                continue
            if not is_simple_path(placement.path):
                raise ValidationError(f"Path for '{placement.word}' is not simple and adjacent")
            overlap = claimed.intersection(placement.path)
            if overlap:
                raise ValidationError(f"'{placement.word}' reuses cells {sorted(overlap)}")
            claimed.update(placement.path)
            spelled = "".join(grid.cell(*pos).letter or "" for pos in placement.path)
            if spelled != placement.word:
                raise ValidationError(
                    f"Path for '{placement.word}' spells '{spelled}'"
                )

    def _check_spangram(self, grid: StrandsGrid, words: Sequence[str]) -> None:
        spangrams = [placement for placement in grid.placements if placement.is_spangram]
        if len(spangrams) != 1:
            raise ValidationError(f"Expected exactly one spangram placement, found {len(spangrams)}")
        spangram = spangrams[0]
        if words and spangram.word != words[0]:
            raise ValidationError(f"Spangram placement holds '{spangram.word}', not '{words[0]}'")
        if grid.spangram_cells() != set(spangram.path):
            raise ValidationError("Spangram flags do not match the spangram path")
        if self.require_span and feasible_axes(len(spangram.word), grid.bounds):
            if not spanned_axes(spangram.path, grid.bounds):
                raise ValidationError(f"Spangram '{spangram.word}' does not span the grid")
