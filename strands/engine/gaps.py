"""Gap filling for cells left uncovered after path placement."""

from __future__ import annotations

import random
from typing import List, Sequence

from ..core.constants import ALPHABET
from ..core.exceptions import CoverageError
from ..core.models import Position
from ..utils.logger import get_logger
from .grid import StrandsGrid


LOGGER = get_logger(__name__)


class GapFiller:
    """Assigns pool letters (or random filler) to every uncovered cell."""

    def __init__(self, rng: random.Random) -> None:
        self.rng = rng

    def gaps(self, grid: StrandsGrid) -> List[Position]:
        """Uncovered cells, most isolated first (fewest claimed neighbours)."""

        free = grid.free_cells()
        return sorted(free, key=lambda pos: grid.used_neighbor_count(*pos))

    def fill(self, grid: StrandsGrid, pool: Sequence[str] = (), strict: bool = True) -> int:
        """Fill every gap and return how many random filler letters were used.

        With ``strict`` the pool must match the gap count exactly, since every
        input letter has a cell to go to. Otherwise gaps beyond the pool get
        random filler. A pool larger than the gap count always raises
        :class:`CoverageError`.
        """

        gaps = self.gaps(grid)
        if len(pool) > len(gaps) or (strict and len(pool) != len(gaps)):
            raise CoverageError(
                f"{len(pool)} leftover letters for {len(gaps)} uncovered cells"
            )
        fillers = 0
        for index, (row, col) in enumerate(gaps):
            if index < len(pool):
                letter = pool[index]
            else:
                letter = self.rng.choice(ALPHABET)
                fillers += 1
            grid.fill_cell(row, col, letter)
        if gaps:
            LOGGER.debug("Filled %d gaps (%d random filler letters)", len(gaps), fillers)
        return fillers
