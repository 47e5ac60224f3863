"""Last-resort packer laying words as straight horizontal or vertical runs."""

from __future__ import annotations

import random
from typing import List, Optional, Sequence

from ..core.constants import Bounds
from ..core.models import Position
from ..utils.logger import get_logger
from .spangram import feasible_axes, spanned_axes


LOGGER = get_logger(__name__)

RUN_STEPS = ((0, 1), (1, 0))


class StraightLinePacker:
    """Backtracking exact cover of the grid with straight word runs.

    The first free cell in reading order must start a run (everything above
    and to its left is taken), so the search always branches on that cell.
    Each run may be read in either direction.
    """

    def __init__(
        self,
        bounds: Optional[Bounds] = None,
        rng: Optional[random.Random] = None,
        require_span: bool = True,
        node_budget: int = 200_000,
    ) -> None:
        self.bounds = bounds or Bounds()
        self.rng = rng or random.Random()
        self.require_span = require_span
        self.node_budget = node_budget
        self._nodes = 0

    def solve(self, words: Sequence[str]) -> Optional[List[List[Position]]]:
        """Paths for ``words`` in input order, or None if nothing fits."""

        if sum(len(word) for word in words) != self.bounds.capacity:
            return None
        self._nodes = 0
        used = [[False] * self.bounds.cols for _ in range(self.bounds.rows)]
        paths: List[Optional[List[Position]]] = [None] * len(words)
        if self._search(list(words), used, paths):
            return [list(path) for path in paths if path is not None]
        if self._nodes > self.node_budget:
            LOGGER.debug("Straight-line packer ran out of budget")
        return None

    def _first_free(self, used: List[List[bool]]) -> Optional[Position]:
        for row in range(self.bounds.rows):
            for col in range(self.bounds.cols):
                if not used[row][col]:
                    return (row, col)
        return None

    def _run(self, used: List[List[bool]], start: Position, step, length: int) -> List[Position]:
        cells: List[Position] = []
        row, col = start
        for index in range(length):
            r, c = row + step[0] * index, col + step[1] * index
            if not self.bounds.contains(r, c) or used[r][c]:
                return []
            cells.append((r, c))
        return cells

    def _search(
        self,
        words: List[str],
        used: List[List[bool]],
        paths: List[Optional[List[Position]]],
    ) -> bool:
        start = self._first_free(used)
        if start is None:
            return all(path is not None for path in paths)
        self._nodes += 1
        if self._nodes > self.node_budget:
            return False

        pending = [index for index, path in enumerate(paths) if path is None]
        self.rng.shuffle(pending)
        pending.sort(key=lambda index: -len(words[index]))
        seen = set()
        for index in pending:
            word = words[index]
            steps = list(RUN_STEPS)
            self.rng.shuffle(steps)
            for step in steps:
                key = (word, step, index == 0)
                if key in seen:
                    continue
                seen.add(key)
                run = self._run(used, start, step, len(word))
                if not run:
                    continue
                if index == 0 and not self._spangram_ok(run):
                    continue
                path = run if self.rng.random() < 0.5 else list(reversed(run))
                for r, c in run:
                    used[r][c] = True
                paths[index] = path
                if self._search(words, used, paths):
                    return True
                paths[index] = None
                for r, c in run:
                    used[r][c] = False
                if self._nodes > self.node_budget:
                    return False
        return False

    def _spangram_ok(self, run: List[Position]) -> bool:
        if not self.require_span or not feasible_axes(len(run), self.bounds):
            return True
        return bool(spanned_axes(run, self.bounds))
