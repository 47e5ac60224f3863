"""CP-SAT exact tiling of the word list using OR-Tools.

The model has one boolean per (word, letter index, cell):

- every letter of every word sits on exactly one cell,
- every cell hosts exactly one letter,
- consecutive letters of a word sit on 8-adjacent cells,
- the spangram touches two opposite sides of the grid (when required).

Distinctness of cells inside a word follows from the one-letter-per-cell
constraint, so any solution is a set of simple, non-overlapping paths that
cover the whole grid.
"""

from __future__ import annotations

import random
from typing import Dict, List, Optional, Sequence, Tuple

from ortools.sat.python import cp_model

from ..core.constants import Bounds
from ..core.models import Position
from ..utils.logger import get_logger
from .spangram import feasible_axes, side_cells

LOGGER = get_logger(__name__)

LetterKey = Tuple[int, int, Position]


def _neighbors(bounds: Bounds, pos: Position) -> List[Position]:
    row, col = pos
    result: List[Position] = []
    for dr in (-1, 0, 1):
        for dc in (-1, 0, 1):
            if dr == 0 and dc == 0:
                continue
            if bounds.contains(row + dr, col + dc):
                result.append((row + dr, col + dc))
    return result


def solve_tiling(
    words: Sequence[str],
    bounds: Optional[Bounds] = None,
    require_span: bool = True,
    timeout: float = 10.0,
    seed: Optional[int] = None,
    num_workers: int = 4,
) -> Optional[List[List[Position]]]:
    """Tile the grid with ``words`` (spangram first) via CP-SAT.

    Args:
        words: Sanitized words; index 0 is the spangram.
        bounds: Grid bounds; defaults to the 8x6 grid.
        require_span: Force the spangram to touch two opposite sides when it
            is long enough to do so.
        timeout: Solver time limit in seconds.
        seed: Solver random seed, so repeated calls produce varied grids.
        num_workers: CP-SAT search workers.

    Returns:
        One path per word in input order, or None if no tiling was found.
    """
    bounds = bounds or Bounds()
    cells = [(row, col) for row in range(bounds.rows) for col in range(bounds.cols)]
    if sum(len(word) for word in words) != len(cells):
        LOGGER.warning("CP-SAT: %d letters cannot tile %d cells", sum(map(len, words)), len(cells))
        return None

    model = cp_model.CpModel()

    # ------------------------------------------------------------------
    # Step 1: Placement variables
    # ------------------------------------------------------------------
    place: Dict[LetterKey, cp_model.IntVar] = {}
    for w, word in enumerate(words):
        for i in range(len(word)):
            for pos in cells:
                place[(w, i, pos)] = model.new_bool_var(f"x_{w}_{i}_{pos[0]}_{pos[1]}")

    # ------------------------------------------------------------------
    # Step 2: Assignment constraints
    # ------------------------------------------------------------------
    for w, word in enumerate(words):
        for i in range(len(word)):
            model.add_exactly_one([place[(w, i, pos)] for pos in cells])

    for pos in cells:
        model.add_exactly_one(
            [place[(w, i, pos)] for w, word in enumerate(words) for i in range(len(word))]
        )

    # ------------------------------------------------------------------
    # Step 3: Adjacency of consecutive letters
    # ------------------------------------------------------------------
    neighbor_map = {pos: _neighbors(bounds, pos) for pos in cells}
    for w, word in enumerate(words):
        for i in range(len(word) - 1):
            for pos in cells:
                model.add_bool_or(
                    [place[(w, i + 1, nxt)] for nxt in neighbor_map[pos]]
                ).only_enforce_if(place[(w, i, pos)])

    # ------------------------------------------------------------------
    # Step 4: Spangram spanning
    # ------------------------------------------------------------------
    if words and require_span:
        axes = feasible_axes(len(words[0]), bounds)
        if axes:
            def touching(side: List[Position]) -> List[cp_model.IntVar]:
                return [place[(0, i, pos)] for i in range(len(words[0])) for pos in side]

            choices = []
            for axis in axes:
                chosen = model.new_bool_var(f"span_{axis.value}")
                first, second = side_cells(bounds, axis)
                model.add_bool_or(touching(first)).only_enforce_if(chosen)
                model.add_bool_or(touching(second)).only_enforce_if(chosen)
                choices.append(chosen)
            model.add_bool_or(choices)

    # ------------------------------------------------------------------
    # Step 5: Solve
    # ------------------------------------------------------------------
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.num_workers = num_workers
    if seed is not None:
        solver.parameters.random_seed = seed
        solver.parameters.randomize_search = True

    LOGGER.info(
        "CP-SAT: %d words, %d placement vars, solving (timeout=%0.1fs)...",
        len(words), len(place), timeout,
    )
    status = solver.solve(model)

    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        LOGGER.warning("CP-SAT: no tiling found (status=%s)", solver.status_name(status))
        return None

    LOGGER.info("CP-SAT: tiling found in %.2fs", solver.wall_time)

    # ------------------------------------------------------------------
    # Step 6: Extract paths
    # ------------------------------------------------------------------
    paths: List[List[Position]] = []
    for w, word in enumerate(words):
        path = []
        for i in range(len(word)):
            path.append(next(pos for pos in cells if solver.boolean_value(place[(w, i, pos)])))
        paths.append(path)
    return paths


class ExactTiler:
    """Fallback packer that asks CP-SAT for any valid tiling."""

    def __init__(
        self,
        bounds: Optional[Bounds] = None,
        rng: Optional[random.Random] = None,
        require_span: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self.bounds = bounds or Bounds()
        self.rng = rng or random.Random()
        self.require_span = require_span
        self.timeout = timeout

    def solve(self, words: Sequence[str]) -> Optional[List[List[Position]]]:
        return solve_tiling(
            words,
            bounds=self.bounds,
            require_span=self.require_span,
            timeout=self.timeout,
            seed=self.rng.randint(0, 2**31 - 1),
        )


__all__ = ["ExactTiler", "solve_tiling"]
