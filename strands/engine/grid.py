"""Grid representation and helper utilities."""

from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List, Optional, Sequence, Set

from ..core.constants import ALL_STEPS, Bounds
from ..core.exceptions import PlacementError
from ..core.models import Cell, Position, WordPlacement
from ..utils.logger import get_logger
from .partition import region_sizes_feasible


LOGGER = get_logger(__name__)


def are_adjacent(a: Position, b: Position) -> bool:
    """True when ``a`` and ``b`` are distinct 8-directional neighbours."""

    return a != b and abs(a[0] - b[0]) <= 1 and abs(a[1] - b[1]) <= 1


def is_simple_path(path: Sequence[Position]) -> bool:
    if len(set(path)) != len(path):
        return False
    return all(are_adjacent(path[i], path[i + 1]) for i in range(len(path) - 1))


class StrandsGrid:
    """The 8x6 letter grid and its occupancy for one generation attempt."""

    def __init__(self, bounds: Optional[Bounds] = None) -> None:
        self.bounds = bounds or Bounds()
        self.cells: List[List[Cell]] = [
            [Cell() for _ in range(self.bounds.cols)] for _ in range(self.bounds.rows)
        ]
        self.placements: List[WordPlacement] = []
        self._used: Set[Position] = set()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def positions(self) -> Iterable[Position]:
        for row in range(self.bounds.rows):
            for col in range(self.bounds.cols):
                yield (row, col)

    def is_free(self, row: int, col: int) -> bool:
        return self.bounds.contains(row, col) and (row, col) not in self._used

    def free_cells(self) -> List[Position]:
        return [pos for pos in self.positions() if pos not in self._used]

    @property
    def used(self) -> Set[Position]:
        return set(self._used)

    @property
    def used_count(self) -> int:
        return len(self._used)

    @property
    def free_count(self) -> int:
        return self.bounds.capacity - len(self._used)

    def is_complete(self) -> bool:
        return self.free_count == 0 and all(
            cell.letter is not None for row in self.cells for cell in row
        )

    def neighbors(self, row: int, col: int) -> Iterable[Position]:
        for dr, dc in ALL_STEPS:
            nr, nc = row + dr, col + dc
            if self.bounds.contains(nr, nc):
                yield (nr, nc)

    def free_neighbors(self, row: int, col: int) -> List[Position]:
        return [pos for pos in self.neighbors(row, col) if pos not in self._used]

    def used_neighbor_count(self, row: int, col: int) -> int:
        """Neighbours already claimed; out-of-bounds cells do not count."""

        return sum(1 for pos in self.neighbors(row, col) if pos in self._used)

    def free_components(
        self,
        allowed: Optional[Set[Position]] = None,
        exclude: Iterable[Position] = (),
    ) -> List[Set[Position]]:
        """8-connected components of the free cells (optionally restricted)."""

        pool = set(allowed) if allowed is not None else set(self.free_cells())
        pool -= self._used
        pool.difference_update(exclude)
        components: List[Set[Position]] = []
        while pool:
            seed = min(pool)
            pool.discard(seed)
            component = {seed}
            queue = deque([seed])
            while queue:
                row, col = queue.popleft()
                for pos in self.neighbors(row, col):
                    if pos in pool:
                        pool.discard(pos)
                        component.add(pos)
                        queue.append(pos)
            components.append(component)
        return components

    def leaves_tileable(self, path: Sequence[Position], lengths: Sequence[int]) -> bool:
        """Whether the free cells left after ``path`` can still host ``lengths``."""

        sizes = [len(component) for component in self.free_components(exclude=path)]
        return region_sizes_feasible(sizes, lengths)

    def spangram_cells(self) -> Set[Position]:
        return {
            pos for pos in self.positions() if self.cells[pos[0]][pos[1]].is_spangram
        }

    def spangram_placement(self) -> Optional[WordPlacement]:
        for placement in self.placements:
            if placement.is_spangram:
                return placement
        return None

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def place_path(
        self,
        word: str,
        path: Sequence[Position],
        is_spangram: bool = False,
        strategy: Optional[str] = None,
    ) -> WordPlacement:
        """Lay ``word`` along ``path``; the path must be simple and free."""

        if len(word) != len(path):
            raise PlacementError(f"Word '{word}' has {len(word)} letters but path has {len(path)} cells")
        for row, col in path:
            if not self.bounds.contains(row, col):
                raise PlacementError(f"Path for '{word}' leaves the grid at {(row, col)}")
            if (row, col) in self._used:
                raise PlacementError(f"Path for '{word}' overlaps used cell {(row, col)}")
        if not is_simple_path(path):
            raise PlacementError(f"Path for '{word}' is not a simple adjacent path")

        for letter, (row, col) in zip(word, path):
            cell = self.cells[row][col]
            cell.letter = letter
            cell.is_spangram = is_spangram
            self._used.add((row, col))

        placement = WordPlacement(word=word, path=list(path), is_spangram=is_spangram, strategy=strategy)
        self.placements.append(placement)
        LOGGER.debug("Placed '%s' on %s", word, placement.path)
        return placement

    def place_partial(self, word: str, path: Sequence[Position]) -> WordPlacement:
        """Lay the first ``len(path)`` letters of ``word``; the rest spills over."""

        head = word[: len(path)]
        placement = self.place_path(head, path)
        placement.word = word
        return placement

    def remove_placement(self, placement: WordPlacement) -> None:
        if placement not in self.placements:
            return
        for row, col in placement.path:
            self.cells[row][col] = Cell()
            self._used.discard((row, col))
        self.placements.remove(placement)

    def fill_cell(self, row: int, col: int, letter: str) -> None:
        if (row, col) in self._used:
            raise PlacementError(f"Cell {(row, col)} is already filled")
        self.cells[row][col] = Cell(letter=letter, is_spangram=False)
        self._used.add((row, col))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def rows_as_strings(self) -> List[str]:
        return ["".join(cell.letter or "." for cell in row) for row in self.cells]

    def to_jsonable(self) -> List[List[Dict[str, object]]]:
        return [[cell.to_jsonable() for cell in row] for row in self.cells]
