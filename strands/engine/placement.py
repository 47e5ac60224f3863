"""Placement of the non-spangram words into the free cells."""

from __future__ import annotations

import random
from typing import AbstractSet, List, Optional, Sequence, Set, Tuple

from ..core.constants import WordStrategy
from ..core.exceptions import WordPlacementError
from ..core.models import Position, WordPlacement
from ..utils.logger import get_logger
from .grid import StrandsGrid
from .partition import partition_words
from .pathfinder import DEFAULT_NODE_BUDGET, Deadline, PathFinder, word_directions


LOGGER = get_logger(__name__)


def rotate_strategies(count: int, rng: random.Random) -> List[WordStrategy]:
    """One strategy per word, never repeating the previous word's strategy."""

    choices = list(WordStrategy)
    result: List[WordStrategy] = []
    for _ in range(count):
        options = [s for s in choices if not result or s != result[-1]]
        result.append(rng.choice(options))
    return result


class WordPlacer:
    """Places each remaining word along its own adjacency path."""

    def __init__(
        self,
        grid: StrandsGrid,
        rng: random.Random,
        attempts: int = 300,
        node_budget: int = DEFAULT_NODE_BUDGET,
        longest_path_timeout: float = 5.0,
        deadline: Optional[Deadline] = None,
    ) -> None:
        self.grid = grid
        self.rng = rng
        self.attempts = attempts
        self.node_budget = node_budget
        self.longest_path_timeout = longest_path_timeout
        self.deadline = deadline

    def _longest_path_timeout(self) -> float:
        remaining = self.deadline.remaining() if self.deadline is not None else None
        if remaining is None:
            return self.longest_path_timeout
        return min(self.longest_path_timeout, remaining)

    # ------------------------------------------------------------------
    # Heuristic mode
    # ------------------------------------------------------------------
    def place_all(self, words: Sequence[str]) -> List[WordPlacement]:
        """Place ``words`` longest first; raises on the first word that does not fit."""

        ordered = sorted(words, key=len, reverse=True)
        strategies = rotate_strategies(len(ordered), self.rng)
        placements: List[WordPlacement] = []
        for index, (word, strategy) in enumerate(zip(ordered, strategies)):
            remaining = [len(other) for other in ordered[index + 1:]]
            placements.append(self.place_word(word, strategy, remaining))
        return placements

    def place_word(
        self, word: str, strategy: WordStrategy, remaining_lengths: Sequence[int] = ()
    ) -> WordPlacement:
        finder = PathFinder(self.grid, self.rng, deadline=self.deadline, node_budget=self.node_budget)
        dead_starts: Set[Position] = set()

        def accept(path: List[Position]) -> bool:
            return self.grid.leaves_tileable(path, remaining_lengths)

        for attempt in range(1, self.attempts + 1):
            if self.deadline is not None and self.deadline.expired():
                break
            start = self.start_position(strategy, exclude=dead_starts)
            if start is None:
                break
            order = word_directions(strategy, self.rng)
            path = finder.find_path(start, len(word), order, accept=accept)
            if path:
                LOGGER.debug("Placed '%s' (%s) on try %d", word, strategy.value, attempt)
                return self.grid.place_path(word, path, strategy=strategy.value)
            LOGGER.debug(
                "No path for '%s' from %s (budget hit: %s)", word, start, finder.exhausted_budget
            )
            dead_starts.add(start)
        raise WordPlacementError(
            f"Unable to place '{word}' with {strategy.value} "
            f"({self.grid.free_count} free cells)"
        )

    def start_position(
        self, strategy: WordStrategy, exclude: AbstractSet[Position] = frozenset()
    ) -> Optional[Position]:
        free = [pos for pos in self.grid.free_cells() if pos not in exclude]
        if not free:
            return None
        bounds = self.grid.bounds

        if strategy == WordStrategy.CORNER_FILL:
            corners = [pos for pos in free if bounds.is_corner(*pos)]
            if corners:
                return self.rng.choice(corners)
            edges = [pos for pos in free if bounds.is_border(*pos)]
            return self.rng.choice(edges or free)

        if strategy == WordStrategy.SCATTERED_RANDOM:
            isolated = [pos for pos in free if self.grid.used_neighbor_count(*pos) <= 2]
            return self.rng.choice(isolated or free)

        if strategy == WordStrategy.CLUSTER_BREAK:
            # Lowest free connectivity first: these cells are the easiest to strand.
            fewest = min(len(self.grid.free_neighbors(*pos)) for pos in free)
            tight = [pos for pos in free if len(self.grid.free_neighbors(*pos)) == fewest]
            return self.rng.choice(tight)

        if strategy == WordStrategy.GAP_BRIDGING:
            most = max(self.grid.used_neighbor_count(*pos) for pos in free)
            hugging = [pos for pos in free if self.grid.used_neighbor_count(*pos) == most]
            return self.rng.choice(hugging)

        return self.rng.choice(free)

    # ------------------------------------------------------------------
    # Partition mode
    # ------------------------------------------------------------------
    def place_partitioned(
        self, words: Sequence[str], allow_spill: bool = False
    ) -> Tuple[List[WordPlacement], List[str]]:
        """Split ``words`` in two even groups and lay each word on a longest path.

        Words are shuffled and may be searched reversed for variety; the
        letters always go down in reading order. A path shorter than its word
        either raises or, with ``allow_spill``, hands the missing letters
        back for the gap filler.
        """

        left, right = partition_words(list(words))
        LOGGER.debug(
            "Partitioned words into %d/%d letters", sum(map(len, left)), sum(map(len, right))
        )
        finder = PathFinder(self.grid, self.rng, deadline=self.deadline, node_budget=self.node_budget)
        placements: List[WordPlacement] = []
        spilled: List[str] = []
        order: List[str] = []
        for group in (left, right):
            shuffled = list(group)
            self.rng.shuffle(shuffled)
            order.extend(shuffled)

        for index, word in enumerate(order):
            remaining = [len(other) for other in order[index + 1:]]

            def accept(path: List[Position], lengths: List[int] = remaining) -> bool:
                return self.grid.leaves_tileable(path, lengths)

            path = finder.longest_path(
                len(word), timeout=self._longest_path_timeout(), accept=None if allow_spill else accept
            )
            if self.rng.random() < 0.5:
                path.reverse()
            if len(path) == len(word):
                placements.append(self.grid.place_path(word, path, strategy="partition"))
                continue
            if not allow_spill or not path:
                raise WordPlacementError(
                    f"Longest free path for '{word}' has {len(path)} of {len(word)} cells"
                )
            LOGGER.debug("Spilling %d letters of '%s'", len(word) - len(path), word)
            placement = self.grid.place_partial(word, path)
            placement.strategy = "partition"
            placements.append(placement)
            spilled.extend(word[len(path):])
        return placements, spilled
