"""Spangram placement strategies.

A spangram must connect two opposite sides of the grid whenever it is long
enough to do so (at least as long as the grid is wide). The heuristic
strategies only bias the search towards a shape and reject non-spanning
results; ``bfs_span`` builds the path from BFS distances so every accepted
path runs from one side to the opposite one by construction.
"""

from __future__ import annotations

import random
from typing import Callable, List, Optional, Sequence, Set, Tuple

from ..core.constants import Bounds, SpanAxis, SpangramStrategy
from ..core.exceptions import SpangramPlacementError
from ..core.models import Position, WordPlacement
from ..utils.logger import get_logger
from .grid import StrandsGrid
from .pathfinder import (DEFAULT_NODE_BUDGET, Deadline, PathFinder, bfs_distances, bfs_shortest_path,
                         build_graph, random_order, spangram_directions)


LOGGER = get_logger(__name__)

HEURISTIC_STRATEGIES: Tuple[SpangramStrategy, ...] = tuple(
    strategy for strategy in SpangramStrategy if strategy != SpangramStrategy.BFS_SPAN
)


def side_cells(bounds: Bounds, axis: SpanAxis) -> Tuple[List[Position], List[Position]]:
    """The two opposite sides joined by a spangram running along ``axis``."""

    if axis == SpanAxis.HORIZONTAL:
        return (
            [(row, 0) for row in range(bounds.rows)],
            [(row, bounds.cols - 1) for row in range(bounds.rows)],
        )
    return (
        [(0, col) for col in range(bounds.cols)],
        [(bounds.rows - 1, col) for col in range(bounds.cols)],
    )


def spanned_axes(path: Sequence[Position], bounds: Bounds) -> List[SpanAxis]:
    rows = {row for row, _ in path}
    cols = {col for _, col in path}
    axes: List[SpanAxis] = []
    if 0 in cols and bounds.cols - 1 in cols:
        axes.append(SpanAxis.HORIZONTAL)
    if 0 in rows and bounds.rows - 1 in rows:
        axes.append(SpanAxis.VERTICAL)
    return axes


def feasible_axes(length: int, bounds: Bounds) -> List[SpanAxis]:
    axes: List[SpanAxis] = []
    if length >= bounds.cols:
        axes.append(SpanAxis.HORIZONTAL)
    if length >= bounds.rows:
        axes.append(SpanAxis.VERTICAL)
    return axes


class SpangramPlacer:
    """Finds and places the spangram path for one attempt."""

    def __init__(
        self,
        grid: StrandsGrid,
        rng: random.Random,
        attempts: int = 200,
        require_span: bool = True,
        node_budget: int = DEFAULT_NODE_BUDGET,
        diagonal_drop: float = 0.5,
        deadline: Optional[Deadline] = None,
    ) -> None:
        self.grid = grid
        self.rng = rng
        self.attempts = attempts
        self.require_span = require_span
        self.node_budget = node_budget
        self.diagonal_drop = diagonal_drop
        self.deadline = deadline

    def _out_of_time(self) -> bool:
        return self.deadline is not None and self.deadline.expired()

    def choose_strategy(self) -> SpangramStrategy:
        return self.rng.choice(list(SpangramStrategy))

    def must_span(self, length: int) -> bool:
        return self.require_span and bool(feasible_axes(length, self.grid.bounds))

    def place(
        self,
        spangram: str,
        strategy: Optional[SpangramStrategy] = None,
        remaining_lengths: Sequence[int] = (),
    ) -> WordPlacement:
        strategy = strategy or self.choose_strategy()
        LOGGER.debug("Placing spangram '%s' with strategy %s", spangram, strategy.value)
        if strategy == SpangramStrategy.BFS_SPAN:
            path = self._bfs_span_path(spangram, remaining_lengths)
        else:
            path = self._heuristic_path(spangram, strategy, remaining_lengths)
        if not path:
            raise SpangramPlacementError(
                f"No path for spangram '{spangram}' after {self.attempts} attempts "
                f"({strategy.value})"
            )
        return self.grid.place_path(spangram, path, is_spangram=True, strategy=strategy.value)

    # ------------------------------------------------------------------
    # Acceptance
    # ------------------------------------------------------------------
    def _acceptor(self, length: int, remaining_lengths: Sequence[int]) -> Callable[[List[Position]], bool]:
        spanning = self.must_span(length)
        bounds = self.grid.bounds

        def accept(path: List[Position]) -> bool:
            if spanning and not spanned_axes(path, bounds):
                return False
            return self.grid.leaves_tileable(path, remaining_lengths)

        return accept

    # ------------------------------------------------------------------
    # Heuristic strategies
    # ------------------------------------------------------------------
    def start_position(self, strategy: SpangramStrategy) -> Position:
        bounds = self.grid.bounds
        last_row, last_col = bounds.rows - 1, bounds.cols - 1
        if strategy in (SpangramStrategy.DIAGONAL_SWEEP, SpangramStrategy.CORNER_CURVE):
            return self.rng.choice([(0, 0), (0, last_col), (last_row, 0), (last_row, last_col)])
        if strategy == SpangramStrategy.SPIRAL:
            edges = (
                [(0, col) for col in range(bounds.cols)]
                + [(last_row, col) for col in range(bounds.cols)]
                + [(row, 0) for row in range(bounds.rows)]
                + [(row, last_col) for row in range(bounds.rows)]
            )
            return self.rng.choice(edges)
        if strategy == SpangramStrategy.BORDER_SNAKE:
            border = [pos for pos in self.grid.positions() if bounds.is_border(*pos)]
            return self.rng.choice(border)
        if strategy == SpangramStrategy.CENTER_EXPLOSION:
            return (
                bounds.rows // 2 + self.rng.choice((-1, 1)),
                bounds.cols // 2 + self.rng.choice((-1, 1)),
            )
        return (self.rng.randrange(bounds.rows), self.rng.randrange(bounds.cols))

    def _heuristic_path(
        self, spangram: str, strategy: SpangramStrategy, remaining_lengths: Sequence[int]
    ) -> List[Position]:
        length = len(spangram)
        accept = self._acceptor(length, remaining_lengths)
        finder = PathFinder(self.grid, self.rng, deadline=self.deadline, node_budget=self.node_budget)
        for attempt in range(1, self.attempts + 1):
            if self._out_of_time():
                break
            start = self.start_position(strategy)
            order = spangram_directions(strategy, self.rng, self.grid.bounds, length)
            path = finder.find_path(start, length, order, accept=accept)
            if path:
                LOGGER.debug("Spangram path found on try %d from %s", attempt, start)
                return path
        return []

    # ------------------------------------------------------------------
    # BFS edge-to-edge strategy
    # ------------------------------------------------------------------
    def _bfs_span_path(self, spangram: str, remaining_lengths: Sequence[int]) -> List[Position]:
        length = len(spangram)
        bounds = self.grid.bounds
        axes = feasible_axes(length, bounds)
        accept = self._acceptor(length, remaining_lengths)
        if not axes:
            # Too short to span anything: fall back to a random walk off the border.
            finder = PathFinder(self.grid, self.rng, deadline=self.deadline, node_budget=self.node_budget)
            border = [pos for pos in self.grid.free_cells() if bounds.is_border(*pos)]
            for _ in range(self.attempts):
                if self._out_of_time():
                    break
                path = finder.find_path(self.rng.choice(border), length, random_order(self.rng), accept=accept)
                if path:
                    return path
            return []

        allowed: Set[Position] = set(self.grid.free_cells())
        for attempt in range(1, self.attempts + 1):
            if self._out_of_time():
                break
            graph = build_graph(bounds, self.rng, diagonal_drop=self.diagonal_drop)
            axis = self.rng.choice(axes)
            sources, targets = side_cells(bounds, axis)
            if self.rng.random() < 0.5:
                sources, targets = targets, sources
            goal = set(targets)
            distances = bfs_distances(graph, targets, allowed)
            starts = [pos for pos in sources if distances.get(pos, length) <= length - 1]
            if not starts:
                continue
            start = self.rng.choice(starts)

            shortest = bfs_shortest_path(graph, start, goal, allowed)
            if len(shortest) == length and accept(shortest):
                LOGGER.debug("BFS shortest path fits spangram exactly on try %d", attempt)
                return shortest

            def within_reach(pos: Position, size: int) -> bool:
                return distances.get(pos, length) <= length - size

            finder = PathFinder(
                self.grid, self.rng, deadline=self.deadline, node_budget=self.node_budget, graph=graph
            )
            path = finder.find_path(
                start,
                length,
                random_order(self.rng),
                accept=lambda candidate: candidate[-1] in goal and accept(candidate),
                prune=within_reach,
            )
            if path:
                LOGGER.debug(
                    "BFS span path on try %d (%s, shortest %d)", attempt, axis.value, len(shortest)
                )
                return path
        return []
