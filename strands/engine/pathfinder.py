"""Depth-first path search over the 8-connected grid graph.

Every search grows a simple path one cell at a time, marking the cell on the
way in and unmarking it on the way out. The direction try-order at each step
comes from a strategy-specific bias table, which is how the different
placement strategies produce diagonal runs, spirals, zigzags and so on.
"""

from __future__ import annotations

import random
import time
from collections import deque
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from ..core.constants import (ALL_STEPS, DIAGONAL_STEPS, ORTHOGONAL_STEPS, Bounds,
                              SpangramStrategy, WordStrategy)
from ..core.models import Position
from ..utils.logger import get_logger
from .grid import StrandsGrid


LOGGER = get_logger(__name__)

Step = Tuple[int, int]
DirectionOrder = Callable[[int, Position], Sequence[Step]]
AcceptPath = Callable[[List[Position]], bool]
PruneStep = Callable[[Position, int], bool]
Graph = Dict[Position, Set[Position]]

DEFAULT_NODE_BUDGET = 20_000


class Deadline:
    """Cooperative cancellation token for bounded searches."""

    def __init__(self, seconds: Optional[float]) -> None:
        self.seconds = seconds
        self._expires_at = None if seconds is None else time.monotonic() + seconds

    def expired(self) -> bool:
        return self._expires_at is not None and time.monotonic() >= self._expires_at

    def remaining(self) -> Optional[float]:
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - time.monotonic())


def _complete(preferred: Sequence[Step], rng: Optional[random.Random] = None) -> List[Step]:
    """Append the offsets missing from ``preferred`` so no branch is lost."""

    rest = [step for step in ALL_STEPS if step not in preferred]
    if rng is not None:
        rng.shuffle(rest)
    return list(preferred) + rest


# ----------------------------------------------------------------------
# Direction bias tables
# ----------------------------------------------------------------------
SPIRAL_TURNS: Tuple[Tuple[Step, ...], ...] = (
    ((0, 1), (1, 0), (0, -1), (-1, 0)),
    ((1, 0), (0, -1), (-1, 0), (0, 1)),
    ((0, -1), (-1, 0), (0, 1), (1, 0)),
    ((-1, 0), (0, 1), (1, 0), (0, -1)),
)

ZIGZAG_EVEN: Tuple[Step, ...] = ((-1, 1), (1, -1), (1, 1), (-1, -1), (0, 1), (0, -1), (1, 0), (-1, 0))
ZIGZAG_ODD: Tuple[Step, ...] = ((1, -1), (-1, 1), (-1, -1), (1, 1), (0, -1), (0, 1), (-1, 0), (1, 0))

SWEEP_PATTERNS: Tuple[Tuple[Step, ...], ...] = (
    ((0, 1), (1, 1), (-1, 1), (1, 0), (-1, 0), (0, -1), (1, -1), (-1, -1)),
    ((1, 0), (1, 1), (1, -1), (0, 1), (0, -1), (-1, 0), (-1, 1), (-1, -1)),
    ((0, -1), (-1, -1), (1, -1), (-1, 0), (1, 0), (0, 1), (-1, 1), (1, 1)),
    ((-1, 0), (-1, -1), (-1, 1), (0, -1), (0, 1), (1, 0), (1, -1), (1, 1)),
)


def random_order(rng: random.Random) -> DirectionOrder:
    def order(index: int, pos: Position) -> Sequence[Step]:
        steps = list(ALL_STEPS)
        rng.shuffle(steps)
        return steps

    return order


def spangram_directions(
    strategy: SpangramStrategy, rng: random.Random, bounds: Bounds, length: int
) -> DirectionOrder:
    """Direction try-order for a spangram search under ``strategy``."""

    if strategy == SpangramStrategy.DIAGONAL_SWEEP:
        diagonals = list(DIAGONAL_STEPS)
        rng.shuffle(diagonals)
        fixed = diagonals + list(ORTHOGONAL_STEPS)
        return lambda index, pos: fixed

    if strategy == SpangramStrategy.SPIRAL:
        turns = [_complete(turn) for turn in SPIRAL_TURNS]
        shift = rng.randrange(len(turns))
        return lambda index, pos: turns[(index + shift) % len(turns)]

    if strategy == SpangramStrategy.ZIGZAG:
        return lambda index, pos: ZIGZAG_EVEN if index % 2 == 0 else ZIGZAG_ODD

    if strategy == SpangramStrategy.BORDER_SNAKE:
        hugging = _complete(ORTHOGONAL_STEPS)

        def border_order(index: int, pos: Position) -> Sequence[Step]:
            if bounds.is_border(*pos):
                return hugging
            steps = list(ALL_STEPS)
            rng.shuffle(steps)
            return steps

        return border_order

    if strategy == SpangramStrategy.CENTER_EXPLOSION:
        center_row = bounds.rows / 2
        center_col = bounds.cols / 2

        def outward(index: int, pos: Position) -> Sequence[Step]:
            row, col = pos
            away = [
                (-1, 0) if row < center_row else (1, 0),
                (0, -1) if col < center_col else (0, 1),
            ]
            return _complete(away, rng)

        return outward

    if strategy == SpangramStrategy.CORNER_CURVE:
        first, second = rng.sample(ORTHOGONAL_STEPS, 2)
        while first[0] == -second[0] and first[1] == -second[1]:
            first, second = rng.sample(ORTHOGONAL_STEPS, 2)
        bend = (first[0] + second[0], first[1] + second[1])
        head = _complete((first, bend, second))
        tail = _complete((second, bend, first))
        pivot = max(1, length // 2)
        return lambda index, pos: head if index < pivot else tail

    return random_order(rng)


def word_directions(strategy: WordStrategy, rng: random.Random) -> DirectionOrder:
    """Direction try-order for a non-spangram word under ``strategy``."""

    if strategy == WordStrategy.DIRECTIONAL_SWEEP:
        sweep = rng.choice(SWEEP_PATTERNS)
        return lambda index, pos: sweep

    if strategy == WordStrategy.CLUSTER_BREAK:
        def diagonal_first(index: int, pos: Position) -> Sequence[Step]:
            diagonals = list(DIAGONAL_STEPS)
            straight = list(ORTHOGONAL_STEPS)
            rng.shuffle(diagonals)
            rng.shuffle(straight)
            return diagonals + straight

        return diagonal_first

    if strategy == WordStrategy.GAP_BRIDGING:
        return lambda index, pos: ZIGZAG_EVEN if index % 2 == 0 else ZIGZAG_ODD

    if strategy == WordStrategy.CORNER_FILL:
        def hugging(index: int, pos: Position) -> Sequence[Step]:
            straight = list(ORTHOGONAL_STEPS)
            rng.shuffle(straight)
            return _complete(straight, rng)

        return hugging

    return random_order(rng)


# ----------------------------------------------------------------------
# Graph helpers
# ----------------------------------------------------------------------
def build_graph(
    bounds: Bounds, rng: Optional[random.Random] = None, diagonal_drop: float = 0.0
) -> Graph:
    """8-adjacency graph; each diagonal edge is dropped with ``diagonal_drop``."""

    graph: Graph = {
        (row, col): set() for row in range(bounds.rows) for col in range(bounds.cols)
    }
    for (row, col) in graph:
        for dr, dc in ALL_STEPS:
            nr, nc = row + dr, col + dc
            if not bounds.contains(nr, nc) or (nr, nc) < (row, col):
                continue
            if dr and dc and rng is not None and rng.random() < diagonal_drop:
                continue
            graph[(row, col)].add((nr, nc))
            graph[(nr, nc)].add((row, col))
    return graph


def bfs_distances(
    graph: Graph, sources: Iterable[Position], allowed: Set[Position]
) -> Dict[Position, int]:
    """Multi-source BFS restricted to ``allowed`` cells."""

    distances: Dict[Position, int] = {}
    queue: deque = deque()
    for source in sources:
        if source in allowed and source not in distances:
            distances[source] = 0
            queue.append(source)
    while queue:
        current = queue.popleft()
        for neighbor in graph[current]:
            if neighbor in allowed and neighbor not in distances:
                distances[neighbor] = distances[current] + 1
                queue.append(neighbor)
    return distances


def bfs_shortest_path(
    graph: Graph, start: Position, goals: Set[Position], allowed: Set[Position]
) -> List[Position]:
    """Shortest path from ``start`` to any cell of ``goals``; ``[]`` if none."""

    if start not in allowed:
        return []
    parents: Dict[Position, Optional[Position]] = {start: None}
    queue: deque = deque([start])
    while queue:
        current = queue.popleft()
        if current in goals:
            path: List[Position] = []
            node: Optional[Position] = current
            while node is not None:
                path.append(node)
                node = parents[node]
            path.reverse()
            return path
        for neighbor in sorted(graph[current]):
            if neighbor in allowed and neighbor not in parents:
                parents[neighbor] = current
                queue.append(neighbor)
    return []


# ----------------------------------------------------------------------
# Search
# ----------------------------------------------------------------------
class PathFinder:
    """Backtracking simple-path search bound to a single grid attempt."""

    def __init__(
        self,
        grid: StrandsGrid,
        rng: random.Random,
        deadline: Optional[Deadline] = None,
        node_budget: int = DEFAULT_NODE_BUDGET,
        graph: Optional[Graph] = None,
    ) -> None:
        self.grid = grid
        self.rng = rng
        self.deadline = deadline
        self.node_budget = node_budget
        self.graph = graph
        self.nodes_expanded = 0
        self.exhausted_budget = False

    def _usable(self, pos: Position, allowed: Optional[Set[Position]]) -> bool:
        if not self.grid.is_free(*pos):
            return False
        return allowed is None or pos in allowed

    def _linked(self, a: Position, b: Position) -> bool:
        return self.graph is None or b in self.graph[a]

    def _reachable_at_least(
        self,
        head: Position,
        visited: Set[Position],
        needed: int,
        allowed: Optional[Set[Position]],
    ) -> bool:
        """Whether ``needed`` more cells are reachable from ``head``."""

        if needed <= 0:
            return True
        seen = {head}
        queue = deque([head])
        count = 0
        while queue:
            row, col = queue.popleft()
            for dr, dc in ALL_STEPS:
                nxt = (row + dr, col + dc)
                if nxt in seen or nxt in visited:
                    continue
                if not self._usable(nxt, allowed) or not self._linked((row, col), nxt):
                    continue
                seen.add(nxt)
                count += 1
                if count >= needed:
                    return True
                queue.append(nxt)
        return False

    def find_path(
        self,
        start: Position,
        length: int,
        direction_order: DirectionOrder,
        accept: Optional[AcceptPath] = None,
        allowed: Optional[Set[Position]] = None,
        prune: Optional[PruneStep] = None,
    ) -> List[Position]:
        """Grow a simple path of exactly ``length`` cells from ``start``.

        Returns ``[]`` when every branch is exhausted, the node budget runs
        out or the deadline passes.
        """

        self.nodes_expanded = 0
        self.exhausted_budget = False
        if length <= 0 or not self._usable(start, allowed):
            return []
        if prune is not None and not prune(start, 1):
            return []
        path = [start]
        visited = {start}
        if self._extend(path, visited, length, direction_order, accept, allowed, prune):
            return list(path)
        return []

    def _extend(
        self,
        path: List[Position],
        visited: Set[Position],
        length: int,
        direction_order: DirectionOrder,
        accept: Optional[AcceptPath],
        allowed: Optional[Set[Position]],
        prune: Optional[PruneStep],
    ) -> bool:
        if len(path) == length:
            return accept is None or accept(path)

        self.nodes_expanded += 1
        if self.nodes_expanded > self.node_budget:
            self.exhausted_budget = True
            return False
        if self.deadline is not None and self.deadline.expired():
            return False

        head = path[-1]
        if not self._reachable_at_least(head, visited, length - len(path), allowed):
            return False

        for dr, dc in direction_order(len(path) - 1, head):
            nxt = (head[0] + dr, head[1] + dc)
            if nxt in visited or not self._usable(nxt, allowed):
                continue
            if not self._linked(head, nxt):
                continue
            if prune is not None and not prune(nxt, len(path) + 1):
                continue
            path.append(nxt)
            visited.add(nxt)
            if self._extend(path, visited, length, direction_order, accept, allowed, prune):
                return True
            path.pop()
            visited.discard(nxt)
            if self.exhausted_budget:
                return False
        return False

    # ------------------------------------------------------------------
    # Best-effort longest path
    # ------------------------------------------------------------------
    def longest_path(
        self,
        length: int,
        allowed: Optional[Set[Position]] = None,
        timeout: Optional[float] = 5.0,
        accept: Optional[AcceptPath] = None,
    ) -> List[Position]:
        """Longest simple path (capped at ``length``) within the time budget.

        Every free start cell is tried in random order. On expiry the best
        path found so far is returned, which may be shorter than requested.
        A full-length path rejected by ``accept`` counts as one cell short.
        """

        deadline = Deadline(timeout)
        starts = [pos for pos in self.grid.free_cells() if allowed is None or pos in allowed]
        self.rng.shuffle(starts)
        best: List[Position] = []
        for start in starts:
            if deadline.expired():
                LOGGER.debug("Longest-path search hit its deadline with %d cells", len(best))
                break
            self.nodes_expanded = 0
            candidate = self._longest_from([start], {start}, length, allowed, deadline, accept)
            if len(candidate) > len(best):
                best = candidate
            if len(best) >= length:
                break
        return best[:length]

    def _longest_from(
        self,
        path: List[Position],
        visited: Set[Position],
        length: int,
        allowed: Optional[Set[Position]],
        deadline: Deadline,
        accept: Optional[AcceptPath] = None,
    ) -> List[Position]:
        if len(path) >= length:
            if accept is None or accept(path):
                return list(path)
            return list(path[:-1])
        if deadline.expired():
            return list(path)
        self.nodes_expanded += 1
        if self.nodes_expanded > self.node_budget:
            return list(path)

        best = list(path)
        head = path[-1]
        neighbors = [
            pos for pos in self.grid.neighbors(*head)
            if pos not in visited and self._usable(pos, allowed) and self._linked(head, pos)
        ]
        self.rng.shuffle(neighbors)
        for nxt in neighbors:
            path.append(nxt)
            visited.add(nxt)
            candidate = self._longest_from(path, visited, length, allowed, deadline, accept)
            path.pop()
            visited.discard(nxt)
            if len(candidate) > len(best):
                best = candidate
            if len(best) >= length:
                break
        return best
