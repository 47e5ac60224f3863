"""Shared constants and enumerations for the strands grid generator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


GRID_ROWS = 8
GRID_COLS = 6
CAPACITY = GRID_ROWS * GRID_COLS
MIN_SPANGRAM_LENGTH = 6

ALPHABET = "abcdefghijklmnopqrstuvwxyz"


class SpangramStrategy(str, Enum):
    """Shapes the spangram search is biased towards."""

    DIAGONAL_SWEEP = "diagonal_sweep"
    SPIRAL = "spiral"
    ZIGZAG = "zigzag"
    BORDER_SNAKE = "border_snake"
    CENTER_EXPLOSION = "center_explosion"
    CORNER_CURVE = "corner_curve"
    RANDOM_WALK = "random_walk"
    BFS_SPAN = "bfs_span"


class WordStrategy(str, Enum):
    """Start-cell and direction heuristics for the non-spangram words."""

    COMPLEMENT_SPANGRAM = "complement_spangram"
    CORNER_FILL = "corner_fill"
    SCATTERED_RANDOM = "scattered_random"
    CLUSTER_BREAK = "cluster_break"
    DIRECTIONAL_SWEEP = "directional_sweep"
    GAP_BRIDGING = "gap_bridging"


class PackingMode(str, Enum):
    """How the non-spangram words are packed into the free cells."""

    HEURISTIC = "heuristic"
    PARTITION = "partition"


class SpanAxis(str, Enum):
    """Pair of opposite grid sides a spangram connects."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


ORTHOGONAL_STEPS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))
DIAGONAL_STEPS: Tuple[Tuple[int, int], ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))
ALL_STEPS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
)


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int = GRID_ROWS
    cols: int = GRID_COLS

    @property
    def capacity(self) -> int:
        return self.rows * self.cols

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_border(self, row: int, col: int) -> bool:
        return row in (0, self.rows - 1) or col in (0, self.cols - 1)

    def is_corner(self, row: int, col: int) -> bool:
        return row in (0, self.rows - 1) and col in (0, self.cols - 1)
