"""Data models supporting the strands grid generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .constants import GRID_COLS, GRID_ROWS

Position = Tuple[int, int]


@dataclass
class Cell:
    """A single grid cell holding one lowercase letter."""

    letter: Optional[str] = None
    is_spangram: bool = False

    def is_empty(self) -> bool:
        return self.letter is None

    def to_jsonable(self) -> Dict[str, Any]:
        return {"letter": self.letter or "", "is_spangram": self.is_spangram}


@dataclass
class WordPlacement:
    """The ordered cells a word was laid on."""

    word: str
    path: List[Position]
    is_spangram: bool = False
    strategy: Optional[str] = None

    @property
    def complete(self) -> bool:
        return len(self.path) == len(self.word)


@dataclass
class GenerateInput:
    """Raw puzzle data as supplied by the caller."""

    words: List[str]
    title: str = ""
    theme: str = ""
    author: str = ""


def empty_cells(rows: int = GRID_ROWS, cols: int = GRID_COLS) -> List[List[Cell]]:
    return [[Cell() for _ in range(cols)] for _ in range(rows)]


@dataclass
class GenerateResult:
    """Finished grid plus the diagnostics shown to the user."""

    grid: List[List[Cell]] = field(default_factory=empty_cells)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    letters_used: int = 0
    spangram_remaining: int = 0
    need_message: str = ""
    placements: List[WordPlacement] = field(default_factory=list)
    strategy: Optional[str] = None
    attempts: int = 0
    seed: Optional[int] = None

    @property
    def ok(self) -> bool:
        return not self.errors

    def letters(self) -> List[str]:
        return ["".join(cell.letter or "." for cell in row) for row in self.grid]

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "grid": [[cell.to_jsonable() for cell in row] for row in self.grid],
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "letters_used": self.letters_used,
            "spangram_remaining": self.spangram_remaining,
            "need_message": self.need_message,
            "placements": [
                {
                    "word": placement.word,
                    "path": [list(pos) for pos in placement.path],
                    "is_spangram": placement.is_spangram,
                }
                for placement in self.placements
            ],
            "strategy": self.strategy,
            "attempts": self.attempts,
            "seed": self.seed,
        }
