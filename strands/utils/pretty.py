"""Pretty-print helpers for strands grids."""

from __future__ import annotations

import sys
from collections import Counter
from typing import List, Sequence

from ..core.models import Cell, GenerateResult


def cell_symbol(cell: Cell) -> str:
    if cell.letter is None:
        return "."
    return cell.letter.upper() if cell.is_spangram else cell.letter


def format_grid(cells: Sequence[Sequence[Cell]]) -> str:
    """Render rows of cells with column and row headers; spangram in caps."""

    width = len(cells[0]) if cells else 0
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r, row in enumerate(cells):
        row_render = " ".join(f"{cell_symbol(cell):>2}" for cell in row)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def pretty_print_grid(cells: Sequence[Sequence[Cell]], *, label: str | None = None, stream=None) -> None:
    """Print the grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(cells), file=stream)


def print_result_stats(result: GenerateResult, *, stream=None) -> None:
    """Print grid + word stats and diagnostics for a generation result."""

    stream = stream or sys.stdout
    label = f"Strategy: {result.strategy}" if result.strategy else None
    pretty_print_grid(result.grid, label=label, stream=stream)

    print(file=stream)
    print("--- Letters ---", file=stream)
    print(f"  Used:          {result.letters_used}", file=stream)
    print(f"  Status:        {result.need_message}", file=stream)
    if result.spangram_remaining:
        print(f"  Spangram short by {result.spangram_remaining}", file=stream)

    if result.placements:
        lengths: List[int] = [len(p.word) for p in result.placements if not p.is_spangram]
        spangram = next((p for p in result.placements if p.is_spangram), None)
        print(file=stream)
        print("--- Words ---", file=stream)
        if spangram is not None:
            print(f"  Spangram:      {spangram.word.upper()} ({len(spangram.word)})", file=stream)
        print(f"  Theme words:   {len(lengths)}", file=stream)
        if lengths:
            dist_parts = [f"{l}:{c}" for l, c in sorted(Counter(lengths).items())]
            print(f"  Length range:  {min(lengths)}-{max(lengths)}", file=stream)
            print(f"  Distribution:  {' '.join(dist_parts)}", file=stream)
        print(f"  Strategy:      {result.strategy} ({result.attempts} attempts)", file=stream)

    for title, messages in (("Errors", result.errors), ("Warnings", result.warnings)):
        if messages:
            print(file=stream)
            print(f"--- {title} ---", file=stream)
            for msg in messages:
                print(f"  {msg}", file=stream)

    if result.seed is not None:
        print(file=stream)
        print(f"Seed: {result.seed}", file=stream)
