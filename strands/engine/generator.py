"""Main strands grid generator orchestration.

Each attempt builds a fresh grid and runs three phases:
  1. Spangram: place the distinguished word so it spans the grid.
  2. Words: pack the remaining words into the free cells.
  3. Coverage: fill any leftover cells and validate the finished grid.

Failed attempts are thrown away whole. When the attempt budget runs out the
straight-line packer and then the CP-SAT tiler get a chance before the
generator gives up.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from ..core.constants import Bounds, PackingMode, SpangramStrategy
from ..core.exceptions import CoverageError, PlacementError, StrandsError, ValidationError
from ..core.models import GenerateInput, GenerateResult, Position
from ..data.validation import validate_input
from ..utils.logger import get_logger
from .gaps import GapFiller
from .grid import StrandsGrid
from .pathfinder import DEFAULT_NODE_BUDGET, Deadline
from .placement import WordPlacer
from .solver import ExactTiler
from .spangram import SpangramPlacer
from .straight import StraightLinePacker
from .validator import GridValidator


LOGGER = get_logger(__name__)

PLACEMENT_EXHAUSTED_ERROR = "Unable to create varied grid with complete coverage."
INTERNAL_ERROR = "Internal error: generator produced an inconsistent grid."


@dataclass
class GeneratorConfig:
    seed: Optional[int] = None
    max_attempts: int = 100
    spangram_attempts: int = 200
    word_attempts: int = 300
    spangram_strategy: Optional[SpangramStrategy] = None
    packing_mode: PackingMode = PackingMode.HEURISTIC
    require_span: bool = True
    strict_spangram: bool = True
    allow_spill: bool = False
    longest_path_timeout: float = 5.0
    node_budget: int = DEFAULT_NODE_BUDGET
    time_budget_seconds: Optional[float] = 60.0
    use_straight_fallback: bool = True
    use_exact_fallback: bool = True
    exact_timeout_seconds: float = 10.0

    def bounds(self) -> Bounds:
        return Bounds()


@dataclass
class AttemptReport:
    attempts: int = 0
    placement_failures: int = 0
    invariant_failures: int = 0

    @property
    def only_invariant_failures(self) -> bool:
        return self.attempts > 0 and self.invariant_failures == self.attempts


class StrandsGenerator:
    """High-level orchestrator: validation, retried attempts, fallbacks."""

    def __init__(self, config: Optional[GeneratorConfig] = None) -> None:
        self.config = config or GeneratorConfig()
        self.rng = random.Random(self.config.seed)
        self.validator = GridValidator(
            require_span=self.config.require_span,
            require_word_paths=not self.config.allow_spill,
        )

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self, data: GenerateInput) -> GenerateResult:
        validation = validate_input(data, strict_spangram=self.config.strict_spangram)
        result = GenerateResult(
            errors=list(validation.errors),
            warnings=list(validation.warnings),
            letters_used=validation.letters_used,
            spangram_remaining=validation.spangram_remaining,
            need_message=validation.need_message,
            seed=self.config.seed,
        )
        if not validation.ok:
            LOGGER.warning("Input rejected: %s", "; ".join(validation.errors))
            return result

        words = validation.words
        report = AttemptReport()
        outcome = self._run_attempts(words, report)
        if outcome is None:
            outcome = self._run_fallbacks(words, report)
        if outcome is None:
            error = INTERNAL_ERROR if report.only_invariant_failures else PLACEMENT_EXHAUSTED_ERROR
            LOGGER.error("Giving up after %d attempts: %s", report.attempts, error)
            result.errors.append(error)
            result.attempts = report.attempts
            return result

        grid, strategy = outcome
        result.grid = grid.cells
        result.placements = list(grid.placements)
        result.strategy = strategy
        result.attempts = report.attempts
        LOGGER.info("Grid generated with strategy %s after %d attempts", strategy, report.attempts)
        return result

    # ------------------------------------------------------------------
    # Retry controller
    # ------------------------------------------------------------------
    def _run_attempts(
        self, words: Sequence[str], report: AttemptReport
    ) -> Optional[Tuple[StrandsGrid, str]]:
        deadline = Deadline(self.config.time_budget_seconds)
        for attempt in range(1, self.config.max_attempts + 1):
            if deadline.expired():
                LOGGER.warning(
                    "Time budget of %.1fs exhausted after %d attempts", deadline.seconds, attempt - 1
                )
                break
            LOGGER.info("Generation attempt %s/%s", attempt, self.config.max_attempts)
            report.attempts = attempt
            attempt_rng = random.Random(self.rng.randint(0, 1_000_000))
            try:
                return self.attempt(words, attempt_rng, deadline)
            except PlacementError as exc:
                report.placement_failures += 1
                LOGGER.warning("Generation attempt failed: %s", exc)
            except (CoverageError, ValidationError) as exc:
                report.invariant_failures += 1
                LOGGER.warning("Generation attempt produced an inconsistent grid: %s", exc)
        return None

    def attempt(
        self, words: Sequence[str], rng: random.Random, deadline: Optional[Deadline] = None
    ) -> Tuple[StrandsGrid, str]:
        """One full, independent try; raises on any failed phase."""

        grid = StrandsGrid(self.config.bounds())
        spangram, others = words[0], list(words[1:])

        placer = SpangramPlacer(
            grid,
            rng,
            attempts=self.config.spangram_attempts,
            require_span=self.config.require_span,
            node_budget=self.config.node_budget,
            deadline=deadline,
        )
        strategy = SpangramStrategy(self.config.spangram_strategy or placer.choose_strategy())
        placer.place(spangram, strategy, remaining_lengths=[len(word) for word in others])

        word_placer = WordPlacer(
            grid,
            rng,
            attempts=self.config.word_attempts,
            node_budget=self.config.node_budget,
            longest_path_timeout=self.config.longest_path_timeout,
            deadline=deadline,
        )
        pool: List[str] = []
        if self.config.packing_mode == PackingMode.PARTITION:
            _, pool = word_placer.place_partitioned(others, allow_spill=self.config.allow_spill)
        else:
            word_placer.place_all(others)

        GapFiller(rng).fill(grid, pool)
        if grid.used_count != grid.bounds.capacity:
            raise CoverageError(f"{grid.used_count}/{grid.bounds.capacity} cells covered")
        self._validate(grid, words)
        return grid, strategy.value

    # ------------------------------------------------------------------
    # Fallbacks
    # ------------------------------------------------------------------
    def _run_fallbacks(
        self, words: Sequence[str], report: AttemptReport
    ) -> Optional[Tuple[StrandsGrid, str]]:
        packers = []
        if self.config.use_straight_fallback:
            packers.append(("straight_line", StraightLinePacker(
                self.config.bounds(), self.rng, require_span=self.config.require_span,
            )))
        if self.config.use_exact_fallback:
            packers.append(("exact", ExactTiler(
                self.config.bounds(), self.rng,
                require_span=self.config.require_span,
                timeout=self.config.exact_timeout_seconds,
            )))

        for name, packer in packers:
            LOGGER.info("Falling back to %s packer", name)
            paths = packer.solve(words)
            if not paths:
                continue
            try:
                grid = self.assemble(words, paths, strategy=name)
                self._validate(grid, words)
            except StrandsError as exc:
                report.invariant_failures += 1
                report.attempts += 1
                LOGGER.warning("Fallback %s produced an inconsistent grid: %s", name, exc)
                continue
            return grid, name
        return None

    def assemble(
        self, words: Sequence[str], paths: Sequence[Sequence[Position]], strategy: Optional[str] = None
    ) -> StrandsGrid:
        """Build a grid from one path per word (spangram first)."""

        grid = StrandsGrid(self.config.bounds())
        for index, (word, path) in enumerate(zip(words, paths)):
            grid.place_path(word, path, is_spangram=index == 0, strategy=strategy)
        return grid

    def _validate(self, grid: StrandsGrid, words: Sequence[str]) -> None:
        validation = self.validator.validate(grid, words)
        if not validation.ok:
            raise ValidationError(f"Grid validation failed: {validation.messages}")


def generate(
    words: Sequence[str],
    title: str = "",
    theme: str = "",
    author: str = "",
    config: Optional[GeneratorConfig] = None,
    **overrides,
) -> GenerateResult:
    """Validate ``words`` (spangram first) and build a full grid for them.

    Keyword ``overrides`` replace fields of ``config`` (or of the default
    configuration), e.g. ``generate(words, seed=7, max_attempts=20)``.
    """

    config = config or GeneratorConfig()
    if overrides:
        config = replace(config, **overrides)
    data = GenerateInput(words=list(words), title=title, theme=theme, author=author)
    return StrandsGenerator(config).generate(data)


__all__ = [
    "GeneratorConfig",
    "StrandsGenerator",
    "generate",
    "PLACEMENT_EXHAUSTED_ERROR",
    "INTERNAL_ERROR",
]
