"""Word search puzzle generation.

Two phases:
  1. Placement: lay the vocabulary into an empty grid with the configured
     :class:`PlacementStrategy`.
  2. Fill: give every remaining empty cell a uniformly random letter.

The solution grid is captured between the two phases.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from ..core.constants import PlacementStrategy
from ..core.exceptions import GridShapeError, InfeasibleError, ValidationError, VocabularyError
from ..core.models import PlacedWord
from ..data.normalization import normalize_vocabulary
from ..utils.logger import get_logger
from .grid import GridModel
from .placement import PlacementConfig, PlacementEngine
from .validator import GridValidator


LOGGER = get_logger(__name__)


@dataclass
class AssignmentLimits:
    """Size limits of the classic classroom puzzle format."""

    min_dim: int = 10
    max_dim: int = 20
    max_words: int = 10
    min_word: int = 4
    max_word: int = 8

    def check(self, words: Sequence[str], rows: int, cols: int) -> None:
        for name, value in (("rows", rows), ("cols", cols)):
            if not self.min_dim <= value <= self.max_dim:
                raise GridShapeError(
                    f"{name} must be between {self.min_dim} and {self.max_dim}, got {value}"
                )
        if len(words) > self.max_words:
            raise VocabularyError(f"At most {self.max_words} words allowed, got {len(words)}")
        for word in words:
            if not self.min_word <= len(word) <= self.max_word:
                raise VocabularyError(
                    f"Word {word} must have {self.min_word}-{self.max_word} letters"
                )


@dataclass
class GeneratorConfig:
    rows: int
    cols: int
    strategy: PlacementStrategy = PlacementStrategy.RANDOM
    force_intersection: bool = True
    seed: Optional[int] = None
    max_attempts: int = 1000
    max_steps: Optional[int] = None
    retry_limit: int = 3
    cpsat_timeout: float = 10.0
    validate: bool = True
    limits: Optional[AssignmentLimits] = None

    def to_placement_config(self) -> PlacementConfig:
        return PlacementConfig(
            strategy=PlacementStrategy(self.strategy),
            force_intersection=self.force_intersection,
            max_attempts=self.max_attempts,
            max_steps=self.max_steps,
            cpsat_timeout=self.cpsat_timeout,
        )


@dataclass
class GenerationResult:
    puzzle: List[str]
    solution: List[str]
    placements: List[PlacedWord]
    unplaced: List[str] = field(default_factory=list)
    seed: Optional[int] = None
    attempts: int = 1

    @property
    def placed_words(self) -> List[str]:
        return [placement.word for placement in self.placements]


class PuzzleGenerator:
    """High-level orchestrator: placement, then random fill."""

    def __init__(self, config: GeneratorConfig, validator: Optional[GridValidator] = None) -> None:
        if config.rows <= 0 or config.cols <= 0:
            raise GridShapeError(
                f"Grid dimensions must be positive, got {config.rows}x{config.cols}"
            )
        self.config = config
        self.rng = random.Random(config.seed)
        self.validator = validator or GridValidator()

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self, vocabulary: Iterable[str]) -> GenerationResult:
        words = normalize_vocabulary(vocabulary)
        if self.config.limits is not None:
            self.config.limits.check(words, self.config.rows, self.config.cols)

        retry_limit = max(1, self.config.retry_limit)
        for attempt in range(1, retry_limit + 1):
            LOGGER.info("Generation attempt %s/%s", attempt, retry_limit)
            grid = GridModel(self.config.rows, self.config.cols)
            engine = PlacementEngine(
                self.config.to_placement_config(),
                rng=random.Random(self.rng.randrange(1 << 32)),
            )
            try:
                outcome = engine.place(grid, words)
            except InfeasibleError as exc:
                if exc.exhaustive or attempt == retry_limit:
                    raise
                LOGGER.warning("Generation attempt failed: %s", exc)
                continue

            solution = grid.to_rows(blank=" ")
            filled = grid.copy()
            filled.fill_empty(self.rng)
            if self.config.validate:
                validation = self.validator.validate(grid, outcome.placed, filled=filled)
                if not validation.ok:
                    raise ValidationError(f"Grid validation failed: {validation.messages}")

            LOGGER.info(
                "Puzzle generation completed with %d/%d words placed",
                len(outcome.placed),
                len(words),
            )
            return GenerationResult(
                puzzle=filled.to_rows(),
                solution=solution,
                placements=outcome.placed,
                unplaced=outcome.unplaced,
                seed=self.config.seed,
                attempts=attempt,
            )

        raise InfeasibleError(f"No placement found after {retry_limit} attempts")


def generate(
    vocabulary: Iterable[str],
    rows: int,
    cols: int,
    force_intersection: bool = True,
    **options,
) -> GenerationResult:
    """Generate a puzzle; ``options`` are further :class:`GeneratorConfig` fields."""

    config = GeneratorConfig(rows=rows, cols=cols, force_intersection=force_intersection, **options)
    return PuzzleGenerator(config).generate(vocabulary)
