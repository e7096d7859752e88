"""Word placement strategies for puzzle generation.

Three strategies share one candidate model: a word goes at an anchor cell,
along one of the 8 unit steps, written forward or backward.

- ``RANDOM`` samples candidates per word up to ``max_attempts`` and never
  undoes; words that do not fit are reported individually.
- ``BACKTRACK`` treats the vocabulary as a constraint problem searched with an
  explicit stack of choice points. A word that cannot be placed undoes the
  previous word, which then resumes from its next untried candidate.
- ``EXACT`` hands the whole batch to CP-SAT (see :mod:`.cpsat`).
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, NamedTuple, Optional, Sequence, Tuple

from ..core.constants import DIRECTION_STEPS, Bounds, PlacementStrategy
from ..core.exceptions import InfeasibleError, VocabularyError
from ..core.models import Coord, PlacedWord, placement_cells
from ..utils.logger import get_logger
from .grid import GridModel


LOGGER = get_logger(__name__)


@dataclass
class PlacementConfig:
    """Knobs for the placement search."""

    strategy: PlacementStrategy = PlacementStrategy.RANDOM
    force_intersection: bool = True
    max_attempts: int = 1000
    max_steps: Optional[int] = None
    cpsat_timeout: float = 10.0
    cpsat_workers: int = 1


@dataclass
class PlacementOutcome:
    placed: List[PlacedWord] = field(default_factory=list)
    unplaced: List[str] = field(default_factory=list)
    steps: int = 0
    backtracks: int = 0


class Candidate(NamedTuple):
    anchor: Coord
    step: Coord
    forward: bool

    def cells(self, length: int) -> List[Coord]:
        return placement_cells(length, self.anchor, self.step, self.forward)


def enumerate_candidates(word: str, bounds: Bounds) -> List[Candidate]:
    """Every in-bounds placement of ``word``, one per distinct letter footprint.

    A forward placement along a step and the backward placement along the
    opposite step write identical letters to identical cells; only the first
    of such pairs is kept.
    """

    length = len(word)
    seen: set = set()
    candidates: List[Candidate] = []
    for step in DIRECTION_STEPS:
        for forward in (True, False):
            for row in range(bounds.rows):
                for col in range(bounds.cols):
                    candidate = Candidate((row, col), step, forward)
                    cells = candidate.cells(length)
                    if not (bounds.contains(*cells[0]) and bounds.contains(*cells[-1])):
                        continue
                    footprint: FrozenSet[Tuple[Coord, str]] = frozenset(zip(cells, word))
                    if footprint in seen:
                        continue
                    seen.add(footprint)
                    candidates.append(candidate)
    return candidates


@dataclass
class _ChoicePoint:
    index: int
    candidates: List[Candidate]
    cursor: int = 0
    placed: Optional[PlacedWord] = None


class PlacementEngine:
    """Assign words to cells of a :class:`GridModel` without letter conflicts."""

    def __init__(self, config: Optional[PlacementConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or PlacementConfig()
        self.rng = rng or random.Random()
        self._next_id = 0

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def place(self, grid: GridModel, words: Sequence[str]) -> PlacementOutcome:
        """Place ``words`` in input order, mutating ``grid``."""

        strategy = PlacementStrategy(self.config.strategy)
        LOGGER.info(
            "Placing %d words in %dx%d grid (strategy=%s, force_intersection=%s)",
            len(words),
            grid.rows,
            grid.cols,
            strategy.value,
            self.config.force_intersection,
        )
        if strategy == PlacementStrategy.RANDOM:
            return self._place_randomized(grid, words)
        if strategy == PlacementStrategy.BACKTRACK:
            return self._place_backtracking(grid, words)
        return self._place_exact(grid, words)

    # ------------------------------------------------------------------
    # Randomized placement
    # ------------------------------------------------------------------
    def _place_randomized(self, grid: GridModel, words: Sequence[str]) -> PlacementOutcome:
        outcome = PlacementOutcome()
        for word in words:
            placement = None
            if self._wants_intersection(grid):
                placement = self._place_with_intersection(grid, word, outcome)
            if placement is None:
                placement = self._place_by_sampling(grid, word, outcome)
            if placement is None:
                LOGGER.warning("Could not place word %s", word)
                outcome.unplaced.append(word)
                continue
            outcome.placed.append(placement)
        LOGGER.info(
            "Placed %d/%d words (%d attempts, %d shared cells)",
            len(outcome.placed),
            len(words),
            outcome.steps,
            grid.intersection_count,
        )
        return outcome

    def _place_with_intersection(
        self, grid: GridModel, word: str, outcome: PlacementOutcome
    ) -> Optional[PlacedWord]:
        points: List[Tuple[Coord, int]] = []
        for placed in grid.placed_words.values():
            for i, letter in enumerate(word):
                for j, other in enumerate(placed.word):
                    if letter == other:
                        points.append((placed.cells[j], i))
        self.rng.shuffle(points)

        length = len(word)
        for (row, col), index in points:
            for step in DIRECTION_STEPS:
                for forward in (True, False):
                    offset = index if forward else length - 1 - index
                    anchor = (row - step[0] * offset, col - step[1] * offset)
                    outcome.steps += 1
                    if grid.can_place(word, anchor, step, forward):
                        LOGGER.debug("Intersecting %s at %s via letter %d", word, (row, col), index)
                        return self._commit(grid, word, Candidate(anchor, step, forward))
        return None

    def _place_by_sampling(
        self, grid: GridModel, word: str, outcome: PlacementOutcome
    ) -> Optional[PlacedWord]:
        for _ in range(self.config.max_attempts):
            step = self.rng.choice(DIRECTION_STEPS)
            forward = self.rng.random() < 0.5
            anchor = (self.rng.randrange(grid.rows), self.rng.randrange(grid.cols))
            outcome.steps += 1
            if grid.can_place(word, anchor, step, forward):
                return self._commit(grid, word, Candidate(anchor, step, forward))
        return None

    # ------------------------------------------------------------------
    # Backtracking placement
    # ------------------------------------------------------------------
    def _place_backtracking(self, grid: GridModel, words: Sequence[str]) -> PlacementOutcome:
        outcome = PlacementOutcome()
        if not words:
            return outcome
        pool = self._candidate_pool(grid, words)
        max_steps = self.config.max_steps

        stack: List[_ChoicePoint] = [self._choice_point(grid, 0, words[0], pool[words[0]])]
        while stack:
            point = stack[-1]
            if point.placed is not None:
                grid.remove_word(point.placed.id)
                point.placed = None
                outcome.backtracks += 1

            word = words[point.index]
            while point.cursor < len(point.candidates):
                candidate = point.candidates[point.cursor]
                point.cursor += 1
                if grid.can_place(word, candidate.anchor, candidate.step, candidate.forward):
                    point.placed = self._commit(grid, word, candidate)
                    break

            if point.placed is None:
                LOGGER.debug("Exhausted candidates for %s; backtracking", word)
                stack.pop()
                continue

            outcome.steps += 1
            if max_steps is not None and outcome.steps >= max_steps and len(stack) < len(words):
                placed_count = len(stack)
                self._unwind(grid, stack)
                raise InfeasibleError(
                    f"Placement search stopped after {outcome.steps} steps "
                    f"with {placed_count}/{len(words)} words placed",
                    exhaustive=False,
                    placed_count=placed_count,
                )
            if len(stack) == len(words):
                outcome.placed = [p.placed for p in stack if p.placed is not None]
                LOGGER.info(
                    "Placed all %d words (%d steps, %d backtracks, %d shared cells)",
                    len(words),
                    outcome.steps,
                    outcome.backtracks,
                    grid.intersection_count,
                )
                return outcome
            next_index = point.index + 1
            stack.append(
                self._choice_point(grid, next_index, words[next_index], pool[words[next_index]])
            )

        raise InfeasibleError(
            f"No arrangement of all {len(words)} words fits a {grid.rows}x{grid.cols} grid",
            exhaustive=True,
        )

    def _candidate_pool(self, grid: GridModel, words: Sequence[str]) -> Dict[str, List[Candidate]]:
        pool: Dict[str, List[Candidate]] = {}
        for word in words:
            if word in pool:
                continue
            candidates = enumerate_candidates(word, grid.bounds)
            if not candidates:
                raise VocabularyError(
                    f"Word {word} ({len(word)} letters) cannot fit a {grid.rows}x{grid.cols} grid"
                )
            pool[word] = candidates
        return pool

    def _choice_point(
        self, grid: GridModel, index: int, word: str, candidates: List[Candidate]
    ) -> _ChoicePoint:
        ordered = list(candidates)
        self.rng.shuffle(ordered)
        if self._wants_intersection(grid):
            # Stable sort keeps the shuffle among equally ranked candidates.
            length = len(word)
            ordered.sort(key=lambda c: grid.shared_cells(word, c.cells(length)) == 0)
        return _ChoicePoint(index=index, candidates=ordered)

    def _unwind(self, grid: GridModel, stack: List[_ChoicePoint]) -> None:
        for point in reversed(stack):
            if point.placed is not None:
                grid.remove_word(point.placed.id)
                point.placed = None

    # ------------------------------------------------------------------
    # Exact placement
    # ------------------------------------------------------------------
    def _place_exact(self, grid: GridModel, words: Sequence[str]) -> PlacementOutcome:
        from .cpsat import solve_placements

        outcome = PlacementOutcome()
        if not words:
            return outcome
        assignments = solve_placements(
            grid,
            words,
            force_intersection=self.config.force_intersection,
            timeout=self.config.cpsat_timeout,
            workers=self.config.cpsat_workers,
            rng=self.rng,
        )
        for word, candidate in zip(words, assignments):
            outcome.placed.append(self._commit(grid, word, candidate))
        outcome.steps = len(outcome.placed)
        LOGGER.info(
            "Placed all %d words via CP-SAT (%d shared cells)",
            len(words),
            grid.intersection_count,
        )
        return outcome

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _wants_intersection(self, grid: GridModel) -> bool:
        return self.config.force_intersection and bool(grid.placed_words) and not grid.has_intersection

    def _commit(self, grid: GridModel, word: str, candidate: Candidate) -> PlacedWord:
        placement = PlacedWord(
            id=self._next_id,
            word=word,
            anchor=candidate.anchor,
            step=candidate.step,
            forward=candidate.forward,
        )
        self._next_id += 1
        grid.place_word(placement)
        return placement
