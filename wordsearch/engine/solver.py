"""Locate every vocabulary word in a letter grid.

The four line families are scanned independently with one shared automaton;
scans only read the grid, so they may run on a worker pool. Results are
merged in a fixed family order through value-based deduplication, which makes
the output independent of scheduling.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Union

from ..core.constants import LineFamily
from ..core.models import FoundWord
from ..utils.logger import get_logger
from .automaton import PatternAutomaton
from .grid import GridModel, GridRows
from .lines import LineExtractor
from .resolver import MatchResolver


LOGGER = get_logger(__name__)


class WordSearchSolver:
    """Scan rows, columns and both diagonal families of a grid for a vocabulary."""

    def __init__(
        self,
        grid: Union[GridModel, GridRows],
        vocabulary: Union[PatternAutomaton, Iterable[str]],
        workers: Optional[int] = None,
    ) -> None:
        self.grid = grid if isinstance(grid, GridModel) else GridModel.from_rows(grid)
        self.automaton = (
            vocabulary if isinstance(vocabulary, PatternAutomaton) else PatternAutomaton(vocabulary)
        )
        self.workers = workers
        self.extractor = LineExtractor(self.grid)

    def solve(self) -> List[FoundWord]:
        resolver = MatchResolver(self.automaton)
        families = list(LineFamily)
        if self.workers and self.workers > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                per_family = list(executor.map(self._scan_family, families))
        else:
            per_family = [self._scan_family(family) for family in families]

        for family, found in zip(families, per_family):
            added = resolver.add(found)
            LOGGER.debug("%s: %d matches, %d new", family.value, len(found), added)

        results = resolver.results()
        LOGGER.info(
            "Found %d placements of %d words in %dx%d grid",
            len(results),
            len(self.automaton.words),
            self.grid.rows,
            self.grid.cols,
        )
        return results

    def _scan_family(self, family: LineFamily) -> List[FoundWord]:
        resolver = MatchResolver(self.automaton)
        found: List[FoundWord] = []
        for line in self.extractor.family(family):
            found.extend(resolver.resolve(line, self.automaton.search(line.text)))
        return found


def solve(
    grid: Union[GridModel, GridRows],
    vocabulary: Union[PatternAutomaton, Iterable[str]],
    workers: Optional[int] = None,
) -> List[FoundWord]:
    """Return every distinct placement of every vocabulary word in ``grid``."""

    return WordSearchSolver(grid, vocabulary, workers=workers).solve()
