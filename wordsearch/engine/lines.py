"""Decomposition of a grid into the straight lines scanned by the solver."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterator, List, Tuple

from ..core.constants import FAMILY_STEPS, LineFamily
from ..core.models import Coord, Line

if TYPE_CHECKING:
    from .grid import GridModel


EMPTY_CHAR = " "


class LineExtractor:
    """Enumerate every maximal line of the four line families.

    Each diagonal family of an R x C grid has R + C - 1 lines: one sweep
    anchored on a vertical border (every row) and one anchored on the top
    border, skipping the corner cell the first sweep already started from.
    """

    def __init__(self, grid: "GridModel") -> None:
        self.grid = grid
        self.bounds = grid.bounds

    def family(self, family: LineFamily) -> List[Line]:
        return [self._trace(family, start) for start in self._starts(family)]

    def all_lines(self) -> Dict[LineFamily, List[Line]]:
        return {family: self.family(family) for family in LineFamily}

    def __iter__(self) -> Iterator[Line]:
        for family in LineFamily:
            yield from self.family(family)

    def _starts(self, family: LineFamily) -> List[Coord]:
        rows, cols = self.bounds.rows, self.bounds.cols
        if family == LineFamily.ROWS:
            return [(r, 0) for r in range(rows)]
        if family == LineFamily.COLUMNS:
            return [(0, c) for c in range(cols)]
        if family == LineFamily.DIAGONAL_TL_BR:
            return [(r, 0) for r in range(rows)] + [(0, c) for c in range(1, cols)]
        return [(r, cols - 1) for r in range(rows)] + [(0, c) for c in range(cols - 2, -1, -1)]

    def _trace(self, family: LineFamily, start: Coord) -> Line:
        dr, dc = FAMILY_STEPS[family]
        row, col = start
        chars: List[str] = []
        coords: List[Tuple[int, int]] = []
        while self.bounds.contains(row, col):
            chars.append(self.grid.letter(row, col) or EMPTY_CHAR)
            coords.append((row, col))
            row += dr
            col += dc
        return Line(family=family, text="".join(chars), coords=tuple(coords))


def extract_lines(grid: "GridModel") -> Dict[LineFamily, List[Line]]:
    return LineExtractor(grid).all_lines()
