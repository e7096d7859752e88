"""Data models shared by the solver and the generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Tuple

from .constants import DirectionTag, LineFamily

Coord = Tuple[int, int]


@dataclass(frozen=True)
class Pattern:
    """A search string registered with the automaton."""

    id: int
    text: str
    word: str
    is_reverse: bool

    @property
    def length(self) -> int:
        return len(self.text)


class Match(NamedTuple):
    """A pattern recognised in a scanned sequence, ending at ``end``."""

    pattern_id: int
    end: int


@dataclass(frozen=True)
class Line:
    """One maximal straight line of the grid with its cell map."""

    family: LineFamily
    text: str
    coords: Tuple[Coord, ...]

    def __len__(self) -> int:
        return len(self.text)


@dataclass(frozen=True)
class FoundWord:
    """A word located in the grid.

    ``start`` holds the word's first letter and ``end`` its last, so walking
    from start to end by :attr:`step` spells ``word``. Identity ignores the
    direction tag.
    """

    word: str
    start: Coord
    end: Coord
    direction: DirectionTag = field(compare=False)

    @property
    def start_row(self) -> int:
        return self.start[0]

    @property
    def start_col(self) -> int:
        return self.start[1]

    @property
    def end_row(self) -> int:
        return self.end[0]

    @property
    def end_col(self) -> int:
        return self.end[1]

    @property
    def step(self) -> Coord:
        return (_sign(self.end[0] - self.start[0]), _sign(self.end[1] - self.start[1]))

    @property
    def key(self) -> Tuple[str, Coord, Coord]:
        return (self.word, self.start, self.end)

    def cells(self) -> List[Coord]:
        dr, dc = self.step
        return [(self.start[0] + dr * i, self.start[1] + dc * i) for i in range(len(self.word))]

    def to_dict(self) -> dict:
        return {
            "word": self.word,
            "start": list(self.start),
            "end": list(self.end),
            "direction": self.direction.value,
        }


@dataclass
class PlacedWord:
    """A word committed to the grid by the placement engine.

    With ``forward`` the word's letters run from ``anchor`` along ``step``;
    otherwise the word is written reversed along ``step``, ending at
    ``anchor``.
    """

    id: int
    word: str
    anchor: Coord
    step: Coord
    forward: bool = True
    _cells: Optional[List[Coord]] = field(default=None, repr=False, compare=False)

    @property
    def cells(self) -> List[Coord]:
        """Grid cells in word-letter order."""
        if self._cells is None:
            self._cells = placement_cells(len(self.word), self.anchor, self.step, self.forward)
        return self._cells

    @property
    def start(self) -> Coord:
        return self.cells[0]

    @property
    def end(self) -> Coord:
        return self.cells[-1]

    def to_dict(self) -> dict:
        return {
            "word": self.word,
            "anchor": list(self.anchor),
            "step": list(self.step),
            "forward": self.forward,
            "start": list(self.start),
            "end": list(self.end),
        }


def placement_cells(length: int, anchor: Coord, step: Coord, forward: bool) -> List[Coord]:
    row, col = anchor
    dr, dc = step
    cells: List[Coord] = []
    for index in range(length):
        offset = index if forward else length - 1 - index
        cells.append((row + dr * offset, col + dc * offset))
    return cells


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)
