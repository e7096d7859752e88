"""Grid representation and helper utilities."""

from __future__ import annotations

import copy
import random
from typing import Dict, Iterable, List, Optional, Sequence, Set, Union

from ..core.constants import ALPHABET, Bounds
from ..core.exceptions import GridShapeError, PlacementConflictError
from ..core.models import Coord, PlacedWord, placement_cells
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

GridRows = Sequence[Union[str, Sequence[Optional[str]]]]

BLANK_CHARS = {" ", "."}


class GridModel:
    """A rows x cols letter matrix where ``None`` marks an empty cell.

    Every cell also records the ids of the placed words that claim it, so a
    word can be removed without erasing letters other words still need.
    """

    def __init__(self, rows: int, cols: int) -> None:
        if rows <= 0 or cols <= 0:
            raise GridShapeError(f"Grid dimensions must be positive, got {rows}x{cols}")
        self.bounds = Bounds(rows=rows, cols=cols)
        self.cells: List[List[Optional[str]]] = [[None] * cols for _ in range(rows)]
        self.owners: List[List[Set[int]]] = [[set() for _ in range(cols)] for _ in range(rows)]
        self.placed_words: Dict[int, PlacedWord] = {}
        self._filled_count = 0
        self._shared_count = 0

    @classmethod
    def from_rows(cls, rows: GridRows) -> "GridModel":
        """Build a grid from equal-length rows of letters.

        Spaces and ``.`` (or ``None`` entries) become empty cells; any other
        non A-Z character is rejected.
        """

        if not rows:
            raise GridShapeError("Grid has no rows")
        width = len(rows[0])
        for index, row in enumerate(rows):
            if len(row) != width:
                raise GridShapeError(
                    f"Row {index} has length {len(row)}, expected {width}"
                )
        grid = cls(len(rows), width)
        for r, row in enumerate(rows):
            for c, char in enumerate(row):
                if char is None or char in BLANK_CHARS:
                    continue
                letter = char.upper()
                if len(letter) != 1 or letter not in ALPHABET:
                    raise GridShapeError(f"Illegal grid character {char!r} at ({r},{c})")
                grid.cells[r][c] = letter
                grid._filled_count += 1
        return grid

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def rows(self) -> int:
        return self.bounds.rows

    @property
    def cols(self) -> int:
        return self.bounds.cols

    def letter(self, row: int, col: int) -> Optional[str]:
        return self.cells[row][col]

    def is_empty(self, row: int, col: int) -> bool:
        return self.cells[row][col] is None

    @property
    def filled_ratio(self) -> float:
        return self._filled_count / self.bounds.cell_count

    @property
    def empty_count(self) -> int:
        return self.bounds.cell_count - self._filled_count

    @property
    def intersection_count(self) -> int:
        """Number of cells claimed by two or more placed words."""
        return self._shared_count

    @property
    def has_intersection(self) -> bool:
        return self._shared_count > 0

    def can_place(
        self,
        word: str,
        anchor: Coord,
        step: Coord,
        forward: bool = True,
        allow_stacking: bool = False,
    ) -> bool:
        """Check bounds and letter agreement for a candidate placement.

        Unless ``allow_stacking`` is set, the candidate may not cover exactly
        the cells of an already placed word.
        """

        cells = placement_cells(len(word), anchor, step, forward)
        writes_new = False
        for index, (row, col) in enumerate(cells):
            if not self.bounds.contains(row, col):
                return False
            existing = self.cells[row][col]
            if existing is None:
                writes_new = True
            elif existing != word[index]:
                return False
        if writes_new or allow_stacking:
            return True
        common = set.intersection(*(self.owners[row][col] for row, col in cells))
        return not any(len(self.placed_words[pid].cells) == len(cells) for pid in common)

    def shared_cells(self, word: str, cells: Iterable[Coord]) -> int:
        """Count cells that already hold the letter ``word`` needs there."""
        return sum(
            1
            for index, (row, col) in enumerate(cells)
            if self.cells[row][col] == word[index]
        )

    # ------------------------------------------------------------------
    # Word placement
    # ------------------------------------------------------------------
    def place_word(self, placement: PlacedWord) -> None:
        word = placement.word
        for index, (row, col) in enumerate(placement.cells):
            if not self.bounds.contains(row, col):
                raise PlacementConflictError(f"Word {word} extends outside grid at {(row, col)}")
            existing = self.cells[row][col]
            if existing is not None and existing != word[index]:
                raise PlacementConflictError(
                    f"Letter conflict for {word} at {(row, col)}: {existing} != {word[index]}"
                )

        # All checks passed, mutate grid
        for index, (row, col) in enumerate(placement.cells):
            owners = self.owners[row][col]
            if self.cells[row][col] is None:
                self._filled_count += 1
            if len(owners) == 1:
                self._shared_count += 1
            self.cells[row][col] = word[index]
            owners.add(placement.id)
        self.placed_words[placement.id] = placement

    def remove_word(self, placement_id: int) -> None:
        """Undo a placement, erasing only cells no other placed word claims."""

        placement = self.placed_words.pop(placement_id, None)
        if placement is None:
            return
        for row, col in placement.cells:
            owners = self.owners[row][col]
            owners.discard(placement_id)
            if len(owners) == 1:
                self._shared_count -= 1
            if not owners:
                self.cells[row][col] = None
                self._filled_count -= 1

    # ------------------------------------------------------------------
    # Fill & export
    # ------------------------------------------------------------------
    def fill_empty(self, rng: random.Random, alphabet: str = ALPHABET) -> int:
        """Fill every empty cell with a uniformly random letter."""
        filled = 0
        for row in self.cells:
            for c, letter in enumerate(row):
                if letter is None:
                    row[c] = rng.choice(alphabet)
                    filled += 1
        self._filled_count += filled
        LOGGER.debug("Filled %d empty cells with random letters", filled)
        return filled

    def to_rows(self, blank: str = " ") -> List[str]:
        return ["".join(letter or blank for letter in row) for row in self.cells]

    def copy(self) -> "GridModel":
        return copy.deepcopy(self)

    def __repr__(self) -> str:
        return f"GridModel({self.rows}x{self.cols}, placed={len(self.placed_words)})"
