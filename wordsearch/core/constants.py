"""Shared constants and enumerations for the word search engine."""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


ALPHABET = string.ascii_uppercase


class LineFamily(str, Enum):
    """The four families of straight lines that cover the grid."""

    ROWS = "ROWS"
    COLUMNS = "COLUMNS"
    DIAGONAL_TL_BR = "DIAGONAL_TL_BR"
    DIAGONAL_TR_BL = "DIAGONAL_TR_BL"


class DirectionTag(str, Enum):
    """Reading direction reported for a found word."""

    HORIZONTAL = "HORIZONTAL"
    HORIZONTAL_REVERSE = "HORIZONTAL_REVERSE"
    VERTICAL = "VERTICAL"
    VERTICAL_REVERSE = "VERTICAL_REVERSE"
    DIAGONAL_TL_BR = "DIAGONAL_TL_BR"
    DIAGONAL_TL_BR_REVERSE = "DIAGONAL_TL_BR_REVERSE"
    DIAGONAL_TR_BL = "DIAGONAL_TR_BL"
    DIAGONAL_TR_BL_REVERSE = "DIAGONAL_TR_BL_REVERSE"

    @property
    def is_reverse(self) -> bool:
        return self.value.endswith("_REVERSE")


class PlacementStrategy(str, Enum):
    """How the generator searches for word placements."""

    RANDOM = "random"
    BACKTRACK = "backtrack"
    EXACT = "exact"


# (forward tag, reverse tag) per family
FAMILY_TAGS: Dict[LineFamily, Tuple[DirectionTag, DirectionTag]] = {
    LineFamily.ROWS: (DirectionTag.HORIZONTAL, DirectionTag.HORIZONTAL_REVERSE),
    LineFamily.COLUMNS: (DirectionTag.VERTICAL, DirectionTag.VERTICAL_REVERSE),
    LineFamily.DIAGONAL_TL_BR: (DirectionTag.DIAGONAL_TL_BR, DirectionTag.DIAGONAL_TL_BR_REVERSE),
    LineFamily.DIAGONAL_TR_BL: (DirectionTag.DIAGONAL_TR_BL, DirectionTag.DIAGONAL_TR_BL_REVERSE),
}

# (row step, col step) of each family's forward reading direction
FAMILY_STEPS: Dict[LineFamily, Tuple[int, int]] = {
    LineFamily.ROWS: (0, 1),
    LineFamily.COLUMNS: (1, 0),
    LineFamily.DIAGONAL_TL_BR: (1, 1),
    LineFamily.DIAGONAL_TR_BL: (1, -1),
}

DIRECTION_STEPS: Tuple[Tuple[int, int], ...] = (
    (0, 1),
    (0, -1),
    (1, 0),
    (-1, 0),
    (1, 1),
    (-1, -1),
    (1, -1),
    (-1, 1),
)


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    @property
    def cell_count(self) -> int:
        return self.rows * self.cols
