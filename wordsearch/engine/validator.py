"""Deterministic integrity checks for generated puzzles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ..core.constants import ALPHABET
from ..core.exceptions import ValidationError
from ..core.models import Coord, PlacedWord
from ..utils.logger import get_logger
from .grid import GridModel
from .solver import solve


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class GridValidator:
    """Checks that placements agree with each other and with the grid."""

    def validate(
        self,
        grid: GridModel,
        placements: Sequence[PlacedWord],
        filled: Optional[GridModel] = None,
    ) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_letters_valid(grid)
            self._check_overlaps(placements)
            self._check_spelled(grid, placements)
            if filled is not None:
                self._check_rediscovered(filled, placements)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def _check_letters_valid(self, grid: GridModel) -> None:
        for r in range(grid.rows):
            for c in range(grid.cols):
                letter = grid.letter(r, c)
                if letter is not None and letter not in ALPHABET:
                    raise ValidationError(f"Invalid letter '{letter}' at ({r},{c})")

    def _check_overlaps(self, placements: Sequence[PlacedWord]) -> None:
        claimed: Dict[Coord, Tuple[str, str]] = {}
        for placement in placements:
            for index, cell in enumerate(placement.cells):
                letter = placement.word[index]
                previous = claimed.get(cell)
                if previous is not None and previous[0] != letter:
                    raise ValidationError(
                        f"Words {previous[1]} and {placement.word} disagree at {cell}: "
                        f"{previous[0]} != {letter}"
                    )
                claimed[cell] = (letter, placement.word)

    def _check_spelled(self, grid: GridModel, placements: Sequence[PlacedWord]) -> None:
        for placement in placements:
            spelled = "".join(grid.letter(r, c) or " " for r, c in placement.cells)
            if spelled != placement.word:
                raise ValidationError(
                    f"Grid spells '{spelled}' where {placement.word} was placed at {placement.start}"
                )

    def _check_rediscovered(self, filled: GridModel, placements: Sequence[PlacedWord]) -> None:
        if not placements:
            return
        found = {item.key for item in solve(filled, [p.word for p in placements])}
        for placement in placements:
            if (placement.word, placement.start, placement.end) not in found:
                raise ValidationError(
                    f"Solver did not find {placement.word} at {placement.start}->{placement.end}"
                )
