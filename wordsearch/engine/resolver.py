"""Translate raw automaton matches on a line into grid placements."""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from ..core.constants import FAMILY_TAGS
from ..core.models import Coord, FoundWord, Line, Match
from ..utils.logger import get_logger
from .automaton import PatternAutomaton


LOGGER = get_logger(__name__)


class MatchResolver:
    """Maps (pattern id, end offset) matches to deduplicated :class:`FoundWord` values."""

    def __init__(self, automaton: PatternAutomaton) -> None:
        self.automaton = automaton
        self._found: Dict[Tuple[str, Coord, Coord], FoundWord] = {}

    def resolve(self, line: Line, matches: Iterable[Match]) -> List[FoundWord]:
        """Resolve ``matches`` found on ``line`` without touching the result set."""

        forward_tag, reverse_tag = FAMILY_TAGS[line.family]
        resolved: List[FoundWord] = []
        for match in matches:
            pattern = self.automaton.pattern(match.pattern_id)
            end = match.end
            start = end - pattern.length + 1
            if start < 0 or end >= len(line.coords):
                LOGGER.debug("Discarding out-of-range match %s on %s line", match, line.family.value)
                continue
            first, last = line.coords[start], line.coords[end]
            if pattern.is_reverse:
                resolved.append(FoundWord(pattern.word, last, first, reverse_tag))
            else:
                resolved.append(FoundWord(pattern.word, first, last, forward_tag))
        return resolved

    def add(self, found: Iterable[FoundWord]) -> int:
        """Merge ``found`` into the result set; return how many were new."""

        added = 0
        for item in found:
            if item.key in self._found:
                continue
            self._found[item.key] = item
            added += 1
        return added

    def results(self) -> List[FoundWord]:
        return list(self._found.values())

    def clear(self) -> None:
        self._found.clear()
