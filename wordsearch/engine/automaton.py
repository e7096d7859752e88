"""Multi-pattern matcher used to scan grid lines for the whole vocabulary.

Every word is registered twice, as written and reversed, so a single
left-to-right pass over a line reports the word in both reading directions.
States live in parallel lists indexed by state number: ``_children`` holds
the forward edges, ``_fail`` the failure links and ``_output`` the pattern
ids recognised at each state (already including those inherited through the
failure chain).
"""

from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List, Sequence

from ..core.models import Match, Pattern
from ..data.normalization import normalize_vocabulary
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

ROOT = 0


def _is_letter(char: str) -> bool:
    return "A" <= char <= "Z"


def _fold(char: str) -> str:
    # ASCII only; str.upper can change length or map non-ASCII into A-Z
    return chr(ord(char) - 32) if "a" <= char <= "z" else char


class PatternAutomaton:
    """Aho-Corasick automaton over forward and reversed vocabulary words."""

    def __init__(self, words: Iterable[str]) -> None:
        self.words: List[str] = normalize_vocabulary(words)
        self.patterns: List[Pattern] = []
        self._children: List[Dict[str, int]] = [{}]
        self._fail: List[int] = [ROOT]
        self._output: List[List[int]] = [[]]

        for word in self.words:
            self._insert(word, word, is_reverse=False)
            self._insert(word[::-1], word, is_reverse=True)
        self._build_failure_links()
        LOGGER.debug(
            "Automaton built: %d words, %d patterns, %d states",
            len(self.words),
            len(self.patterns),
            len(self._children),
        )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    def _insert(self, text: str, word: str, is_reverse: bool) -> None:
        pattern_id = len(self.patterns)
        letters = "".join(char for char in text if _is_letter(char))
        self.patterns.append(Pattern(id=pattern_id, text=letters, word=word, is_reverse=is_reverse))

        state = ROOT
        for char in letters:
            nxt = self._children[state].get(char)
            if nxt is None:
                nxt = len(self._children)
                self._children.append({})
                self._fail.append(ROOT)
                self._output.append([])
                self._children[state][char] = nxt
            state = nxt
        self._output[state].append(pattern_id)

    def _build_failure_links(self) -> None:
        queue: deque = deque()
        for child in self._children[ROOT].values():
            self._fail[child] = ROOT
            queue.append(child)

        while queue:
            state = queue.popleft()
            for char, child in self._children[state].items():
                queue.append(child)
                fallback = self._fail[state]
                while fallback != ROOT and char not in self._children[fallback]:
                    fallback = self._fail[fallback]
                target = self._children[fallback].get(char, ROOT)
                self._fail[child] = target
                self._output[child].extend(self._output[target])

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------
    def search(self, sequence: str) -> List[Match]:
        """Return every pattern occurrence in ``sequence`` ordered by end offset.

        ASCII letters match case-insensitively; any other character resets
        the scan to the root state. Offsets index ``sequence`` itself.
        """

        matches: List[Match] = []
        state = ROOT
        for offset, char in enumerate(sequence):
            char = _fold(char)
            if not _is_letter(char):
                state = ROOT
                continue
            while state != ROOT and char not in self._children[state]:
                state = self._fail[state]
            state = self._children[state].get(char, ROOT)
            for pattern_id in self._output[state]:
                matches.append(Match(pattern_id, offset))
        return matches

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def pattern(self, pattern_id: int) -> Pattern:
        return self.patterns[pattern_id]

    def is_reverse(self, pattern_id: int) -> bool:
        return self.patterns[pattern_id].is_reverse

    @property
    def state_count(self) -> int:
        return len(self._children)

    def failure_link(self, state: int) -> int:
        return self._fail[state]

    def outputs(self, state: int) -> Sequence[int]:
        return tuple(self._output[state])

    def walk(self, text: str) -> int:
        """Follow trie edges for ``text`` from the root, returning the state or -1."""
        state = ROOT
        for char in text:
            nxt = self._children[state].get(_fold(char))
            if nxt is None:
                return -1
            state = nxt
        return state


def build_automaton(vocabulary: Iterable[str]) -> PatternAutomaton:
    return PatternAutomaton(vocabulary)
