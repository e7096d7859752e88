"""Shared helpers for vocabulary normalization."""

from __future__ import annotations

import re
import unicodedata
from typing import Iterable, List

from ..core.exceptions import VocabularyError

WORD_RE = re.compile(r"[^A-Z]")


def clean_word(text: str) -> str:
    """Return the uppercase A-Z letters of ``text``, accents folded away."""

    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text.strip().upper())
    return WORD_RE.sub("", decomposed)


def normalize_vocabulary(words: Iterable[str]) -> List[str]:
    """Normalize every word, keeping input order and duplicates.

    Raises :class:`VocabularyError` for an empty vocabulary or for any entry
    without a single A-Z letter, which would otherwise become a zero-length
    pattern matching everywhere.
    """

    cleaned: List[str] = []
    for raw in words:
        word = clean_word(raw)
        if not word:
            raise VocabularyError(f"Word {raw!r} has no alphabetic characters")
        cleaned.append(word)
    if not cleaned:
        raise VocabularyError("Vocabulary is empty")
    return cleaned


__all__ = ["clean_word", "normalize_vocabulary"]
