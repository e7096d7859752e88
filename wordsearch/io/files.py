"""Plain-text word list and grid files."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List

from ..core.exceptions import GridShapeError, VocabularyError
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

WHITESPACE_RE = re.compile(r"\s+")


def read_word_list(path: Path | str) -> List[str]:
    """Read words from a file, one entry per line. Blank lines and # comments are skipped."""
    entries: List[str] = []
    for line in Path(path).read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(line)
    if not entries:
        raise VocabularyError(f"Word list file is empty: {path}")
    LOGGER.debug("Loaded %d words from %s", len(entries), path)
    return entries


def read_grid(path: Path | str) -> List[str]:
    """Read a letter grid, one row per line with letters adjacent.

    Whitespace inside a line is dropped and letters are uppercased. Rows of
    unequal length are rejected.
    """
    rows: List[str] = []
    for line in Path(path).read_text(encoding="utf-8").splitlines():
        row = WHITESPACE_RE.sub("", line).upper()
        if row:
            rows.append(row)
    if not rows:
        raise GridShapeError(f"Grid file is empty: {path}")
    width = len(rows[0])
    for index, row in enumerate(rows):
        if len(row) != width:
            raise GridShapeError(
                f"{path}: row {index + 1} has {len(row)} letters, expected {width}"
            )
    LOGGER.debug("Loaded %dx%d grid from %s", len(rows), width, path)
    return rows


def write_grid(path: Path | str, rows: Iterable[str]) -> Path:
    """Write grid rows, one per line. Blank cells stay as spaces."""
    target = Path(path)
    target.write_text("".join(f"{row}\n" for row in rows), encoding="utf-8")
    LOGGER.info("Grid written to %s", target)
    return target
