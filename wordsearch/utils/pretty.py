"""Pretty-print and report helpers for word search grids."""

from __future__ import annotations

import html
import sys
from collections import Counter
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Set

from ..core.models import Coord, FoundWord
from ..data.normalization import clean_word

if TYPE_CHECKING:
    from ..engine.generator import GenerationResult


def highlighted_cells(found: Iterable[FoundWord]) -> Set[Coord]:
    """Cells covered by any found word, walking start to end inclusive."""
    cells: Set[Coord] = set()
    for item in found:
        cells.update(item.cells())
    return cells


def format_grid(rows: Sequence[str], highlight: Optional[Set[Coord]] = None) -> str:
    width = len(rows[0]) if rows else 0
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r, row in enumerate(rows):
        symbols = []
        for c, letter in enumerate(row):
            if highlight is not None and (r, c) not in highlight:
                letter = "." if letter.strip() else letter
            symbols.append(letter)
        row_render = " ".join(f"{symbol:>2}" for symbol in symbols)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def pretty_print_grid(
    rows: Sequence[str],
    *,
    label: str | None = None,
    highlight: Optional[Set[Coord]] = None,
    stream=None,
) -> None:
    """Print the grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(rows, highlight), file=stream)


def print_solve_summary(
    vocabulary: Sequence[str],
    found: Sequence[FoundWord],
    *,
    elapsed_ms: Optional[float] = None,
    stream=None,
) -> None:
    """Print per-word found/not-found status and placements."""

    stream = stream or sys.stdout
    counts = Counter(item.word for item in found)
    words = [clean_word(word) for word in vocabulary]
    hits = sum(1 for word in dict.fromkeys(words) if counts[word])

    print("--- Results ---", file=stream)
    print(f"  Words found:   {hits} / {len(set(words))}", file=stream)
    if elapsed_ms is not None:
        print(f"  Solve time:    {elapsed_ms:.3f} ms", file=stream)
    print(file=stream)
    for word in dict.fromkeys(words):
        status = f"FOUND x{counts[word]}" if counts[word] else "NOT FOUND"
        print(f"  {word:<15} {status}", file=stream)
    if found:
        print(file=stream)
        for item in found:
            print(
                f"  {item.word:<15} ({item.start_row},{item.start_col}) -> "
                f"({item.end_row},{item.end_col})  {item.direction.value}",
                file=stream,
            )


def print_generation_stats(result: GenerationResult, *, stream=None) -> None:
    """Print solution grid, puzzle grid and placement stats."""

    stream = stream or sys.stdout
    pretty_print_grid(result.solution, label="--- Solution ---", stream=stream)
    print(file=stream)
    pretty_print_grid(result.puzzle, label="--- Puzzle ---", stream=stream)
    print(file=stream)
    print("--- Words ---", file=stream)
    print(f"  Placed:        {len(result.placements)}", file=stream)
    for placement in result.placements:
        print(
            f"    {placement.word:<12} {placement.start} -> {placement.end}",
            file=stream,
        )
    if result.unplaced:
        print(f"  Unplaced:      {', '.join(result.unplaced)}", file=stream)
    if result.seed is not None:
        print(file=stream)
        print(f"Seed: {result.seed}", file=stream)


def render_html_report(
    rows: Sequence[str],
    found: Sequence[FoundWord],
    *,
    elapsed_ms: Optional[float] = None,
    title: str = "Word Search Results",
) -> str:
    """Render found words as a table plus the grid with their cells highlighted."""

    marked = highlighted_cells(found)
    parts: List[str] = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        '<meta charset="utf-8">',
        f"<title>{html.escape(title)}</title>",
        "<style>",
        "table.grid td { width: 1.6em; height: 1.6em; text-align: center; font-family: monospace; }",
        "table.grid td.hit { background: #ffe066; font-weight: bold; }",
        "table.words td, table.words th { padding: 0.2em 0.8em; }",
        "</style>",
        "</head>",
        "<body>",
        f"<h1>{html.escape(title)}</h1>",
    ]
    if elapsed_ms is not None:
        parts.append(f"<p>Execution time: {elapsed_ms:.3f} ms</p>")

    parts.append('<table class="words">')
    parts.append("<tr><th>Word</th><th>Start</th><th>End</th><th>Direction</th></tr>")
    for item in found:
        parts.append(
            "<tr>"
            f"<td>{html.escape(item.word)}</td>"
            f"<td>({item.start_row}, {item.start_col})</td>"
            f"<td>({item.end_row}, {item.end_col})</td>"
            f"<td>{item.direction.value}</td>"
            "</tr>"
        )
    parts.append("</table>")

    parts.append('<table class="grid">')
    for r, row in enumerate(rows):
        cells = []
        for c, letter in enumerate(row):
            css = ' class="hit"' if (r, c) in marked else ""
            cells.append(f"<td{css}>{html.escape(letter)}</td>")
        parts.append("<tr>" + "".join(cells) + "</tr>")
    parts.append("</table>")
    parts.extend(["</body>", "</html>"])
    return "\n".join(parts) + "\n"
