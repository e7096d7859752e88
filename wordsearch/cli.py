"""CLI entrypoint for the word search solver and generator."""

from __future__ import annotations

import argparse
import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, List

from .core.constants import PlacementStrategy
from .core.exceptions import WordSearchError
from .engine.generator import AssignmentLimits, GeneratorConfig, PuzzleGenerator
from .engine.solver import solve
from .io.files import read_grid, read_word_list, write_grid
from .utils.logger import configure_logging
from .utils.pretty import (
    highlighted_cells,
    pretty_print_grid,
    print_generation_stats,
    print_solve_summary,
    render_html_report,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Solve and generate word search puzzles",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    solve_parser = sub.add_parser("solve", help="Find every vocabulary word in a grid")
    solve_parser.add_argument("--words", type=Path, required=True, help="Word list file, one word per line")
    solve_parser.add_argument("--grid", type=Path, required=True, help="Grid file, one row per line")
    solve_parser.add_argument("--html", type=Path, help="Optional path to an HTML report")
    solve_parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    solve_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Scan the four line families on this many threads",
    )

    gen_parser = sub.add_parser("generate", help="Build a puzzle from a word list")
    gen_parser.add_argument("--words", type=Path, required=True, help="Word list file, one word per line")
    gen_parser.add_argument("--rows", type=int, required=True, help="Grid height in cells")
    gen_parser.add_argument("--cols", type=int, required=True, help="Grid width in cells")
    gen_parser.add_argument(
        "--strategy",
        type=str,
        choices=[s.value for s in PlacementStrategy],
        default=PlacementStrategy.RANDOM.value,
        help="Placement search strategy",
    )
    gen_parser.add_argument(
        "--no-force-intersection",
        action="store_true",
        help="Do not try to make two words share a letter",
    )
    gen_parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    gen_parser.add_argument(
        "--max-attempts",
        type=int,
        default=1000,
        help="Random placement attempts per word (random strategy)",
    )
    gen_parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Placement budget for the backtracking strategy",
    )
    gen_parser.add_argument(
        "--timeout",
        type=float,
        default=10.0,
        help="CP-SAT time limit in seconds (exact strategy)",
    )
    gen_parser.add_argument(
        "--strict",
        action="store_true",
        help="Enforce 10-20 rows/cols, at most 10 words of 4-8 letters",
    )
    gen_parser.add_argument("--puzzle-out", type=Path, help="Write the filled puzzle grid here")
    gen_parser.add_argument("--solution-out", type=Path, help="Write the solution grid here, blanks as .")
    gen_parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    return parser


def run_solve(args: argparse.Namespace) -> Dict[str, Any]:
    words = read_word_list(args.words)
    rows = read_grid(args.grid)

    started = time.perf_counter()
    found = solve(rows, words, workers=args.workers)
    elapsed_ms = (time.perf_counter() - started) * 1000

    if args.html:
        args.html.write_text(render_html_report(rows, found, elapsed_ms=elapsed_ms), encoding="utf-8")
    if not args.output:
        pretty_print_grid(rows, label="--- Found cells ---", highlight=highlighted_cells(found))
        print()
        print_solve_summary(words, found, elapsed_ms=elapsed_ms)
    return {
        "rows": len(rows),
        "cols": len(rows[0]),
        "found": [item.to_dict() for item in found],
        "elapsed_ms": elapsed_ms,
    }


def run_generate(args: argparse.Namespace) -> Dict[str, Any]:
    words = read_word_list(args.words)
    config = GeneratorConfig(
        rows=args.rows,
        cols=args.cols,
        strategy=PlacementStrategy(args.strategy),
        force_intersection=not args.no_force_intersection,
        seed=args.seed,
        max_attempts=args.max_attempts,
        max_steps=args.max_steps,
        cpsat_timeout=args.timeout,
        limits=AssignmentLimits() if args.strict else None,
    )
    result = PuzzleGenerator(config).generate(words)

    if args.puzzle_out:
        write_grid(args.puzzle_out, result.puzzle)
    if args.solution_out:
        write_grid(args.solution_out, [row.replace(" ", ".") for row in result.solution])
    if not args.output:
        print_generation_stats(result)
    return {
        "puzzle": result.puzzle,
        "solution": result.solution,
        "placements": [placement.to_dict() for placement in result.placements],
        "unplaced": result.unplaced,
        "seed": result.seed,
    }


def main(argv: List[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    try:
        if args.command == "solve":
            payload = run_solve(args)
        else:
            payload = run_generate(args)
    except (OSError, WordSearchError) as exc:
        parser.exit(2, f"error: {exc}\n")

    if args.output:
        args.output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


if __name__ == "__main__":  # pragma: no cover
    main()
