"""CP-SAT word placement using OR-Tools."""

from __future__ import annotations

import random
from collections import defaultdict
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from ortools.sat.python import cp_model

from ..core.exceptions import InfeasibleError, VocabularyError
from ..core.models import Coord
from ..utils.logger import get_logger
from .grid import GridModel
from .placement import Candidate, enumerate_candidates

LOGGER = get_logger(__name__)


def solve_placements(
    grid: GridModel,
    words: Sequence[str],
    force_intersection: bool = True,
    timeout: float = 10.0,
    workers: int = 1,
    rng: Optional[random.Random] = None,
) -> List[Candidate]:
    """Choose one placement per word so that no two words disagree on a cell.

    Args:
        grid: Grid whose existing letters must be respected.
        words: Normalized words, in input order.
        force_intersection: Require at least one cell shared by two words.
        timeout: Solver time limit in seconds.
        workers: CP-SAT search workers. One worker keeps results reproducible.
        rng: Source of the candidate ordering and the solver seed.

    Returns:
        The chosen candidate for each word, aligned with ``words``.

    Raises:
        VocabularyError: A word fits nowhere in a grid of this size.
        InfeasibleError: No assignment exists (``exhaustive``) or none was
            found before the time limit.
    """
    rng = rng or random.Random()
    model = cp_model.CpModel()

    # ------------------------------------------------------------------
    # Step 1: One boolean per candidate placement
    # ------------------------------------------------------------------
    word_candidates: List[List[Tuple[Candidate, cp_model.IntVar]]] = []
    letter_vars: Dict[Tuple[Coord, str], cp_model.IntVar] = {}
    cover: Dict[Coord, List[cp_model.IntVar]] = defaultdict(list)
    footprints: Dict[FrozenSet[Coord], List[Tuple[int, cp_model.IntVar]]] = defaultdict(list)

    for wi, word in enumerate(words):
        static = enumerate_candidates(word, grid.bounds)
        if not static:
            raise VocabularyError(
                f"Word {word} ({len(word)} letters) cannot fit a {grid.rows}x{grid.cols} grid"
            )
        usable = [c for c in static if grid.can_place(word, c.anchor, c.step, c.forward)]
        if not usable:
            raise InfeasibleError(
                f"Word {word} conflicts with every position in the grid", exhaustive=True
            )
        rng.shuffle(usable)

        entries: List[Tuple[Candidate, cp_model.IntVar]] = []
        for k, candidate in enumerate(usable):
            chosen = model.new_bool_var(f"w{wi}_c{k}")
            cells = candidate.cells(len(word))
            for index, cell in enumerate(cells):
                key = (cell, word[index])
                if key not in letter_vars:
                    letter_vars[key] = model.new_bool_var(f"L_{cell[0]}_{cell[1]}_{word[index]}")
                model.add_implication(chosen, letter_vars[key])
                cover[cell].append(chosen)
            footprints[frozenset(cells)].append((wi, chosen))
            entries.append((candidate, chosen))
        model.add_exactly_one([chosen for _, chosen in entries])
        word_candidates.append(entries)

    # ------------------------------------------------------------------
    # Step 2: At most one letter per cell
    # ------------------------------------------------------------------
    per_cell: Dict[Coord, List[cp_model.IntVar]] = defaultdict(list)
    for (cell, _letter), var in letter_vars.items():
        per_cell[cell].append(var)
    for cell, variables in per_cell.items():
        if len(variables) > 1:
            model.add_at_most_one(variables)

    # Two different words may not occupy the exact same cells
    for group in footprints.values():
        if len({wi for wi, _ in group}) > 1:
            model.add_at_most_one([var for _, var in group])

    # ------------------------------------------------------------------
    # Step 3: Optional intersection requirement
    # ------------------------------------------------------------------
    if force_intersection and len(words) > 1:
        shared_flags = []
        for (row, col), variables in cover.items():
            if len(variables) < 2:
                continue
            flag = model.new_bool_var(f"X_{row}_{col}")
            model.add(cp_model.LinearExpr.sum(variables) >= 2).only_enforce_if(flag)
            shared_flags.append(flag)
        if not shared_flags:
            raise InfeasibleError("No cell can be shared by two words", exhaustive=True)
        model.add_bool_or(shared_flags)

    # ------------------------------------------------------------------
    # Step 4: Solve
    # ------------------------------------------------------------------
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.num_workers = workers
    solver.parameters.random_seed = rng.randrange(1 << 30)

    LOGGER.info(
        "CP-SAT: %d words, %d candidates, %d letter vars, solving (timeout=%0.1fs)...",
        len(words),
        sum(len(entries) for entries in word_candidates),
        len(letter_vars),
        timeout,
    )

    status = solver.solve(model)

    if status == cp_model.INFEASIBLE:
        LOGGER.warning("CP-SAT: proven infeasible")
        raise InfeasibleError(
            f"No arrangement of all {len(words)} words fits a {grid.rows}x{grid.cols} grid",
            exhaustive=True,
        )
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        LOGGER.warning("CP-SAT: no solution found (status=%s)", solver.status_name(status))
        raise InfeasibleError(
            f"CP-SAT found no placement within {timeout:.1f}s", exhaustive=False
        )

    LOGGER.info("CP-SAT: solution found in %.2fs", solver.wall_time)

    # ------------------------------------------------------------------
    # Step 5: Extract solution
    # ------------------------------------------------------------------
    result: List[Candidate] = []
    for entries in word_candidates:
        for candidate, chosen in entries:
            if solver.boolean_value(chosen):
                result.append(candidate)
                break
    return result
