import random
import unittest

from wordsearch.core.constants import Bounds, DIRECTION_STEPS, PlacementStrategy
from wordsearch.core.exceptions import InfeasibleError, VocabularyError
from wordsearch.engine.grid import GridModel
from wordsearch.engine.placement import PlacementConfig, PlacementEngine, enumerate_candidates


def _engine(strategy=PlacementStrategy.RANDOM, seed=3, **options) -> PlacementEngine:
    return PlacementEngine(PlacementConfig(strategy=strategy, **options), rng=random.Random(seed))


class CandidateTests(unittest.TestCase):
    def test_two_letter_word_in_single_row(self) -> None:
        candidates = enumerate_candidates("AB", Bounds(1, 2))
        cells = {tuple(zip(c.cells(2), "AB")) for c in candidates}
        self.assertEqual(len(candidates), 2)
        self.assertEqual(cells, {(((0, 0), "A"), ((0, 1), "B")), (((0, 1), "A"), ((0, 0), "B"))})

    def test_oversized_word_has_no_candidates(self) -> None:
        self.assertEqual(enumerate_candidates("ABCDEFGHIJK", Bounds(10, 10)), [])

    def test_candidates_stay_in_bounds(self) -> None:
        bounds = Bounds(3, 4)
        for candidate in enumerate_candidates("CAT", bounds):
            self.assertIn(candidate.step, DIRECTION_STEPS)
            self.assertTrue(all(bounds.contains(r, c) for r, c in candidate.cells(3)))


class RandomPlacementTests(unittest.TestCase):
    def test_places_all_words_without_conflicts(self) -> None:
        grid = GridModel(10, 10)
        words = ["PYTHON", "SEARCH", "GRID", "WORD"]
        outcome = _engine().place(grid, words)
        self.assertEqual([p.word for p in outcome.placed], words)
        self.assertEqual(outcome.unplaced, [])
        for placement in outcome.placed:
            spelled = "".join(grid.letter(r, c) for r, c in placement.cells)
            self.assertEqual(spelled, placement.word)

    def test_same_seed_same_layout(self) -> None:
        words = ["PYTHON", "SEARCH", "GRID", "WORD"]
        first, second = GridModel(8, 8), GridModel(8, 8)
        _engine(seed=11).place(first, words)
        _engine(seed=11).place(second, words)
        self.assertEqual(first.to_rows(), second.to_rows())

    def test_oversized_word_is_reported_unplaced(self) -> None:
        grid = GridModel(10, 10)
        outcome = _engine().place(grid, ["ABCDEFGHIJK", "CAT"])
        self.assertEqual(outcome.unplaced, ["ABCDEFGHIJK"])
        self.assertEqual([p.word for p in outcome.placed], ["CAT"])

    def test_force_intersection_shares_a_cell(self) -> None:
        for seed in range(5):
            with self.subTest(seed=seed):
                grid = GridModel(5, 5)
                _engine(seed=seed).place(grid, ["CAT", "TOP"])
                self.assertTrue(grid.has_intersection)


class BacktrackingPlacementTests(unittest.TestCase):
    def test_fully_crossed_square(self) -> None:
        grid = GridModel(2, 2)
        words = ["AB", "CD", "AC", "BD"]
        outcome = _engine(PlacementStrategy.BACKTRACK).place(grid, words)
        self.assertEqual([p.word for p in outcome.placed], words)
        self.assertEqual(grid.empty_count, 0)
        for placement in outcome.placed:
            self.assertEqual("".join(grid.letter(r, c) for r, c in placement.cells), placement.word)

    def test_exhausted_search_is_exhaustive_and_leaves_grid_empty(self) -> None:
        grid = GridModel(1, 3)
        with self.assertRaises(InfeasibleError) as ctx:
            _engine(PlacementStrategy.BACKTRACK).place(grid, ["AB", "CD"])
        self.assertTrue(ctx.exception.exhaustive)
        self.assertEqual(grid.empty_count, 3)
        self.assertEqual(grid.placed_words, {})

    def test_step_budget_stops_search(self) -> None:
        grid = GridModel(2, 2)
        with self.assertRaises(InfeasibleError) as ctx:
            _engine(PlacementStrategy.BACKTRACK, max_steps=1).place(grid, ["AB", "CD"])
        self.assertFalse(ctx.exception.exhaustive)
        self.assertEqual(ctx.exception.placed_count, 1)
        self.assertEqual(grid.empty_count, 4)

    def test_oversized_word_is_configuration_error(self) -> None:
        with self.assertRaises(VocabularyError):
            _engine(PlacementStrategy.BACKTRACK).place(GridModel(10, 10), ["ABCDEFGHIJK"])

    def test_empty_word_list(self) -> None:
        outcome = _engine(PlacementStrategy.BACKTRACK).place(GridModel(3, 3), [])
        self.assertEqual(outcome.placed, [])

    def test_force_intersection_preferred(self) -> None:
        grid = GridModel(6, 6)
        _engine(PlacementStrategy.BACKTRACK, seed=5).place(grid, ["CAT", "TOP", "PIG"])
        self.assertTrue(grid.has_intersection)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
