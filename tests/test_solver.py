import random
import unittest

from wordsearch.core.constants import DIRECTION_STEPS, DirectionTag
from wordsearch.core.exceptions import GridShapeError
from wordsearch.core.models import FoundWord
from wordsearch.engine.automaton import PatternAutomaton
from wordsearch.engine.grid import GridModel
from wordsearch.engine.solver import WordSearchSolver, solve

TAG_STEPS = {
    DirectionTag.HORIZONTAL: (0, 1),
    DirectionTag.HORIZONTAL_REVERSE: (0, -1),
    DirectionTag.VERTICAL: (1, 0),
    DirectionTag.VERTICAL_REVERSE: (-1, 0),
    DirectionTag.DIAGONAL_TL_BR: (1, 1),
    DirectionTag.DIAGONAL_TL_BR_REVERSE: (-1, -1),
    DirectionTag.DIAGONAL_TR_BL: (1, -1),
    DirectionTag.DIAGONAL_TR_BL_REVERSE: (-1, 1),
}


def _brute_force(rows, words):
    height, width = len(rows), len(rows[0])
    expected = set()
    for word in words:
        for r in range(height):
            for c in range(width):
                for dr, dc in DIRECTION_STEPS:
                    cells = [(r + dr * i, c + dc * i) for i in range(len(word))]
                    if not all(0 <= rr < height and 0 <= cc < width for rr, cc in cells):
                        continue
                    if "".join(rows[rr][cc] for rr, cc in cells) == word:
                        expected.add((word, cells[0], cells[-1]))
    return expected


class SolverExampleTests(unittest.TestCase):
    def test_horizontal_forward(self) -> None:
        found = solve(["CATDOG", "XXXXXX"], ["CAT"])
        self.assertEqual(found, [FoundWord("CAT", (0, 0), (0, 2), DirectionTag.HORIZONTAL)])
        self.assertEqual(found[0].direction, DirectionTag.HORIZONTAL)

    def test_horizontal_reverse_reports_canonical_word(self) -> None:
        found = solve(["TAC"], ["cat"])
        self.assertEqual(len(found), 1)
        item = found[0]
        self.assertEqual(item.word, "CAT")
        self.assertEqual(item.start, (0, 2))
        self.assertEqual(item.end, (0, 0))
        self.assertEqual(item.direction, DirectionTag.HORIZONTAL_REVERSE)

    def test_vertical(self) -> None:
        self.assertEqual(
            [(f.start, f.end, f.direction) for f in solve(["DX", "OX", "GX"], ["DOG"])],
            [((0, 0), (2, 0), DirectionTag.VERTICAL)],
        )
        self.assertEqual(
            [(f.start, f.end, f.direction) for f in solve(["GX", "OX", "DX"], ["DOG"])],
            [((2, 0), (0, 0), DirectionTag.VERTICAL_REVERSE)],
        )

    def test_diagonals(self) -> None:
        cases = [
            (["DXX", "XOX", "XXG"], (0, 0), (2, 2), DirectionTag.DIAGONAL_TL_BR),
            (["GXX", "XOX", "XXD"], (2, 2), (0, 0), DirectionTag.DIAGONAL_TL_BR_REVERSE),
            (["XXD", "XOX", "GXX"], (0, 2), (2, 0), DirectionTag.DIAGONAL_TR_BL),
            (["XXG", "XOX", "DXX"], (2, 0), (0, 2), DirectionTag.DIAGONAL_TR_BL_REVERSE),
        ]
        for rows, start, end, tag in cases:
            with self.subTest(tag=tag):
                found = solve(rows, ["DOG"])
                self.assertEqual([(f.word, f.start, f.end, f.direction) for f in found], [("DOG", start, end, tag)])

    def test_non_square_diagonals(self) -> None:
        found = solve(["XXCXX", "XXXAX", "XXXXT"], ["CAT"])
        self.assertEqual([(f.start, f.end) for f in found], [((0, 2), (2, 4))])

        found = solve(["XXX", "XXC", "XAX", "TXX", "XXX"], ["CAT"])
        self.assertEqual([(f.start, f.end, f.direction) for f in found], [((1, 2), (3, 0), DirectionTag.DIAGONAL_TR_BL)])

    def test_word_not_found_is_empty_result(self) -> None:
        self.assertEqual(solve(["ABCD", "EFGH"], ["ZEBRA"]), [])

    def test_duplicate_words_collapse(self) -> None:
        found = solve(["CATX"], ["CAT", "cat", " Cat"])
        self.assertEqual(len(found), 1)

    def test_palindrome_found_in_both_readings(self) -> None:
        found = solve(["ABBA"], ["ABBA"])
        self.assertEqual(
            {(f.start, f.end, f.direction) for f in found},
            {
                ((0, 0), (0, 3), DirectionTag.HORIZONTAL),
                ((0, 3), (0, 0), DirectionTag.HORIZONTAL_REVERSE),
            },
        )

    def test_blank_cells_break_words(self) -> None:
        self.assertEqual(solve(["CA T"], ["CAT"]), [])

    def test_ragged_grid_rejected(self) -> None:
        with self.assertRaises(GridShapeError):
            solve(["ABC", "AB"], ["AB"])

    def test_accepts_prebuilt_automaton_and_grid(self) -> None:
        automaton = PatternAutomaton(["CAT"])
        grid = GridModel.from_rows(["CAT"])
        self.assertEqual(len(WordSearchSolver(grid, automaton).solve()), 1)


class SolverPropertyTests(unittest.TestCase):
    def setUp(self) -> None:
        rng = random.Random(7)
        self.rows = ["".join(rng.choice("ABC") for _ in range(11)) for _ in range(8)]
        self.words = ["AB", "ABC", "CAB", "BB", "ACCA"]

    def test_every_found_word_spells_itself(self) -> None:
        found = solve(self.rows, self.words)
        self.assertTrue(found)
        for item in found:
            spelled = "".join(self.rows[r][c] for r, c in item.cells())
            self.assertEqual(spelled, item.word)
            self.assertIn(item.step, DIRECTION_STEPS)
            self.assertEqual(item.step, TAG_STEPS[item.direction])

    def test_matches_brute_force(self) -> None:
        found = {item.key for item in solve(self.rows, self.words)}
        self.assertEqual(found, _brute_force(self.rows, self.words))

    def test_idempotent(self) -> None:
        first = set(solve(self.rows, self.words))
        second = set(solve(self.rows, self.words))
        self.assertEqual(first, second)

    def test_worker_pool_gives_same_results(self) -> None:
        sequential = solve(self.rows, self.words)
        parallel = solve(self.rows, self.words, workers=4)
        self.assertEqual(sequential, parallel)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
