import unittest

from wordsearch.core.constants import LineFamily
from wordsearch.engine.grid import GridModel
from wordsearch.engine.lines import LineExtractor, extract_lines


def _grid(rows: int, cols: int) -> GridModel:
    letters = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    return GridModel.from_rows(
        ["".join(letters[(r * cols + c) % 26] for c in range(cols)) for r in range(rows)]
    )


class LineCoverageTests(unittest.TestCase):
    SHAPES = [(1, 1), (1, 6), (6, 1), (3, 5), (5, 3), (4, 4), (10, 20)]

    def test_each_family_partitions_the_grid(self) -> None:
        for rows, cols in self.SHAPES:
            lines = extract_lines(_grid(rows, cols))
            for family, family_lines in lines.items():
                with self.subTest(shape=(rows, cols), family=family):
                    coords = [cell for line in family_lines for cell in line.coords]
                    self.assertEqual(len(coords), rows * cols)
                    self.assertEqual(len(set(coords)), rows * cols)

    def test_line_counts(self) -> None:
        for rows, cols in self.SHAPES:
            lines = extract_lines(_grid(rows, cols))
            with self.subTest(shape=(rows, cols)):
                self.assertEqual(len(lines[LineFamily.ROWS]), rows)
                self.assertEqual(len(lines[LineFamily.COLUMNS]), cols)
                self.assertEqual(len(lines[LineFamily.DIAGONAL_TL_BR]), rows + cols - 1)
                self.assertEqual(len(lines[LineFamily.DIAGONAL_TR_BL]), rows + cols - 1)

    def test_text_matches_coordinates(self) -> None:
        grid = _grid(4, 7)
        for line in LineExtractor(grid):
            for char, (r, c) in zip(line.text, line.coords):
                self.assertEqual(char, grid.letter(r, c))

    def test_diagonals_of_non_square_grid(self) -> None:
        grid = GridModel.from_rows(["ABC", "DEF"])
        extractor = LineExtractor(grid)
        self.assertEqual(
            [line.text for line in extractor.family(LineFamily.DIAGONAL_TL_BR)],
            ["AE", "D", "BF", "C"],
        )
        self.assertEqual(
            [line.text for line in extractor.family(LineFamily.DIAGONAL_TR_BL)],
            ["CE", "F", "BD", "A"],
        )
        self.assertEqual(
            extractor.family(LineFamily.DIAGONAL_TR_BL)[0].coords, ((0, 2), (1, 1))
        )

    def test_empty_cells_become_spaces(self) -> None:
        grid = GridModel.from_rows(["A B"])
        self.assertEqual(LineExtractor(grid).family(LineFamily.ROWS)[0].text, "A B")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
