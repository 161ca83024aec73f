import unittest

from takuzu.core.constants import CellValue, LaneKind
from takuzu.core.exceptions import DuplicateLaneError
from takuzu.engine.grid import TakuzuGrid
from takuzu.engine.propagation import deduce, propagate, propagate_round, propagate_rounds

ZERO = CellValue.ZERO
ONE = CellValue.ONE

EXAMPLE_4 = ["1 - - -", "- - 0 -", "- 1 - -", "- - - 0"]


def grid_with_first_row(row: str) -> TakuzuGrid:
    width = len(row.split())
    blank = " ".join("-" * width)
    return TakuzuGrid.parse([row] + [blank] * (width - 1))


def first_row(grid: TakuzuGrid) -> str:
    return grid.to_lines()[0]


class PropagationRuleTests(unittest.TestCase):
    def test_saturated_lane_takes_the_other_value(self) -> None:
        grid = grid_with_first_row("0 - 0 -")
        self.assertEqual(propagate_round(grid), 2)
        self.assertEqual(first_row(grid), "0 1 0 1")

    def test_preceding_pair(self) -> None:
        grid = grid_with_first_row("1 1 - - - -")
        self.assertEqual(propagate_round(grid), 1)
        self.assertEqual(first_row(grid), "1 1 0 - - -")

    def test_following_pair(self) -> None:
        grid = grid_with_first_row("- - - - 0 0")
        self.assertEqual(propagate_round(grid), 1)
        self.assertEqual(first_row(grid), "- - - 1 0 0")

    def test_surrounding_pair(self) -> None:
        grid = grid_with_first_row("- 1 - 1 - -")
        self.assertEqual(propagate_round(grid), 1)
        self.assertEqual(first_row(grid), "- 1 0 1 - -")

    def test_columns_are_swept_too(self) -> None:
        grid = TakuzuGrid.parse(["0 - - -", "0 - - -", "- - - -", "- - - -"])
        propagate(grid)
        self.assertEqual([grid[r, 0] for r in range(4)], [ZERO, ZERO, ONE, ONE])

    def test_deduce_returns_none_without_evidence(self) -> None:
        grid = TakuzuGrid.parse(EXAMPLE_4)
        row = grid.lane(LaneKind.ROW, 0)
        self.assertIsNone(deduce(grid, row, 1))


class PropagationPropertyTests(unittest.TestCase):
    def test_fixed_point_is_idempotent(self) -> None:
        grid = TakuzuGrid.parse(["0 0 - - - -", "- - - - - -", "- 1 - - - -",
                                 "- - - 1 - 0", "- - - - - 0", "1 - - - - -"])
        propagate(grid)
        snapshot = grid.clone()
        self.assertEqual(propagate_round(grid), 0)
        self.assertEqual(grid, snapshot)

    def test_propagation_is_monotone(self) -> None:
        grid = TakuzuGrid.parse(["0 0 - - - -", "- - - - - -", "- 1 - - - -",
                                 "- - - 1 - 0", "- - - - - 0", "1 - - - - -"])
        before = grid.clone()
        changed = propagate(grid)
        self.assertGreater(changed, 0)
        self.assertEqual(grid.determined_count, before.determined_count + changed)
        for r in range(before.height):
            for c in range(before.width):
                if before[r, c] is not None:
                    self.assertEqual(grid[r, c], before[r, c])
        self.assertTrue(grid.is_valid())

    def test_rounds_yield_cells_set_per_round(self) -> None:
        grid = TakuzuGrid.parse(["0 - - -", "0 - - -", "- - - -", "- - - -"])
        self.assertEqual(list(propagate_rounds(grid)), [2])

    def test_propagate_totals_the_rounds(self) -> None:
        rows = ["0 0 - - - -", "- - - - - -", "- 1 - - - -",
                "- - - 1 - 0", "- - - - - 0", "1 - - - - -"]
        counts = list(propagate_rounds(TakuzuGrid.parse(rows)))
        self.assertTrue(all(count > 0 for count in counts))
        self.assertEqual(propagate(TakuzuGrid.parse(rows)), sum(counts))

    def test_contradiction_is_raised(self) -> None:
        grid = TakuzuGrid.parse(["0 1 0 -", "0 1 0 -", "- - - -", "- - - -"])
        with self.assertRaises(DuplicateLaneError):
            propagate(grid)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
