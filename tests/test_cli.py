import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from typing import List, Tuple
from unittest import mock

from ortools.sat.python import cp_model

import main
from takuzu.engine.grid import TakuzuGrid
from takuzu.io.reader import load_grid

EXAMPLE_4 = "# sample\n1 - - -\n- - 0 -\n- 1 - -\n- - - 0\n"
# Rows 0, 2 and 4 compete for two completions; only branching exposes it.
PIGEONHOLE_8 = ("0 1 1 0 0 1 - -\n" + "- " * 7 + "-\n") * 3 + ("- " * 7 + "-\n") * 2


class MainTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmpdir = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write(self, text: str) -> Path:
        path = self.tmpdir / "puzzle.txt"
        path.write_text(text, encoding="utf-8")
        return path

    def _run(self, argv: List[str]) -> Tuple[int, str]:
        stdout = io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(io.StringIO()):
            code = main.main(argv)
        return code, stdout.getvalue()

    def test_solves_and_prints_input_then_solution(self) -> None:
        code, out = self._run([str(self._write(EXAMPLE_4))])
        self.assertEqual(code, 0)
        lines = out.splitlines()
        self.assertEqual(lines[0], "Input:")
        self.assertEqual(lines[1:5], ["1 - - -", "- - 0 -", "- 1 - -", "- - - 0"])
        self.assertEqual(lines[5], "Solution:")
        solved = TakuzuGrid.parse(lines[6:10])
        self.assertTrue(solved.is_solved())

    def test_json_output(self) -> None:
        output = self.tmpdir / "result.json"
        code, _ = self._run([str(self._write(EXAMPLE_4)), "--output", str(output), "--stats"])
        self.assertEqual(code, 0)
        payload = json.loads(output.read_text(encoding="utf-8"))
        self.assertEqual(payload["status"], "solved")
        self.assertEqual(payload["input"][0], ["1", None, None, None])
        self.assertEqual(len(payload["solution"]), 4)
        self.assertIn("branches", payload["stats"])

    def test_cpsat_backend(self) -> None:
        code, out = self._run([str(self._write(EXAMPLE_4)), "--backend", "cpsat"])
        self.assertEqual(code, 0)
        self.assertIn("Solution:", out)

    def test_parse_error_exit_code(self) -> None:
        code, _ = self._run([str(self._write("1 0 x -\n"))])
        self.assertEqual(code, 4)

    def test_invalid_grid_exit_code(self) -> None:
        code, _ = self._run([str(self._write("0 0 0 1\n- - - -\n- - - -\n- - - -\n"))])
        self.assertEqual(code, 3)

    def test_no_solution_exit_code_and_payload(self) -> None:
        output = self.tmpdir / "result.json"
        puzzle = self._write(PIGEONHOLE_8)
        code, out = self._run([str(puzzle), "--output", str(output)])
        self.assertEqual(code, 1)
        self.assertNotIn("Solution:", out)
        payload = json.loads(output.read_text(encoding="utf-8"))
        self.assertEqual(payload["status"], "no_solution")
        self.assertIsNone(payload["solution"])

    def test_contradiction_before_branching_is_invalid_grid(self) -> None:
        output = self.tmpdir / "result.json"
        puzzle = self._write("0 1 0 -\n0 1 0 -\n- - - -\n- - - -\n")
        code, _ = self._run([str(puzzle), "--output", str(output)])
        self.assertEqual(code, 3)
        payload = json.loads(output.read_text(encoding="utf-8"))
        self.assertEqual(payload["status"], "invalid_grid")

    def test_cpsat_time_limit_exit_code(self) -> None:
        output = self.tmpdir / "result.json"
        puzzle = self._write(EXAMPLE_4)
        with mock.patch.object(cp_model.CpSolver, "solve", return_value=cp_model.UNKNOWN):
            code, _ = self._run([str(puzzle), "--backend", "cpsat", "--output", str(output)])
        self.assertEqual(code, 5)
        payload = json.loads(output.read_text(encoding="utf-8"))
        self.assertEqual(payload["status"], "search_limit")

    def test_stats_report_propagation_rounds(self) -> None:
        code, out = self._run([str(self._write(EXAMPLE_4)), "--stats"])
        self.assertEqual(code, 0)
        self.assertIn("--- Search ---", out)
        self.assertRegex(out, r"Propagated: +\d+ cells in \d+ rounds")

    def test_search_limit_exit_code(self) -> None:
        puzzle = self._write("- - - -\n- - - -\n- - - -\n- - - -\n")
        code, _ = self._run([str(puzzle), "--max-branches", "0"])
        self.assertEqual(code, 5)

    def test_load_grid_reads_file(self) -> None:
        grid = load_grid(self._write(EXAMPLE_4))
        self.assertEqual((grid.height, grid.width), (4, 4))
        self.assertEqual(grid.to_lines()[0], "1 - - -")

    def test_missing_file(self) -> None:
        code, _ = self._run([str(self.tmpdir / "missing.txt")])
        self.assertEqual(code, main.EXIT_UNREADABLE)

    def test_search_options_rejected_with_cpsat(self) -> None:
        with self.assertRaises(SystemExit):
            self._run([str(self._write(EXAMPLE_4)), "--backend", "cpsat", "--no-heuristics"])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
