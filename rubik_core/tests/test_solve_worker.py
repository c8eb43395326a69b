# rubik_core/tests/test_solve_worker.py
import unittest

from PySide6.QtCore import QCoreApplication

from rubik_core.app.solve_worker import SolveWorker
from rubik_core.core import CubeModel, Face, apply_moves
from rubik_core.errors import UnsolvableInput
from rubik_core.solve import IDDFSSolver, LayerByLayerSolver
from rubik_core.solve.strategy import SolverStrategy


class _Broken(SolverStrategy):
    name = "broken"

    def _solve(self, working, should_cancel, on_stage):
        raise RuntimeError("boom")


class TestSolveWorker(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.app = QCoreApplication.instance() or QCoreApplication([])

    def _connect(self, w):
        got = {"stages": [], "solution": None, "failed": None, "cancelled": 0, "error": None}
        w.stage_update.connect(got["stages"].append)
        w.finished_solution.connect(lambda sol: got.__setitem__("solution", sol))
        w.failed.connect(lambda exc: got.__setitem__("failed", exc))
        w.cancelled.connect(lambda: got.__setitem__("cancelled", got["cancelled"] + 1))
        w.error.connect(lambda msg: got.__setitem__("error", msg))
        return got

    def test_emits_solution(self):
        c = CubeModel()
        c.apply_sequence("R U R' U' F2")
        w = SolveWorker(c, LayerByLayerSolver())
        got = self._connect(w)
        w.run()
        self.assertIsNotNone(got["solution"])
        self.assertTrue(apply_moves(c, got["solution"]).is_solved())
        self.assertEqual(len(got["stages"]), 7)

    def test_works_on_a_copy(self):
        c = CubeModel()
        c.apply_sequence("R U")
        w = SolveWorker(c, IDDFSSolver(max_depth=3))
        c.reset()
        got = self._connect(w)
        w.run()
        self.assertEqual(len(got["solution"]), 2)

    def test_cancel_before_start(self):
        c = CubeModel()
        c.apply_sequence("R U")
        w = SolveWorker(c, IDDFSSolver(max_depth=3))
        got = self._connect(w)
        w.cancel()
        w.run()
        self.assertEqual(got["cancelled"], 1)
        self.assertIsNone(got["solution"])
        self.assertEqual(got["stages"], [])

    def test_invalid_cube_emits_failed(self):
        c = CubeModel()
        c.state[Face.U][7], c.state[Face.F][1] = c.state[Face.F][1], c.state[Face.U][7]
        w = SolveWorker(c)
        got = self._connect(w)
        w.run()
        self.assertIsInstance(got["failed"], UnsolvableInput)
        self.assertIsNone(got["solution"])

    def test_unexpected_error_emits_traceback(self):
        c = CubeModel()
        c.apply_sequence("R")
        w = SolveWorker(c, _Broken())
        got = self._connect(w)
        with self.assertLogs("rubik_core.app.solve_worker", level="ERROR"):
            w.run()
        self.assertIn("RuntimeError", got["error"])
        self.assertIsNone(got["solution"])


if __name__ == "__main__":
    unittest.main()
