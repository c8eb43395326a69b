# rubik_core/tests/test_solver.py
import unittest

from rubik_core.core import Color, CubeModel, Face, apply_moves
from rubik_core.errors import (
    InvalidEdgeOrientation,
    NonUniqueCenters,
    SolveCancelled,
    SolverError,
    UnsolvableInput,
)
from rubik_core.logic.scramble import scrambled_model
from rubik_core.solve import (
    IDDFSSolver,
    LayerByLayerSolver,
    get_solver,
    iddfs_solve,
    solve,
)
from rubik_core.solve.strategy import SolverStrategy


class TestLayerByLayerSolver(unittest.TestCase):
    def test_solved_returns_empty(self):
        self.assertEqual(solve(CubeModel()), [])

    def test_scramble_20_is_solved(self):
        solver = LayerByLayerSolver()
        for seed in range(5):
            c = scrambled_model(20, seed=seed)
            sol = solver.solve(c)
            self.assertTrue(apply_moves(c, sol).is_solved(), seed)

    def test_short_scramble(self):
        c = CubeModel()
        c.apply_sequence("R U R' U'")
        sol = solve(c)
        c.apply_sequence(sol)
        self.assertTrue(c.is_solved())

    def test_input_is_not_mutated(self):
        c = scrambled_model(20, seed=42)
        before = c.to_hashable()
        solve(c)
        self.assertEqual(before, c.to_hashable())

    def test_other_color_scheme(self):
        c = CubeModel.from_dict({
            "U": "YYYYYYYYY",
            "D": "WWWWWWWWW",
            "L": "RRRRRRRRR",
            "R": "OOOOOOOOO",
            "F": "GGGGGGGGG",
            "B": "BBBBBBBBB",
        })
        c.apply_sequence("F R U' L2 B D' R2 U F'")
        sol = solve(c)
        self.assertTrue(apply_moves(c, sol).is_solved())

    def test_output_is_simplified(self):
        sol = solve(scrambled_model(20, seed=9))
        for a, b in zip(sol, sol[1:]):
            self.assertNotEqual(a.turn, b.turn)

    def test_reports_stages(self):
        stages = []
        solve(scrambled_model(20, seed=1), on_stage=stages.append)
        self.assertEqual(stages[0], "cross")
        self.assertEqual(stages[-1], "last_layer_edge_permutation")
        self.assertEqual(len(stages), 7)


class TestInvalidInput(unittest.TestCase):
    def test_unsolvable_input_wraps_cause(self):
        c = CubeModel()
        c.state[Face.U][7], c.state[Face.F][1] = c.state[Face.F][1], c.state[Face.U][7]
        with self.assertRaises(UnsolvableInput) as ctx:
            solve(c)
        self.assertIsInstance(ctx.exception.cause, InvalidEdgeOrientation)
        self.assertIs(ctx.exception.__cause__, ctx.exception.cause)

    def test_unsolvable_before_any_work(self):
        c = CubeModel()
        c.state[Face.U][4] = Color.GREEN
        c.state[Face.F][0] = Color.WHITE
        stages = []
        with self.assertRaises(UnsolvableInput) as ctx:
            solve(c, on_stage=stages.append)
        self.assertIsInstance(ctx.exception.cause, NonUniqueCenters)
        self.assertEqual(stages, [])


class TestCancellation(unittest.TestCase):
    def test_cancel_before_start(self):
        stages = []
        with self.assertRaises(SolveCancelled):
            solve(scrambled_model(20, seed=2), should_cancel=lambda: True, on_stage=stages.append)
        self.assertEqual(stages, [])

    def test_cancel_between_stages(self):
        stages = []

        def on_stage(name):
            stages.append(name)

        with self.assertRaises(SolveCancelled):
            solve(
                scrambled_model(20, seed=3),
                should_cancel=lambda: len(stages) >= 2,
                on_stage=on_stage,
            )
        self.assertLessEqual(len(stages), 2)


class TestIDDFS(unittest.TestCase):
    def test_solver_small_scramble(self):
        c = CubeModel()
        c.apply_sequence("R U R' U'")
        sol = iddfs_solve(c, max_depth=6)
        c.apply_sequence(sol)
        self.assertTrue(c.is_solved())

    def test_finds_shortest(self):
        c = CubeModel()
        c.apply_sequence("R U2 F'")
        sol = IDDFSSolver(max_depth=4).solve(c)
        self.assertEqual(len(sol), 3)
        self.assertTrue(apply_moves(c, sol).is_solved())

    def test_depth_exhausted(self):
        c = CubeModel()
        c.apply_sequence("R U F L")
        with self.assertRaises(SolverError):
            IDDFSSolver(max_depth=2).solve(c)

    def test_reports_depths(self):
        c = CubeModel()
        c.apply_sequence("R U")
        depths = []
        get_solver("iddfs", max_depth=3).solve(c, on_stage=depths.append)
        self.assertEqual(depths, ["profundidad 1", "profundidad 2"])


class TestRegistry(unittest.TestCase):
    def test_strategy_without_solve_cannot_be_created(self):
        class Incomplete(SolverStrategy):
            name = "incomplete"

        with self.assertRaises(TypeError):
            Incomplete()
        with self.assertRaises(TypeError):
            SolverStrategy()

    def test_default_is_layered(self):
        self.assertIsInstance(get_solver(), LayerByLayerSolver)

    def test_by_name(self):
        self.assertIsInstance(get_solver("iddfs"), IDDFSSolver)
        self.assertEqual(get_solver("iddfs", max_depth=3).max_depth, 3)

    def test_unknown_name(self):
        with self.assertRaises(ValueError):
            get_solver("kociemba")

    def test_solve_with_strategy(self):
        c = CubeModel()
        c.apply_sequence("F' D")
        sol = solve(c, strategy="iddfs")
        self.assertTrue(apply_moves(c, sol).is_solved())


if __name__ == "__main__":
    unittest.main()
