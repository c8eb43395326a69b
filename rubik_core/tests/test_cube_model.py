# rubik_core/tests/test_cube_model.py
import unittest
from collections import Counter

from rubik_core.core import FACES, Color, CubeModel, Face, Move, apply_moves
from rubik_core.errors import InvalidFaceConfiguration, InvalidMoveNotation
from rubik_core.logic.moves import ALL_MOVES


class TestCubeModel(unittest.TestCase):
    def test_starts_solved(self):
        c = CubeModel()
        self.assertTrue(c.is_solved())

    def test_U_then_Uprime_returns(self):
        c = CubeModel()
        before = c.to_hashable()
        c.apply_move("U")
        c.apply_move("U'")
        self.assertEqual(before, c.to_hashable())

    def test_U2_equals_two_U(self):
        c1 = CubeModel()
        c2 = CubeModel()
        c1.apply_move("U2")
        c2.apply_move("U")
        c2.apply_move("U")
        self.assertEqual(c1.to_hashable(), c2.to_hashable())

    def test_move_then_inverse_returns(self):
        for m in ALL_MOVES:
            c = CubeModel()
            c.apply_sequence("R U F' L2 D B'")
            before = c.to_hashable()
            c.apply_move(m)
            c.apply_move(m.inverse())
            self.assertEqual(before, c.to_hashable(), m.notation)

    def test_four_quarter_turns_are_identity(self):
        for face in FACES:
            c = CubeModel()
            c.apply_sequence("F2 U' R")
            before = c.to_hashable()
            for _ in range(4):
                c.apply_move(Move(face))
            self.assertEqual(before, c.to_hashable(), face.value)

    def test_double_equals_two_quarters(self):
        for face in FACES:
            c1 = CubeModel()
            c2 = CubeModel()
            c1.apply_move(face.value + "2")
            c2.apply_move(face.value)
            c2.apply_move(face.value)
            self.assertEqual(c1, c2, face.value)

    def test_quarter_turn_changes_state(self):
        for m in ALL_MOVES:
            self.assertFalse(CubeModel().moved(m).is_solved(), m.notation)

    def test_color_counts_remain_constant(self):
        c = CubeModel()
        # aplica varios movimientos
        c.apply_sequence("R U R' U' L D L' D' U2 R2 F B' F2")

        counts = Counter(c.to_flat())

        # Cada color debe aparecer 9 veces
        for color in Color:
            self.assertEqual(counts[color], 9)

    def test_centers_never_move(self):
        c = CubeModel()
        c.apply_sequence("R U F D L B R' U' F' D' L' B'")
        self.assertEqual(c.centers(), CubeModel.COLORS_SOLVED)

    def test_R_moves_front_column_up(self):
        c = CubeModel()
        c.apply_move("R")
        for i in (2, 5, 8):
            self.assertEqual(c.state[Face.U][i], Color.GREEN)
            self.assertEqual(c.state[Face.F][i], Color.YELLOW)
        for i in (0, 3, 6):
            self.assertEqual(c.state[Face.B][i], Color.WHITE)
        self.assertEqual(c.state[Face.L], [Color.ORANGE] * 9)

    def test_U_moves_front_row_left(self):
        c = CubeModel()
        c.apply_move("U")
        self.assertEqual(c.state[Face.F][:3], [Color.RED] * 3)
        self.assertEqual(c.state[Face.L][:3], [Color.GREEN] * 3)
        self.assertEqual(c.state[Face.F][3:], [Color.GREEN] * 6)
        self.assertEqual(c.state[Face.D], [Color.YELLOW] * 9)

    def test_sexy_move_has_order_six(self):
        c = CubeModel()
        for k in range(1, 7):
            c.apply_sequence("R U R' U'")
            self.assertEqual(c.is_solved(), k == 6)

    def test_invalid_notation_raises(self):
        c = CubeModel()
        with self.assertRaises(InvalidMoveNotation):
            c.apply_move("X")
        self.assertTrue(c.is_solved())

    def test_bad_token_leaves_cube_untouched(self):
        c = CubeModel()
        with self.assertRaises(InvalidMoveNotation):
            c.apply_sequence("R U X")
        self.assertTrue(c.is_solved())

        with self.assertRaises(InvalidMoveNotation):
            c.apply_sequence([Move(Face.R), "U", "R3"])
        self.assertTrue(c.is_solved())

    def test_sequence_text_accepts_typographic_quote(self):
        c1 = CubeModel()
        c2 = CubeModel()
        c1.apply_sequence("R’  U‘ F2")
        c2.apply_sequence("R' U' F2")
        self.assertEqual(c1, c2)


class TestValueSemantics(unittest.TestCase):
    def test_copy_is_independent(self):
        c = CubeModel()
        d = c.copy()
        d.apply_move("F")
        self.assertTrue(c.is_solved())
        self.assertNotEqual(c, d)

    def test_moved_and_apply_moves_do_not_mutate(self):
        c = CubeModel()
        d = c.moved("R")
        e = apply_moves(c, [Move(Face.U), "F2"])
        self.assertTrue(c.is_solved())
        self.assertFalse(d.is_solved())
        self.assertFalse(e.is_solved())

    def test_equality_by_content(self):
        c1 = CubeModel()
        c2 = CubeModel()
        c1.apply_sequence("R U")
        c2.apply_sequence("R U")
        self.assertEqual(c1, c2)
        c2.reset()
        self.assertEqual(c2, CubeModel.solved())


class TestRepresentations(unittest.TestCase):
    def setUp(self):
        self.cube = CubeModel()
        self.cube.apply_sequence("R U2 F' L D' B2")

    def test_grid_round_trip_of_solved(self):
        solved = CubeModel()
        grid = solved.to_grid()
        self.assertEqual(len(grid[Face.U]), 3)
        self.assertEqual(grid[Face.F][1][1], Color.GREEN)
        self.assertEqual(CubeModel.from_grid(grid), solved)

    def test_grid_round_trip(self):
        self.assertEqual(CubeModel.from_grid(self.cube.to_grid()), self.cube)

    def test_flat_round_trip(self):
        flat = self.cube.to_flat()
        self.assertEqual(len(flat), 54)
        self.assertEqual(CubeModel.from_flat(flat), self.cube)

    def test_string_round_trip(self):
        text = self.cube.to_string()
        self.assertEqual(len(text), 54)
        self.assertEqual(CubeModel.from_string(text), self.cube)

    def test_dict_round_trip(self):
        data = self.cube.to_dict()
        self.assertEqual(set(data), {"U", "D", "L", "R", "F", "B"})
        self.assertEqual(CubeModel.from_dict(data), self.cube)

    def test_from_string_ignores_whitespace(self):
        text = " ".join(CubeModel().to_dict()[f.value] for f in FACES)
        self.assertTrue(CubeModel.from_string(text).is_solved())

    def test_malformed_input_raises(self):
        with self.assertRaises(InvalidFaceConfiguration):
            CubeModel.from_flat(CubeModel().to_flat()[:53])
        with self.assertRaises(InvalidFaceConfiguration):
            CubeModel.from_string("X" * 54)
        with self.assertRaises(InvalidFaceConfiguration):
            CubeModel.from_dict({"U": "W" * 9})
        grid = CubeModel().to_grid()
        grid[Face.R] = grid[Face.R][:2]
        with self.assertRaises(InvalidFaceConfiguration):
            CubeModel.from_grid(grid)

    def test_face_is_not_a_color(self):
        faces = CubeModel().state
        faces[Face.U][0] = Face.R
        with self.assertRaises(InvalidFaceConfiguration):
            CubeModel.from_faces(faces)
        with self.assertRaises(InvalidFaceConfiguration):
            CubeModel.from_flat([Face.B] * 54)


if __name__ == "__main__":
    unittest.main()
