# rubik_core/solve/layered_solver.py
from __future__ import annotations

import logging
from operator import itemgetter
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from rubik_core.config import STAGE_MAX_DEPTH
from rubik_core.core.cube_model import FACES, CubeModel, Face, Move, facelet_index
from rubik_core.core.pieces import CORNER_SLOTS, EDGE_SLOTS, Facelet, slot_indices
from rubik_core.errors import SolveCancelled, SolverError
from rubik_core.logic.moves import invert_sequence, parse_sequence, relabel, simplify_sequence
from rubik_core.solve.iddfs_solver import (
    FACE_MACROS,
    FlatState,
    GoalPredicate,
    Macro,
    expand,
    flat_state,
    iddfs,
)
from rubik_core.solve.strategy import OnStageCallback, ShouldCancelCallback, SolverStrategy

logger = logging.getLogger(__name__)

Centers = Dict[Face, str]
Goal = List[Tuple[int, str]]
Stage = Callable[[FlatState, Centers, Optional[ShouldCancelCallback]], List[Move]]

# --------------------------
# Algoritmos
# --------------------------
SEXY = parse_sequence("R U R' U'")
RIGHT_INSERT = parse_sequence("U R U' R' U' F' U F")
LEFT_INSERT = parse_sequence("U' L' U L U F U' F'")
OLL_LINE = parse_sequence("F R U R' U' F'")
OLL_L = parse_sequence("F U R U' R' F'")
SUNE = parse_sequence("R U R' U R U2 R'")
A_PERM = parse_sequence("R' F R' B2 R F' R' B2 R2")
U_PERM = parse_sequence("R U' R U R U R U' R' U' R2")

# Cambio de cara frontal F -> R -> B -> L (mirar el cubo desde la cara siguiente)
_NEXT_VIEW: Dict[Face, Face] = {Face.F: Face.R, Face.R: Face.B, Face.B: Face.L, Face.L: Face.F}


def _views(alg: List[Move]) -> List[List[Move]]:
    """El algoritmo visto desde cada una de las 4 caras laterales como frontal."""
    out = [alg]
    for _ in range(3):
        out.append(relabel(out[-1], _NEXT_VIEW))
    return out


U_TURNS: List[Macro] = [m for m in FACE_MACROS if m.face == Face.U]

# Ranuras
_D_EDGES = ["DF", "DR", "DB", "DL"]
_D_CORNERS = ["DFR", "DLF", "DBL", "DRB"]
_MIDDLE_EDGES = ["FR", "FL", "BL", "BR"]
_U_EDGES = ["UR", "UF", "UL", "UB"]
_U_CORNERS = ["URF", "UFL", "ULB", "UBR"]

_CORNERS: Dict[str, Tuple[Facelet, ...]] = dict(CORNER_SLOTS)
_EDGES: Dict[str, Tuple[Facelet, ...]] = dict(EDGE_SLOTS)


def _slot_goal(facelets: Sequence[Facelet], centers: Centers) -> Goal:
    """Pieza en su lugar y bien orientada: cada sticker del color de su centro."""
    return [(facelet_index(f, i), centers[f]) for f, i in facelets]


def _matches(goal: Goal) -> GoalPredicate:
    get = itemgetter(*(i for i, _ in goal))
    want = tuple(c for _, c in goal)
    return lambda s: get(s) == want


def _first_two_layers(centers: Centers) -> Goal:
    """Las dos primeras capas: toda la cara D y las filas 1-2 de las caras laterales."""
    goal: Goal = [(facelet_index(Face.D, i), centers[Face.D]) for i in range(9)]
    for f in (Face.L, Face.R, Face.F, Face.B):
        goal.extend((facelet_index(f, i), centers[f]) for i in range(3, 9))
    return goal


class LayerByLayerSolver(SolverStrategy):
    """Solver por capas: primero la capa D, después la del medio y al final la U.

    Etapas (cada una deja intacto lo resuelto por las anteriores):
        1. cruz en D (arista por arista)
        2. esquinas de D
        3. aristas de la capa media
        4. orientación de aristas de U (cruz en U)
        5. orientación de esquinas de U
        6. permutación de esquinas de U
        7. permutación de aristas de U

    Cada etapa es una búsqueda IDDFS acotada sobre un alfabeto pequeño de macros
    (giros sueltos o algoritmos fijos). El objetivo de la búsqueda incluye todas las
    piezas ya resueltas, así que una etapa nunca puede deshacer a otra. Los límites
    de profundidad (`config.STAGE_MAX_DEPTH`) cubren el peor caso de cada etapa.
    """

    name = "layered"

    def __init__(self) -> None:
        self._corner_macros: List[Macro] = U_TURNS + [
            Macro(f"sexy{k}x{n}", alg * n)
            for k, alg in enumerate(_views(SEXY))
            for n in range(1, 6)
        ]
        self._middle_macros: List[Macro] = U_TURNS + [
            Macro(f"{side}{k}", alg)
            for side, base in (("right", RIGHT_INSERT), ("left", LEFT_INSERT))
            for k, alg in enumerate(_views(base))
        ]
        self._eo_macros: List[Macro] = U_TURNS + [
            Macro("oll_line", OLL_LINE),
            Macro("oll_l", OLL_L),
        ]
        self._co_macros: List[Macro] = U_TURNS + [
            Macro("sune", SUNE),
            Macro("antisune", invert_sequence(SUNE)),
        ]
        self._cp_macros: List[Macro] = U_TURNS + [
            Macro("a_perm", A_PERM),
            Macro("a_perm_inv", invert_sequence(A_PERM)),
        ]
        self._ep_macros: List[Macro] = U_TURNS + [
            Macro("u_perm", U_PERM),
            Macro("u_perm_inv", invert_sequence(U_PERM)),
        ]

    def _stages(self) -> List[Tuple[str, Stage]]:
        """Etapas en orden de ejecución: (nombre para `on_stage`, método)."""
        return [
            ("cross", self._cross),
            ("first_layer_corners", self._first_layer_corners),
            ("second_layer_edges", self._second_layer_edges),
            ("last_layer_edge_orientation", self._last_layer_edge_orientation),
            ("last_layer_corner_orientation", self._last_layer_corner_orientation),
            ("last_layer_corner_permutation", self._last_layer_corner_permutation),
            ("last_layer_edge_permutation", self._last_layer_edge_permutation),
        ]

    def _solve(
        self,
        working: CubeModel,
        should_cancel: Optional[ShouldCancelCallback],
        on_stage: Optional[OnStageCallback],
    ) -> List[Move]:
        centers: Centers = {f: working.center(f).value for f in FACES}
        solution: List[Move] = []

        for name, stage in self._stages():
            if should_cancel is not None and should_cancel():
                raise SolveCancelled()
            if on_stage is not None:
                on_stage(name)

            moves = stage(flat_state(working), centers, should_cancel)
            working.apply_sequence(moves)
            solution.extend(moves)
            logger.debug("Etapa %s: %d movimientos", name, len(moves))

        if not working.is_solved():
            raise SolverError("El solver por capas terminó sin resolver el cubo.")

        return simplify_sequence(solution)

    # --------------------------
    # Búsqueda por etapa
    # --------------------------
    @staticmethod
    def _search(
        stage: str,
        state: FlatState,
        alphabet: Sequence[Macro],
        goal: GoalPredicate,
        should_cancel: Optional[ShouldCancelCallback],
    ) -> Tuple[FlatState, List[Move]]:
        """Corre IDDFS para una etapa y devuelve (estado final, movimientos).

        Raises:
            SolverError: Si no hay solución dentro del límite de la etapa.
        """
        res = iddfs(state, alphabet, goal, STAGE_MAX_DEPTH[stage], should_cancel=should_cancel)
        if res is None:
            raise SolverError(f"La etapa {stage} no encontró solución.")
        for macro in res:
            state = macro.apply(state)
        return state, expand(res)

    def _cross(
        self,
        state: FlatState,
        centers: Centers,
        should_cancel: Optional[ShouldCancelCallback],
    ) -> List[Move]:
        """Cruz en D, una arista a la vez.

        Cada arista primero sube a la capa U (a lo sumo 3 giros) y después baja
        a su lugar (a lo sumo 4 giros), sin mover las aristas ya ubicadas.
        """
        moves: List[Move] = []
        placed: Goal = []
        u_edges = [slot_indices(_EDGES[name]) for name in _U_EDGES]

        for name in _D_EDGES:
            facelets = _EDGES[name]
            target = _slot_goal(facelets, centers)
            done = _matches(placed + target)
            if done(state):
                placed += target
                continue

            colors = {c for _, c in target}
            protected = _matches(placed) if placed else (lambda s: True)

            def in_top_layer(s: FlatState, colors=colors, protected=protected) -> bool:
                return protected(s) and any({s[a], s[b]} == colors for a, b in u_edges)

            state, lift = self._search(
                "cross_lift", state, FACE_MACROS, in_top_layer, should_cancel
            )
            state, place = self._search("cross_place", state, FACE_MACROS, done, should_cancel)
            moves += lift + place
            placed += target

        return moves

    def _first_layer_corners(
        self,
        state: FlatState,
        centers: Centers,
        should_cancel: Optional[ShouldCancelCallback],
    ) -> List[Move]:
        """Esquinas de D: subirla si está mal ubicada, alinearla y repetir R U R' U'."""
        moves: List[Move] = []
        placed: Goal = []
        for name in _D_EDGES:
            placed += _slot_goal(_EDGES[name], centers)

        for name in _D_CORNERS:
            placed += _slot_goal(_CORNERS[name], centers)
            state, found = self._search(
                "first_layer_corners", state, self._corner_macros, _matches(placed), should_cancel
            )
            moves += found

        return moves

    def _second_layer_edges(
        self,
        state: FlatState,
        centers: Centers,
        should_cancel: Optional[ShouldCancelCallback],
    ) -> List[Move]:
        """Aristas de la capa media con los algoritmos de inserción derecha/izquierda."""
        moves: List[Move] = []
        placed: Goal = []
        for name in _D_EDGES:
            placed += _slot_goal(_EDGES[name], centers)
        for name in _D_CORNERS:
            placed += _slot_goal(_CORNERS[name], centers)

        for name in _MIDDLE_EDGES:
            placed += _slot_goal(_EDGES[name], centers)
            state, found = self._search(
                "second_layer_edges", state, self._middle_macros, _matches(placed), should_cancel
            )
            moves += found

        return moves

    def _last_layer_edge_orientation(
        self,
        state: FlatState,
        centers: Centers,
        should_cancel: Optional[ShouldCancelCallback],
    ) -> List[Move]:
        """Cruz en U: orienta las 4 aristas de U con F R U R' U' F' y F U R U' R' F'.

        Las dos primeras capas deben quedar intactas; las esquinas de U pueden moverse.
        """
        cross = [(facelet_index(Face.U, i), centers[Face.U]) for i in (1, 3, 5, 7)]
        goal = _matches(_first_two_layers(centers) + cross)
        _, found = self._search(
            "last_layer_edge_orientation", state, self._eo_macros, goal, should_cancel
        )
        return found

    def _last_layer_corner_orientation(
        self,
        state: FlatState,
        centers: Centers,
        should_cancel: Optional[ShouldCancelCallback],
    ) -> List[Move]:
        """Cara U completa: orienta las esquinas con Sune y AntiSune."""
        top = [(facelet_index(Face.U, i), centers[Face.U]) for i in range(9)]
        goal = _matches(_first_two_layers(centers) + top)
        _, found = self._search(
            "last_layer_corner_orientation", state, self._co_macros, goal, should_cancel
        )
        return found

    def _last_layer_corner_permutation(
        self,
        state: FlatState,
        centers: Centers,
        should_cancel: Optional[ShouldCancelCallback],
    ) -> List[Move]:
        """Ubica las esquinas de U en su lugar con la A-perm (y su inversa).

        La cara U sigue completa; las aristas de U pueden quedar permutadas.
        """
        top = [(facelet_index(Face.U, i), centers[Face.U]) for i in range(9)]
        corners: Goal = []
        for name in _U_CORNERS:
            corners += _slot_goal(_CORNERS[name], centers)
        goal = _matches(_first_two_layers(centers) + top + corners)
        _, found = self._search(
            "last_layer_corner_permutation", state, self._cp_macros, goal, should_cancel
        )
        return found

    def _last_layer_edge_permutation(
        self,
        state: FlatState,
        centers: Centers,
        should_cancel: Optional[ShouldCancelCallback],
    ) -> List[Move]:
        """Ubica las aristas de U con la U-perm (y su inversa): el cubo queda resuelto."""
        target = tuple(centers[f] for f in FACES for _ in range(9))
        _, found = self._search(
            "last_layer_edge_permutation",
            state,
            self._ep_macros,
            lambda s: s == target,
            should_cancel,
        )
        return found
