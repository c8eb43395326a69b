# rubik_core/solve/iddfs_solver.py
from __future__ import annotations

from operator import itemgetter
from typing import Callable, Iterable, List, Optional, Sequence, Set, Tuple

from rubik_core.config import IDDFS_MAX_DEPTH
from rubik_core.core.cube_model import FACES, MOVE_PERMUTATIONS, CubeModel, Face, Move, compose
from rubik_core.errors import SolveCancelled, SolverError
from rubik_core.logic.moves import ALL_MOVES
from rubik_core.solve.strategy import OnStageCallback, ShouldCancelCallback, SolverStrategy

# Estado plano: 54 letras de color en el orden de `FACES`
FlatState = Tuple[str, ...]
GoalPredicate = Callable[[FlatState], bool]
OnDepthCallback = Callable[[int], None]


class Macro:
    """Secuencia fija de movimientos que la búsqueda trata como un solo paso.

    Un movimiento suelto es una macro de largo 1. La permutación de 54 stickers
    se compone una sola vez, así aplicar una macro cuesta lo mismo que un giro.

    Attributes:
        name: Nombre para logs (ej: "U'", "sune").
        moves: Movimientos que la forman.
        face: Cara que gira, si la macro es un giro de una sola cara (sirve para podar).
    """

    __slots__ = ("name", "moves", "face", "_apply")

    def __init__(self, name: str, moves: Sequence[Move], face: Optional[Face] = None) -> None:
        self.name = name
        self.moves: Tuple[Move, ...] = tuple(moves)
        self.face = face

        perm: Tuple[int, ...] = tuple(range(54))
        for m in self.moves:
            perm = compose(perm, MOVE_PERMUTATIONS[m])
        self._apply = itemgetter(*perm)

    @classmethod
    def single(cls, move: Move) -> "Macro":
        return cls(move.notation, [move], face=move.turn)

    def apply(self, state: FlatState) -> FlatState:
        return self._apply(state)

    def __repr__(self) -> str:
        return f"Macro({self.name!r})"


FACE_MACROS: List[Macro] = [Macro.single(m) for m in ALL_MOVES]


def flat_state(model: CubeModel) -> FlatState:
    """Estado del cubo como tupla de 54 letras (hasheable y barata de permutar)."""
    return tuple(c.value for c in model.to_flat())


def _can_follow(prev: Optional[Macro], nxt: Macro) -> bool:
    """Podas para giros de cara consecutivos.

    - No repetir la misma cara (U luego U/U'/U2).
    - Caras opuestas conmutan (U D == D U): solo se prueba un orden.
    """
    if prev is None or prev.face is None or nxt.face is None:
        return True
    if prev.face == nxt.face:
        return False
    if nxt.face == prev.face.opposite and FACES.index(nxt.face) < FACES.index(prev.face):
        return False
    return True


def iddfs(
    start: FlatState,
    alphabet: Sequence[Macro],
    is_goal: GoalPredicate,
    max_depth: int,
    on_depth: Optional[OnDepthCallback] = None,
    should_cancel: Optional[ShouldCancelCallback] = None,
) -> Optional[List[Macro]]:
    """Búsqueda en profundidad iterativa (IDDFS) sobre un alfabeto de macros.

    El algoritmo itera el límite de profundidad desde 1 hasta `max_depth`, y en cada
    iteración ejecuta DFS con podas simples (ver `_can_follow`) y sin repetir estados
    dentro de la misma rama.

    Args:
        start: Estado inicial.
        alphabet: Macros permitidas en cada paso.
        is_goal: Predicado que define el objetivo.
        max_depth: Cantidad máxima de macros.
        on_depth: Callback opcional que se llama con la profundidad actual probada.
        should_cancel: Callback opcional para cancelar la búsqueda.

    Returns:
        La lista de macros más corta que lleva a un estado objetivo, [] si `start`
        ya lo es, o None si no hay solución dentro de `max_depth`.

    Raises:
        SolveCancelled: Si `should_cancel()` devuelve True durante la búsqueda.
    """
    if is_goal(start):
        return []

    for depth_limit in range(1, max_depth + 1):
        if should_cancel is not None and should_cancel():
            raise SolveCancelled()

        if on_depth is not None:
            on_depth(depth_limit)

        path: List[Macro] = []
        seen_on_path: Set[FlatState] = {start}

        res = _dfs(start, alphabet, is_goal, depth_limit, path, seen_on_path, None, should_cancel)
        if res is not None:
            return res

    return None


def _dfs(
    state: FlatState,
    alphabet: Sequence[Macro],
    is_goal: GoalPredicate,
    remaining: int,
    path: List[Macro],
    seen_on_path: Set[FlatState],
    last: Optional[Macro],
    should_cancel: Optional[ShouldCancelCallback],
) -> Optional[List[Macro]]:
    """DFS limitado en profundidad para IDDFS.

    Returns:
        La ruta de macros si se encuentra el objetivo; si no, None.
    """
    if should_cancel is not None and should_cancel():
        raise SolveCancelled()

    for macro in alphabet:
        if not _can_follow(last, macro):
            continue

        child = macro.apply(state)

        # Evitar ciclos dentro de la misma rama
        if child in seen_on_path:
            continue

        path.append(macro)
        if is_goal(child):
            return list(path)

        if remaining > 1:
            seen_on_path.add(child)
            ans = _dfs(child, alphabet, is_goal, remaining - 1, path, seen_on_path, macro, should_cancel)
            if ans is not None:
                return ans
            # Backtrack
            seen_on_path.remove(child)

        path.pop()

    return None


def expand(macros: Iterable[Macro]) -> List[Move]:
    """Concatena los movimientos de una lista de macros."""
    return [m for macro in macros for m in macro.moves]


def iddfs_solve(
    model: CubeModel,
    max_depth: int = IDDFS_MAX_DEPTH,
    on_depth: Optional[OnDepthCallback] = None,
    should_cancel: Optional[ShouldCancelCallback] = None,
) -> List[Move]:
    """Busca una solución completa del cubo usando IDDFS sobre los 18 giros de cara.

    Args:
        model: Cubo a resolver (no se modifica).
        max_depth: Profundidad máxima que se probará en la búsqueda.
        on_depth: Callback opcional con la profundidad actual probada.
        should_cancel: Callback opcional para cancelar la búsqueda.

    Returns:
        Lista de movimientos que resuelve el cubo ([] si ya está resuelto).

    Raises:
        SolverError: Si no hay solución de largo <= `max_depth`.
        SolveCancelled: Si se cancela la búsqueda.

    Notes:
        - Útil para scrambles cortos o como demostración educativa.
        - Para scrambles largos, IDDFS se vuelve muy costoso (explosión combinatoria).
    """
    start = flat_state(model)
    target = tuple(start[k * 9 + 4] for k in range(6) for _ in range(9))

    res = iddfs(
        start,
        FACE_MACROS,
        lambda s: s == target,
        max_depth,
        on_depth=on_depth,
        should_cancel=should_cancel,
    )
    if res is None:
        raise SolverError(
            f"No se encontró solución con profundidad {max_depth} "
            "(sube la profundidad o usa un scramble corto)."
        )
    return expand(res)


class IDDFSSolver(SolverStrategy):
    """Estrategia de fuerza bruta: IDDFS sobre los 18 giros hasta `max_depth`.

    Encuentra soluciones de largo mínimo, pero solo es práctica para mezclas cortas.
    """

    name = "iddfs"

    def __init__(self, max_depth: int = IDDFS_MAX_DEPTH) -> None:
        self.max_depth = max_depth

    def _solve(
        self,
        working: CubeModel,
        should_cancel: Optional[ShouldCancelCallback],
        on_stage: Optional[OnStageCallback],
    ) -> List[Move]:
        on_depth: Optional[OnDepthCallback] = None
        if on_stage is not None:
            on_depth = lambda d: on_stage(f"profundidad {d}")  # noqa: E731
        return iddfs_solve(working, self.max_depth, on_depth=on_depth, should_cancel=should_cancel)
