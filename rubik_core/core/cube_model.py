# rubik_core/core/cube_model.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Literal, Mapping, Sequence, Tuple, Union

from rubik_core.errors import InvalidFaceConfiguration, InvalidMoveNotation

Vec3i = Tuple[int, int, int]
CubeHash = Tuple[Tuple["Color", ...], ...]
Permutation = Tuple[int, ...]


class Face(str, Enum):
    """Las seis caras del cubo, con su letra de notación como valor."""

    U = "U"
    D = "D"
    L = "L"
    R = "R"
    F = "F"
    B = "B"

    @property
    def opposite(self) -> "Face":
        """Cara opuesta (U<->D, L<->R, F<->B)."""
        return _OPPOSITE[self]


_OPPOSITE: Dict[Face, Face] = {
    Face.U: Face.D,
    Face.D: Face.U,
    Face.L: Face.R,
    Face.R: Face.L,
    Face.F: Face.B,
    Face.B: Face.F,
}


class Color(str, Enum):
    """Colores de los stickers (una letra cada uno)."""

    WHITE = "W"
    YELLOW = "Y"
    ORANGE = "O"
    RED = "R"
    GREEN = "G"
    BLUE = "B"


class Amount(Enum):
    """Cuánto gira una capa. El valor es el sufijo de la notación."""

    CLOCKWISE = ""
    COUNTER = "'"
    DOUBLE = "2"

    @property
    def quarters(self) -> int:
        """Cantidad de cuartos de vuelta en sentido horario equivalentes."""
        return _QUARTERS[self]

    @property
    def inverse(self) -> "Amount":
        if self is Amount.CLOCKWISE:
            return Amount.COUNTER
        if self is Amount.COUNTER:
            return Amount.CLOCKWISE
        return Amount.DOUBLE

    @classmethod
    def from_quarters(cls, quarters: int) -> "Amount":
        """Convierte 1, 2 o 3 cuartos de vuelta (mod 4) en un `Amount`.

        Raises:
            ValueError: Si `quarters` es múltiplo de 4 (no es un giro).
        """
        q = quarters % 4
        if q == 0:
            raise ValueError("Un giro de 0 cuartos no es un movimiento.")
        return {1: cls.CLOCKWISE, 2: cls.DOUBLE, 3: cls.COUNTER}[q]


_QUARTERS: Dict[Amount, int] = {
    Amount.CLOCKWISE: 1,
    Amount.COUNTER: 3,
    Amount.DOUBLE: 2,
}

_FACE_NAMES: Dict[Face, str] = {
    Face.U: "superior",
    Face.D: "inferior",
    Face.L: "izquierda",
    Face.R: "derecha",
    Face.F: "frontal",
    Face.B: "trasera",
}

_AMOUNT_NAMES: Dict[Amount, str] = {
    Amount.CLOCKWISE: "en sentido horario",
    Amount.COUNTER: "en sentido antihorario",
    Amount.DOUBLE: "180 grados",
}


@dataclass(frozen=True)
class Move:
    """Movimiento inmutable: qué cara gira (`turn`) y cuánto (`amount`).

    Notación:
        - ""  giro horario de 90° (ej: "R")
        - "'" giro antihorario de 90° (ej: "R'")
        - "2" giro de 180° (ej: "R2")
    """

    turn: Face
    amount: Amount = Amount.CLOCKWISE

    @property
    def notation(self) -> str:
        return self.turn.value + self.amount.value

    @property
    def description(self) -> str:
        """Descripción legible, por ejemplo "Girar cara derecha en sentido horario"."""
        return f"Girar cara {_FACE_NAMES[self.turn]} {_AMOUNT_NAMES[self.amount]}"

    def inverse(self) -> "Move":
        """Movimiento que deshace a este (R <-> R', R2 <-> R2)."""
        return Move(self.turn, self.amount.inverse)

    @classmethod
    def from_notation(cls, text: str) -> "Move":
        """Construye un movimiento a partir de su notación exacta.

        No normaliza nada: espacios o comillas tipográficas hacen que el token sea
        inválido (ver `normalize_token`).

        Args:
            text: Notación de 1 o 2 caracteres, por ejemplo "R", "U'", "F2".

        Returns:
            El movimiento correspondiente.

        Raises:
            InvalidMoveNotation: Si la cara o el sufijo no son válidos.
        """
        if not isinstance(text, str):
            raise InvalidMoveNotation(repr(text))

        if not 1 <= len(text) <= 2:
            raise InvalidMoveNotation(text)

        base, suffix = text[0], text[1:]
        if base not in _FACE_LETTERS or suffix not in _SUFFIXES:
            raise InvalidMoveNotation(text)

        return cls(Face(base), Amount(suffix))

    def __str__(self) -> str:
        return self.notation


_FACE_LETTERS = frozenset(f.value for f in Face)
_SUFFIXES = frozenset(a.value for a in Amount)

MoveLike = Union[Move, str]


def normalize_token(tok: str) -> str:
    """Limpia un token escrito a mano antes de parsearlo.

    - Elimina espacios alrededor.
    - Convierte comilla tipográfica (’ o ‘) a comilla simple (').
    """
    return tok.strip().replace("’", "'").replace("‘", "'")


def _to_move(move: MoveLike) -> Move:
    if isinstance(move, Move):
        return move
    return Move.from_notation(move)


# --------------------------
# Geometría de stickers
# --------------------------
# Orden canónico de caras (también es el orden de la representación plana de 54)
FACES: List[Face] = [Face.U, Face.D, Face.L, Face.R, Face.F, Face.B]

FACE_NORMAL: Dict[Face, Vec3i] = {
    Face.F: (0, 0, 1),
    Face.B: (0, 0, -1),
    Face.R: (1, 0, 0),
    Face.L: (-1, 0, 0),
    Face.U: (0, 1, 0),
    Face.D: (0, -1, 0),
}

# Giro horario de cada cara visto desde afuera: (eje, capa, cuartos con regla de la mano derecha)
_CW_TURN: Dict[Face, Tuple[Literal["x", "y", "z"], int, int]] = {
    Face.U: ("y", 1, -1),
    Face.D: ("y", -1, +1),
    Face.R: ("x", 1, -1),
    Face.L: ("x", -1, +1),
    Face.F: ("z", 1, -1),
    Face.B: ("z", -1, +1),
}


def facelet_index(face: Face, i: int) -> int:
    """Índice (0..53) del sticker `i` de `face` en la representación plana."""
    return FACES.index(face) * 9 + i


def _sticker_position(face: Face, i: int) -> Vec3i:
    """Posición (x, y, z) del sticker `i` de `face`, con la red estándar.

    - U: fila 0 junto a B, columna 0 junto a L
    - D: fila 0 junto a F, columna 0 junto a L
    - F: columna 0 junto a L;  B: columna 0 junto a R
    - R: columna 0 junto a F;  L: columna 0 junto a B
    """
    r, c = divmod(i, 3)
    if face is Face.F:
        return (c - 1, 1 - r, 1)
    if face is Face.B:
        return (1 - c, 1 - r, -1)
    if face is Face.R:
        return (1, 1 - r, 1 - c)
    if face is Face.L:
        return (-1, 1 - r, c - 1)
    if face is Face.U:
        return (c - 1, 1, r - 1)
    return (c - 1, -1, 1 - r)


def _rot_x(v: Vec3i, turns: int) -> Vec3i:
    """Rota un vector 90°*turns alrededor de X (regla de la mano derecha)."""
    x, y, z = v
    turns %= 4
    if turns == 0:
        return (x, y, z)
    if turns == 1:
        return (x, -z, y)
    if turns == 2:
        return (x, -y, -z)
    return (x, z, -y)


def _rot_y(v: Vec3i, turns: int) -> Vec3i:
    """Rota un vector 90°*turns alrededor de Y (regla de la mano derecha)."""
    x, y, z = v
    turns %= 4
    if turns == 0:
        return (x, y, z)
    if turns == 1:
        return (z, y, -x)
    if turns == 2:
        return (-x, y, -z)
    return (-z, y, x)


def _rot_z(v: Vec3i, turns: int) -> Vec3i:
    """Rota un vector 90°*turns alrededor de Z (regla de la mano derecha)."""
    x, y, z = v
    turns %= 4
    if turns == 0:
        return (x, y, z)
    if turns == 1:
        return (-y, x, z)
    if turns == 2:
        return (-x, -y, z)
    return (y, -x, z)


_ROTATIONS = {"x": _rot_x, "y": _rot_y, "z": _rot_z}
_AXIS_INDEX = {"x": 0, "y": 1, "z": 2}


def _build_facelet_maps() -> Tuple[Dict[int, Tuple[Vec3i, Vec3i]], Dict[Tuple[Vec3i, Vec3i], int]]:
    """Mapeo entre índice plano de sticker y su par (posición, normal), en ambos sentidos."""
    to_pn: Dict[int, Tuple[Vec3i, Vec3i]] = {}
    from_pn: Dict[Tuple[Vec3i, Vec3i], int] = {}
    for face in FACES:
        n = FACE_NORMAL[face]
        for i in range(9):
            key = facelet_index(face, i)
            pn = (_sticker_position(face, i), n)
            to_pn[key] = pn
            from_pn[pn] = key
    return to_pn, from_pn


FACELET_TO_PN, PN_TO_FACELET = _build_facelet_maps()


def _quarter_turn_permutation(face: Face) -> Permutation:
    """Permutación de 54 stickers de un giro horario de `face`.

    Convención: `nuevo[i] = viejo[perm[i]]`.
    """
    axis, layer_value, turns = _CW_TURN[face]
    rotate = _ROTATIONS[axis]
    perm = list(range(54))

    # Recorremos cada sticker y lo movemos si está en la capa
    for src, (pos, n) in FACELET_TO_PN.items():
        if pos[_AXIS_INDEX[axis]] != layer_value:
            continue
        dest = PN_TO_FACELET[(rotate(pos, turns), rotate(n, turns))]
        perm[dest] = src

    return tuple(perm)


def compose(first: Sequence[int], second: Sequence[int]) -> Permutation:
    """Permutación equivalente a aplicar `first` y luego `second`."""
    return tuple(first[j] for j in second)


def _build_move_permutations() -> Dict[Move, Permutation]:
    table: Dict[Move, Permutation] = {}
    for face in FACES:
        quarter = _quarter_turn_permutation(face)
        perm: Permutation = tuple(range(54))
        for q in range(1, 4):
            perm = compose(perm, quarter)
            table[Move(face, Amount.from_quarters(q))] = perm
    return table


MOVE_PERMUTATIONS: Dict[Move, Permutation] = _build_move_permutations()


class CubeModel:
    """Modelo lógico del cubo Rubik 3x3 basado en rotaciones geométricas.

    Representación:
        - `state[face]` es una lista de 9 stickers (3x3) para cada cara.
        - El orden de stickers por cara es fila-columna; el índice 4 es el centro.

    Rotaciones:
        - Cada sticker es un par (posición, normal) en {-1, 0, 1}^3.
        - Un giro rota posición y normal de los stickers de la capa y reubica el color.
        - Las permutaciones resultantes se calculan una sola vez (`MOVE_PERMUTATIONS`).

    El modelo es un valor: `copy()` devuelve un objeto independiente y la igualdad
    compara contenido.
    """

    FACES: List[Face] = FACES
    COLORS_SOLVED: Dict[Face, Color] = {
        Face.U: Color.WHITE,
        Face.D: Color.YELLOW,
        Face.L: Color.ORANGE,
        Face.R: Color.RED,
        Face.F: Color.GREEN,
        Face.B: Color.BLUE,
    }

    def __init__(self) -> None:
        """Inicializa el cubo en estado resuelto."""
        self.state: Dict[Face, List[Color]] = {
            f: [self.COLORS_SOLVED[f]] * 9 for f in self.FACES
        }

    # --------------------------
    # Constructores alternativos
    # --------------------------
    @classmethod
    def solved(cls) -> "CubeModel":
        """Configuración de referencia resuelta."""
        return cls()

    @classmethod
    def from_faces(cls, faces: Mapping[Face, Sequence[Color]]) -> "CubeModel":
        """Crea un cubo a partir de un mapeo cara -> 9 colores.

        Raises:
            InvalidFaceConfiguration: Si falta una cara o alguna no tiene 9 colores válidos.
        """
        state: Dict[Face, List[Color]] = {}
        for f in FACES:
            if f not in faces:
                raise InvalidFaceConfiguration()
            state[f] = _coerce_face(faces[f])
        c = cls()
        c.state = state
        return c

    @classmethod
    def from_flat(cls, stickers: Sequence[Union[Color, str]]) -> "CubeModel":
        """Crea un cubo a partir de los 54 stickers en el orden de `FACES`."""
        if len(stickers) != 54:
            raise InvalidFaceConfiguration()
        return cls.from_faces(
            {f: stickers[k * 9:(k + 1) * 9] for k, f in enumerate(FACES)}
        )

    @classmethod
    def from_string(cls, text: str) -> "CubeModel":
        """Crea un cubo desde 54 letras de color (se ignoran espacios), orden `FACES`."""
        return cls.from_flat([ch for ch in text if not ch.isspace()])

    @classmethod
    def from_grid(cls, grid: Mapping[Face, Sequence[Sequence[Color]]]) -> "CubeModel":
        """Crea un cubo desde la representación de grilla 3x3 por cara."""
        faces: Dict[Face, List[Color]] = {}
        for f in FACES:
            rows = grid.get(f)
            if rows is None or len(rows) != 3 or any(len(row) != 3 for row in rows):
                raise InvalidFaceConfiguration()
            faces[f] = [color for row in rows for color in row]
        return cls.from_faces(faces)

    @classmethod
    def from_dict(cls, data: Mapping[str, str]) -> "CubeModel":
        """Inverso de `to_dict`: {"U": "WWWWWWWWW", ...}."""
        faces: Dict[Face, List[Color]] = {}
        for f in FACES:
            if f.value not in data:
                raise InvalidFaceConfiguration()
            faces[f] = list(data[f.value])
        return cls.from_faces(faces)

    # --------------------------
    # Public API
    # --------------------------
    def is_solved(self) -> bool:
        """Indica si el cubo está resuelto (cada cara con un solo color).

        Returns:
            True si el cubo está resuelto; False en caso contrario.
        """
        return all(len(set(self.state[f])) == 1 for f in self.FACES)

    def center(self, face: Face) -> Color:
        return self.state[face][4]

    def centers(self) -> Dict[Face, Color]:
        """Color del centro de cada cara (fija la identidad color <-> cara)."""
        return {f: self.state[f][4] for f in self.FACES}

    def to_hashable(self) -> CubeHash:
        """Convierte el estado del cubo a una estructura inmutable y hasheable.

        Returns:
            Tupla de tuplas con los 9 stickers por cara, en el orden de `FACES`.
        """
        return tuple(tuple(self.state[f]) for f in self.FACES)

    def to_flat(self) -> List[Color]:
        """Los 54 stickers en el orden de `FACES`."""
        return [c for f in self.FACES for c in self.state[f]]

    def to_string(self) -> str:
        return "".join(c.value for c in self.to_flat())

    def to_grid(self) -> Dict[Face, List[List[Color]]]:
        """Representación de grilla: cara -> 3 filas de 3 colores."""
        return {
            f: [list(self.state[f][r * 3:(r + 1) * 3]) for r in range(3)]
            for f in self.FACES
        }

    def to_dict(self) -> Dict[str, str]:
        """Representación serializable (JSON) del estado."""
        return {f.value: "".join(c.value for c in self.state[f]) for f in self.FACES}

    def copy(self) -> "CubeModel":
        """Copia independiente (no comparte listas con el original)."""
        c = type(self)()
        c.state = {f: list(self.state[f]) for f in self.FACES}
        return c

    def apply_sequence(self, seq: Union[str, Iterable[MoveLike]]) -> None:
        """Aplica una secuencia de movimientos.

        Toda la secuencia se parsea antes de girar nada: si un token es inválido
        el cubo queda como estaba.

        Args:
            seq: String separado por espacios (ej: "R U R' U'") o iterable de movimientos.

        Raises:
            InvalidMoveNotation: Si algún token es inválido.
        """
        if isinstance(seq, str):
            seq = [normalize_token(t) for t in seq.split()]
        moves = [_to_move(mv) for mv in seq]
        for mv in moves:
            self.apply_move(mv)

    def apply_move(self, move: MoveLike) -> None:
        """Aplica un movimiento individual al cubo (modifica este objeto).

        Args:
            move: `Move` o su notación (por ejemplo: "R", "U'", "F2").

        Raises:
            InvalidMoveNotation: Si `move` es un string con notación inválida.
        """
        perm = MOVE_PERMUTATIONS[_to_move(move)]
        flat = self.to_flat()
        new = [flat[i] for i in perm]
        self.state = {f: new[k * 9:(k + 1) * 9] for k, f in enumerate(self.FACES)}

    def moved(self, move: MoveLike) -> "CubeModel":
        """Devuelve un cubo nuevo con `move` aplicado; este objeto no cambia."""
        c = self.copy()
        c.apply_move(move)
        return c

    def reset(self) -> None:
        """Reinicia el cubo a estado resuelto."""
        self.state = {f: [self.COLORS_SOLVED[f]] * 9 for f in self.FACES}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CubeModel):
            return NotImplemented
        return self.to_hashable() == other.to_hashable()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"CubeModel({self.to_string()!r})"


def apply_moves(model: CubeModel, moves: Iterable[MoveLike]) -> CubeModel:
    """Aplica `moves` en orden sobre una copia de `model` y la devuelve."""
    c = model.copy()
    c.apply_sequence(moves)
    return c


def _coerce_face(stickers: Sequence[Union[Color, str]]) -> List[Color]:
    if len(stickers) != 9:
        raise InvalidFaceConfiguration()
    out: List[Color] = []
    for s in stickers:
        # Face también es str: Face.R no debe pasar por Color.RED
        if isinstance(s, Face) or not isinstance(s, str):
            raise InvalidFaceConfiguration()
        try:
            out.append(Color(s))
        except ValueError:
            raise InvalidFaceConfiguration() from None
    return out
