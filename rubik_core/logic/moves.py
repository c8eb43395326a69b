# rubik_core/logic/moves.py
from __future__ import annotations

from typing import Dict, Iterable, List

from rubik_core.core.cube_model import FACES, Amount, Face, Move, normalize_token

# Los 18 movimientos de cara, en orden U U' U2 D D' D2 ...
ALL_MOVES: List[Move] = [
    Move(face, amount)
    for face in FACES
    for amount in (Amount.CLOCKWISE, Amount.COUNTER, Amount.DOUBLE)
]


def parse_move(text: str) -> Move:
    """Convierte un token de notación en un `Move`.

    Reglas:
    - Una cara U D L R F B, opcionalmente seguida de "'" (antihorario) o "2" (180°).
    - Cualquier otra cosa ("", "X", "R3", "R22", "D2'", " R", "R’") es inválida.
      Para texto escrito a mano usar `parse_sequence`, que normaliza cada token.

    Args:
        text: Token de movimiento (por ejemplo: "R", "U'", "F2").

    Returns:
        El movimiento correspondiente.

    Raises:
        InvalidMoveNotation: Si la cara o el sufijo no son válidos.
    """
    return Move.from_notation(text)


def format_move(move: Move) -> str:
    """Notación estándar de un movimiento (inverso de `parse_move`)."""
    return move.notation


def opposite(face: Face) -> Face:
    """Cara opuesta: U<->D, L<->R, F<->B."""
    return face.opposite


def inverse_move(m: Move) -> Move:
    """Devuelve el movimiento inverso.

    Ejemplos:
        - R  -> R'
        - R' -> R
        - R2 -> R2
    """
    return m.inverse()


def parse_sequence(text: str) -> List[Move]:
    """Convierte una secuencia escrita como texto en una lista de movimientos.

    La entrada debe separar movimientos por espacios. Por ejemplo:
        "R U R' U'" -> [R, U, R', U']

    Cada token pasa por `normalize_token`, así "R’" se lee como "R'".

    Raises:
        InvalidMoveNotation: Si algún token es inválido.
    """
    return [parse_move(normalize_token(t)) for t in text.split()]


def format_sequence(moves: Iterable[Move]) -> str:
    return " ".join(format_move(m) for m in moves)


def invert_sequence(moves: Iterable[Move]) -> List[Move]:
    """Secuencia que deshace `moves` (inversos en orden inverso)."""
    return [m.inverse() for m in reversed(list(moves))]


def simplify_sequence(moves: Iterable[Move]) -> List[Move]:
    """Une giros consecutivos de la misma cara y elimina los que se anulan.

    Ejemplo: "R R U U' F2 F2 R'" -> "R"

    La secuencia resultante tiene el mismo efecto que la original.
    """
    out: List[Move] = []
    for m in moves:
        if out and out[-1].turn == m.turn:
            prev = out.pop()
            q = (prev.amount.quarters + m.amount.quarters) % 4
            if q:
                out.append(Move(m.turn, Amount.from_quarters(q)))
        else:
            out.append(m)
    return out


def relabel(moves: Iterable[Move], mapping: Dict[Face, Face]) -> List[Move]:
    """Reescribe `moves` cambiando cada cara según `mapping` (caras ausentes no cambian).

    Sirve para usar un algoritmo "visto desde" otra cara frontal.
    """
    return [Move(mapping.get(m.turn, m.turn), m.amount) for m in moves]
