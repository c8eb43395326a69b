# rubik_core/logic/scramble.py
from __future__ import annotations

import random
from typing import List, Optional

from rubik_core.config import DEFAULT_SCRAMBLE_LENGTH
from rubik_core.core.cube_model import FACES, Amount, CubeModel, Face, Move
from rubik_core.logic.moves import format_sequence

AMOUNTS: List[Amount] = [Amount.CLOCKWISE, Amount.COUNTER, Amount.DOUBLE]


def generate_scramble(n: int = DEFAULT_SCRAMBLE_LENGTH, seed: Optional[int] = None) -> List[Move]:
    """Genera una secuencia de mezcla (scramble) aleatoria para el cubo.

    La secuencia se construye evitando repetir la misma cara en movimientos consecutivos
    (por ejemplo, evita "U U'" o "R R2" seguidos), lo que produce scrambles más variados.

    Args:
        n: Cantidad de movimientos a generar (0 devuelve una lista vacía).
        seed: Semilla opcional para obtener resultados reproducibles. Si es None,
            el scramble será distinto en cada ejecución.

    Returns:
        Lista de `n` movimientos.

    Raises:
        ValueError: Si `n` es negativo.
    """
    if n < 0:
        raise ValueError("n debe ser mayor o igual que 0.")

    rng = random.Random(seed)

    seq: List[Move] = []
    last_face: Optional[Face] = None

    for _ in range(n):
        # Evitar repetir la misma cara consecutiva
        candidates = [f for f in FACES if f != last_face]
        face = rng.choice(candidates)
        last_face = face

        seq.append(Move(face, rng.choice(AMOUNTS)))

    return seq


def scramble_to_text(seq: List[Move]) -> str:
    """Ej: [R, U', F2] -> "R U' F2"."""
    return format_sequence(seq)


def scrambled_model(n: int = DEFAULT_SCRAMBLE_LENGTH, seed: Optional[int] = None) -> CubeModel:
    """Cubo resuelto al que se le aplica `generate_scramble(n, seed)`."""
    c = CubeModel()
    c.apply_sequence(generate_scramble(n, seed))
    return c
