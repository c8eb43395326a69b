# rubik_core/core/pieces.py
from __future__ import annotations

from typing import List, NamedTuple, Optional, Sequence, Tuple

from rubik_core.core.cube_model import Color, CubeModel, Face, facelet_index

Facelet = Tuple[Face, int]

# Posiciones de esquina. Stickers: primero el de U/D y luego en sentido horario.
CORNER_SLOTS: List[Tuple[str, Tuple[Facelet, Facelet, Facelet]]] = [
    ("URF", ((Face.U, 8), (Face.R, 0), (Face.F, 2))),
    ("UFL", ((Face.U, 6), (Face.F, 0), (Face.L, 2))),
    ("ULB", ((Face.U, 0), (Face.L, 0), (Face.B, 2))),
    ("UBR", ((Face.U, 2), (Face.B, 0), (Face.R, 2))),
    ("DFR", ((Face.D, 2), (Face.F, 8), (Face.R, 6))),
    ("DLF", ((Face.D, 0), (Face.L, 8), (Face.F, 6))),
    ("DBL", ((Face.D, 6), (Face.B, 8), (Face.L, 6))),
    ("DRB", ((Face.D, 8), (Face.R, 8), (Face.B, 6))),
]

# Posiciones de arista. Primero el sticker de U/D (o de F/B en la capa media).
EDGE_SLOTS: List[Tuple[str, Tuple[Facelet, Facelet]]] = [
    ("UR", ((Face.U, 5), (Face.R, 1))),
    ("UF", ((Face.U, 7), (Face.F, 1))),
    ("UL", ((Face.U, 3), (Face.L, 1))),
    ("UB", ((Face.U, 1), (Face.B, 1))),
    ("DR", ((Face.D, 5), (Face.R, 7))),
    ("DF", ((Face.D, 1), (Face.F, 7))),
    ("DL", ((Face.D, 3), (Face.L, 7))),
    ("DB", ((Face.D, 7), (Face.B, 7))),
    ("FR", ((Face.F, 5), (Face.R, 3))),
    ("FL", ((Face.F, 3), (Face.L, 5))),
    ("BL", ((Face.B, 5), (Face.L, 3))),
    ("BR", ((Face.B, 3), (Face.R, 5))),
]

CORNER_NAMES: List[str] = [name for name, _ in CORNER_SLOTS]
EDGE_NAMES: List[str] = [name for name, _ in EDGE_SLOTS]


class PieceState(NamedTuple):
    """Pieza que ocupa una posición.

    Attributes:
        slot: Índice de la posición (orden de `CORNER_SLOTS` / `EDGE_SLOTS`).
        identity: Índice de la posición donde esta pieza está resuelta, o None si
            los colores no forman ninguna pieza del esquema de colores actual.
        orientation: 0/1/2 para esquinas, 0/1 para aristas.
        colors: Colores leídos en la posición, en el orden de sus stickers.
    """

    slot: int
    identity: Optional[int]
    orientation: int
    colors: Tuple[Color, ...]


def slot_indices(facelets: Sequence[Facelet]) -> Tuple[int, ...]:
    """Índices planos (0..53) de los stickers de una posición."""
    return tuple(facelet_index(f, i) for f, i in facelets)


def _reference(model: CubeModel, facelets: Sequence[Facelet]) -> Tuple[Color, ...]:
    centers = model.centers()
    return tuple(centers[f] for f, _ in facelets)


def _read(model: CubeModel, facelets: Sequence[Facelet]) -> Tuple[Color, ...]:
    return tuple(model.state[f][i] for f, i in facelets)


def extract_corners(model: CubeModel) -> List[PieceState]:
    """Identidad y orientación de la pieza en cada una de las 8 esquinas.

    La orientación es la posición (0, 1 o 2) del sticker con el color de U o de D.
    La identidad se decide comparando, en orden horario, los colores con los de
    cada esquina de la configuración resuelta (tomada de los centros).

    Nunca falla: una esquina imposible queda con `identity=None`.
    """
    centers = model.centers()
    ud = (centers[Face.U], centers[Face.D])
    refs = [_reference(model, facelets) for _, facelets in CORNER_SLOTS]

    out: List[PieceState] = []
    for slot, (_, facelets) in enumerate(CORNER_SLOTS):
        cols = _read(model, facelets)
        ori = next((k for k in range(3) if cols[k] in ud), None)
        if ori is None:
            out.append(PieceState(slot, None, 0, cols))
            continue

        rotated = (cols[ori], cols[(ori + 1) % 3], cols[(ori + 2) % 3])
        identity = next((j for j, ref in enumerate(refs) if ref == rotated), None)
        out.append(PieceState(slot, identity, ori if identity is not None else 0, cols))
    return out


def extract_edges(model: CubeModel) -> List[PieceState]:
    """Identidad y orientación (0 = bien, 1 = volteada) de cada una de las 12 aristas."""
    refs = [_reference(model, facelets) for _, facelets in EDGE_SLOTS]

    out: List[PieceState] = []
    for slot, (_, facelets) in enumerate(EDGE_SLOTS):
        cols = _read(model, facelets)
        identity: Optional[int] = None
        ori = 0
        for j, ref in enumerate(refs):
            if cols == ref:
                identity = j
                break
            if cols == ref[::-1]:
                identity, ori = j, 1
                break
        out.append(PieceState(slot, identity, ori, cols))
    return out


def permutation_parity(perm: Sequence[int]) -> int:
    """Paridad de una permutación de 0..n-1: 0 si es par, 1 si es impar.

    Se calcula por ciclos: un ciclo de largo k aporta k-1 transposiciones.
    """
    n = len(perm)
    visited = [False] * n
    swaps = 0
    for i in range(n):
        if visited[i]:
            continue
        j = i
        length = 0
        while not visited[j]:
            visited[j] = True
            j = perm[j]
            length += 1
        swaps += length - 1
    return swaps % 2

