# rubik_core/logic/validator.py
from __future__ import annotations

import logging
from collections import Counter
from typing import List

from rubik_core.core.cube_model import Color, CubeModel
from rubik_core.core.pieces import (
    PieceState,
    extract_corners,
    extract_edges,
    permutation_parity,
)
from rubik_core.errors import (
    CubeValidationError,
    InvalidCornerOrientation,
    InvalidEdgeOrientation,
    InvalidFaceConfiguration,
    InvalidPermutationParity,
    InvalidPieceConfiguration,
    InvalidStickerCount,
    NonUniqueCenters,
)

logger = logging.getLogger(__name__)


def validate(model: CubeModel) -> None:
    """Verifica que la configuración pueda obtenerse desde el cubo resuelto.

    Controles, en este orden (se detiene en el primero que falla):
        0. Estructura: 6 caras de 9 stickers, todos colores válidos.
        1. Cada color aparece exactamente 9 veces.
        2. Los 6 centros son distintos.
        3. Cada posición contiene una pieza real y ninguna pieza se repite.
        4. Suma de orientaciones de esquinas ≡ 0 (mod 3).
        5. Suma de orientaciones de aristas ≡ 0 (mod 2).
        6. Paridad de la permutación de esquinas == paridad de la de aristas.

    Args:
        model: Cubo a validar. No se modifica.

    Raises:
        CubeValidationError: La subclase concreta indica qué invariante falló.
    """
    try:
        _check_structure(model)
        _check_sticker_counts(model)
        _check_centers(model)

        corners = extract_corners(model)
        edges = extract_edges(model)
        _check_pieces(corners, edges)
        _check_orientations(corners, edges)
        _check_parity(corners, edges)
    except CubeValidationError as exc:
        logger.info("Configuración rechazada: %s", type(exc).__name__)
        raise


def is_valid(model: CubeModel) -> bool:
    """True si `validate(model)` no lanza error."""
    try:
        validate(model)
    except CubeValidationError:
        return False
    return True


def _check_structure(model: CubeModel) -> None:
    for f in model.FACES:
        stickers = model.state.get(f)
        if stickers is None or len(stickers) != 9:
            raise InvalidFaceConfiguration()
        if not all(isinstance(s, Color) for s in stickers):
            raise InvalidFaceConfiguration()


def _check_sticker_counts(model: CubeModel) -> None:
    counts = Counter(model.to_flat())

    # Primero los colores que sobran: así se nombra el color "culpable"
    for color in Color:
        if counts[color] > 9:
            raise InvalidStickerCount(color, counts[color])
    for color in Color:
        if counts[color] < 9:
            raise InvalidStickerCount(color, counts[color])


def _check_centers(model: CubeModel) -> None:
    if len(set(model.centers().values())) != 6:
        raise NonUniqueCenters()


def _check_pieces(corners: List[PieceState], edges: List[PieceState]) -> None:
    for pieces in (corners, edges):
        ids = [p.identity for p in pieces]
        if None in ids or len(set(ids)) != len(ids):
            raise InvalidPieceConfiguration()


def _check_orientations(corners: List[PieceState], edges: List[PieceState]) -> None:
    if sum(p.orientation for p in corners) % 3 != 0:
        raise InvalidCornerOrientation()
    if sum(p.orientation for p in edges) % 2 != 0:
        raise InvalidEdgeOrientation()


def _check_parity(corners: List[PieceState], edges: List[PieceState]) -> None:
    corner_parity = permutation_parity([p.identity for p in corners])
    edge_parity = permutation_parity([p.identity for p in edges])
    if corner_parity != edge_parity:
        raise InvalidPermutationParity()
