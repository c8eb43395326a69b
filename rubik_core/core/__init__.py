from rubik_core.core.cube_model import (
    FACES,
    Amount,
    Color,
    CubeModel,
    Face,
    Move,
    apply_moves,
)
from rubik_core.core.pieces import (
    CORNER_SLOTS,
    EDGE_SLOTS,
    PieceState,
    extract_corners,
    extract_edges,
    permutation_parity,
)

__all__ = [
    "FACES",
    "Amount",
    "Color",
    "CubeModel",
    "Face",
    "Move",
    "apply_moves",
    "CORNER_SLOTS",
    "EDGE_SLOTS",
    "PieceState",
    "extract_corners",
    "extract_edges",
    "permutation_parity",
]
