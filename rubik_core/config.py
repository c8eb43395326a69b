# rubik_core/config.py
"""Constantes configurables del núcleo."""
from __future__ import annotations

from typing import Dict

# Largo por defecto de una mezcla
DEFAULT_SCRAMBLE_LENGTH: int = 20

# IDDFS de fuerza bruta: solo sirve para mezclas cortas
IDDFS_MAX_DEPTH: int = 6

# Estrategia usada por `rubik_core.solve.solve()` si no se indica otra
DEFAULT_STRATEGY: str = "layered"

# Profundidad máxima (en macros) de la búsqueda de cada etapa del solver por capas.
# Cada valor es mayor o igual que el peor caso conocido de la etapa.
STAGE_MAX_DEPTH: Dict[str, int] = {
    "cross_lift": 3,
    "cross_place": 4,
    "first_layer_corners": 3,
    "second_layer_edges": 3,
    "last_layer_edge_orientation": 6,
    "last_layer_corner_orientation": 7,
    "last_layer_corner_permutation": 6,
    "last_layer_edge_permutation": 6,
}
