# rubik_core/solve/solver.py
from __future__ import annotations

from typing import Dict, List, Optional, Type

from rubik_core import config
from rubik_core.core.cube_model import CubeModel, Move
from rubik_core.solve.iddfs_solver import IDDFSSolver
from rubik_core.solve.layered_solver import LayerByLayerSolver
from rubik_core.solve.strategy import OnStageCallback, ShouldCancelCallback, SolverStrategy

STRATEGIES: Dict[str, Type[SolverStrategy]] = {
    LayerByLayerSolver.name: LayerByLayerSolver,
    IDDFSSolver.name: IDDFSSolver,
}


def get_solver(name: Optional[str] = None, **kwargs) -> SolverStrategy:
    """Crea la estrategia registrada con ese nombre.

    Args:
        name: "layered" o "iddfs". Si es None se usa `config.DEFAULT_STRATEGY`.
        **kwargs: Parámetros del constructor (ej: `max_depth` para "iddfs").

    Raises:
        ValueError: Si el nombre no corresponde a ninguna estrategia.
    """
    key = name or config.DEFAULT_STRATEGY
    try:
        cls = STRATEGIES[key]
    except KeyError:
        raise ValueError(
            f"Estrategia desconocida: {key!r} (opciones: {', '.join(sorted(STRATEGIES))})"
        ) from None
    return cls(**kwargs)


def solve(
    model: CubeModel,
    strategy: Optional[str] = None,
    should_cancel: Optional[ShouldCancelCallback] = None,
    on_stage: Optional[OnStageCallback] = None,
) -> List[Move]:
    """Resuelve `model` con la estrategia indicada (por defecto la de capas)."""
    return get_solver(strategy).solve(model, should_cancel=should_cancel, on_stage=on_stage)
