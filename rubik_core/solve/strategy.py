# rubik_core/solve/strategy.py
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from rubik_core.core.cube_model import CubeModel, Move
from rubik_core.errors import CubeValidationError, SolveCancelled, UnsolvableInput
from rubik_core.logic.validator import validate

logger = logging.getLogger(__name__)

ShouldCancelCallback = Callable[[], bool]
OnStageCallback = Callable[[str], None]


class SolverStrategy(ABC):
    """Contrato común de los solvers: `solve(cubo) -> [Move]` o error.

    Las subclases implementan `_solve`, que recibe una copia ya validada y no
    resuelta del cubo. Este método se encarga de lo común a todas:

    1. Si la cancelación ya fue pedida, no hace nada (`SolveCancelled`).
    2. Valida; si falla lanza `UnsolvableInput` sin calcular ningún movimiento.
    3. Si el cubo ya está resuelto devuelve [].
    """

    name: str = "base"

    def solve(
        self,
        model: CubeModel,
        should_cancel: Optional[ShouldCancelCallback] = None,
        on_stage: Optional[OnStageCallback] = None,
    ) -> List[Move]:
        """Calcula una secuencia que lleva `model` al estado resuelto.

        Args:
            model: Cubo a resolver. No se modifica.
            should_cancel: Callback opcional; si devuelve True se aborta.
            on_stage: Callback opcional con el nombre de cada etapa que empieza.

        Returns:
            Movimientos que, aplicados en orden sobre `model`, lo resuelven.

        Raises:
            UnsolvableInput: Si la configuración no es legal.
            SolveCancelled: Si se pidió cancelar.
            SolverError: Si la estrategia no encontró solución dentro de sus límites.
        """
        if should_cancel is not None and should_cancel():
            raise SolveCancelled()

        try:
            validate(model)
        except CubeValidationError as exc:
            raise UnsolvableInput(exc) from exc

        if model.is_solved():
            return []

        moves = self._solve(model.copy(), should_cancel, on_stage)
        logger.debug("%s: solución de %d movimientos", self.name, len(moves))
        return moves

    @abstractmethod
    def _solve(
        self,
        working: CubeModel,
        should_cancel: Optional[ShouldCancelCallback],
        on_stage: Optional[OnStageCallback],
    ) -> List[Move]:
        """Resuelve `working` (copia validada y no resuelta; puede modificarse)."""
