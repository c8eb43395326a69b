# rubik_core/app/solve_worker.py
from __future__ import annotations

import logging
import traceback
from typing import List, Optional

from PySide6.QtCore import QThread, Signal

from rubik_core.core.cube_model import CubeModel, Move
from rubik_core.errors import CubeError, SolveCancelled
from rubik_core.solve.solver import get_solver
from rubik_core.solve.strategy import SolverStrategy

logger = logging.getLogger(__name__)


class SolveWorker(QThread):
    """Hilo de trabajo para resolver el cubo sin bloquear la UI.

    Ejecuta una estrategia de resolución sobre una copia del estado del cubo,
    emitiendo señales para informar progreso y resultado.

    Signals:
        stage_update(str): Se emite cuando empieza una etapa (o profundidad) nueva.
        finished_solution(object): Se emite al terminar con la solución (list[Move]).
        failed(object): Se emite con el `CubeError` si el cubo es inválido o la
            estrategia no encontró solución.
        cancelled(): Se emite si se canceló antes o durante la búsqueda.
        error(str): Se emite con el traceback de un error inesperado.
    """

    stage_update = Signal(str)          # nombre de la etapa actual
    finished_solution = Signal(object)  # list[Move]
    failed = Signal(object)             # CubeError
    cancelled = Signal()
    error = Signal(str)                 # traceback si algo falla

    def __init__(self, model: CubeModel, solver: Optional[SolverStrategy] = None) -> None:
        """Crea el worker y clona el estado del cubo para trabajo en segundo plano.

        Importante: se clona el modelo para evitar condiciones de carrera, ya que la UI
        puede seguir modificando el cubo original.

        Args:
            model: Modelo del cubo que se quiere resolver.
            solver: Estrategia a usar. Por defecto la de `config.DEFAULT_STRATEGY`.
        """
        super().__init__()
        self.model: CubeModel = model.copy()
        self.solver: SolverStrategy = solver if solver is not None else get_solver()
        self._cancel_requested = False

    def cancel(self) -> None:
        """Pide cancelar la búsqueda. Puede llamarse antes de `start()`."""
        self._cancel_requested = True
        self.requestInterruption()

    def _should_cancel(self) -> bool:
        return self._cancel_requested or self.isInterruptionRequested()

    def run(self) -> None:
        """Punto de entrada del hilo.

        Llama a la estrategia y emite el resultado por señales.
        """
        if self._should_cancel():
            self.cancelled.emit()
            return

        try:
            sol: List[Move] = self.solver.solve(
                self.model,
                should_cancel=self._should_cancel,
                on_stage=self.stage_update.emit,
            )
        except SolveCancelled:
            self.cancelled.emit()
        except CubeError as exc:
            self.failed.emit(exc)
        except Exception:
            logger.exception("Error inesperado en %s", self.solver.name)
            self.error.emit(traceback.format_exc())
        else:
            self.finished_solution.emit(sol)
