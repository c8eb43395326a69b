# rubik_core/errors.py
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from rubik_core.core.cube_model import Color


class CubeError(ValueError):
    """Error base de todo el paquete.

    Hereda de `ValueError` porque todos los fallos esperados (notación mal escrita,
    configuración imposible) son problemas con el valor de entrada.
    """


class InvalidMoveNotation(CubeError):
    """La notación de un movimiento no respeta la gramática `cara [ ' | 2 ]`."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Movimiento inválido: {text!r}")


# --------------------------
# Validación
# --------------------------
class CubeValidationError(CubeError):
    """Base de los errores de legalidad de una configuración."""

    message: str = "Configuración inválida."

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.message)


class InvalidFaceConfiguration(CubeValidationError):
    message = "Configuración de caras inválida: cada cara debe tener exactamente 9 stickers."


class InvalidStickerCount(CubeValidationError):
    """Un color no aparece exactamente 9 veces entre los 54 stickers."""

    def __init__(self, color: "Color", count: int) -> None:
        self.color = color
        self.count = count
        if count > 9:
            msg = f"Hay demasiados stickers de color {color.value}: se esperaban 9, hay {count}."
        else:
            msg = f"Faltan stickers de color {color.value}: se esperaban 9, hay {count}."
        super().__init__(msg)


class NonUniqueCenters(CubeValidationError):
    message = "Los colores de los centros deben ser todos distintos."


class InvalidPieceConfiguration(CubeValidationError):
    message = (
        "Combinación de colores imposible: alguna esquina o arista no existe "
        "en un cubo real o aparece repetida."
    )


class InvalidCornerOrientation(CubeValidationError):
    message = "Error de giro de esquinas: ninguna esquina de un cubo real puede quedar así."


class InvalidEdgeOrientation(CubeValidationError):
    message = "Error de volteo de aristas: ninguna arista de un cubo real puede quedar así."


class InvalidPermutationParity(CubeValidationError):
    message = "Paridad de permutación inválida: las piezas no pueden quedar ordenadas así."


# --------------------------
# Solver
# --------------------------
class UnsolvableInput(CubeError):
    """El solver se niega a trabajar porque la validación falló.

    Attributes:
        cause: Error de validación original.
    """

    def __init__(self, cause: CubeValidationError) -> None:
        self.cause = cause
        super().__init__(f"El cubo no se puede resolver: {cause}")


class SolverError(CubeError):
    """Una estrategia no encontró solución dentro de sus límites."""


class SolveCancelled(CubeError):
    """La resolución se canceló antes de terminar (o antes de empezar)."""

    def __init__(self) -> None:
        super().__init__("Búsqueda cancelada.")
