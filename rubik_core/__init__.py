"""Modelo, validación y resolución de un cubo 3x3x3."""
import logging

from rubik_core.core.cube_model import Color, CubeModel, Face, Move, apply_moves
from rubik_core.errors import (
    CubeError,
    CubeValidationError,
    InvalidMoveNotation,
    SolveCancelled,
    SolverError,
    UnsolvableInput,
)
from rubik_core.logic.moves import format_move, format_sequence, parse_move, parse_sequence
from rubik_core.logic.scramble import generate_scramble
from rubik_core.logic.validator import is_valid, validate
from rubik_core.solve.solver import get_solver, solve

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Color",
    "CubeModel",
    "Face",
    "Move",
    "apply_moves",
    "CubeError",
    "CubeValidationError",
    "InvalidMoveNotation",
    "SolveCancelled",
    "SolverError",
    "UnsolvableInput",
    "format_move",
    "format_sequence",
    "parse_move",
    "parse_sequence",
    "generate_scramble",
    "is_valid",
    "validate",
    "get_solver",
    "solve",
]
