from rubik_core.logic.moves import (
    ALL_MOVES,
    format_move,
    format_sequence,
    inverse_move,
    invert_sequence,
    normalize_token,
    opposite,
    parse_move,
    parse_sequence,
    simplify_sequence,
)
from rubik_core.logic.scramble import generate_scramble, scramble_to_text, scrambled_model
from rubik_core.logic.validator import is_valid, validate

__all__ = [
    "ALL_MOVES",
    "format_move",
    "format_sequence",
    "inverse_move",
    "invert_sequence",
    "normalize_token",
    "opposite",
    "parse_move",
    "parse_sequence",
    "simplify_sequence",
    "generate_scramble",
    "scramble_to_text",
    "scrambled_model",
    "is_valid",
    "validate",
]
