"""Per-row transformation pipeline: coercion, dot-notation, field rules."""

from .coercion import coerce_row, coerce_value
from .nesting import expand_dot_notation, flatten_document
from .normalizer import normalize_row, process_row, process_rows
from .rules import APTITUDE_KEYS, DEFAULT_RULES, NormalizationRule

__all__ = [
    "APTITUDE_KEYS",
    "DEFAULT_RULES",
    "NormalizationRule",
    "coerce_row",
    "coerce_value",
    "expand_dot_notation",
    "flatten_document",
    "normalize_row",
    "process_row",
    "process_rows",
]
