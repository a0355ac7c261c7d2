from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from .coercion import coerce_row
from .nesting import expand_dot_notation
from .rules import DEFAULT_RULES, NormalizationRule

"""Row normalizer: coerced flat row -> normalized JSON document.

Rows are independent; nothing here keeps state between calls, and the input
mapping is never mutated.
"""

__all__ = [
    "normalize_row",
    "process_row",
    "process_rows",
]


def normalize_row(
    row: Mapping[str, Any],
    headers: Sequence[str],
    rules: Sequence[NormalizationRule] = DEFAULT_RULES,
) -> dict[str, Any]:
    """Rebuild nested structure from dotted keys, then apply ``rules`` in order.

    Args:
        row: Coerced flat record
        headers: Header names of the source file (the tags rule depends on them)
        rules: Ordered normalization rules

    Returns:
        Freshly allocated normalized document
    """
    document = expand_dot_notation(row)
    for rule in rules:
        if rule.applies(document, headers):
            rule.apply(document)
    return document


def process_row(
    raw_row: Mapping[str, Any],
    headers: Sequence[str],
    rules: Sequence[NormalizationRule] = DEFAULT_RULES,
) -> dict[str, Any]:
    """Coerce every cell of ``raw_row`` and normalize the result."""
    return normalize_row(coerce_row(raw_row), headers, rules)


def process_rows(
    rows: Iterable[Mapping[str, Any]],
    headers: Sequence[str],
    rules: Sequence[NormalizationRule] = DEFAULT_RULES,
) -> list[dict[str, Any]]:
    """Order-preserving ``process_row`` over a whole table."""
    return [process_row(row, headers, rules) for row in rows]
