from __future__ import annotations

from collections.abc import Mapping
from typing import Any

"""Dot-notation reconstruction.

Flat CSV headers such as ``stats.hp`` describe nested objects. ``expand_dot_notation``
rebuilds the tree; ``flatten_document`` is its inverse and is used to feed an
already-normalized document back through the pipeline.

Conflicting shapes (``a`` holding a leaf while ``a.b`` wants an object) resolve
last-write-wins in key order: descending through a non-mapping replaces it with
a fresh object, and a leaf written over an object replaces the whole subtree.
"""

__all__ = [
    "SEPARATOR",
    "expand_dot_notation",
    "flatten_document",
]

SEPARATOR = "."


def expand_dot_notation(row: Mapping[str, Any]) -> dict[str, Any]:
    """Build a nested document from a flat mapping with dotted keys."""
    document: dict[str, Any] = {}
    for key, value in row.items():
        *parents, leaf = key.split(SEPARATOR)
        node = document
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[leaf] = value
    return document


def flatten_document(document: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested mappings back into dotted keys.

    Lists and scalars are leaves. Empty mappings have no dotted form and are
    kept as values under their own key.
    """
    flat: dict[str, Any] = {}
    for key, value in document.items():
        path = f"{prefix}{key}"
        if isinstance(value, Mapping) and value:
            flat.update(flatten_document(value, prefix=f"{path}{SEPARATOR}"))
        else:
            flat[path] = value
    return flat
