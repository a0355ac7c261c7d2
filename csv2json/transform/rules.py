from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

"""Field-specific normalization rules applied after dot-notation reconstruction.

Each rule declares when it fires (``applies``) and how it rewrites the document
in place (``apply``). ``DEFAULT_RULES`` fixes the order: tags, aptitudes, damage,
description.
"""

__all__ = [
    "APTITUDE_KEYS",
    "DEFAULT_RULES",
    "NormalizationRule",
    "default_aptitudes",
    "parse_int",
    "normalize_tags",
    "normalize_aptitudes",
    "normalize_damage",
    "normalize_description",
]

logger = logging.getLogger(__name__)

APTITUDE_KEYS: tuple[str, ...] = (
    "f", "i", "el", "w", "ea", "l", "d",
    "dp", "dm", "da", "h", "tb", "tt",
    "tg", "ta", "assist",
)

UNKNOWN_DAMAGE_TYPE = "unknown"

_LEADING_INTEGER = re.compile(r"\s*([+-]?[0-9]+)")


@dataclass(frozen=True)
class NormalizationRule:
    """A named, field-targeted transformation."""
    name: str
    applies: Callable[[dict[str, Any], Sequence[str]], bool]
    apply: Callable[[dict[str, Any]], None]


def default_aptitudes() -> dict[str, int]:
    """Fresh aptitude table with every known key set to 0."""
    return dict.fromkeys(APTITUDE_KEYS, 0)


def parse_int(value: Any) -> int | None:
    """Base-10 integer parse; ``None`` when the value has no integer reading.

    Floats truncate toward zero. Strings are read up to the end of their
    leading (optionally signed) digit run, so ``"2.5"`` -> 2 and ``"7abc"`` -> 7;
    a string with no leading digits has no reading. Booleans are not numbers here.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INTEGER.match(value)
        if match:
            return int(match.group(1))
    return None


# -- tags ---------------------------------------------------------------------

def _is_valid_tag(tag: Any) -> bool:
    return isinstance(tag, Mapping) and isinstance(tag.get("id"), str)


def normalize_tags(document: dict[str, Any]) -> None:
    tags = document.get("tags")
    if isinstance(tags, list):
        document["tags"] = [tag for tag in tags if _is_valid_tag(tag)]
    else:
        document["tags"] = []


# -- aptitudes ----------------------------------------------------------------

def _aptitude_overrides(raw: Any) -> dict[str, Any]:
    if raw is None or raw == "":
        return {}
    if isinstance(raw, str):
        if "-" not in raw:
            return {}
        key, _, text = raw.partition("-")
        key = key.lower()
        value = parse_int(text)
        if value is None:
            logger.warning("aptitude override %r has a non-integer value; using 0", raw)
            value = 0
        return {key: value}
    if isinstance(raw, Mapping):
        # already-normalized table fed back through the pipeline
        overrides: dict[str, Any] = {}
        for key, text in raw.items():
            value = parse_int(text)
            overrides[key] = 0 if value is None else value
        return overrides
    return {}


def normalize_aptitudes(document: dict[str, Any]) -> None:
    overrides = _aptitude_overrides(document.get("aptitudes"))
    unknown = [key for key in overrides if key not in APTITUDE_KEYS]
    if unknown:
        logger.debug("aptitude keys outside the default table kept: %s", unknown)
    aptitudes = default_aptitudes()
    aptitudes.update(overrides)
    document["aptitudes"] = aptitudes


# -- damage -------------------------------------------------------------------

def normalize_damage(document: dict[str, Any]) -> None:
    raw = document.get("damage")
    damage_type = document.pop("type", None)
    if isinstance(raw, Mapping) and "value" in raw:
        damage_type = damage_type or raw.get("type")
        raw = raw.get("value")
    value = parse_int(raw)
    document["damage"] = {
        "value": 0 if value is None else value,
        "type": damage_type or UNKNOWN_DAMAGE_TYPE,
    }


# -- description --------------------------------------------------------------

def normalize_description(document: dict[str, Any]) -> None:
    if not document.get("description"):
        document["description"] = ""


DEFAULT_RULES: tuple[NormalizationRule, ...] = (
    NormalizationRule(
        name="tags",
        applies=lambda document, headers: "tags" in headers,
        apply=normalize_tags,
    ),
    NormalizationRule(
        name="aptitudes",
        applies=lambda document, headers: "aptitudes" in document,
        apply=normalize_aptitudes,
    ),
    NormalizationRule(
        name="damage",
        applies=lambda document, headers: "damage" in document or "type" in document,
        apply=normalize_damage,
    ),
    NormalizationRule(
        name="description",
        applies=lambda document, headers: True,
        apply=normalize_description,
    ),
)
