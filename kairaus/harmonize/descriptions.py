"""Human-readable descriptions of format tokens."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

import yaml

_DESCRIPTIONS: dict[str, dict[str, str]] | None = None
_DEFINITIONS_PATH = Path(__file__).parent / "vocabulary_descriptions.yaml"


def _load_descriptions() -> dict[str, dict[str, str]]:
    global _DESCRIPTIONS
    if _DESCRIPTIONS is not None:
        return _DESCRIPTIONS

    with open(_DEFINITIONS_PATH, encoding="utf-8") as f:
        _DESCRIPTIONS = yaml.safe_load(f)
    return _DESCRIPTIONS


def describe(member: Enum) -> str:
    """English description of an enum member, or its token when none is known."""
    table = _load_descriptions().get(type(member).__name__, {})
    return table.get(member.value, member.value)


def get_all_descriptions(enum_name: str) -> dict[str, str]:
    """Return token → description for one enum class name."""
    return dict(_load_descriptions().get(enum_name, {}))
