"""The generic value tree shared by both input formats.

A value is one of:
- a mapping (``dict``, insertion ordered, string keys)
- a sequence (``list``)
- a scalar (``str``, ``int``, ``float``, ``bool`` or ``None``)
"""
from __future__ import annotations

import json
from enum import Enum
from typing import Any

SCALAR_TYPES = (str, int, float, bool)


class ValueKind(Enum):
    SCALAR = "scalar"
    MAPPING = "mapping"
    SEQUENCE = "sequence"


def kind_of(value: Any) -> ValueKind:
    if isinstance(value, dict):
        return ValueKind.MAPPING
    if isinstance(value, list):
        return ValueKind.SEQUENCE
    if value is None or isinstance(value, SCALAR_TYPES):
        return ValueKind.SCALAR
    raise TypeError(f"Unsupported value type: {type(value).__name__}")


def is_nested(value: Any) -> bool:
    return kind_of(value) is not ValueKind.SCALAR


def stringify(value: Any) -> str:
    """String form used for searching, filtering, sorting and display."""
    kind = kind_of(value)
    if kind is ValueKind.SCALAR:
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    if kind is ValueKind.SEQUENCE and all(kind_of(v) is ValueKind.SCALAR for v in value):
        return ", ".join(stringify(v) for v in value)
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)
