from __future__ import annotations

from enum import Enum


BOM = "\ufeff"


class DataFormat(str, Enum):
    XML = "xml"
    JSON = "json"
    UNRECOGNIZED = "unrecognized"


def trim_text(text: str) -> str:
    """Strip surrounding whitespace and a leading byte order mark."""
    return (text or "").strip().lstrip(BOM).strip()


def detect_format(text: str) -> DataFormat:
    """Classify raw text by its first non-blank character.

    This is a sniff only; the parser decides whether the content is valid.
    """
    stripped = trim_text(text)
    if stripped.startswith("<"):
        return DataFormat.XML
    if stripped.startswith(("{", "[")):
        return DataFormat.JSON
    return DataFormat.UNRECOGNIZED
