from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from . import config
from .detection import DataFormat, detect_format, trim_text
from .errors import EmptyInputError, UnrecognizedFormatError
from .flattening import flatten
from .parsing import parse_tree
from .values import ValueKind, kind_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Row:
    """One parsed item: the nested tree plus its flattened projection.

    Rows are never modified after ``build_rows`` creates them.
    """

    original: Dict[str, Any]
    flat: Dict[str, Any]


@dataclass(frozen=True)
class NormalizedData:
    rows: List[Row]
    headers: List[str]
    data_format: DataFormat


def coerce_item(item: Any, scalar_key: Optional[str] = None) -> Dict[str, Any]:
    """Wrap a non-mapping item as ``{scalar_key: item}``."""
    if kind_of(item) is ValueKind.MAPPING:
        return item
    return {scalar_key or config.SCALAR_ITEM_KEY: item}


def build_rows(items: Iterable[Any], scalar_key: Optional[str] = None) -> List[Row]:
    rows: List[Row] = []
    for item in items:
        original = coerce_item(item, scalar_key)
        rows.append(Row(original=original, flat=flatten(original)))
    return rows


def collect_headers(rows: Iterable[Row]) -> List[str]:
    """Union of flattened keys in first-seen order across all rows."""
    seen = set()
    headers: List[str] = []
    for row in rows:
        for key in row.flat:
            if key not in seen:
                seen.add(key)
                headers.append(key)
    return headers


def normalize(text: str, **options) -> NormalizedData:
    """Turn raw XML or JSON text into rows and headers.

    Raises a ``DataParseError`` subclass on any failure; nothing partial is
    returned.
    """
    text = trim_text(text)
    if not text:
        raise EmptyInputError("Please provide data to parse")

    data_format = detect_format(text)
    if data_format is DataFormat.UNRECOGNIZED:
        logger.warning("Unrecognized input starting with %r", text[:20])
        raise UnrecognizedFormatError(
            detail="first character is neither '<', '{' nor '['",
            data_format=DataFormat.UNRECOGNIZED,
        )

    scalar_key = options.pop("scalar_key", None)
    items = parse_tree(text, data_format, **options)
    rows = build_rows(items, scalar_key)
    headers = collect_headers(rows)
    logger.info("Parsed %s input: %d rows, %d columns", data_format.value, len(rows), len(headers))
    return NormalizedData(rows=rows, headers=headers, data_format=data_format)
