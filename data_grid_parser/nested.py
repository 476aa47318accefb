"""Drill-down helpers for the nested parts of a row."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .records import Row
from .values import ValueKind, is_nested, kind_of, stringify


@dataclass(frozen=True)
class Classification:
    expandable: bool
    fields: Dict[str, Any]


def has_nested_fields(original: Dict[str, Any]) -> bool:
    return any(is_nested(value) for value in original.values())


def nested_fields(original: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in original.items() if is_nested(value)}


def classify(row: Row) -> Classification:
    fields = nested_fields(row.original)
    return Classification(expandable=bool(fields), fields=fields)


def summarize(value: Any) -> str:
    """One-line summary: ``[N items]``, ``{N fields}`` or the scalar text."""
    kind = kind_of(value)
    if kind is ValueKind.SEQUENCE:
        return f"[{len(value)} items]"
    if kind is ValueKind.MAPPING:
        return f"{{{len(value)} fields}}"
    return stringify(value)


def tabulate_array(items: List[Any]) -> Optional[Tuple[List[str], List[Any]]]:
    """Re-tabulate a list of objects as ``(headers, rows)``.

    Headers are the union of keys over every mapping element, first seen
    first. Returns None when the list is empty or does not start with a
    mapping.
    """
    if not items or kind_of(items[0]) is not ValueKind.MAPPING:
        return None

    headers: List[str] = []
    seen = set()
    for item in items:
        if kind_of(item) is not ValueKind.MAPPING:
            continue
        for key in item:
            if key not in seen:
                seen.add(key)
                headers.append(key)
    return headers, items


def table_cells(headers: List[str], rows: List[Any]) -> List[List[str]]:
    cells: List[List[str]] = []
    for row in rows:
        if kind_of(row) is not ValueKind.MAPPING:
            # Non-object element inside an object table: show it in the first column.
            cells.append([summarize(row)] + [''] * (len(headers) - 1))
            continue
        cells.append([summarize(row[h]) if h in row else '' for h in headers])
    return cells


def describe_value(value: Any) -> Dict[str, Any]:
    kind = kind_of(value)
    if kind is ValueKind.MAPPING:
        return {
            'kind': 'fields',
            'entries': [(key, summarize(sub)) for key, sub in value.items()],
        }
    if kind is ValueKind.SEQUENCE:
        table = tabulate_array(value)
        if table is not None:
            headers, rows = table
            return {'kind': 'table', 'headers': headers, 'cells': table_cells(headers, rows)}
        return {
            'kind': 'items',
            'entries': [(str(index), summarize(item)) for index, item in enumerate(value)],
        }
    return {'kind': 'scalar', 'text': stringify(value)}
