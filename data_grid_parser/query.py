"""Search, filter and sort over normalized rows.

Every function here is pure: query state goes in, a new state or a new
ordered list of rows comes out.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from functools import cmp_to_key
from typing import Any, Callable, Dict, Iterable, List, Optional

from .records import Row
from .values import stringify

Collate = Callable[[str, str], int]

_NUMBER_RE = re.compile(r'^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$')


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"
    NONE = "none"


@dataclass(frozen=True)
class QueryState:
    search_term: str = ''
    column_filters: Dict[str, str] = field(default_factory=dict)
    sort_column: Optional[str] = None
    sort_direction: SortDirection = SortDirection.NONE

    def __post_init__(self):
        if (self.sort_column is None) != (self.sort_direction is SortDirection.NONE):
            raise ValueError(
                f"sort_column and sort_direction must be set together "
                f"(got {self.sort_column!r}, {self.sort_direction.value!r})"
            )


def toggle_sort(state: QueryState, column: str) -> QueryState:
    """Cycle a column through ascending -> descending -> unsorted.

    Choosing a different column always starts it at ascending.
    """
    if state.sort_column != column:
        return replace(state, sort_column=column, sort_direction=SortDirection.ASC)
    if state.sort_direction is SortDirection.ASC:
        return replace(state, sort_direction=SortDirection.DESC)
    return replace(state, sort_column=None, sort_direction=SortDirection.NONE)


def set_column_filter(state: QueryState, column: str, term: str) -> QueryState:
    filters = dict(state.column_filters)
    if term:
        filters[column] = term
    else:
        filters.pop(column, None)
    return replace(state, column_filters=filters)


def clear_query() -> QueryState:
    return QueryState()


def active_filter_count(state: QueryState) -> int:
    count = sum(1 for term in state.column_filters.values() if term)
    return count + (1 if state.search_term else 0)


def parse_number(text: Any) -> Optional[float]:
    """Return ``text`` as a float, or None when it is not plainly numeric."""
    if isinstance(text, bool):
        return None
    if isinstance(text, (int, float)):
        return None if isinstance(text, float) and math.isnan(text) else float(text)
    if not isinstance(text, str):
        return None
    candidate = text.strip()
    if not _NUMBER_RE.match(candidate):
        return None
    return float(candidate)


def default_collate(a: str, b: str) -> int:
    """Case-insensitive ordering with a code-point tie-break."""
    ka, kb = a.casefold(), b.casefold()
    if ka != kb:
        return -1 if ka < kb else 1
    if a != b:
        return -1 if a < b else 1
    return 0


def compare_values(a: str, b: str, collate: Optional[Collate] = None) -> int:
    """Numeric comparison when both sides are numbers, collation otherwise."""
    num_a, num_b = parse_number(a), parse_number(b)
    if num_a is not None and num_b is not None:
        return (num_a > num_b) - (num_a < num_b)
    result = (collate or default_collate)(a, b)
    return (result > 0) - (result < 0)


def _contains(value: Any, needle: str) -> bool:
    return needle in stringify(value).casefold()


def query(rows: Iterable[Row], state: QueryState, collate: Optional[Collate] = None) -> List[Row]:
    """Apply global search, column filters and then sort.

    Returns a new list; rows with equal sort values keep their order.
    """
    result = list(rows)

    if state.search_term:
        needle = state.search_term.casefold()
        result = [row for row in result if any(_contains(v, needle) for v in row.flat.values())]

    for column, term in state.column_filters.items():
        if not term:
            continue
        needle = term.casefold()
        result = [row for row in result if _contains(row.flat.get(column), needle)]

    if state.sort_column is not None and state.sort_direction is not SortDirection.NONE:
        column = state.sort_column
        sign = -1 if state.sort_direction is SortDirection.DESC else 1
        keyed = [(stringify(row.flat.get(column)), row) for row in result]
        keyed.sort(key=cmp_to_key(lambda x, y: sign * compare_values(x[0], y[0], collate)))
        result = [row for _, row in keyed]

    return result
