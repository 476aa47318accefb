"""Gradio event handlers.

Each handler takes the current session state plus widget values and returns
the tuple of outputs wired up in ``app.py``. A failed parse keeps whatever
was loaded before.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, List, Optional

import gradio as gr
import pandas as pd

from . import config
from .accessors import get_value_by_path
from .errors import DataParseError
from .io_utils import fetch_text, read_text_content
from .nested import classify, describe_value, summarize
from .query import (
    QueryState,
    SortDirection,
    active_filter_count,
    clear_query,
    query,
    set_column_filter,
    toggle_sort,
)
from .records import NormalizedData, normalize
from .values import stringify

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No data to display. Please parse some data first."
NO_RESULTS_MESSAGE = "No results found with current filters."


def view_to_frame(rows, headers: List[str], limit: Optional[int] = None) -> pd.DataFrame:
    limit = config.PREVIEW_ROWS if limit is None else limit
    records = [[stringify(row.flat.get(h)) for h in headers] for row in rows[: max(1, int(limit))]]
    return pd.DataFrame(records, columns=headers)


def grid_summary(data: Optional[NormalizedData], state: QueryState, view, limit: Optional[int] = None) -> str:
    if data is None:
        return NO_DATA_MESSAGE
    limit = max(1, int(config.PREVIEW_ROWS if limit is None else limit))
    parts = [f"{len(view)} rows"]
    if len(view) > limit:
        parts[0] += f" (showing first {limit})"
    active = active_filter_count(state)
    if active:
        parts.append(f"{active} active filter{'s' if active != 1 else ''}")
    if state.sort_column is not None:
        parts.append(f"sorted by {state.sort_column} ({state.sort_direction.value})")
    summary = " | ".join(parts)
    if not view and data.rows:
        summary += f"\n{NO_RESULTS_MESSAGE}"
    return summary


def render_grid(data: Optional[NormalizedData], state: QueryState):
    if data is None:
        return state, pd.DataFrame(), grid_summary(None, state, [])
    view = query(data.rows, state)
    return state, view_to_frame(view, data.headers), grid_summary(data, state, view)


def _load_result(data: Optional[NormalizedData], state: QueryState, status: str, reset_inputs: bool = False):
    headers = data.headers if data is not None else []
    if reset_inputs:
        filter_column = gr.update(choices=headers, value=headers[0] if headers else None)
        sort_column = gr.update(choices=headers, value=None)
    else:
        filter_column = sort_column = gr.update()
    state, frame, summary = render_grid(data, state)
    return (
        data,
        state,
        status,
        frame,
        summary,
        filter_column,
        sort_column,
        "",
        "" if reset_inputs else gr.update(),
        "" if reset_inputs else gr.update(),
    )


def handle_parse(text: str, current: Optional[NormalizedData], current_state: Optional[QueryState] = None):
    """Normalize ``text``; on failure keep ``current`` and report why."""
    current_state = current_state or QueryState()
    try:
        data = normalize(text)
    except DataParseError as exc:
        logger.info("Parse failed (%s): %s", exc.kind.value, exc.detail or exc)
        return _load_result(current, current_state, str(exc))

    status = (
        f"Successfully parsed {data.data_format.value.upper()}. "
        f"Found {len(data.rows)} rows with {len(data.headers)} columns."
    )
    return _load_result(data, QueryState(), status, reset_inputs=True)


def parse_text_handler(text, current, current_state=None):
    return handle_parse(text or '', current, current_state)


def upload_file_handler(file_obj, current, current_state=None):
    try:
        text = read_text_content(file_obj)
    except DataParseError as exc:
        return _load_result(current, current_state or QueryState(), str(exc))
    return handle_parse(text, current, current_state)


def fetch_url_handler(url, current, current_state=None):
    try:
        text = fetch_text(url)
    except DataParseError as exc:
        return _load_result(current, current_state or QueryState(), str(exc))
    return handle_parse(text, current, current_state)


def search_handler(data, state: QueryState, term: str):
    return render_grid(data, replace(state or QueryState(), search_term=term or ''))


def column_filter_handler(data, state: QueryState, column: str, term: str):
    state = state or QueryState()
    if not column:
        return render_grid(data, state)
    return render_grid(data, set_column_filter(state, column, term or ''))


def sort_handler(data, state: QueryState, column: str):
    state = state or QueryState()
    if not column:
        return render_grid(data, state)
    return render_grid(data, toggle_sort(state, column))


def clear_filters_handler(data):
    state, frame, summary = render_grid(data, clear_query())
    return state, frame, summary, "", ""


def sort_button_label(state: Optional[QueryState], column: Optional[str]) -> str:
    if state is None or not column or state.sort_column != column:
        return "Sort ascending"
    if state.sort_direction is SortDirection.ASC:
        return "Sort descending"
    return "Clear sort"


def _md_escape(text: str) -> str:
    return text.replace('|', '\\|').replace('\n', ' ')


def _md_table(headers: List[str], cells: List[List[str]]) -> str:
    lines = [
        '| ' + ' | '.join(_md_escape(h) for h in headers) + ' |',
        '| ' + ' | '.join('---' for _ in headers) + ' |',
    ]
    for row in cells:
        lines.append('| ' + ' | '.join(_md_escape(c) for c in row) + ' |')
    return '\n'.join(lines)


def render_value_markdown(name: str, value: Any) -> str:
    description = describe_value(value)
    title = f"#### {_md_escape(name)} {summarize(value)}" if description['kind'] != 'scalar' else f"#### {_md_escape(name)}"
    if description['kind'] == 'table':
        body = _md_table(description['headers'], description['cells']) if description['headers'] else "_empty objects_"
    elif description['kind'] == 'scalar':
        body = description['text'] or "_empty_"
    elif description['entries']:
        body = '\n'.join(f"- **{_md_escape(k)}:** {_md_escape(v)}" for k, v in description['entries'])
    else:
        body = "_empty_"
    return f"{title}\n\n{body}"


def expand_row_handler(data, state: QueryState, row_number, nested_path: str) -> str:
    """Render the nested fields of one row of the current view.

    ``row_number`` is 1-based within the filtered/sorted view. With a
    ``nested_path`` only that value (relative to the row) is rendered, which
    allows drilling into any depth.
    """
    if data is None:
        return NO_DATA_MESSAGE
    view = query(data.rows, state or QueryState())
    try:
        index = int(row_number) - 1
    except (TypeError, ValueError):
        return "Enter a row number."
    if not 0 <= index < len(view):
        return f"Row number must be between 1 and {len(view)}."
    row = view[index]

    path = (nested_path or '').strip()
    if path:
        try:
            value = get_value_by_path(row.original, path)
        except KeyError as exc:
            return str(exc.args[0])
        return render_value_markdown(path, value)

    classification = classify(row)
    if not classification.expandable:
        return f"Row {index + 1} has no nested fields."
    return '\n\n'.join(render_value_markdown(key, value) for key, value in classification.fields.items())


def filter_term_for_column(state: Optional[QueryState], column: Optional[str]) -> str:
    if state is None or not column:
        return ""
    return state.column_filters.get(column, "")
