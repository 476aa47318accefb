"""Tests for the Gradio handlers, called as plain functions."""

from data_grid_parser.handlers import (
    NO_DATA_MESSAGE,
    NO_RESULTS_MESSAGE,
    clear_filters_handler,
    column_filter_handler,
    expand_row_handler,
    filter_term_for_column,
    grid_summary,
    handle_parse,
    search_handler,
    sort_button_label,
    sort_handler,
    upload_file_handler,
    view_to_frame,
)
from data_grid_parser.query import QueryState, SortDirection
from data_grid_parser.records import NormalizedData, normalize

SAMPLE = """[
  {"name": "John", "age": 30, "address": {"city": "NY"}, "orders": [{"id": 1, "total": 9.5}, {"id": 2}]},
  {"name": "Jane", "age": 25, "address": {"city": "LA"}, "orders": []}
]"""


def _loaded():
    return normalize(SAMPLE)


def test_handle_parse_success_resets_state():
    outputs = handle_parse(SAMPLE, None, QueryState(search_term="old"))
    data, state, status, frame = outputs[:4]
    assert isinstance(data, NormalizedData)
    assert state == QueryState()
    assert "Found 2 rows with 4 columns" in status
    assert list(frame.columns) == ["name", "age", "address.city", "orders"]
    assert frame["name"].tolist() == ["John", "Jane"]
    assert outputs[-2:] == ("", "")


def test_handle_parse_failure_keeps_previous_data():
    previous = _loaded()
    state = QueryState(search_term="jo")
    outputs = handle_parse("not data", previous, state)
    assert outputs[0] is previous
    assert outputs[1] == state
    assert outputs[2].startswith("Unrecognized format")
    assert outputs[3]["name"].tolist() == ["John"]


def test_upload_handler_reports_missing_file():
    outputs = upload_file_handler(None, None)
    assert outputs[0] is None
    assert outputs[2] == "No file uploaded."
    assert outputs[4] == NO_DATA_MESSAGE


def test_search_and_filter_handlers():
    data = _loaded()
    state, frame, summary = search_handler(data, QueryState(), "jane")
    assert frame["name"].tolist() == ["Jane"]
    assert summary.startswith("1 rows | 1 active filter")

    state, frame, summary = column_filter_handler(data, state, "address.city", "zz")
    assert frame.empty
    assert NO_RESULTS_MESSAGE in summary
    assert filter_term_for_column(state, "address.city") == "zz"


def test_sort_handler_cycles():
    data = _loaded()
    state, frame, _ = sort_handler(data, QueryState(), "age")
    assert frame["name"].tolist() == ["Jane", "John"]
    assert sort_button_label(state, "age") == "Sort descending"
    state, frame, _ = sort_handler(data, state, "age")
    assert frame["name"].tolist() == ["John", "Jane"]
    assert state.sort_direction is SortDirection.DESC
    assert sort_button_label(state, "age") == "Clear sort"
    state, frame, _ = sort_handler(data, state, "age")
    assert state == QueryState()


def test_clear_filters_handler():
    state, frame, summary, search, term = clear_filters_handler(_loaded())
    assert state == QueryState()
    assert len(frame) == 2
    assert (search, term) == ("", "")


def test_view_to_frame_renders_string_forms():
    data = _loaded()
    frame = view_to_frame(data.rows, data.headers, limit=1)
    assert len(frame) == 1
    assert frame.loc[0, "orders"] == '[{"id": 1, "total": 9.5}, {"id": 2}]'
    assert frame.loc[0, "age"] == "30"


def test_expand_row_renders_nested_fields():
    text = expand_row_handler(_loaded(), QueryState(), 1, "")
    assert "#### address {1 fields}" in text
    assert "- **city:** NY" in text
    assert "#### orders [2 items]" in text
    assert "| id | total |" in text
    assert "| 2 |  |" in text


def test_expand_row_follows_nested_path_and_view_order():
    data = _loaded()
    state = QueryState(sort_column="age", sort_direction=SortDirection.ASC)
    assert "_empty_" in expand_row_handler(data, state, 1, "orders")
    assert "9.5" in expand_row_handler(data, state, 2, "orders.0.total")
    assert "not found" in expand_row_handler(data, state, 2, "orders.7")


def test_expand_row_bounds():
    assert expand_row_handler(None, QueryState(), 1, "") == NO_DATA_MESSAGE
    assert expand_row_handler(_loaded(), QueryState(), 5, "") == "Row number must be between 1 and 2."


def test_grid_summary_notes_truncated_grid():
    data = normalize("[" + ", ".join('{"n": %d}' % i for i in range(5)) + "]")
    view = data.rows
    assert grid_summary(data, QueryState(), view, limit=3).startswith("5 rows (showing first 3)")
    assert len(view_to_frame(view, data.headers, limit=3)) == 3
    assert grid_summary(data, QueryState(), view, limit=10) == "5 rows"
