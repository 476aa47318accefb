"""Core logic for the XML/JSON Data Grid.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- detect and parse XML or JSON text into value trees
- flatten each item into a row and collect the column headers
- search, filter and sort rows
- summarize and re-tabulate the nested parts of a row
"""
from .errors import (
    DataParseError,
    EmptyInputError,
    ErrorKind,
    FetchError,
    InvalidFormatError,
    UnrecognizedFormatError,
)
from .nested import classify, summarize, tabulate_array
from .query import QueryState, SortDirection, query, toggle_sort
from .records import NormalizedData, Row, normalize

__all__ = [
    "DataParseError",
    "EmptyInputError",
    "ErrorKind",
    "FetchError",
    "InvalidFormatError",
    "NormalizedData",
    "QueryState",
    "Row",
    "SortDirection",
    "UnrecognizedFormatError",
    "classify",
    "normalize",
    "query",
    "summarize",
    "tabulate_array",
    "toggle_sort",
]
