from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    UNRECOGNIZED_FORMAT = "unrecognized_format"
    INVALID_FORMAT = "invalid_format"
    EMPTY_INPUT = "empty_input"
    IO_ERROR = "io_error"


class DataParseError(ValueError):
    """Base error for every failure while turning raw text into rows.

    ``kind`` says which stage failed, ``detail`` carries the underlying
    diagnostic (parser message, HTTP status) so callers can build their own
    message; ``str(exc)`` is already human readable.
    """

    kind: ErrorKind = ErrorKind.INVALID_FORMAT
    default_message = "Failed to parse data"

    def __init__(self, message: Optional[str] = None, *, detail: str = "", data_format=None):
        self.detail = detail
        self.data_format = data_format
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return self.args[0]


class UnrecognizedFormatError(DataParseError):
    kind = ErrorKind.UNRECOGNIZED_FORMAT
    default_message = "Unrecognized format. Please provide valid XML or JSON data."


class InvalidFormatError(DataParseError):
    kind = ErrorKind.INVALID_FORMAT
    default_message = "Invalid data format"


class EmptyInputError(DataParseError):
    kind = ErrorKind.EMPTY_INPUT
    default_message = "No data found in the provided input"


class FetchError(DataParseError):
    kind = ErrorKind.IO_ERROR
    default_message = "Failed to fetch data"
