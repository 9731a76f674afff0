"""Exception hierarchy for json-table-editor.

Missing addresses are not errors: path lookups return the ``NOT_FOUND``
sentinel and writes to unreachable addresses are silent no-ops.
"""

from __future__ import annotations

__all__ = ["CoercionFailure", "CsvColumnsError", "EditorError", "ParseError"]


class EditorError(Exception):
    """Base class for every error raised by json-table-editor."""


class ParseError(EditorError, ValueError):
    """Malformed JSON or CSV input. The operation is aborted before any write.

    Attributes:
        message: Human-readable description suitable for the UI.
        line:    1-based line of the problem, when known.
        column:  1-based column of the problem, when known.
    """

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column


class CsvColumnsError(ParseError):
    """CSV header does not contain every column of the target table."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"Missing columns: {', '.join(missing)}")
        self.missing = missing


class CoercionFailure(EditorError, ValueError):
    """A single cell's text does not fit the kind of the value it replaces."""
