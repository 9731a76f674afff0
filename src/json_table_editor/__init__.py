"""JSON table editor - path-addressed, editable tree/table model for JSON documents."""

from __future__ import annotations

from json_table_editor.config import EditorConfig
from json_table_editor.document import DocumentInfo, parse_document, serialize
from json_table_editor.editor import JsonTableEditor
from json_table_editor.exceptions import (
    CoercionFailure,
    CsvColumnsError,
    EditorError,
    ParseError,
)
from json_table_editor.result import CellEdit, CellFailure, ImportResult, TransferResult
from json_table_editor.tree import NOT_FOUND, Address, Kind, TreeState

__version__: str = "0.1.0"
__all__: list[str] = [
    "NOT_FOUND",
    "Address",
    "CellEdit",
    "CellFailure",
    "CoercionFailure",
    "CsvColumnsError",
    "DocumentInfo",
    "EditorConfig",
    "EditorError",
    "ImportResult",
    "JsonTableEditor",
    "Kind",
    "ParseError",
    "TransferResult",
    "TreeState",
    "parse_document",
    "serialize",
]
