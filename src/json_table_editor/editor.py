"""JsonTableEditor: session facade wiring TreeState to the table operations.

This is the object an embedding UI holds: it owns one TreeState and one
EditorConfig, parses intake text, applies cell/paste/CSV/row edits and
produces the export texts. It keeps no state outside the instance, so two
editors never interfere with each other.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from json_table_editor.config import EditorConfig
from json_table_editor.document import (
    DocumentInfo,
    is_json_file_name,
    parse_document,
    serialize,
)
from json_table_editor.exceptions import CoercionFailure, EditorError, ParseError
from json_table_editor.result import CellEdit, ImportResult, TransferResult
from json_table_editor.table.classifier import common_columns, is_table
from json_table_editor.table.csv_io import import_csv, to_csv
from json_table_editor.table.grid import parse_clipboard, paste_block
from json_table_editor.table.rows import add_row, delete_row
from json_table_editor.tree.kinds import (
    CONTAINER_KINDS,
    Kind,
    display,
    kind_of,
    parse_for_kind,
)
from json_table_editor.tree.state import AddressLike, TreeState

__all__ = ["JsonTableEditor"]

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = "document.json"


class JsonTableEditor:
    """One editing session over one JSON document.

    Example::

        from json_table_editor import JsonTableEditor

        editor = JsonTableEditor()
        editor.load_text('{"users": [{"name": "Ann", "age": 31}]}', "users.json")
        editor.edit_cell("users.0.age", "32").applied     # True
        editor.paste("users", 0, "name", "Bea\\t40")
        editor.export_json()                              # indented JSON text
        editor.info.export_name                           # "users_edited.json"
    """

    def __init__(self, config: EditorConfig | None = None) -> None:
        self._config: EditorConfig = config if config is not None else EditorConfig()
        self.state = TreeState()
        self.info: DocumentInfo | None = None

    @property
    def config(self) -> EditorConfig:
        return self._config

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------

    @property
    def has_document(self) -> bool:
        return self.state.has_document

    @property
    def document(self) -> Any:
        """The loaded document. Raises EditorError when nothing is loaded."""
        return self.state.root

    def load_text(
        self,
        text: str,
        file_name: str = DEFAULT_FILE_NAME,
        size: int | None = None,
    ) -> Any:
        """Parse ``text`` and make it the session's document.

        The previous document, if any, is replaced wholesale. On a parse error
        the session is left exactly as it was.

        Raises:
            ParseError: If ``text`` is not valid JSON.
        """
        document = parse_document(text)
        self.state.load(document)
        if size is None:
            size = len(text.encode("utf-8"))
        self.info = DocumentInfo(file_name=file_name, size_bytes=size)
        logger.info("Loaded %s (%d bytes)", file_name, size)
        return document

    def load_file(self, path: str | Path) -> Any:
        """Read and load a ``.json`` file from disk.

        Raises:
            ParseError: If the file is not named ``*.json`` or is not valid JSON.
            OSError: If the file cannot be read.
        """
        path = Path(path)
        if not is_json_file_name(path.name):
            msg = "Please upload a valid JSON file"
            raise ParseError(msg)
        raw = path.read_bytes()
        return self.load_text(
            raw.decode("utf-8-sig"), file_name=path.name, size=len(raw)
        )

    def clear(self) -> None:
        """Drop the document, its address sets and its file info."""
        self.state.clear()
        self.info = None
        logger.info("Cleared document")

    def _require_document(self) -> None:
        if not self.state.has_document:
            msg = "No document loaded"
            raise EditorError(msg)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def value_at(self, address: AddressLike) -> Any:
        """Value at ``address`` or ``NOT_FOUND``."""
        return self.state.get(address)

    def kind_at(self, address: AddressLike) -> Kind:
        return kind_of(self.state.get(address))

    def display_at(self, address: AddressLike) -> str:
        return display(self.state.get(address))

    def is_table(self, address: AddressLike) -> bool:
        return is_table(self.state.get(address), self._config)

    def columns(self, address: AddressLike) -> list[str]:
        """Current columns of the table at ``address``, recomputed every call."""
        return common_columns(self.state.get(address), self._config)

    # ------------------------------------------------------------------
    # Single-value edits
    # ------------------------------------------------------------------

    def edit_cell(self, address: AddressLike, text: str) -> CellEdit:
        """Apply an edited cell text, keeping the kind of the current value.

        On a coercion failure nothing is written and the returned ``display``
        is the pre-edit text the UI should restore. Nested objects and arrays
        are not cells; they are edited with :meth:`replace_subtree`.
        """
        self._require_document()
        addr = self.state.address(address)
        current = self.state.get(addr)
        kind = kind_of(current)
        if kind in CONTAINER_KINDS:
            return CellEdit(
                address=str(addr),
                applied=False,
                value=current,
                display=display(current),
                error=f"Nested {kind} must be edited as JSON with replace_subtree",
            )
        try:
            value = parse_for_kind(text.strip(), kind)
        except CoercionFailure as exc:
            logger.debug("Rejected edit of %s: %s", addr, exc)
            return CellEdit(
                address=str(addr),
                applied=False,
                value=current,
                display=display(current),
                error=f"Invalid value: {exc}",
            )

        if not self.state.set(addr, value):
            return CellEdit(
                address=str(addr),
                applied=False,
                value=current,
                display=display(current),
            )
        self.state.mark_modified(addr)
        return CellEdit(
            address=str(addr), applied=True, value=value, display=display(value)
        )

    def replace_subtree(self, address: AddressLike, json_text: str) -> Any:
        """Replace the value at ``address`` with parsed ``json_text``.

        Used for editing nested objects/arrays as raw JSON.

        Raises:
            ParseError: If ``json_text`` is not valid JSON; nothing is written.
        """
        self._require_document()
        value = parse_document(json_text)
        addr = self.state.address(address)
        if self.state.set(addr, value):
            self.state.mark_modified(addr)
            logger.info("Replaced nested data at %r", str(addr))
        return value

    # ------------------------------------------------------------------
    # Table edits
    # ------------------------------------------------------------------

    def paste(
        self, address: AddressLike, row: int, column: str, text: str
    ) -> TransferResult:
        """Paste tab/newline-delimited ``text`` into a table at (row, column)."""
        self._require_document()
        block = parse_clipboard(text)
        if not block:
            return TransferResult()
        return paste_block(self.state, address, row, column, block, self._config)

    def import_csv(self, address: AddressLike, text: str) -> ImportResult:
        """Replace a table's rows with a CSV body. See ``table.csv_io.import_csv``."""
        self._require_document()
        return import_csv(self.state, address, text, self._config)

    def export_csv(self, address: AddressLike, columns: list[str] | None = None) -> str:
        if columns is None:
            columns = self.columns(address)
        return to_csv(self.state, address, columns)

    def add_row(
        self, address: AddressLike, columns: list[str] | None = None
    ) -> int | None:
        self._require_document()
        if columns is None:
            columns = self.columns(address)
        return add_row(self.state, address, columns, self._config)

    def delete_row(self, address: AddressLike, row_index: int) -> bool:
        self._require_document()
        return delete_row(self.state, address, row_index)

    # ------------------------------------------------------------------
    # Expanded / modified sets
    # ------------------------------------------------------------------

    def toggle(self, address: AddressLike) -> bool:
        return self.state.toggle(address)

    def expand_all(self) -> None:
        self.state.expand_all()

    def collapse_all(self) -> None:
        self.state.collapse_all()

    def is_expanded(self, address: AddressLike) -> bool:
        return self.state.is_expanded(address)

    def is_modified(self, address: AddressLike) -> bool:
        return self.state.is_modified(address)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_json(self) -> str:
        """Serialize the current document.

        Raises:
            EditorError: If no document is loaded.
        """
        if not self.state.has_document:
            msg = "No data to export"
            raise EditorError(msg)
        return serialize(self.state.root, indent=self._config.indent)
