"""CSV export and import for table arrays.

Export writes a header line followed by one line per row. Text containing a
comma, a line break or a double quote is quoted with internal quotes doubled,
and nested objects/arrays are always written as quoted compact JSON.

Import replaces the whole array with the CSV rows. The CSV header must contain
every current column of the table; only those columns are kept, and each value
is coerced to the kind found in the table's first row before the import.
"""

from __future__ import annotations

import csv
import io
import json
import logging
from typing import Any

from json_table_editor.config import EditorConfig
from json_table_editor.document import parse_document
from json_table_editor.exceptions import CoercionFailure, CsvColumnsError, ParseError
from json_table_editor.result import ImportResult
from json_table_editor.table.classifier import common_columns
from json_table_editor.table.rows import first_row_value
from json_table_editor.tree.address import NOT_FOUND
from json_table_editor.tree.kinds import (
    CONTAINER_KINDS,
    Kind,
    default_for_kind,
    display,
    kind_of,
    parse_for_kind,
)
from json_table_editor.tree.state import AddressLike, TreeState

__all__ = ["import_csv", "parse_csv", "parse_csv_row", "to_csv"]

logger = logging.getLogger(__name__)

_NEEDS_QUOTES = (",", "\n", "\r", '"')


def _quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def _text_field(text: str) -> str:
    return _quote(text) if any(ch in text for ch in _NEEDS_QUOTES) else text


def _csv_field(value: Any) -> str:
    kind = kind_of(value)
    if kind in CONTAINER_KINDS:
        return _quote(json.dumps(value, ensure_ascii=False, separators=(",", ":")))
    if kind == Kind.TEXT:
        return _text_field(value)
    return display(value, kind)


def to_csv(state: TreeState, array_address: AddressLike, columns: list[str]) -> str:
    """Serialize the table at ``array_address`` as CSV text.

    Rows are joined with ``\\n``. A row that lacks a column gets an empty
    field. Returns ``""`` when the address is not an array.
    """
    arr = state.get(array_address)
    if not isinstance(arr, list):
        logger.debug("to_csv: %r is not an array", str(array_address))
        return ""

    lines = [",".join(_text_field(column) for column in columns)]
    for item in arr:
        row = item if isinstance(item, dict) else {}
        lines.append(
            ",".join(_csv_field(row.get(column, NOT_FOUND)) for column in columns)
        )
    return "\n".join(lines)


def parse_csv_row(line: str) -> list[str]:
    """Split one CSV line into fields, honouring double-quote escaping.

    Fields are trimmed of surrounding whitespace. An empty line yields a
    single empty field.
    """
    try:
        fields = next(csv.reader([line], skipinitialspace=True), [])
    except csv.Error as exc:
        raise ParseError(f"Error parsing CSV: {exc}") from exc
    return [field.strip() for field in fields] or [""]


def parse_csv(text: str) -> list[list[str]]:
    """Parse a whole CSV body into trimmed rows, skipping blank lines.

    Quoted fields may span several lines, so bodies produced by :func:`to_csv`
    read back unchanged.

    Raises:
        ParseError: If the body is not valid CSV.
    """
    reader = csv.reader(io.StringIO(text, newline=""), skipinitialspace=True)
    try:
        return [
            [field.strip() for field in row]
            for row in reader
            if row and (len(row) > 1 or row[0].strip())
        ]
    except csv.Error as exc:
        raise ParseError(f"Error parsing CSV: {exc}", line=reader.line_num) from exc


def _coerce_imported(text: str, kind: Kind) -> Any:
    if kind in CONTAINER_KINDS:
        try:
            return parse_document(text)
        except ParseError:
            return text
    try:
        return parse_for_kind(text, kind)
    except CoercionFailure:
        return default_for_kind(kind)


def import_csv(
    state: TreeState,
    array_address: AddressLike,
    text: str,
    config: EditorConfig | None = None,
) -> ImportResult:
    """Replace the rows of the table at ``array_address`` with a CSV body.

    Both checks below run before anything is written:

    - the body must have a header and at least one data row;
    - the header must contain every current column of the table.

    Each data row becomes an object holding the table's columns in header
    order (a missing field reads as ``""``). Values are coerced to the kind of
    the same column in the first row before the import; text that does not fit
    takes that kind's placeholder (``0`` for numbers, ``False`` for booleans).
    Columns holding objects or arrays are decoded from their JSON text, which
    is kept as plain text when it is not valid JSON.
    All written cells are marked modified and the table is expanded.

    Raises:
        ParseError: The body is not valid CSV or has no data rows.
        CsvColumnsError: The header lacks some table columns.
    """
    addr = state.address(array_address)
    arr = state.get(addr)

    rows = parse_csv(text)
    if len(rows) < 2:
        msg = "CSV file is empty or has no data rows"
        raise ParseError(msg)

    header = rows[0]
    columns = common_columns(arr, config)
    missing = [column for column in columns if column not in header]
    if missing:
        logger.warning("Rejected CSV import into %r: missing %s", str(addr), missing)
        raise CsvColumnsError(missing)

    if not isinstance(arr, list):
        logger.debug("import_csv: %r is not an array", str(addr))
        return ImportResult(rows=0, columns=[])

    kinds = {column: kind_of(first_row_value(arr, column)) for column in columns}
    imported: list[dict[str, Any]] = []
    for values in rows[1:]:
        item: dict[str, Any] = {}
        for idx, column in enumerate(header):
            if column in kinds:
                field = values[idx] if idx < len(values) else ""
                item[column] = _coerce_imported(field, kinds[column])
        imported.append(item)

    arr[:] = imported
    for index in range(len(imported)):
        row_addr = addr.child(index)
        for column in columns:
            state.mark_modified(row_addr.child(column))
    state.expand(addr)

    logger.info("Imported %d row(s) from CSV into %r", len(imported), str(addr))
    return ImportResult(rows=len(imported), columns=columns)
