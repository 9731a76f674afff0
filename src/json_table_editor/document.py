"""Document intake and export helpers.

Parsing, canonical serialization and the file-naming conventions the
embedding UI uses for downloads.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any

from json_table_editor.exceptions import ParseError
from json_table_editor.tree.address import Address

__all__ = [
    "DocumentInfo",
    "export_csv_name",
    "export_json_name",
    "format_file_size",
    "is_json_file_name",
    "parse_document",
    "serialize",
]

JSON_SUFFIX = ".json"
JSON_MEDIA_TYPE = "application/json"
_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def _reject_constant(name: str) -> Any:
    # json.loads accepts NaN/Infinity by default; they are not JSON.
    msg = f"Unexpected token {name}"
    raise ValueError(msg)


def _finite_float(text: str) -> float:
    number = float(text)
    if not math.isfinite(number):
        msg = f"Number out of range: {text}"
        raise ValueError(msg)
    return number


def parse_document(text: str) -> Any:
    """Parse JSON text into a document value.

    Raises:
        ParseError: With line/column information for malformed input.
    """
    try:
        return json.loads(
            text, parse_constant=_reject_constant, parse_float=_finite_float
        )
    except json.JSONDecodeError as exc:
        raise ParseError(
            f"Invalid JSON format: {exc.msg}", line=exc.lineno, column=exc.colno
        ) from exc
    except ValueError as exc:
        raise ParseError(f"Invalid JSON format: {exc}") from exc


def serialize(document: Any, indent: int = 2) -> str:
    """Serialize a document with ``indent``-space indentation.

    Object keys keep insertion order and non-ASCII text is written verbatim.

    Raises:
        ValueError: If the document holds a NaN or infinite float.
    """
    return json.dumps(document, indent=indent, ensure_ascii=False, allow_nan=False)


def is_json_file_name(name: str, media_type: str | None = None) -> bool:
    """Accept files named ``*.json`` or declared as ``application/json``."""
    return name.endswith(JSON_SUFFIX) or media_type == JSON_MEDIA_TYPE


def export_json_name(file_name: str) -> str:
    """``data.json`` -> ``data_edited.json``.

    Names without ``.json`` get ``_edited.json`` appended.
    """
    if JSON_SUFFIX in file_name:
        return file_name.replace(JSON_SUFFIX, f"_edited{JSON_SUFFIX}", 1)
    return f"{file_name}_edited{JSON_SUFFIX}"


def export_csv_name(file_name: str, array_address: Address | str) -> str:
    """``data.json`` + ``store.items`` -> ``data_items.csv``.

    The root array is named ``table``.
    """
    base = file_name.replace(JSON_SUFFIX, "", 1)
    table = str(array_address).split(".")[-1] or "table"
    return f"{base}_{table}.csv"


def format_file_size(size: int) -> str:
    """Human-readable size with up to two decimals: ``1536`` -> ``1.5 KB``."""
    if size <= 0:
        return "0 Bytes"
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    number = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{number} {_SIZE_UNITS[unit]}"


@dataclass(frozen=True, slots=True)
class DocumentInfo:
    """Name and size of the loaded file, for display and export naming."""

    file_name: str
    size_bytes: int | None = None

    @property
    def display_size(self) -> str:
        return format_file_size(self.size_bytes or 0)

    @property
    def export_name(self) -> str:
        return export_json_name(self.file_name)

    def csv_name(self, array_address: Address | str) -> str:
        return export_csv_name(self.file_name, array_address)
