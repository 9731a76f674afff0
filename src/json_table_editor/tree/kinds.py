"""Kind StrEnum and the text <-> value coercion rules used by cell edits.

The kind of the value currently stored at an address decides how edited
text is parsed back: numbers must stay numbers, booleans stay booleans, a
null may widen to text, and everything else is written as text.
"""

from __future__ import annotations

import json
import math
import re
from enum import StrEnum, auto
from typing import Any

from json_table_editor.exceptions import CoercionFailure
from json_table_editor.tree.address import NOT_FOUND

__all__ = ["Kind", "default_for_kind", "display", "kind_of", "parse_for_kind"]


class Kind(StrEnum):
    """Category of a JSON value.

    ``UNKNOWN`` is only produced for the ``NOT_FOUND`` sentinel, i.e. for an
    address that does not resolve.
    """

    NULL = auto()
    BOOLEAN = auto()
    NUMBER = auto()
    TEXT = auto()
    ARRAY = auto()
    OBJECT = auto()
    UNKNOWN = auto()


CONTAINER_KINDS = frozenset({Kind.ARRAY, Kind.OBJECT})


def kind_of(value: Any) -> Kind:
    """Return the Kind of a JSON value."""
    if value is NOT_FOUND:
        return Kind.UNKNOWN
    if value is None:
        return Kind.NULL
    # bool MUST be checked before int: bool subclasses int in Python
    if isinstance(value, bool):
        return Kind.BOOLEAN
    if isinstance(value, (int, float)):
        return Kind.NUMBER
    if isinstance(value, str):
        return Kind.TEXT
    if isinstance(value, list):
        return Kind.ARRAY
    if isinstance(value, dict):
        return Kind.OBJECT
    return Kind.UNKNOWN


def _format_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def display(value: Any, kind: Kind | None = None) -> str:
    """Render a value as the text shown in a cell.

    Args:
        value: The JSON value, or ``NOT_FOUND``.
        kind:  Kind to render as. Defaults to ``kind_of(value)``.

    Returns:
        ``"null"`` for null, ``""`` for a missing value, ``"true"``/``"false"``
        for booleans, the number's textual form, the text unchanged, or
        compact JSON for containers.
    """
    kind = kind_of(value) if kind is None else kind
    if kind == Kind.NULL:
        return "null"
    if kind == Kind.UNKNOWN:
        return ""
    if kind == Kind.BOOLEAN:
        return "true" if value else "false"
    if kind == Kind.NUMBER:
        return _format_number(value)
    if kind == Kind.TEXT:
        return value
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def _parse_number(text: str) -> int | float:
    # Plain decimal notation only: no "_" separators, "nan" or "inf".
    number = float(text) if _DECIMAL.fullmatch(text) else math.nan
    if not math.isfinite(number):
        msg = "Invalid number"
        raise CoercionFailure(msg)
    return int(number) if number.is_integer() else number


def parse_for_kind(text: str, kind: Kind | str) -> Any:
    """Convert edited text back into a value of the given kind.

    Rules:
        number:  floating-point parse; non-finite or unparsable text fails.
                 Integral results are returned as ``int``.
        boolean: ``"true"``/``"false"`` in any letter case; anything else fails.
        null:    ``"null"`` in any letter case gives None; any other text is
                 accepted as a text value.
        other:   the text itself.

    Raises:
        CoercionFailure: When the text does not fit a number or boolean kind.
    """
    if kind == Kind.NUMBER:
        return _parse_number(text)
    if kind == Kind.BOOLEAN:
        lowered = text.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        msg = "Invalid boolean"
        raise CoercionFailure(msg)
    if kind == Kind.NULL and text.lower() == "null":
        return None
    return text


def default_for_kind(kind: Kind | str) -> Any:
    """Placeholder value for a new cell whose column holds ``kind`` values."""
    if kind == Kind.NUMBER:
        return 0
    if kind == Kind.BOOLEAN:
        return False
    if kind == Kind.NULL:
        return None
    return ""
