"""Row structure edits for table arrays: append a seeded row, delete a row."""

from __future__ import annotations

import logging
from typing import Any

from json_table_editor.config import EditorConfig
from json_table_editor.tree.address import NOT_FOUND
from json_table_editor.tree.kinds import default_for_kind, kind_of
from json_table_editor.tree.state import AddressLike, TreeState

__all__ = ["add_row", "delete_row", "first_row_value", "new_row"]

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = EditorConfig()


def first_row_value(arr: list[Any], column: str) -> Any:
    """Value of ``column`` in the first element, which defines column kinds."""
    if not arr or not isinstance(arr[0], dict):
        return NOT_FOUND
    return arr[0].get(column, NOT_FOUND)


def new_row(arr: list[Any], columns: list[str]) -> dict[str, Any]:
    """Build a row of placeholder values typed after the first element.

    number -> 0, boolean -> False, null -> None, anything else -> "".
    """
    return {
        column: default_for_kind(kind_of(first_row_value(arr, column)))
        for column in columns
    }


def add_row(
    state: TreeState,
    array_address: AddressLike,
    columns: list[str],
    config: EditorConfig | None = None,
) -> int | None:
    """Append a placeholder row to the array at ``array_address``.

    Every new cell is marked modified, along with the ``<row>.__new__`` marker.

    Returns:
        Index of the new row, or None when the address is not an array.
    """
    config = config or _DEFAULT_CONFIG
    addr = state.address(array_address)
    arr = state.get(addr)
    if not isinstance(arr, list):
        logger.debug("add_row: %r is not an array", str(addr))
        return None

    arr.append(new_row(arr, columns))
    index = len(arr) - 1
    row_addr = addr.child(index)
    state.mark_modified(row_addr.child(config.new_row_marker))
    for column in columns:
        state.mark_modified(row_addr.child(column))

    logger.info("Added row %d to %r", index, str(addr))
    return index


def delete_row(state: TreeState, array_address: AddressLike, row_index: int) -> bool:
    """Remove one row and forget every modified address under the array.

    Later rows shift down by one, so modified addresses recorded for them no
    longer point at the rows they were recorded for; all of them are dropped.

    Returns:
        True if a row was removed, False when the address is not an array or
        the index is out of range.
    """
    addr = state.address(array_address)
    arr = state.get(addr)
    if not isinstance(arr, list) or not 0 <= row_index < len(arr):
        logger.debug("delete_row: no row %r in %r", row_index, str(addr))
        return False

    del arr[row_index]
    state.discard_modified_under(addr)
    logger.info("Deleted row %d from %r", row_index, str(addr))
    return True
