"""GridTransfer: paste a rectangular block of text cells into a table.

The block is anchored at one cell (row index + column name) and laid over the
table's current rows and columns. Cells that fall outside the table are
dropped; the table never grows. Each in-bounds cell is coerced to the kind of
the value it replaces, and a cell whose text does not fit is skipped while the
rest of the block is still applied. Cells holding nested objects or arrays are
never overwritten by pasted text.
"""

from __future__ import annotations

import logging
import re

from json_table_editor.config import EditorConfig
from json_table_editor.exceptions import CoercionFailure
from json_table_editor.result import CellFailure, TransferResult
from json_table_editor.table.classifier import common_columns
from json_table_editor.tree.kinds import CONTAINER_KINDS, kind_of, parse_for_kind
from json_table_editor.tree.state import AddressLike, TreeState

__all__ = ["NESTED_CELL_MESSAGE", "parse_clipboard", "paste_block"]

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r?\n")

NESTED_CELL_MESSAGE = "Cell holds nested data"


def parse_clipboard(text: str) -> list[list[str]]:
    """Split a tab/newline-delimited clipboard payload into rows of cells.

    Blank lines are dropped. Cells are not trimmed here; :func:`paste_block`
    trims each cell before coercion.
    """
    return [line.split("\t") for line in _LINE_BREAK.split(text) if line.strip()]


def paste_block(
    state: TreeState,
    array_address: AddressLike,
    row: int,
    column: str,
    block: list[list[str]],
    config: EditorConfig | None = None,
) -> TransferResult:
    """Write ``block`` into the table at ``array_address``, anchored at a cell.

    Args:
        state:         Editing state holding the document.
        array_address: Address of the table array.
        row:           Row index of the anchor cell.
        column:        Column name of the anchor cell; must be one of the
                       table's current columns.
        block:         Rows of cell texts, e.g. from :func:`parse_clipboard`.
        config:        Classification thresholds used to derive the columns.

    Returns:
        A TransferResult counting written and clipped cells and listing the
        cells skipped for failed coercion. Every written cell is marked
        modified.
    """
    addr = state.address(array_address)
    arr = state.get(addr)
    columns = common_columns(arr, config)
    if not isinstance(arr, list) or column not in columns or row < 0:
        logger.debug("paste_block: no anchor %r/%r in %r", row, column, str(addr))
        return TransferResult()

    start_col = columns.index(column)
    updated = 0
    clipped = 0
    failures: list[CellFailure] = []

    for r, cells in enumerate(block):
        target_row = row + r
        for c, raw in enumerate(cells):
            target_col = start_col + c
            if target_row >= len(arr) or target_col >= len(columns):
                clipped += 1
                continue

            cell_addr = addr.child(target_row).child(columns[target_col])
            text = raw.strip()
            kind = kind_of(state.get(cell_addr))
            if kind in CONTAINER_KINDS:
                logger.debug("Skipping pasted cell %s: nested %s", cell_addr, kind)
                failures.append(
                    CellFailure(str(cell_addr), text, NESTED_CELL_MESSAGE)
                )
                continue
            try:
                value = parse_for_kind(text, kind)
            except CoercionFailure as exc:
                logger.debug("Skipping pasted cell %s: %s", cell_addr, exc)
                failures.append(CellFailure(str(cell_addr), text, str(exc)))
                continue

            if state.set(cell_addr, value):
                state.mark_modified(cell_addr)
                updated += 1

    logger.info(
        "Pasted %d cell(s) into %r (%d clipped, %d rejected)",
        updated,
        str(addr),
        clipped,
        len(failures),
    )
    return TransferResult(updated=updated, clipped=clipped, failures=failures)
