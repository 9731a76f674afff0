"""Result dataclasses returned by editing operations.

These carry what the embedding UI needs to report an operation (counts,
per-cell failures, the text to show after a rejected edit) without the core
knowing anything about how it is shown.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

__all__ = ["CellEdit", "CellFailure", "ImportResult", "TransferResult"]


@dataclass(frozen=True, slots=True)
class CellEdit:
    """Outcome of a single-cell edit.

    Attributes:
        address: Canonical address string of the edited cell.
        applied: True when the value was written.
        value:   Value now stored at the address (the old one when rejected).
        display: Text the cell should show now. On a rejected edit this is the
            pre-edit text, so the UI can revert the cell.
        error:   User-facing reason for a rejected edit, else None.
    """

    address: str
    applied: bool
    value: Any
    display: str
    error: str | None = None


@dataclass(frozen=True, slots=True)
class CellFailure:
    """One pasted cell that was skipped because its text did not fit its kind."""

    address: str
    text: str
    message: str


@dataclass(frozen=True, slots=True)
class TransferResult:
    """Outcome of pasting a block of cells into a table.

    Attributes:
        updated:  Number of cells written.
        clipped:  Number of cells dropped for falling outside the table.
        failures: Cells skipped because their text failed coercion.
    """

    updated: int = 0
    clipped: int = 0
    failures: list[CellFailure] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ImportResult:
    """Outcome of replacing a table's rows from a CSV body.

    Attributes:
        rows:    Number of rows now in the table.
        columns: Columns written for every row.
    """

    rows: int
    columns: list[str]
