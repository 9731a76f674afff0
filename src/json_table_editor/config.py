"""EditorConfig: immutable knobs for table classification and export.

The default thresholds are the product constants used to decide whether an
array renders as a table (70% of elements share one key set) and which keys
become columns (present in at least half of the elements).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Immutable configuration for a JsonTableEditor session.

    Attributes:
        table_threshold: Minimum share of elements that must have the most
            common key set for an array to be classified as a table.
        column_threshold: Minimum share of elements a key must appear in to
            become a table column (never fewer than one element).
        indent: Indentation width used when serializing the document.
        new_row_marker: Final address segment flagging a freshly added row
            in the modified set.
    """

    table_threshold: float = 0.7
    column_threshold: float = 0.5
    indent: int = 2
    new_row_marker: str = "__new__"

    def __post_init__(self) -> None:
        if not 0.0 < self.table_threshold <= 1.0:
            msg = f"table_threshold must be in (0, 1], got {self.table_threshold}"
            raise ValueError(msg)
        if not 0.0 < self.column_threshold <= 1.0:
            msg = f"column_threshold must be in (0, 1], got {self.column_threshold}"
            raise ValueError(msg)
        if self.indent < 0:
            msg = f"indent must be >= 0, got {self.indent}"
            raise ValueError(msg)
        if not self.new_row_marker or "." in self.new_row_marker:
            msg = (
                "new_row_marker must be a non-empty string without '.', "
                f"got {self.new_row_marker!r}"
            )
            raise ValueError(msg)
