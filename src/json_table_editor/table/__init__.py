"""Table subpackage: classification and bulk edits of arrays of objects.

Re-exports the public API for the table module:
- is_table / common_columns: decide table rendering and its columns
- parse_clipboard / paste_block: clipped block paste with per-cell coercion
- to_csv / parse_csv_row / parse_csv / import_csv: CSV export and import
- add_row / delete_row: row structure edits
"""

from json_table_editor.table.classifier import common_columns, is_table
from json_table_editor.table.csv_io import import_csv, parse_csv, parse_csv_row, to_csv
from json_table_editor.table.grid import parse_clipboard, paste_block
from json_table_editor.table.rows import add_row, delete_row

__all__ = [
    "add_row",
    "common_columns",
    "delete_row",
    "import_csv",
    "is_table",
    "parse_clipboard",
    "parse_csv",
    "parse_csv_row",
    "paste_block",
    "to_csv",
]
