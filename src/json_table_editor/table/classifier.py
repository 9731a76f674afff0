"""Table classification: is an array uniform enough to render as a table?

Real documents rarely have perfectly uniform arrays (optional fields, the odd
extra key), so both decisions use share-of-elements thresholds rather than
exact equality:

- An array of objects is a table when the most common key set covers at least
  ``table_threshold`` (70%) of its elements.
- A key becomes a column when it appears in at least ``column_threshold`` (50%)
  of the elements, and in at least one.

Columns are recomputed from the live array on every call.
"""

from __future__ import annotations

from collections import Counter
from typing import Any

from json_table_editor.config import EditorConfig
from json_table_editor.tree.kinds import Kind, kind_of

__all__ = ["common_columns", "is_table", "key_signature"]

_DEFAULT_CONFIG = EditorConfig()


def key_signature(obj: dict[str, Any]) -> str:
    """Sorted, comma-joined key set used to group array elements."""
    return ",".join(sorted(obj))


def is_table(arr: Any, config: EditorConfig | None = None) -> bool:
    """Return True if ``arr`` should be rendered as a table.

    Every element must be a (non-null, non-array) object. A single object
    always qualifies; otherwise the largest group of elements sharing the same
    key set must hold at least ``config.table_threshold`` of the elements.
    The comparison is on the exact ratio, so exactly 70% qualifies.
    """
    config = config or _DEFAULT_CONFIG
    if not isinstance(arr, list) or not arr:
        return False
    if any(kind_of(item) != Kind.OBJECT for item in arr):
        return False
    if len(arr) == 1:
        return True

    groups = Counter(key_signature(item) for item in arr)
    largest = max(groups.values())
    return largest / len(arr) >= config.table_threshold


def common_columns(arr: Any, config: EditorConfig | None = None) -> list[str]:
    """Return the ordered column names for a table array.

    Keys are counted across all object elements. A key is kept when its count
    reaches ``max(1, column_threshold * len(arr))``. Columns are ordered by
    descending count; ties keep the order in which keys were first seen.
    """
    config = config or _DEFAULT_CONFIG
    if not isinstance(arr, list):
        return []

    counts: Counter[str] = Counter()
    for item in arr:
        if isinstance(item, dict):
            counts.update(item.keys())

    threshold = max(1.0, len(arr) * config.column_threshold)
    # Counter preserves first-encounter order and sorted() is stable.
    kept = [key for key, count in counts.items() if count >= threshold]
    return sorted(kept, key=lambda key: -counts[key])
