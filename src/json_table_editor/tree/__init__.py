"""Tree subpackage: addressing, value kinds and editing state.

Re-exports the public API for the tree module:
- Address / NOT_FOUND: typed paths and the missing-value sentinel
- resolve / write / iter_nodes: fail-soft reads, writes and pre-order traversal
- Kind / kind_of / display / parse_for_kind: text <-> value coercion
- TreeState: the loaded document plus expanded and modified address sets
"""

from json_table_editor.tree.address import (
    NOT_FOUND,
    Address,
    can_write,
    iter_nodes,
    resolve,
    write,
)
from json_table_editor.tree.kinds import (
    Kind,
    default_for_kind,
    display,
    kind_of,
    parse_for_kind,
)
from json_table_editor.tree.state import TreeState

__all__ = [
    "NOT_FOUND",
    "Address",
    "Kind",
    "TreeState",
    "can_write",
    "default_for_kind",
    "display",
    "iter_nodes",
    "kind_of",
    "parse_for_kind",
    "resolve",
    "write",
]
