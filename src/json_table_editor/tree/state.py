"""TreeState: the loaded document plus its expanded and modified address sets.

One TreeState holds exactly one document for the lifetime of an editing
session. It is owned by the embedding application and passed explicitly to
the table operations; there is no module-level instance.
"""

from __future__ import annotations

import logging
from typing import Any, TypeAlias

from json_table_editor.exceptions import EditorError
from json_table_editor.tree.address import (
    NOT_FOUND,
    SEPARATOR,
    Address,
    can_write,
    iter_nodes,
    resolve,
    write,
)
from json_table_editor.tree.kinds import CONTAINER_KINDS, kind_of

__all__ = ["AddressLike", "TreeState"]

logger = logging.getLogger(__name__)

AddressLike: TypeAlias = Address | str


class TreeState:
    """Mutable editing state for one JSON document.

    Attributes:
        expanded: Canonical address strings of container nodes shown open.
        modified: Canonical address strings edited since load. Advisory only,
            used for highlighting; row markers end in ``.__new__``.

    Addresses may be passed either as :class:`Address` or as canonical strings;
    strings are decoded against the current document.
    """

    def __init__(self) -> None:
        self._root: Any = NOT_FOUND
        self.expanded: set[str] = set()
        self.modified: set[str] = set()

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------

    @property
    def has_document(self) -> bool:
        return self._root is not NOT_FOUND

    @property
    def root(self) -> Any:
        """The document value. Raises EditorError when nothing is loaded."""
        if self._root is NOT_FOUND:
            msg = "No document loaded"
            raise EditorError(msg)
        return self._root

    def load(self, value: Any) -> None:
        """Replace the document and forget all expanded/modified addresses."""
        self._root = value
        self.expanded.clear()
        self.modified.clear()

    def clear(self) -> None:
        """Drop the document and both address sets."""
        self._root = NOT_FOUND
        self.expanded.clear()
        self.modified.clear()

    # ------------------------------------------------------------------
    # Addressing
    # ------------------------------------------------------------------

    def address(self, address: AddressLike) -> Address:
        """Normalize an address string or Address to an Address."""
        if isinstance(address, Address):
            return address
        return Address.parse(address, self._root)

    def get(self, address: AddressLike) -> Any:
        """Return the value at ``address`` or ``NOT_FOUND``."""
        if self._root is NOT_FOUND:
            return NOT_FOUND
        return resolve(self._root, self.address(address))

    def set(self, address: AddressLike, value: Any) -> bool:
        """Write ``value`` at ``address``; the empty address replaces the root.

        Returns:
            True if the write was applied, False when the address is not
            reachable (a silent no-op).
        """
        addr = self.address(address)
        if addr.is_root:
            self._root = value
            return True
        if self._root is NOT_FOUND:
            return False
        applied = can_write(self._root, addr)
        self._root = write(self._root, addr, value)
        return applied

    # ------------------------------------------------------------------
    # Expanded set
    # ------------------------------------------------------------------

    def toggle(self, address: AddressLike) -> bool:
        """Flip the expanded state of ``address`` and return the new state."""
        key = str(address)
        if key in self.expanded:
            self.expanded.discard(key)
            return False
        self.expanded.add(key)
        return True

    def expand(self, address: AddressLike) -> None:
        self.expanded.add(str(address))

    def is_expanded(self, address: AddressLike) -> bool:
        return str(address) in self.expanded

    def expand_all(self) -> None:
        """Expand every object and array node except the root itself."""
        if self._root is NOT_FOUND:
            return
        for addr, value in iter_nodes(self._root):
            if not addr.is_root and kind_of(value) in CONTAINER_KINDS:
                self.expanded.add(str(addr))

    def collapse_all(self) -> None:
        self.expanded.clear()

    # ------------------------------------------------------------------
    # Modified set
    # ------------------------------------------------------------------

    def mark_modified(self, address: AddressLike) -> None:
        self.modified.add(str(address))

    def is_modified(self, address: AddressLike) -> bool:
        return str(address) in self.modified

    def discard_modified_under(self, address: AddressLike) -> int:
        """Drop every modified address strictly below ``address``.

        For the root address this drops the whole set.

        Returns:
            Number of entries removed.
        """
        key = str(address)
        prefix = f"{key}{SEPARATOR}" if key else ""
        stale = {p for p in self.modified if p.startswith(prefix)}
        self.modified -= stale
        if stale:
            logger.debug("Dropped %d modified address(es) under %r", len(stale), key)
        return len(stale)
