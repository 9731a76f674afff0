"""Address: typed structural paths into a JSON document.

An address is a tuple of steps. A ``str`` step subscripts an object, an
``int`` step subscripts an array, so the step list itself carries the
key/index distinction. The canonical string form joins the steps with ``.``
(root is ``""``) and is what the UI and the expanded/modified sets store.

Because the string form drops the step types, decoding it re-walks the live
document: a segment under an array becomes an index, a segment under an
object becomes a key. Keys that themselves contain ``.`` are recovered by
joining consecutive segments until one matches an existing key.

Lookups never raise for a missing path; they return the ``NOT_FOUND``
sentinel. Writes to an unreachable address are silent no-ops.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final, TypeAlias

__all__ = [
    "NOT_FOUND",
    "Address",
    "Step",
    "can_write",
    "iter_nodes",
    "resolve",
    "write",
]

logger = logging.getLogger(__name__)

Step: TypeAlias = str | int

SEPARATOR: Final = "."


class _Missing(Enum):
    """Sentinel type for values that do not exist in the document."""

    NOT_FOUND = "NOT_FOUND"

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __bool__(self) -> bool:
        return False


# Distinct from None, which is a legitimate JSON null.
NOT_FOUND: Final = _Missing.NOT_FOUND


def _as_index(step: Step) -> int | None:
    """Return ``step`` as a non-negative array index, or None."""
    if isinstance(step, bool):
        return None
    if isinstance(step, int):
        return step if step >= 0 else None
    if step.isascii() and step.isdigit():
        return int(step)
    return None


def _step_into(container: Any, step: Step) -> Any:
    """Subscript one level of the document, returning NOT_FOUND on a miss."""
    if isinstance(container, list):
        index = _as_index(step)
        if index is None or index >= len(container):
            return NOT_FOUND
        return container[index]
    if isinstance(container, dict):
        return container.get(str(step), NOT_FOUND)
    return NOT_FOUND


@dataclass(frozen=True, slots=True)
class Address:
    """Immutable, explicitly typed path to one node of a JSON document.

    Example::

        addr = Address.of("users", 0, "name")
        str(addr)                      # "users.0.name"
        Address.parse("users.0.name", doc) == addr   # True
    """

    steps: tuple[Step, ...] = ()

    @classmethod
    def of(cls, *steps: Step) -> Address:
        """Build an address from positional steps."""
        return cls(tuple(steps))

    @classmethod
    def parse(cls, text: str, root: Any = NOT_FOUND) -> Address:
        """Decode a canonical address string by re-walking ``root``.

        Segments under an array become ``int`` steps. Segments under an object
        become ``str`` steps; when a segment is not a key of that object, it is
        joined with the following segments until an existing key matches.
        Once the walk leaves the document, the remaining segments are kept as
        keys, except digit-only segments which are kept as indexes.

        Args:
            text: Canonical address string, ``""`` for the root.
            root: The live document used to type the segments.

        Returns:
            The decoded Address.
        """
        if not text:
            return cls()

        segments = text.split(SEPARATOR)
        steps: list[Step] = []
        current = root
        i = 0
        while i < len(segments):
            segment = segments[i]
            if isinstance(current, dict):
                key, consumed = _match_key(current, segments, i)
                steps.append(key)
                current = current.get(key, NOT_FOUND)
                i += consumed
                continue

            index = _as_index(segment)
            if isinstance(current, list):
                step: Step = index if index is not None else segment
                steps.append(step)
                current = _step_into(current, step)
            else:
                steps.append(index if index is not None else segment)
            i += 1

        return cls(tuple(steps))

    def __str__(self) -> str:
        return SEPARATOR.join(str(step) for step in self.steps)

    def __len__(self) -> int:
        return len(self.steps)

    @property
    def is_root(self) -> bool:
        return not self.steps

    @property
    def parent(self) -> Address:
        """Address of the enclosing container. The root has no parent."""
        if not self.steps:
            msg = "The root address has no parent"
            raise ValueError(msg)
        return Address(self.steps[:-1])

    @property
    def last(self) -> Step:
        """Final step of the address. The root has none."""
        if not self.steps:
            msg = "The root address has no final step"
            raise ValueError(msg)
        return self.steps[-1]

    def child(self, step: Step) -> Address:
        """Return the address one level below this one."""
        return Address((*self.steps, step))


def _match_key(obj: dict[str, Any], segments: list[str], start: int) -> tuple[str, int]:
    """Find the key at ``segments[start]``, allowing keys that contain dots.

    Returns:
        ``(key, consumed)`` where ``consumed`` is the number of segments used.
    """
    segment = segments[start]
    if segment in obj:
        return segment, 1
    for end in range(start + 2, len(segments) + 1):
        candidate = SEPARATOR.join(segments[start:end])
        if candidate in obj:
            return candidate, end - start
    return segment, 1


def resolve(root: Any, address: Address) -> Any:
    """Return the value at ``address`` or ``NOT_FOUND``. Never raises."""
    current = root
    for step in address.steps:
        current = _step_into(current, step)
        if current is NOT_FOUND:
            return NOT_FOUND
    return current


def _write_target(root: Any, address: Address) -> tuple[Any, Step] | None:
    """Return ``(container, normalized_step)`` for a writable non-root address."""
    parent = resolve(root, address.parent)
    step = address.last
    if isinstance(parent, list):
        index = _as_index(step)
        if index is not None and index < len(parent):
            return parent, index
        return None
    if isinstance(parent, dict):
        return parent, str(step)
    return None


def can_write(root: Any, address: Address) -> bool:
    """Return True when :func:`write` would change the document."""
    return address.is_root or _write_target(root, address) is not None


def write(root: Any, address: Address, value: Any) -> Any:
    """Assign ``value`` at ``address`` in place and return the document root.

    The empty address replaces the root, so callers must keep the returned
    value. When the parent of ``address`` is not a container, or an array index
    is out of range, nothing is written.
    """
    if address.is_root:
        return value

    target = _write_target(root, address)
    if target is None:
        logger.debug("Ignoring write to unreachable address %r", str(address))
        return root

    container, step = target
    container[step] = value
    return root


def iter_nodes(
    root: Any, start: Address | None = None
) -> Iterator[tuple[Address, Any]]:
    """Yield ``(address, value)`` for every node in pre-order.

    Objects yield their entries in insertion order, arrays in index order.
    Iterative, so deeply nested documents do not hit the recursion limit.
    """
    stack: list[tuple[Address, Any]] = [(start or Address(), root)]
    while stack:
        address, value = stack.pop()
        yield address, value
        if isinstance(value, dict):
            children = [(address.child(k), v) for k, v in value.items()]
        elif isinstance(value, list):
            children = [(address.child(i), v) for i, v in enumerate(value)]
        else:
            continue
        stack.extend(reversed(children))
