"""Tests for Address, resolve, write and iter_nodes.

Covers:
- Canonical string form and step helpers
- Decoding address strings against the live document (indexes vs keys,
  keys containing dots, segments beyond the document)
- resolve: fail-soft NOT_FOUND for every kind of miss, null vs missing
- write: root replacement, in-place assignment, silent no-ops
- iter_nodes: pre-order traversal and resolve/decode consistency
"""

from __future__ import annotations

import copy
from typing import Any

import pytest

from json_table_editor.tree.address import (
    NOT_FOUND,
    Address,
    can_write,
    iter_nodes,
    resolve,
    write,
)

# ---------------------------------------------------------------------------
# Address value object
# ---------------------------------------------------------------------------


class TestAddressBasics:
    def test_root_string_is_empty(self) -> None:
        assert str(Address()) == ""

    def test_steps_joined_with_dot(self) -> None:
        assert str(Address.of("items", 0, "qty")) == "items.0.qty"

    def test_of_equals_tuple_constructor(self) -> None:
        assert Address.of("a", 1) == Address(("a", 1))

    def test_child_appends_step(self) -> None:
        assert Address.of("items").child(2) == Address.of("items", 2)

    def test_parent_and_last(self) -> None:
        addr = Address.of("items", 2, "sku")
        assert addr.parent == Address.of("items", 2)
        assert addr.last == "sku"

    def test_root_has_no_parent(self) -> None:
        with pytest.raises(ValueError, match="no parent"):
            _ = Address().parent

    def test_root_has_no_last_step(self) -> None:
        with pytest.raises(ValueError, match="no final step"):
            _ = Address().last

    def test_is_root_and_len(self) -> None:
        assert Address().is_root
        assert len(Address()) == 0
        assert not Address.of("a").is_root
        assert len(Address.of("a", 0)) == 2

    def test_hashable(self) -> None:
        seen = {Address.of("a", 0), Address.of("a", 0)}
        assert len(seen) == 1


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


class TestAddressParse:
    def test_empty_string_is_root(self, document: dict[str, Any]) -> None:
        assert Address.parse("", document) == Address()

    def test_array_segments_become_indexes(self, document: dict[str, Any]) -> None:
        assert Address.parse("items.1.qty", document) == Address.of("items", 1, "qty")

    def test_object_segments_stay_keys(self) -> None:
        doc = {"1": {"2": "x"}}
        assert Address.parse("1.2", doc) == Address.of("1", "2")

    def test_key_containing_dot_is_recovered(self) -> None:
        doc = {"v1.2": {"notes": "beta"}}
        addr = Address.parse("v1.2.notes", doc)
        assert addr == Address.of("v1.2", "notes")
        assert resolve(doc, addr) == "beta"

    def test_plain_key_wins_over_dotted_key(self) -> None:
        doc = {"a": {"b": 1}, "a.b": 2}
        assert Address.parse("a.b", doc) == Address.of("a", "b")

    def test_segments_beyond_document(self, document: dict[str, Any]) -> None:
        addr = Address.parse("items.9.qty", document)
        assert addr == Address.of("items", 9, "qty")
        assert resolve(document, addr) is NOT_FOUND

    def test_digit_segment_after_missing_key_is_index(
        self, document: dict[str, Any]
    ) -> None:
        assert Address.parse("missing.0", document) == Address.of("missing", 0)

    def test_non_digit_segment_under_array_is_kept(
        self, document: dict[str, Any]
    ) -> None:
        addr = Address.parse("tags.first", document)
        assert addr == Address.of("tags", "first")
        assert resolve(document, addr) is NOT_FOUND

    def test_without_document_digits_become_indexes(self) -> None:
        assert Address.parse("rows.3.name") == Address.of("rows", 3, "name")


# ---------------------------------------------------------------------------
# resolve
# ---------------------------------------------------------------------------


class TestResolve:
    def test_root(self, document: dict[str, Any]) -> None:
        assert resolve(document, Address()) is document

    def test_nested_value(self, document: dict[str, Any]) -> None:
        assert resolve(document, Address.of("meta", "owner", "name")) == "Ann"

    def test_array_element(self, document: dict[str, Any]) -> None:
        assert resolve(document, Address.of("items", 2, "sku")) == "C3"

    def test_null_is_not_missing(self, document: dict[str, Any]) -> None:
        assert resolve(document, Address.of("manager")) is None

    def test_missing_key(self, document: dict[str, Any]) -> None:
        assert resolve(document, Address.of("nope")) is NOT_FOUND

    def test_index_out_of_range(self, document: dict[str, Any]) -> None:
        assert resolve(document, Address.of("items", 3)) is NOT_FOUND

    def test_negative_index_does_not_wrap(self, document: dict[str, Any]) -> None:
        assert resolve(document, Address.of("items", -1)) is NOT_FOUND

    def test_through_null_intermediate(self, document: dict[str, Any]) -> None:
        assert resolve(document, Address.of("manager", "name")) is NOT_FOUND

    def test_through_scalar_intermediate(self, document: dict[str, Any]) -> None:
        assert resolve(document, Address.of("store", 0)) is NOT_FOUND

    def test_digit_string_step_on_array(self, document: dict[str, Any]) -> None:
        assert resolve(document, Address.of("tags", "1")) == "y"

    def test_not_found_is_falsy_and_named(self) -> None:
        assert not NOT_FOUND
        assert repr(NOT_FOUND) == "NOT_FOUND"


# ---------------------------------------------------------------------------
# write
# ---------------------------------------------------------------------------


class TestWrite:
    def test_root_address_returns_new_root(self, document: dict[str, Any]) -> None:
        assert write(document, Address(), [1, 2]) == [1, 2]

    def test_assigns_in_place(self, document: dict[str, Any]) -> None:
        root = write(document, Address.of("items", 0, "qty"), 9)
        assert root is document
        assert document["items"][0]["qty"] == 9

    def test_adds_new_object_key(self, document: dict[str, Any]) -> None:
        write(document, Address.of("meta", "extra"), "yes")
        assert document["meta"]["extra"] == "yes"

    def test_unreachable_parent_is_noop(self, document: dict[str, Any]) -> None:
        before = copy.deepcopy(document)
        root = write(document, Address.of("manager", "name", "first"), "Bo")
        assert root is document
        assert document == before

    def test_scalar_parent_is_noop(self, document: dict[str, Any]) -> None:
        before = copy.deepcopy(document)
        write(document, Address.of("store", "x"), 1)
        assert document == before

    def test_index_out_of_range_is_noop(self, document: dict[str, Any]) -> None:
        write(document, Address.of("tags", 5), "z")
        assert document["tags"] == ["x", "y"]

    def test_can_write(self, document: dict[str, Any]) -> None:
        assert can_write(document, Address())
        assert can_write(document, Address.of("tags", 1))
        assert can_write(document, Address.of("meta", "new"))
        assert not can_write(document, Address.of("tags", 2))
        assert not can_write(document, Address.of("store", "x"))

    def test_set_get_consistency(self, document: dict[str, Any]) -> None:
        original = copy.deepcopy(document)
        for addr, _ in list(iter_nodes(original)):
            if addr.is_root:
                continue
            doc = copy.deepcopy(original)
            marker = object()
            root = write(doc, addr, marker)
            assert resolve(root, addr) is marker


# ---------------------------------------------------------------------------
# iter_nodes
# ---------------------------------------------------------------------------


class TestIterNodes:
    def test_pre_order(self) -> None:
        doc = {"a": [1, {"b": 2}], "c": 3}
        order = [str(addr) for addr, _ in iter_nodes(doc)]
        assert order == ["", "a", "a.0", "a.1", "a.1.b", "c"]

    def test_scalar_root_yields_only_root(self) -> None:
        assert list(iter_nodes(42)) == [(Address(), 42)]

    def test_resolve_matches_traversal(self, document: dict[str, Any]) -> None:
        for addr, value in iter_nodes(document):
            assert resolve(document, addr) is value

    def test_string_form_round_trips(self, document: dict[str, Any]) -> None:
        for addr, _ in iter_nodes(document):
            assert Address.parse(str(addr), document) == addr

    def test_deep_nesting_does_not_recurse(self) -> None:
        doc: Any = 0
        for _ in range(5000):
            doc = [doc]
        assert sum(1 for _ in iter_nodes(doc)) == 5001
