"""Shared fixtures: a small inventory document and editing state over it.

Every fixture returns a fresh deep copy so tests can mutate freely.
"""

from __future__ import annotations

import copy
import json
from typing import Any

import pytest

from json_table_editor import JsonTableEditor, TreeState

INVENTORY: dict[str, Any] = {
    "store": "North",
    "open": True,
    "manager": None,
    "items": [
        {"sku": "A1", "qty": 3, "price": 1.5, "active": True, "note": None},
        {"sku": "B2", "qty": 0, "price": 12.0, "active": False, "note": "low"},
        {"sku": "C3", "qty": 7, "price": 0.25, "active": True, "note": None},
    ],
    "tags": ["x", "y"],
    "meta": {"version": 2, "owner": {"name": "Ann"}},
}


@pytest.fixture
def document() -> dict[str, Any]:
    """A fresh copy of the inventory document."""
    return copy.deepcopy(INVENTORY)


@pytest.fixture
def state(document: dict[str, Any]) -> TreeState:
    """A TreeState with the inventory document loaded."""
    tree_state = TreeState()
    tree_state.load(document)
    return tree_state


@pytest.fixture
def editor(document: dict[str, Any]) -> JsonTableEditor:
    """A JsonTableEditor with the inventory document loaded from text."""
    session = JsonTableEditor()
    session.load_text(json.dumps(document), file_name="inventory.json")
    return session
