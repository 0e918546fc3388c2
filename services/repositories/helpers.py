"""Shared list helpers for the document repositories."""

from __future__ import annotations
import json
from typing import Any, Dict, List, Set

from ..utils import to_number


def clone(document: Dict[str, Any]) -> Dict[str, Any]:
    """Deep copy via JSON so callers never see a half-applied mutation."""
    return json.loads(json.dumps(document))


def items_of(document: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    """The list under `key`, created if missing or malformed."""
    items = document.get(key)
    if not isinstance(items, list):
        items = []
        document[key] = items
    return items


def find_index(items: List[Dict[str, Any]], item_id: str) -> int:
    """Index of the item with this id, or -1."""
    for i, it in enumerate(items):
        if isinstance(it, dict) and str(it.get("id", "")) == str(item_id):
            return i
    return -1


def existing_ids(items: List[Dict[str, Any]]) -> Set[str]:
    return {str(it.get("id")) for it in items if isinstance(it, dict) and it.get("id")}


def next_order(items: List[Dict[str, Any]]) -> int:
    """One past the highest `order`; 0 for an empty list."""
    orders = [int(to_number(it.get("order"))) for it in items if isinstance(it, dict)]
    return max(orders) + 1 if orders else 0


def move_to(items: List[Dict[str, Any]], item_id: str, new_index: int) -> bool:
    """
    Move an item to a new position in display order and renumber `order`.

    Returns:
        False if the id is unknown
    """
    ordered = sorted(
        (it for it in items if isinstance(it, dict)),
        key=lambda it: to_number(it.get("order")),
    )
    old_index = find_index(ordered, item_id)
    if old_index == -1:
        return False
    item = ordered.pop(old_index)
    new_index = max(0, min(int(new_index), len(ordered)))
    ordered.insert(new_index, item)
    for position, it in enumerate(ordered):
        it["order"] = position
    items[:] = ordered
    return True
