"""
Line item tree: the data model every other module works on.

A tree is a tuple of top-level ``LineItem`` objects. Items are frozen and
children are tuples, so an edit always produces a new tree and any snapshot
taken earlier stays valid. Untouched subtrees are shared between snapshots.

Examples:
    tree = build_tree([
        {"id": "electronics", "label": "Electronics", "value": 1500,
         "children": [
             {"id": "phones", "label": "Phones", "value": 800},
             {"id": "laptops", "label": "Laptops", "value": 700},
         ]},
    ])
    find_item(tree, "phones").value  # → 800.0
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any


class TreeStructureError(ValueError):
    """Raised when input cannot form a strict tree with unique ids."""


# ──────────────────────────────────────────────────────────────────────
# Public types
# ──────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class LineItem:
    """One node of the budget tree.

    ``original_value`` is the baseline captured at construction. No edit
    operation ever writes it; use ``dataclasses.replace`` to change ``value``.
    """
    id: str
    label: str
    value: float
    original_value: float
    children: tuple[LineItem, ...] = field(default_factory=tuple)

    @property
    def is_leaf(self) -> bool:
        return not self.children


Tree = tuple[LineItem, ...]


# ──────────────────────────────────────────────────────────────────────
# Construction
# ──────────────────────────────────────────────────────────────────────

def _baseline(record: Mapping[str, Any], value: float) -> float:
    for key in ("originalValue", "original_value"):
        raw = record.get(key)
        if raw is not None:
            return float(raw)
    return value


def build_tree(records: Sequence[Mapping[str, Any]]) -> Tree:
    """Build a tree from nested mappings.

    Each mapping needs ``id``, ``label`` and ``value``; ``originalValue``
    (or ``original_value``) defaults to ``value``; ``children`` is optional.
    Raises ``TreeStructureError`` on missing/duplicate ids or cyclic nesting.
    """
    seen_ids: set[str] = set()
    path: set[int] = set()

    def _build(record: Mapping[str, Any]) -> LineItem:
        marker = id(record)
        if marker in path:
            raise TreeStructureError("Cyclic nesting detected in line item records")

        item_id = record.get("id")
        if item_id is None or str(item_id) == "":
            raise TreeStructureError("Every line item needs a non-empty id")
        item_id = str(item_id)
        if item_id in seen_ids:
            raise TreeStructureError(f"Duplicate line item id: {item_id!r}")
        seen_ids.add(item_id)

        value = float(record.get("value") or 0.0)
        path.add(marker)
        try:
            children = tuple(_build(child) for child in record.get("children") or ())
        finally:
            path.discard(marker)

        return LineItem(
            id=item_id,
            label=str(record.get("label") or item_id),
            value=value,
            original_value=_baseline(record, value),
            children=children,
        )

    return tuple(_build(record) for record in records)


def tree_to_records(tree: Sequence[LineItem]) -> list[dict[str, Any]]:
    """Inverse of ``build_tree``; leaves carry no ``children`` key."""
    records: list[dict[str, Any]] = []
    for item in tree:
        record: dict[str, Any] = {
            "id": item.id,
            "label": item.label,
            "value": item.value,
            "originalValue": item.original_value,
        }
        if item.children:
            record["children"] = tree_to_records(item.children)
        records.append(record)
    return records


# ──────────────────────────────────────────────────────────────────────
# Traversal
# ──────────────────────────────────────────────────────────────────────

def walk(tree: Sequence[Any], depth: int = 0) -> Iterator[tuple[int, Any]]:
    """Yield ``(depth, item)`` pairs in display (pre-order) order.

    Works for any node type exposing ``children`` (line items and
    aggregated items alike).
    """
    for item in tree:
        yield depth, item
        yield from walk(item.children, depth + 1)


def find_item(tree: Sequence[LineItem], item_id: str) -> LineItem | None:
    for _, item in walk(tree):
        if item.id == item_id:
            return item
    return None
