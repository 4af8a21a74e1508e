"""Core domain objects: line items, tree construction, frames, store."""

from budget_engine.core.frames import tree_from_frame, tree_to_frame
from budget_engine.core.line_items import (
    LineItem,
    Tree,
    TreeStructureError,
    build_tree,
    find_item,
    tree_to_records,
    walk,
)
from budget_engine.core.store import TreeStore

__all__ = [
    "LineItem",
    "Tree",
    "TreeStore",
    "TreeStructureError",
    "build_tree",
    "find_item",
    "tree_from_frame",
    "tree_to_frame",
    "tree_to_records",
    "walk",
]
