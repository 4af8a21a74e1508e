"""Tree Store: holds the current tree snapshot for one budget."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from budget_engine.core.line_items import Tree

if TYPE_CHECKING:
    from budget_engine.services.aggregator import AggregatedItem

_log = logging.getLogger(__name__)


class TreeStore:
    """Single-writer holder of an immutable tree snapshot.

    ``replace`` swaps the whole tree; there is no partial update. The
    aggregation of the current snapshot is memoized until the next swap.
    """

    def __init__(self, tree: Tree) -> None:
        self._tree: Tree = tuple(tree)
        self._aggregated: tuple[AggregatedItem, ...] | None = None
        self.version = 0

    def get(self) -> Tree:
        return self._tree

    def replace(self, new_tree: Tree) -> None:
        new_tree = tuple(new_tree)
        if new_tree is self._tree:
            return
        self._tree = new_tree
        self._aggregated = None
        self.version += 1
        _log.debug("Tree replaced (version %d, %d top-level items)", self.version, len(new_tree))

    def aggregated(self) -> tuple[AggregatedItem, ...]:
        if self._aggregated is None:
            from budget_engine.services.aggregator import aggregate

            self._aggregated = aggregate(self._tree)
        return self._aggregated
