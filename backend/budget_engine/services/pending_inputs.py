"""Pending raw input per line item, kept outside the tree store.

The presentation layer records what the user typed for a row, then hands it
to an edit. A pending entry is consumed only when it parsed as a number;
invalid text stays so the user can correct it.
"""

from __future__ import annotations

from typing import Any, Callable

from budget_engine.core.line_items import Tree
from budget_engine.services.allocator import parse_edit_input


class PendingInputs:
    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def set(self, item_id: str, raw: str) -> None:
        self._values[item_id] = raw

    def get(self, item_id: str) -> str:
        return self._values.get(item_id, "")

    def clear(self, item_id: str) -> None:
        self._values.pop(item_id, None)

    def snapshot(self) -> dict[str, str]:
        return dict(self._values)

    def consume(
        self,
        tree: Tree,
        item_id: str,
        edit: Callable[[Tree, str, Any], Tree],
        raw: Any = None,
    ) -> Tree:
        """Run ``edit`` with ``raw`` (or the pending text) and clear on success.

        The entry is cleared whenever the input parsed, even if no item has
        ``item_id``.
        """
        if raw is None:
            raw = self._values.get(item_id)
        result = edit(tree, item_id, raw)
        if parse_edit_input(raw) is not None:
            self.clear(item_id)
        return result
