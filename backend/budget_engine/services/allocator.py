"""
Allocator: applies one user edit to one line item and returns a new tree.

Two edit modes:
    percent: scale the target by (1 + pct/100). For an internal target the
             factor is applied to each immediate child and the target's own
             value becomes the sum of the scaled children.
    value:   set the target to an explicit amount. For an internal target the
             children are rescaled by val / sum(children) (ratio 1 when the
             children sum to zero) and the target's own value is set to val.

Only the target and its immediate children are written; grandchildren keep
their stored values. Callers must run ``aggregate`` after every edit before
displaying anything, since internal values are re-derived there.

Invalid input and unknown ids are silent no-ops: the very same tree object is
returned. Otherwise the result shares every untouched subtree with the input.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from enum import Enum
from typing import Any, Callable, Sequence

from budget_engine.core.line_items import LineItem, Tree

_log = logging.getLogger(__name__)


class EditMode(str, Enum):
    PERCENT = "percent"
    VALUE = "value"


# ──────────────────────────────────────────────────────────────────────
# Input parsing
# ──────────────────────────────────────────────────────────────────────

def parse_edit_input(raw: Any) -> float | None:
    """Parse raw user input into a number, or ``None`` when it is unusable.

    Strings are stripped before parsing. Blank text, ``None``, booleans,
    unparsable text and NaN all yield ``None``. Digit separators (``1_000``)
    are rejected, and infinity is only accepted spelled ``Infinity``.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        number = float(raw)
    else:
        text = str(raw).strip()
        if not text or "_" in text:
            return None
        unsigned = text[1:] if text[0] in "+-" else text
        if unsigned == "Infinity":
            return float("-inf") if text[0] == "-" else float("inf")
        if unsigned.lower().startswith(("inf", "nan")):
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if math.isnan(number):
        return None
    return number


# ──────────────────────────────────────────────────────────────────────
# Edit rules at the target node
# ──────────────────────────────────────────────────────────────────────

def _scale_children(item: LineItem, factor: float) -> tuple[LineItem, ...]:
    return tuple(replace(child, value=child.value * factor) for child in item.children)


def _percent_rule(pct: float) -> Callable[[LineItem], LineItem]:
    factor = 1 + pct / 100

    def _apply(item: LineItem) -> LineItem:
        if item.is_leaf:
            return replace(item, value=item.value * factor)
        children = _scale_children(item, factor)
        return replace(item, children=children, value=sum(c.value for c in children))

    return _apply


def _value_rule(val: float) -> Callable[[LineItem], LineItem]:
    def _apply(item: LineItem) -> LineItem:
        if item.is_leaf:
            return replace(item, value=val)
        total_children = sum(c.value for c in item.children)
        ratio = val / total_children if total_children else 1
        return replace(item, children=_scale_children(item, ratio), value=val)

    return _apply


# ──────────────────────────────────────────────────────────────────────
# Traversal
# ──────────────────────────────────────────────────────────────────────

def _edit_items(
    items: Sequence[LineItem],
    target_id: str,
    rule: Callable[[LineItem], LineItem],
) -> tuple[LineItem, ...] | None:
    """Return the edited sequence, or ``None`` when ``target_id`` is absent."""
    for index, item in enumerate(items):
        if item.id == target_id:
            edited = rule(item)
        elif item.children:
            children = _edit_items(item.children, target_id, rule)
            if children is None:
                continue
            edited = replace(item, children=children)
        else:
            continue
        return (*items[:index], edited, *items[index + 1:])
    return None


def _apply(tree: Tree, target_id: str, rule: Callable[[LineItem], LineItem]) -> Tree:
    edited = _edit_items(tree, target_id, rule)
    if edited is None:
        _log.debug("Edit skipped: no line item with id %r", target_id)
        return tree
    return edited


def apply_percent(tree: Tree, target_id: str, raw: Any) -> Tree:
    pct = parse_edit_input(raw)
    if pct is None:
        _log.debug("Percent edit on %r skipped: invalid input %r", target_id, raw)
        return tree
    _log.debug("Percent edit on %r: %+g%%", target_id, pct)
    return _apply(tree, target_id, _percent_rule(pct))


def apply_value(tree: Tree, target_id: str, raw: Any) -> Tree:
    val = parse_edit_input(raw)
    if val is None:
        _log.debug("Value edit on %r skipped: invalid input %r", target_id, raw)
        return tree
    _log.debug("Value edit on %r: %g", target_id, val)
    return _apply(tree, target_id, _value_rule(val))


_EDITS: dict[EditMode, Callable[[Tree, str, Any], Tree]] = {
    EditMode.PERCENT: apply_percent,
    EditMode.VALUE: apply_value,
}


def apply_edit(tree: Tree, target_id: str, raw: Any, mode: EditMode | str) -> Tree:
    """Dispatch to ``apply_percent`` or ``apply_value``.

    Raises ``ValueError`` for an unknown mode.
    """
    return _EDITS[EditMode(mode)](tree, target_id, raw)
