"""
Aggregator: bottom-up pass deriving effective values and variance.

Leaf effective value is its stored value. Internal effective value is the
sum of its aggregated children, so whatever an internal node had stored
(including the explicit target of an absolute edit) is overridden here.

Variance is always measured against the node's own ``original_value``.
For internal nodes that baseline was set independently at construction and
is never re-derived from the children.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from budget_engine.core.line_items import LineItem


@dataclass(frozen=True)
class AggregatedItem:
    id: str
    label: str
    value: float
    original_value: float
    variance: float
    children: tuple[AggregatedItem, ...] = field(default_factory=tuple)

    @property
    def is_leaf(self) -> bool:
        return not self.children


def variance(value: float, original_value: float) -> float:
    """Percentage drift of ``value`` from ``original_value``.

    A zero baseline is not guarded: the result is ``nan`` (0/0) or ``±inf``.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        base = np.float64(original_value)
        return float((np.float64(value) - base) / base * 100)


def _aggregate_item(item: LineItem) -> AggregatedItem:
    if item.is_leaf:
        return AggregatedItem(
            id=item.id,
            label=item.label,
            value=item.value,
            original_value=item.original_value,
            variance=variance(item.value, item.original_value),
        )

    children = tuple(_aggregate_item(child) for child in item.children)
    total = sum(child.value for child in children)
    return AggregatedItem(
        id=item.id,
        label=item.label,
        value=total,
        original_value=item.original_value,
        variance=variance(total, item.original_value),
        children=children,
    )


def aggregate(tree: Sequence[LineItem]) -> tuple[AggregatedItem, ...]:
    """Return a parallel tree of ``AggregatedItem``; the input is untouched."""
    return tuple(_aggregate_item(item) for item in tree)


def grand_total(aggregated: Sequence[AggregatedItem]) -> float:
    return float(sum(item.value for item in aggregated))
