from .aggregator import AggregatedItem, aggregate, grand_total, variance
from .allocator import (
    EditMode,
    apply_edit,
    apply_percent,
    apply_value,
    parse_edit_input,
)
from .pending_inputs import PendingInputs

__all__ = [
    "AggregatedItem",
    "aggregate",
    "grand_total",
    "variance",
    "EditMode",
    "apply_edit",
    "apply_percent",
    "apply_value",
    "parse_edit_input",
    "PendingInputs",
]
