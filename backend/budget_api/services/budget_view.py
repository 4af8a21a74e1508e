"""Budget response construction from the aggregated tree.

The engine hands back raw floats (including nan/inf for zero baselines);
this module turns them into the JSON-safe, two-decimal view the frontend
renders.
"""

from __future__ import annotations

import math
from io import BytesIO
from typing import Sequence

import pandas as pd

from budget_api.config import (
    DISPLAY_DECIMALS,
    GRAND_TOTAL_LABEL,
    NESTED_PLACEHOLDER,
    TOP_LEVEL_PLACEHOLDER,
    _EXPORT_COLUMNS,
)
from budget_api.schemas import BudgetNode, BudgetResponse, BudgetRow
from budget_engine.core.frames import tree_to_frame
from budget_engine.core.line_items import walk
from budget_engine.core.store import TreeStore
from budget_engine.services.aggregator import AggregatedItem, grand_total
from budget_engine.services.pending_inputs import PendingInputs


# ── Number formatting ───────────────────────────────────────────────────────

def _finite_or_none(value: float) -> float | None:
    return value if math.isfinite(value) else None


def _format_number(value: float) -> str:
    """Two-decimal text; non-finite values keep their NaN/Infinity spelling."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return f"{value:.{DISPLAY_DECIMALS}f}"


def _format_variance(value: float) -> str:
    return f"{_format_number(value)}%"


# ── Tree / rows ─────────────────────────────────────────────────────────────

def _to_node(item: AggregatedItem) -> BudgetNode:
    return BudgetNode(
        id=item.id,
        label=item.label,
        value=_finite_or_none(item.value),
        value_display=_format_number(item.value),
        original_value=_finite_or_none(item.original_value),
        variance=_finite_or_none(item.variance),
        variance_display=_format_variance(item.variance),
        children=[_to_node(child) for child in item.children],
    )


def _to_rows(aggregated: Sequence[AggregatedItem], inputs: PendingInputs) -> list[BudgetRow]:
    rows: list[BudgetRow] = []
    for depth, item in walk(aggregated):
        rows.append(BudgetRow(
            id=item.id,
            label=item.label,
            depth=depth,
            is_leaf=item.is_leaf,
            value=_finite_or_none(item.value),
            value_display=_format_number(item.value),
            variance=_finite_or_none(item.variance),
            variance_display=_format_variance(item.variance),
            placeholder=TOP_LEVEL_PLACEHOLDER if depth == 0 else NESTED_PLACEHOLDER,
            pending_input=inputs.get(item.id),
        ))
    return rows


def _build_budget_response(
    session_id: str, store: TreeStore, inputs: PendingInputs,
) -> BudgetResponse:
    aggregated = store.aggregated()
    total = grand_total(aggregated)
    return BudgetResponse(
        session_id=session_id,
        version=store.version,
        items=[_to_node(item) for item in aggregated],
        rows=_to_rows(aggregated, inputs),
        grand_total=_finite_or_none(total),
        grand_total_display=_format_number(total),
    )


# ── Export ──────────────────────────────────────────────────────────────────

def _export_frame(store: TreeStore) -> pd.DataFrame:
    """Aggregated table in display order with a closing grand total row."""
    aggregated = store.aggregated()
    df = tree_to_frame(aggregated)
    if df.empty:
        df = pd.DataFrame(columns=[col for col, _ in _EXPORT_COLUMNS])
    df = df[[col for col, _ in _EXPORT_COLUMNS]].copy()
    # Indent sub-items like the on-screen table.
    df["label"] = [
        ("-- " * depth) + label for depth, label in zip(df["depth"], df["label"])
    ]
    # Spreadsheets have no nan/inf; write them as display text.
    for col in ("value", "original_value", "variance"):
        df[col] = pd.Series(
            [v if math.isfinite(v) else _format_number(v) for v in df[col]],
            index=df.index,
            dtype=object,
        )
    total = grand_total(aggregated)
    total_row = pd.DataFrame([{
        "label": GRAND_TOTAL_LABEL,
        "depth": None,
        "value": total if math.isfinite(total) else _format_number(total),
        "original_value": None,
        "variance": None,
    }])
    df = pd.concat([df, total_row], ignore_index=True)
    return df.rename(columns=dict(_EXPORT_COLUMNS))


def _write_budget_workbook(df: pd.DataFrame) -> BytesIO:
    from openpyxl import Workbook
    from openpyxl.styles import Font

    wb = Workbook()
    ws = wb.active
    ws.title = "Budget"
    ws.append(list(df.columns))
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for record in df.itertuples(index=False):
        ws.append([None if value is None or pd.isna(value) else value for value in record])

    number_format = "#,##0." + "0" * DISPLAY_DECIMALS
    for row in ws.iter_rows(min_row=2, min_col=3, max_col=5):
        for cell in row:
            if isinstance(cell.value, (int, float)):
                cell.number_format = number_format
    for cell in ws[ws.max_row]:
        cell.font = Font(bold=True)

    buf = BytesIO()
    wb.save(buf)
    buf.seek(0)
    return buf
