"""Flat DataFrame ↔ tree conversion.

The flat shape has one row per line item with a ``parent_id`` column
(``None``/NaN for top-level rows). Row order within a parent is kept.
"""

from __future__ import annotations

from typing import Any, Sequence

import pandas as pd

from budget_engine.core.line_items import LineItem, Tree, TreeStructureError, walk

FRAME_COLUMNS = [
    "id",
    "parent_id",
    "label",
    "value",
    "original_value",
    "depth",
    "position",
]


def tree_to_frame(tree: Sequence[Any]) -> pd.DataFrame:
    """Flatten a tree (line items or aggregated items) in display order."""
    rows: list[dict[str, Any]] = []
    parents: list[str | None] = []
    positions: list[int] = []

    for depth, item in walk(tree):
        # Trim the parent stack back to this depth before recording the row.
        del parents[depth:]
        del positions[depth + 1:]
        if len(positions) <= depth:
            positions.append(0)
        else:
            positions[depth] += 1

        row = {
            "id": item.id,
            "parent_id": parents[depth - 1] if depth > 0 else None,
            "label": item.label,
            "value": float(item.value),
            "original_value": float(item.original_value),
            "depth": depth,
            "position": positions[depth],
        }
        if hasattr(item, "variance"):
            row["variance"] = float(item.variance)
        rows.append(row)
        parents.append(item.id)

    columns = FRAME_COLUMNS + (["variance"] if rows and "variance" in rows[0] else [])
    df = pd.DataFrame(rows, columns=columns)
    # Top-level rows carry None, never NaN, whatever dtype pandas infers.
    df["parent_id"] = df["parent_id"].astype(object).where(df["parent_id"].notna(), None)
    return df


def tree_from_frame(df: pd.DataFrame) -> Tree:
    """Rebuild a tree from a flat frame with ``id``/``parent_id`` columns.

    ``original_value`` defaults to ``value`` when the column is missing or
    NaN. Raises ``TreeStructureError`` on duplicate ids, unknown parents
    or parent cycles.
    """
    missing = {"id", "label", "value"} - set(df.columns)
    if missing:
        raise TreeStructureError(f"Missing columns: {sorted(missing)}")

    work = df.copy()
    work["id"] = work["id"].astype(str)
    parent_ids = work["parent_id"] if "parent_id" in work.columns else [None] * len(work)
    work["parent_id"] = pd.Series(
        [None if pd.isna(p) else str(p) for p in parent_ids],
        index=work.index,
        dtype=object,
    )
    work["value"] = pd.to_numeric(work["value"], errors="coerce").fillna(0.0)
    if "original_value" in work.columns:
        baseline = pd.to_numeric(work["original_value"], errors="coerce")
        work["original_value"] = baseline.fillna(work["value"])
    else:
        work["original_value"] = work["value"]

    duplicated = work.loc[work["id"].duplicated(), "id"]
    if not duplicated.empty:
        raise TreeStructureError(f"Duplicate line item id: {duplicated.iloc[0]!r}")

    known = set(work["id"])
    orphans = work.loc[work["parent_id"].notna() & ~work["parent_id"].isin(known), "parent_id"]
    if not orphans.empty:
        raise TreeStructureError(f"Unknown parent id: {orphans.iloc[0]!r}")

    if "position" in work.columns:
        work = work.sort_values("position", kind="stable")

    by_parent: dict[str | None, list[dict[str, Any]]] = {}
    for record in work.to_dict("records"):
        by_parent.setdefault(record["parent_id"], []).append(record)

    built: set[str] = set()

    def _build(record: dict[str, Any]) -> LineItem:
        built.add(record["id"])
        children = tuple(_build(child) for child in by_parent.get(record["id"], []))
        return LineItem(
            id=record["id"],
            label=str(record["label"]),
            value=float(record["value"]),
            original_value=float(record["original_value"]),
            children=children,
        )

    tree = tuple(_build(record) for record in by_parent.get(None, []))

    # Rows never reached from a root sit on a parent cycle.
    unreachable = known - built
    if unreachable:
        raise TreeStructureError(f"Parent cycle involving ids: {sorted(unreachable)}")
    return tree
