"""Pydantic models defining the REST contract between frontend and backend."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# ── Session & Metadata ──────────────────────────────────────────────────────

class SessionMeta(BaseModel):
    session_id: str
    created_at: str
    status: str = "active"
    schema_version: str = "v1"


class LineItemIn(BaseModel):
    """One line item as supplied when a session is created.

    ``originalValue`` defaults to ``value`` when omitted.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str
    label: str
    value: float
    original_value: float | None = Field(default=None, alias="originalValue")
    children: list[LineItemIn] = Field(default_factory=list)


class CreateSessionRequest(BaseModel):
    items: list[LineItemIn] | None = None


# ── Budget tree ─────────────────────────────────────────────────────────────

class BudgetNode(BaseModel):
    """
    A line item after aggregation.
    Non-finite numbers (zero baseline, overflowing edits) are sent as null in
    the numeric fields; the *_display fields always carry the text to show.
    """
    id: str
    label: str
    value: float | None
    value_display: str
    original_value: float | None
    variance: float | None
    variance_display: str
    children: list[BudgetNode] = Field(default_factory=list)


class BudgetRow(BaseModel):
    """Flattened table row, in display order."""
    id: str
    label: str
    depth: int
    is_leaf: bool
    value: float | None
    value_display: str
    variance: float | None
    variance_display: str
    placeholder: str      # "%" for top-level rows, "val" below
    pending_input: str    # raw text typed for this row, "" when none


class BudgetResponse(BaseModel):
    session_id: str
    version: int
    items: list[BudgetNode]
    rows: list[BudgetRow]
    grand_total: float | None
    grand_total_display: str


# ── Edits ───────────────────────────────────────────────────────────────────

class PendingInputRequest(BaseModel):
    raw: str = ""


class EditRequest(BaseModel):
    """Edit body. When ``raw`` is omitted the row's pending input is used."""
    raw: str | float | None = None


class EditResponse(BudgetResponse):
    item_id: str
    mode: str
    applied: bool
