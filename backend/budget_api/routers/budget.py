"""Budget read, pending-input, edit and export routes."""

from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from budget_api.schemas import (
    BudgetResponse,
    EditRequest,
    EditResponse,
    PendingInputRequest,
)
from budget_api.services.budget_view import (
    _build_budget_response,
    _export_frame,
    _write_budget_workbook,
)
from budget_api.session import _session_inputs, _session_store
from budget_engine.services.allocator import EditMode, apply_edit

_log = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/sessions/{session_id}/budget", response_model=BudgetResponse)
def get_budget(session_id: str) -> BudgetResponse:
    store = _session_store(session_id)
    return _build_budget_response(session_id, store, _session_inputs(session_id))


@router.put("/api/sessions/{session_id}/budget/inputs/{item_id}", response_model=BudgetResponse)
def set_pending_input(session_id: str, item_id: str, payload: PendingInputRequest) -> BudgetResponse:
    store = _session_store(session_id)
    inputs = _session_inputs(session_id)
    inputs.set(item_id, payload.raw)
    return _build_budget_response(session_id, store, inputs)


def _run_edit(session_id: str, item_id: str, mode: EditMode, payload: EditRequest | None) -> EditResponse:
    store = _session_store(session_id)
    inputs = _session_inputs(session_id)
    raw = payload.raw if payload is not None else None

    before = store.get()
    after = inputs.consume(
        before,
        item_id,
        lambda tree, target, value: apply_edit(tree, target, value, mode),
        raw=raw,
    )
    applied = after is not before
    store.replace(after)
    if applied:
        _log.info("Applied %s edit to %s in session %s", mode.value, item_id, session_id)

    view = _build_budget_response(session_id, store, inputs)
    return EditResponse(**view.model_dump(), item_id=item_id, mode=mode.value, applied=applied)


@router.post("/api/sessions/{session_id}/budget/items/{item_id}/percent", response_model=EditResponse)
def apply_percent_edit(session_id: str, item_id: str, payload: EditRequest | None = None) -> EditResponse:
    return _run_edit(session_id, item_id, EditMode.PERCENT, payload)


@router.post("/api/sessions/{session_id}/budget/items/{item_id}/value", response_model=EditResponse)
def apply_value_edit(session_id: str, item_id: str, payload: EditRequest | None = None) -> EditResponse:
    return _run_edit(session_id, item_id, EditMode.VALUE, payload)


@router.get("/api/sessions/{session_id}/budget/export")
def export_budget(session_id: str):
    """Export the aggregated budget table as an Excel (.xlsx) file."""
    store = _session_store(session_id)
    buf = _write_budget_workbook(_export_frame(store))

    today = date.today().isoformat()
    filename = f"budget_export_{session_id[:8]}_{today}.xlsx"
    return StreamingResponse(
        buf,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
