"""Session create/get/delete routes, including creation from an uploaded table."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from io import BytesIO
from pathlib import Path

import pandas as pd
from fastapi import APIRouter, File, HTTPException, UploadFile

import budget_api.state as state
from budget_api.schemas import CreateSessionRequest, SessionMeta
from budget_api.session import _assert_session_exists, _get_session_meta
from budget_engine.config import SAMPLE_BUDGET
from budget_engine.core.frames import tree_from_frame
from budget_engine.core.line_items import Tree, TreeStructureError, build_tree
from budget_engine.core.store import TreeStore
from budget_engine.services.pending_inputs import PendingInputs

_log = logging.getLogger(__name__)

router = APIRouter()

_UPLOAD_READERS = {
    ".csv": lambda buf: pd.read_csv(buf, dtype={"id": str, "parent_id": str}),
    ".xlsx": lambda buf: pd.read_excel(buf, dtype={"id": str, "parent_id": str}),
}


@router.post("/api/sessions", response_model=SessionMeta)
def create_session(payload: CreateSessionRequest | None = None) -> SessionMeta:
    if payload is not None and payload.items is not None:
        records = [item.model_dump(by_alias=True, exclude_none=True) for item in payload.items]
    else:
        records = list(SAMPLE_BUDGET)

    try:
        tree = build_tree(records)
    except TreeStructureError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return _register_session(tree)


@router.post("/api/sessions/upload", response_model=SessionMeta)
async def create_session_from_upload(file: UploadFile = File(...)) -> SessionMeta:
    """Create a session from a flat .csv or .xlsx table.

    Expected columns: id, parent_id, label, value and optionally
    original_value and position (see budget_engine.core.frames).
    """
    suffix = Path(file.filename or "").suffix.lower()
    if suffix not in _UPLOAD_READERS:
        raise HTTPException(status_code=400, detail="Only .csv or .xlsx files are supported")

    content = await file.read()
    try:
        df = _UPLOAD_READERS[suffix](BytesIO(content))
    except Exception as exc:
        raise HTTPException(status_code=400, detail=f"Could not read {file.filename}: {exc}")

    try:
        tree = tree_from_frame(df)
    except TreeStructureError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    _log.info("Read %d line items from %s", len(df), file.filename)
    return _register_session(tree)


def _register_session(tree: Tree) -> SessionMeta:
    session_id = str(uuid.uuid4())
    meta = SessionMeta(
        session_id=session_id,
        created_at=datetime.now(timezone.utc).isoformat(),
        status="active",
        schema_version="v1",
    )
    state._SESSIONS[session_id] = meta
    state._STORES[session_id] = TreeStore(tree)
    state._PENDING_INPUTS[session_id] = PendingInputs()
    _log.info("Created session %s with %d top-level items", session_id, len(tree))
    return meta


@router.get("/api/sessions/{session_id}", response_model=SessionMeta)
def get_session(session_id: str) -> SessionMeta:
    _assert_session_exists(session_id)
    return _get_session_meta(session_id)


@router.delete("/api/sessions/{session_id}")
def delete_session(session_id: str) -> dict[str, str]:
    _assert_session_exists(session_id)
    state._SESSIONS.pop(session_id, None)
    state._STORES.pop(session_id, None)
    state._PENDING_INPUTS.pop(session_id, None)
    return {"status": "ok"}
