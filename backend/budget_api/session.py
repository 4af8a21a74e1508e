"""Session lookup helpers (in-memory only)."""

from __future__ import annotations

from fastapi import HTTPException

import budget_api.state as state
from budget_api.schemas import SessionMeta
from budget_engine.core.store import TreeStore
from budget_engine.services.pending_inputs import PendingInputs


def _get_session_meta(session_id: str) -> SessionMeta | None:
    return state._SESSIONS.get(session_id)


def _assert_session_exists(session_id: str) -> None:
    if _get_session_meta(session_id) is None:
        raise HTTPException(status_code=404, detail="Session not found. Create it first via POST /api/sessions")


def _session_store(session_id: str) -> TreeStore:
    _assert_session_exists(session_id)
    return state._STORES[session_id]


def _session_inputs(session_id: str) -> PendingInputs:
    _assert_session_exists(session_id)
    return state._PENDING_INPUTS[session_id]
