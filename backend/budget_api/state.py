"""
Global mutable state shared across the application.

All modules access these via ``import budget_api.state as state`` and then
``state._SESSIONS``, ``state._STORES`` etc. Nothing here is written to disk;
a session lives as long as the process.
"""

from __future__ import annotations

from budget_engine.core.store import TreeStore
from budget_engine.services.pending_inputs import PendingInputs

# session_id -> SessionMeta
_SESSIONS: dict = {}

# session_id -> current budget tree
_STORES: dict[str, TreeStore] = {}

# session_id -> raw text typed per line item (ephemeral UI state)
_PENDING_INPUTS: dict[str, PendingInputs] = {}


def reset() -> None:
    _SESSIONS.clear()
    _STORES.clear()
    _PENDING_INPUTS.clear()
