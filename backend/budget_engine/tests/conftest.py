"""Shared pytest fixtures for engine and API integration tests.

Provides:
- test_client: session-scoped FastAPI TestClient with lifespan handling
- session_id: per-test session with automatic cleanup
- sample_tree: the default two-category budget as a line item tree
- make_tree: builds a tree from nested records
"""

from __future__ import annotations

from typing import Any

import pytest
from starlette.testclient import TestClient

import budget_api.state as state
from budget_api.main import app
from budget_engine.config import SAMPLE_BUDGET
from budget_engine.core.line_items import Tree, build_tree


# ── TestClient ─────────────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def test_client():
    """Session-scoped TestClient; triggers app lifespan."""
    with TestClient(app) as client:
        yield client


# ── Session management ─────────────────────────────────────────────────────

@pytest.fixture()
def session_id(test_client: TestClient):
    """Create a fresh API session on the sample budget, drop it on teardown."""
    resp = test_client.post("/api/sessions")
    assert resp.status_code == 200
    sid = resp.json()["session_id"]
    yield sid
    state._SESSIONS.pop(sid, None)
    state._STORES.pop(sid, None)
    state._PENDING_INPUTS.pop(sid, None)


# ── Trees ──────────────────────────────────────────────────────────────────

def make_tree(records: list[dict[str, Any]]) -> Tree:
    return build_tree(records)


def leaf(item_id: str, value: float, original: float | None = None) -> dict[str, Any]:
    record: dict[str, Any] = {"id": item_id, "label": item_id.title(), "value": value}
    if original is not None:
        record["originalValue"] = original
    return record


def node(item_id: str, value: float, children: list[dict[str, Any]], original: float | None = None) -> dict[str, Any]:
    record = leaf(item_id, value, original)
    record["children"] = children
    return record


@pytest.fixture()
def sample_tree() -> Tree:
    return build_tree(SAMPLE_BUDGET)


# Three levels: company > {engineering > {backend, frontend}, ops (leaf)}
THREE_LEVEL_RECORDS = [
    node("company", 1000.0, [
        node("engineering", 600.0, [
            leaf("backend", 400.0),
            leaf("frontend", 200.0),
        ]),
        leaf("ops", 400.0),
    ]),
]


@pytest.fixture()
def three_level_tree() -> Tree:
    return build_tree(THREE_LEVEL_RECORDS)
