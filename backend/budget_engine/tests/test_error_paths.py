"""Error path tests: unknown sessions, malformed trees, bad payloads."""

from __future__ import annotations

import pytest
from starlette.testclient import TestClient


# ── Session errors ───────────────────────────────────────────────────────────

class TestSessionErrors:
    def test_get_nonexistent_session(self, test_client: TestClient) -> None:
        resp = test_client.get("/api/sessions/does-not-exist-12345")
        assert resp.status_code == 404

    def test_budget_on_nonexistent_session(self, test_client: TestClient) -> None:
        resp = test_client.get("/api/sessions/does-not-exist/budget")
        assert resp.status_code == 404

    @pytest.mark.parametrize("mode", ["percent", "value"])
    def test_edit_on_nonexistent_session(self, test_client: TestClient, mode: str) -> None:
        resp = test_client.post(
            f"/api/sessions/does-not-exist/budget/items/phones/{mode}",
            json={"raw": "10"},
        )
        assert resp.status_code == 404

    def test_input_on_nonexistent_session(self, test_client: TestClient) -> None:
        resp = test_client.put(
            "/api/sessions/does-not-exist/budget/inputs/phones",
            json={"raw": "10"},
        )
        assert resp.status_code == 404

    def test_export_on_nonexistent_session(self, test_client: TestClient) -> None:
        resp = test_client.get("/api/sessions/does-not-exist/budget/export")
        assert resp.status_code == 404


# ── Malformed trees ──────────────────────────────────────────────────────────

class TestMalformedTrees:
    def test_duplicate_ids_rejected(self, test_client: TestClient) -> None:
        resp = test_client.post("/api/sessions", json={"items": [
            {"id": "a", "label": "A", "value": 1, "children": [
                {"id": "dup", "label": "Dup", "value": 1},
            ]},
            {"id": "dup", "label": "Dup again", "value": 2},
        ]})
        assert resp.status_code == 422
        assert "Duplicate" in resp.json()["detail"]

    def test_missing_value_rejected(self, test_client: TestClient) -> None:
        resp = test_client.post("/api/sessions", json={"items": [{"id": "a", "label": "A"}]})
        assert resp.status_code == 422

    def test_unknown_edit_mode_not_routed(self, test_client: TestClient, session_id: str) -> None:
        resp = test_client.post(
            f"/api/sessions/{session_id}/budget/items/phones/ratio",
            json={"raw": "10"},
        )
        assert resp.status_code == 404


# ── Upload errors ────────────────────────────────────────────────────────────

class TestUploadErrors:
    def test_unsupported_extension(self, test_client: TestClient) -> None:
        resp = test_client.post(
            "/api/sessions/upload",
            files={"file": ("budget.txt", b"id,label,value\na,A,1\n", "text/plain")},
        )
        assert resp.status_code == 400

    def test_corrupt_workbook(self, test_client: TestClient) -> None:
        resp = test_client.post(
            "/api/sessions/upload",
            files={"file": ("budget.xlsx", b"PK\x03\x04corrupt", "application/octet-stream")},
        )
        assert resp.status_code == 400

    def test_parent_cycle_in_table(self, test_client: TestClient) -> None:
        csv = "id,parent_id,label,value\nroot,,Root,1\na,b,A,1\nb,a,B,1\n"
        resp = test_client.post(
            "/api/sessions/upload",
            files={"file": ("budget.csv", csv.encode("utf-8"), "text/csv")},
        )
        assert resp.status_code == 422
        assert "cycle" in resp.json()["detail"]

    def test_unknown_parent_in_table(self, test_client: TestClient) -> None:
        csv = "id,parent_id,label,value\na,ghost,A,1\n"
        resp = test_client.post(
            "/api/sessions/upload",
            files={"file": ("budget.csv", csv.encode("utf-8"), "text/csv")},
        )
        assert resp.status_code == 422
