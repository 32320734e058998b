"""Tests for the FastAPI front end."""

from __future__ import annotations

import asyncio
import io

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from sheetmerge.api.app import create_app
from tests.fakes import make_csv, make_xlsx


@pytest.fixture
def client(session):
    return TestClient(create_app(session))


def _upload(client, *files, sheet_index: int = 0):
    payload = [("uploads", (name, content, "application/octet-stream")) for name, content in files]
    return client.post(f"/files?sheet_index={sheet_index}", files=payload)


def _loop_running() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


def _record_loop(monkeypatch, session, method: str) -> list[bool]:
    """Wrap a session method so each call records whether an event loop runs."""
    seen: list[bool] = []
    original = getattr(session, method)

    def wrapper(*args, **kwargs):
        seen.append(_loop_running())
        return original(*args, **kwargs)

    monkeypatch.setattr(session, method, wrapper)
    return seen


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/ready").json()["status"] == "ready"


class TestFiles:
    def test_upload_registers_and_decodes(self, client):
        resp = _upload(client,
                       ("q1/sales.xlsx", make_xlsx({"S": [["a"], [1]]})),
                       ("notes.txt", b"skip me"))
        assert resp.status_code == 201
        body = resp.json()
        assert len(body) == 1
        assert body[0]["path"] == "q1/sales.xlsx"
        assert body[0]["name"] == "sales.xlsx"
        assert body[0]["status"] == "done"
        assert body[0]["row_count"] == 1

    def test_list_with_keyword(self, client):
        _upload(client, ("Report_Jan.xlsx", make_xlsx({"S": [["a"], [1]]})),
                ("summary.csv", make_csv([["a"], [2]])))
        body = client.get("/files", params={"keyword": "REPORT"}).json()
        assert body["total"] == 2
        assert body["visible"] == 1
        assert body["files"][0]["name"] == "Report_Jan.xlsx"

    def test_remove_and_clear(self, client):
        entry_id = _upload(client, ("a.csv", make_csv([["a"], [1]]))).json()[0]["id"]
        assert client.delete(f"/files/{entry_id}").status_code == 200
        assert client.delete(f"/files/{entry_id}").status_code == 404
        _upload(client, ("b.csv", make_csv([["a"], [1]])))
        assert client.delete("/files").status_code == 204
        assert client.get("/files").json()["total"] == 0


class TestMerge:
    def test_merge_returns_workbook_download(self, client):
        _upload(client, ("dir/a.csv", make_csv([["x"], [1]])), ("dir/b.csv", make_csv([["x"], [2]])))
        resp = client.post("/merge", json={"output_file_name": "combined", "source_column_name": "src"})
        assert resp.status_code == 200
        assert "combined.xlsx" in resp.headers["content-disposition"]
        sheet = load_workbook(io.BytesIO(resp.content))["MergedData"]
        assert [list(r) for r in sheet.iter_rows(values_only=True)] == [
            ["x", "src"], [1, "dir/a.csv"], [2, "dir/b.csv"],
        ]

    def test_merge_without_data_is_422(self, client):
        _upload(client, ("bad.xlsx", b"PK\x03\x04 corrupt"))
        resp = client.post("/merge", json={})
        assert resp.status_code == 422
        assert resp.json()["detail"] == "No data to merge."

    def test_suggest_falls_back_to_union(self, client, model):
        model.fail_with(ConnectionError("offline"))
        _upload(client, ("a.csv", make_csv([["A", "B"], [1, 2]])), ("b.csv", make_csv([["B", "C"], [3, 4]])))
        body = client.post("/schema/suggest", json={}).json()
        assert body["source"] == "fallback"
        assert set(body["headers"]) == {"A", "B", "C"}

    def test_merge_with_control_characters_succeeds(self, client):
        _upload(client, ("ctl.csv", b"a,b\nx\x01y,2\n"))
        resp = client.post("/merge", json={"add_source_column": False})
        assert resp.status_code == 200
        sheet = load_workbook(io.BytesIO(resp.content))["MergedData"]
        assert [list(r) for r in sheet.iter_rows(values_only=True)] == [["a", "b"], ["xy", 2]]

    def test_corrupt_workbook_without_signature_is_an_error_entry(self, client):
        body = _upload(client, ("bad.xlsx", b"\x89PNG\r\n\x1a\n garbage")).json()
        assert body[0]["status"] == "error"
        assert body[0]["row_count"] == 0
        assert "bad.xlsx" in body[0]["error_message"]


class TestBlockingWorkOffTheLoop:
    def test_upload_decodes_in_worker_thread(self, client, session, monkeypatch):
        seen = _record_loop(monkeypatch, session, "add_files")
        _upload(client, ("a.csv", make_csv([["a"], [1]])))
        assert seen == [False]

    def test_merge_runs_in_worker_thread(self, client, session, monkeypatch):
        _upload(client, ("a.csv", make_csv([["a"], [1]])))
        seen = _record_loop(monkeypatch, session, "merge")
        assert client.post("/merge", json={}).status_code == 200
        assert seen == [False]

    def test_suggest_runs_in_worker_thread(self, client, session, monkeypatch):
        _upload(client, ("a.csv", make_csv([["a"], [1]])))
        seen = _record_loop(monkeypatch, session, "suggest_headers")
        assert client.post("/schema/suggest", json={}).status_code == 200
        assert seen == [False]
