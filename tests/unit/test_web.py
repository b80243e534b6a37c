"""Tests for the FastAPI web API."""

from __future__ import annotations

import time

import pytest
from fastapi.testclient import TestClient

from accessaudit.config import AccessAuditConfig
from accessaudit.web.app import create_app


@pytest.fixture
def client(tmp_path, fetcher):
    config = AccessAuditConfig(data_dir=tmp_path)
    app = create_app(config, fetcher=fetcher)
    with TestClient(app) as c:
        yield c


def _wait_for_scan(client: TestClient, scan_id: str) -> dict:
    for _ in range(100):
        data = client.get(f"/api/scans/{scan_id}").json()
        if data["status"] != "pending":
            return data
        time.sleep(0.02)
    raise AssertionError(f"scan {scan_id} never finished")


def _completed_scan(client: TestClient, target: str = "https://example.com/img") -> dict:
    resp = client.post("/api/scans", json={"target": target, "level": "AA"})
    assert resp.status_code == 202
    return _wait_for_scan(client, resp.json()["id"])


class TestCatalogApi:
    def test_list_level_a(self, client):
        data = client.get("/api/catalog", params={"level": "A"}).json()
        assert data["version"] == "wcag-2.1"
        assert len(data["criteria"]) == 30

    def test_invalid_level(self, client):
        assert client.get("/api/catalog", params={"level": "Z"}).status_code == 400


class TestScansApi:
    def test_scan_lifecycle(self, client):
        resp = client.post("/api/scans", json={"target": "https://example.com/img"})
        assert resp.status_code == 202
        assert resp.json()["status"] == "pending"

        data = _wait_for_scan(client, resp.json()["id"])
        assert data["status"] == "completed"
        assert data["metrics"]["elements_scanned"] == 3
        assert "missing-alt-text" in [f["rule_id"] for f in data["findings"]]

        listed = client.get("/api/scans").json()
        assert [s["id"] for s in listed] == [data["id"]]
        assert "findings" not in listed[0]

    def test_failed_scan(self, client):
        data = _completed_scan(client, "https://unreachable.invalid/")
        assert data["status"] == "failed"
        assert data["error_message"]

    def test_invalid_target(self, client):
        resp = client.post("/api/scans", json={"target": "ftp://example.com/"})
        assert resp.status_code == 400

    def test_invalid_level(self, client):
        resp = client.post("/api/scans", json={"target": "https://example.com/", "level": "B"})
        assert resp.status_code == 400

    def test_unknown_scan(self, client):
        assert client.get("/api/scans/missing").status_code == 404

    def test_level_defaults_to_config(self, client, tmp_path, fetcher):
        resp = client.post("/api/scans", json={"target": "https://example.com/"})
        assert _wait_for_scan(client, resp.json()["id"])["level"] == "AA"

        config = AccessAuditConfig(data_dir=tmp_path / "strict", default_level="AAA")
        with TestClient(create_app(config, fetcher=fetcher)) as strict:
            resp = strict.post("/api/scans", json={"target": "https://example.com/"})
            assert _wait_for_scan(strict, resp.json()["id"])["level"] == "AAA"


class TestAuditsApi:
    def test_audit_workflow(self, client):
        scan = _completed_scan(client)

        resp = client.post("/api/audits", json={"scan_id": scan["id"], "auditor_name": "Sam"})
        assert resp.status_code == 200
        session = resp.json()
        assert len(session["evaluations"]) == 50
        assert session["summary"]["not_evaluated"] == 0

        again = client.post("/api/audits", json={"scan_id": scan["id"]}).json()
        assert again["id"] == session["id"]

        alt = next(e for e in session["evaluations"] if e["criterion_id"] == "1.1.1")
        assert alt["status"] == "failed"

        resp = client.patch(
            f"/api/audits/criteria/{alt['id']}",
            json={"status": "passed", "notes": "Decorative image"},
        )
        assert resp.status_code == 200
        assert resp.json()["status"] == "passed"
        assert resp.json()["notes"] == "Decorative image"

        resp = client.post(
            f"/api/audits/criteria/{alt['id']}/evidence",
            json={"filename": "shot.png", "description": "Header"},
        )
        assert resp.status_code == 201
        evidence_id = resp.json()["id"]
        listed = client.get(f"/api/audits/criteria/{alt['id']}/evidence").json()
        assert [e["id"] for e in listed] == [evidence_id]

        assert client.delete(f"/api/audits/evidence/{evidence_id}").status_code == 200
        assert client.delete(f"/api/audits/evidence/{evidence_id}").status_code == 404

        done = client.post(f"/api/audits/{session['id']}/complete").json()
        assert done["status"] == "completed"
        assert done["completed_at"] is not None

        fetched = client.get(f"/api/audits/{session['id']}").json()
        assert fetched["status"] == "completed"

    def test_failed_scan_conflict(self, client):
        scan = _completed_scan(client, "https://unreachable.invalid/")
        resp = client.post("/api/audits", json={"scan_id": scan["id"]})
        assert resp.status_code == 409

    def test_unknown_scan(self, client):
        resp = client.post("/api/audits", json={"scan_id": "missing"})
        assert resp.status_code == 404

    def test_invalid_status(self, client):
        scan = _completed_scan(client)
        session = client.post("/api/audits", json={"scan_id": scan["id"]}).json()
        target = session["evaluations"][0]["id"]
        resp = client.patch(f"/api/audits/criteria/{target}", json={"status": "maybe"})
        assert resp.status_code == 400
        resp = client.patch(f"/api/audits/criteria/{target}", json={})
        assert resp.status_code == 400

    def test_unknown_ids(self, client):
        assert client.get("/api/audits/missing").status_code == 404
        assert client.post("/api/audits/missing/complete").status_code == 404
        resp = client.patch("/api/audits/criteria/missing", json={"status": "passed"})
        assert resp.status_code == 404
        assert client.get("/api/audits/criteria/missing/evidence").status_code == 404
