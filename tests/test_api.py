"""
Tests for the HTTP adapter.
"""
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from cid_dashboard.app.api import create_app
from cid_dashboard.services.session import DashboardSession

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@pytest.fixture
def client():
    return TestClient(create_app(DashboardSession()))


def upload(client, content, filename="statement.xlsx"):
    return client.post("/upload", files={"file": (filename, content, XLSX_MIME)})


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_upload_and_read_views(client, statement_xlsx):
    response = upload(client, statement_xlsx)
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "loaded"
    assert body["accepted"] == 3
    assert body["rejected"] == 1

    records = client.get("/transactions").json()
    assert [r["type"] for r in records] == ["deposit-cash", "deposit", "transfer"]

    summary = client.get("/summary").json()
    assert summary["total_transfers"] == 75
    assert summary["most_active_day"] == "01/03/2024"

    charts = client.get("/charts").json()
    assert [bar["label"] for bar in charts["distribution"]] == ["deposits", "transfers"]
    assert len(charts["timeline"]) == 3


def test_upload_rejects_wrong_extension(client):
    response = upload(client, b"a,b,c", "export.csv")
    assert response.status_code == 400
    body = response.json()
    assert "Invalid file type" in body["error"]
    assert body["details"]["filename"] == "export.csv"


def test_upload_too_large(monkeypatch):
    from cid_dashboard.core.config import reset_settings

    monkeypatch.setenv("MAX_UPLOAD_MB", "1")
    reset_settings()
    client = TestClient(create_app(DashboardSession()))
    response = upload(client, b"PK\x03\x04" + b"\x00" * (1024 * 1024 + 1))
    assert response.status_code == 413
    body = response.json()
    assert body["error"].startswith("File too large")
    assert body["details"]["limit"] == 1024 * 1024


def test_unreadable_upload_degrades_to_empty_state(client, statement_xlsx):
    upload(client, statement_xlsx)
    response = upload(client, b"garbage", "broken.xlsx")
    assert response.status_code == 200
    assert response.json()["status"] == "unreadable"

    dashboard = client.get("/dashboard").json()
    assert dashboard["records"] == []
    assert dashboard["summary"]["top_account"] == "-"
    assert dashboard["last_load"]["status"] == "unreadable"


def test_filters_and_sort(client, statement_xlsx):
    upload(client, statement_xlsx)

    response = client.put("/filters/deposit", params={"enabled": "false"})
    assert response.status_code == 200
    assert response.json() == {"show_deposits": False, "show_transfers": True}
    assert [r["type"] for r in client.get("/transactions").json()] == ["transfer"]

    client.put("/filters/deposit", params={"enabled": "true"})
    response = client.put("/sort", params={"key": "amount", "direction": "desc"})
    assert response.json() == {"key": "amount", "direction": "desc"}
    amounts = [r["amount"] for r in client.get("/transactions").json()]
    assert amounts == sorted(amounts, reverse=True)

    assert client.post("/sort/amount/toggle").json()["direction"] == "asc"
    assert client.post("/sort/origin/toggle").json() == {"key": "origin", "direction": "asc"}


def test_invalid_filter_and_sort_are_400(client):
    response = client.put("/filters/refund", params={"enabled": "true"})
    assert response.status_code == 400
    assert "allowed" in response.json()["details"]

    assert client.put("/sort", params={"key": "balance"}).status_code == 400
    assert client.post("/sort/balance/toggle").status_code == 400


def test_clear_session(client, statement_xlsx):
    upload(client, statement_xlsx)
    assert client.delete("/session").status_code == 204
    assert client.get("/transactions").json() == []
    assert client.get("/dashboard").json()["last_load"] is None


def test_upload_legacy_xls(client):
    content = (Path(__file__).parent / "data" / "statement.xls").read_bytes()
    response = client.post("/upload", files={"file": ("statement.xls", content, "application/vnd.ms-excel")})
    assert response.status_code == 200
    assert response.json()["accepted"] == 3
