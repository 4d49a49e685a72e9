from unittest.mock import patch

from fastapi.testclient import TestClient

from rebound.app import app


def test_not_found_envelope(client):
    r = client.get("/api/does-not-exist")
    assert r.status_code == 404
    j = r.json()
    assert j["code"] == "NOT_FOUND"
    assert "trace_id" in j


def test_unhandled_exception_envelope(headers):
    client = TestClient(app, raise_server_exceptions=False)
    with patch("rebound.routes.profile_routes.get_strategy", side_effect=RuntimeError("boom")):
        r = client.post("/api/profile/feedback", headers=headers, json={"strategy_id": "strategy-1", "helpful": True})
    assert r.status_code == 500
    j = r.json()
    assert j["code"] == "INTERNAL_SERVER_ERROR"
    assert j["details"] == "boom"
    assert j["trace_id"]
    assert r.headers["x-trace-id"] == j["trace_id"]


def test_unhandled_exception_keeps_incoming_trace_id(headers):
    client = TestClient(app, raise_server_exceptions=False)
    with patch("rebound.routes.profile_routes.get_strategy", side_effect=RuntimeError("boom")):
        r = client.post(
            "/api/profile/feedback",
            headers={**headers, "x-trace-id": "trace-500"},
            json={"strategy_id": "strategy-1", "helpful": True},
        )
    assert r.status_code == 500
    assert r.json()["trace_id"] == "trace-500"
    assert r.headers["x-trace-id"] == "trace-500"


def test_trace_id_is_echoed(client):
    r = client.get("/api/health", headers={"x-trace-id": "abc-123"})
    assert r.headers["x-trace-id"] == "abc-123"


def test_trace_id_in_error_body_matches_header(client):
    r = client.get("/api/nowhere")
    assert r.json()["trace_id"] == r.headers["x-trace-id"]
