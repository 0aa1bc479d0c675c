import logging

from fastapi.testclient import TestClient


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "database": "ok"}


def test_unhandled_error_is_logged_with_status(app, caplog):
    @app.get("/boom")
    def boom():
        raise RuntimeError("boom")

    client = TestClient(app, raise_server_exceptions=False)
    with caplog.at_level(logging.INFO):
        resp = client.get("/boom")

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Internal server error."}
    assert "GET /boom -> 500" in caplog.text
