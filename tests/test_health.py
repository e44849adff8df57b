from sqlalchemy.exc import OperationalError

from test_fixtures import client, db_session


def test_health_ok(client):
    r = client.get("/health")

    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "OK"
    assert body["database"] == "connected"
    assert "timestamp" in body


def test_health_reports_database_down(client, db_session, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    monkeypatch.setattr(db_session, "execute", broken)

    r = client.get("/health")

    assert r.status_code == 503
    assert r.json()["status"] == "ERROR"
    assert r.json()["database"] == "disconnected"


def test_responses_carry_request_id(client):
    r = client.get("/health")

    assert r.headers["X-Request-ID"]
    assert "X-Process-Time" in r.headers


def test_unknown_route_uses_error_envelope(client):
    r = client.get("/does-not-exist")

    assert r.status_code == 404
    assert r.json()["success"] is False
    assert r.json()["error"]["code"] == "HTTP_404"
