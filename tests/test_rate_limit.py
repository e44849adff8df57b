"""
Rate limiting: 100 general requests and 20 AI requests per 15 minutes per
client IP. The TestClient reports its host as "testclient", which counts as
a remote client.
"""

import pytest

from test_fixtures import client, db_session, no_gemini
from api.middleware import is_ai_path, is_exempt_path, is_local_client


def test_101st_general_request_is_rejected(client):
    for _ in range(100):
        assert client.get("/recipes").status_code == 200

    r = client.get("/recipes")

    assert r.status_code == 429
    assert r.json()["success"] is False
    assert r.json()["error"]["code"] == "RATE_LIMIT_EXCEEDED"
    assert int(r.headers["Retry-After"]) >= 1


def test_health_is_never_limited(client):
    for _ in range(100):
        client.get("/recipes")

    assert client.get("/recipes").status_code == 429
    assert client.get("/health").status_code == 200


def test_paths_ending_in_health_are_limited(client):
    for _ in range(100):
        assert client.get("/recipes/health").status_code == 404

    assert client.get("/recipes/health").status_code == 429
    assert client.delete("/recipes/health").status_code == 429


def test_rate_limit_response_carries_cors_headers(client):
    origin = {"Origin": "http://localhost:3000"}
    for _ in range(100):
        client.get("/recipes", headers=origin)

    r = client.get("/recipes", headers=origin)

    assert r.status_code == 429
    assert r.headers["access-control-allow-origin"] == "http://localhost:3000"


def test_ai_routes_have_their_own_bucket(client, no_gemini):
    for _ in range(100):
        client.get("/recipes")
    assert client.get("/recipes").status_code == 429

    body = {"ingredientName": "Parmesan"}
    for _ in range(20):
        assert client.post("/ai/categorize-ingredient", json=body).status_code == 200
    assert client.post("/ai/categorize-ingredient", json=body).status_code == 429


@pytest.mark.parametrize(
    "host,expected",
    [("127.0.0.1", True), ("::1", True), ("localhost", True), ("10.0.0.5", False), ("testclient", False), (None, False)],
)
def test_is_local_client(host, expected):
    assert is_local_client(host) is expected


def test_is_ai_path():
    assert is_ai_path("/ai/generate-recipes")
    assert is_ai_path("/shopping/optimize")
    assert not is_ai_path("/shopping/list")


def test_is_exempt_path():
    assert is_exempt_path("/health")
    assert is_exempt_path("/health/")
    assert not is_exempt_path("/recipes/health")
    assert not is_exempt_path("/weekplan/templates/health")
