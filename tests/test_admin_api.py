"""Readiness, hit metrics, static files and the dev-only reset."""

import pytest

from api import create_app
from utils.metrics import HitCounter


def test_healthz(client):
    resp = client.get("/admin/healthz")
    assert resp.status_code == 200
    assert resp.data == b"OK"
    assert resp.content_type.startswith("text/plain")


def test_static_files_count_hits(client):
    assert client.get("/app/").status_code == 200
    assert client.get("/app/index.html").status_code == 200

    resp = client.get("/admin/metrics")
    assert resp.status_code == 200
    assert resp.content_type.startswith("text/html")
    assert b"Chirpy has been visited 2 times!" in resp.data


def test_missing_static_file(client):
    assert client.get("/app/nope.txt").status_code == 404


def test_api_calls_do_not_count(client):
    client.get("/api/chirps")
    assert b"visited 0 times" in client.get("/admin/metrics").data


def test_reset_clears_hits_and_users(client, register):
    register()
    client.get("/app/")
    resp = client.post("/admin/reset")
    assert resp.status_code == 200
    assert resp.get_json()["deleted_users"] == 1
    assert b"visited 0 times" in client.get("/admin/metrics").data
    # the email is free again
    register()


def test_reset_is_dev_only(tmp_path):
    app = create_app("testing", PLATFORM="production", STATIC_DIR=str(tmp_path))
    try:
        resp = app.test_client().post("/admin/reset")
        assert resp.status_code == 403
        assert resp.get_json()["error"] == "FORBIDDEN"
    finally:
        app.extensions["storage"].dispose()


def test_hit_counter():
    counter = HitCounter()
    assert counter.value == 0
    assert counter.increment() == 1
    counter.increment()
    assert counter.value == 2
    counter.reset()
    assert counter.value == 0


@pytest.mark.parametrize("path", ["/api/nothing-here", "/admin/nothing-here"])
def test_unknown_route_uses_error_envelope(client, path):
    resp = client.get(path)
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "NOT_FOUND"


def test_index_is_served_directly_and_at_root(client):
    direct = client.get("/app/index.html")
    root = client.get("/app/")
    assert direct.status_code == root.status_code == 200
    assert direct.data == root.data
    assert b"visited 2 times" in client.get("/admin/metrics").data
