from __future__ import annotations

import pytest


def test_health_returns_ok(client) -> None:
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.text == "ok"


@pytest.mark.parametrize("method", ["POST", "PUT", "PATCH", "DELETE"])
def test_health_rejects_other_methods(client, method: str) -> None:
    resp = client.request(method, "/health")

    assert resp.status_code == 405
    assert resp.headers["content-type"].startswith("text/plain")
    assert resp.text == "Sorry, Only GET methods are currently supported"
    assert resp.headers["Allow"] == "GET"


@pytest.mark.parametrize(
    ("method", "path", "allowed"),
    [
        ("TRACE", "/health", "GET"),
        ("TRACE", "/", "GET"),
        ("PURGE", "/json", "POST"),
        ("PROPFIND", "/jsonapi", "POST"),
    ],
)
def test_unregistered_verbs_get_plain_text_405(client, method: str, path: str, allowed: str) -> None:
    resp = client.request(method, path)

    assert resp.status_code == 405
    assert resp.headers["content-type"].startswith("text/plain")
    assert resp.text == f"Sorry, Only {allowed} methods are currently supported"
    assert resp.headers["Allow"] == allowed
