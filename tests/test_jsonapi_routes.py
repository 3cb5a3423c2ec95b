"""Tests for the JSON:API route."""

from __future__ import annotations

import pytest

MEDIA_TYPE = "application/vnd.api+json"
VALID_PAYLOAD = '{"data": {"type": "articles","id": "1"}}'


def test_valid_document_is_created(client) -> None:
    resp = client.post("/jsonapi", content=VALID_PAYLOAD, headers={"Content-Type": MEDIA_TYPE})

    assert resp.status_code == 201
    assert resp.headers["content-type"] == MEDIA_TYPE
    assert resp.text == (
        "{\n"
        '  "jsonapi": {\n'
        '    "version": "1.1"\n'
        "  },\n"
        '  "data": {\n'
        '    "type": "articles",\n'
        '    "id": "1"\n'
        "  }\n"
        "}"
    )


def test_attributes_are_echoed(client) -> None:
    payload = '{"data": {"type": "articles", "attributes": {"title": "Rails is Omakase"}}}'

    resp = client.post("/jsonapi", content=payload, headers={"Content-Type": MEDIA_TYPE})

    assert resp.status_code == 201
    assert resp.json()["data"] == {
        "type": "articles",
        "attributes": {"title": "Rails is Omakase"},
    }


@pytest.mark.parametrize("headers", [{}, {"Content-Type": "application/json"}])
def test_wrong_content_type_is_not_acceptable(client, headers: dict[str, str]) -> None:
    resp = client.post("/jsonapi", content=VALID_PAYLOAD, headers=headers)

    assert resp.status_code == 406
    error = resp.json()["errors"][0]
    assert error["status"] == "406"
    assert error["title"] == "JSON API Specification Error"
    assert MEDIA_TYPE in error["detail"]


def test_missing_type_is_not_acceptable(client) -> None:
    resp = client.post("/jsonapi", content='{"data": { }}', headers={"Content-Type": MEDIA_TYPE})

    assert resp.status_code == 406
    assert resp.headers["content-type"] == MEDIA_TYPE
    assert resp.json() == {
        "jsonapi": {"version": "1.1"},
        "errors": [
            {
                "status": "406",
                "title": "JSON API Specification Error",
                "detail": "Type must be set for Object responses",
                "source": {"pointer": "/data/type"},
            }
        ],
    }


def test_malformed_json_is_a_server_error(client) -> None:
    truncated = '{"data": {"type": "articles","id": "1"}'

    resp = client.post("/jsonapi", content=truncated, headers={"Content-Type": MEDIA_TYPE})

    assert resp.status_code == 500
    error = resp.json()["errors"][0]
    assert error["status"] == "500"
    assert error["title"] == "Internal Server Error"


def test_overflowing_number_is_a_server_error(client) -> None:
    payload = '{"data": {"type": "articles", "attributes": {"n": 1e400}}}'

    resp = client.post("/jsonapi", content=payload, headers={"Content-Type": MEDIA_TYPE})

    assert resp.status_code == 500
    assert "Infinity" not in resp.text
    assert resp.json()["errors"][0]["status"] == "500"


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
def test_jsonapi_rejects_other_methods(client, method: str) -> None:
    resp = client.request(method, "/jsonapi")

    assert resp.status_code == 405
    assert resp.text == "Sorry, Only POST methods are currently supported"
