"""Tests for the rate limiting dependency and client key resolution."""

from __future__ import annotations

from unittest.mock import Mock, patch

import pytest
from fastapi import HTTPException
from starlette.requests import Request

from app.adapters.rate_limit.in_memory import InMemoryTokenBucketRateLimiter
from app.core import rate_limit
from app.core.rate_limit import build_rate_limit_key, enforce_rate_limit, get_rate_limiter

LOOKUPS = ["RemoteAddr", "X-Forwarded-For", "X-Real-IP"]


def _request(headers: dict[str, str] | None = None, client: tuple[str, int] | None = None) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": client,
    }
    return Request(scope)


class TestBuildRateLimitKey:
    def test_remote_address_wins(self) -> None:
        request = _request({"X-Forwarded-For": "1.1.1.1", "X-Real-IP": "2.2.2.2"}, ("9.9.9.9", 1234))

        assert build_rate_limit_key(request, LOOKUPS) == "ip:9.9.9.9"

    def test_falls_back_to_first_forwarded_address(self) -> None:
        request = _request({"X-Forwarded-For": "1.1.1.1, 10.0.0.1", "X-Real-IP": "2.2.2.2"})

        assert build_rate_limit_key(request, LOOKUPS) == "ip:1.1.1.1"

    def test_falls_back_to_real_ip(self) -> None:
        request = _request({"X-Real-IP": "2.2.2.2"})

        assert build_rate_limit_key(request, LOOKUPS) == "ip:2.2.2.2"

    def test_unknown_when_nothing_present(self) -> None:
        assert build_rate_limit_key(_request(), LOOKUPS) == "ip:unknown"

    def test_respects_configured_order(self) -> None:
        request = _request({"X-Real-IP": "2.2.2.2"}, ("9.9.9.9", 1234))

        assert build_rate_limit_key(request, ["X-Real-IP", "RemoteAddr"]) == "ip:2.2.2.2"


class TestEnforceRateLimit:
    @pytest.mark.asyncio
    async def test_raises_429_with_headers_when_exhausted(self) -> None:
        limiter = InMemoryTokenBucketRateLimiter(rate=1, burst=1, clock=Mock(return_value=1000.0))
        request = _request(client=("9.9.9.9", 1234))

        with patch.object(rate_limit, "get_rate_limiter", return_value=limiter):
            await enforce_rate_limit(request)
            with pytest.raises(HTTPException) as exc_info:
                await enforce_rate_limit(request)

        assert exc_info.value.status_code == 429
        assert exc_info.value.headers["Retry-After"] == "1"
        assert exc_info.value.headers["X-RateLimit-Limit"] == "1"
        assert exc_info.value.headers["X-RateLimit-Remaining"] == "0"

    @pytest.mark.asyncio
    @patch("app.core.rate_limit.settings")
    async def test_bypassed_when_disabled(self, mock_settings) -> None:
        mock_settings.app.rate_limit_enabled = False
        limiter = Mock()

        with patch.object(rate_limit, "get_rate_limiter", return_value=limiter):
            for _ in range(20):
                await enforce_rate_limit(_request(client=("9.9.9.9", 1234)))

        limiter.consume.assert_not_called()


def test_process_wide_limiter_is_reused() -> None:
    assert get_rate_limiter() is get_rate_limiter()


def test_quota_is_shared_across_routes(client) -> None:
    limiter = InMemoryTokenBucketRateLimiter(rate=10, burst=10, clock=Mock(return_value=1000.0))

    with patch.object(rate_limit, "get_rate_limiter", return_value=limiter):
        for _ in range(5):
            assert client.get("/health").status_code == 200
        for _ in range(5):
            assert client.post("/json", content=b"{}").status_code == 201

        over_quota = [
            client.get("/health"),
            client.post("/json", content=b"{}"),
            client.post("/jsonapi", content=b"{}"),
            client.put("/health"),
        ]

    assert [resp.status_code for resp in over_quota] == [429, 429, 429, 429]
    assert over_quota[0].json() == {"detail": "You have reached maximum request limit."}


def test_unknown_path_is_not_rate_limited(client) -> None:
    limiter = InMemoryTokenBucketRateLimiter(rate=1, burst=1, clock=Mock(return_value=1000.0))

    with patch.object(rate_limit, "get_rate_limiter", return_value=limiter):
        assert client.get("/health").status_code == 200
        assert client.get("/missing").status_code == 404
        assert client.get("/health").status_code == 429


def test_unregistered_verbs_are_rate_limited(client) -> None:
    limiter = InMemoryTokenBucketRateLimiter(rate=1, burst=1, clock=Mock(return_value=1000.0))

    with patch.object(rate_limit, "get_rate_limiter", return_value=limiter):
        first = client.request("TRACE", "/health")
        second = client.request("TRACE", "/health")

    assert first.status_code == 405
    assert second.status_code == 429
    assert second.json() == {"detail": "You have reached maximum request limit."}
