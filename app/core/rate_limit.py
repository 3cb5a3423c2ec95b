"""Rate limiting dependency for FastAPI routes.

This module wires the rate limiting adapter into the HTTP layer.

Rate limiting strategy:
- One token bucket per client, shared by every route (global quota).
- The client key is resolved through an ordered list of lookups
  (socket peer address, X-Forwarded-For, X-Real-IP); first present wins.
"""

from __future__ import annotations

import hashlib
import logging
import math

from fastapi import HTTPException, Request, status

from app.adapters.rate_limit.base import AbstractRateLimiter
from app.adapters.rate_limit.in_memory import InMemoryTokenBucketRateLimiter
from app.core.config import settings

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "You have reached maximum request limit."

REMOTE_ADDR = "remoteaddr"


_limiter: AbstractRateLimiter | None = None
_limiter_config: tuple[float, int, int] | None = None


def get_rate_limiter() -> AbstractRateLimiter:
    """Return the process-wide rate limiter instance.

    The instance is cached in-module to preserve state across requests.
    If configuration changes (primarily in tests), the limiter is rebuilt.
    """

    global _limiter, _limiter_config

    config = (
        settings.app.rate_limit_requests_per_second,
        settings.app.rate_limit_burst,
        settings.app.rate_limit_max_keys,
    )

    if _limiter is None or _limiter_config != config:
        _limiter = InMemoryTokenBucketRateLimiter(
            rate=settings.app.rate_limit_requests_per_second,
            burst=settings.app.rate_limit_burst,
            max_keys=settings.app.rate_limit_max_keys,
        )
        _limiter_config = config

    return _limiter


def reset_rate_limiter() -> None:
    """Forget all buckets by dropping the cached limiter."""

    global _limiter, _limiter_config
    _limiter = None
    _limiter_config = None


def _lookup(request: Request, source: str) -> str | None:
    """Read one client identity source from the request.

    ``RemoteAddr`` is the socket peer; any other source is a header name.
    For ``X-Forwarded-For`` only the first (client-most) address is used.
    """

    if source.lower() == REMOTE_ADDR:
        return request.client.host if request.client and request.client.host else None

    value = request.headers.get(source)
    if not value:
        return None
    first = value.split(",")[0].strip()
    return first or None


def build_rate_limit_key(request: Request, lookups: list[str] | None = None) -> str:
    """Build the limiter key for the current request.

    Args:
        request: FastAPI request.
        lookups: Ordered identity sources; defaults to the configured ones.

    Returns:
        str: Namespaced limiter key.
    """

    for source in lookups if lookups is not None else settings.app.rate_limit_ip_lookups:
        ip = _lookup(request, source)
        if ip:
            return f"ip:{ip}"

    return "ip:unknown"


def _hash_limiter_key(key: str) -> str:
    """Hash the rate limit key for logging without exposing client addresses."""
    return hashlib.sha256(key.encode()).hexdigest()[:16]


async def enforce_rate_limit(request: Request) -> None:
    """FastAPI dependency enforcing the global rate limit.

    When enabled, consumes one token from the requester's bucket. If the
    bucket is empty, raises HTTP 429 and the route handler never runs.

    Raises:
        HTTPException: 429 Too Many Requests when rate limit is exceeded.
    """

    if not settings.app.rate_limit_enabled:
        return

    limiter = get_rate_limiter()
    key = build_rate_limit_key(request)
    key_hash = _hash_limiter_key(key)

    result = limiter.consume(key)
    if result.allowed:
        logger.debug(
            "rate_limit.allowed",
            extra={
                "key_hash": key_hash,
                "limit": result.limit,
                "remaining": result.remaining,
            },
        )
        return

    retry_after = math.ceil(result.retry_after_seconds or 0)
    logger.warning(
        "rate_limit.exceeded",
        extra={
            "key_hash": key_hash,
            "limit": result.limit,
            "remaining": result.remaining,
            "retry_after_s": result.retry_after_seconds,
            "path": request.url.path,
        },
    )

    headers: dict[str, str] = {}
    if settings.app.rate_limit_include_headers:
        headers["Retry-After"] = str(retry_after)
        headers["X-RateLimit-Limit"] = str(result.limit)
        headers["X-RateLimit-Remaining"] = str(result.remaining)
        headers["X-RateLimit-Reset"] = str(math.ceil(result.reset_at))

    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail=RATE_LIMIT_MESSAGE,
        headers=headers or None,
    )
