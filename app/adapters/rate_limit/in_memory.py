"""In-memory token bucket rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: every read-modify-write of a bucket happens under one lock.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable

from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult


@dataclass
class _Bucket:
    tokens: float
    updated_at: float


class InMemoryTokenBucketRateLimiter(AbstractRateLimiter):
    """Rate limiter keeping one token bucket per key.

    Each bucket holds at most ``burst`` tokens and is refilled continuously at
    ``rate`` tokens per second. A request is admitted when its cost can be
    paid from the bucket. With ``rate=10`` and ``burst=10`` a client may send
    ten requests at once and then ten per second.

    Important:
        This limiter is per-process only. If the API runs with multiple workers
        (e.g., multiple Uvicorn/Gunicorn workers), each worker will enforce its
        own independent limits.
    """

    def __init__(
        self,
        *,
        rate: float,
        burst: int,
        clock: Callable[[], float] = time.time,
        max_keys: int = 10000,
    ) -> None:
        """Initialize the in-memory rate limiter.

        Args:
            rate: Tokens added per second.
            burst: Bucket capacity.
            clock: Time source function returning UNIX time in seconds.
            max_keys: Tracked buckets before full ones are pruned.

        Raises:
            ValueError: If rate, burst or max_keys are invalid.
        """
        if rate <= 0:
            raise ValueError("rate must be > 0")
        if burst < 1:
            raise ValueError("burst must be >= 1")
        if max_keys < 1:
            raise ValueError("max_keys must be >= 1")

        self._rate = float(rate)
        self._burst = burst
        self._clock = clock
        self._max_keys = max_keys
        self._lock = threading.Lock()
        self._buckets: dict[str, _Bucket] = {}

    def _refill(self, bucket: _Bucket, now: float) -> None:
        elapsed = max(0.0, now - bucket.updated_at)
        bucket.tokens = min(float(self._burst), bucket.tokens + elapsed * self._rate)
        bucket.updated_at = now

    def _get_bucket(self, key: str, now: float) -> _Bucket:
        bucket = self._buckets.get(key)
        if bucket is None:
            if len(self._buckets) >= self._max_keys:
                self._prune(now)
            bucket = _Bucket(tokens=float(self._burst), updated_at=now)
            self._buckets[key] = bucket
            return bucket
        self._refill(bucket, now)
        return bucket

    def _prune(self, now: float) -> None:
        """Drop buckets that have refilled completely.

        A full bucket behaves exactly like a freshly created one, so removing
        it never changes a future decision.
        """
        full = [
            key
            for key, bucket in self._buckets.items()
            if bucket.tokens + (now - bucket.updated_at) * self._rate >= self._burst
        ]
        for key in full:
            del self._buckets[key]

    def _reset_at(self, bucket: _Bucket, now: float) -> float:
        return now + (self._burst - bucket.tokens) / self._rate

    def consume(self, key: str, *, cost: int = 1) -> RateLimitResult:
        """Consume ``cost`` tokens from the bucket of ``key``.

        Args:
            key: Unique identifier for rate limiting (e.g., client IP).
            cost: Units to consume (default 1).

        Returns:
            RateLimitResult with allowance decision and metadata.

        Raises:
            ValueError: If key is empty or cost is invalid.
        """
        if cost < 1:
            raise ValueError("cost must be >= 1")
        if cost > self._burst:
            raise ValueError("cost must be <= burst")
        if not key:
            raise ValueError("key must be a non-empty string")

        with self._lock:
            now = self._clock()
            bucket = self._get_bucket(key, now)

            if bucket.tokens >= cost:
                bucket.tokens -= cost
                return RateLimitResult(
                    allowed=True,
                    limit=self._burst,
                    remaining=int(bucket.tokens),
                    reset_at=self._reset_at(bucket, now),
                    retry_after_seconds=None,
                )

            return RateLimitResult(
                allowed=False,
                limit=self._burst,
                remaining=int(bucket.tokens),
                reset_at=self._reset_at(bucket, now),
                retry_after_seconds=(cost - bucket.tokens) / self._rate,
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._buckets)
