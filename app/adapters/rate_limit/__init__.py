"""Rate limiting adapters.

The API layer only talks to ``AbstractRateLimiter``; the in-memory token
bucket can later be replaced by a shared store without touching routes.
"""

from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from app.adapters.rate_limit.in_memory import InMemoryTokenBucketRateLimiter

__all__ = [
    "AbstractRateLimiter",
    "InMemoryTokenBucketRateLimiter",
    "RateLimitResult",
]
