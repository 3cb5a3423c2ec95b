"""Simulated expensive backend call for the standard GET route."""

from __future__ import annotations

import asyncio
import logging
import random
import time

from app.core.config import settings

logger = logging.getLogger(__name__)


def pick_delay_ms(min_ms: int | None = None, max_ms: int | None = None) -> int:
    """Choose a delay uniformly in ``[min_ms, max_ms)`` milliseconds.

    A fresh generator seeded from the current time is used for every call.
    """
    low = settings.app.compute_min_delay_ms if min_ms is None else min_ms
    high = settings.app.compute_max_delay_ms if max_ms is None else max_ms
    rng = random.Random(time.time_ns())
    return rng.randrange(low, high)


async def simulate_expensive_call() -> int:
    """Suspend the current request for a random delay.

    Only the calling task sleeps; other in-flight requests keep running.

    Returns:
        int: The delay that was applied, in milliseconds.
    """
    delay_ms = pick_delay_ms()
    await asyncio.sleep(delay_ms / 1000)
    logger.info("compute.simulated", extra={"delay_ms": delay_ms})
    return delay_ms
