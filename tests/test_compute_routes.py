"""Tests for the slow standard GET route and the delay helper."""

from __future__ import annotations

import re
from unittest.mock import AsyncMock, patch

import pytest

from app.services.compute_service import pick_delay_ms, simulate_expensive_call


def test_pick_delay_stays_in_range() -> None:
    delays = {pick_delay_ms() for _ in range(500)}

    assert min(delays) >= 500
    assert max(delays) < 1500


def test_pick_delay_honours_explicit_bounds() -> None:
    assert pick_delay_ms(10, 11) == 10


@pytest.mark.asyncio
async def test_simulate_expensive_call_sleeps_for_chosen_delay() -> None:
    with patch("app.services.compute_service.pick_delay_ms", return_value=742), patch(
        "app.services.compute_service.asyncio.sleep", new_callable=AsyncMock
    ) as sleep:
        delay = await simulate_expensive_call()

    assert delay == 742
    sleep.assert_awaited_once_with(0.742)


def test_standard_get_reports_compute_time(client) -> None:
    resp = client.get("/")

    assert resp.status_code == 200
    assert resp.text == "Here's a Nice Web Page, or some Data"
    header = resp.headers["X-Compute-Response-Time"]
    match = re.fullmatch(r"(\d+)ms", header)
    assert match is not None
    assert 500 <= int(match.group(1)) < 1500


def test_standard_get_uses_simulated_delay(client) -> None:
    with patch(
        "app.api.routes.compute.simulate_expensive_call",
        new_callable=AsyncMock,
        return_value=1234,
    ):
        resp = client.get("/")

    assert resp.status_code == 200
    assert resp.headers["X-Compute-Response-Time"] == "1234ms"


def test_standard_get_rejects_post(client) -> None:
    with patch(
        "app.api.routes.compute.simulate_expensive_call", new_callable=AsyncMock
    ) as simulated:
        resp = client.post("/")

    assert resp.status_code == 405
    assert resp.text == "Sorry, Only GET methods are currently supported"
    simulated.assert_not_awaited()
