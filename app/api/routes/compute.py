from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from app.api.methods import ALL_METHODS, require_method
from app.core.rate_limit import enforce_rate_limit
from app.services.compute_service import simulate_expensive_call

router = APIRouter(tags=["Compute"], dependencies=[Depends(enforce_rate_limit)])

COMPUTE_RESPONSE_BODY = "Here's a Nice Web Page, or some Data"
COMPUTE_TIME_HEADER = "X-Compute-Response-Time"


@router.api_route("/", methods=ALL_METHODS, response_class=PlainTextResponse)
async def standard_get(request: Request) -> PlainTextResponse:
    """Slow GET endpoint.

    Waits 500ms to 1.5s to emulate an expensive database call, then reports
    the chosen delay in the ``X-Compute-Response-Time`` header.
    """

    require_method(request)
    delay_ms = await simulate_expensive_call()
    return PlainTextResponse(
        COMPUTE_RESPONSE_BODY,
        headers={COMPUTE_TIME_HEADER: f"{delay_ms}ms"},
    )
