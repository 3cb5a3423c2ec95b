from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from app.api.methods import ALL_METHODS, require_method
from app.core.rate_limit import enforce_rate_limit

router = APIRouter(tags=["Health"], dependencies=[Depends(enforce_rate_limit)])


@router.api_route("/health", methods=ALL_METHODS, response_class=PlainTextResponse)
def health_check(request: Request) -> PlainTextResponse:
    """Health check endpoint.

    Returns ``ok`` to verify the API is operational. Used by load balancers
    and monitoring systems to determine service health.
    """

    require_method(request)
    return PlainTextResponse("ok")
