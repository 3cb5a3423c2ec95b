from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import Response

from app.api.methods import ALL_METHODS, require_method
from app.core.rate_limit import enforce_rate_limit
from app.services.echo_service import decode_json_object, render_pretty

router = APIRouter(tags=["Echo"], dependencies=[Depends(enforce_rate_limit)])


@router.api_route("/json", methods=ALL_METHODS, status_code=status.HTTP_201_CREATED)
async def echo_json(request: Request) -> Response:
    """Echo a posted JSON object back, pretty-printed with tabs.

    Raises:
        MalformedJSONAppError: Body is not a JSON object (mapped to 400).
    """

    require_method(request)
    data = decode_json_object(await request.body())
    return Response(
        content=render_pretty(data),
        status_code=status.HTTP_201_CREATED,
        media_type="application/json",
    )
