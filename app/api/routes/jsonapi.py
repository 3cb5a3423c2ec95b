from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import Response

from app.adapters.jsonapi import get_document_codec
from app.api.methods import ALL_METHODS, require_method
from app.core.rate_limit import enforce_rate_limit

router = APIRouter(tags=["JSON:API"], dependencies=[Depends(enforce_rate_limit)])


@router.api_route("/jsonapi", methods=ALL_METHODS, status_code=status.HTTP_201_CREATED)
async def create_resource(request: Request) -> Response:
    """Accept a JSON:API resource document and send it back.

    The codec decides the outcome: 201 with the resource, or a
    ``DocumentAppError`` (406 for a wrong Content-Type or an invalid
    document, 500 for unparseable JSON) rendered by the exception handlers.
    """

    require_method(request)
    codec = get_document_codec()
    resource = await codec.parse_request(request)

    return Response(
        content=codec.render(resource),
        status_code=status.HTTP_201_CREATED,
        media_type=codec.media_type,
    )
