"""Global exception handlers for consistent error responses.

Design:
- MethodNotAllowedAppError → 405 with a plain-text body and an Allow header
- MalformedJSONAppError → 400 with the ``{"err": ...}`` body of the echo route
- DocumentAppError → JSON:API ``errors`` envelope with the error's own status
- Router 405 for verbs a route is not registered for → rate limit, then the
  same plain-text 405
- Unexpected Exception → generic 500 (safety net)
"""

import logging

from fastapi import HTTPException, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.adapters.jsonapi import get_document_codec
from app.api.methods import ROUTE_METHODS, method_not_allowed
from app.core.errors import (
    AppError,
    DocumentAppError,
    MalformedJSONAppError,
    MethodNotAllowedAppError,
)
from app.core.logging import get_request_id
from app.core.rate_limit import enforce_rate_limit

logger = logging.getLogger(__name__)


def _log_app_error(request: Request, exc: AppError, status_code: int) -> None:
    logger.warning(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "status_code": status_code,
            "request_path": request.url.path,
            "request_method": request.method,
        },
    )


async def method_not_allowed_error_handler(
    request: Request, exc: MethodNotAllowedAppError
) -> PlainTextResponse:
    _log_app_error(request, exc, 405)
    return PlainTextResponse(
        exc.message,
        status_code=405,
        headers={"Allow": ", ".join(exc.allowed_methods)},
    )


async def malformed_json_error_handler(request: Request, exc: MalformedJSONAppError) -> JSONResponse:
    _log_app_error(request, exc, 400)
    return JSONResponse(status_code=400, content={"err": exc.message})


async def document_error_handler(request: Request, exc: DocumentAppError) -> Response:
    """Render a JSON:API error envelope with the codec that parsed the request."""
    _log_app_error(request, exc, exc.status)
    codec = get_document_codec()
    return Response(
        content=codec.render(exc),
        status_code=exc.status,
        media_type=codec.media_type,
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Handle router-level HTTP errors.

    The router answers 405 itself, before any dependency runs, for verbs a
    route is not registered for (e.g. TRACE). On our routes those requests
    still consume rate limit budget and get the plain-text 405.
    """
    allowed = ROUTE_METHODS.get(request.url.path)
    if exc.status_code != 405 or allowed is None:
        return await http_exception_handler(request, exc)

    try:
        await enforce_rate_limit(request)
    except HTTPException as limited:
        return await http_exception_handler(request, limited)

    return await method_not_allowed_error_handler(
        request, method_not_allowed(request.method, allowed)
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors (safety net).

    Logs the failure for debugging while returning a generic message, so no
    stack trace reaches the client.
    """
    logger.error(
        "unhandled_exception",
        extra={
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
            "request_path": request.url.path,
            "request_method": request.method,
            "request_id": get_request_id(),
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later.",
                "request_id": get_request_id(),
            }
        },
    )


def setup_exception_handlers(app) -> None:
    """Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance.
    """
    app.exception_handler(MethodNotAllowedAppError)(method_not_allowed_error_handler)
    app.exception_handler(MalformedJSONAppError)(malformed_json_error_handler)
    app.exception_handler(DocumentAppError)(document_error_handler)
    app.exception_handler(StarletteHTTPException)(http_error_handler)
    app.exception_handler(Exception)(general_exception_handler)
