"""HTTP method helpers shared by the routes.

Every route is registered for the common methods so that the rate limiter
runs first; the handler then rejects methods it does not support. Verbs
outside ``ALL_METHODS`` are caught by the router and answered in the same way
by ``app.core.exception_handlers.http_error_handler``.
"""

from __future__ import annotations

from fastapi import Request

from app.core.errors import MethodNotAllowedAppError

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

# Supported method per route path
ROUTE_METHODS: dict[str, tuple[str, ...]] = {
    "/health": ("GET",),
    "/": ("GET",),
    "/json": ("POST",),
    "/jsonapi": ("POST",),
}


def method_not_allowed(method: str, allowed: tuple[str, ...]) -> MethodNotAllowedAppError:
    return MethodNotAllowedAppError(
        allowed_methods=allowed,
        details={"method": method, "allowed_methods": list(allowed)},
    )


def require_method(request: Request) -> None:
    """Raise ``MethodNotAllowedAppError`` unless the route supports the request method."""
    allowed = ROUTE_METHODS[request.url.path]
    if request.method not in allowed:
        raise method_not_allowed(request.method, allowed)
