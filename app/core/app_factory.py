"""Application factory for FastAPI app.

Centralizes app construction (metadata, middleware, handlers, routers) so
tests and the server entrypoint build the exact same application.
"""

from __future__ import annotations

from fastapi import FastAPI

from app.api.routes import compute_router, echo_router, health_router, jsonapi_router
from app.core.config import settings
from app.core.exception_handlers import setup_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import request_id_middleware
from app.core.openapi import apply_openapi_customizations


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Rate Limited Demo API",
        description=(
            "Demonstration service with a health check, a slow GET, a JSON echo "
            "and a JSON:API endpoint, all behind a global rate limit of "
            f"{settings.app.rate_limit_requests_per_second:g} requests per second per client."
        ),
        version="0.1.0",
        debug=settings.app.debug,
    )

    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(compute_router)
    app.include_router(echo_router)
    app.include_router(jsonapi_router)

    apply_openapi_customizations(app)

    return app
