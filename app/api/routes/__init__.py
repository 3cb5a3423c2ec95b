from __future__ import annotations

from app.api.routes.compute import router as compute_router
from app.api.routes.echo import router as echo_router
from app.api.routes.health import router as health_router
from app.api.routes.jsonapi import router as jsonapi_router

__all__ = ["compute_router", "echo_router", "health_router", "jsonapi_router"]
