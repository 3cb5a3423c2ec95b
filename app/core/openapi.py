"""OpenAPI metadata and customization utilities.

Enriches the generated OpenAPI schema with:
- Tags metadata for the four route groups
- A documented 429 response on every operation (the limiter guards all routes)

This keeps documentation concerns decoupled from the app factory.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

TAGS_METADATA = [
    {"name": "Health", "description": "Liveness check."},
    {"name": "Compute", "description": "Slow endpoint simulating an expensive backend call."},
    {"name": "Echo", "description": "Pretty-printed echo of arbitrary JSON objects."},
    {"name": "JSON:API", "description": "Resource documents following the JSON:API format."},
]

RATE_LIMITED_RESPONSE = {
    "description": "Too Many Requests: the client exceeded the global request rate.",
}


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation to add tags and the 429 response."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        schema = original_openapi()

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        for tag in TAGS_METADATA:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        for methods in schema.get("paths", {}).values():
            for method_obj in methods.values():
                if isinstance(method_obj, dict):
                    method_obj.setdefault("responses", {}).setdefault(
                        "429", dict(RATE_LIMITED_RESPONSE)
                    )

        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
