"""JSON:API document codec backed by Pydantic models.

Outcome classification:
- wrong or missing Content-Type → 406 specification error
- body that is not a JSON object (bad syntax, non-finite numbers) → 500 internal error
- document that fails model validation → 406 specification error
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from app.adapters.jsonapi.base import AbstractDocumentCodec
from app.core.errors import DocumentAppError
from app.schemas.jsonapi import JSONAPI_VERSION, ResourceDocument, ResourceObject
from app.utils.strict_json import loads_strict

logger = logging.getLogger(__name__)

SPECIFICATION_ERROR_TITLE = "JSON API Specification Error"
INTERNAL_ERROR_TITLE = "Internal Server Error"

_RESOURCE_MEMBERS = ("attributes", "relationships", "links", "meta")


def specification_error(detail: str, *, pointer: str | None = None) -> DocumentAppError:
    """Build a 406 error for a request that breaks the JSON:API document rules."""
    return DocumentAppError(
        code="jsonapi_specification_error",
        message=detail,
        status=406,
        title=SPECIFICATION_ERROR_TITLE,
        source={"pointer": pointer} if pointer else {},
    )


def internal_error(detail: str) -> DocumentAppError:
    """Build a 500 error for a body that cannot be processed at all."""
    return DocumentAppError(
        code="jsonapi_parse_error",
        message=detail,
        status=500,
        title=INTERNAL_ERROR_TITLE,
    )


def _pointer(loc: tuple[Any, ...]) -> str:
    return "/" + "/".join(str(part) for part in loc)


class PydanticDocumentCodec(AbstractDocumentCodec):
    """Parse request documents with ``ResourceDocument``; render with json."""

    def __init__(self, *, indent: int = 2) -> None:
        self._indent = indent

    def _check_content_type(self, content_type: str | None) -> None:
        if (content_type or "").strip().lower() != self.media_type:
            raise specification_error(
                f"Expected Content-Type header to be {self.media_type}, got: {content_type or ''}"
            )

    def _decode(self, body: bytes) -> dict[str, Any]:
        try:
            decoded = loads_strict(body)
        except ValueError as exc:
            logger.info("jsonapi.decode_failed", extra={"error_msg": str(exc)})
            raise internal_error("Unable to parse request body as JSON") from exc

        if not isinstance(decoded, dict):
            raise internal_error("Request document must be a JSON object")
        return decoded

    def parse_object(self, content_type: str | None, body: bytes) -> ResourceObject:
        self._check_content_type(content_type)
        decoded = self._decode(body)

        try:
            document = ResourceDocument.model_validate(decoded)
        except ValidationError as exc:
            first = exc.errors()[0]
            raise specification_error(first["msg"], pointer=_pointer(first["loc"])) from exc

        return document.data

    def _resource_payload(self, resource: ResourceObject) -> dict[str, Any]:
        payload: dict[str, Any] = {"type": resource.type}
        if resource.id is not None:
            payload["id"] = resource.id
        for member in _RESOURCE_MEMBERS:
            value = getattr(resource, member)
            if value is not None:
                payload[member] = value
        return payload

    def _error_payload(self, error: DocumentAppError) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "status": str(error.status),
            "title": error.title,
        }
        if error.message:
            payload["detail"] = error.message
        if error.source:
            payload["source"] = error.source
        return payload

    def render(self, payload: ResourceObject | DocumentAppError) -> bytes:
        document: dict[str, Any] = {"jsonapi": {"version": JSONAPI_VERSION}}
        if isinstance(payload, DocumentAppError):
            document["errors"] = [self._error_payload(payload)]
        else:
            document["data"] = self._resource_payload(payload)
        return json.dumps(document, indent=self._indent, ensure_ascii=False, allow_nan=False).encode("utf-8")
