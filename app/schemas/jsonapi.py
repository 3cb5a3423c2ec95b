"""Pydantic schemas for JSON:API resource documents."""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

JSONAPI_MEDIA_TYPE = "application/vnd.api+json"
JSONAPI_VERSION = "1.1"


class ResourceObject(BaseModel):
    """A single resource identified by ``type`` and ``id``."""

    model_config = ConfigDict(extra="ignore")

    type: str = Field(
        "",
        validate_default=True,
        description="Resource type; required and non-empty.",
    )
    id: str | None = Field(
        default=None,
        description="Resource id; may be omitted when the client creates a resource.",
    )
    attributes: Dict[str, Any] | None = None
    relationships: Dict[str, Any] | None = None
    links: Dict[str, Any] | None = None
    meta: Dict[str, Any] | None = None

    @field_validator("type")
    @classmethod
    def _type_must_be_set(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError(
                "missing_type",
                "Type must be set for Object responses",
            )
        return value


class JSONAPIInfo(BaseModel):
    """Top-level ``jsonapi`` member."""

    version: str = JSONAPI_VERSION


class ResourceDocument(BaseModel):
    """Request document carrying exactly one primary resource."""

    model_config = ConfigDict(extra="ignore")

    data: ResourceObject
    jsonapi: JSONAPIInfo | None = None
    meta: Dict[str, Any] | None = None
