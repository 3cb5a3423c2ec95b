"""JSON:API codec layer - parses request documents and renders envelopes."""

from functools import lru_cache

from app.adapters.jsonapi.base import AbstractDocumentCodec
from app.adapters.jsonapi.pydantic_codec import PydanticDocumentCodec


@lru_cache(maxsize=1)
def get_document_codec() -> AbstractDocumentCodec:
    """Return the codec shared by the JSON:API route and its error handler."""
    return PydanticDocumentCodec()


__all__ = [
    "AbstractDocumentCodec",
    "PydanticDocumentCodec",
    "get_document_codec",
]
