from abc import ABC, abstractmethod

from fastapi import Request

from app.core.errors import DocumentAppError
from app.schemas.jsonapi import JSONAPI_MEDIA_TYPE, ResourceObject


class AbstractDocumentCodec(ABC):
	"""Interface for codecs that parse and render JSON:API documents."""

	media_type: str = JSONAPI_MEDIA_TYPE

	@abstractmethod
	def parse_object(self, content_type: str | None, body: bytes) -> ResourceObject:
		"""Parse a request document holding a single resource object.

		Args:
			content_type: Raw ``Content-Type`` header of the request, if any.
			body: Raw request body.

		Returns:
			ResourceObject: The validated primary resource.

		Raises:
			DocumentAppError: 406 for a wrong content type or an invalid
				document, 500 when the body is not decodable JSON.
		"""
		...

	@abstractmethod
	def render(self, payload: ResourceObject | DocumentAppError) -> bytes:
		"""Serialize a success or error envelope."""
		...

	async def parse_request(self, request: Request) -> ResourceObject:
		"""Read headers and body from ``request`` and parse them."""
		body = await request.body()
		return self.parse_object(request.headers.get("content-type"), body)
