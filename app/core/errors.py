"""Application-level exception types.

Handlers raise these instead of building error responses inline; the global
exception handlers in ``app.core.exception_handlers`` turn them into HTTP
responses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability."""

    method: str
    allowed_methods: list[str]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


MALFORMED_JSON_MESSAGE = "Sorry, there seems to be an error with your JSON formatting."


class MalformedJSONAppError(AppError):
    """Raised when a generic JSON request body cannot be decoded."""

    def __init__(self, details: ErrorDetails | None = None) -> None:
        super().__init__(code="malformed_json", message=MALFORMED_JSON_MESSAGE, details=details)


@dataclass
class MethodNotAllowedAppError(AppError):
    """Raised when a route is called with an unsupported HTTP method."""

    code: str = "method_not_allowed"
    message: str = ""
    details: ErrorDetails | None = None
    allowed_methods: tuple[str, ...] = ("GET",)

    def __post_init__(self) -> None:
        if not self.message:
            self.message = (
                f"Sorry, Only {', '.join(self.allowed_methods)} methods are currently supported"
            )
        super().__post_init__()


@dataclass
class DocumentAppError(AppError):
    """JSON:API document error, rendered as an ``errors`` envelope.

    Attributes:
        status: HTTP status the error is sent with (406 or 500).
        title: Short, human-readable summary of the problem type.
    """

    code: str = "document_error"
    message: str = ""
    details: ErrorDetails | None = None
    status: int = 500
    title: str = "Internal Server Error"
    source: dict[str, str] = field(default_factory=dict)
