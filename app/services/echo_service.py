"""Decoding and pretty-printing of arbitrary JSON objects."""

from __future__ import annotations

import json
import logging
from typing import Any

from app.core.errors import MalformedJSONAppError
from app.utils.strict_json import loads_strict

logger = logging.getLogger(__name__)


def decode_json_object(raw: bytes) -> dict[str, Any]:
    """Decode a request body that must hold a JSON object.

    Args:
        raw: Raw request body.

    Returns:
        dict[str, Any]: The decoded object.

    Raises:
        MalformedJSONAppError: If the body is not valid UTF-8 JSON, holds a
            non-finite number or its top level value is not an object.
    """
    try:
        data = loads_strict(raw)
    except ValueError as exc:
        logger.info("echo.decode_failed", extra={"error_msg": str(exc)})
        raise MalformedJSONAppError() from exc

    if not isinstance(data, dict):
        logger.info("echo.decode_failed", extra={"error_msg": f"top-level {type(data).__name__}"})
        raise MalformedJSONAppError()
    return data


def render_pretty(data: dict[str, Any]) -> str:
    """Serialize ``data`` with one tab per nesting level and sorted keys."""
    return json.dumps(data, indent="\t", sort_keys=True, ensure_ascii=False, allow_nan=False) + "\n"
