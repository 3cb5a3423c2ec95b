"""JSON decoding that only accepts values which can be re-encoded as JSON."""

from __future__ import annotations

import json
import math
from typing import Any


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def _parse_finite_float(text: str) -> float:
    # 1e400 is valid JSON syntax but overflows to inf
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {text}")
    return value


def loads_strict(raw: bytes) -> Any:
    """Decode UTF-8 JSON, rejecting NaN, Infinity and overflowing numbers.

    Raises:
        ValueError: On invalid UTF-8, invalid syntax or a non-finite number.
    """
    return json.loads(
        raw.decode("utf-8"),
        parse_constant=_reject_constant,
        parse_float=_parse_finite_float,
    )
