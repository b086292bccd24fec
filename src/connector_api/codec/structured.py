"""Self-describing structured text encoding (compact JSON)."""

from __future__ import annotations

import json
from typing import Any

from ..exceptions import DecodingError, EncodingError


def to_json_value(value: Any) -> Any:
    """Resolve argument objects exposing ``as_json`` into plain JSON values."""
    as_json = getattr(value, "as_json", None)
    if as_json is not None:
        return as_json()
    return value


def encode_structured(value: Any) -> bytes:
    """Encode ``value`` as compact, deterministic UTF-8 JSON."""
    try:
        payload = to_json_value(value)
        text = json.dumps(payload, separators=(",", ":"), allow_nan=False, ensure_ascii=False)
        return text.encode("utf-8")
    except (TypeError, ValueError, UnicodeEncodeError) as exc:
        raise EncodingError(
            "Value has no structured representation",
            field="args",
            value=value,
            details={"error": str(exc)},
        ) from exc


def decode_structured(raw: bytes, expected: str) -> Any:
    """Parse a JSON response body, raising ``DecodingError`` on malformed input."""
    try:
        return json.loads(bytes(raw).decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise DecodingError(
            "Response is not valid JSON",
            expected=expected,
            raw=raw,
            details={"error": str(exc)},
        ) from exc
