"""Content-type-aware decoding of webhook bodies.

Decoding never raises: a body that cannot be decoded yields an error
envelope holding the error message and a bounded excerpt of the raw text,
so an authenticated delivery is always stored.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qsl

FORM_MEDIA_TYPE = "application/x-www-form-urlencoded"
FORM_PAYLOAD_FIELD = "payload"
DEFAULT_EXCERPT_LIMIT = 2000
# Deeper trees cannot be serialized back out by the read endpoint.
MAX_NESTING_DEPTH = 128


@dataclass(frozen=True)
class DecodedPayload:
    """Tagged decode result: ``error`` is set when ``payload`` is the envelope."""

    payload: Any
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _reject_constant(name: str) -> Any:
    # NaN/Infinity cannot be re-emitted as strict JSON by the read endpoint.
    raise ValueError(f"Invalid JSON constant: {name}")


def _check_depth(value: Any, limit: int = MAX_NESTING_DEPTH) -> None:
    """Raise ValueError when containers nest more than ``limit`` levels."""
    stack = [(value, 1)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, dict):
            children = node.values()
        elif isinstance(node, list):
            children = node
        else:
            continue
        if depth > limit:
            raise ValueError(f"Payload nested deeper than {limit} levels")
        stack.extend((child, depth + 1) for child in children)


def _loads(data: str | bytes) -> Any:
    value = json.loads(data, parse_constant=_reject_constant)
    _check_depth(value)
    return value


def media_type(content_type: str | None) -> str:
    """Lowercased media type without parameters, e.g. ``application/json``."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def _decode_form(text: str) -> Any:
    params = parse_qsl(text, keep_blank_values=True)
    # First ``payload`` value is decoded; plain pairs keep the last value.
    for key, value in params:
        if key == FORM_PAYLOAD_FIELD:
            return _loads(value)
    form = dict(params)
    try:
        return _loads(text)
    except (ValueError, RecursionError):
        return {"form": form}


def error_envelope(error: Exception, raw: bytes, excerpt_limit: int = DEFAULT_EXCERPT_LIMIT) -> dict:
    """Fallback payload for a body that could not be decoded."""
    return {
        "parse_error": str(error),
        "raw": raw[:excerpt_limit].decode("utf-8", errors="replace"),
    }


def decode_payload(
    raw: bytes,
    content_type: str | None,
    excerpt_limit: int = DEFAULT_EXCERPT_LIMIT,
) -> DecodedPayload:
    """Decode a raw body according to its declared content type.

    - JSON media types (including ``+json`` suffixes) decode as JSON.
    - Form-encoded bodies decode their ``payload`` field as JSON; without that
      field the whole body is tried as JSON, then the plain key/value pairs
      are returned under ``form``.
    - Anything else is tried as JSON.
    """
    kind = media_type(content_type)
    try:
        if kind == FORM_MEDIA_TYPE:
            payload = _decode_form(raw.decode("utf-8", errors="replace"))
        else:
            # JSON media types and unknown ones are decoded the same way.
            payload = _loads(raw)
    except (ValueError, RecursionError) as exc:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors; the C
        # scanner raises RecursionError on very deep arrays and objects.
        return DecodedPayload(payload=error_envelope(exc, raw, excerpt_limit), error=str(exc))
    return DecodedPayload(payload=payload)
