"""Helpers for reading claims out of supplier access tokens."""

from __future__ import annotations

import base64
import json
import math
from typing import Any


def _decode_segment(segment: str) -> bytes:
    normalized = segment.replace("+", "-").replace("/", "_")
    padding = "=" * (-len(normalized) % 4)
    return base64.urlsafe_b64decode(normalized + padding)


def decode_token_expiry(token: Any) -> int:
    """
    Return the ``exp`` claim of a signed token in milliseconds since epoch.

    Only the payload segment is inspected; the signature is not verified.
    Any malformed token yields ``0`` so that callers treat it as expired.
    """
    try:
        segments = token.split(".")
        if len(segments) < 2 or not segments[1]:
            return 0
        claims = json.loads(_decode_segment(segments[1]).decode("utf-8"))
    except (AttributeError, TypeError, ValueError):
        return 0

    if not isinstance(claims, dict):
        return 0
    exp = claims.get("exp")
    if isinstance(exp, bool) or not isinstance(exp, (int, float)) or not exp:
        return 0
    try:
        expires_at = exp * 1000
        # JSON integers are unbounded; huge values overflow the float check.
        if not math.isfinite(expires_at):
            return 0
        return int(expires_at)
    except (OverflowError, TypeError, ValueError):
        return 0


__all__ = ["decode_token_expiry"]
