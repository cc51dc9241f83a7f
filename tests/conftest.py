"""Pytest configuration shared across the suite."""

import base64
import json
from typing import Callable

import pytest


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


def _encode_segment(part: dict) -> str:
    raw = json.dumps(part, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


@pytest.fixture
def make_token() -> Callable[..., str]:
    """Build unsigned JWT-shaped tokens carrying an optional ``exp`` claim."""

    def _make_token(exp=None, **claims) -> str:
        if exp is not None:
            claims["exp"] = exp
        header = _encode_segment({"alg": "HS256", "typ": "JWT"})
        return f"{header}.{_encode_segment(claims)}.signature"

    return _make_token
