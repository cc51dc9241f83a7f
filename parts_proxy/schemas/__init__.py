"""Public schema exports."""

from .parts import ErrorResponse, HealthResponse, PartItem, SearchResponse

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "PartItem",
    "SearchResponse",
]
