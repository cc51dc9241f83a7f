"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    get_credential_store,
    get_part_search_service,
    get_supplier_client,
    get_token_manager,
)
from .config import get_app_settings

__all__ = [
    "get_app_settings",
    "get_credential_store",
    "get_part_search_service",
    "get_supplier_client",
    "get_token_manager",
]
