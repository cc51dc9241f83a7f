"""
Factory functions to provide shared clients and services as FastAPI dependencies.
"""

from functools import lru_cache

from parts_proxy.clients import SupplierClient
from parts_proxy.dependencies.config import get_app_settings
from parts_proxy.services import CredentialStore, PartSearchService, TokenLifecycleManager


@lru_cache()
def get_supplier_client() -> SupplierClient:
    """Create a singleton supplier API client."""
    return SupplierClient(get_app_settings().supplier)


@lru_cache()
def get_credential_store() -> CredentialStore:
    """Provide the process-wide supplier credential store."""
    return CredentialStore()


@lru_cache()
def get_token_manager() -> TokenLifecycleManager:
    """Provide the shared token manager so every request sees one session."""
    return TokenLifecycleManager(
        store=get_credential_store(),
        auth_client=get_supplier_client(),
    )


def get_part_search_service() -> PartSearchService:
    """Build a part search service on top of the shared token manager."""
    return PartSearchService(
        token_manager=get_token_manager(),
        supplier_client=get_supplier_client(),
    )


__all__ = [
    "get_credential_store",
    "get_part_search_service",
    "get_supplier_client",
    "get_token_manager",
]
