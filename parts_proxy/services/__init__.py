"""Service layer exports."""

from .credential_store import CredentialStore, StoredCredentials
from .part_search import (
    InvalidSearchCodeError,
    PartSearchService,
    SearchError,
    UpstreamFailureError,
)
from .token_manager import RefreshOutcome, TokenLifecycleManager

__all__ = [
    "CredentialStore",
    "InvalidSearchCodeError",
    "PartSearchService",
    "RefreshOutcome",
    "SearchError",
    "StoredCredentials",
    "TokenLifecycleManager",
    "UpstreamFailureError",
]
