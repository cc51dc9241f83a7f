"""Expose constructed client wrappers."""

from .supplier import (
    SupplierAuthError,
    SupplierClient,
    SupplierError,
    SupplierRequestError,
    TokenGrant,
)

__all__ = [
    "SupplierAuthError",
    "SupplierClient",
    "SupplierError",
    "SupplierRequestError",
    "TokenGrant",
]
