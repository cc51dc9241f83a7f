"""In-memory holder for the supplier session tokens."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StoredCredentials:
    """Snapshot of the cached supplier session."""

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_at: int = 0  # epoch milliseconds, 0 when unknown

    @property
    def is_empty(self) -> bool:
        return self.access_token is None and self.refresh_token is None


class CredentialStore:
    """
    Process-local credential cache.

    Nothing is persisted, so a restart always begins with an empty store.
    """

    def __init__(self) -> None:
        self._current = StoredCredentials()

    def read(self) -> StoredCredentials:
        return self._current

    def write(
        self,
        access_token: str,
        refresh_token: Optional[str],
        expires_at: int,
    ) -> None:
        self._current = StoredCredentials(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_at=expires_at,
        )

    def clear(self) -> None:
        self._current = StoredCredentials()


__all__ = ["CredentialStore", "StoredCredentials"]
