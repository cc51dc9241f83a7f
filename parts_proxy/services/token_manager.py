"""
Lifecycle management for the supplier access token.

The manager hands out a cached access token while it is comfortably inside its
lifetime. Once the token is missing or close to expiry it tries the stored
refresh token first and falls back to a full login with the configured
supplier credentials.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from parts_proxy.clients.supplier import SupplierError, TokenGrant
from parts_proxy.services.credential_store import CredentialStore
from parts_proxy.utils.tokens import decode_token_expiry

logger = logging.getLogger(__name__)

TOKEN_EXPIRY_SKEW_MS = 30_000


class SupplierAuthClient(Protocol):
    async def login(self) -> TokenGrant: ...

    async def refresh(self, refresh_token: str) -> TokenGrant: ...


def _now_ms() -> float:
    return time.time() * 1000


@dataclass(frozen=True)
class RefreshOutcome:
    """Result of a refresh attempt: a new token, or a request for full login."""

    token: Optional[str] = None

    @property
    def needs_login(self) -> bool:
        return self.token is None


class TokenLifecycleManager:
    """Produces a currently valid supplier access token."""

    def __init__(
        self,
        store: CredentialStore,
        auth_client: SupplierAuthClient,
        *,
        skew_ms: int = TOKEN_EXPIRY_SKEW_MS,
        clock: Callable[[], float] = _now_ms,
    ) -> None:
        self._store = store
        self._auth = auth_client
        self._skew_ms = skew_ms
        self._clock = clock
        self._lock = asyncio.Lock()

    def _cached_token(self) -> Optional[str]:
        current = self._store.read()
        if current.access_token and current.expires_at - self._skew_ms > self._clock():
            return current.access_token
        return None

    async def get_valid_token(self) -> str:
        """
        Return a usable access token, authenticating only when required.

        Raises ``SupplierError`` when neither refresh nor login succeeds.
        """
        token = self._cached_token()
        if token:
            return token

        async with self._lock:
            # A caller queued ahead of us may already have re-authenticated.
            token = self._cached_token()
            if token:
                return token

            outcome = await self.refresh()
            if not outcome.needs_login:
                return outcome.token
            return await self.login()

    async def refresh(self) -> RefreshOutcome:
        """Try the stored refresh token; clear the store if it is rejected."""
        previous = self._store.read()
        if not previous.refresh_token:
            return RefreshOutcome()

        try:
            grant = await self._auth.refresh(previous.refresh_token)
        except SupplierError as exc:
            logger.warning("Refresh token failed, obtaining new token: %s", exc)
            self._store.clear()
            return RefreshOutcome()

        self._store.write(
            grant.access_token,
            grant.refresh_token or previous.refresh_token,
            decode_token_expiry(grant.access_token),
        )
        logger.info("Refreshed supplier access token")
        return RefreshOutcome(token=grant.access_token)

    async def login(self) -> str:
        """Authenticate from scratch with the supplier login and password."""
        try:
            grant = await self._auth.login()
        except SupplierError:
            self._store.clear()
            raise

        self._store.write(
            grant.access_token,
            grant.refresh_token,
            decode_token_expiry(grant.access_token),
        )
        logger.info("Obtained supplier access token via login")
        return grant.access_token


__all__ = [
    "RefreshOutcome",
    "SupplierAuthClient",
    "TOKEN_EXPIRY_SKEW_MS",
    "TokenLifecycleManager",
]
