"""
Client for the auto-parts supplier API.

Covers the two authentication calls used by the token manager (login and
refresh) and the catalog search used by the search handler.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote

import httpx

from parts_proxy.core.config import SupplierSettings


class SupplierError(Exception):
    """Base class for failures talking to the supplier API."""


class SupplierAuthError(SupplierError):
    """Raised when a login or refresh call does not yield an access token."""


class SupplierRequestError(SupplierError):
    """Raised on transport failures and non-2xx responses."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


@dataclass(frozen=True)
class TokenGrant:
    """Tokens issued by a successful login or refresh."""

    access_token: str
    refresh_token: Optional[str] = None


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class SupplierClient:
    """Thin async wrapper around the supplier REST endpoints."""

    LOGIN_PATH = "/auth"
    REFRESH_PATH = "/auth/refresh"
    SEARCH_PATH = "/parts/by-searchcode/{code}"

    def __init__(
        self,
        settings: SupplierSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._settings.base_url,
            timeout=self._settings.request_timeout_seconds,
            transport=self._transport,
        )

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            async with self._client() as client:
                response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise SupplierRequestError(str(exc) or exc.__class__.__name__) from exc

        if response.is_error:
            raise SupplierRequestError(
                f"Supplier API responded with HTTP {response.status_code}",
                status_code=response.status_code,
                payload=_json_or_none(response),
            )
        return response

    async def login(self) -> TokenGrant:
        """Authenticate with the configured login and password."""
        response = await self._send(
            "POST",
            self.LOGIN_PATH,
            json={
                "login": self._settings.login,
                "password": self._settings.password,
            },
        )
        return self._parse_grant(response, "Failed to obtain supplier access token")

    async def refresh(self, refresh_token: str) -> TokenGrant:
        """Exchange a refresh token for a new access token."""
        response = await self._send(
            "POST",
            self.REFRESH_PATH,
            json={"refreshToken": refresh_token},
        )
        return self._parse_grant(response, "Invalid refresh response")

    async def search_by_code(self, code: str, *, access_token: str) -> Any:
        """
        Look up catalog records by part code.

        Returns the decoded JSON body as-is, or ``None`` when the body is not
        JSON; interpreting the ``status`` envelope is left to the caller.
        """
        response = await self._send(
            "GET",
            self.SEARCH_PATH.format(code=quote(code, safe="")),
            headers={"Authorization": f"Bearer {access_token}"},
        )
        return _json_or_none(response)

    @staticmethod
    def _parse_grant(response: httpx.Response, error_message: str) -> TokenGrant:
        payload = _json_or_none(response)
        if not isinstance(payload, dict) or payload.get("status") != "success":
            raise SupplierAuthError(error_message)

        result = payload.get("result")
        access_token = result.get("accessToken") if isinstance(result, dict) else None
        if not access_token or not isinstance(access_token, str):
            raise SupplierAuthError(error_message)

        refresh_token = result.get("refreshToken")
        return TokenGrant(
            access_token=access_token,
            refresh_token=refresh_token if isinstance(refresh_token, str) and refresh_token else None,
        )


__all__ = [
    "SupplierAuthError",
    "SupplierClient",
    "SupplierError",
    "SupplierRequestError",
    "TokenGrant",
]
