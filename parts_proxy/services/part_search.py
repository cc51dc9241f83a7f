"""
Catalog search by part code.

Combines the token manager with the supplier search endpoint and translates
every supplier failure into a client-facing ``SearchError``.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Optional, Protocol, runtime_checkable

from parts_proxy.clients.supplier import SupplierAuthError, SupplierRequestError
from parts_proxy.schemas import PartItem

logger = logging.getLogger(__name__)

BLANK_CODE_MESSAGE = "Search code is required"
UNEXPECTED_RESPONSE_MESSAGE = "Unexpected response from supplier API"
REQUEST_FAILED_MESSAGE = "Supplier API request failed"


@runtime_checkable
class AccessTokenProvider(Protocol):
    async def get_valid_token(self) -> str: ...


@runtime_checkable
class PartsCatalog(Protocol):
    async def search_by_code(self, code: str, *, access_token: str) -> Any: ...


class SearchError(Exception):
    """A search failure that maps directly onto an HTTP response."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class InvalidSearchCodeError(SearchError):
    def __init__(self) -> None:
        super().__init__(HTTPStatus.BAD_REQUEST, BLANK_CODE_MESSAGE)


class UpstreamFailureError(SearchError):
    """The supplier rejected or failed the request."""


def _upstream_status(status_code: Optional[int]) -> int:
    if status_code is None:
        return HTTPStatus.INTERNAL_SERVER_ERROR
    # Authentication is owned by the token manager; callers never see a 401.
    if status_code == HTTPStatus.UNAUTHORIZED:
        return HTTPStatus.BAD_GATEWAY
    return status_code


def _upstream_message(exc: SupplierRequestError) -> str:
    payload = exc.payload if isinstance(exc.payload, dict) else {}
    for candidate in (payload.get("errorMessage"), payload.get("message"), str(exc)):
        if candidate:
            return str(candidate)
    return REQUEST_FAILED_MESSAGE


class PartSearchService:
    """Search the supplier catalog on behalf of the frontend."""

    def __init__(
        self,
        token_manager: AccessTokenProvider,
        supplier_client: PartsCatalog,
    ) -> None:
        self._tokens = token_manager
        self._supplier = supplier_client

    async def search(self, code: Optional[str]) -> list[PartItem]:
        trimmed = (code or "").strip()
        if not trimmed:
            raise InvalidSearchCodeError()

        try:
            token = await self._tokens.get_valid_token()
            payload = await self._supplier.search_by_code(trimmed, access_token=token)
        except SupplierRequestError as exc:
            message = _upstream_message(exc)
            logger.error("Supplier API error: %s", message)
            raise UpstreamFailureError(_upstream_status(exc.status_code), message) from exc
        except SupplierAuthError as exc:
            logger.error("Supplier authentication failed: %s", exc)
            raise UpstreamFailureError(HTTPStatus.BAD_GATEWAY, str(exc)) from exc

        if not isinstance(payload, dict) or payload.get("status") != "success":
            error_message = payload.get("errorMessage") if isinstance(payload, dict) else None
            raise UpstreamFailureError(
                HTTPStatus.BAD_GATEWAY,
                str(error_message or UNEXPECTED_RESPONSE_MESSAGE),
            )

        records = payload.get("result")
        if not isinstance(records, list):
            return []
        return [
            PartItem.from_supplier_record(record)
            for record in records
            if isinstance(record, dict)
        ]


__all__ = [
    "AccessTokenProvider",
    "InvalidSearchCodeError",
    "PartsCatalog",
    "PartSearchService",
    "SearchError",
    "UpstreamFailureError",
]
