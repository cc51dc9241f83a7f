"""
FastAPI routes for the parts search proxy.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated, Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from parts_proxy.dependencies import get_part_search_service
from parts_proxy.schemas import ErrorResponse, HealthResponse, SearchResponse
from parts_proxy.services import InvalidSearchCodeError, SearchError

router = APIRouter()
logger = logging.getLogger(__name__)

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    HTTPStatus.BAD_REQUEST: {"model": ErrorResponse},
    HTTPStatus.INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    HTTPStatus.BAD_GATEWAY: {"model": ErrorResponse},
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=int(status_code), content={"message": message})


@router.get("/health", response_model=HealthResponse, status_code=HTTPStatus.OK)
async def healthcheck() -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok"}


@router.get("/search/", include_in_schema=False)
async def search_without_code() -> JSONResponse:
    error = InvalidSearchCodeError()
    return _error(error.status_code, error.message)


@router.get(
    # ``path`` keeps codes with an encoded slash (``AB%2F12``) on this route.
    "/search/{code:path}",
    response_model=SearchResponse,
    responses=_ERROR_RESPONSES,
)
async def search_parts(
    code: str,
    service: Annotated[Any, Depends(get_part_search_service)],
) -> Any:
    """Search the supplier catalog by part code."""
    try:
        items = await service.search(code)
    except SearchError as exc:
        return _error(exc.status_code, exc.message)
    except Exception:
        logger.exception("Unexpected error while searching for %r", code)
        return _error(HTTPStatus.INTERNAL_SERVER_ERROR, "Internal server error")

    return SearchResponse(items=items)
