"""
FastAPI application entrypoint for the parts search proxy.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from parts_proxy.api.frontend import router as frontend_router
from parts_proxy.api.routes import router as api_router
from parts_proxy.core.config import get_settings
from parts_proxy.core.logging import configure_logging

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    # Fails fast when the supplier login or password is missing.
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Auto Parts Search Proxy",
        version="0.1.0",
        description="Searches the supplier catalog by part code.",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.include_router(api_router, prefix="/api")
    app.include_router(frontend_router)
    logger.info(
        "Parts search proxy configured for %s (supplier %s)",
        settings.environment,
        settings.supplier.base_url,
    )
    return app


app = create_app()


def run() -> None:
    """Start the API server with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


__all__ = ["app", "create_app", "run"]


if __name__ == "__main__":
    run()
