"""
Main entrypoint for the Farm Service API.

This module assembles the FastAPI application: logging, CORS, the
database lifecycle, error envelopes and the API routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn farm_service_api.app.main:app --port 3000

The database handle can be passed to ``create_app`` explicitly (tests
use a fresh ``Database(":memory:")`` per case); otherwise one is
created from ``settings.database_url``.
"""

import logging
import sqlite3
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import Database, StorageError, init_db
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg')}")
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure as ``{"success": false, "error": <message>}``."""

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return _error_response(500, str(exc))

    # Bodies are not validated; a request that cannot even be parsed is a
    # server-side failure like any other.
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _describe_validation_error(exc)
        logger.error("%s %s failed: %s", request.method, request.url.path, message)
        return _error_response(500, message)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error in %s %s", request.method, request.url.path)
        return _error_response(500, str(exc) or exc.__class__.__name__)


def create_app(database: Optional[Database] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    database : Optional[Database]
        Store handle to serve requests from.  It is connected and the
        schema is initialised on startup, and it is closed on shutdown.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that startup messages
    # are formatted consistently.
    setup_logging(settings.log_level, settings.log_file or None)

    db = database if database is not None else Database(settings.database_url)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        # A failure here aborts startup: the server must not accept
        # requests without its tables.
        db.connect()
        init_db(db)
        try:
            yield
        finally:
            try:
                db.close()
            except sqlite3.Error:
                logger.exception("Error closing database")

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.state.database = db

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(v1_router, prefix="/api")

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok"}

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
