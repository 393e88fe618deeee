"""
Main entrypoint for the Reviews Backend API.

This module assembles the FastAPI application, sets up logging,
middleware and error handlers, creates the review store and service,
and includes the versioned routers.  The ``create_app`` function
builds and configures the app, which is then instantiated at module
import time as ``app``.  Run it with uvicorn, e.g.::

    uvicorn reviews_api.app.main:app --reload

or through ``run.py`` which applies host, port and shutdown settings.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.health import router as health_router
from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.errors import ApiError, LoadError, QueryCancelledError
from .core.logging_config import setup_logging
from .core.middleware import RateLimiter, install_middleware
from .core.store import ReviewStore
from .schemas.review import ErrorResponse
from .services.review_service import ReviewService

logger = logging.getLogger(__name__)


def _error(status_code: int, error: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=error, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"error": ..., "message": ...}``."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        return _error(exc.status_code, exc.error, exc.message)

    @app.exception_handler(QueryCancelledError)
    async def cancelled_handler(request: Request, exc: QueryCancelledError) -> JSONResponse:
        logger.info("Client went away before %s %s completed", request.method, request.url.path)
        return _error(499, "client_closed_request", "Request cancelled")

    @app.exception_handler(LoadError)
    async def load_error_handler(request: Request, exc: LoadError) -> JSONResponse:
        logger.error("Data load failed on %s %s: %s", request.method, request.url.path, exc)
        return _error(500, "internal_error", "Internal server error")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown paths and unsupported methods both read as a missing route.
        if exc.status_code in (404, 405):
            return _error(404, "not_found", "Route not found")
        return _error(exc.status_code, "http_error", str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, "internal_error", "Internal server error")


def create_app(
    app_settings: Optional[Settings] = None,
    store: Optional[ReviewStore] = None,
    limiter: Optional[RateLimiter] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the environment derived defaults.
    store : Optional[ReviewStore]
        A prebuilt store.  By default one is created from the
        configured data paths.
    limiter : Optional[RateLimiter]
        A prebuilt rate limiter, mainly for tests.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    cfg = app_settings or default_settings
    setup_logging(cfg.log_level, cfg.log_file or None, cfg.log_format)

    if store is None:
        store = ReviewStore(cfg.resolve_path(cfg.reviews_path), cfg.resolve_path(cfg.predictions_path))

    app = FastAPI(title=cfg.project_name, version=cfg.api_version)
    app.state.settings = cfg
    app.state.store = store
    app.state.review_service = ReviewService(store)

    install_middleware(app, cfg, limiter)
    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event() -> None:
        logger.info("Starting %s v%s", cfg.project_name, cfg.api_version)
        if cfg.preload_data:
            # A broken file should not keep the server from starting;
            # requests will retry the load and report the error.
            try:
                store.ensure_loaded()
            except LoadError as e:
                logger.error("Preloading review data failed: %s", e)

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        logger.info("Server shutdown completed")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
