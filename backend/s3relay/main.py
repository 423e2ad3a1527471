"""
FastAPI application entry point.

create_app() wires routes, middleware and error handlers around one
S3Storage instance. run() is the process bootstrap: it validates cloud
configuration before binding the listener and exits on failure.
"""
import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.exceptions import HTTPException as StarletteHTTPException

from s3relay.config import Settings, settings as default_settings
from s3relay.api.router import api_router
from s3relay.errors import (
    ConfigurationError,
    RelayError,
    http_error_handler,
    relay_error_handler,
)
from s3relay.middleware.body_limit import BodySizeLimitMiddleware
from s3relay.middleware.metrics_middleware import MetricsMiddleware
from s3relay.storage.s3_client import S3Storage
from s3relay.utils.logging import configure_logging

SERVICE_NAME = "s3relay"
VERSION = "0.1.0"

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, storage: Optional[S3Storage] = None) -> FastAPI:
    """
    Build the ASGI application.

    Args:
        settings: Settings to use (default: the global instance)
        storage: Prebuilt storage adapter. When omitted, the lifespan builds
            one and a ConfigurationError aborts startup.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan context manager for startup/shutdown events.
        - Startup: configure logging, build the storage adapter if needed
        """
        configure_logging(SERVICE_NAME, settings.log_level)
        if getattr(app.state, "storage", None) is None:
            app.state.storage = S3Storage.from_settings(settings)
        yield

    app = FastAPI(
        title="S3 Upload Relay",
        description="Relays multipart file uploads to an S3 bucket",
        version=VERSION,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.storage = storage

    app.add_exception_handler(RelayError, relay_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    # Metrics middleware wraps the size limit so rejected bodies are counted
    app.add_middleware(BodySizeLimitMiddleware, max_body_size=settings.max_upload_size)
    app.add_middleware(MetricsMiddleware)

    app.include_router(api_router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "S3 Upload Relay",
            "version": VERSION,
            "environment": settings.environment
        }

    @app.get("/metrics")
    async def metrics():
        """Prometheus metrics endpoint."""
        return Response(
            content=generate_latest(),
            media_type=CONTENT_TYPE_LATEST
        )

    return app


def run(settings: Optional[Settings] = None) -> None:
    """
    Process bootstrap: fail fast on bad cloud config, then serve until killed.
    """
    settings = settings or default_settings
    configure_logging(SERVICE_NAME, settings.log_level)

    try:
        storage = S3Storage.from_settings(settings)
    except ConfigurationError as e:
        logger.critical(
            f"unable to load SDK config, {e}",
            extra={"event": "startup_failed", "error": str(e)}
        )
        sys.exit(1)

    app = create_app(settings, storage=storage)
    logger.info(
        f"Server is running at http://{settings.host}:{settings.port}",
        extra={"event": "server_started", "port": settings.port}
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


# Module-level app for ASGI servers: uvicorn s3relay.main:app
app = create_app()
