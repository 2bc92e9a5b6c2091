"""FastAPI application factory."""

import time

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from shortlinks import __version__

from .api import api_router
from .web import web_router
from .errors import request_validation_handler, unhandled_error_handler
from .middleware.logging import LoggingMiddleware


def create_app(
    db_instance,
    service_instance,
    config,
) -> FastAPI:
    """Create and configure FastAPI application.

    Instances may be None here and filled in by a lifespan handler.

    Args:
        db_instance: Storage instance
        service_instance: LinkService instance
        config: Configuration instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="shortlinks",
        description="URL shortening service with click tracking",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    app.state.db = db_instance
    app.state.service = service_instance
    app.state.config = config
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # API first: the redirect route catches every single-segment path
    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Web"])

    return app
