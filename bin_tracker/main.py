"""
FastAPI application for the smart waste bin fleet tracker.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bin_tracker import __version__
from bin_tracker.api import admin_routes, analytics_routes, bin_routes, health_routes
from bin_tracker.api.dependencies import build_registry, get_config
from bin_tracker.api.response_utils import error_body
from bin_tracker.logging_config import setup_logging
from bin_tracker.middleware import RequestIdMiddleware
from bin_tracker.registry import BinRegistry

# Configure structured logging once
setup_logging(service_name="bin-tracker", log_file=get_config().log_file)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Rehydrate the registry from its snapshot on startup.
    """
    logger.info("Starting Smart Waste Management API...")
    registry: BinRegistry = app.state.registry
    count = registry.reload()
    logger.info("Registry ready with %d bins", count)

    yield

    logger.info("Shutting down Smart Waste Management API...")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    logger.warning("Malformed request to %s: %s", request.url.path, errors)
    reason = errors[0].get("msg", "invalid input") if errors else "invalid input"
    return JSONResponse(status_code=400, content=error_body(f"Malformed request: {reason}"))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content=error_body("Internal server error"))


def create_app(registry: Optional[BinRegistry] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        registry: Registry to serve; defaults to one backed by the configured snapshot file
    """
    app = FastAPI(
        title="Smart Waste Management API",
        description="Registry, sensor simulation and collection analytics for waste bins",
        version=__version__,
        lifespan=lifespan
    )
    app.state.registry = registry if registry is not None else build_registry(get_config())

    # Request ID middleware and basic access logging
    app.add_middleware(RequestIdMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=86400,
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(health_routes.router)
    app.include_router(bin_routes.router)
    app.include_router(analytics_routes.router)
    app.include_router(admin_routes.router)

    return app


app = create_app()
