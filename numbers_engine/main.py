"""
FastAPI application factory and configuration.
"""

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, Dict, List

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from .config.logging import bind_context, configure_logging
from .config.settings import get_settings
from .routers.formatting import router as formatting_router
from .routers.metrics import APP_REQUEST_COUNT, APP_REQUEST_LATENCY
from .routers.metrics import router as metrics_router
from .routers.system import router as system_router
from .utils.errors import ERROR_CODES, DomainError, UnknownPatternError, error_payload

logger = logging.getLogger(__name__)
request_logger = structlog.get_logger("numbers_engine.requests")


class ResponseTimeMiddleware(BaseHTTPMiddleware):
    """Record latency metrics, stamp X-Response-Time and flag slow requests."""

    async def dispatch(self, request: Request, call_next):  # noqa: D401
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_s = time.perf_counter() - start_time
        response_time_ms = duration_s * 1000
        response.headers["X-Response-Time"] = f"{response_time_ms:.1f}ms"

        status = str(response.status_code)
        path = request.url.path
        APP_REQUEST_COUNT.labels(request.method, path, status).inc()
        APP_REQUEST_LATENCY.labels(request.method, path, status).observe(duration_s)

        request_logger.info(
            "request",
            method=request.method,
            path=path,
            status=response.status_code,
            duration_ms=round(response_time_ms, 3),
        )
        threshold = get_settings().SLOW_REQUEST_MS
        if response_time_ms > threshold:
            logger.warning(
                "Slow response: %.1fms exceeds %.0fms for %s %s",
                response_time_ms,
                threshold,
                request.method,
                path,
            )
        return response


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Generate (or propagate) a per-request ID and bind it to the log context."""

    async def dispatch(self, request: Request, call_next):  # noqa: D401
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        bind_context(request_id=request_id)
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):  # noqa: ARG001
    """Application lifespan management."""
    configure_logging()
    logger.info("Starting up Numbers Engine API...")
    yield
    logger.info("Shutting down Numbers Engine API...")


def create_application() -> FastAPI:
    """Create and configure FastAPI application."""

    application_obj = FastAPI(
        title="Numbers Engine",
        description="Number rounding, formatting, parsing and spreadsheet-style pattern rendering",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/api/v1/openapi.json",
        lifespan=lifespan,
    )

    setup_middleware(application_obj)
    setup_exception_handlers(application_obj)
    setup_routes(application_obj)

    return application_obj


def setup_middleware(app: FastAPI) -> None:
    """Setup application middleware."""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Added last so it runs first: the request id is bound before timing logs
    app.add_middleware(ResponseTimeMiddleware)
    app.add_middleware(RequestIDMiddleware)


def _sanitize_errors(raw_errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Ensure all validation error values are JSON serializable."""
    sanitized = []
    for err in raw_errors:
        cleaned = {}
        for key, value in err.items():
            try:
                json.dumps(value)
                cleaned[key] = value
            except (TypeError, ValueError):
                cleaned[key] = str(value)
        sanitized.append(cleaned)
    return sanitized


def _validation_response(request: Request, errors: List[Dict[str, Any]]) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=error_payload(
            ERROR_CODES["validation"],
            "Request validation failed",
            details=_sanitize_errors(errors),
            path=str(request.url.path),
        ),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Setup global exception handlers."""

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError):
        """Map domain errors to the standard error envelope."""
        status_code = 404 if isinstance(exc, UnknownPatternError) else 400
        return JSONResponse(
            status_code=status_code,
            content=error_payload(exc.code, exc.message, details=exc.details, path=str(request.url.path)),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle validation errors with standardized response."""
        return _validation_response(request, list(exc.errors()))

    @app.exception_handler(ValidationError)
    async def model_validation_exception_handler(request: Request, exc: ValidationError):
        """Config models built inside a handler fail the same way request bodies do."""
        return _validation_response(request, list(exc.errors()))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions with standardized response."""
        return JSONResponse(
            status_code=exc.status_code,
            content=error_payload(
                getattr(exc, "code", ERROR_CODES["http"]), str(exc.detail), path=str(request.url.path)
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle Starlette HTTP exceptions."""
        return JSONResponse(
            status_code=exc.status_code,
            content=error_payload(ERROR_CODES["http"], str(exc.detail), path=str(request.url.path)),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.error("Unhandled exception: %s", exc, exc_info=True)
        return JSONResponse(
            status_code=500,
            content=error_payload(
                ERROR_CODES["internal"], "An unexpected error occurred", path=str(request.url.path)
            ),
        )


def setup_routes(app: FastAPI) -> None:
    """Setup application routes."""

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "status": "success",
            "data": {
                "message": "Numbers Engine",
                "version": "1.0.0",
                "docs": "/docs",
                "health": "/api/v1/system/health",
            },
            "timestamp": time.time(),
        }

    app.include_router(formatting_router, prefix="/api/v1", tags=["Formatting"])
    app.include_router(system_router, prefix="/api/v1/system", tags=["System"])
    # Prometheus exposition format, without API prefix
    app.include_router(metrics_router)


# Create the application instance
app = create_application()


__all__ = ["app", "create_application"]
