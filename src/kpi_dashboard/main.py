"""
Main FastAPI application entry point for the KPI dashboard.

This module creates and configures the FastAPI application with all routes,
middleware, exception handlers, and startup/shutdown events.
"""

import logging
import traceback
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from http import HTTPStatus

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .api import router as dashboard_router
from .api.models import ErrorResponse, HealthCheckResponse
from .config.models import DashboardConfig
from .shared.dependencies import get_config, get_order_corpus
from .shared.logging_utils import RequestLogger
from .shared.metrics import metrics_collector

logger = logging.getLogger(__name__)

# Application metadata
APP_NAME = "Business KPI Dashboard API"
APP_VERSION = __version__
APP_DESCRIPTION = """
**Business KPI Dashboard API** serves a deterministic synthetic e-commerce
dataset, filtered and aggregated for a KPI dashboard.

## Features

### KPIs
Revenue, order count, conversion rate and average order value, each compared
with the previous period of equal length.

### Charts
Daily revenue, orders per category and orders per traffic source.

### Tables
Orders and customers with search, sorting, pagination and CSV export.

## Filters
Every endpoint accepts `dateRange` (Last 7 days, Last 30 days, Last 90 days),
`segment` (All, New customers, Returning customers) and `region`
(All, NA, EU, APAC). Unknown values fall back to the defaults.

## Data Safety
All data is **synthetic and fictitious**.
"""

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown events."""
    from .shared.logging_config import configure_structured_logging

    config = get_config()
    configure_structured_logging(level=config.log_level)

    logger.info(f"Starting {APP_NAME} v{APP_VERSION}")

    # Build the corpus up front so the first request doesn't pay for it
    try:
        corpus = get_order_corpus(config)
        logger.info(f"Order corpus ready ({len(corpus):,} orders)")
    except Exception as e:
        logger.error(f"Failed to build order corpus: {e}", exc_info=True)
        logger.warning("Application will continue; corpus is rebuilt on first request")

    logger.info("Application startup completed")

    yield

    logger.info("Application shutdown completed")


# Create FastAPI application
app = FastAPI(
    title=APP_NAME,
    version=APP_VERSION,
    description=APP_DESCRIPTION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    license_info={
        "name": "MIT License",
        "url": "https://opensource.org/licenses/MIT",
    },
)


# ================================
# EXCEPTION HANDLERS
# ================================


def _error_content(error: str, message: str | None = None) -> dict:
    return ErrorResponse(error=error, message=message).model_dump(exclude_none=True)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions with consistent error format."""
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        content = _error_content("Method not allowed")
    else:
        phrase = HTTPStatus(exc.status_code).phrase
        message = exc.detail if exc.detail != phrase else None
        content = _error_content(phrase, message)

    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors with field information."""
    logger.warning(f"Validation error for {request.method} {request.url}: {exc.errors()}")

    fields = ", ".join(
        " -> ".join(str(loc) for loc in error["loc"]) for error in exc.errors()
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_content("Request validation failed", fields or None),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions without leaking details."""
    logger.error(f"Unhandled exception: {exc}")
    logger.error(traceback.format_exc())
    metrics_collector.record_error(request.url.path, type(exc).__name__)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_content("Internal server error"),
        headers=CORS_HEADERS,
    )


# ================================
# MIDDLEWARE
# ================================


@app.middleware("http")
async def cors_middleware(request: Request, call_next):
    """Attach the CORS headers to every response."""
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    """
    Log all requests and responses with a correlation ID.

    Exceptions escaping the routes are logged under the same ID and turned
    into the 500 response here, so failed requests still carry their
    X-Request-ID and CORS headers.
    """
    request_logger = RequestLogger()
    start_time = datetime.now(UTC)

    client = request.client.host if request.client else "unknown"
    request_logger.info(
        "request started",
        method=request.method,
        path=request.url.path,
        query=str(request.url.query),
        client=client,
    )

    try:
        response = await call_next(request)
    except Exception as e:
        request_logger.error(
            "request failed",
            method=request.method,
            path=request.url.path,
            error_type=type(e).__name__,
        )
        response = await general_exception_handler(request, e)

    duration = (datetime.now(UTC) - start_time).total_seconds()
    request_logger.info(
        "request completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_seconds=round(duration, 4),
    )
    metrics_collector.record_request(request.url.path, response.status_code)
    response.headers["X-Request-ID"] = request_logger.correlation_id

    return response


# ================================
# CORE ROUTES
# ================================


@app.get(
    "/api",
    summary="Root endpoint",
    description="Welcome message and basic API information",
)
async def root():
    """Root endpoint with welcome message."""
    return {
        "message": f"Welcome to {APP_NAME}",
        "version": APP_VERSION,
        "docs_url": "/docs",
        "health_url": "/health",
        "timestamp": datetime.now(UTC),
    }


@app.get(
    "/health",
    response_model=HealthCheckResponse,
    summary="Health check",
    description="Health of the configuration and the order corpus",
)
def health_check():
    """Health check endpoint."""
    checks = {}
    overall_status = "healthy"

    try:
        config = get_config()
        checks["configuration"] = {
            "status": "healthy",
            "message": "Configuration loaded successfully",
        }
    except Exception as e:
        checks["configuration"] = {"status": "unhealthy", "error": str(e)}
        return HealthCheckResponse(
            status="unhealthy",
            timestamp=datetime.now(UTC),
            version=APP_VERSION,
            checks=checks,
        )

    try:
        corpus = get_order_corpus(config)
        checks["order_corpus"] = {"status": "healthy", "orders": len(corpus)}
    except Exception as e:
        logger.warning(f"Order corpus health check failed: {e}")
        checks["order_corpus"] = {"status": "unhealthy", "error": str(e)}
        overall_status = "degraded"

    return HealthCheckResponse(
        status=overall_status,
        timestamp=datetime.now(UTC),
        version=APP_VERSION,
        checks=checks,
    )


@app.get(
    "/version",
    summary="Application version",
    description="Get current application version",
)
async def get_version():
    """Get application version information."""
    return {"name": APP_NAME, "version": APP_VERSION, "timestamp": datetime.now(UTC)}


@app.get(
    "/metrics",
    summary="Prometheus metrics",
    description="Prometheus metrics endpoint for request and generation monitoring",
    tags=["Monitoring"],
)
async def prometheus_metrics():
    """Prometheus metrics in exposition format for scraping."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@app.get(
    "/api/config",
    summary="Get configuration",
    description="Get the current dashboard configuration",
)
def get_current_config(config: DashboardConfig = Depends(get_config)):
    """Get the current configuration."""
    return config.model_dump()


# ================================
# INCLUDE ROUTERS
# ================================

app.include_router(dashboard_router, prefix="/api", tags=["Dashboard"])


# ================================
# DEVELOPMENT SERVER
# ================================


def run_dev_server():
    """Run the development server."""
    import uvicorn

    uvicorn.run(
        "kpi_dashboard.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )


if __name__ == "__main__":
    run_dev_server()
