"""B2B Storefront main application module.

This module initializes the FastAPI application and configures logging,
middleware, routers and exception handlers.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront import __version__
from storefront.api.catalog import router as catalog_router
from storefront.api.dependencies import close_shopify_client
from storefront.api.health import router as health_router
from storefront.api.middleware import setup_middleware
from storefront.api.schemas import ErrorResponse
from storefront.config import settings
from storefront.exceptions import CatalogUnavailableError, NotFoundError


# ============================================================================
# Logging
# ============================================================================


def configure_logging(log_level: str) -> None:
    """Configure structlog with JSON output on stderr."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(message)s",
        stream=sys.stderr,
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


configure_logging(settings.log_level)
logger = structlog.get_logger()


# ============================================================================
# Application
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    shopify_config = settings.shopify_config()
    logger.info(
        "Starting B2B Storefront",
        version=__version__,
        shopify_api_version=shopify_config.api_version,
        b2b_tag_filter=settings.b2b_tag_filter,
    )
    if not shopify_config.is_complete:
        # Requests still succeed with graceful error pages
        logger.error(
            "Shopify environment variables are not set",
            required=["SHOPIFY_STORE_DOMAIN", "SHOPIFY_STOREFRONT_ACCESS_TOKEN"],
        )

    yield

    await close_shopify_client()
    logger.info("Shutting down B2B Storefront")


app = FastAPI(
    title="B2B Storefront",
    description="Wholesale catalog backed by the Shopify Storefront API",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_middleware(app)

app.include_router(health_router, tags=["Health"])
app.include_router(catalog_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


def _error_response(
    request: Request, status_code: int, error_code: str, message: str, details: dict
) -> JSONResponse:
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        details=details,
        request_id=getattr(request.state, "request_id", None),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Render the not-found outcome for missing or unverified catalog data."""
    return _error_response(
        request, status.HTTP_404_NOT_FOUND, exc.error_code, exc.message, exc.details
    )


@app.exception_handler(CatalogUnavailableError)
async def catalog_unavailable_handler(
    request: Request, exc: CatalogUnavailableError
) -> JSONResponse:
    """Render the 'could not load' outcome for listing pages."""
    return _error_response(
        request, status.HTTP_502_BAD_GATEWAY, exc.error_code, exc.message, exc.details
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions with consistent format."""
    return _error_response(request, exc.status_code, "ERROR", str(exc.detail), {})


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
