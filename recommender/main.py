"""
FastAPI application entry point for the episode recommender.

This module creates the FastAPI app instance and registers all routers.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from recommender.config import settings
from recommender.errors import (
    ConfigurationError,
    NoMatchFound,
    ProviderError,
    RecommenderError,
    ResponseShapeError,
)
from recommender.schemas.recommendations import ErrorResponse
from recommender.routes.health import router as health_router
from recommender.routes.recommendations import router as recommendations_router

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


# Create FastAPI app
app = FastAPI(
    title="Episode Recommender API",
    description="Embeds a query, matches the closest stored episode and phrases a recommendation",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)


# Custom validation error handler to log detailed errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log validation errors and return them in the shared error shape."""
    logger.error(
        f"Validation error on {request.method} {request.url.path}: {exc.errors()}"
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "details": jsonable_encoder(exc.errors()),
        }
    )


# (status, error code) per pipeline error kind; checked in order
ERROR_STATUS = [
    (NoMatchFound, status.HTTP_404_NOT_FOUND, "no_match"),
    (ProviderError, status.HTTP_502_BAD_GATEWAY, "provider_error"),
    (ResponseShapeError, status.HTTP_502_BAD_GATEWAY, "bad_provider_response"),
    (ConfigurationError, status.HTTP_503_SERVICE_UNAVAILABLE, "not_configured"),
]


@app.exception_handler(RecommenderError)
async def recommender_error_handler(request: Request, exc: RecommenderError):
    """Render pipeline errors as a top-level ErrorResponse body."""
    status_code, error = status.HTTP_500_INTERNAL_SERVER_ERROR, "recommender_error"
    for kind, kind_status, kind_error in ERROR_STATUS:
        if isinstance(exc, kind):
            status_code, error = kind_status, kind_error
            break

    if status_code == status.HTTP_404_NOT_FOUND:
        logger.info(f"{request.method} {request.url.path}: {exc}")
    else:
        logger.error(f"{request.method} {request.url.path} failed: {type(exc).__name__}: {exc}")

    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, details=str(exc)).model_dump(),
    )


# Register routers
app.include_router(health_router)
app.include_router(recommendations_router)

logger.info("FastAPI app initialized successfully")
