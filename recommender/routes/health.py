"""
Health check route for the episode recommender.

Reports liveness and whether the settings would let a pipeline be built.
Nothing here reaches the provider or the datastore.
"""

from fastapi import APIRouter

from recommender import __version__
from recommender.config import settings
from recommender.errors import ConfigurationError
from recommender.schemas.health import HealthResponse
from recommender.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse, summary="Liveness and configuration check")
async def health_check() -> HealthResponse:
    try:
        settings.validate()
        configured = True
    except ConfigurationError as e:
        logger.warning(f"Health check: recommender is not configured: {e}")
        configured = False

    return HealthResponse(
        version=__version__,
        configured=configured,
        match_function=settings.MATCH_FUNCTION,
    )
