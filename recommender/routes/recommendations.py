"""
FastAPI routes for the recommendation endpoint.

Endpoints:
- POST /recommendations: embed the query, match one document, generate text

Pipeline errors propagate to the app-level handler in recommender.main,
which renders them as {"error": ..., "details": ...}:
- NoMatchFound        -> 404 no_match
- ProviderError       -> 502 provider_error
- ResponseShapeError  -> 502 bad_provider_response
- ConfigurationError  -> 503 not_configured
"""

import logging
from functools import lru_cache

from fastapi import APIRouter, Depends

from recommender.schemas.recommendations import (
    ErrorResponse,
    RecommendationRequest,
    RecommendationResponse,
)
from recommender.services.pipeline import RecommendationPipeline, build_pipeline
from recommender.utils.logging import preview

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(
    prefix="/recommendations",
    tags=["recommendations"]
)


@lru_cache(maxsize=1)
def _shared_pipeline() -> RecommendationPipeline:
    # A ConfigurationError is not cached, so the next request retries the build
    logger.info("Building recommendation pipeline")
    return build_pipeline()


def get_pipeline() -> RecommendationPipeline:
    """
    Return the process-wide pipeline, building its SDK clients on first use.

    Overridden in tests through app.dependency_overrides.

    Raises:
        ConfigurationError: If credentials or tunables are missing or invalid
    """
    return _shared_pipeline()


@router.post(
    "",
    response_model=RecommendationResponse,
    status_code=200,
    summary="Recommend a document for a free-text query",
    responses={
        404: {"model": ErrorResponse, "description": "No stored document matched"},
        422: {"model": ErrorResponse, "description": "Missing, empty or blank query"},
        502: {"model": ErrorResponse, "description": "Provider or datastore failure"},
        503: {"model": ErrorResponse, "description": "Missing credentials"},
    },
)
async def recommend_endpoint(
    request: RecommendationRequest,
    pipeline: RecommendationPipeline = Depends(get_pipeline)
) -> RecommendationResponse:
    """
    Run the pipeline once for the request query.

    - Parse/Validate: Handled by Pydantic RecommendationRequest
    - Call pipeline: embed -> match -> respond (fail fast)
    - Map output: RecommendationResult -> RecommendationResponse
    """
    logger.info(f"POST /recommendations called, query='{preview(request.query)}'")

    result = await pipeline.run(request.query)

    logger.info("Returning recommendation")
    return RecommendationResponse(
        query=result.query,
        recommendation=result.recommendation,
        context=result.context,
    )
