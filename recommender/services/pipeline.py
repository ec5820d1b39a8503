"""
Recommendation Pipeline - embed, match, respond

This module:
1. Embeds the raw query
2. Finds the single closest stored document for that vector
3. Asks the chat model to answer the query using that document
4. Returns the generated text (plus the context it was based on)

The three stages are injected as interface-typed handles, so each one can
be replaced by a test double. Runs are strictly sequential and fail fast:
the first error aborts the run and propagates unchanged.
"""

import logging
from typing import List, Optional, Protocol, Sequence

from recommender.config import Settings, settings as default_settings
from recommender.db.client import get_supabase_client
from recommender.schemas.recommendations import RecommendationResult
from recommender.services.embedding_service import GeminiEmbedder
from recommender.services.genai_client import get_genai_client
from recommender.services.match_service import SupabaseMatcher
from recommender.services.response_service import GeminiResponder
from recommender.services.retry import call_with_retry
from recommender.utils.logging import preview

logger = logging.getLogger(__name__)


# =============================================================================
# STAGE INTERFACES
# =============================================================================

class Embedder(Protocol):
    async def embed(self, text: str) -> List[float]: ...


class Matcher(Protocol):
    async def match(self, embedding: Sequence[float]) -> str: ...


class Responder(Protocol):
    async def respond(self, context: str, query: str) -> str: ...


# =============================================================================
# ORCHESTRATOR
# =============================================================================

class RecommendationPipeline:
    """Sequences Embedder -> Matcher -> Responder for one query at a time."""

    def __init__(
        self,
        embedder: Embedder,
        matcher: Matcher,
        responder: Responder,
        max_retries: int = 0,
        retry_backoff_seconds: float = 0.5,
    ) -> None:
        self.embedder = embedder
        self.matcher = matcher
        self.responder = responder
        self.max_retries = max_retries
        self.retry_backoff_seconds = retry_backoff_seconds

    async def run(self, query: str) -> RecommendationResult:
        """
        Produce a recommendation for `query`.

        Raises:
            ValueError: If the query is empty (before any network call)
            ProviderError, ResponseShapeError, NoMatchFound: from the stages
        """
        if not isinstance(query, str) or not query.strip():
            raise ValueError("query must be a non-empty string")

        logger.info(f"Pipeline started for query='{preview(query)}'")

        embedding = await call_with_retry(
            lambda: self.embedder.embed(query),
            self.max_retries,
            self.retry_backoff_seconds,
        )

        context = await call_with_retry(
            lambda: self.matcher.match(embedding),
            self.max_retries,
            self.retry_backoff_seconds,
        )

        recommendation = await call_with_retry(
            lambda: self.responder.respond(context, query),
            self.max_retries,
            self.retry_backoff_seconds,
        )

        logger.info("Pipeline finished")

        return RecommendationResult(
            query=query,
            context=context,
            recommendation=recommendation,
        )

    async def recommend(self, query: str) -> str:
        """Same as run() but returns only the recommendation text."""
        result = await self.run(query)
        return result.recommendation


def build_pipeline(
    app_settings: Optional[Settings] = None,
    match_threshold: Optional[float] = None,
    match_count: Optional[int] = None,
) -> RecommendationPipeline:
    """
    Wire the production pipeline from settings.

    Configuration is validated before any client is created, so a missing
    credential fails with ConfigurationError without touching the network.

    Args:
        app_settings: Settings to use (defaults to the module singleton)
        match_threshold: Overrides MATCH_THRESHOLD
        match_count: Overrides MATCH_COUNT
    """
    app_settings = app_settings or default_settings
    app_settings.validate()

    genai_client = get_genai_client(app_settings)
    supabase_client = get_supabase_client(app_settings)

    return RecommendationPipeline(
        embedder=GeminiEmbedder(
            client=genai_client,
            model=app_settings.EMBEDDING_MODEL,
            output_dimensionality=app_settings.EMBEDDING_DIMENSIONS,
        ),
        matcher=SupabaseMatcher(
            client=supabase_client,
            match_threshold=(
                app_settings.MATCH_THRESHOLD if match_threshold is None else match_threshold
            ),
            match_count=app_settings.MATCH_COUNT if match_count is None else match_count,
            function_name=app_settings.MATCH_FUNCTION,
        ),
        responder=GeminiResponder(
            client=genai_client,
            model=app_settings.CHAT_MODEL,
            temperature=app_settings.TEMPERATURE,
            frequency_penalty=app_settings.FREQUENCY_PENALTY,
        ),
        max_retries=app_settings.MAX_RETRIES,
        retry_backoff_seconds=app_settings.RETRY_BACKOFF_SECONDS,
    )
