"""
Embedding Service - query text to vector

Turns the user's query into the same kind of vector that is stored next to
every document, so the datastore can compare them.

- API: Google Gen AI Python SDK (models.embed_content)
- Model: EMBEDDING_MODEL (default gemini-embedding-001)
- Output dimensionality: EMBEDDING_DIMENSIONS (default 1536, must match the
  vector column of the documents table)
"""

import logging
from typing import List, Optional

from google import genai
from google.genai import types

from recommender.errors import ResponseShapeError
from recommender.services.genai_client import GENAI_CALL_ERRORS, provider_error_from
from recommender.utils.constants import (
    DEFAULT_EMBEDDING_DIMENSIONS,
    DEFAULT_EMBEDDING_MODEL,
    STAGE_EMBEDDING,
)
from recommender.utils.logging import preview

logger = logging.getLogger(__name__)


class GeminiEmbedder:
    """Embedder backed by the Gen AI embeddings endpoint."""

    def __init__(
        self,
        client: genai.Client,
        model: str = DEFAULT_EMBEDDING_MODEL,
        output_dimensionality: Optional[int] = DEFAULT_EMBEDDING_DIMENSIONS,
    ) -> None:
        self._client = client
        self.model = model
        self.output_dimensionality = output_dimensionality

    async def embed(self, text: str) -> List[float]:
        """
        Embed a single piece of text.

        Args:
            text: Non-empty query text, sent exactly as given

        Returns:
            The embedding vector of the first (only) result

        Raises:
            ValueError: If text is empty
            ProviderError: If the remote call fails
            ResponseShapeError: If the response carries no vector
        """
        if not text or not text.strip():
            raise ValueError("embed requires non-empty text")

        logger.info(f"Embedding query '{preview(text)}' with model={self.model}")

        config = None
        if self.output_dimensionality:
            config = types.EmbedContentConfig(output_dimensionality=self.output_dimensionality)

        try:
            response = self._client.models.embed_content(
                model=self.model,
                contents=text,
                config=config,
            )
        except GENAI_CALL_ERRORS as e:
            logger.error(f"Embedding request failed: {e}")
            raise provider_error_from(STAGE_EMBEDDING, e) from e

        embeddings = getattr(response, "embeddings", None)
        if not embeddings:
            logger.error("Embedding response has no embeddings")
            raise ResponseShapeError("Embedding response did not contain any embeddings")

        values = embeddings[0].values
        if not values:
            logger.error("Embedding response has an empty vector")
            raise ResponseShapeError("Embedding response did not contain a vector")

        vector = list(values)
        logger.debug(f"Received embedding with {len(vector)} dimensions")
        return vector
