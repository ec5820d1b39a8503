"""
Match Service - nearest stored document for a query vector

Wraps the `match_documents` Postgres function (pgvector cosine similarity)
exposed by Supabase over RPC. Ranking happens entirely in the database;
this module only forwards parameters and reads back the rows.

RPC contract:
    match_documents(query_embedding vector, match_threshold float, match_count int)
    -> table (id, content, similarity) ordered by similarity desc
"""

import logging
from typing import Any, List, Sequence

import httpx
from postgrest.exceptions import APIError
from pydantic import ValidationError
from supabase import Client

from recommender.errors import (
    ConfigurationError,
    NoMatchFound,
    ProviderError,
    ResponseShapeError,
)
from recommender.schemas.recommendations import MatchRecord
from recommender.utils.constants import (
    DEFAULT_MATCH_COUNT,
    DEFAULT_MATCH_FUNCTION,
    DEFAULT_MATCH_THRESHOLD,
    STAGE_SEARCH,
)

logger = logging.getLogger(__name__)


class SupabaseMatcher:
    """Matcher backed by a Supabase similarity-search function."""

    def __init__(
        self,
        client: Client,
        match_threshold: float = DEFAULT_MATCH_THRESHOLD,
        match_count: int = DEFAULT_MATCH_COUNT,
        function_name: str = DEFAULT_MATCH_FUNCTION,
    ) -> None:
        if not 0.0 <= match_threshold <= 1.0:
            raise ConfigurationError(
                f"match_threshold must be between 0 and 1, got {match_threshold}"
            )
        if match_count < 1:
            raise ConfigurationError(f"match_count must be at least 1, got {match_count}")

        self._client = client
        self.match_threshold = match_threshold
        self.match_count = match_count
        self.function_name = function_name

    async def search(self, embedding: Sequence[float]) -> List[MatchRecord]:
        """
        Run the similarity search and return every row, best match first.

        Raises:
            ProviderError: If the RPC call fails
            ResponseShapeError: If rows are not shaped like documents
        """
        logger.info(
            f"Searching documents via {self.function_name} "
            f"(dimensions={len(embedding)}, match_threshold={self.match_threshold}, "
            f"match_count={self.match_count})"
        )

        try:
            response = self._client.rpc(
                self.function_name,
                {
                    "query_embedding": embedding,
                    "match_threshold": self.match_threshold,
                    "match_count": self.match_count,
                }
            ).execute()
        except APIError as e:
            logger.error(f"Similarity search failed: code={e.code} message={e.message}")
            raise ProviderError(
                stage=STAGE_SEARCH,
                provider_message=e.message or str(e),
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Similarity search failed: {e}")
            raise ProviderError(stage=STAGE_SEARCH, provider_message=str(e)) from e

        data = response.data
        if data is None:
            return []
        if not isinstance(data, list):
            raise ResponseShapeError(
                f"{self.function_name} returned {type(data).__name__}, expected a list of rows"
            )

        return [self._to_record(row, index) for index, row in enumerate(data)]

    async def match(self, embedding: Sequence[float]) -> str:
        """
        Return the content of the highest-similarity document.

        Raises:
            NoMatchFound: If no document is above the threshold
            ProviderError: If the RPC call fails
            ResponseShapeError: If rows are not shaped like documents
        """
        records = await self.search(embedding)

        if not records:
            logger.warning(
                f"No documents above match_threshold={self.match_threshold}"
            )
            raise NoMatchFound(self.match_threshold, self.match_count)

        best = records[0]
        logger.info(
            f"Best match id={best.id} similarity={best.similarity} "
            f"({len(records)} candidate(s))"
        )
        return best.content

    def _to_record(self, row: Any, index: int) -> MatchRecord:
        if not isinstance(row, dict) or not isinstance(row.get("content"), str):
            raise ResponseShapeError(
                f"Row {index} from {self.function_name} has no text 'content' field"
            )
        try:
            return MatchRecord(
                content=row["content"],
                id=row.get("id"),
                similarity=row.get("similarity"),
            )
        except ValidationError as e:
            fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
            raise ResponseShapeError(
                f"Row {index} from {self.function_name} has invalid field(s): {fields}"
            ) from e
