"""
Response Service - matched document + query to recommendation text

Architecture:
- Pattern: single chat completion, no tools, no structured output
- API: Google Gen AI Python SDK (models.generate_content)
- Model: CHAT_MODEL (default gemini-2.5-flash)
- Sampling: temperature and frequency_penalty (default 0.5 each)

The conversation is built as role-tagged messages (one system, one user) and
then mapped onto the Gen AI request: the system message becomes
`system_instruction`, user messages become `contents`.
"""

import logging
from typing import Dict, List, Optional

from google import genai
from google.genai import types

from recommender.agents.recommendation.prompts import build_recommendation_messages
from recommender.errors import ResponseShapeError
from recommender.services.genai_client import GENAI_CALL_ERRORS, provider_error_from
from recommender.utils.constants import (
    DEFAULT_CHAT_MODEL,
    DEFAULT_FREQUENCY_PENALTY,
    DEFAULT_TEMPERATURE,
    STAGE_COMPLETION,
)
from recommender.utils.logging import preview

logger = logging.getLogger(__name__)


def _to_genai_request(
    messages: List[Dict[str, str]],
) -> tuple[Optional[str], List[types.Content]]:
    """Split role-tagged messages into a system instruction and user contents."""
    system_parts = [m["content"] for m in messages if m["role"] == "system"]
    contents = [
        types.Content(role="user", parts=[types.Part(text=m["content"])])
        for m in messages
        if m["role"] == "user"
    ]
    system_instruction = "\n\n".join(system_parts) if system_parts else None
    return system_instruction, contents


def _extract_text(response) -> Optional[str]:
    """Return the first candidate's text, or None if it has none."""
    candidate = response.candidates[0]

    # Parts are more reliable than response.text when several parts are present
    if candidate.content and candidate.content.parts:
        for part in candidate.content.parts:
            if getattr(part, "text", None):
                return part.text

    return response.text


class GeminiResponder:
    """Responder backed by Gen AI chat completion."""

    def __init__(
        self,
        client: genai.Client,
        model: str = DEFAULT_CHAT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        frequency_penalty: float = DEFAULT_FREQUENCY_PENALTY,
    ) -> None:
        self._client = client
        self.model = model
        self.temperature = temperature
        self.frequency_penalty = frequency_penalty

    def build_messages(self, context: str, query: str) -> List[Dict[str, str]]:
        """Exactly one system message followed by exactly one user message."""
        return build_recommendation_messages(context=context, query=query)

    async def respond(self, context: str, query: str) -> str:
        """
        Ask the chat model to answer `query` using `context`.

        Raises:
            ProviderError: If the remote call fails
            ResponseShapeError: If the response has no candidates or no text
        """
        logger.info(f"Requesting recommendation for '{preview(query)}' with model={self.model}")

        system_instruction, contents = _to_genai_request(self.build_messages(context, query))

        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=self.temperature,
            frequency_penalty=self.frequency_penalty,
        )

        try:
            response = self._client.models.generate_content(
                model=self.model,
                contents=contents,
                config=config,
            )
        except GENAI_CALL_ERRORS as e:
            logger.error(f"Completion request failed: {e}")
            raise provider_error_from(STAGE_COMPLETION, e) from e

        if not response.candidates:
            logger.error("Empty response from Gen AI API")
            raise ResponseShapeError("Completion response did not contain any candidates")

        text = _extract_text(response)
        if not text or not text.strip():
            logger.error("Empty text in Gen AI response")
            raise ResponseShapeError("First completion candidate did not contain any text")

        logger.info("Recommendation generated")
        return text.strip()
