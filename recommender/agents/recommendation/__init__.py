"""
Recommendation prompts.

Exports the system prompt and builders used by the completion stage.
"""

from .prompts import (
    RECOMMENDATION_SYSTEM_PROMPT,
    build_recommendation_messages,
    build_recommendation_user_prompt,
)

__all__ = [
    "RECOMMENDATION_SYSTEM_PROMPT",
    "build_recommendation_messages",
    "build_recommendation_user_prompt",
]
