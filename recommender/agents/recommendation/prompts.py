"""
Recommendation Prompt Templates

Contains the system prompt and the message builder for the completion stage.

Architecture:
- Pattern: Retrieval-augmented single call (one stored document as context)
- Model: Gemini 2.5 Flash (CHAT_MODEL)
- Temperature / frequency penalty: 0.5 / 0.5 (TEMPERATURE, FREQUENCY_PENALTY)

The conversation is always exactly two messages: the fixed persona as the
system message, then one user message carrying the context and the question.
"""

from typing import Dict, List

# =============================================================================
# SYSTEM PROMPT
# =============================================================================

RECOMMENDATION_SYSTEM_PROMPT = """You are an enthusiastic podcast expert who loves recommending podcasts to people. You will be given two pieces of information: some context about podcast episodes and a question. Your main job is to formulate a short answer to the question using the provided context. If you are unsure and cannot find the answer in the context, say, "Sorry, I don't know the answer." Please do not make up the answer."""


# =============================================================================
# USER MESSAGE
# =============================================================================

RECOMMENDATION_USER_TEMPLATE = "Context: {context}\nQuestion: {query}"


def build_recommendation_user_prompt(context: str, query: str) -> str:
    """Embed the matched document and the untouched query in one user message."""
    return RECOMMENDATION_USER_TEMPLATE.format(context=context, query=query)


def build_recommendation_messages(context: str, query: str) -> List[Dict[str, str]]:
    """
    Build the role-tagged conversation sent to the chat model.

    Returns:
        [{"role": "system", ...}, {"role": "user", ...}]
    """
    return [
        {"role": "system", "content": RECOMMENDATION_SYSTEM_PROMPT},
        {"role": "user", "content": build_recommendation_user_prompt(context, query)},
    ]
