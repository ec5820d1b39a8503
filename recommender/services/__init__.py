"""
Service layer for the episode recommender.

Each stage of the pipeline is a small service wrapping one remote call:
- embedding_service: query text -> vector (Gen AI)
- match_service: vector -> best document content (Supabase RPC)
- response_service: context + query -> recommendation (Gen AI)

pipeline sequences them; routes and the CLI only talk to the pipeline.
"""

from .embedding_service import GeminiEmbedder
from .match_service import SupabaseMatcher
from .pipeline import (
    Embedder,
    Matcher,
    RecommendationPipeline,
    Responder,
    build_pipeline,
)
from .response_service import GeminiResponder

__all__ = [
    "Embedder",
    "GeminiEmbedder",
    "GeminiResponder",
    "Matcher",
    "RecommendationPipeline",
    "Responder",
    "SupabaseMatcher",
    "build_pipeline",
]
