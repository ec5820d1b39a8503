"""
Datastore access layer for the episode recommender.

Documents and their embeddings live in a Supabase (Postgres + pgvector)
table. This package never writes to it and never issues raw SQL: the
similarity search is the `match_documents` function, called over RPC.
"""

from .client import get_supabase_client

__all__ = ["get_supabase_client"]
