"""
Episode recommender.

Embeds a free-text query, retrieves the closest stored document from
Supabase and asks a Gemini chat model to phrase a recommendation from it.
"""

__version__ = "0.1.0"
