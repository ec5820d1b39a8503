"""
Supabase client factory for the documents store.

The recommender only reads: it calls the similarity-search function
exposed through PostgREST. The client is created per pipeline and passed
in explicitly, there is no process-wide client.
"""

import logging
from typing import Optional

from supabase import Client, ClientOptions, create_client

from recommender.config import Settings, settings as default_settings
from recommender.errors import ConfigurationError

logger = logging.getLogger(__name__)


def get_supabase_client(app_settings: Optional[Settings] = None) -> Client:
    """
    Create a Supabase client for the documents store.

    Args:
        app_settings: Settings to read SUPABASE_URL / SUPABASE_KEY from.
                      Defaults to the module-level settings singleton.

    Returns:
        A Supabase client whose PostgREST calls are bounded by
        REQUEST_TIMEOUT_SECONDS.

    Raises:
        ConfigurationError: If SUPABASE_URL or SUPABASE_KEY is missing.
    """
    app_settings = app_settings or default_settings

    if not app_settings.SUPABASE_URL or not app_settings.SUPABASE_KEY:
        raise ConfigurationError(
            "SUPABASE_URL and SUPABASE_KEY must be set to query the documents store."
        )

    client: Client = create_client(
        supabase_url=app_settings.SUPABASE_URL,
        supabase_key=app_settings.SUPABASE_KEY,
        options=ClientOptions(
            postgrest_client_timeout=app_settings.REQUEST_TIMEOUT_SECONDS,
        ),
    )

    logger.debug("Created Supabase client for the documents store")

    return client
