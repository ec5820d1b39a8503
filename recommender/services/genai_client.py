"""
Google Gen AI client factory.

One client serves both the embedding and the completion stage. It is built
by the pipeline factory and injected, never cached at module level.
"""

import logging
from typing import Optional, Tuple, Type

import httpx
from google import genai
from google.genai import errors, types

from recommender.config import Settings, settings as default_settings
from recommender.errors import ConfigurationError, ProviderError

logger = logging.getLogger(__name__)

# Exceptions that mean the remote call itself failed
GENAI_CALL_ERRORS: Tuple[Type[Exception], ...] = (errors.APIError, httpx.HTTPError)


def get_genai_client(app_settings: Optional[Settings] = None) -> genai.Client:
    """
    Create a Gen AI client with the configured API key and request timeout.

    Raises:
        ConfigurationError: If GOOGLE_API_KEY is missing.
    """
    app_settings = app_settings or default_settings

    if not app_settings.GOOGLE_API_KEY:
        raise ConfigurationError(
            "GOOGLE_API_KEY is not configured. "
            "Please set it in your .env file to use the recommender."
        )

    # HttpOptions.timeout is expressed in milliseconds
    client = genai.Client(
        api_key=app_settings.GOOGLE_API_KEY,
        http_options=types.HttpOptions(
            timeout=int(app_settings.REQUEST_TIMEOUT_SECONDS * 1000)
        ),
    )
    logger.info("Gen AI client initialized")
    return client


def provider_error_from(stage: str, error: Exception) -> ProviderError:
    """Translate a Gen AI SDK or transport failure into a ProviderError."""
    if isinstance(error, errors.APIError):
        return ProviderError(
            stage=stage,
            provider_message=error.message or str(error),
            status_code=error.code,
        )
    return ProviderError(stage=stage, provider_message=str(error) or type(error).__name__)
