"""
Configuration module for the episode recommender.

Loads environment variables and validates required settings.
"""
import logging
import os
from typing import Dict, List

from dotenv import load_dotenv

from recommender.errors import ConfigurationError
from recommender.utils import constants

# Load .env file
load_dotenv()

logger = logging.getLogger(__name__)


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self) -> None:
        self._invalid: List[str] = []

        # Google Gen AI (embeddings + chat completion)
        self.GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY", "")
        self.EMBEDDING_MODEL: str = os.getenv("EMBEDDING_MODEL", constants.DEFAULT_EMBEDDING_MODEL)
        self.EMBEDDING_DIMENSIONS: int = self._int("EMBEDDING_DIMENSIONS", constants.DEFAULT_EMBEDDING_DIMENSIONS)
        self.CHAT_MODEL: str = os.getenv("CHAT_MODEL", constants.DEFAULT_CHAT_MODEL)
        self.TEMPERATURE: float = self._float("TEMPERATURE", constants.DEFAULT_TEMPERATURE)
        self.FREQUENCY_PENALTY: float = self._float("FREQUENCY_PENALTY", constants.DEFAULT_FREQUENCY_PENALTY)

        # Supabase (documents table + similarity search function)
        self.SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
        self.SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")
        self.MATCH_FUNCTION: str = os.getenv("MATCH_FUNCTION", constants.DEFAULT_MATCH_FUNCTION)
        self.MATCH_THRESHOLD: float = self._float("MATCH_THRESHOLD", constants.DEFAULT_MATCH_THRESHOLD)
        self.MATCH_COUNT: int = self._int("MATCH_COUNT", constants.DEFAULT_MATCH_COUNT)

        # Outbound call policy
        self.MAX_RETRIES: int = self._int("MAX_RETRIES", constants.DEFAULT_MAX_RETRIES)
        self.RETRY_BACKOFF_SECONDS: float = self._float(
            "RETRY_BACKOFF_SECONDS", constants.DEFAULT_RETRY_BACKOFF_SECONDS
        )
        self.REQUEST_TIMEOUT_SECONDS: float = self._float(
            "REQUEST_TIMEOUT_SECONDS", constants.DEFAULT_REQUEST_TIMEOUT_SECONDS
        )

        # Application Settings
        self.ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    def _int(self, name: str, default: int) -> int:
        raw = os.getenv(name)
        if raw is None or raw.strip() == "":
            return default
        try:
            return int(raw)
        except ValueError:
            self._invalid.append(f"{name}={raw!r} (expected an integer)")
            return default

    def _float(self, name: str, default: float) -> float:
        raw = os.getenv(name)
        if raw is None or raw.strip() == "":
            return default
        try:
            return float(raw)
        except ValueError:
            self._invalid.append(f"{name}={raw!r} (expected a number)")
            return default

    def validate(self) -> None:
        """
        Validate that all required settings are configured.

        Raises:
            ConfigurationError: If any required setting is missing or a
                tunable is malformed or out of range.
        """
        required_settings: Dict[str, str] = {
            "GOOGLE_API_KEY": self.GOOGLE_API_KEY,
            "SUPABASE_URL": self.SUPABASE_URL,
            "SUPABASE_KEY": self.SUPABASE_KEY,
        }

        missing = [key for key, value in required_settings.items() if not value]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Please check your .env file."
            )

        problems = list(self._invalid)
        if not 0.0 <= self.MATCH_THRESHOLD <= 1.0:
            problems.append(f"MATCH_THRESHOLD={self.MATCH_THRESHOLD} (must be between 0 and 1)")
        if self.MATCH_COUNT < 1:
            problems.append(f"MATCH_COUNT={self.MATCH_COUNT} (must be at least 1)")
        if self.EMBEDDING_DIMENSIONS < 1:
            problems.append(f"EMBEDDING_DIMENSIONS={self.EMBEDDING_DIMENSIONS} (must be positive)")
        if self.MAX_RETRIES < 0:
            problems.append(f"MAX_RETRIES={self.MAX_RETRIES} (must not be negative)")
        if self.REQUEST_TIMEOUT_SECONDS <= 0:
            problems.append(f"REQUEST_TIMEOUT_SECONDS={self.REQUEST_TIMEOUT_SECONDS} (must be positive)")

        if problems:
            raise ConfigurationError(
                f"Invalid environment variables: {'; '.join(problems)}."
            )

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT.lower() == "production"

    def is_staging(self) -> bool:
        """Check if running in staging environment."""
        return self.ENVIRONMENT.lower() == "staging"

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT.lower() == "development"


# Create a singleton instance
settings = Settings()

# Validate settings on module import (will fail fast if misconfigured)
# Skip validation during tests or when importing for introspection
if os.getenv("VALIDATE_CONFIG", "true").lower() == "true":
    try:
        settings.validate()
    except ConfigurationError as e:
        # In development, warn but don't crash
        if settings.is_development():
            logger.warning(f"{e} The recommender will not work until your .env file is configured.")
        else:
            # In production or staging, fail immediately
            raise
