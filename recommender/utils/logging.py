"""
Logging utilities for the episode recommender.

Provides standardized logger configuration following privacy rules.

RULES:
- NEVER log API keys or the Supabase access key
- NEVER log full embedding vectors (log the dimension instead)
- Log user queries truncated (first 50 characters)

Acceptable logging:
- Stage transitions (e.g., "Embedding query", "Searching documents")
- Non-sensitive metadata (e.g., "match_count=1", "similarity=0.82")
- Provider error codes and messages
"""

import logging
from typing import Optional, Union


def get_logger(name: str, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Get a configured logger for the specified module.

    Args:
        name: Module name (typically __name__)
        level: Optional logging level (int or name such as "DEBUG"; defaults to INFO)

    Returns:
        Configured logger instance

    Usage:
        >>> from recommender.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Pipeline started")
    """
    logger = logging.getLogger(name)

    if level is None:
        level = logging.INFO
    elif isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger.setLevel(level)

    # Add handler if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def preview(text: str, limit: int = 50) -> str:
    """Truncate user text for log lines."""
    if len(text) <= limit:
        return text
    return f"{text[:limit]}..."
