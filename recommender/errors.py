"""
Error kinds raised by the recommendation pipeline.

Every stage fails fast with one of these exceptions; the orchestrator never
translates them, so callers (CLI, HTTP routes) see the original kind.
"""

from typing import Optional


class RecommenderError(Exception):
    """Base class for all pipeline errors."""


class ConfigurationError(RecommenderError):
    """Missing or invalid credentials, endpoints or tunables."""


class ProviderError(RecommenderError):
    """
    An outbound call to the provider or datastore failed.

    Attributes:
        stage: Pipeline stage that made the call ("embedding", "search", "completion")
        status_code: HTTP status reported by the remote service, if any
        provider_message: Message reported by the remote service
    """

    def __init__(
        self,
        stage: str,
        provider_message: str,
        status_code: Optional[int] = None,
    ) -> None:
        self.stage = stage
        self.provider_message = provider_message
        self.status_code = status_code
        status = f" (status {status_code})" if status_code is not None else ""
        super().__init__(f"{stage} request failed{status}: {provider_message}")


class ResponseShapeError(RecommenderError):
    """A successful response lacks a field the pipeline needs."""


class NoMatchFound(RecommenderError):
    """The similarity search returned no records above the threshold."""

    def __init__(self, match_threshold: float, match_count: int) -> None:
        self.match_threshold = match_threshold
        self.match_count = match_count
        super().__init__(
            f"No stored document matched the query "
            f"(match_threshold={match_threshold}, match_count={match_count})"
        )
