"""
Bounded retry with exponential backoff for outbound pipeline calls.

Only ProviderError is retried. Every other error (no match, malformed
response, bad configuration) is deterministic and surfaces immediately.
"""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from recommender.errors import ProviderError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    stage = getattr(error, "stage", "unknown")
    logger.warning(
        f"{stage} call failed ({error}); retry {retry_state.attempt_number} "
        f"in {retry_state.next_action.sleep if retry_state.next_action else 0:.2f}s"
    )


async def call_with_retry(
    operation: Callable[[], Awaitable[T]],
    max_retries: int = 0,
    backoff_seconds: float = 0.5,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """
    Await `operation()`, retrying on ProviderError.

    Args:
        operation: Zero-argument coroutine factory (called once per attempt)
        max_retries: Extra attempts after the first one (0 = single attempt)
        backoff_seconds: Delay before the first retry; doubles on each retry
        sleep: Coroutine used to wait between attempts

    Returns:
        The result of the first successful attempt

    Raises:
        ProviderError: The last failure once all attempts are used
    """
    retrying = AsyncRetrying(
        retry=retry_if_exception_type(ProviderError),
        stop=stop_after_attempt(max_retries + 1),
        wait=wait_exponential(multiplier=backoff_seconds, min=0),
        before_sleep=_log_retry,
        sleep=sleep,
        reraise=True,
    )
    return await retrying(operation)
