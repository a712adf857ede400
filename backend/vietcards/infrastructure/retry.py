"""Retry utilities using tenacity for resilient backend reads."""

import logging
from collections.abc import Callable
from functools import wraps
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from vietcards.domain.errors import RepositoryError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Default retry configuration
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_INITIAL_WAIT = 2.0  # seconds
DEFAULT_MAX_WAIT = 30.0  # seconds
DEFAULT_JITTER = 1.0  # seconds


class TransientError(RepositoryError):
    """Network timeouts, 5xx responses, rate limiting."""

    pass


class PermanentError(RepositoryError):
    """Errors that should NOT be retried (auth failures, invalid data)."""

    pass


def with_retry(
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    initial_wait: float = DEFAULT_INITIAL_WAIT,
    max_wait: float = DEFAULT_MAX_WAIT,
    jitter: float = DEFAULT_JITTER,
    retryable_exceptions: tuple = (TransientError,),
) -> Callable:
    """Decorator for async functions with exponential backoff retry.

    Uses exponential backoff with jitter to prevent synchronized retry storms.

    Wait formula: min(initial * 2^n, max) + random(0, min(jitter, max))

    Only apply to idempotent operations (reads); writes fail fast so the
    caller can decide whether to retry.

    Args:
        max_attempts: Maximum number of attempts (default 3)
        initial_wait: Initial wait time in seconds (default 2.0)
        max_wait: Maximum wait time in seconds (default 30.0)
        jitter: Maximum random delay added to each wait (default 1.0)
        retryable_exceptions: Tuple of exception types to retry on

    Returns:
        Decorated async function with retry behavior
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(max_attempts),
                wait=wait_exponential(multiplier=initial_wait, max=max_wait)
                + wait_random(0, min(jitter, max_wait)),
                retry=retry_if_exception_type(retryable_exceptions),
                reraise=True,
            ):
                with attempt:
                    attempt_num = attempt.retry_state.attempt_number
                    if attempt_num > 1:
                        logger.warning(
                            f"Retry attempt {attempt_num}/{max_attempts} for {func.__name__}"
                        )
                    return await func(*args, **kwargs)

        return wrapper

    return decorator
