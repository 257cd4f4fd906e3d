"""Bounded retry with exponential backoff for a single async call site."""
from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to try and how long to wait in between."""
    max_attempts: int = 3
    base_delay: float = 1.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0:
            raise ValueError("base_delay must not be negative")

    def delay_for(self, attempt: int) -> float:
        """Delay to wait after the given (1-based) failed attempt: 1s, 2s, 4s..."""
        return self.base_delay * 2 ** (attempt - 1)


@dataclass
class RetryOutcome(Generic[T]):
    """Result of run_with_retry.

    value is the first non-null result, or None when every attempt failed.
    last_error is the exception raised by the final attempt (None when the
    final attempt returned null without raising).
    """
    value: Optional[T]
    last_error: Optional[BaseException]
    attempts: int

    @property
    def succeeded(self) -> bool:
        return self.value is not None


async def run_with_retry(
    call: Callable[[], Awaitable[Optional[T]]],
    policy: RetryPolicy,
    sleep: Sleep = asyncio.sleep,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
) -> RetryOutcome[T]:
    """Await call() until it returns a non-null value or attempts run out.

    Args:
        call: Zero-argument coroutine factory
        policy: Attempt budget and backoff
        sleep: Awaitable sleep, replaceable in tests
        retry_on: Exception types treated as a failed attempt; anything
            else propagates immediately

    Returns:
        RetryOutcome with the value (if any), last error and attempt count
    """
    last_error: Optional[BaseException] = None

    for attempt in range(1, policy.max_attempts + 1):
        logger.info(f"Attempt {attempt} of {policy.max_attempts}")
        try:
            value = await call()
        except retry_on as e:
            logger.warning(f"Attempt {attempt} failed: {e}")
            last_error = e
        else:
            if value is not None:
                return RetryOutcome(value=value, last_error=None, attempts=attempt)
            logger.warning(f"Attempt {attempt} returned no data")
            last_error = None

        if attempt < policy.max_attempts:
            delay = policy.delay_for(attempt)
            logger.debug(f"Retrying in {delay:g}s")
            await sleep(delay)

    return RetryOutcome(value=None, last_error=last_error, attempts=policy.max_attempts)
