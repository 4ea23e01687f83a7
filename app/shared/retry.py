"""Bounded retry for awaitables."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from loguru import logger

T = TypeVar("T")


async def retry_async(
    func: Callable[[], Awaitable[T]],
    *,
    max_attempts: int,
    delay_seconds: float,
    backoff: float = 1.0,
    retry_if: Callable[[BaseException], bool] = lambda e: True,
    label: str = "operation",
) -> T:
    """
    Call `func` until it succeeds or the attempt budget is spent.

    Args:
        func: Zero-argument coroutine factory, called once per attempt
        max_attempts: Total number of calls allowed (>= 1)
        delay_seconds: Sleep before the second attempt
        backoff: Multiplier applied to the delay after every failed attempt
        retry_if: Predicate deciding whether an exception is retryable
        label: Name used in log lines

    Returns:
        The first successful result

    Raises:
        ValueError: If max_attempts < 1
        Exception: The last exception when it is not retryable or attempts ran out
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    delay = delay_seconds
    for attempt in range(1, max_attempts + 1):
        try:
            return await func()
        except Exception as e:
            if not retry_if(e):
                raise
            if attempt >= max_attempts:
                logger.warning("{} failed after {} attempts: {}", label, attempt, e)
                raise
            logger.info("{} not ready (attempt {}/{}), retrying in {:.2f}s", label, attempt, max_attempts, delay)
            await asyncio.sleep(delay)
            delay *= backoff

    raise AssertionError("unreachable")
