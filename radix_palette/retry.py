"""Attempt an async operation a bounded number of times, then give up with a default."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def attempt_or_default(
    operation: Callable[[], Awaitable[T]],
    attempts: int,
    default: T,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    backoff: float = 0.0,
    on_failure: Optional[Callable[[int, BaseException], Awaitable[None]]] = None,
    label: str = "operation",
) -> T:
    """Run ``operation`` up to ``attempts`` times.

    After a failed attempt ``on_failure(attempt, exc)`` is awaited and the
    next attempt waits ``backoff * attempt`` seconds. Exceptions outside
    ``retry_on`` propagate. Returns ``default`` once every attempt failed.
    """
    for attempt in range(1, attempts + 1):
        try:
            return await operation()
        except retry_on as exc:
            logger.warning("Attempt %d/%d failed for %s: %s", attempt, attempts, label, exc)
            if on_failure is not None:
                await on_failure(attempt, exc)
            if attempt < attempts and backoff > 0:
                await asyncio.sleep(backoff * attempt)
    return default
