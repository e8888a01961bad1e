"""
Retrieval plumbing shared by platform clients: request pacing, async retry with
exponential backoff, subreddit name validation.
"""

import asyncio
import inspect
import logging
import re
import time
from functools import wraps
from typing import Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

SUBREDDIT_NAME_RE = re.compile(r"^[A-Za-z0-9_]{2,21}$")


def validate_subreddit(name: str) -> bool:
    """Validate subreddit name: alphanumeric + underscore only."""
    if not name:
        return False
    return SUBREDDIT_NAME_RE.match(name) is not None


class RequestPacer:
    """
    Enforces a minimum interval between request starts.

    Shared by all concurrent tasks of one client; the lock serialises the
    wait so bursts are spread out rather than released together.
    """

    def __init__(self, min_interval_s: float, clock: Callable[[], float] = time.monotonic):
        self.min_interval_s = max(0.0, min_interval_s)
        self._clock = clock
        self._last_start: Optional[float] = None
        self._lock = asyncio.Lock()

    async def wait(self) -> None:
        """Sleep until the politeness interval since the previous request has elapsed."""
        if self.min_interval_s == 0:
            return
        async with self._lock:
            now = self._clock()
            if self._last_start is not None:
                remaining = self._last_start + self.min_interval_s - now
                if remaining > 0:
                    await asyncio.sleep(remaining)
                    now = self._clock()
            self._last_start = now


def retry_with_backoff(
    max_attempts: int = 3,
    base_delay: float = 1.0,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
):
    """
    Retry decorator with exponential backoff for coroutine functions.

    Args:
        max_attempts: Maximum number of attempts (default 3)
        base_delay: Base delay in seconds, doubles each retry (default 1.0)
        retry_on: Exception types worth retrying; anything else propagates at once
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"retry_with_backoff needs a coroutine function, got {func!r}")

        @wraps(func)
        async def async_wrapper(*args, **kwargs) -> T:
            for attempt in range(max_attempts):
                try:
                    return await func(*args, **kwargs)
                except retry_on as e:
                    if attempt == max_attempts - 1:
                        logger.error("All %d attempts failed: %s", max_attempts, e)
                        raise
                    delay = base_delay * (2 ** attempt)
                    logger.warning(
                        "Attempt %d/%d failed: %s. Retrying in %.1fs...",
                        attempt + 1, max_attempts, e, delay,
                    )
                    await asyncio.sleep(delay)
            raise AssertionError("unreachable")

        return async_wrapper

    return decorator
