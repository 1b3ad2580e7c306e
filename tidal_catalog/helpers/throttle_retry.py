"""Backoff handling for rate limited requests."""

from __future__ import annotations

import asyncio
import random


class RateLimitBackoff:
    """Jittered, optionally escalating and bounded, backoff for HTTP 429 responses.

    Every wait is drawn uniformly from [min_delay, max_delay) and scaled by
    factor ** attempt. With max_retries set to None the caller keeps retrying.
    """

    def __init__(
        self,
        min_delay: float,
        max_delay: float,
        factor: float = 1.0,
        max_retries: int | None = None,
    ) -> None:
        """Initialize the backoff policy."""
        if min_delay < 0 or max_delay < min_delay:
            raise ValueError("Invalid backoff range")
        self.min_delay = min_delay
        self.max_delay = max_delay
        self.factor = factor
        self.max_retries = max_retries

    def can_retry(self, attempt: int) -> bool:
        """Return True if the given (zero based) retry may be done."""
        return self.max_retries is None or attempt < self.max_retries

    def delay(self, attempt: int) -> float:
        """Return the number of seconds to wait before the given retry."""
        jitter = self.min_delay + random.random() * (self.max_delay - self.min_delay)
        return jitter * (self.factor**attempt)

    async def wait(self, attempt: int) -> float:
        """Sleep before the given retry and return the delay used."""
        delay = self.delay(attempt)
        await asyncio.sleep(delay)
        return delay
