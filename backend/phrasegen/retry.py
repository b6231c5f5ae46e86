from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from tenacity import AsyncRetrying, RetryCallState, stop_after_attempt, wait_exponential

from .errors import RetryExhaustedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryPolicy:
    """Bounded retry with exponential backoff: ``base_delay * 2**(attempt - 1)`` seconds.

    Every ``Exception`` counts as a failed attempt. When the last attempt fails
    the error is wrapped in :class:`RetryExhaustedError`.
    """

    def __init__(
        self,
        attempts: int = 3,
        base_delay: float = 1.0,
        *,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ) -> None:
        if attempts < 1:
            raise ValueError("attempts must be at least 1")
        self.attempts = attempts
        self.base_delay = base_delay
        self.sleep = sleep or asyncio.sleep

    def delay_for(self, attempt: int) -> float:
        return self.base_delay * 2 ** (attempt - 1)

    async def run(self, operation: Callable[[], Awaitable[T]], *, description: str) -> T:
        def log_failure(state: RetryCallState) -> None:
            exc = state.outcome.exception() if state.outcome else None
            if state.attempt_number < self.attempts:
                logger.warning(
                    "Attempt %d/%d to %s failed: %s; retrying in %.1fs",
                    state.attempt_number, self.attempts, description, exc, self.delay_for(state.attempt_number),
                )
            else:
                logger.error("Attempt %d/%d to %s failed: %s", state.attempt_number, self.attempts, description, exc)

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.attempts),
            wait=wait_exponential(multiplier=self.base_delay, min=0, max=self.delay_for(self.attempts)),
            after=log_failure,
            sleep=self.sleep,
            reraise=True,
        )
        try:
            # The coroutine is awaited inside the attempt so its failures reach the retry loop
            async for attempt in retrying:
                with attempt:
                    return await operation()
        except Exception as e:
            raise RetryExhaustedError(description, self.attempts, e) from e
