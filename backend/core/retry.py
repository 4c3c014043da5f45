"""
Bounded retry primitive.

Polls an async operation until a caller-supplied predicate accepts its
result or the attempt budget runs out. Used where a collaborator is
eventually consistent (session propagation after signin); regular store
calls fail fast and never go through here.

Dependencies: tenacity
System role: Configurable polling for eventually consistent reads
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryOutcome(Generic[T]):
    """Result of a bounded poll."""

    succeeded: bool
    attempts: int
    result: T | None


@dataclass(frozen=True)
class BoundedRetry:
    """
    Fixed-delay retry policy.

    Attributes:
        max_attempts: Total number of calls made at most (>= 1)
        delay_seconds: Sleep between consecutive calls
    """

    max_attempts: int = 5
    delay_seconds: float = 1.0

    async def poll(
        self,
        operation: Callable[[], Awaitable[T]],
        is_success: Callable[[T], bool] = bool,
        label: str = "operation",
    ) -> RetryOutcome[T]:
        """
        Call ``operation`` until ``is_success`` accepts its result.

        Exceptions raised by ``operation`` are not retried; they propagate
        immediately.

        Args:
            operation: Zero-argument coroutine factory
            is_success: Predicate deciding whether a result ends the poll
            label: Name used in log lines

        Returns:
            RetryOutcome: success flag, attempts made and the last result
        """
        attempts = 0

        async def attempt() -> T:
            nonlocal attempts
            attempts += 1
            return await operation()

        retrying = AsyncRetrying(
            stop=stop_after_attempt(max(1, self.max_attempts)),
            wait=wait_fixed(self.delay_seconds),
            retry=retry_if_result(lambda value: not is_success(value)),
            before_sleep=lambda state: logger.info(
                f"{__name__}:poll - {label} not ready on attempt "
                f"{state.attempt_number}/{self.max_attempts}, waiting {self.delay_seconds}s"
            ),
            reraise=True,
        )
        try:
            result = await retrying(attempt)
        except RetryError as e:
            logger.warning(
                f"{__name__}:poll - {label} gave up",
                extra={"attempts": attempts},
            )
            return RetryOutcome(
                succeeded=False,
                attempts=attempts,
                result=e.last_attempt.result(),
            )

        return RetryOutcome(succeeded=True, attempts=attempts, result=result)
