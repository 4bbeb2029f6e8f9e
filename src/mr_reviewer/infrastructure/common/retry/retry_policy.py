"""Backoff for provider calls that hit rate limits."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from mr_reviewer.core.application.exceptions import ProviderError

logger = structlog.get_logger()

_T = TypeVar("_T")


def _rate_limited(exc: BaseException) -> bool:
    return isinstance(exc, ProviderError) and exc.is_rate_limited


def _log_backoff(state: RetryCallState) -> None:
    error = state.outcome.exception() if state.outcome else None
    logger.warning(
        "Provider rate limited, backing off",
        attempt=state.attempt_number,
        wait_seconds=round(state.next_action.sleep, 2) if state.next_action else None,
        error_details=str(error),
    )


@dataclass(frozen=True)
class RetryPolicy:
    """Retries a provider call only when the provider signals rate limiting.

    Any other error, and the last rate-limit error once ``max_attempts`` is
    spent, propagates unchanged.
    """

    max_attempts: int = 5
    initial_wait: float = 1.0
    max_wait: float = 30.0

    async def run(self, fn: Callable[[], Awaitable[_T]]) -> _T:
        retrying = AsyncRetrying(
            retry=retry_if_exception(_rate_limited),
            stop=stop_after_attempt(max(self.max_attempts, 1)),
            wait=wait_exponential_jitter(initial=self.initial_wait, max=self.max_wait),
            before_sleep=_log_backoff,
            reraise=True,
        )
        return await retrying(fn)
