"""Bounded retry loop for fetching data that may be temporarily unavailable.

PacketTracer Anywhere answers 503 while it is still allocating a
PacketTracer instance for a fresh session, and the first topology request
of a session regularly exceeds the default deadline. The fetch therefore
retries on those two outcomes, telling the caller before each retry so that
a progress indicator can be shown, and gives up after a fixed number of
retries.

Semantics:
- The initial attempt is not a retry. ``retry_limit`` retries follow it, so
  a fetch makes at most ``retry_limit + 1`` attempts.
- ``before_retry(attempt_number, retry_limit, error_kind)`` runs before the
  retry it announces is dispatched; ``attempt_number`` starts at 1.
- 503 retries wait ``unavailable_delay`` seconds; timeout retries are
  dispatched immediately. The delay is fixed: no backoff, no jitter.
- Exactly one of ``on_success`` and ``after_all_retries`` fires, at most
  once. A session-expired or any other failure fires neither and is raised.

Retry bookkeeping lives in a RetryState value created by each call, so
concurrent fetches never share a counter.

This is an internal module and should not be imported directly by users.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Any, Awaitable, Callable

from ptclient._outcome import (
    Outcome,
    ServiceUnavailable,
    SessionExpired,
    Success,
    Timeout,
)

logger = logging.getLogger(__name__)


class ErrorKind(IntEnum):
    """Why the previous attempt of a fetch failed."""

    UNAVAILABLE = 1
    TIMEOUT = 2


@dataclass(frozen=True)
class RetryPolicy:
    """Fixed retry policy for a fetch.

    Attributes:
        retry_limit: Number of retries after the initial attempt.
        unavailable_delay: Seconds to wait before retrying after a 503.
        timeout_delay: Seconds to wait before retrying after a timeout.
    """

    retry_limit: int = 5
    unavailable_delay: float = 2.0
    timeout_delay: float = 0.0

    def delay_for(self, kind: ErrorKind) -> float:
        """Return the delay before a retry after a failure of ``kind``."""
        if kind is ErrorKind.UNAVAILABLE:
            return self.unavailable_delay
        return self.timeout_delay


DEFAULT_RETRY_POLICY = RetryPolicy()


@dataclass(frozen=True)
class RetryState:
    """Progress of one logical fetch.

    Attributes:
        retry_limit: Number of retries allowed after the initial attempt.
        try_count: Retries consumed so far.
        last_error: Kind of the most recent failure, if any.
    """

    retry_limit: int
    try_count: int = 0
    last_error: ErrorKind | None = None

    @property
    def exhausted(self) -> bool:
        """Whether more retries were consumed than the limit allows."""
        return self.try_count > self.retry_limit

    def advance(self, kind: ErrorKind) -> "RetryState":
        """Return the state after one more failed attempt of ``kind``."""
        return replace(self, try_count=self.try_count + 1, last_error=kind)


OnSuccess = Callable[[Any], None]
BeforeRetry = Callable[[int, int, ErrorKind], None]
AfterAllRetries = Callable[[], None]


def _advance(state: RetryState, outcome: Outcome, description: str) -> RetryState:
    """Record a failed attempt, raising if the failure is not retryable."""
    if isinstance(outcome, ServiceUnavailable):
        logger.debug(f"The {description} is not available yet: {outcome.error}")
        return state.advance(ErrorKind.UNAVAILABLE)
    if isinstance(outcome, Timeout):
        logger.error(f"The {description} could not be loaded: timeout.")
        return state.advance(ErrorKind.TIMEOUT)
    if isinstance(outcome, SessionExpired):
        logger.error(f"The {description} could not be loaded: session expired.")
    else:
        logger.error(f"The {description} could not be loaded: {outcome.error}.")
    raise outcome.error


def _give_up(state: RetryState, description: str, after_all_retries: AfterAllRetries | None) -> None:
    """Log the give-up and notify the caller."""
    logger.error(
        f"Giving up loading the {description} after {state.retry_limit} retries "
        f"(last error: {state.last_error.name})."
    )
    if after_all_retries is not None:
        after_all_retries()


def _announce(state: RetryState, description: str, before_retry: BeforeRetry | None) -> None:
    """Tell the caller a retry is about to be dispatched."""
    logger.debug(
        f"Retrying {description} ({state.try_count}/{state.retry_limit}, "
        f"{state.last_error.name})"
    )
    if before_retry is not None:
        before_retry(state.try_count, state.retry_limit, state.last_error)


def _succeed(outcome: Success, on_success: OnSuccess | None) -> Any:
    """Hand the result of a successful attempt to the caller."""
    if on_success is not None:
        on_success(outcome.body)
    return outcome.body


def fetch_with_retry(
    attempt: Callable[[], Outcome],
    on_success: OnSuccess | None = None,
    before_retry: BeforeRetry | None = None,
    after_all_retries: AfterAllRetries | None = None,
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
    sleep: Callable[[float], None] = time.sleep,
    description: str = "resource",
) -> Any:
    """Run ``attempt`` until it succeeds or the retry limit is exhausted.

    Args:
        attempt: Issues one request and returns its classified outcome.
        on_success: Called once with the result of the successful attempt.
        before_retry: Called before each retry with
            (attempt_number, retry_limit, error_kind).
        after_all_retries: Called once if every retry failed.
        policy: Retry limit and delays.
        sleep: Blocking sleep used for the retry delay.
        description: What is being fetched, for log messages.

    Returns:
        The result of the successful attempt, or None if the retries were
        exhausted.

    Raises:
        SessionExpiredError: If the session no longer exists.
        PTClientError: For any other non-retryable failure.
    """
    state = RetryState(retry_limit=policy.retry_limit)
    while True:
        outcome = attempt()
        if isinstance(outcome, Success):
            return _succeed(outcome, on_success)
        state = _advance(state, outcome, description)
        if state.exhausted:
            _give_up(state, description, after_all_retries)
            return None
        _announce(state, description, before_retry)
        delay = policy.delay_for(state.last_error)
        if delay > 0:
            sleep(delay)


async def async_fetch_with_retry(
    attempt: Callable[[], Awaitable[Outcome]],
    on_success: OnSuccess | None = None,
    before_retry: BeforeRetry | None = None,
    after_all_retries: AfterAllRetries | None = None,
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    description: str = "resource",
) -> Any:
    """Awaitable counterpart of fetch_with_retry.

    Callbacks are plain callables; only ``attempt`` and ``sleep`` are awaited.
    """
    state = RetryState(retry_limit=policy.retry_limit)
    while True:
        outcome = await attempt()
        if isinstance(outcome, Success):
            return _succeed(outcome, on_success)
        state = _advance(state, outcome, description)
        if state.exhausted:
            _give_up(state, description, after_all_retries)
            return None
        _announce(state, description, before_retry)
        delay = policy.delay_for(state.last_error)
        if delay > 0:
            await sleep(delay)
