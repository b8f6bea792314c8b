"""Classification of request outcomes.

Every request a session client issues ends in exactly one of these variants.
The classification is done once per response, in one place, so that session
expiry detection and the topology retry loop read the same answer.

This is an internal module and should not be imported directly by users.
"""

from dataclasses import dataclass
from typing import Any, Union

from ptclient.exceptions import (
    APIError,
    PTClientError,
    ServiceUnavailableError,
    SessionExpiredError,
    TimeoutError,
)


@dataclass(frozen=True)
class _Failure:
    error: PTClientError

    @property
    def status_code(self) -> int | None:
        if isinstance(self.error, APIError):
            return self.error.status_code
        return None


@dataclass(frozen=True)
class Success:
    """The request completed; ``body`` is the decoded JSON (None if empty)."""

    body: Any


@dataclass(frozen=True)
class ServiceUnavailable(_Failure):
    """The server reported itself temporarily unavailable (503)."""


@dataclass(frozen=True)
class Timeout(_Failure):
    """The request did not complete within its deadline."""


@dataclass(frozen=True)
class SessionExpired(_Failure):
    """The server no longer knows the session (404 or 410)."""


@dataclass(frozen=True)
class Other(_Failure):
    """Any other failure: not retried, only reported."""


Outcome = Union[Success, ServiceUnavailable, Timeout, SessionExpired, Other]


def classify_error(error: PTClientError) -> Outcome:
    """Map a client error raised by the transport to its outcome variant."""
    if isinstance(error, ServiceUnavailableError):
        return ServiceUnavailable(error)
    if isinstance(error, TimeoutError):
        return Timeout(error)
    if isinstance(error, SessionExpiredError):
        return SessionExpired(error)
    return Other(error)


def unwrap(outcome: Outcome) -> Any:
    """Return the body of a successful outcome or raise its error."""
    if isinstance(outcome, Success):
        return outcome.body
    raise outcome.error
