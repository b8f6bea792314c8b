"""PacketTracer Anywhere API Client Library.

This module provides a Python client for the session-scoped topology editing
API of PacketTracer Anywhere. It supports both synchronous and asynchronous
usage patterns.

Example:
    Synchronous usage::

        from ptclient import ErrorKind, PTAnywhereClient

        def show_progress(attempt, limit, kind):
            reason = "unavailable" if kind == ErrorKind.UNAVAILABLE else "timeout"
            print(f"Retry {attempt}/{limit} ({reason})")

        with PTAnywhereClient() as client:
            session_url = client.sessions.create(api_url, file_url)
            session = client.session(session_url, on_session_expired=restart)
            network = session.get_network(
                before_retry=show_progress,
                after_all_retries=lambda: print("The topology could not be loaded"),
            )

Exports:
    PTAnywhereClient: Synchronous client.
    AsyncPTAnywhereClient: Asynchronous client.
    ErrorKind: Why a topology fetch attempt failed (UNAVAILABLE or TIMEOUT).

    Exceptions:
        PTClientError: Base exception for all client errors.
        ConnectionError: Failed to connect to the server.
        TimeoutError: Request deadline exceeded.
        InvalidResponseError: Successful response with an unusable body.
        APIError: Server returned an error response.
        SessionExpiredError: The session no longer exists (HTTP 404/410).
        ServerError: Server-side error (HTTP 5xx).
        ServiceUnavailableError: Service temporarily unavailable (HTTP 503).
"""

from ptclient._http import DEFAULT_SETTINGS, RequestSettings
from ptclient._retry import DEFAULT_RETRY_POLICY, ErrorKind, RetryPolicy, RetryState
from ptclient._session import AsyncSessionClient, SessionClient
from ptclient._sessions import AsyncSessionsClient, SessionsClient
from ptclient.exceptions import (
    APIError,
    ConnectionError,
    GoneError,
    InvalidResponseError,
    NotFoundError,
    PTClientError,
    ServerError,
    ServiceUnavailableError,
    SessionExpiredError,
    TimeoutError,
)
from ptclient.models import Device, Edge, Link, Network, Port
from ptclient.client import AsyncPTAnywhereClient, PTAnywhereClient

# Kept at module level for callers comparing the error kind to constants
UNAVAILABLE = ErrorKind.UNAVAILABLE
TIMEOUT = ErrorKind.TIMEOUT

__all__ = [
    # Main clients
    "PTAnywhereClient",
    "AsyncPTAnywhereClient",
    # Sub-clients
    "SessionClient",
    "AsyncSessionClient",
    "SessionsClient",
    "AsyncSessionsClient",
    # Retry
    "ErrorKind",
    "RetryPolicy",
    "RetryState",
    "DEFAULT_RETRY_POLICY",
    "UNAVAILABLE",
    "TIMEOUT",
    # Settings
    "RequestSettings",
    "DEFAULT_SETTINGS",
    # Exceptions
    "PTClientError",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "SessionExpiredError",
    "NotFoundError",
    "GoneError",
    "InvalidResponseError",
    "ServerError",
    "ServiceUnavailableError",
    # Models
    "Device",
    "Port",
    "Link",
    "Edge",
    "Network",
]
