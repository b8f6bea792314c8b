"""Main PacketTracer Anywhere client classes.

This module provides the main entry points for interacting with the API:
- PTAnywhereClient: Synchronous client
- AsyncPTAnywhereClient: Asynchronous client

Both own the HTTP connection pool, expose the ``sessions`` sub-client for
creating and destroying sessions, and open session clients bound to a
session URL.

Example:
    Synchronous usage::

        from ptclient import PTAnywhereClient

        with PTAnywhereClient() as client:
            session_url = client.sessions.create(
                "http://localhost:8080/api/v1",
                "http://localhost:8080/files/initial.pkt",
            )
            session = client.session(session_url, on_session_expired=print)
            network = session.get_network()
            client.sessions.destroy(session_url)

    Asynchronous usage::

        from ptclient import AsyncPTAnywhereClient

        async with AsyncPTAnywhereClient() as client:
            session = client.session(session_url, on_session_expired=print)
            network = await session.get_network()
"""

from typing import Any, Callable

from ptclient._http import DEFAULT_TIMEOUT, AsyncHTTPClient, HTTPClient, RequestSettings
from ptclient._retry import DEFAULT_RETRY_POLICY, RetryPolicy
from ptclient._session import AsyncSessionClient, SessionClient
from ptclient._sessions import AsyncSessionsClient, SessionsClient


class PTAnywhereClient:
    """Synchronous client for the PacketTracer Anywhere API.

    Attributes:
        timeout: Default request deadline in seconds.
        retry_policy: Retry policy given to the session clients it opens.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY,
        transport: Any = None,
    ) -> None:
        """Initialize the client.

        Args:
            timeout: Default request deadline in seconds (default: 2.0).
            retry_policy: Retry policy of the topology fetch (default: five
                retries, 2 seconds apart after a 503).
            transport: Custom HTTP transport (e.g., MockTransport for testing).
        """
        self.timeout = timeout
        self.retry_policy = retry_policy
        self._http = HTTPClient(timeout=timeout, transport=transport)
        self._sessions: SessionsClient | None = None

    def __enter__(self) -> "PTAnywhereClient":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager and close the client."""
        self.close()

    def close(self) -> None:
        """Close the client and release resources."""
        self._http.close()

    @property
    def sessions(self) -> SessionsClient:
        """Access session creation and destruction."""
        if self._sessions is None:
            self._sessions = SessionsClient(self._http)
        return self._sessions

    def session(
        self,
        session_url: str,
        on_session_expired: Callable[[], None],
        settings: RequestSettings | None = None,
    ) -> SessionClient:
        """Open a client for the resources of a session.

        Args:
            session_url: URL of the session, as returned by sessions.create.
            on_session_expired: Called whenever the server answers that the
                session no longer exists.
            settings: Default settings for the session's requests.

        Returns:
            SessionClient bound to the session.
        """
        return SessionClient(
            self._http,
            session_url,
            on_session_expired,
            retry_policy=self.retry_policy,
            settings=settings,
        )


class AsyncPTAnywhereClient:
    """Asynchronous client for the PacketTracer Anywhere API.

    Attributes:
        timeout: Default request deadline in seconds.
        retry_policy: Retry policy given to the session clients it opens.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY,
        transport: Any = None,
    ) -> None:
        """Initialize the async client.

        Args:
            timeout: Default request deadline in seconds (default: 2.0).
            retry_policy: Retry policy of the topology fetch.
            transport: Custom HTTP transport (e.g., MockTransport for testing).
        """
        self.timeout = timeout
        self.retry_policy = retry_policy
        self._http = AsyncHTTPClient(timeout=timeout, transport=transport)
        self._sessions: AsyncSessionsClient | None = None

    async def __aenter__(self) -> "AsyncPTAnywhereClient":
        """Enter async context manager."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager and close the client."""
        await self.close()

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._http.close()

    @property
    def sessions(self) -> AsyncSessionsClient:
        """Access session creation and destruction."""
        if self._sessions is None:
            self._sessions = AsyncSessionsClient(self._http)
        return self._sessions

    def session(
        self,
        session_url: str,
        on_session_expired: Callable[[], None],
        settings: RequestSettings | None = None,
    ) -> AsyncSessionClient:
        """Open an async client for the resources of a session.

        See PTAnywhereClient.session.
        """
        return AsyncSessionClient(
            self._http,
            session_url,
            on_session_expired,
            retry_policy=self.retry_policy,
            settings=settings,
        )
