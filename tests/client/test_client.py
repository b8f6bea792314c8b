"""Unit tests for PTAnywhereClient and AsyncPTAnywhereClient."""

import ptclient
from ptclient import (
    DEFAULT_RETRY_POLICY,
    AsyncPTAnywhereClient,
    AsyncSessionClient,
    AsyncSessionsClient,
    ErrorKind,
    PTAnywhereClient,
    RequestSettings,
    RetryPolicy,
    SessionClient,
    SessionsClient,
)
from tests.fixtures.transport import SESSION_URL


class TestPTAnywhereClient:
    """Tests for the synchronous root client."""

    def test_defaults(self) -> None:
        with PTAnywhereClient() as client:
            assert client.timeout == 2.0
            assert client.retry_policy is DEFAULT_RETRY_POLICY

    def test_sessions_is_cached(self) -> None:
        with PTAnywhereClient() as client:
            assert isinstance(client.sessions, SessionsClient)
            assert client.sessions is client.sessions

    def test_session_is_bound_to_url_and_policy(self) -> None:
        policy = RetryPolicy(retry_limit=3)
        with PTAnywhereClient(retry_policy=policy) as client:
            session = client.session(f"{SESSION_URL}/", on_session_expired=lambda: None)

            assert isinstance(session, SessionClient)
            assert session.session_url == SESSION_URL
            assert session.retry_policy is policy

    def test_session_settings(self) -> None:
        settings = RequestSettings(timeout=5.0)
        with PTAnywhereClient() as client:
            session = client.session(SESSION_URL, lambda: None, settings=settings)
            assert session._settings is settings

    def test_sessions_share_the_http_client(self) -> None:
        with PTAnywhereClient() as client:
            first = client.session(SESSION_URL, lambda: None)
            second = client.session(SESSION_URL, lambda: None)
            assert first._http is second._http is client.sessions._http


class TestAsyncPTAnywhereClient:
    """Tests for the asynchronous root client."""

    async def test_context_manager(self) -> None:
        async with AsyncPTAnywhereClient(timeout=4.0) as client:
            assert client.timeout == 4.0
            assert isinstance(client.sessions, AsyncSessionsClient)
            session = client.session(SESSION_URL, on_session_expired=lambda: None)
            assert isinstance(session, AsyncSessionClient)


class TestPublicConstants:
    """The error kind constants are exported at package level."""

    def test_error_kind_constants(self) -> None:
        assert ptclient.UNAVAILABLE is ErrorKind.UNAVAILABLE
        assert ptclient.TIMEOUT is ErrorKind.TIMEOUT
        assert ptclient.UNAVAILABLE != ptclient.TIMEOUT
