"""Base class for all sub-clients.

This module provides the base classes that the sessions and session
sub-clients inherit from. Every request goes through ``_dispatch``, which
merges the sub-client's default settings, decodes the body into the
expected model, classifies the outcome once and, for sub-clients bound to a
session, reports session expiry to the registered callback.

This is an internal module and should not be imported directly by users.
"""

import logging
from typing import TYPE_CHECKING, Any, Callable

import pydantic

from ptclient._http import HttpMethod, RequestSettings
from ptclient._outcome import Outcome, SessionExpired, Success, classify_error, unwrap
from ptclient.exceptions import InvalidResponseError, PTClientError

if TYPE_CHECKING:
    from ptclient._http import AsyncHTTPClient, HTTPClient

logger = logging.getLogger(__name__)

# Converts a decoded JSON body into the value an operation returns
Decoder = Callable[[Any], Any]


def _decode_body(url: str, body: Any, decode: Decoder | None) -> Any:
    """Apply ``decode`` to a response body.

    Raises:
        InvalidResponseError: If the body does not fit the expected model.
    """
    if decode is None:
        return body
    try:
        return decode(body)
    except pydantic.ValidationError as e:
        raise InvalidResponseError(
            message=f"Unexpected {e.title} in response: {e.error_count()} invalid field(s)",
            url=url,
            response_body=body,
        ) from e


class _ClientCore:
    """State and outcome handling shared by the sync and async bases."""

    def __init__(
        self,
        http_client: Any,
        settings: RequestSettings | None = None,
        on_session_expired: Callable[[], None] | None = None,
    ) -> None:
        """Store the HTTP client, default settings and expiry callback."""
        self._http = http_client
        self._settings = settings if settings is not None else RequestSettings()
        self._on_session_expired = on_session_expired

    def _classify(self, url: str, error: PTClientError) -> Outcome:
        """Classify a failed request, reporting session expiry."""
        outcome = classify_error(error)
        if isinstance(outcome, SessionExpired) and self._on_session_expired is not None:
            logger.warning(f"Session expired (HTTP {outcome.status_code} for {url})")
            self._on_session_expired()
        return outcome

    @staticmethod
    def _finish(outcome: Outcome, failure_message: str | None) -> Any:
        """Return the outcome's body, logging ``failure_message`` on failure."""
        if not isinstance(outcome, Success) and failure_message:
            logger.error(failure_message)
        return unwrap(outcome)


class BaseClient(_ClientCore):
    """Base class for synchronous sub-clients.

    Attributes:
        _http: The shared HTTP client for making requests.
        _settings: Default settings merged into every request.
        _on_session_expired: Called when the server no longer knows the
            session, or None for sub-clients not bound to a session.
    """

    def __init__(
        self,
        http_client: "HTTPClient",
        settings: RequestSettings | None = None,
        on_session_expired: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the sub-client.

        Args:
            http_client: The shared HTTP client instance.
            settings: Default settings for this sub-client's requests.
            on_session_expired: Session expiry callback.
        """
        super().__init__(http_client, settings, on_session_expired)

    def _dispatch(
        self,
        method: HttpMethod,
        url: str,
        json: Any = None,
        settings: RequestSettings | None = None,
        decode: Decoder | None = None,
    ) -> Outcome:
        """Issue one request and classify its outcome.

        Args:
            method: The HTTP method.
            url: Absolute resource URL.
            json: JSON payload, or None for no body.
            settings: Operation-specific settings; they win over the
                sub-client's defaults.
            decode: Converts the decoded JSON body into the result. A body
                it rejects is a failed request.

        Returns:
            The classified outcome. Errors are returned, not raised.
        """
        try:
            body = self._http.request(
                method,
                url,
                json=json,
                settings=self._settings.merged(settings),
            )
            result = _decode_body(url, body, decode)
        except PTClientError as e:
            return self._classify(url, e)
        return Success(result)

    def _request(
        self,
        method: HttpMethod,
        url: str,
        json: Any = None,
        settings: RequestSettings | None = None,
        decode: Decoder | None = None,
        failure_message: str | None = None,
    ) -> Any:
        """Issue one request, logging ``failure_message`` if it fails.

        Returns:
            The decoded result.

        Raises:
            PTClientError: The failure reported by the transport, or an
                InvalidResponseError if the body could not be decoded.
        """
        outcome = self._dispatch(method, url, json=json, settings=settings, decode=decode)
        return self._finish(outcome, failure_message)


class AsyncBaseClient(_ClientCore):
    """Base class for asynchronous sub-clients.

    Attributes:
        _http: The shared async HTTP client for making requests.
        _settings: Default settings merged into every request.
        _on_session_expired: Called when the server no longer knows the
            session, or None for sub-clients not bound to a session.
    """

    def __init__(
        self,
        http_client: "AsyncHTTPClient",
        settings: RequestSettings | None = None,
        on_session_expired: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the async sub-client.

        Args:
            http_client: The shared async HTTP client instance.
            settings: Default settings for this sub-client's requests.
            on_session_expired: Session expiry callback.
        """
        super().__init__(http_client, settings, on_session_expired)

    async def _dispatch(
        self,
        method: HttpMethod,
        url: str,
        json: Any = None,
        settings: RequestSettings | None = None,
        decode: Decoder | None = None,
    ) -> Outcome:
        """Issue one async request and classify its outcome."""
        try:
            body = await self._http.request(
                method,
                url,
                json=json,
                settings=self._settings.merged(settings),
            )
            result = _decode_body(url, body, decode)
        except PTClientError as e:
            return self._classify(url, e)
        return Success(result)

    async def _request(
        self,
        method: HttpMethod,
        url: str,
        json: Any = None,
        settings: RequestSettings | None = None,
        decode: Decoder | None = None,
        failure_message: str | None = None,
    ) -> Any:
        """Issue one async request, logging ``failure_message`` if it fails."""
        outcome = await self._dispatch(method, url, json=json, settings=settings, decode=decode)
        return self._finish(outcome, failure_message)
