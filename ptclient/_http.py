"""Internal HTTP handling utilities for the PacketTracer Anywhere client.

This module provides the transport primitive used by every sub-client. It
handles:
- Merging request settings (operation > client default > primitive default)
- Making HTTP requests against absolute resource URLs (sync and async)
- Response decoding and mapping error statuses to exceptions

Resource URLs handed out by the API are absolute (a device carries its own
URL), so the HTTP clients have no base URL of their own.

This is an internal module and should not be imported directly by users.
"""

from typing import Any, Literal

import httpx
from pydantic import BaseModel, ConfigDict, Field

from ptclient.exceptions import (
    APIError,
    ConnectionError,
    GoneError,
    InvalidResponseError,
    NotFoundError,
    ServerError,
    ServiceUnavailableError,
    TimeoutError,
)


# HTTP methods used by the API
HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]

# Deadline applied when neither the client nor the operation sets one
DEFAULT_TIMEOUT = 2.0  # seconds


class RequestSettings(BaseModel):
    """Overridable settings for a single request.

    A field left as None (or an empty header mapping) falls through to the
    settings it is merged over.

    Attributes:
        timeout: Request deadline in seconds.
        headers: Extra HTTP headers; merged key by key.
    """

    model_config = ConfigDict(frozen=True)

    timeout: float | None = None
    headers: dict[str, str] = Field(default_factory=dict)

    def merged(self, override: "RequestSettings | None") -> "RequestSettings":
        """Return these settings with ``override`` applied on top.

        Args:
            override: More specific settings, or None to keep these as-is.

        Returns:
            A new settings object; neither input is modified.
        """
        if override is None:
            return self
        return RequestSettings(
            timeout=override.timeout if override.timeout is not None else self.timeout,
            headers={**self.headers, **override.headers},
        )


DEFAULT_SETTINGS = RequestSettings(
    timeout=DEFAULT_TIMEOUT,
    headers={"Accept": "application/json"},
)


def _parse_error_response(response: httpx.Response) -> tuple[str, str | None, dict | None]:
    """Parse an error response to extract message, type, and details.

    The server answers errors either with a small JSON object or with a
    plain text/HTML page, depending on which layer produced the error.

    Args:
        response: The HTTP response to parse.

    Returns:
        A tuple of (message, error_type, details).
    """
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        if text:
            return text, None, None
        return f"HTTP {response.status_code} error", None, None

    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if isinstance(value, str):
                return value, body.get("type"), body.get("details")
    elif isinstance(body, str) and body:
        return body, None, None

    return str(body), None, None


def _raise_for_status(response: httpx.Response) -> None:
    """Raise an appropriate exception for error status codes.

    Args:
        response: The HTTP response to check.

    Raises:
        NotFoundError: For HTTP 404 responses.
        GoneError: For HTTP 410 responses.
        ServiceUnavailableError: For HTTP 503 responses.
        ServerError: For other HTTP 5xx responses.
        APIError: For other HTTP 4xx responses.
    """
    if response.is_success:
        return

    message, error_type, details = _parse_error_response(response)
    status_code = response.status_code

    try:
        response_body = response.json()
    except ValueError:
        response_body = response.text

    if status_code == 404:
        raise NotFoundError(message=message, details=details, response_body=response_body)
    elif status_code == 410:
        raise GoneError(message=message, details=details, response_body=response_body)
    elif status_code == 503:
        raise ServiceUnavailableError(
            message=message,
            details=details,
            response_body=response_body,
        )
    elif status_code >= 500:
        raise ServerError(
            message=message,
            status_code=status_code,
            details=details,
            response_body=response_body,
        )
    else:
        raise APIError(
            message=message,
            status_code=status_code,
            error_type=error_type,
            details=details,
            response_body=response_body,
        )


def _build_headers(settings: RequestSettings, json: Any) -> dict[str, str]:
    """Build the headers of a request from its effective settings."""
    headers = dict(settings.headers)
    if json is not None:
        headers.setdefault("Content-Type", "application/json")
    return headers


def _decode(response: httpx.Response) -> Any:
    """Return the decoded JSON body of a response, or None if it is empty.

    Raises:
        APIError: For error statuses (see _raise_for_status).
        InvalidResponseError: If a successful response is not JSON.
    """
    _raise_for_status(response)
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as e:
        raise InvalidResponseError(
            message=f"HTTP {response.status_code} response is not valid JSON",
            url=str(response.request.url),
            status_code=response.status_code,
            response_body=response.text,
        ) from e


class HTTPClient:
    """Synchronous HTTP client for making API requests.

    Wraps httpx.Client with settings merging and error mapping. It never
    retries; retrying is the business of the topology fetch alone.

    Attributes:
        timeout: Default request deadline in seconds.
        settings: Client-wide default settings.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            timeout: Default request deadline in seconds.
            transport: Custom transport (e.g., MockTransport for testing).
        """
        self.timeout = timeout
        self.settings = DEFAULT_SETTINGS.merged(RequestSettings(timeout=timeout))
        self._client = httpx.Client(transport=transport)

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> "HTTPClient":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager and close client."""
        self.close()

    def request(
        self,
        method: HttpMethod,
        url: str,
        json: Any = None,
        settings: RequestSettings | None = None,
    ) -> Any:
        """Make an HTTP request and return the decoded JSON response.

        Args:
            method: The HTTP method.
            url: Absolute resource URL.
            json: JSON-serializable payload, or None for no body.
            settings: Operation-specific settings merged over the client's.

        Returns:
            The decoded JSON body, or None for empty responses.

        Raises:
            ConnectionError: If the connection fails.
            TimeoutError: If the deadline is exceeded.
            APIError: If the server returns an error response.
            InvalidResponseError: If a successful response is not JSON.
        """
        effective = self.settings.merged(settings)
        try:
            response = self._client.request(
                method=method,
                url=url,
                json=json,
                headers=_build_headers(effective, json),
                timeout=effective.timeout,
            )
        except httpx.TimeoutException as e:
            raise TimeoutError(
                message=f"Request to {url} timed out",
                timeout=effective.timeout,
                url=url,
            ) from e
        except httpx.TransportError as e:
            raise ConnectionError(
                message=f"Failed to connect to {url}",
                url=url,
                cause=e,
            ) from e
        return _decode(response)


class AsyncHTTPClient:
    """Asynchronous HTTP client for making API requests.

    The awaitable counterpart of HTTPClient, wrapping httpx.AsyncClient.

    Attributes:
        timeout: Default request deadline in seconds.
        settings: Client-wide default settings.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the async HTTP client.

        Args:
            timeout: Default request deadline in seconds.
            transport: Custom transport (e.g., MockTransport for testing).
        """
        self.timeout = timeout
        self.settings = DEFAULT_SETTINGS.merged(RequestSettings(timeout=timeout))
        self._client = httpx.AsyncClient(transport=transport)

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPClient":
        """Enter async context manager."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager and close client."""
        await self.close()

    async def request(
        self,
        method: HttpMethod,
        url: str,
        json: Any = None,
        settings: RequestSettings | None = None,
    ) -> Any:
        """Make an async HTTP request and return the decoded JSON response.

        Args:
            method: The HTTP method.
            url: Absolute resource URL.
            json: JSON-serializable payload, or None for no body.
            settings: Operation-specific settings merged over the client's.

        Returns:
            The decoded JSON body, or None for empty responses.

        Raises:
            ConnectionError: If the connection fails.
            TimeoutError: If the deadline is exceeded.
            APIError: If the server returns an error response.
            InvalidResponseError: If a successful response is not JSON.
        """
        effective = self.settings.merged(settings)
        try:
            response = await self._client.request(
                method=method,
                url=url,
                json=json,
                headers=_build_headers(effective, json),
                timeout=effective.timeout,
            )
        except httpx.TimeoutException as e:
            raise TimeoutError(
                message=f"Request to {url} timed out",
                timeout=effective.timeout,
                url=url,
            ) from e
        except httpx.TransportError as e:
            raise ConnectionError(
                message=f"Failed to connect to {url}",
                url=url,
                cause=e,
            ) from e
        return _decode(response)
