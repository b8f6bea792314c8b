"""Exception hierarchy for the PacketTracer Anywhere client.

This module defines all exceptions that can be raised by the client library.
The hierarchy separates the failures the topology fetch knows how to recover
from (service unavailable, timeout) from those it escalates (session expired)
and those it only reports (everything else).

Exception Hierarchy:
    PTClientError (base)
    ├── ConnectionError - Network/connection failures
    ├── TimeoutError - Request deadline exceeded
    ├── InvalidResponseError - Successful response with an unusable body
    └── APIError - Server returned an error response
        ├── SessionExpiredError - The session no longer exists
        │   ├── NotFoundError (HTTP 404)
        │   └── GoneError (HTTP 410)
        └── ServerError (HTTP 5xx)
            └── ServiceUnavailableError (HTTP 503)

Example:
    Reacting to an expired session::

        try:
            session.add_device(device)
        except SessionExpiredError:
            session_url = client.sessions.create(api_url, file_url)
"""

from typing import Any


class PTClientError(Exception):
    """Base exception for all client errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message


class ConnectionError(PTClientError):
    """Failed to connect to the PacketTracer Anywhere server.

    Attributes:
        message: Human-readable error description.
        url: The URL that failed to connect.
        cause: The underlying exception that caused the connection failure.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            url: The URL that failed to connect.
            cause: The underlying exception.
        """
        self.url = url
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including URL if available."""
        if self.url:
            return f"{self.message} (url: {self.url})"
        return self.message


class TimeoutError(PTClientError):
    """Request did not complete within its deadline.

    The topology fetch retries these immediately; every other operation
    reports them to the caller.

    Attributes:
        message: Human-readable error description.
        timeout: The deadline in seconds.
        url: The URL that timed out.
    """

    def __init__(
        self,
        message: str,
        timeout: float | None = None,
        url: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            timeout: The deadline in seconds.
            url: The URL that timed out.
        """
        self.timeout = timeout
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including timeout if available."""
        parts = []
        if self.timeout is not None:
            parts.append(f"timeout: {self.timeout}s")
        if self.url:
            parts.append(f"url: {self.url}")
        if not parts:
            return self.message
        return f"{self.message} ({', '.join(parts)})"


class InvalidResponseError(PTClientError):
    """The server answered with success, but the body is unusable.

    Raised when a 2xx body is not JSON (a proxy error page, for instance)
    or does not have the shape of the expected resource. Never retried.

    Attributes:
        message: Human-readable error description.
        url: The URL that answered.
        status_code: HTTP status code of the response, if known.
        response_body: The raw text or decoded JSON that was rejected.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        response_body: Any = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            url: The URL that answered.
            status_code: HTTP status code of the response.
            response_body: The rejected body.
        """
        self.url = url
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including URL if available."""
        if self.url:
            return f"{self.message} (url: {self.url})"
        return self.message


class APIError(PTClientError):
    """Server returned an error response.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code from the server.
        error_type: Error type/code from the response body (if available).
        details: Additional error details from the response (if available).
        response_body: Raw response body for debugging.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_type: str | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code from the server.
            error_type: Error type/code from the response body.
            details: Additional error details.
            response_body: Raw response body.
        """
        self.status_code = status_code
        self.error_type = error_type
        self.details = details
        self.response_body = response_body
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including status code."""
        if self.error_type:
            return f"[HTTP {self.status_code}] [{self.error_type}] {self.message}"
        return f"[HTTP {self.status_code}] {self.message}"


class SessionExpiredError(APIError):
    """The session is unknown to the server.

    The server answers 404 or 410 for resources of a session that has
    expired or was destroyed. Both are treated identically: the session
    client fires its expiry callback and nothing is retried.
    """


class NotFoundError(SessionExpiredError):
    """Resource not found (HTTP 404)."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        """Initialize the exception with status code 404."""
        super().__init__(
            message=message,
            status_code=404,
            error_type="not_found",
            details=details,
            response_body=response_body,
        )


class GoneError(SessionExpiredError):
    """Resource no longer exists (HTTP 410)."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        """Initialize the exception with status code 410."""
        super().__init__(
            message=message,
            status_code=410,
            error_type="gone",
            details=details,
            response_body=response_body,
        )


class ServerError(APIError):
    """Server-side error (HTTP 5xx).

    Not retried, with the exception of ServiceUnavailableError during
    a topology fetch.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code (5xx).
            details: Additional error details.
            response_body: Raw response body.
        """
        super().__init__(
            message=message,
            status_code=status_code,
            error_type="server_error",
            details=details,
            response_body=response_body,
        )


class ServiceUnavailableError(ServerError):
    """The service is temporarily unavailable (HTTP 503).

    PacketTracer Anywhere answers 503 while no PacketTracer instance is
    ready to serve the session yet.
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        """Initialize the exception with status code 503."""
        super().__init__(
            message=message,
            status_code=503,
            details=details,
            response_body=response_body,
        )
