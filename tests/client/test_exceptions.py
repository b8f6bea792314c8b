"""Unit tests for the client exception hierarchy.

The exception hierarchy being tested:
    PTClientError (base)
    ├── ConnectionError - Network/connection failures
    ├── TimeoutError - Request deadline exceeded
    ├── InvalidResponseError - Successful response with an unusable body
    └── APIError - Server returned an error response
        ├── SessionExpiredError
        │   ├── NotFoundError (HTTP 404)
        │   └── GoneError (HTTP 410)
        └── ServerError (HTTP 5xx)
            └── ServiceUnavailableError (HTTP 503)
"""

import builtins

import pytest

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


# =============================================================================
# PTClientError Tests (Base Exception)
# =============================================================================

class TestPTClientError:
    """Tests for the base PTClientError exception class."""

    def test_instantiation_with_message(self) -> None:
        error = PTClientError("Something went wrong")
        assert error.message == "Something went wrong"
        assert str(error) == "Something went wrong"

    def test_inherits_from_exception(self) -> None:
        assert isinstance(PTClientError("Test"), Exception)

    @pytest.mark.parametrize(
        "error",
        [
            ConnectionError("refused"),
            TimeoutError("slow"),
            InvalidResponseError("not json"),
            APIError("bad", status_code=400),
            NotFoundError("missing"),
            GoneError("gone"),
            ServerError("boom"),
            ServiceUnavailableError("busy"),
        ],
    )
    def test_all_errors_are_client_errors(self, error) -> None:
        """A single except clause catches every client error."""
        assert isinstance(error, PTClientError)

    def test_does_not_shadow_builtins(self) -> None:
        """The client's TimeoutError and ConnectionError are its own."""
        assert not isinstance(TimeoutError("slow"), builtins.TimeoutError)
        assert not isinstance(ConnectionError("refused"), builtins.ConnectionError)


# =============================================================================
# Transport Error Tests
# =============================================================================

class TestConnectionError:
    """Tests for ConnectionError."""

    def test_str_includes_url(self) -> None:
        error = ConnectionError("Failed to connect", url="http://localhost:8080")
        assert str(error) == "Failed to connect (url: http://localhost:8080)"

    def test_str_without_url(self) -> None:
        assert str(ConnectionError("Failed to connect")) == "Failed to connect"

    def test_cause_is_kept(self) -> None:
        cause = OSError("refused")
        assert ConnectionError("Failed", cause=cause).cause is cause


class TestTimeoutError:
    """Tests for TimeoutError."""

    def test_str_includes_timeout_and_url(self) -> None:
        error = TimeoutError("Request timed out", timeout=2.0, url="http://h/network")
        assert str(error) == "Request timed out (timeout: 2.0s, url: http://h/network)"

    def test_str_with_message_only(self) -> None:
        assert str(TimeoutError("Request timed out")) == "Request timed out"


class TestInvalidResponseError:
    """Tests for InvalidResponseError."""

    def test_attributes(self) -> None:
        error = InvalidResponseError(
            "HTTP 200 response is not valid JSON",
            url="http://h/network",
            status_code=200,
            response_body="<html></html>",
        )
        assert error.status_code == 200
        assert error.response_body == "<html></html>"
        assert str(error) == "HTTP 200 response is not valid JSON (url: http://h/network)"

    def test_is_not_an_api_error(self) -> None:
        """A successful status with a bad body is not an error status."""
        assert not isinstance(InvalidResponseError("bad body"), APIError)
        assert InvalidResponseError("bad body").status_code is None


# =============================================================================
# API Error Tests
# =============================================================================

class TestAPIError:
    """Tests for APIError and its subclasses."""

    def test_str_includes_status(self) -> None:
        assert str(APIError("Bad request", status_code=400)) == "[HTTP 400] Bad request"

    def test_str_includes_error_type(self) -> None:
        error = APIError("Bad request", status_code=400, error_type="bad_request")
        assert str(error) == "[HTTP 400] [bad_request] Bad request"

    def test_not_found(self) -> None:
        error = NotFoundError("No such session")
        assert error.status_code == 404
        assert error.error_type == "not_found"
        assert isinstance(error, SessionExpiredError)

    def test_gone(self) -> None:
        error = GoneError("Session expired", response_body="Session expired")
        assert error.status_code == 410
        assert error.error_type == "gone"
        assert error.response_body == "Session expired"
        assert isinstance(error, SessionExpiredError)

    def test_server_error_default_status(self) -> None:
        assert ServerError("boom").status_code == 500

    def test_service_unavailable(self) -> None:
        error = ServiceUnavailableError("No instance available")
        assert error.status_code == 503
        assert error.error_type == "server_error"
        assert isinstance(error, ServerError)
        assert not isinstance(error, SessionExpiredError)

    def test_catching_session_expired(self) -> None:
        """Both 404 and 410 are caught as SessionExpiredError."""
        for error in (NotFoundError("missing"), GoneError("gone")):
            with pytest.raises(SessionExpiredError):
                raise error
