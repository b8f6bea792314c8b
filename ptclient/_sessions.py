"""Sessions sub-client for the PacketTracer Anywhere API.

This module provides SessionsClient and AsyncSessionsClient for creating and
destroying editing sessions (/sessions).

This is an internal module. Import from `ptclient` instead.
"""

from typing import Callable

from ptclient._base import AsyncBaseClient, BaseClient
from ptclient._http import RequestSettings
from ptclient.models import NewSessionRequest

# Allocating a PacketTracer instance for a session takes longer than a
# regular request.
SESSION_CREATION_SETTINGS = RequestSettings(timeout=10.0)


def _sessions_url(api_url: str) -> str:
    """Return the URL of the sessions collection."""
    return f"{api_url.rstrip('/')}/sessions"


def _new_session(file_to_open: str, previous_session_id: str | None) -> dict[str, str]:
    """Build the body of a session creation request."""
    return NewSessionRequest(
        file_url=file_to_open,
        same_user_as_in_session=previous_session_id,
    ).to_payload()


class SessionsClient(BaseClient):
    """Synchronous client for session lifecycle endpoints."""

    def create(
        self,
        api_url: str,
        file_to_open: str,
        previous_session_id: str | None = None,
        on_success: Callable[[str], None] | None = None,
    ) -> str:
        """Create a new session.

        Args:
            api_url: Base URL of the HTTP API.
            file_to_open: URL of the file opened when the session starts.
            previous_session_id: Id of a session previously used by the same
                user, or None if unknown.
            on_success: Called with the URL of the new session.

        Returns:
            The URL of the new session.

        Raises:
            PTClientError: If the session could not be created.
        """
        session_url = self._request(
            "POST",
            _sessions_url(api_url),
            json=_new_session(file_to_open, previous_session_id),
            settings=SESSION_CREATION_SETTINGS,
            failure_message="The session could not be created.",
        )
        if on_success is not None:
            on_success(session_url)
        return session_url

    def destroy(self, session_url: str) -> None:
        """Destroy a session.

        Args:
            session_url: URL of the session to destroy.
        """
        self._request(
            "DELETE",
            session_url,
            failure_message=f"The session {session_url} could not be destroyed.",
        )


class AsyncSessionsClient(AsyncBaseClient):
    """Asynchronous client for session lifecycle endpoints."""

    async def create(
        self,
        api_url: str,
        file_to_open: str,
        previous_session_id: str | None = None,
        on_success: Callable[[str], None] | None = None,
    ) -> str:
        """Create a new session.

        See SessionsClient.create.
        """
        session_url = await self._request(
            "POST",
            _sessions_url(api_url),
            json=_new_session(file_to_open, previous_session_id),
            settings=SESSION_CREATION_SETTINGS,
            failure_message="The session could not be created.",
        )
        if on_success is not None:
            on_success(session_url)
        return session_url

    async def destroy(self, session_url: str) -> None:
        """Destroy a session."""
        await self._request(
            "DELETE",
            session_url,
            failure_message=f"The session {session_url} could not be destroyed.",
        )
