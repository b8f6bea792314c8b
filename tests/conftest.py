"""Pytest configuration and shared fixtures."""

from typing import Any, Callable

import pytest

from ptclient import RetryPolicy
from tests.fixtures.transport import ScriptedHandler


@pytest.fixture
def scripted() -> Callable[..., ScriptedHandler]:
    """Build a ScriptedHandler from the given steps."""

    def factory(*steps: Any) -> ScriptedHandler:
        return ScriptedHandler(list(steps))

    return factory


@pytest.fixture
def no_delay_policy() -> RetryPolicy:
    """Default retry limit without waiting between retries."""
    return RetryPolicy(unavailable_delay=0.0)


@pytest.fixture
def expiry_calls() -> list[str]:
    """Records calls of the session expiry callback."""
    return []


@pytest.fixture
def on_expired(expiry_calls: list[str]) -> Callable[[], None]:
    def callback() -> None:
        expiry_calls.append("expired")

    return callback
