"""Shared fixtures for integration tests."""

import os

import pytest

# Skip all integration tests unless RUN_PY621_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_PY621_NETWORK_TESTS") != "1",
    reason="Requires network access. Set RUN_PY621_NETWORK_TESTS=1 to run",
)

USER_AGENT = os.environ.get("PY621_USER_AGENT", "py621-integration-tests/0.1")


@pytest.fixture
def user_agent() -> str:
    return USER_AGENT
