"""Pytest configuration and shared fixtures for tfe-client tests."""

import httpx
import pytest
from helpers import BASE_URL, TOKEN

from tfe_client.client import Client
from tfe_client.transport.retry import RetryPolicy


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear test-related environment variables before each test.

    This prevents test pollution when testing credential and settings resolution.
    Live tests read their own settings before this runs.
    """
    import os

    test_prefixes = ("TEST_", "TFE_TOKEN", "TFE_ADDRESS", "TFE_TIMEOUT", "TFE_MAX_ATTEMPTS", "TFE_RETRY_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def sleeps():
    """Delays requested by the retry policy, recorded instead of slept."""
    return []


@pytest.fixture
def retry_policy(sleeps):
    """Default backoff schedule with a recording, non-blocking sleep."""
    return RetryPolicy(sleep=sleeps.append)


@pytest.fixture
def make_client(retry_policy):
    """Build a Client whose network is the given MockTransport handler."""
    clients = []

    def factory(handler, **kwargs):
        kwargs.setdefault("retry_policy", retry_policy)
        client = Client(TOKEN, BASE_URL, transport=httpx.MockTransport(handler), **kwargs)
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()
