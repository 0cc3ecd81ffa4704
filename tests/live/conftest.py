"""Settings and fixtures for tests that call a real Terraform Enterprise API.

Live tests are skipped unless enabled through the environment:

    TFE_LIVE_ENABLE=1 TFE_LIVE_TOKEN=... TFE_LIVE_ORG=acme TFE_LIVE_WORKSPACE=prod pytest -m live

Tests that create resources also need ``TFE_LIVE_ALLOW_WRITES=1``.
"""

import os
from dataclasses import dataclass, field

import pytest

from tfe_client.client import DEFAULT_BASE_URL, Client

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class LiveSettings:
    enabled: bool = False
    allow_writes: bool = False
    token: str = field(default="", repr=False)
    base_url: str = DEFAULT_BASE_URL
    organization: str = ""
    workspace: str = ""
    ssh_key_id: str = ""
    oauth_token_id: str = ""

    @classmethod
    def from_env(cls) -> "LiveSettings":
        return cls(
            enabled=os.environ.get("TFE_LIVE_ENABLE", "").lower() in _TRUTHY,
            allow_writes=os.environ.get("TFE_LIVE_ALLOW_WRITES", "").lower() in _TRUTHY,
            token=os.environ.get("TFE_LIVE_TOKEN", ""),
            base_url=os.environ.get("TFE_LIVE_ADDRESS", DEFAULT_BASE_URL),
            organization=os.environ.get("TFE_LIVE_ORG", ""),
            workspace=os.environ.get("TFE_LIVE_WORKSPACE", ""),
            ssh_key_id=os.environ.get("TFE_LIVE_SSH_KEY_ID", ""),
            oauth_token_id=os.environ.get("TFE_LIVE_OAUTH_TOKEN_ID", ""),
        )

    def require(self, *names: str, writes: bool = False) -> None:
        """Skip the calling test unless live calls and the named settings are available."""
        missing = [name for name in names if not getattr(self, name)]
        if not self.enabled or not self.token:
            pytest.skip("live tests disabled (set TFE_LIVE_ENABLE and TFE_LIVE_TOKEN)")
        if writes and not self.allow_writes:
            pytest.skip("writes disabled (set TFE_LIVE_ALLOW_WRITES)")
        if missing:
            pytest.skip(f"missing live settings: {', '.join(missing)}")


@pytest.fixture(scope="session")
def live_settings():
    return LiveSettings.from_env()


@pytest.fixture
def live_client(live_settings):
    live_settings.require()
    with Client(live_settings.token, live_settings.base_url) as client:
        yield client
