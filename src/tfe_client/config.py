"""Client configuration.

Settings are resolved once into an immutable :class:`ClientSettings` and
passed explicitly to :meth:`Client.from_settings`; nothing is read from the
environment behind the caller's back.

| Setting | Environment variable | Default |
|---------|----------------------|---------|
| token | ``TFE_TOKEN`` / ``TFE_TOKEN_FILE`` / Terraform CLI credentials | required |
| base_url | ``TFE_ADDRESS`` | ``https://app.terraform.io`` |
| timeout | ``TFE_TIMEOUT`` | 10 seconds |
| max_attempts | ``TFE_MAX_ATTEMPTS`` | 10 |
| retry_base_interval | ``TFE_RETRY_BASE_INTERVAL`` | 0.5 seconds |
"""

import logging
from dataclasses import dataclass, field

import httpx

from tfe_client.auth.credentials import CredentialResolver
from tfe_client.auth.exceptions import CredentialNotFoundError
from tfe_client.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from tfe_client.errors.exceptions import ConfigurationError
from tfe_client.transport.retry import DEFAULT_RETRY_POLICY

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientSettings:
    """Everything needed to build a client."""

    token: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    max_attempts: int = DEFAULT_RETRY_POLICY.max_attempts
    retry_base_interval: float = DEFAULT_RETRY_POLICY.base_interval

    def __post_init__(self) -> None:
        if not self.token:
            raise ConfigurationError("API token must not be empty")
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")
        if self.max_attempts < 1:
            raise ConfigurationError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.retry_base_interval < 0:
            raise ConfigurationError(f"retry_base_interval must not be negative, got {self.retry_base_interval}")

    @classmethod
    def from_env(
        cls,
        resolver: CredentialResolver | None = None,
        *,
        token: str | None = None,
        base_url: str | None = None,
    ) -> "ClientSettings":
        """Resolve settings from explicit values, the environment and .env.

        Args:
            resolver: Credential resolver to use; a default one loads .env
            token: Explicit token, overriding every other source
            base_url: Explicit API address, overriding ``TFE_ADDRESS``

        Raises:
            ConfigurationError: If no token is found or a numeric setting is invalid
        """
        resolver = resolver or CredentialResolver()

        # An empty TFE_ADDRESS counts as unset
        address = (
            resolver.resolve(value=base_url, env_var_name="TFE_ADDRESS", mask_in_logs=False) or DEFAULT_BASE_URL
        )
        try:
            hostname = httpx.URL(address).host
        except httpx.InvalidURL as e:
            raise ConfigurationError(f"Invalid TFE_ADDRESS {address!r}: {e}") from e

        try:
            resolved_token = resolver.resolve_token(value=token, hostname=hostname, required=True)
        except CredentialNotFoundError as e:
            raise ConfigurationError(str(e)) from e

        settings = cls(
            token=resolved_token or "",
            base_url=address,
            timeout=_number(resolver, "TFE_TIMEOUT", float, DEFAULT_TIMEOUT),
            max_attempts=_number(resolver, "TFE_MAX_ATTEMPTS", int, DEFAULT_RETRY_POLICY.max_attempts),
            retry_base_interval=_number(resolver, "TFE_RETRY_BASE_INTERVAL", float, DEFAULT_RETRY_POLICY.base_interval),
        )
        logger.debug(f"Resolved client settings: {settings}")
        return settings


def _number(resolver: CredentialResolver, env_var_name: str, kind, default):
    raw = resolver.resolve(env_var_name=env_var_name, mask_in_logs=False)
    if raw is None or raw == "":
        return default
    try:
        return kind(raw)
    except ValueError as e:
        raise ConfigurationError(f"{env_var_name} must be a {kind.__name__}, got {raw!r}") from e
