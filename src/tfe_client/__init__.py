"""TFE Client - Python client for the Terraform Enterprise / HCP Terraform v2 API.

The core of the library is the request execution layer:
- Retry policy with capped exponential backoff, shared by every network call
- JSON:API decoding, including the pagination continuation loop
- A small error taxonomy (unauthorized, not found, bad status, decode, network)

Example:
    ```python
    from tfe_client import Client, ClientSettings

    # Resolve token and address from TFE_TOKEN / TFE_ADDRESS / .env
    settings = ClientSettings.from_env()

    with Client.from_settings(settings) as client:
        for workspace in client.workspaces.list("acme"):
            print(workspace.name)

        raw_state = client.state_versions.download_latest("acme", "prod")
    ```
"""

from tfe_client.client import DEFAULT_BASE_URL, APIRequest, BaseClient, Client
from tfe_client.config import ClientSettings
from tfe_client.errors import (
    APIError,
    BadStatusError,
    ConfigurationError,
    DecodeError,
    NetworkError,
    NotFoundError,
    StateVersionNotFoundError,
    TFEError,
    UnauthorizedError,
    WorkspaceNotFoundError,
)
from tfe_client.models import (
    CreateVariableOptions,
    CreateWorkspaceOptions,
    Organization,
    Run,
    StateVersion,
    Variable,
    Workspace,
)
from tfe_client.transport import DEFAULT_RETRY_POLICY, RetryPolicy

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_RETRY_POLICY",
    "APIError",
    "APIRequest",
    "BadStatusError",
    "BaseClient",
    "Client",
    "ClientSettings",
    "ConfigurationError",
    "CreateVariableOptions",
    "CreateWorkspaceOptions",
    "DecodeError",
    "NetworkError",
    "NotFoundError",
    "Organization",
    "RetryPolicy",
    "Run",
    "StateVersion",
    "StateVersionNotFoundError",
    "TFEError",
    "UnauthorizedError",
    "Variable",
    "Workspace",
    "WorkspaceNotFoundError",
    "__version__",
]
