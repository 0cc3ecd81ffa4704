"""Credential resolution for the Terraform Enterprise client.

The API only needs a static bearer token; this package finds it:
- explicit value → ``TFE_TOKEN`` → .env → ``TFE_TOKEN_FILE`` → Terraform CLI credentials

Example:
    ```python
    from tfe_client.auth import CredentialResolver

    token = CredentialResolver().resolve_token(required=True)
    ```
"""

from tfe_client.auth.credentials import CredentialResolver
from tfe_client.auth.exceptions import (
    CredentialError,
    CredentialFileError,
    CredentialNotFoundError,
)

__all__ = [
    "CredentialError",
    "CredentialFileError",
    "CredentialNotFoundError",
    "CredentialResolver",
]
