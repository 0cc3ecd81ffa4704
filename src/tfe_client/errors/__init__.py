"""Error taxonomy and JSON:API error support for the TFE client."""

from tfe_client.errors.exceptions import (
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
from tfe_client.errors.handler import classify_status, raise_for_status
from tfe_client.errors.models import ErrorObject

__all__ = [
    "APIError",
    "BadStatusError",
    "ConfigurationError",
    "DecodeError",
    "ErrorObject",
    "NetworkError",
    "NotFoundError",
    "StateVersionNotFoundError",
    "TFEError",
    "UnauthorizedError",
    "WorkspaceNotFoundError",
    "classify_status",
    "raise_for_status",
]
