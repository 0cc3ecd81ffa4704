"""Structured exceptions for Terraform Enterprise API errors."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from tfe_client.errors.models import ErrorObject


class TFEError(Exception):
    """Base exception for everything raised by tfe_client."""

    pass


class ConfigurationError(TFEError):
    """Client settings are missing or invalid."""

    pass


class APIError(TFEError):
    """Base exception for failed API calls."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: "httpx.Response | None" = None,
        errors: "list[ErrorObject] | None" = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response = response
        self.errors = errors if errors is not None else []


class NetworkError(APIError):
    """The request never produced an HTTP response (DNS, connect, timeout)."""

    pass


class UnauthorizedError(APIError):
    """401 Unauthorized. The token is invalid, expired or lacks permission."""

    pass


class NotFoundError(APIError):
    """404 Not Found."""

    resource_kind: str | None = None


class WorkspaceNotFoundError(NotFoundError):
    """404 on a workspace-scoped endpoint."""

    resource_kind = "workspace"


class StateVersionNotFoundError(NotFoundError):
    """404 on a state-version endpoint, or no state version exists."""

    resource_kind = "state version"


class BadStatusError(APIError):
    """Any other unsuccessful status code."""

    pass


class DecodeError(APIError):
    """Response body is not a valid JSON:API document for the expected resource."""

    pass
