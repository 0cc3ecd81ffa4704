"""Variable endpoints."""

from typing import TYPE_CHECKING

from tfe_client.errors.exceptions import WorkspaceNotFoundError
from tfe_client.models import CreateVariableOptions, ResourceIdentifier, Variable

if TYPE_CHECKING:
    from tfe_client.client import BaseClient


class VariableOperations:
    """Terraform and environment variables of a workspace."""

    def __init__(self, client: "BaseClient"):
        self._client = client

    def create(self, workspace_id: str, options: CreateVariableOptions) -> Variable:
        """Create a variable on a workspace. Not retried.

        Requires 1 request:
        - POST /api/v2/vars
        """
        body = {
            "data": {
                "type": "vars",
                "attributes": options.to_attributes(),
                "relationships": {
                    "workspace": {"data": ResourceIdentifier(type="workspaces", id=workspace_id).to_dict()},
                },
            }
        }
        return self._client.request(
            "POST",
            "/api/v2/vars",
            body=body,
            model=Variable,
            not_found=WorkspaceNotFoundError,
        )
