"""Run endpoints."""

from typing import TYPE_CHECKING, Any

from tfe_client.errors.exceptions import WorkspaceNotFoundError
from tfe_client.models import ResourceIdentifier, Run

if TYPE_CHECKING:
    from tfe_client.client import BaseClient


class RunOperations:
    """Runs queue a plan (and possibly an apply) on a workspace."""

    def __init__(self, client: "BaseClient"):
        self._client = client

    def create(self, workspace_id: str, *, message: str | None = None, is_destroy: bool = False) -> Run:
        """Queue a new run for a workspace. Not retried.

        Requires 1 request:
        - POST /api/v2/runs

        Raises:
            WorkspaceNotFoundError: If the workspace does not exist
        """
        attributes: dict[str, Any] = {"is-destroy": is_destroy}
        if message:
            attributes["message"] = message

        body = {
            "data": {
                "type": "runs",
                "attributes": attributes,
                "relationships": {
                    "workspace": {"data": ResourceIdentifier(type="workspaces", id=workspace_id).to_dict()},
                },
            }
        }
        return self._client.request("POST", "/api/v2/runs", body=body, model=Run, not_found=WorkspaceNotFoundError)
