"""Workspace endpoints."""

import builtins
from typing import TYPE_CHECKING

from tfe_client.errors.exceptions import WorkspaceNotFoundError
from tfe_client.jsonapi import PAGE_SIZE_PARAM
from tfe_client.models import CreateWorkspaceOptions, Workspace
from tfe_client.resources._paths import segment

if TYPE_CHECKING:
    from tfe_client.client import BaseClient


class WorkspaceOperations:
    """Workspaces of an organization.

    A 404 from any of these endpoints raises
    :class:`~tfe_client.errors.WorkspaceNotFoundError`.
    """

    def __init__(self, client: "BaseClient"):
        self._client = client

    def list(self, organization: str, page_size: int | None = None) -> builtins.list[Workspace]:
        """List all workspaces of an organization.

        Requires one request per page:
        - GET /api/v2/organizations/:organization/workspaces
        """
        return self._client.paginate(
            f"/api/v2/organizations/{segment(organization)}/workspaces",
            model=Workspace,
            params={PAGE_SIZE_PARAM: page_size},
            not_found=WorkspaceNotFoundError,
        )

    def get(self, organization: str, workspace: str) -> Workspace:
        """Get a workspace by organization and workspace name.

        Requires 1 request:
        - GET /api/v2/organizations/:organization/workspaces/:workspace
        """
        return self._client.request(
            "GET",
            f"/api/v2/organizations/{segment(organization)}/workspaces/{segment(workspace)}",
            model=Workspace,
            not_found=WorkspaceNotFoundError,
        )

    def create(self, organization: str, options: CreateWorkspaceOptions) -> Workspace:
        """Create a workspace. Not retried.

        Requires 1 request:
        - POST /api/v2/organizations/:organization/workspaces
        """
        body = {"data": {"type": "workspaces", "attributes": options.to_attributes()}}
        return self._client.request(
            "POST",
            f"/api/v2/organizations/{segment(organization)}/workspaces",
            body=body,
            model=Workspace,
            not_found=WorkspaceNotFoundError,
        )

    def assign_ssh_key(self, workspace_id: str, ssh_key_id: str) -> Workspace:
        """Assign an SSH key to a workspace. Not retried.

        Requires 1 request:
        - PATCH /api/v2/workspaces/:workspace_id/relationships/ssh-key
        """
        body = {"data": {"type": "workspaces", "attributes": {"id": ssh_key_id}}}
        return self._client.request(
            "PATCH",
            f"/api/v2/workspaces/{segment(workspace_id)}/relationships/ssh-key",
            body=body,
            model=Workspace,
            not_found=WorkspaceNotFoundError,
        )
