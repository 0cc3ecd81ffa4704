"""State version endpoints and state download.

Downloading state takes two hops: the state version resource is fetched
from the API, then its ``hosted-state-download-url`` is fetched without the
API token. Both hops are retried independently.
"""

import builtins
import logging
from typing import TYPE_CHECKING

from tfe_client.errors.exceptions import StateVersionNotFoundError
from tfe_client.jsonapi import PAGE_SIZE_PARAM
from tfe_client.models import StateVersion
from tfe_client.resources._paths import segment

if TYPE_CHECKING:
    from tfe_client.client import BaseClient

logger = logging.getLogger(__name__)


def _filters(organization: str, workspace: str) -> dict[str, str]:
    return {
        "filter[organization][name]": organization,
        "filter[workspace][name]": workspace,
    }


class StateVersionOperations:
    """State versions of a workspace.

    A 404 from any of these endpoints raises
    :class:`~tfe_client.errors.StateVersionNotFoundError`.
    """

    def __init__(self, client: "BaseClient"):
        self._client = client

    def list(self, organization: str, workspace: str, page_size: int | None = None) -> builtins.list[StateVersion]:
        """List all state versions of a workspace, newest first.

        Requires one request per page:
        - GET /api/v2/state-versions?filter[organization][name]=...&filter[workspace][name]=...
        """
        return self._client.paginate(
            "/api/v2/state-versions",
            model=StateVersion,
            params={**_filters(organization, workspace), PAGE_SIZE_PARAM: page_size},
            not_found=StateVersionNotFoundError,
        )

    def get(self, state_version_id: str) -> StateVersion:
        """Get a state version by ID.

        Requires 1 request:
        - GET /api/v2/state-versions/:state_version_id
        """
        return self._client.request(
            "GET",
            f"/api/v2/state-versions/{segment(state_version_id)}",
            model=StateVersion,
            not_found=StateVersionNotFoundError,
        )

    def get_latest(self, organization: str, workspace: str) -> StateVersion:
        """Get the most recent state version of a workspace.

        Requires 1 request:
        - GET /api/v2/state-versions?filter[...]&page[size]=1

        Raises:
            StateVersionNotFoundError: If the workspace has no state versions
        """
        versions = self._client.request_many(
            "/api/v2/state-versions",
            model=StateVersion,
            params={**_filters(organization, workspace), PAGE_SIZE_PARAM: 1},
            not_found=StateVersionNotFoundError,
        )
        if not versions:
            raise StateVersionNotFoundError(f"No state versions for workspace {organization}/{workspace}")
        return versions[0]

    def get_current(self, workspace_id: str) -> StateVersion:
        """Get the state version currently used by a workspace.

        Requires 1 request:
        - GET /api/v2/workspaces/:workspace_id/current-state-version
        """
        return self._client.request(
            "GET",
            f"/api/v2/workspaces/{segment(workspace_id)}/current-state-version",
            model=StateVersion,
            not_found=StateVersionNotFoundError,
        )

    def download(self, state_version: StateVersion) -> bytes:
        """Download the raw state file of a resolved state version.

        Requires 1 unauthenticated request to the hosted download URL.

        Raises:
            StateVersionNotFoundError: If the state version has no download URL
            BadStatusError: If the download keeps failing
        """
        url = state_version.hosted_state_download_url
        if not url:
            raise StateVersionNotFoundError(f"State version {state_version.id} has no hosted state download URL")

        logger.debug(f"Downloading state for state version {state_version.id}")
        return self._client.download(url)

    def download_by_id(self, state_version_id: str) -> bytes:
        """Download the raw state file of a state version.

        Requires 2 requests: :meth:`get` and the download.
        """
        return self.download(self.get(state_version_id))

    def download_latest(self, organization: str, workspace: str) -> bytes:
        """Download the newest raw state file of a workspace.

        Requires 2 requests: :meth:`get_latest` and the download.
        """
        return self.download(self.get_latest(organization, workspace))
