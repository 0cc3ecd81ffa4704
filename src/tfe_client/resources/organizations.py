"""Organization endpoints."""

from typing import TYPE_CHECKING

from tfe_client.jsonapi import PAGE_SIZE_PARAM
from tfe_client.models import Organization

if TYPE_CHECKING:
    from tfe_client.client import BaseClient


class OrganizationOperations:
    """Organizations visible to the token."""

    def __init__(self, client: "BaseClient"):
        self._client = client

    def list(self, page_size: int | None = None) -> list[Organization]:
        """List all organizations your token can access.

        Requires one request per page:
        - GET /api/v2/organizations
        """
        return self._client.paginate(
            "/api/v2/organizations",
            model=Organization,
            params={PAGE_SIZE_PARAM: page_size},
        )
