"""Resource operations, grouped per resource kind.

Each ``*Operations`` class wraps a :class:`~tfe_client.client.BaseClient`
and supplies the path, query and target model of its endpoints; the client
does the rest.
"""

from tfe_client.resources.organizations import OrganizationOperations
from tfe_client.resources.runs import RunOperations
from tfe_client.resources.state_versions import StateVersionOperations
from tfe_client.resources.variables import VariableOperations
from tfe_client.resources.workspaces import WorkspaceOperations

__all__ = [
    "OrganizationOperations",
    "RunOperations",
    "StateVersionOperations",
    "VariableOperations",
    "WorkspaceOperations",
]
