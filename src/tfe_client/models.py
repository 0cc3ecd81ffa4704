"""Resource models for the Terraform Enterprise v2 API.

Attribute names follow the API's dash-case keys converted to snake_case
(``auto-apply`` becomes ``auto_apply``). Timestamps are parsed into
timezone-aware ``datetime`` objects.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Self

# =============================================================================
# Attribute helpers
# =============================================================================


def _typed(attributes: dict[str, Any], key: str, kind: type | tuple[type, ...]) -> Any:
    value = attributes.get(key)
    if value is not None and not isinstance(value, kind):
        raise TypeError(f"attribute {key!r} has type {type(value).__name__}")
    return value


def _str(attributes: dict[str, Any], key: str) -> str | None:
    return _typed(attributes, key, str)


def _bool(attributes: dict[str, Any], key: str) -> bool:
    return bool(_typed(attributes, key, bool))


def _int(attributes: dict[str, Any], key: str) -> int | None:
    value = _typed(attributes, key, int)
    if isinstance(value, bool):
        raise TypeError(f"attribute {key!r} has type bool")
    return value


def _datetime(attributes: dict[str, Any], key: str) -> datetime | None:
    value = _str(attributes, key)
    return datetime.fromisoformat(value) if value else None


def _flags(attributes: dict[str, Any], key: str) -> dict[str, bool]:
    value = _typed(attributes, key, dict) or {}
    return {name: bool(flag) for name, flag in value.items()}


def _member(obj: dict[str, Any], key: str) -> dict[str, Any]:
    """An optional object member; absent or null is empty, any other non-object is malformed."""
    value = obj.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise TypeError(f"{key} must be an object, got {type(value).__name__}")
    return value


def _links(obj: dict[str, Any]) -> dict[str, str]:
    links = _member(obj, "links")
    # Link values may be plain URLs or {"href": ...} link objects
    return {name: (link.get("href") if isinstance(link, dict) else link) for name, link in links.items()}


# =============================================================================
# JSON:API building blocks
# =============================================================================


@dataclass(frozen=True)
class ResourceIdentifier:
    """A ``{type, id}`` pair pointing at another resource."""

    type: str
    id: str

    @classmethod
    def from_dict(cls, data: Any) -> "ResourceIdentifier":
        if not isinstance(data, dict):
            raise TypeError(f"resource identifier must be an object, got {type(data).__name__}")
        return cls(type=data["type"], id=data["id"])

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "id": self.id}


@dataclass
class Relationship:
    """A named edge to one resource, several resources, or none."""

    data: ResourceIdentifier | list[ResourceIdentifier] | None = None
    links: dict[str, str] = field(default_factory=dict)

    @property
    def type(self) -> str | None:
        return self.data.type if isinstance(self.data, ResourceIdentifier) else None

    @property
    def id(self) -> str | None:
        return self.data.id if isinstance(self.data, ResourceIdentifier) else None

    @classmethod
    def from_dict(cls, obj: Any) -> "Relationship":
        if not isinstance(obj, dict):
            raise TypeError(f"relationship must be an object, got {type(obj).__name__}")

        data = obj.get("data")
        linkage: ResourceIdentifier | list[ResourceIdentifier] | None
        if isinstance(data, list):
            linkage = [ResourceIdentifier.from_dict(item) for item in data]
        elif isinstance(data, dict):
            linkage = ResourceIdentifier.from_dict(data)
        elif data is None:
            linkage = None
        else:
            raise TypeError(f"relationship data must be an object, array or null, got {type(data).__name__}")
        return cls(data=linkage, links=_links(obj))


@dataclass
class Resource:
    """Base class for decoded JSON:API resource objects.

    Subclasses declare typed attribute fields and fill them in
    ``_parse_attributes``. The raw ``attributes`` mapping is always kept.
    """

    id: str
    type: str
    attributes: dict[str, Any] = field(default_factory=dict, repr=False)
    relationships: dict[str, Relationship] = field(default_factory=dict, repr=False)
    links: dict[str, str] = field(default_factory=dict, repr=False)

    @classmethod
    def from_resource(cls, obj: dict[str, Any]) -> Self:
        """Build an instance from a JSON:API resource object.

        Raises:
            KeyError, TypeError, ValueError: If the object is malformed
        """
        resource_id = obj["id"]
        if not isinstance(resource_id, str):
            raise TypeError("resource id must be a string")

        attributes = _member(obj, "attributes")
        relationships = _member(obj, "relationships")

        return cls(
            id=resource_id,
            type=obj.get("type", ""),
            attributes=attributes,
            relationships={
                name: Relationship.from_dict(rel if rel is not None else {}) for name, rel in relationships.items()
            },
            links=_links(obj),
            **cls._parse_attributes(attributes),
        )

    @classmethod
    def _parse_attributes(cls, attributes: dict[str, Any]) -> dict[str, Any]:
        return {}

    def related_id(self, name: str) -> str | None:
        """ID of the resource a to-one relationship points at."""
        relationship = self.relationships.get(name)
        return relationship.id if relationship else None


# =============================================================================
# Organizations
# =============================================================================


@dataclass
class Organization(Resource):
    """A Terraform Enterprise organization. Its ``id`` is the organization name."""

    name: str | None = None
    email: str | None = None
    created_at: datetime | None = None

    @classmethod
    def _parse_attributes(cls, attributes: dict[str, Any]) -> dict[str, Any]:
        return {
            "name": _str(attributes, "name"),
            "email": _str(attributes, "email"),
            "created_at": _datetime(attributes, "created-at"),
        }


# =============================================================================
# Workspaces
# =============================================================================


@dataclass
class VCSRepo:
    """VCS repository settings of a workspace."""

    identifier: str | None = None
    branch: str | None = None
    ingress_submodules: bool = False
    oauth_token_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VCSRepo":
        return cls(
            identifier=_str(data, "identifier"),
            branch=_str(data, "branch"),
            ingress_submodules=_bool(data, "ingress-submodules"),
            oauth_token_id=_str(data, "oauth-token-id"),
        )


@dataclass
class Workspace(Resource):
    """A Terraform Enterprise workspace."""

    name: str | None = None
    environment: str | None = None
    auto_apply: bool = False
    locked: bool = False
    created_at: datetime | None = None
    working_directory: str | None = None
    terraform_version: str | None = None
    vcs_repo: VCSRepo | None = None
    permissions: dict[str, bool] = field(default_factory=dict)
    actions: dict[str, bool] = field(default_factory=dict)

    @classmethod
    def _parse_attributes(cls, attributes: dict[str, Any]) -> dict[str, Any]:
        vcs_repo = _typed(attributes, "vcs-repo", dict)
        return {
            "name": _str(attributes, "name"),
            "environment": _str(attributes, "environment"),
            "auto_apply": _bool(attributes, "auto-apply"),
            "locked": _bool(attributes, "locked"),
            "created_at": _datetime(attributes, "created-at"),
            "working_directory": _str(attributes, "working-directory"),
            "terraform_version": _str(attributes, "terraform-version"),
            "vcs_repo": VCSRepo.from_dict(vcs_repo) if vcs_repo else None,
            "permissions": _flags(attributes, "permissions"),
            "actions": _flags(attributes, "actions"),
        }


@dataclass(frozen=True)
class CreateWorkspaceOptions:
    """Settings for a new workspace. ``name`` is required."""

    name: str
    terraform_version: str | None = None
    vcs_identifier: str | None = None
    vcs_oauth_token_id: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("workspace name is required")

    def to_attributes(self) -> dict[str, Any]:
        attributes: dict[str, Any] = {"name": self.name}
        if self.terraform_version:
            attributes["terraform-version"] = self.terraform_version
        if self.vcs_identifier:
            attributes["vcs-repo"] = {
                "identifier": self.vcs_identifier,
                "oauth-token-id": self.vcs_oauth_token_id,
            }
        return attributes


# =============================================================================
# Runs
# =============================================================================


@dataclass
class Run(Resource):
    """A plan/apply cycle of a workspace."""

    status: str | None = None
    message: str | None = None
    source: str | None = None
    error_text: str | None = None
    is_destroy: bool = False
    auto_apply: bool = False
    has_changes: bool = False
    terraform_version: str | None = None
    created_at: datetime | None = None
    status_timestamps: dict[str, datetime] = field(default_factory=dict)
    permissions: dict[str, bool] = field(default_factory=dict)
    actions: dict[str, bool] = field(default_factory=dict)

    @classmethod
    def _parse_attributes(cls, attributes: dict[str, Any]) -> dict[str, Any]:
        timestamps = _typed(attributes, "status-timestamps", dict) or {}
        return {
            "status": _str(attributes, "status"),
            "message": _str(attributes, "message"),
            "source": _str(attributes, "source"),
            "error_text": _str(attributes, "error-text"),
            "is_destroy": _bool(attributes, "is-destroy"),
            "auto_apply": _bool(attributes, "auto-apply"),
            "has_changes": _bool(attributes, "has-changes"),
            "terraform_version": _str(attributes, "terraform-version"),
            "created_at": _datetime(attributes, "created-at"),
            "status_timestamps": {name: _datetime(timestamps, name) for name in timestamps if timestamps[name]},
            "permissions": _flags(attributes, "permissions"),
            "actions": _flags(attributes, "actions"),
        }


# =============================================================================
# Variables
# =============================================================================

VARIABLE_CATEGORIES = frozenset(["terraform", "env"])


@dataclass
class Variable(Resource):
    """A workspace variable. Sensitive values come back as ``None``."""

    key: str | None = None
    value: str | None = None
    category: str | None = None
    hcl: bool = False
    sensitive: bool = False

    @classmethod
    def _parse_attributes(cls, attributes: dict[str, Any]) -> dict[str, Any]:
        return {
            "key": _str(attributes, "key"),
            "value": _str(attributes, "value"),
            "category": _str(attributes, "category"),
            "hcl": _bool(attributes, "hcl"),
            "sensitive": _bool(attributes, "sensitive"),
        }


@dataclass(frozen=True)
class CreateVariableOptions:
    """A new variable. ``key``, ``value`` and ``category`` are required."""

    key: str
    value: str
    category: str
    sensitive: bool = False
    hcl: bool = False

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("variable key is required")
        if not self.value:
            raise ValueError("variable value is required")
        if self.category not in VARIABLE_CATEGORIES:
            raise ValueError(f"variable category must be one of {sorted(VARIABLE_CATEGORIES)}, got {self.category!r}")

    def to_attributes(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "value": self.value,
            "category": self.category,
            "hcl": self.hcl,
            "sensitive": self.sensitive,
        }


# =============================================================================
# State versions
# =============================================================================


@dataclass
class StateVersion(Resource):
    """An immutable snapshot of a workspace's Terraform state."""

    serial: int | None = None
    created_at: datetime | None = None
    hosted_state_download_url: str | None = None

    @classmethod
    def _parse_attributes(cls, attributes: dict[str, Any]) -> dict[str, Any]:
        return {
            "serial": _int(attributes, "serial"),
            "created_at": _datetime(attributes, "created-at"),
            "hosted_state_download_url": _str(attributes, "hosted-state-download-url"),
        }
