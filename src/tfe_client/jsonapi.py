"""JSON:API document decoding.

Terraform Enterprise wraps every response in a JSON:API envelope:

- single resource: ``{"data": {...}}``
- collection: ``{"data": [...], "meta": {"pagination": {...}}, "links": {...}}``

Each resource object carries ``id``, ``type``, ``attributes``,
``relationships`` and ``links``. Decoding turns a document into instances of
a resource class (any class with a ``from_resource`` classmethod). Malformed
documents raise :class:`~tfe_client.errors.DecodeError`; they are never
retried.
"""

import json
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar

import httpx

from tfe_client.errors.exceptions import DecodeError

JSONAPI_MEDIA_TYPE = "application/vnd.api+json"

PAGE_NUMBER_PARAM = "page[number]"
PAGE_SIZE_PARAM = "page[size]"


class ResourceDecoder(Protocol):
    @classmethod
    def from_resource(cls, obj: dict[str, Any]) -> Any: ...


ResourceT = TypeVar("ResourceT", bound=ResourceDecoder)


@dataclass(frozen=True)
class Pagination:
    """The ``meta.pagination`` block of a collection response. Pages are 1-indexed."""

    current_page: int = 1
    next_page: int | None = None
    total_pages: int = 1

    @property
    def has_more(self) -> bool:
        return self.current_page < self.total_pages

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Pagination":
        """Read pagination metadata; a document without it is a single page."""
        meta = document.get("meta")
        if not isinstance(meta, dict) or meta.get("pagination") is None:
            return cls()

        pagination = meta["pagination"]
        if not isinstance(pagination, dict):
            raise DecodeError("meta.pagination is not an object")

        try:
            current_page = int(pagination.get("current-page") or 1)
            total_pages = int(pagination.get("total-pages") or 1)
            next_page = pagination.get("next-page")
            next_page = int(next_page) if next_page is not None else None
        except (TypeError, ValueError) as e:
            raise DecodeError(f"Invalid pagination metadata: {e}") from e

        return cls(current_page=current_page, next_page=next_page, total_pages=total_pages)


def parse_document(response: httpx.Response) -> dict[str, Any]:
    """Parse a response body as a JSON:API top-level object.

    Args:
        response: Successful HTTP response

    Returns:
        The top-level document

    Raises:
        DecodeError: If the body is not JSON or has no ``data`` member
    """
    try:
        document = json.loads(response.content)
    except ValueError as e:
        raise DecodeError(
            f"Response body is not valid JSON: {e}",
            status_code=response.status_code,
            response=response,
        ) from e

    if not isinstance(document, dict):
        raise DecodeError(
            f"Expected a JSON object, got {type(document).__name__}",
            status_code=response.status_code,
            response=response,
        )

    if "data" not in document:
        raise DecodeError(
            "JSON:API document has no 'data' member",
            status_code=response.status_code,
            response=response,
        )

    return document


def decode_one(document: dict[str, Any], model: type[ResourceT]) -> ResourceT:
    """Decode the single resource in ``document["data"]``."""
    data = document.get("data")
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a single {model.__name__} resource, got {type(data).__name__}")
    return _decode_resource(data, model)


def decode_many(document: dict[str, Any], model: type[ResourceT]) -> list[ResourceT]:
    """Decode the resource array in ``document["data"]``."""
    data = document.get("data")
    if not isinstance(data, list):
        raise DecodeError(f"Expected a list of {model.__name__} resources, got {type(data).__name__}")
    return [_decode_resource(item, model) for item in data]


def _decode_resource(obj: Any, model: type[ResourceT]) -> ResourceT:
    if not isinstance(obj, dict):
        raise DecodeError(f"Resource object must be a JSON object, got {type(obj).__name__}")
    try:
        return model.from_resource(obj)
    except (KeyError, TypeError, ValueError) as e:
        raise DecodeError(f"Cannot decode {model.__name__} resource {obj.get('id')!r}: {e}") from e
