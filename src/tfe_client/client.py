"""Terraform Enterprise API client.

:class:`BaseClient` is the request executor: it assembles requests, runs
them through the retry policy, classifies the final status and decodes the
JSON:API body. :class:`Client` adds the resource operations on top.

Example:
    ```python
    from tfe_client import Client

    with Client(token) as client:
        workspace = client.workspaces.get("acme", "prod")
        state = client.state_versions.download_latest("acme", "prod")
    ```
"""

import json
import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import httpx

from tfe_client.errors.exceptions import BadStatusError, DecodeError, NetworkError, NotFoundError
from tfe_client.errors.handler import raise_for_status
from tfe_client.jsonapi import (
    JSONAPI_MEDIA_TYPE,
    PAGE_NUMBER_PARAM,
    Pagination,
    ResourceT,
    decode_many,
    decode_one,
    parse_document,
)
from tfe_client.resources import (
    OrganizationOperations,
    RunOperations,
    StateVersionOperations,
    VariableOperations,
    WorkspaceOperations,
)
from tfe_client.transport.retry import DEFAULT_RETRY_POLICY, RetryPolicy, retry_on_timeout_or_failure

if TYPE_CHECKING:
    from tfe_client.config import ClientSettings

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://app.terraform.io"
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class APIRequest:
    """One API call, fixed before the first attempt.

    ``body`` is already serialized so every attempt would send the same bytes.
    """

    method: str
    path: str
    params: Mapping[str, str] = field(default_factory=dict)
    body: bytes | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    @classmethod
    def build(
        cls,
        method: str,
        path: str,
        *,
        body: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> "APIRequest":
        """Serialize ``body`` to JSON and stringify ``params``, dropping ``None`` values."""
        encoded = json.dumps(body).encode("utf-8") if body is not None else None
        query = {key: str(value) for key, value in (params or {}).items() if value is not None}
        return cls(method=method, path=path, params=query, body=encoded)

    def with_params(self, **extra: str) -> "APIRequest":
        return APIRequest(
            method=self.method,
            path=self.path,
            params={**self.params, **extra},
            body=self.body,
        )

    @property
    def is_retryable(self) -> bool:
        """Requests carrying a body are writes and are never re-sent."""
        return self.body is None


@contextmanager
def _decoding(response: httpx.Response) -> Iterator[None]:
    """Attach the response to DecodeErrors raised while decoding it."""
    try:
        yield
    except DecodeError as e:
        if e.response is None:
            e.response = response
            e.status_code = response.status_code
        raise


class BaseClient:
    """Request executor shared by every resource operation.

    The client keeps only immutable configuration (token, base URL, retry
    policy) and one ``httpx.Client``, so a single instance can be shared
    between threads.

    Args:
        token: API token sent as ``Authorization: Bearer <token>``
        base_url: Scheme and host of the API (default: ``https://app.terraform.io``)
        transport: HTTP primitive; defaults to ``httpx.HTTPTransport``.
            Pass ``httpx.MockTransport`` in tests.
        timeout: Per-attempt timeout in seconds (default: 10)
        retry_policy: Backoff schedule and predicate for API calls

    Raises:
        ValueError: If ``base_url`` has no scheme or host
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        *,
        transport: httpx.BaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY,
    ) -> None:
        try:
            url = httpx.URL(base_url)
        except httpx.InvalidURL as e:
            raise ValueError(f"Invalid base_url {base_url!r}: {e}") from e
        if not url.scheme or not url.host:
            raise ValueError("base_url must include scheme and host, e.g. https://app.terraform.io")

        self.base_url = url
        self.retry_policy = retry_policy
        self._token = token
        self._http = httpx.Client(
            transport=transport,
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
        )

    @classmethod
    def from_settings(cls, settings: "ClientSettings", *, transport: httpx.BaseTransport | None = None):
        """Build a client from resolved :class:`~tfe_client.config.ClientSettings`."""
        return cls(
            settings.token,
            settings.base_url,
            transport=transport,
            timeout=settings.timeout,
            retry_policy=RetryPolicy(
                base_interval=settings.retry_base_interval,
                max_attempts=settings.max_attempts,
            ),
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={str(self.base_url)!r})"

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": JSONAPI_MEDIA_TYPE,
        }

    def _send(
        self,
        method: str,
        url: httpx.URL | str,
        *,
        policy: RetryPolicy,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
        content: bytes | None = None,
    ) -> httpx.Response:
        """Run one logical request through ``policy``; transport failures become NetworkError."""
        description = f"{method} {url}"

        def attempt() -> httpx.Response:
            request = self._http.build_request(
                method,
                url,
                headers=headers,
                params=dict(params) if params else None,
                content=content,
            )
            response = self._http.send(request)
            logger.debug(f"{method} {request.url} -> {response.status_code}")
            return response

        try:
            return policy.execute(attempt, description=description)
        except httpx.TransportError as e:
            raise NetworkError(f"{description} failed: {e}") from e

    def execute(self, request: APIRequest, *, not_found: type[NotFoundError] = NotFoundError) -> httpx.Response:
        """Send ``request`` with retries and classify the final status.

        Returns:
            The successful (2xx) response

        Raises:
            NetworkError: No HTTP response after retries
            UnauthorizedError: 401
            NotFoundError: 404, raised as ``not_found``
            BadStatusError: Any other non-2xx status
        """
        policy = self.retry_policy if request.is_retryable else self.retry_policy.single_attempt()
        response = self._send(
            request.method,
            self.base_url.join(request.path),
            policy=policy,
            headers=self._headers,
            params=request.params,
            content=request.body,
        )
        raise_for_status(response, not_found=not_found)
        return response

    def request(
        self,
        method: str,
        path: str,
        *,
        model: type[ResourceT],
        body: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
        not_found: type[NotFoundError] = NotFoundError,
    ) -> ResourceT:
        """Call the API and decode the single resource it returns.

        Args:
            method: HTTP method
            path: Absolute API path, e.g. ``/api/v2/runs``
            model: Resource class to decode ``data`` into
            body: JSON:API document to send; requests with a body are not retried
            params: Query parameters; ``None`` values are dropped
            not_found: Exception raised on 404

        Raises:
            APIError: See :meth:`execute`
            DecodeError: If ``data`` is not a valid ``model`` resource object
        """
        response = self.execute(APIRequest.build(method, path, body=body, params=params), not_found=not_found)
        with _decoding(response):
            return decode_one(parse_document(response), model)

    def request_many(
        self,
        path: str,
        *,
        model: type[ResourceT],
        params: Mapping[str, Any] | None = None,
        not_found: type[NotFoundError] = NotFoundError,
    ) -> list[ResourceT]:
        """GET a single page of a collection. Use :meth:`paginate` for all pages."""
        response = self.execute(APIRequest.build("GET", path, params=params), not_found=not_found)
        with _decoding(response):
            return decode_many(parse_document(response), model)

    def paginate(
        self,
        path: str,
        *,
        model: type[ResourceT],
        params: Mapping[str, Any] | None = None,
        not_found: type[NotFoundError] = NotFoundError,
    ) -> list[ResourceT]:
        """Fetch every page of a collection, in page order.

        The first request carries no ``page[number]``; each following one asks
        for ``current-page + 1`` until ``current-page`` reaches ``total-pages``.
        Any error fails the whole call and discards pages already fetched.
        """
        request = APIRequest.build("GET", path, params=params)
        results: list[ResourceT] = []
        previous_page = 0

        while True:
            response = self.execute(request, not_found=not_found)
            with _decoding(response):
                document = parse_document(response)
                page = decode_many(document, model)
                pagination = Pagination.from_document(document)
                if pagination.current_page <= previous_page:
                    raise DecodeError(
                        f"Pagination did not advance: got page {pagination.current_page} after {previous_page}"
                    )

            results.extend(page)
            logger.debug(f"GET {path}: page {pagination.current_page}/{pagination.total_pages}, {len(page)} items")

            if not pagination.has_more:
                return results

            previous_page = pagination.current_page
            request = request.with_params(**{PAGE_NUMBER_PARAM: str(pagination.current_page + 1)})

    def download(self, url: str) -> bytes:
        """Fetch raw bytes from an absolute URL without the API token.

        Used for hosted state downloads. Retries timeouts and any non-2xx
        status on the client's backoff schedule.

        Raises:
            NetworkError: No HTTP response after retries
            BadStatusError: Non-2xx status after retries
        """
        policy = self.retry_policy.with_predicate(retry_on_timeout_or_failure)
        response = self._send("GET", url, policy=policy)
        if not response.is_success:
            raise BadStatusError(
                f"Download failed with HTTP {response.status_code}",
                status_code=response.status_code,
                response=response,
            )
        return response.content


class Client(BaseClient):
    """Terraform Enterprise client with resource operations.

    Attributes:
        organizations: Organization listing
        workspaces: Workspace lookup, creation and SSH key assignment
        runs: Run creation
        variables: Variable creation
        state_versions: State version lookup and state download
    """

    def __init__(self, token: str, base_url: str = DEFAULT_BASE_URL, **kwargs: Any) -> None:
        super().__init__(token, base_url, **kwargs)

        # Sub-clients for different resource kinds
        self.organizations = OrganizationOperations(self)
        self.workspaces = WorkspaceOperations(self)
        self.runs = RunOperations(self)
        self.variables = VariableOperations(self)
        self.state_versions = StateVersionOperations(self)
