"""Status classification for HTTP responses."""

import httpx

from tfe_client.errors.exceptions import (
    APIError,
    BadStatusError,
    NotFoundError,
    UnauthorizedError,
)
from tfe_client.errors.models import ErrorObject


def classify_status(status_code: int) -> type[APIError] | None:
    """Map a status code onto the error taxonomy.

    Any 2xx is success. This is a pure function of the code: retry
    predicates and the request executor both rely on it.

    Args:
        status_code: HTTP status code

    Returns:
        None on success, otherwise the exception class for the status
    """
    if 200 <= status_code < 300:
        return None
    if status_code == 401:
        return UnauthorizedError
    if status_code == 404:
        return NotFoundError
    return BadStatusError


def raise_for_status(response: httpx.Response, not_found: type[NotFoundError] = NotFoundError) -> None:
    """Raise the classified exception for an unsuccessful response.

    Args:
        response: HTTP response object
        not_found: Exception raised for 404, so call sites can name the
            missing resource kind

    Raises:
        APIError subclass based on status code
    """
    exc_class = classify_status(response.status_code)
    if exc_class is None:
        return

    if exc_class is NotFoundError:
        exc_class = not_found

    errors = ErrorObject.list_from_response(response)
    status_code = response.status_code
    resource_kind = getattr(exc_class, "resource_kind", None)

    # Build error message
    if errors:
        message = "; ".join(error.to_message() for error in errors)
    elif resource_kind:
        message = f"{resource_kind.capitalize()} not found"
    else:
        # Fallback to simple message with response text
        response_text = response.text[:200]
        message = f"HTTP {status_code}: {response_text}" if response_text else f"HTTP {status_code}"

    raise exc_class(
        message=message,
        status_code=status_code,
        response=response,
        errors=errors,
    )
