"""JSON:API error objects."""

from dataclasses import dataclass
from typing import Any

import httpx


@dataclass
class ErrorObject:
    """One entry of a JSON:API ``errors`` array.

    See: https://jsonapi.org/format/#error-objects
    """

    status: str | None = None  # HTTP status code, as a string
    title: str | None = None  # Short, human-readable summary
    detail: str | None = None  # Human-readable explanation
    code: str | None = None  # Application-specific error code
    source: dict[str, Any] | None = None  # Pointer/parameter that caused the error

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ErrorObject":
        status = data.get("status")
        return cls(
            status=str(status) if status is not None else None,
            title=data.get("title"),
            detail=data.get("detail"),
            code=data.get("code"),
            source=data.get("source") if isinstance(data.get("source"), dict) else None,
        )

    @classmethod
    def list_from_response(cls, response: httpx.Response) -> list["ErrorObject"]:
        """Parse the JSON:API ``errors`` array from an HTTP response.

        Args:
            response: HTTP response object

        Returns:
            Parsed error objects, empty if the body is not a JSON:API error document
        """
        try:
            data = response.json()
        except (ValueError, TypeError, AttributeError):
            # JSON decode errors, type errors, or missing .json() method
            return []

        if not isinstance(data, dict):
            return []

        errors = data.get("errors")
        if not isinstance(errors, list):
            return []

        return [cls.from_dict(item) for item in errors if isinstance(item, dict)]

    def to_message(self) -> str:
        """Render the error object as a single line."""
        parts = []
        if self.title:
            parts.append(self.title)
        if self.detail and self.detail != self.title:
            parts.append(self.detail)

        message = ": ".join(parts) if parts else "Unknown API error"

        if self.source and "pointer" in self.source:
            message += f" (at {self.source['pointer']})"

        return message
