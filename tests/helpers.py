"""JSON:API response builders shared by the unit tests."""

import json

import httpx

BASE_URL = "https://tfe.example.com"
TOKEN = "test-token"


def resource(resource_type, resource_id, **attributes):
    """A JSON:API resource object with dash-case attribute keys."""
    return {
        "id": resource_id,
        "type": resource_type,
        "attributes": {key.replace("_", "-"): value for key, value in attributes.items()},
    }


def document(data, *, current_page=None, total_pages=None):
    """A JSON:API top-level document, with pagination meta when pages are given."""
    body = {"data": data}
    if current_page is not None:
        next_page = current_page + 1 if current_page < total_pages else None
        body["meta"] = {
            "pagination": {
                "current-page": current_page,
                "next-page": next_page,
                "total-pages": total_pages,
            }
        }
    return body


def jsonapi_response(status_code, body):
    return httpx.Response(
        status_code,
        content=json.dumps(body).encode(),
        headers={"Content-Type": "application/vnd.api+json"},
    )
