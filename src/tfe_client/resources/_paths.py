from urllib.parse import quote


def segment(value: str) -> str:
    """Quote a caller-supplied value for use as one path segment."""
    if not value:
        raise ValueError("path segment must not be empty")
    return quote(value, safe="")
