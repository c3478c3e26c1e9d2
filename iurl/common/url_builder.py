"""URL building and parsing utilities."""

from typing import Optional


def build_short_url(
    short_path: str,
    base_url: str,
    path_prefix: str = "",
) -> str:
    """Build complete short URL.

    Args:
        short_path: The short path
        base_url: Base URL (e.g., https://example.com)
        path_prefix: Optional path prefix (e.g., /s)

    Returns:
        Complete short URL
    """
    base = base_url.rstrip("/")
    prefix = path_prefix.strip("/")

    if prefix:
        return f"{base}/{prefix}/{short_path}"
    return f"{base}/{short_path}"


def short_path_from_request_path(path: str) -> Optional[str]:
    """Return the final non-empty segment of a request path.

    ``/s/my-path`` and ``/my-path/`` both yield ``my-path``; ``/`` yields None.
    """
    segments = [segment for segment in path.split("/") if segment]
    return segments[-1] if segments else None
