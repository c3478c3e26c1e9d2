"""Validation utilities for redirect registry input."""

from urllib.parse import urlparse
from typing import Any, Tuple


def is_valid_short_path(short_path: Any) -> Tuple[bool, str]:
    """Validate a short path.

    Any non-empty string that can appear as a single URL path segment is
    accepted.

    Args:
        short_path: The short path to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_path or not isinstance(short_path, str):
        return False, "The 'shortPath' must be a non-empty string."

    if "/" in short_path:
        return False, "The 'shortPath' must not contain '/'."

    if short_path in (".", ".."):
        return False, f"'{short_path}' is not a valid 'shortPath'."

    return True, ""


def is_valid_destination(destination: Any) -> Tuple[bool, str]:
    """Validate that a destination is present.

    Args:
        destination: The destination URL

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not destination or not isinstance(destination, str):
        return False, "The 'originalUrl' must be a non-empty string."
    return True, ""


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate an absolute http(s) URL.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if len(url) > 2048:
        return False, "URL is too long (max 2048 characters)"

    try:
        result = urlparse(url)
    except ValueError as e:
        return False, f"Invalid URL format: {str(e)}"

    if result.scheme not in ["http", "https"]:
        return False, "URL must use http or https protocol"

    if not result.netloc:
        return False, "URL must have a valid domain"

    return True, ""
