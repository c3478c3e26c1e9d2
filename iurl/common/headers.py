"""Request header helpers: public base URL and caller identity extraction."""

from typing import Mapping, Optional


def _lookup(headers: Mapping[str, str], name: str) -> Optional[str]:
    name = name.lower()
    for key, value in headers.items():
        if key.lower() == name and value:
            return value.strip()
    return None


def build_base_url(
    headers: Mapping[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Build the public base URL for short links.

    Priority:
    1. X-Forwarded-Proto + X-Forwarded-Host (from a proxy)
    2. Request scheme + host
    3. Fallback base URL from config

    Returns:
        Base URL without trailing slash (e.g., https://example.com)
    """
    proto = _lookup(headers, "x-forwarded-proto")
    host = _lookup(headers, "x-forwarded-host")
    if proto and host:
        return f"{proto}://{host}"

    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"

    return fallback_base_url.rstrip("/")


def get_bearer_token(headers: Mapping[str, str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    value = _lookup(headers, "authorization")
    if not value:
        return None
    scheme, _, token = value.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_trusted_identity(headers: Mapping[str, str], header_name: Optional[str]) -> Optional[str]:
    """Caller id set by an authenticating proxy in ``header_name``, if configured."""
    if not header_name:
        return None
    return _lookup(headers, header_name)
