"""Caller identity resolution for API requests."""

from typing import Optional

from fastapi import Request

from iurl.common.headers import get_bearer_token, get_trusted_identity
from iurl.identity import CallerIdentity


def get_caller(request: Request) -> Optional[CallerIdentity]:
    """FastAPI dependency: the authenticated caller, or None.

    A configured trusted identity header wins over bearer tokens. Absence is
    not an error here; operations that need a caller reject None themselves.
    """
    config = request.app.state.config

    uid = get_trusted_identity(request.headers, config.trusted_identity_header)
    if uid:
        return CallerIdentity(uid=uid)

    provider = request.app.state.identity_provider
    if provider is None:
        return None

    return provider.identify(get_bearer_token(request.headers))
