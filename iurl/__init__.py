"""Core business logic for the iurl redirect registry."""

from .errors import (
    AlreadyExistsError,
    InternalError,
    InvalidArgumentError,
    NotFoundError,
    RegistryError,
    UnauthenticatedError,
)
from .identity import CallerIdentity, JWTIdentityProvider
from .registry import AvailabilityResult, RedirectRegistry, RegisterResult

__all__ = [
    "RedirectRegistry",
    "RegisterResult",
    "AvailabilityResult",
    "CallerIdentity",
    "JWTIdentityProvider",
    "RegistryError",
    "InvalidArgumentError",
    "UnauthenticatedError",
    "AlreadyExistsError",
    "NotFoundError",
    "InternalError",
]
