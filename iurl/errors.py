"""Error taxonomy for redirect registry operations."""


class RegistryError(Exception):
    """Base class for errors surfaced to registry callers.

    Attributes:
        code: Stable machine-readable error code (e.g. ``already-exists``)
        message: Human-readable message safe to return to the caller
    """

    code = "internal"
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgumentError(RegistryError):
    """A required field is missing or malformed."""

    code = "invalid-argument"
    http_status = 400


class UnauthenticatedError(RegistryError):
    """The operation requires a caller identity and none was supplied."""

    code = "unauthenticated"
    http_status = 401


class AlreadyExistsError(RegistryError):
    """The short path has already been claimed."""

    code = "already-exists"
    http_status = 409


class NotFoundError(RegistryError):
    """No redirect is registered under the short path."""

    code = "not-found"
    http_status = 404


class InternalError(RegistryError):
    """Storage or other infrastructure failure. Details are logged, not returned."""

    code = "internal"
    http_status = 500
