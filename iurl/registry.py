"""Redirect registry: claim, availability and resolve operations."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Optional

from .common.validators import is_valid_destination, is_valid_short_path, is_valid_url
from .errors import (
    AlreadyExistsError,
    InternalError,
    InvalidArgumentError,
    RegistryError,
    UnauthenticatedError,
)
from .identity import CallerIdentity
from .storage.base import RedirectStoreBase
from .storage.models import RedirectRecord


@dataclass
class RegisterResult:
    """Outcome of a successful registration."""

    success: bool
    short_path: str
    message: str


@dataclass
class AvailabilityResult:
    exists: bool


class RedirectRegistry:
    """Business logic for the short path registry.

    Holds no per-record state: every call re-reads through the store, and
    atomicity of claim and resolve is the store's responsibility.
    """

    def __init__(
        self,
        store: RedirectStoreBase,
        logger: Optional[logging.Logger] = None,
        operation_timeout_seconds: Optional[float] = 10.0,
        validate_destination_urls: bool = False,
    ):
        """Initialize the registry.

        Args:
            store: Storage backend
            logger: Optional logger
            operation_timeout_seconds: Upper bound for each storage call (None disables)
            validate_destination_urls: Require destinations to be absolute http(s) URLs
        """
        self.store = store
        self.logger = logger or logging.getLogger(__name__)
        self.operation_timeout_seconds = operation_timeout_seconds
        self.validate_destination_urls = validate_destination_urls

    async def _call_store(
        self,
        operation: str,
        short_path: str,
        call: Awaitable[Any],
        internal_message: str,
    ) -> Any:
        """Await a store call, mapping unexpected failures to InternalError."""
        try:
            if self.operation_timeout_seconds:
                return await asyncio.wait_for(call, timeout=self.operation_timeout_seconds)
            return await call
        except RegistryError:
            raise
        except Exception as e:
            self.logger.error(
                f"Error in {operation} for short path '{short_path}': {e!r}",
                exc_info=True,
            )
            raise InternalError(internal_message) from e

    @staticmethod
    def _require_short_path(short_path: Any) -> None:
        is_valid, error = is_valid_short_path(short_path)
        if not is_valid:
            raise InvalidArgumentError(error)

    async def register(
        self,
        short_path: str,
        destination: str,
        caller: Optional[CallerIdentity],
        label: Optional[str] = None,
    ) -> RegisterResult:
        """Claim ``short_path`` for ``destination`` on behalf of ``caller``.

        Args:
            short_path: Identifier to claim
            destination: URL the identifier redirects to
            caller: Authenticated caller, or None
            label: Optional annotation

        Returns:
            RegisterResult with success=True

        Raises:
            UnauthenticatedError: If no caller identity is given
            InvalidArgumentError: If short_path, destination or label is malformed
            AlreadyExistsError: If the short path is already taken
            InternalError: On storage failure
        """
        if caller is None or not caller.uid:
            raise UnauthenticatedError("The function must be called while authenticated.")

        self._require_short_path(short_path)

        is_valid, error = is_valid_destination(destination)
        if not is_valid:
            raise InvalidArgumentError(error)
        if self.validate_destination_urls:
            is_valid, error = is_valid_url(destination)
            if not is_valid:
                raise InvalidArgumentError(f"Invalid 'originalUrl': {error}")

        if label is not None and not isinstance(label, str):
            raise InvalidArgumentError("The 'label' must be a string.")

        created = await self._call_store(
            "register",
            short_path,
            self.store.create_if_absent(short_path, destination, label or "", caller.uid),
            "An internal error occurred while creating the redirect.",
        )

        if not created:
            self.logger.info(f"Short path already taken: {short_path} (requested by {caller.uid})")
            raise AlreadyExistsError(f"The path '{short_path}' is already taken.")

        self.logger.info(f"Redirect created: {short_path} -> {destination} by {caller.uid}")

        return RegisterResult(
            success=True,
            short_path=short_path,
            message="Redirect created successfully.",
        )

    async def check_availability(self, short_path: str) -> AvailabilityResult:
        """Report whether ``short_path`` is registered.

        Advisory only: the answer can be stale by the time the caller acts on it.

        Raises:
            InvalidArgumentError: If short_path is malformed
            InternalError: On storage failure
        """
        self._require_short_path(short_path)

        exists = await self._call_store(
            "check_availability",
            short_path,
            self.store.exists(short_path),
            "An internal error occurred while checking path availability.",
        )
        self.logger.info(f"Availability check: {short_path} exists={exists}")
        return AvailabilityResult(exists=bool(exists))

    async def resolve(self, short_path: str) -> Optional[str]:
        """Return the destination for ``short_path`` and count the access.

        Args:
            short_path: Identifier to resolve

        Returns:
            Destination URL, or None if the short path is not registered

        Raises:
            InvalidArgumentError: If short_path is empty
            InternalError: On storage failure
        """
        if not short_path or not isinstance(short_path, str):
            raise InvalidArgumentError("Missing path identifier.")

        destination = await self._call_store(
            "resolve",
            short_path,
            self.store.resolve_and_increment(short_path),
            "An internal error occurred while resolving the redirect.",
        )

        if destination is None:
            self.logger.info(f"Redirect not found for path: {short_path}")
            return None

        self.logger.info(f"Redirecting {short_path} to {destination}")
        return destination

    async def get_record(self, short_path: str) -> Optional[RedirectRecord]:
        """Get the stored record for ``short_path`` without counting an access."""
        self._require_short_path(short_path)

        return await self._call_store(
            "get_record",
            short_path,
            self.store.get(short_path),
            "An internal error occurred while reading the redirect.",
        )

    async def health_check(self) -> bool:
        return await self.store.health_check()

    async def close(self) -> None:
        """Close store connections."""
        await self.store.close()
