"""Abstract base class for redirect store implementations."""

from abc import ABC, abstractmethod
from typing import Optional

from .models import RedirectRecord


class RedirectStoreBase(ABC):
    """Storage port used by the redirect registry.

    Implementations own the transactional guarantees: ``create_if_absent``
    and ``resolve_and_increment`` must each run as a single atomic
    read-then-write sequence, and timestamps are assigned by the store.
    """

    @abstractmethod
    async def create_if_absent(
        self,
        short_path: str,
        destination: str,
        label: str,
        owner_id: str,
    ) -> bool:
        """Create a redirect record unless the short path is taken.

        Args:
            short_path: Identifier to claim
            destination: Target URL
            label: Annotation (may be empty)
            owner_id: Identity of the creator

        Returns:
            True if created, False if a record already exists
        """
        pass

    @abstractmethod
    async def exists(self, short_path: str) -> bool:
        """Check whether a record exists (point read, no transaction).

        Args:
            short_path: Identifier to check

        Returns:
            True if a record exists
        """
        pass

    @abstractmethod
    async def resolve_and_increment(self, short_path: str) -> Optional[str]:
        """Read the destination and bump the access counter atomically.

        Args:
            short_path: Identifier to resolve

        Returns:
            The destination, or None if no record exists (nothing is written)
        """
        pass

    @abstractmethod
    async def get(self, short_path: str) -> Optional[RedirectRecord]:
        """Get the full record without modifying it.

        Args:
            short_path: Identifier to look up

        Returns:
            The record or None if not found
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release connections."""
        pass
