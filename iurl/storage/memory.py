"""In-process redirect store for tests and local development."""

import asyncio
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from .base import RedirectStoreBase
from .models import RedirectRecord


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryRedirectStore(RedirectStoreBase):
    """Dictionary-backed store.

    A single ``asyncio.Lock`` serializes the read-modify-write sequences,
    which gives the same isolation a serializable database transaction would.
    ``call_count`` records every storage call so callers can verify that
    validation happens before any I/O.
    """

    def __init__(
        self,
        clock: Optional[Callable[[], datetime]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._records: Dict[str, RedirectRecord] = {}
        self._lock = asyncio.Lock()
        self._clock = clock or _utc_now
        self.logger = logger or logging.getLogger(__name__)
        self.call_count = 0

    async def create_if_absent(
        self,
        short_path: str,
        destination: str,
        label: str,
        owner_id: str,
    ) -> bool:
        self.call_count += 1
        async with self._lock:
            if short_path in self._records:
                return False
            # Yield inside the critical section so concurrent claims interleave.
            await asyncio.sleep(0)
            now = self._clock()
            self._records[short_path] = RedirectRecord(
                short_path=short_path,
                destination=destination,
                label=label,
                access_count=0,
                owner_id=owner_id,
                created_at=now,
                updated_at=now,
            )
            return True

    async def exists(self, short_path: str) -> bool:
        self.call_count += 1
        return short_path in self._records

    async def resolve_and_increment(self, short_path: str) -> Optional[str]:
        self.call_count += 1
        async with self._lock:
            record = self._records.get(short_path)
            if record is None:
                return None
            count = record.access_count
            await asyncio.sleep(0)
            record.access_count = count + 1
            record.updated_at = self._clock()
            return record.destination

    async def get(self, short_path: str) -> Optional[RedirectRecord]:
        self.call_count += 1
        record = self._records.get(short_path)
        # Copy so callers can't mutate stored state
        return replace(record) if record else None

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self.logger.debug(f"Closing in-memory store with {len(self._records)} records")

    def __len__(self) -> int:
        return len(self._records)
