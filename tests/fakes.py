"""Store doubles for failure-path tests."""

import asyncio

from iurl.storage.memory import InMemoryRedirectStore


class BrokenStore(InMemoryRedirectStore):
    """Store whose every backend call fails like a lost connection."""

    async def create_if_absent(self, *args, **kwargs):
        raise ConnectionError("connection reset by peer at 10.0.0.7:5432")

    async def exists(self, short_path):
        raise ConnectionError("connection reset by peer at 10.0.0.7:5432")

    async def resolve_and_increment(self, short_path):
        raise ConnectionError("connection reset by peer at 10.0.0.7:5432")

    async def health_check(self):
        return False


class SlowStore(InMemoryRedirectStore):
    async def resolve_and_increment(self, short_path):
        await asyncio.sleep(5)
