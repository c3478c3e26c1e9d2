"""Redis implementation of the redirect store."""

import logging
from datetime import datetime, timezone
from typing import Optional

import redis.asyncio as redis

from .base import RedirectStoreBase
from .models import RedirectRecord


class RedisRedirectStore(RedirectStoreBase):
    """Redis-backed store: one hash per short path.

    Claim runs as an optimistic WATCH/MULTI/EXEC transaction; the client
    re-runs the callback whenever the key changes before EXEC. Resolve is a
    single server-side script, so concurrent hits on one path never retry.

    Timestamps are stored as server epoch seconds ("<sec>.<usec>").
    """

    KEY_PREFIX = "iurl:redirect:"

    # KEYS[1] = record hash. Returns the destination, or nil when absent.
    RESOLVE_SCRIPT = """
local destination = redis.call('HGET', KEYS[1], 'destination')
if not destination then
    return nil
end
local now = redis.call('TIME')
redis.call('HINCRBY', KEYS[1], 'access_count', 1)
redis.call('HSET', KEYS[1], 'updated_at', now[1] .. '.' .. string.format('%06d', tonumber(now[2])))
return destination
"""

    def __init__(
        self,
        redis_url: str,
        logger: Optional[logging.Logger] = None,
        client: Optional[redis.Redis] = None,
    ):
        """Initialize Redis store.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            logger: Optional logger instance
            client: Pre-built client (skips creating one from ``redis_url``)
        """
        self.redis_url = redis_url
        self.logger = logger or logging.getLogger(__name__)
        self.client = client or redis.from_url(
            redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
        self._resolve_script = self.client.register_script(self.RESOLVE_SCRIPT)

    def get_key(self, short_path: str) -> str:
        """Generate the hash key for a short path."""
        return f"{self.KEY_PREFIX}{short_path}"

    @staticmethod
    async def _server_time(pipe) -> str:
        seconds, micros = await pipe.time()
        return f"{seconds}.{micros:06d}"

    @staticmethod
    def _parse_time(value: Optional[str]) -> Optional[datetime]:
        if value is None:
            return None
        return datetime.fromtimestamp(float(value), tz=timezone.utc)

    async def create_if_absent(
        self,
        short_path: str,
        destination: str,
        label: str,
        owner_id: str,
    ) -> bool:
        key = self.get_key(short_path)

        async def claim(pipe) -> bool:
            if await pipe.exists(key):
                return False
            now = await self._server_time(pipe)
            pipe.multi()
            pipe.hset(
                key,
                mapping={
                    "destination": destination,
                    "label": label,
                    "access_count": 0,
                    "owner_id": owner_id,
                    "created_at": now,
                    "updated_at": now,
                },
            )
            return True

        return await self.client.transaction(claim, key, value_from_callable=True)

    async def exists(self, short_path: str) -> bool:
        return bool(await self.client.exists(self.get_key(short_path)))

    async def resolve_and_increment(self, short_path: str) -> Optional[str]:
        return await self._resolve_script(keys=[self.get_key(short_path)])

    async def get(self, short_path: str) -> Optional[RedirectRecord]:
        data = await self.client.hgetall(self.get_key(short_path))
        if not data:
            return None
        return RedirectRecord.from_dict({
            **data,
            "short_path": short_path,
            "created_at": self._parse_time(data.get("created_at")),
            "updated_at": self._parse_time(data.get("updated_at")),
        })

    async def health_check(self) -> bool:
        try:
            return bool(await self.client.ping())
        except Exception as e:
            self.logger.error(f"Health check failed: {e}")
            return False

    async def close(self) -> None:
        """Close Redis connection."""
        await self.client.aclose()
        self.logger.info("Redis connection closed")
