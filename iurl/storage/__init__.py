"""Storage layer for the redirect registry."""

import logging
from typing import Optional

from .base import RedirectStoreBase
from .memory import InMemoryRedirectStore
from .models import RedirectRecord
from .postgres import PostgresRedirectStore
from .redis_store import RedisRedirectStore

__all__ = [
    "RedirectStoreBase",
    "RedirectRecord",
    "InMemoryRedirectStore",
    "PostgresRedirectStore",
    "RedisRedirectStore",
    "create_store",
]


def create_store(config, logger: Optional[logging.Logger] = None) -> RedirectStoreBase:
    """Build the store selected by ``config.storage_backend``.

    Args:
        config: Application configuration
        logger: Optional logger passed to the store

    Returns:
        Store instance

    Raises:
        ValueError: If the backend is unknown or its URL is missing
    """
    backend = config.storage_backend.lower()

    if backend == "memory":
        return InMemoryRedirectStore(logger=logger)

    if backend == "postgres":
        return PostgresRedirectStore(
            db_config=config.database_url,
            pool_max_size=config.database_pool_max_size,
            max_transaction_attempts=config.max_transaction_attempts,
            create_tables=config.database_create_tables,
            logger=logger,
        )

    if backend == "redis":
        if not config.redis_url:
            raise ValueError("REDIS_URL is required when STORAGE_BACKEND=redis")
        return RedisRedirectStore(redis_url=config.redis_url, logger=logger)

    raise ValueError(f"Unknown storage backend: {config.storage_backend}")
