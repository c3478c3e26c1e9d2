#!/usr/bin/env python3
"""
Main entry point for the iurl redirect service.

Concurrency: requests are served on the asyncio event loop and every registry
operation awaits its storage transaction. Set WORKERS > 1 for multi-process
scaling (each worker owns its own store connections).

Usage:
    python app.py

Environment variables:
    STORAGE_BACKEND - postgres (default), redis or memory
    DATABASE_URL - PostgreSQL connection URL
    DATABASE_CREATE_TABLES - Set to true to create the table on first use
    REDIS_URL - Redis connection URL (redis backend)
    AUTH_JWT_SECRET - Secret for verifying bearer tokens
    TRUSTED_IDENTITY_HEADER - Header carrying the caller id behind a proxy
    BASE_URL - Base URL for short links
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from iurl.registry import RedirectRegistry
from iurl.storage import create_store
from iurl.common.logging_config import setup_logging
from iurl_web import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the store and registry on startup, close them on shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info(f"Starting iurl with {config.storage_backend} storage...")

    # Initialize storage and registry
    store = create_store(config, logger=logger.getChild("storage"))
    registry = RedirectRegistry(
        store=store,
        logger=logger.getChild("registry"),
        operation_timeout_seconds=config.operation_timeout_seconds,
        validate_destination_urls=config.validate_destination_urls,
    )
    # Update app state
    app.state.registry = registry

    if not config.auth_jwt_secret and not config.trusted_identity_header:
        logger.warning("No AUTH_JWT_SECRET or TRUSTED_IDENTITY_HEADER set; create calls will be rejected")

    logger.info("Service started successfully")

    # Yield control to the application
    yield

    # Shutdown
    logger.info("Shutting down iurl...")
    await registry.close()
    logger.info("Service stopped")


def main():
    """Main entry point."""
    # Load configuration
    config = load_config()

    # Setup logging
    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("iurl redirect service")
    logger.info(
        "Configuration: "
        f"{config.model_dump(exclude={'auth_jwt_secret', 'database_url', 'redis_url'})}"
    )

    # Create FastAPI app; the lifespan owns the registry
    app = create_app(registry=None, config=config, logger=logger)
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    # Configure uvicorn
    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    # Setup signal handlers for graceful shutdown
    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    # Run server
    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
