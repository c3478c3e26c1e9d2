"""FastAPI application factory."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from iurl.errors import RegistryError
from iurl.identity import JWTIdentityProvider
from iurl.registry import RedirectRegistry

from .api import api_router
from .web import web_router
from .middleware.logging import LoggingMiddleware


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    if field:
        return f"Invalid '{field}': {first.get('msg', 'invalid value')}"
    return first.get("msg", "Invalid request.")


def create_app(
    registry: Optional[RedirectRegistry],
    config,
    identity_provider: Optional[JWTIdentityProvider] = None,
    logger: Optional[logging.Logger] = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        registry: Registry instance (may be set later on ``app.state``)
        config: Configuration instance
        identity_provider: Bearer token verifier; built from config when omitted
        logger: Optional logger for request logging

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="iurl",
        description="Short path redirect registry",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    if identity_provider is None and config.auth_jwt_secret:
        identity_provider = JWTIdentityProvider(
            secret=config.auth_jwt_secret,
            algorithms=config.auth_jwt_algorithms,
            audience=config.auth_jwt_audience,
            logger=logger,
        )

    # Store instances in app state for access in routes
    app.state.registry = registry
    app.state.config = config
    app.state.identity_provider = identity_provider

    @app.exception_handler(RegistryError)
    async def registry_error_handler(request: Request, exc: RegistryError):
        return JSONResponse(
            status_code=exc.http_status,
            content={"error": exc.code, "detail": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "invalid-argument", "detail": _describe_validation_error(exc)},
        )

    # API calls come from browser clients on other origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(
        LoggingMiddleware,
        logger=logger.getChild("web") if logger else None,
    )

    # API first: the redirect route matches every path
    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Redirect"])

    return app
