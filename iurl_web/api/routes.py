"""API routes implementation."""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Request

from iurl.common.headers import build_base_url
from iurl.common.url_builder import build_short_url
from iurl.errors import NotFoundError
from iurl.identity import CallerIdentity

from ..auth import get_caller
from .schemas import (
    AvailabilityRequest,
    AvailabilityResponse,
    CreateRedirectRequest,
    CreateRedirectResponse,
    ErrorResponse,
    HealthResponse,
    RedirectInfoResponse,
)

router = APIRouter()


@router.post(
    "/redirects",
    response_model=CreateRedirectResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        401: {"model": ErrorResponse, "description": "Caller not authenticated"},
        409: {"model": ErrorResponse, "description": "Short path already taken"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create redirect",
    description="Claim a short path for a destination URL. Requires an authenticated caller.",
)
async def create_redirect(
    request: Request,
    body: CreateRedirectRequest,
    caller: Optional[CallerIdentity] = Depends(get_caller),
):
    """Create a redirect. Registry errors are rendered by the app's exception handler."""
    registry = request.app.state.registry
    config = request.app.state.config

    result = await registry.register(
        short_path=body.short_path,
        destination=body.original_url,
        caller=caller,
        label=body.label,
    )

    base_url = build_base_url(
        headers=request.headers,
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )

    return CreateRedirectResponse(
        success=result.success,
        short_path=result.short_path,
        message=result.message,
        short_url=build_short_url(result.short_path, base_url, config.path_prefix),
    )


@router.post(
    "/redirects/availability",
    response_model=AvailabilityResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Check short path availability",
    description="Report whether a short path is already registered. Advisory only.",
)
async def check_availability(request: Request, body: AvailabilityRequest):
    registry = request.app.state.registry

    result = await registry.check_availability(body.short_path)

    return AvailabilityResponse(exists=result.exists)


@router.get(
    "/redirects/{short_path}",
    response_model=RedirectInfoResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short path not found"},
    },
    summary="Get redirect information",
    description="Get a redirect's destination and access count without counting an access.",
)
async def get_redirect_info(request: Request, short_path: str):
    registry = request.app.state.registry

    record = await registry.get_record(short_path)

    if record is None:
        raise NotFoundError(f"Short path '{short_path}' not found")

    return RedirectInfoResponse(
        short_path=record.short_path,
        original_url=record.destination,
        label=record.label,
        count=record.access_count,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service and its store are healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    registry = request.app.state.registry

    healthy = await registry.health_check()

    return HealthResponse(
        status="healthy" if healthy else "unhealthy",
        storage="healthy" if healthy else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
