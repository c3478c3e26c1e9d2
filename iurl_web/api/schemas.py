"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class CamelModel(BaseModel):
    """Accepts and emits the camelCase field names used by API clients."""

    model_config = {"populate_by_name": True}


class CreateRedirectRequest(CamelModel):
    """Request to register a short path."""

    short_path: str = Field(..., alias="shortPath", description="Short path to claim")
    original_url: str = Field(..., alias="originalUrl", description="Destination URL")
    label: Optional[str] = Field(None, description="Optional human-readable label")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "shortPath": "abc123",
                    "originalUrl": "https://example.com/very/long/path",
                    "label": "Launch post",
                }
            ]
        },
    }


class CreateRedirectResponse(CamelModel):
    """Response after registering a short path."""

    success: bool = Field(..., description="Always true; failures use the error body")
    short_path: str = Field(..., alias="shortPath")
    message: str
    short_url: str = Field(..., alias="shortUrl", description="Complete short URL")


class AvailabilityRequest(CamelModel):
    short_path: str = Field(..., alias="shortPath")


class AvailabilityResponse(BaseModel):
    exists: bool


class RedirectInfoResponse(CamelModel):
    """Public view of a redirect record."""

    short_path: str = Field(..., alias="shortPath")
    original_url: str = Field(..., alias="originalUrl")
    label: str
    count: int
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    storage: str = Field(..., description="Storage status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error code, e.g. 'already-exists'")
    detail: Optional[str] = Field(None, description="Human-readable message")
