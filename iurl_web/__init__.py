"""FastAPI web application for iurl."""

from .app_factory import create_app

__all__ = ["create_app"]
