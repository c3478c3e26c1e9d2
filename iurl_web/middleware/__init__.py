"""Middleware for iurl web app."""

from .logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
