"""Common utilities for iurl."""

from .validators import is_valid_short_path, is_valid_destination, is_valid_url
from .headers import build_base_url, get_bearer_token, get_trusted_identity
from .url_builder import build_short_url, short_path_from_request_path
from .logging_config import setup_logging

__all__ = [
    "is_valid_short_path",
    "is_valid_destination",
    "is_valid_url",
    "build_base_url",
    "get_bearer_token",
    "get_trusted_identity",
    "build_short_url",
    "short_path_from_request_path",
    "setup_logging",
]
