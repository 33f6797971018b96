"""Common utilities for the URL shortener."""

from .headers import forwarded_origin, build_base_url
from .url_builder import build_short_url
from .logging_config import setup_logging

__all__ = [
    "forwarded_origin",
    "build_base_url",
    "build_short_url",
    "setup_logging",
]
