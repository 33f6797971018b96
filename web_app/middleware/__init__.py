"""Middleware for the URL shortener web app."""

from .logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
