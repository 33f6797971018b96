"""Data models for the shortener core."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LinkRecord:
    """A short code and the URL it resolves to."""
    
    code: str
    target_url: str
