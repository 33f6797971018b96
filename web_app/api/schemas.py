"""Pydantic schemas for API requests and responses."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, StrictStr, field_validator


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""
    
    url: StrictStr = Field(..., description="The URL to shorten, stored as given")
    
    @field_validator("url")
    @classmethod
    def url_is_storable(cls, v: str) -> str:
        """Reject text the UTF-8 snapshot cannot hold (lone surrogates)."""
        try:
            v.encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError("URL must be valid UTF-8 text")
        return v
    
    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""
    
    shortened_url: str = Field(..., description="The complete short URL")
    
    model_config = {
        "json_schema_extra": {
            "examples": [
                {"shortened_url": "http://127.0.0.1:8000/api/v1/1A2b3C4d5E"},
            ]
        }
    }


class HealthResponse(BaseModel):
    """Health check response."""
    
    status: str = Field(..., description="Overall status")
    links: int = Field(..., description="Number of stored links")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""
    
    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Detailed error information")
