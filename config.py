"""Configuration management for the URL shortener."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration."""
    
    # Server settings
    host: str = Field(
        default="127.0.0.1",
        description="Host to bind to"
    )
    
    port: int = Field(
        default=8000,
        description="Port to listen on"
    )
    
    request_timeout_seconds: int = Field(
        default=15,
        ge=1,
        description="Idle connection timeout in seconds"
    )
    
    # URL shortener settings
    base_url: str = Field(
        default="http://127.0.0.1:8000",
        description="Base URL used for short links when the request carries no host"
    )
    
    data_file: str = Field(
        default="base.json",
        description="Path of the JSON snapshot holding all short links"
    )
    
    max_collision_retries: int = Field(
        default=5,
        ge=1,
        description="Maximum attempts when generating short codes"
    )
    
    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    
    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )
    
    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )
    
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
