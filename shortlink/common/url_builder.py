"""URL building utilities for the URL shortener."""


def build_short_url(
    short_code: str,
    base_url: str,
    path_prefix: str = "",
) -> str:
    """Build complete short URL.
    
    Args:
        short_code: The short code
        base_url: Base URL (e.g., http://127.0.0.1:8000)
        path_prefix: Optional path prefix (e.g., /api/v1)
        
    Returns:
        Complete short URL
    """
    base = base_url.rstrip("/")
    prefix = path_prefix.strip("/")
    
    if prefix:
        return f"{base}/{prefix}/{short_code}"
    return f"{base}/{short_code}"
