"""Resolve the public origin that short links are built on."""

from typing import Mapping, Optional


def forwarded_origin(headers: Mapping[str, str]) -> Optional[str]:
    """Origin announced by a reverse proxy, if it sent both halves.
    
    Only X-Forwarded-Proto together with X-Forwarded-Host is trusted; a lone
    host or scheme is ignored.
    """
    lowered = {name.lower(): value for name, value in headers.items()}
    proto = lowered.get("x-forwarded-proto")
    host = lowered.get("x-forwarded-host")
    
    if proto and host:
        # Proxies may append a chain ("https, http"); the first hop is the client's.
        return f"{proto.split(',')[0].strip()}://{host.split(',')[0].strip()}"
    return None


def build_base_url(
    headers: Mapping[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Pick the base URL for a shortened link.
    
    Forwarded headers win, then the scheme and Host of the request itself,
    then the configured ``base_url``.
    
    Returns:
        Base URL without trailing slash, e.g. ``http://127.0.0.1:8000``
    """
    origin = forwarded_origin(headers)
    if origin:
        return origin
    
    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"
    
    return fallback_base_url.rstrip("/")
