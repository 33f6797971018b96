"""API routes implementation."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from shortlink.common.headers import build_base_url
from shortlink.common.url_builder import build_short_url
from shortlink.errors import ShortenerError

from .schemas import ErrorResponse, HealthResponse, ShortenRequest, ShortenResponse

API_VERSION_PREFIX = "/api/v1"

logger = logging.getLogger("shortlink.web.api")

router = APIRouter()


@router.post(
    "/v1/new/",
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Malformed request body"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short URL",
    description="Allocate a short code for a URL and return the complete short URL.",
)
async def shorten_url(request: Request, body: ShortenRequest):
    """Create a shortened URL."""
    service = request.app.state.service
    config = request.app.state.config
    
    try:
        record = await service.create_short_url(body.url)
    except ShortenerError as e:
        logger.error(f"Failed to create short URL for {body.url}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create short URL",
        )
    
    base_url = build_base_url(
        headers=dict(request.headers),
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )
    
    return ShortenResponse(
        shortened_url=build_short_url(
            short_code=record.code,
            base_url=base_url,
            path_prefix=API_VERSION_PREFIX,
        ),
    )


@router.get(
    "/v1/{short_code}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Redirect to original URL",
)
async def redirect_to_original(request: Request, short_code: str):
    """Redirect a short code to its stored URL."""
    service = request.app.state.service
    
    target_url = await service.get_original_url(short_code)
    
    if target_url is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Short code '{short_code}' not found",
        )
    
    return RedirectResponse(url=target_url, status_code=status.HTTP_302_FOUND)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for monitoring."""
    service = request.app.state.service
    
    health = service.health_check()
    
    return HealthResponse(
        status="healthy" if health["store"] else "unhealthy",
        links=health["links"],
        timestamp=datetime.now(timezone.utc),
    )
