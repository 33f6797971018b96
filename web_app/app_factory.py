"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import api_router
from .api.schemas import ErrorResponse
from .middleware.logging import LoggingMiddleware

logger = logging.getLogger("shortlink.web")


def _summarize_errors(exc: RequestValidationError) -> str:
    """Describe validation errors by location and message, never echoing input."""
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )


async def _malformed_request_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report unparsable or incomplete request bodies as 400."""
    summary = _summarize_errors(exc)
    logger.warning(f"Malformed request to {request.url.path}: {summary}")
    body = ErrorResponse(error="Malformed request body", detail=summary)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors with the ErrorResponse schema."""
    body = ErrorResponse(error=str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(),
        headers=getattr(exc, "headers", None),
    )


def create_app(service_instance, config, lifespan=None) -> FastAPI:
    """Create and configure FastAPI application.
    
    Args:
        service_instance: ShortenerService handling creates and lookups
        config: Configuration instance
        lifespan: Optional lifespan context manager
        
    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="URL Shortener",
        description="Base-62 URL shortening service with a durable JSON snapshot",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )
    
    app.state.service = service_instance
    app.state.config = config
    
    app.add_exception_handler(RequestValidationError, _malformed_request_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    
    app.add_middleware(LoggingMiddleware)
    
    app.include_router(api_router, prefix="/api", tags=["API"])
    
    return app
