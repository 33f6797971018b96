"""Per-request access logging."""

import logging
import time
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request once the response status is known.
    
    Client errors (unknown codes, malformed bodies) log at INFO; server
    errors log at WARNING so failed creates stand out.
    """
    
    def __init__(self, app, logger: Optional[logging.Logger] = None):
        super().__init__(app)
        self.logger = logger or logging.getLogger("shortlink.web.access")
    
    async def dispatch(self, request: Request, call_next: Callable):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        
        client = request.client.host if request.client else "-"
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        self.logger.log(
            level,
            f"{client} {request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)",
        )
        
        return response
